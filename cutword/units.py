"""
Unit splitting for cutword.

Raw text is cut into the atomic units the dictionary and the segmentation
engine work with:

- every character that is not a short (1-2 byte) letter or digit is a unit
  of its own (CJK characters, punctuation, whitespace, ...)
- a run of consecutive short letters/digits is a single unit, with ASCII
  uppercase folded to lowercase

Input bytes are decoded with the ``surrogateescape`` handler so that
undecodable bytes survive as single-character units and byte offsets can
always be recovered exactly.
"""

import unicodedata
from typing import Iterable, List, Union

ENCODING = "utf-8"
ERRORS = "surrogateescape"

# Code points below this are encoded in at most two UTF-8 bytes
_SHORT_CODE_POINT_LIMIT = 0x800

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "abcdefghijklmnopqrstuvwxyz",
)


def to_bytes(data: Union[bytes, bytearray, memoryview, str]) -> bytes:
    """Coerce input to bytes, encoding ``str`` as UTF-8."""
    if isinstance(data, str):
        try:
            return data.encode(ENCODING, ERRORS)
        except UnicodeEncodeError:
            # Surrogates outside the escaped-byte range
            return data.encode(ENCODING, "surrogatepass")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"expected bytes or str, got {type(data).__name__}")


def to_lower(text: str) -> str:
    """Fold ASCII A-Z to a-z, leaving every other character untouched."""
    return text.translate(_ASCII_LOWER)


def is_run_char(char: str) -> bool:
    """True if the character belongs in a letter/digit run."""
    if ord(char) >= _SHORT_CODE_POINT_LIMIT:
        return False
    return unicodedata.category(char)[0] in ("L", "N")


def is_escaped_byte(unit: str) -> bool:
    """True if the unit stands for an undecodable input byte."""
    return len(unit) == 1 and 0xDC80 <= ord(unit) <= 0xDCFF


def unit_byte_length(unit: str) -> int:
    """Number of input bytes a unit covers."""
    return len(unit.encode(ENCODING, ERRORS))


def text_byte_length(units: Iterable[str]) -> int:
    """Total number of input bytes covered by a sequence of units."""
    return sum(unit_byte_length(unit) for unit in units)


def split_text_to_units(data: Union[bytes, str]) -> List[str]:
    """
    Split text into units.

    Args:
        data: UTF-8 bytes (``str`` is encoded first)

    Returns:
        List of units whose byte lengths add up to ``len(data)``

    Example:
        >>> split_text_to_units("中国AbC2008年".encode())
        ['中', '国', 'abc2008', '年']
    """
    text = to_bytes(data).decode(ENCODING, ERRORS)

    output: List[str] = []
    run_start = 0

    for current, char in enumerate(text):
        if is_run_char(char):
            continue
        if current > run_start:
            output.append(to_lower(text[run_start:current]))
        output.append(char)
        run_start = current + 1

    # Trailing letter/digit run
    if len(text) > run_start:
        output.append(to_lower(text[run_start:]))

    return output
