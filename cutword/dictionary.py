"""
Dictionary for cutword.

The dictionary is built from plain-text source records, one per line:

    text frequency [pos]

Each accepted record becomes a Term whose text is normalized with the same
unit splitter used for input text. Terms are indexed in a marisa_trie.Trie
keyed by their units (each followed by UNIT_SEPARATOR), so a single
``prefixes()`` query returns every term that starts at a given position.

Building runs in three phases:
    1. collect terms, total frequency and maximum term length
    2. assign every term its cost, log2(total) - log2(frequency)
    3. precompute the sub-segmentation of every multi-unit term
"""

import logging
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import marisa_trie

from cutword.constants import MIN_TERM_FREQUENCY, UNIT_SEPARATOR
from cutword.units import is_escaped_byte, split_text_to_units, text_byte_length

if TYPE_CHECKING:
    from cutword.segmenter import Segment

logger = logging.getLogger(__name__)

_FREQUENCY_PATTERN = re.compile(r"[+-]?[0-9]+")


# ============================================================================
# Term
# ============================================================================

@dataclass(slots=True)
class Term:
    """
    A dictionary term.

    Attributes:
        units: Normalized text as a tuple of units
        frequency: Observed frequency from the source records
        pos: Part-of-speech tag (empty if the record had none)
        cost: Path cost, log2(total frequency) - log2(frequency)
        segments: Best decomposition of the term into other terms, with
            offsets relative to the term (empty for single-unit terms)
    """
    units: Tuple[str, ...]
    frequency: int
    pos: str = ""
    cost: float = 0.0
    segments: List["Segment"] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.units)

    @property
    def byte_length(self) -> int:
        return text_byte_length(self.units)

    def __len__(self) -> int:
        return len(self.units)

    def __repr__(self) -> str:
        return f"Term({self.text!r}, freq={self.frequency}, pos={self.pos!r}, cost={self.cost:.3f})"


def make_key(units: Iterable[str]) -> str:
    """Build the trie key for a sequence of units."""
    return "".join(unit + UNIT_SEPARATOR for unit in units)


# ============================================================================
# Dictionary
# ============================================================================

class Dictionary:
    """
    Read-only collection of terms with prefix lookup.

    Instances are created by build_dictionary() and never mutated afterwards,
    so one dictionary can be shared by any number of threads.
    """

    def __init__(self, terms: List[Term], total_frequency: int, max_term_length: int):
        self._terms = terms
        self._total_frequency = total_frequency
        self._max_term_length = max_term_length

        trie = marisa_trie.Trie(make_key(term.units) for term in terms)
        # The trie assigns its own key ids
        by_key_id: List[Optional[Term]] = [None] * len(trie)
        for term in terms:
            by_key_id[trie[make_key(term.units)]] = term
        # Swapped as a whole by close(), so readers take one consistent snapshot
        self._index: Optional[Tuple[marisa_trie.Trie, List[Optional[Term]]]] = (trie, by_key_id)

    @property
    def terms(self) -> List[Term]:
        return self._terms

    @property
    def num_terms(self) -> int:
        return len(self._terms)

    @property
    def total_frequency(self) -> int:
        return self._total_frequency

    @property
    def max_term_length(self) -> int:
        """Length, in units, of the longest term."""
        return self._max_term_length

    @property
    def closed(self) -> bool:
        return self._index is None

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self) -> Iterator[Term]:
        return iter(self._terms)

    def __contains__(self, text: object) -> bool:
        return isinstance(text, str) and self.get(text) is not None

    def __repr__(self) -> str:
        return (
            f"Dictionary(terms={self.num_terms}, total_frequency={self._total_frequency}, "
            f"max_term_length={self._max_term_length})"
        )

    def get(self, text: str) -> Optional[Term]:
        """
        Look up a term by its text.

        The text is normalized first, so ``get("ABC")`` finds the term "abc".
        """
        index = self._index
        units = split_text_to_units(text)
        if not units or index is None:
            return None
        trie, by_key_id = index
        key = make_key(units)
        if key not in trie:
            return None
        return by_key_id[trie[key]]

    def lookup(self, units: Sequence[str]) -> List[Term]:
        """
        Find all terms that are a prefix of the given units.

        Args:
            units: Units starting at the lookup position; callers bound the
                slice to max_term_length

        Returns:
            Matching terms ordered by ascending length
        """
        index = self._index
        if index is None:
            return []
        trie, by_key_id = index

        parts = []
        for unit in units:
            # Terms never contain undecodable bytes
            if is_escaped_byte(unit):
                break
            parts.append(unit)
        if not parts:
            return []

        keys = trie.prefixes(make_key(parts))
        keys.sort(key=len)
        return [by_key_id[trie[key]] for key in keys]

    def close(self):
        """
        Release the trie and the terms. Safe to call more than once.

        Only for the dictionary's sole owner: calls still using it afterwards
        find no terms. Segmenter.close() just drops its reference instead.
        """
        self._index = None
        self._terms = []


# ============================================================================
# Building
# ============================================================================

def iter_dictionary_records(content: Union[str, bytes]) -> Iterator[List[str]]:
    """Yield the whitespace-separated fields of every line."""
    if isinstance(content, (bytes, bytearray)):
        content = bytes(content).decode("utf-8", "replace")
    for line in content.split("\n"):
        fields = line.split()
        if fields:
            yield fields


def parse_record(fields: Sequence[str], min_frequency: int = MIN_TERM_FREQUENCY) -> Optional[Term]:
    """
    Turn one record into a Term.

    Returns:
        The Term, or None if the record should be skipped
    """
    if len(fields) < 2:
        return None

    text, freq_text = fields[0], fields[1]
    pos = fields[2] if len(fields) >= 3 else ""

    if not _FREQUENCY_PATTERN.fullmatch(freq_text):
        return None
    frequency = int(freq_text)
    # log2 needs a positive frequency even when min_frequency is lowered to 0
    if frequency < max(min_frequency, 1):
        return None

    units = split_text_to_units(text)
    if not units or any(is_escaped_byte(unit) for unit in units):
        return None

    return Term(units=tuple(units), frequency=frequency, pos=pos)


def build_dictionary(
    records: Iterable[Sequence[str]],
    min_frequency: int = MIN_TERM_FREQUENCY,
) -> Dictionary:
    """
    Build a dictionary from source records.

    Malformed records, records below ``min_frequency`` and repeats of an
    already accepted text are skipped; this never raises for bad records.

    Args:
        records: Field lists, ``[text, frequency]`` or ``[text, frequency, pos]``
        min_frequency: Lowest accepted frequency

    Returns:
        The built Dictionary
    """
    from cutword.segmenter import segment_units

    terms: List[Term] = []
    seen: Dict[Tuple[str, ...], Term] = {}
    total_frequency = 0
    max_term_length = 0
    skipped = 0

    for fields in records:
        term = parse_record(fields, min_frequency)
        if term is None:
            if fields:
                skipped += 1
                logger.debug(f"Skipping dictionary record: {' '.join(fields)!r}")
            continue
        if term.units in seen:
            skipped += 1
            logger.debug(f"Skipping duplicate term: {term.text!r}")
            continue

        seen[term.units] = term
        terms.append(term)
        total_frequency += term.frequency
        max_term_length = max(max_term_length, len(term.units))

    # Costs
    if terms:
        log_total = math.log2(total_frequency)
        for term in terms:
            term.cost = log_total - math.log2(term.frequency)

    dictionary = Dictionary(terms, total_frequency, max_term_length)

    # Sub-segmentations (search mode)
    for term in terms:
        if len(term.units) > 1:
            term.segments = segment_units(dictionary, term.units, search_mode=True)

    logger.info(
        f"Dictionary loaded: {len(terms)} terms, total frequency {total_frequency}, "
        f"max term length {max_term_length} ({skipped} records skipped)"
    )

    return dictionary


def load_dictionary_text(
    content: Union[str, bytes],
    min_frequency: int = MIN_TERM_FREQUENCY,
) -> Dictionary:
    """Build a dictionary from source text."""
    return build_dictionary(iter_dictionary_records(content), min_frequency)


# ============================================================================
# Files
# ============================================================================

def _split_paths(paths: Union[str, Path, Iterable[Union[str, Path]]]) -> List[Path]:
    if isinstance(paths, Path):
        return [paths]
    if isinstance(paths, str):
        return [Path(p.strip()) for p in paths.split(",") if p.strip()]
    result = []
    for path in paths:
        result.extend(_split_paths(path))
    return result


def read_dictionary_files(paths: Union[str, Path, Iterable[Union[str, Path]]]) -> str:
    """
    Read dictionary source text from one or more files.

    Args:
        paths: A path, a list of paths, or a comma-separated string of paths

    Returns:
        The concatenated contents

    Raises:
        FileNotFoundError: If a file doesn't exist
    """
    chunks = []
    for path in _split_paths(paths):
        if not path.exists():
            raise FileNotFoundError(f"Dictionary file not found: {path}")
        logger.info(f"Reading dictionary file {path}")
        chunks.append(path.read_text(encoding="utf-8", errors="replace"))
    return "\n".join(chunks)


def load_dictionary_files(
    paths: Union[str, Path, Iterable[Union[str, Path]]],
    min_frequency: int = MIN_TERM_FREQUENCY,
) -> Dictionary:
    """Build a dictionary from one or more source files."""
    return load_dictionary_text(read_dictionary_files(paths), min_frequency)
