"""
cutword: Dictionary-based word segmentation for unsegmented text

Cuts text written without spaces (Chinese, mixed with Latin words and
numbers) into dictionary terms by picking the most likely segmentation
under a unigram frequency model.

Basic Usage:
    import cutword

    cutword.load_dictionary_files("dictionary.txt")

    for seg in cutword.segment("中华人民共和国成立了".encode()):
        print(f"{seg.text} [{seg.start}:{seg.end}] ({seg.pos})")

    # Search mode: break compound terms into their parts
    segments = cutword.segment_recall("中华人民共和国".encode())
"""

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from cutword.constants import ASYNC_MAX_WORKERS, DEFAULT_ASYNC_TIMEOUT, MIN_TERM_FREQUENCY
from cutword.dictionary import Dictionary, Term, build_dictionary
from cutword.errors import CutwordError, DictionaryNotLoadedError, SegmentationTimeoutError
from cutword.segmenter import Segment, Segmenter
from cutword.units import split_text_to_units
from cutword.utils import segments_to_list, segments_to_string

__version__ = "0.1.0"


# =============================================================================
# Main API
# =============================================================================

# Module-level segmenter shared by the functions below
_SEGMENTER = Segmenter()


def load_dictionary(
    content: Union[str, bytes],
    min_frequency: int = MIN_TERM_FREQUENCY,
) -> Dictionary:
    """
    Load the shared dictionary from source text.

    Each line is ``text frequency [pos]``. Malformed lines and lines with a
    frequency below ``min_frequency`` are skipped. Replaces any dictionary
    loaded before.

    Example:
        >>> cutword.load_dictionary("北京 100 ns\\n")
    """
    return _SEGMENTER.load_dictionary(content, min_frequency)


def load_dictionary_files(
    paths: Union[str, Path, Iterable[Union[str, Path]]],
    min_frequency: int = MIN_TERM_FREQUENCY,
) -> Dictionary:
    """
    Load the shared dictionary from files.

    Args:
        paths: A path, a list of paths, or a comma-separated string of paths

    Raises:
        FileNotFoundError: If a file doesn't exist
    """
    return _SEGMENTER.load_dictionary_files(paths, min_frequency)


def segment(data: Union[bytes, str]) -> List[Segment]:
    """
    Segment text with the shared dictionary.

    Args:
        data: UTF-8 bytes (or str, which is encoded as UTF-8)

    Returns:
        Segments covering the whole input, with byte offsets

    Raises:
        DictionaryNotLoadedError: If no dictionary has been loaded
    """
    return _SEGMENTER.segment(data)


def segment_recall(data: Union[bytes, str]) -> List[Segment]:
    """
    Segment text in search mode with the shared dictionary.

    The input is never returned as a single whole term, so a compound term
    comes back as its parts.
    """
    return _SEGMENTER.segment_recall(data)


def get_dictionary() -> Optional[Dictionary]:
    """Get the shared dictionary, or None if none is loaded."""
    return _SEGMENTER.dictionary


def close():
    """Release the shared dictionary."""
    _SEGMENTER.close()


def get_version() -> str:
    """Get the library version."""
    return __version__


# =============================================================================
# Async API
# =============================================================================

# Thread pool for async operations
_executor = None
_executor_lock = threading.Lock()


def _get_executor():
    """Get or create the thread pool executor."""
    global _executor
    from concurrent.futures import ThreadPoolExecutor

    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=ASYNC_MAX_WORKERS, thread_name_prefix="cutword")

    return _executor


async def segment_async(
    data: Union[bytes, str],
    recall: bool = False,
    timeout: float = DEFAULT_ASYNC_TIMEOUT,
) -> List[Segment]:
    """
    Segment text asynchronously with the shared dictionary.

    Args:
        data: Text to segment
        recall: Use search mode (see segment_recall())
        timeout: Maximum time in seconds

    Raises:
        SegmentationTimeoutError: If segmentation exceeds timeout

    Example:
        >>> import asyncio
        >>> segments = asyncio.run(cutword.segment_async("北京".encode()))
    """
    import asyncio

    loop = asyncio.get_running_loop()
    func = segment_recall if recall else segment

    try:
        future = loop.run_in_executor(_get_executor(), func, data)
        return await asyncio.wait_for(future, timeout=timeout)
    except asyncio.TimeoutError:
        raise SegmentationTimeoutError(f"Segmentation timed out after {timeout}s")


def shutdown():
    """
    Shutdown the thread pool executor.

    Call this when your application is shutting down to cleanly
    release resources.
    """
    global _executor
    with _executor_lock:
        if _executor is not None:
            _executor.shutdown(wait=True)
            _executor = None


# =============================================================================
# Session Context
# =============================================================================

@contextmanager
def session_context(
    content: Union[str, bytes],
    min_frequency: int = MIN_TERM_FREQUENCY,
) -> Iterator[Segmenter]:
    """
    Context manager for batch segmentation with a private dictionary.

    Example:
        >>> with cutword.session_context(source_text) as seg:
        ...     for text in texts:
        ...         segments = seg.segment(text)
    """
    seg = Segmenter()
    dictionary = seg.load_dictionary(content, min_frequency)

    try:
        yield seg
    finally:
        seg.close()
        # The session is the dictionary's only owner
        dictionary.close()


# =============================================================================
# Module-level exports
# =============================================================================

__all__ = [
    # Data classes
    "Term",
    "Segment",
    "Dictionary",
    "Segmenter",
    # Sync API
    "load_dictionary",
    "load_dictionary_files",
    "segment",
    "segment_recall",
    "get_dictionary",
    "close",
    "get_version",
    "build_dictionary",
    "split_text_to_units",
    "segments_to_string",
    "segments_to_list",
    # Async API
    "segment_async",
    "shutdown",
    # Batch processing
    "session_context",
    # Exceptions
    "CutwordError",
    "DictionaryNotLoadedError",
    "SegmentationTimeoutError",
    # Version
    "__version__",
]
