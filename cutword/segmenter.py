"""
Segmentation engine for cutword.

Finds the minimum-cost segmentation of a unit sequence with a forward
dynamic program over unit positions, then walks the chosen terms back from
the end to produce byte-addressed segments.

Since a term's cost is -log2 of its probability, the minimum-cost path is
the most likely segmentation under a unigram model.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from cutword.constants import (
    MIN_TERM_FREQUENCY,
    PSEUDO_TERM_COST,
    PSEUDO_TERM_FREQUENCY,
    PSEUDO_TERM_POS,
)
from cutword.dictionary import (
    Dictionary,
    Term,
    load_dictionary_files as _load_dictionary_files,
    load_dictionary_text,
)
from cutword.errors import DictionaryNotLoadedError
from cutword.units import split_text_to_units

logger = logging.getLogger(__name__)


# =============================================================================
# Data Structures
# =============================================================================

@dataclass(slots=True)
class Segment:
    """A term chosen for the byte range [start, end) of the input."""
    term: Term
    start: int
    end: int

    @property
    def text(self) -> str:
        return self.term.text

    @property
    def pos(self) -> str:
        return self.term.pos

    def __repr__(self) -> str:
        return f"Segment({self.text!r}, {self.start}, {self.end}, pos={self.pos!r})"


@dataclass(slots=True)
class _Jumper:
    """Best way found so far to reach a unit position."""
    min_cost: float = 0.0
    term: Optional[Term] = None

    def update(self, base_cost: float, term: Term):
        cost = base_cost + term.cost
        # Visited means a term is set; a min_cost == 0 sentinel would drop zero-cost terms
        if self.term is None or cost < self.min_cost:
            self.min_cost = cost
            self.term = term


def make_pseudo_term(unit: str) -> Term:
    """Fallback term covering a single unit."""
    return Term(
        units=(unit,),
        frequency=PSEUDO_TERM_FREQUENCY,
        pos=PSEUDO_TERM_POS,
        cost=PSEUDO_TERM_COST,
    )


# =============================================================================
# Dynamic Programming
# =============================================================================

def segment_units(
    dictionary: Dictionary,
    units: Sequence[str],
    search_mode: bool = False,
) -> List[Segment]:
    """
    Segment a unit sequence.

    Args:
        dictionary: Dictionary to match terms against
        units: Units from split_text_to_units()
        search_mode: If True, never match the whole input as one term, so
            the result is a decomposition of it

    Returns:
        Segments in input order covering every unit; empty for empty input
        and for single-unit input in search mode
    """
    num_units = len(units)
    if num_units == 0:
        return []
    if search_mode and num_units == 1:
        return []

    jumpers = [_Jumper() for _ in range(num_units)]
    max_length = dictionary.max_term_length
    last = num_units - 1

    for current in range(num_units):
        base_cost = 0.0 if current == 0 else jumpers[current - 1].min_cost

        terms = dictionary.lookup(units[current:min(current + max_length, num_units)])

        for term in terms:
            location = current + len(term.units) - 1
            if search_mode and current == 0 and location == last:
                continue
            jumpers[location].update(base_cost, term)

        # A real single-unit match takes precedence over the pseudo-term
        if not terms or len(terms[0].units) > 1:
            jumpers[current].update(base_cost, make_pseudo_term(units[current]))

    # Walk back from the end
    chosen: List[Term] = []
    index = last
    while index >= 0:
        term = jumpers[index].term
        chosen.append(term)
        index -= len(term.units)
    chosen.reverse()

    segments = []
    byte_position = 0
    for term in chosen:
        start = byte_position
        byte_position += term.byte_length
        segments.append(Segment(term=term, start=start, end=byte_position))

    return segments


# =============================================================================
# Segmenter
# =============================================================================

class Segmenter:
    """
    Holds a dictionary and segments text with it.

    Example:
        >>> seg = Segmenter()
        >>> seg.load_dictionary("中华 10 nz\\n人民 10 n\\n共和国 10 n\\n")
        >>> [s.text for s in seg.segment("中华人民共和国".encode())]
        ['中华', '人民', '共和国']
    """

    def __init__(self, dictionary: Optional[Dictionary] = None):
        self._dictionary = dictionary

    @property
    def dictionary(self) -> Optional[Dictionary]:
        """The loaded dictionary, or None."""
        return self._dictionary

    def load_dictionary(
        self,
        content: Union[str, bytes],
        min_frequency: int = MIN_TERM_FREQUENCY,
    ) -> Dictionary:
        """
        Build a dictionary from source text and use it from now on.

        The previous dictionary is replaced, not modified, so calls already
        running keep the dictionary they started with.
        """
        dictionary = load_dictionary_text(content, min_frequency)
        self._dictionary = dictionary
        return dictionary

    def load_dictionary_files(
        self,
        paths: Union[str, Path, Iterable[Union[str, Path]]],
        min_frequency: int = MIN_TERM_FREQUENCY,
    ) -> Dictionary:
        """Like load_dictionary(), reading the source text from files."""
        dictionary = _load_dictionary_files(paths, min_frequency)
        self._dictionary = dictionary
        return dictionary

    def segment(self, data: Union[bytes, str]) -> List[Segment]:
        """
        Segment text, returning the most likely segmentation.

        Args:
            data: UTF-8 bytes or str; offsets in the result are byte offsets

        Raises:
            DictionaryNotLoadedError: If no dictionary is loaded
        """
        return self._segment(data, search_mode=False)

    def segment_recall(self, data: Union[bytes, str]) -> List[Segment]:
        """
        Segment text in search mode.

        The whole input is never returned as a single term, so a compound
        term is broken into its parts.
        """
        return self._segment(data, search_mode=True)

    def _segment(self, data: Union[bytes, str], search_mode: bool) -> List[Segment]:
        dictionary = self._dictionary
        if dictionary is None:
            raise DictionaryNotLoadedError("no dictionary loaded; call load_dictionary() first")
        return segment_units(dictionary, split_text_to_units(data), search_mode)

    def close(self):
        """
        Release the dictionary. Does nothing if none is loaded.

        Only the reference is dropped; calls already holding the dictionary
        finish with it, and its memory goes with the last of them.
        """
        dictionary, self._dictionary = self._dictionary, None
        if dictionary is not None:
            logger.debug("Dictionary released")

    def __enter__(self) -> "Segmenter":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
