"""
Output helpers for cutword.

Turn segmentation results into strings or lists of texts. In search mode
a term is expanded into its precomputed sub-segmentation, depth-first,
followed by the term itself, which is what a search index wants to store.
A term whose parts are all single-unit terms is not expanded, so single
characters (and pseudo-terms) never show up on their own.
"""

from typing import List, Sequence

from cutword.dictionary import Term
from cutword.segmenter import Segment


def _has_compound_parts(term: Term) -> bool:
    return any(len(sub.term.segments) > 1 for sub in term.segments)


def term_to_string(term: Term) -> str:
    """Search-mode expansion of one term as ``text/pos`` items."""
    output = ""
    if _has_compound_parts(term):
        for sub in term.segments:
            output += term_to_string(sub.term)
    output += f"{term.text}/{term.pos} "
    return output


def segments_to_string(segments: Sequence[Segment], search_mode: bool = False) -> str:
    """
    Format segments as ``text/pos`` items, each followed by a space.

    Example:
        中华/nz 人民/n 共和国/n
    """
    if search_mode:
        return "".join(term_to_string(seg.term) for seg in segments)
    return "".join(f"{seg.text}/{seg.pos} " for seg in segments)


def term_to_list(term: Term) -> List[str]:
    """Search-mode expansion of one term as a list of texts."""
    output = []
    if _has_compound_parts(term):
        for sub in term.segments:
            output.extend(term_to_list(sub.term))
    output.append(term.text)
    return output


def segments_to_list(segments: Sequence[Segment], search_mode: bool = False) -> List[str]:
    """Texts of the segments, expanded into sub-terms in search mode."""
    if search_mode:
        output = []
        for seg in segments:
            output.extend(term_to_list(seg.term))
        return output
    return [seg.text for seg in segments]
