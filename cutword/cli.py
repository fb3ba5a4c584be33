"""
CLI interface for cutword.

Usage:
    cutword -D dict.txt "中华人民共和国成立了"
    cutword -D dict.txt --recall "中华人民共和国"
    cutword -D dict.txt --expand --json "中华人民共和国"
    echo "北京欢迎你" | cutword -D base.txt,extra.txt --simple
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from cutword import Segment, Segmenter, __version__
from cutword.constants import MIN_TERM_FREQUENCY
from cutword.utils import segments_to_list, segments_to_string, term_to_list


# ============================================================================
# Output Formatting
# ============================================================================

def format_default(segments: List[Segment], expand: bool = False) -> str:
    """``text/pos`` items separated by spaces."""
    return segments_to_string(segments, search_mode=expand).rstrip()


def format_json(segments: List[Segment], expand: bool = False) -> str:
    """Format segments as JSON with full details."""
    data = []
    for seg in segments:
        item = {
            "text": seg.text,
            "pos": seg.pos,
            "start": seg.start,
            "end": seg.end,
            "frequency": seg.term.frequency,
            "cost": round(seg.term.cost, 6),
        }
        if expand:
            item["expansion"] = term_to_list(seg.term)
        data.append(item)

    return json.dumps(data, ensure_ascii=False, indent=2)


def format_simple(segments: List[Segment], expand: bool = False) -> str:
    """Tab-separated output: text, pos, start, end."""
    if expand:
        return "\n".join(segments_to_list(segments, search_mode=True))
    lines = []
    for seg in segments:
        lines.append(f"{seg.text}\t{seg.pos}\t{seg.start}\t{seg.end}")
    return "\n".join(lines)


# ============================================================================
# Main
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cutword",
        description="Dictionary-based word segmentation",
    )
    parser.add_argument(
        "text",
        nargs="?",
        help="Text to segment (read from stdin if omitted)",
    )
    parser.add_argument(
        "--dict", "-D",
        dest="dicts",
        action="append",
        required=True,
        metavar="PATH",
        help="Dictionary file; repeat or comma-separate for several",
    )
    parser.add_argument(
        "--recall", "-r",
        action="store_true",
        help="Search mode: never return the whole input as one term",
    )
    parser.add_argument(
        "--expand", "-e",
        action="store_true",
        help="Expand every term into its sub-terms in the output",
    )
    parser.add_argument(
        "--json", "-j",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "--simple", "-s",
        action="store_true",
        help="Simple output format (text, pos, start, end)",
    )
    parser.add_argument(
        "--min-frequency",
        type=int,
        default=MIN_TERM_FREQUENCY,
        help=f"Skip dictionary records below this frequency (default: {MIN_TERM_FREQUENCY})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log progress to stderr",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"cutword {__version__}",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    if args.text is None:
        # Read from stdin
        text = sys.stdin.read().strip()
    else:
        text = args.text

    if not text:
        parser.print_help()
        return 1

    try:
        with Segmenter() as seg:
            seg.load_dictionary_files(args.dicts, args.min_frequency)
            if args.recall:
                segments = seg.segment_recall(text)
            else:
                segments = seg.segment(text)

            if args.json:
                print(format_json(segments, args.expand))
            elif args.simple:
                print(format_simple(segments, args.expand))
            else:
                print(format_default(segments, args.expand))

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
