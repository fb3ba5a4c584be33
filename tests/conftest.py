from __future__ import annotations

from pathlib import Path

import pytest

from cutword.dictionary import Dictionary, load_dictionary_text


SAMPLE_DICTIONARY = """\
中华 20 nz
人民 30 n
共和国 25 n
中华人民共和国 15 ns
北京 40 ns
大学 35 n
北京大学 10 nt
你 50 r
好 45 a
你好 12 l
ipad 8 nz
"""


def assert_covers(segments, data: bytes) -> None:
    """Segments are contiguous and cover the whole input."""
    assert segments, "expected at least one segment"
    assert segments[0].start == 0
    assert segments[-1].end == len(data)
    for left, right in zip(segments, segments[1:]):
        assert left.end == right.start
    for seg in segments:
        assert seg.end > seg.start


@pytest.fixture
def sample_dictionary() -> Dictionary:
    return load_dictionary_text(SAMPLE_DICTIONARY)


@pytest.fixture
def dictionary_file(tmp_path: Path) -> Path:
    path = tmp_path / "dictionary.txt"
    path.write_text(SAMPLE_DICTIONARY, encoding="utf-8")
    return path
