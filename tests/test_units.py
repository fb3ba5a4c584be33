from __future__ import annotations

import pytest

from cutword.units import (
    is_escaped_byte,
    split_text_to_units,
    text_byte_length,
    to_bytes,
    to_lower,
    unit_byte_length,
)


def test_cjk_characters_are_single_units() -> None:
    assert split_text_to_units("中华人民共和国".encode()) == ["中", "华", "人", "民", "共", "和", "国"]


def test_letter_run_between_cjk_is_folded() -> None:
    assert split_text_to_units("中AbC国".encode()) == ["中", "abc", "国"]


def test_letters_and_digits_share_a_run() -> None:
    assert split_text_to_units("中国AbC2008年".encode()) == ["中", "国", "abc2008", "年"]


def test_leading_and_trailing_runs() -> None:
    assert split_text_to_units("Hello世界".encode()) == ["hello", "世", "界"]
    assert split_text_to_units("世界Hello".encode()) == ["世", "界", "hello"]
    assert split_text_to_units(b"OnlyAscii") == ["onlyascii"]


def test_punctuation_and_spaces_are_units() -> None:
    assert split_text_to_units(b"hello, world") == ["hello", ",", " ", "world"]
    assert split_text_to_units("你好，世界".encode()) == ["你", "好", "，", "世", "界"]


def test_two_byte_letters_join_runs_without_folding() -> None:
    # U+00C9 is a two-byte letter; only ASCII is folded
    assert split_text_to_units("ÉCLAIR".encode()) == ["Éclair"]


def test_three_byte_letters_are_not_runs() -> None:
    # Fullwidth letters are three bytes long
    assert split_text_to_units("ＡＢ".encode()) == ["Ａ", "Ｂ"]


def test_str_input_is_encoded() -> None:
    assert split_text_to_units("北京ABC") == split_text_to_units("北京ABC".encode())


def test_empty_input() -> None:
    assert split_text_to_units(b"") == []


def test_invalid_bytes_become_single_units() -> None:
    data = b"\xff\xfeab\xe4"
    units = split_text_to_units(data)
    assert len(units) == 4
    assert is_escaped_byte(units[0])
    assert is_escaped_byte(units[1])
    assert units[2] == "ab"
    assert is_escaped_byte(units[3])
    assert text_byte_length(units) == len(data)


@pytest.mark.parametrize(
    "text",
    [
        "中华人民共和国",
        "我在iPad上看2024年的NBA比赛！",
        "Hello, 世界. Ünïcödé ok?",
        "  多个  空格  ",
    ],
)
def test_byte_lengths_add_up(text: str) -> None:
    data = text.encode()
    assert text_byte_length(split_text_to_units(data)) == len(data)


@pytest.mark.parametrize(
    "text",
    [
        "中国AbC2008年",
        "我在iPad上看2024年的NBA比赛！",
        "mixed ÀÉ text 和 中文",
    ],
)
def test_splitting_is_idempotent(text: str) -> None:
    units = split_text_to_units(text.encode())
    assert split_text_to_units("".join(units).encode()) == units


def test_to_lower_only_folds_ascii() -> None:
    assert to_lower("ABCxyzÀ") == "abcxyzÀ"


def test_unit_byte_length() -> None:
    assert unit_byte_length("a") == 1
    assert unit_byte_length("É") == 2
    assert unit_byte_length("中") == 3
    assert unit_byte_length(split_text_to_units(b"\xff")[0]) == 1


def test_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        split_text_to_units(42)  # type: ignore[arg-type]


def test_lone_surrogate_in_str_becomes_escaped_bytes() -> None:
    data = "a\ud800b"
    encoded = to_bytes(data)
    assert encoded == b"a\xed\xa0\x80b"

    units = split_text_to_units(data)
    assert len(units) == 5
    assert units[0] == "a" and units[-1] == "b"
    assert all(is_escaped_byte(unit) for unit in units[1:4])
    assert text_byte_length(units) == len(encoded)
