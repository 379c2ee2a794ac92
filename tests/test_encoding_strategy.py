from __future__ import annotations

import sys

import pytest

from gstring.encoding import UTF8, UTF16, UTF32, get_strategy
from gstring.errors import InvalidEncoding

SAMPLE = "aé€\U0001F600"


def unit(value: int, width: int) -> bytes:
    return value.to_bytes(width, sys.byteorder)


def test_get_strategy_accepts_names_widths_and_strategies() -> None:
    assert get_strategy("utf-8") is UTF8
    assert get_strategy("UTF8") is UTF8
    assert get_strategy("utf_16") is UTF16
    assert get_strategy(32) is UTF32
    assert get_strategy(UTF16) is UTF16


@pytest.mark.parametrize("value", ["latin-1", 7, None])
def test_get_strategy_rejects_unknown(value) -> None:
    with pytest.raises(ValueError):
        get_strategy(value)


@pytest.mark.parametrize(
    ("strategy", "lengths"),
    [(UTF8, [1, 2, 3, 4]), (UTF16, [1, 1, 1, 2]), (UTF32, [1, 1, 1, 1])],
)
def test_iter_code_points_reports_offsets_in_units(strategy, lengths) -> None:
    raw = strategy.encode(SAMPLE)

    decoded = list(strategy.iter_code_points(raw))

    assert [value for _, _, value in decoded] == [ord(c) for c in SAMPLE]
    assert [length for _, length, _ in decoded] == lengths
    assert [strategy.code_unit_length(ord(c)) for c in SAMPLE] == lengths
    offsets = [offset for offset, _, _ in decoded]
    assert offsets == [sum(lengths[:i]) for i in range(len(lengths))]
    assert strategy.unit_count(raw) == sum(lengths)


def test_units_view_is_read_only_and_unit_indexed() -> None:
    raw = UTF16.encode("a\U0001F600")
    view = UTF16.units(raw)

    assert len(view) == 3
    assert view[0] == ord("a")
    assert 0xD800 <= view[1] <= 0xDBFF
    with pytest.raises(TypeError):
        view[0] = 0x62


@pytest.mark.parametrize(
    "raw",
    [
        b"\xff",
        b"\x80abc",
        b"\xc3",
        b"\xe0\x80\x80",
        b"\xed\xa0\x80",
        b"\xf4\x90\x80\x80",
    ],
)
def test_utf8_malformed_sequences_raise(raw: bytes) -> None:
    with pytest.raises(InvalidEncoding):
        UTF8.validate(raw)
    with pytest.raises(InvalidEncoding):
        list(UTF8.iter_code_points(raw))


def test_utf8_error_reports_offset() -> None:
    with pytest.raises(InvalidEncoding) as excinfo:
        UTF8.decode_at(b"ab\xff", 2)

    assert excinfo.value.offset == 2
    assert excinfo.value.encoding == "utf-8"


@pytest.mark.parametrize(
    "raw",
    [
        unit(0xD800, 2),
        unit(0xDC00, 2) + unit(0x41, 2),
        unit(0xD800, 2) + unit(0x41, 2),
        b"a",
    ],
)
def test_utf16_malformed_sequences_raise(raw: bytes) -> None:
    with pytest.raises(InvalidEncoding):
        list(UTF16.iter_code_points(raw))


@pytest.mark.parametrize("raw", [unit(0x110000, 4), unit(0xD800, 4), b"abc"])
def test_utf32_malformed_units_raise(raw: bytes) -> None:
    with pytest.raises(InvalidEncoding):
        list(UTF32.iter_code_points(raw))


def test_encode_rejects_lone_surrogate() -> None:
    with pytest.raises(InvalidEncoding):
        UTF8.encode("a\ud800")


@pytest.mark.parametrize("source", [UTF8, UTF16, UTF32])
@pytest.mark.parametrize("target", [UTF8, UTF16, UTF32])
def test_conversion_round_trip(source, target) -> None:
    raw = source.encode(SAMPLE)

    converted = target.encode(source.decode(raw))

    assert source.encode(target.decode(converted)) == raw
