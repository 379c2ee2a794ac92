from __future__ import annotations

import random

import pytest
import regex

from gstring.encoding import UTF8, UTF16, UTF32
from gstring.errors import InvalidEncoding
from gstring.segment import (
    Grapheme,
    GraphemeBreak,
    IndicConjunct,
    boundaries,
    classify,
    indic_conjunct,
    is_extended_pictographic,
    segment,
    split,
)

BREVE = "\N{COMBINING BREVE}"
ACUTE = "\N{COMBINING ACUTE ACCENT}"
ZWJ = "\N{ZERO WIDTH JOINER}"
MAN, WOMAN, GIRL = "\U0001F468", "\U0001F469", "\U0001F467"
US = "\U0001F1FA\U0001F1F8"
FR = "\U0001F1EB\U0001F1F7"
WAVE_LIGHT = "\U0001F44B\U0001F3FB"
# KA + VIRAMA + SSA
KSSA = "\U00000915\U0000094D\U00000937"

# R + breve, a + dot above, m + combining, b + bridge below, o + tilde
RAMBO = "Test R\U00000306a\U00000307m\U00000346b\U0000032Ao\U00000303"

ORACLE_SAMPLES = [
    RAMBO,
    "cafe" + ACUTE,
    "a\r\nb\n\r",
    US + FR,
    MAN + ZWJ + WOMAN + ZWJ + GIRL + "!",
    WAVE_LIGHT + " hi",
    "\U0000D55C\U0000AD6D\U0000C5B4",
    "\U00001100\U00001161\U000011A8\U00001100",
    "\U00000915\U0000093F\U00000916",
    "\U00000E01\U00000E33",
    "\U00002764\U0000FE0F",
    KSSA,
    "\U00002065" + ACUTE,
    "\U00000915\U0000094D\U0000200D\U00000937\U0000093F",
    "\U00000915\U0000094D a",
    "\U00002764\U0000FE0F" + ZWJ + "\U0001F525" + WAVE_LIGHT,
    WOMAN + ZWJ + "\U00002764\U0000FE0F" + ZWJ + MAN + ACUTE,
    "\U0001F3F3\U0000FE0F" + ZWJ + "\U0001F308" + US,
]


@pytest.mark.parametrize(
    ("code_point", "expected"),
    [
        (0x41, GraphemeBreak.OTHER),
        (0x0D, GraphemeBreak.CR),
        (0x0A, GraphemeBreak.LF),
        (0x07, GraphemeBreak.CONTROL),
        (0x00AD, GraphemeBreak.CONTROL),
        (0x2065, GraphemeBreak.CONTROL),
        (0x0301, GraphemeBreak.EXTEND),
        (0xFE0F, GraphemeBreak.EXTEND),
        (0x200C, GraphemeBreak.EXTEND),
        (0xE0061, GraphemeBreak.EXTEND),
        (0x200D, GraphemeBreak.ZWJ),
        (0x093F, GraphemeBreak.SPACING_MARK),
        (0x0E33, GraphemeBreak.SPACING_MARK),
        (0x0600, GraphemeBreak.PREPEND),
        (0x1100, GraphemeBreak.L),
        (0x1161, GraphemeBreak.V),
        (0x11A8, GraphemeBreak.T),
        (0xAC00, GraphemeBreak.LV),
        (0xAC01, GraphemeBreak.LVT),
        (0x1F1FA, GraphemeBreak.REGIONAL_INDICATOR),
        (0x1F3FB, GraphemeBreak.EXTEND),
    ],
)
def test_classify(code_point: int, expected: GraphemeBreak) -> None:
    assert classify(code_point) is expected


def test_extended_pictographic() -> None:
    assert is_extended_pictographic(0x1F600)
    assert is_extended_pictographic(0x2764)
    assert not is_extended_pictographic(0x41)
    assert not is_extended_pictographic(0x1F3FB)


@pytest.mark.parametrize(
    ("code_point", "expected"),
    [
        (0x0915, IndicConjunct.CONSONANT),
        (0x0937, IndicConjunct.CONSONANT),
        (0x094D, IndicConjunct.LINKER),
        (0x093C, IndicConjunct.EXTEND),
        (0x200D, IndicConjunct.EXTEND),
        (0x093F, IndicConjunct.NONE),
        (0x41, IndicConjunct.NONE),
    ],
)
def test_indic_conjunct(code_point: int, expected: IndicConjunct) -> None:
    assert indic_conjunct(code_point) is expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", []),
        ("abc", ["a", "b", "c"]),
        ("e" + ACUTE + "a", ["e" + ACUTE, "a"]),
        ("a\r\nb", ["a", "\r\n", "b"]),
        ("\n" + ACUTE, ["\n", ACUTE]),
        (US + "\U0001F1EB", [US, "\U0001F1EB"]),
        (MAN + ZWJ + WOMAN + ZWJ + GIRL, [MAN + ZWJ + WOMAN + ZWJ + GIRL]),
        ("a" + ZWJ + WOMAN, ["a" + ZWJ, WOMAN]),
        (WAVE_LIGHT, [WAVE_LIGHT]),
        ("\U00001100\U00001161\U000011A8", ["\U00001100\U00001161\U000011A8"]),
        ("\U0000AC00\U000011A8", ["\U0000AC00\U000011A8"]),
        ("\U0000AC01\U00001161", ["\U0000AC01", "\U00001161"]),
        ("\U00000600a", ["\U00000600a"]),
        ("\U00000915\U0000093F", ["\U00000915\U0000093F"]),
        (KSSA, [KSSA]),
        (KSSA + "\U00000915", [KSSA + "\U00000915"]),
        ("\U00000915\U0000094Da", ["\U00000915\U0000094D", "a"]),
        ("\U00002065" + ACUTE, ["\U00002065", ACUTE]),
    ],
)
def test_split(text: str, expected: list[str]) -> None:
    assert split(text) == expected


@pytest.mark.parametrize("text", ORACLE_SAMPLES)
def test_split_agrees_with_regex_extended_grapheme(text: str) -> None:
    assert split(text) == regex.findall(r"\X", text)


# Code points whose properties have been stable since Unicode 15.1.
FUZZ_POOL = [
    "a", "b", " ", "\r", "\n", "\x07", "\U000000AD",
    ACUTE, BREVE, ZWJ, "\U0000200C", "\U0000FE0F", "\U00002065",
    "\U00000600", "\U00000E33", "\U0000093F",
    "\U00000915", "\U00000937", "\U0000094D", "\U0000093C",
    "\U00001100", "\U00001161", "\U000011A8", "\U0000AC00", "\U0000AC01",
    "\U0001F1FA", "\U0001F1F8", "\U0001F1EB",
    "\U0001F468", "\U0001F469", "\U00002764", "\U0001F3FB", "\U0001F525",
]


def test_split_agrees_with_regex_on_random_text() -> None:
    rng = random.Random(29)

    for _ in range(2000):
        text = "".join(rng.choices(FUZZ_POOL, k=rng.randint(1, 12)))
        assert split(text) == regex.findall(r"\X", text), [hex(ord(c)) for c in text]


@pytest.mark.parametrize("strategy", [UTF8, UTF16, UTF32])
def test_segment_partitions_buffer(strategy) -> None:
    raw = strategy.encode(RAMBO)

    spans = list(segment(raw, strategy))

    assert len(spans) == 10
    assert spans[0].offset == 0
    for left, right in zip(spans, spans[1:]):
        assert left.end == right.offset
        assert left.length > 0
    assert spans[-1].end == strategy.unit_count(raw)
    assert "".join(str(span.grapheme) for span in spans) == RAMBO


def test_segment_is_restartable() -> None:
    raw = UTF8.encode(RAMBO)
    first = segment(raw)
    next(first)
    next(first)

    assert next(segment(raw)).grapheme == "T"
    assert next(first).grapheme == "s"


def test_segment_resumes_at_boundary() -> None:
    text = US + FR + US + KSSA + "x" + ACUTE
    raw = UTF16.encode(text)
    spans = list(segment(raw, UTF16))

    assert len(spans) == 5
    for index, span in enumerate(spans):
        assert list(segment(raw, UTF16, span.offset)) == spans[index:]


def test_segment_aborts_on_malformed_input() -> None:
    spans = segment(b"ab\xffc")

    assert next(spans).grapheme == "a"
    with pytest.raises(InvalidEncoding):
        list(spans)


def test_boundaries_include_end() -> None:
    raw = UTF8.encode("e" + ACUTE + "x")

    assert list(boundaries(raw)) == [0, 3, 4]
    assert list(boundaries(b"")) == [0]


def test_grapheme_value_semantics() -> None:
    grapheme = Grapheme.of("R" + BREVE)

    assert len(grapheme) == 2
    assert grapheme[0] == "R" and grapheme[1] == BREVE
    assert grapheme == "R" + BREVE
    assert grapheme == Grapheme((0x52, 0x306))
    assert grapheme != Grapheme.of("R")
    assert hash(grapheme) == hash("R" + BREVE)
    assert Grapheme.of(0x61) == "a"
    assert list(grapheme) == ["R", BREVE]
    with pytest.raises(ValueError):
        Grapheme.of("")
