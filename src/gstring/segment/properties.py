"""Grapheme_Cluster_Break classification of code points.

Property data comes from the range tables shipped with :mod:`wcwidth`
(``wcwidth.table_grapheme``), searched with ``wcwidth.bisearch``.
"""

from __future__ import annotations

from enum import IntEnum
from functools import lru_cache

from wcwidth.bisearch import bisearch as _bisearch
from wcwidth.table_grapheme import (
    EXTENDED_PICTOGRAPHIC,
    GRAPHEME_CONTROL,
    GRAPHEME_EXTEND,
    GRAPHEME_L,
    GRAPHEME_LV,
    GRAPHEME_LVT,
    GRAPHEME_PREPEND,
    GRAPHEME_REGIONAL_INDICATOR,
    GRAPHEME_SPACINGMARK,
    GRAPHEME_T,
    GRAPHEME_V,
    INCB_CONSONANT,
    INCB_EXTEND,
    INCB_LINKER,
)


class GraphemeBreak(IntEnum):
    """Grapheme_Cluster_Break property values."""

    OTHER = 0
    CR = 1
    LF = 2
    CONTROL = 3
    EXTEND = 4
    ZWJ = 5
    REGIONAL_INDICATOR = 6
    PREPEND = 7
    SPACING_MARK = 8
    L = 9
    V = 10
    T = 11
    LV = 12
    LVT = 13


class IndicConjunct(IntEnum):
    """Indic_Conjunct_Break property values."""

    NONE = 0
    CONSONANT = 1
    LINKER = 2
    EXTEND = 3


# Checked in order; the tables are disjoint apart from the single code points
# handled before them.
_BREAK_TABLES = (
    (GRAPHEME_CONTROL, GraphemeBreak.CONTROL),
    (GRAPHEME_EXTEND, GraphemeBreak.EXTEND),
    (GRAPHEME_REGIONAL_INDICATOR, GraphemeBreak.REGIONAL_INDICATOR),
    (GRAPHEME_PREPEND, GraphemeBreak.PREPEND),
    (GRAPHEME_SPACINGMARK, GraphemeBreak.SPACING_MARK),
    (GRAPHEME_L, GraphemeBreak.L),
    (GRAPHEME_V, GraphemeBreak.V),
    (GRAPHEME_T, GraphemeBreak.T),
    (GRAPHEME_LV, GraphemeBreak.LV),
    (GRAPHEME_LVT, GraphemeBreak.LVT),
)


@lru_cache(maxsize=1024)
def classify(ucs: int) -> GraphemeBreak:
    """Return the Grapheme_Cluster_Break class of code point ``ucs``."""

    if ucs == 0x000D:
        return GraphemeBreak.CR
    if ucs == 0x000A:
        return GraphemeBreak.LF
    if ucs == 0x200D:
        return GraphemeBreak.ZWJ
    for table, break_class in _BREAK_TABLES:
        if _bisearch(ucs, table):
            return break_class
    return GraphemeBreak.OTHER


@lru_cache(maxsize=1024)
def is_extended_pictographic(ucs: int) -> bool:
    return bool(_bisearch(ucs, EXTENDED_PICTOGRAPHIC))


@lru_cache(maxsize=1024)
def indic_conjunct(ucs: int) -> IndicConjunct:
    if _bisearch(ucs, INCB_CONSONANT):
        return IndicConjunct.CONSONANT
    if _bisearch(ucs, INCB_LINKER):
        return IndicConjunct.LINKER
    if _bisearch(ucs, INCB_EXTEND):
        return IndicConjunct.EXTEND
    return IndicConjunct.NONE


__all__ = [
    "GraphemeBreak",
    "IndicConjunct",
    "classify",
    "indic_conjunct",
    "is_extended_pictographic",
]
