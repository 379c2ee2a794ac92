"""Grapheme cluster segmentation."""

from .models import CodePoint, Grapheme, GraphemeSpan
from .properties import (
    GraphemeBreak,
    IndicConjunct,
    classify,
    indic_conjunct,
    is_extended_pictographic,
)
from .segmenter import (
    BreakState,
    boundaries,
    is_boundary,
    iter_code_points,
    segment,
    split,
)

__all__ = [
    "BreakState",
    "CodePoint",
    "Grapheme",
    "GraphemeBreak",
    "GraphemeSpan",
    "IndicConjunct",
    "boundaries",
    "classify",
    "indic_conjunct",
    "is_boundary",
    "is_extended_pictographic",
    "iter_code_points",
    "segment",
    "split",
]
