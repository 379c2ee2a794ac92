"""Strings indexed by grapheme cluster over native UTF storage."""

from .buffer import BoundaryCache, EncodedBuffer, OffsetResolver, replace_grapheme
from .encoding import UTF8, UTF16, UTF32, EncodingStrategy, get_strategy
from .errors import GStringError, IndexOutOfRange, InvalidEncoding, InvalidRange
from .grapheme_string import GraphemeString
from .segment import Grapheme, GraphemeBreak, GraphemeSpan, segment, split

__all__ = [
    "BoundaryCache",
    "EncodedBuffer",
    "EncodingStrategy",
    "GStringError",
    "Grapheme",
    "GraphemeBreak",
    "GraphemeSpan",
    "GraphemeString",
    "IndexOutOfRange",
    "InvalidEncoding",
    "InvalidRange",
    "OffsetResolver",
    "UTF8",
    "UTF16",
    "UTF32",
    "get_strategy",
    "replace_grapheme",
    "segment",
    "split",
]

__version__ = "0.1.0"
