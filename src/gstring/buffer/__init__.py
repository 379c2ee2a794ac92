"""Encoded buffers, ordinal resolution and splicing."""

from .buffer import EncodedBuffer
from .cache import BoundaryCache
from .resolver import OffsetResolver
from .splice import SpliceValue, append, encode_value, prepend, replace_grapheme

__all__ = [
    "BoundaryCache",
    "EncodedBuffer",
    "OffsetResolver",
    "SpliceValue",
    "append",
    "encode_value",
    "prepend",
    "replace_grapheme",
]
