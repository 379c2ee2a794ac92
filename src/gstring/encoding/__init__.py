"""UTF-8/16/32 encoding strategies."""

from .strategy import (
    UTF8,
    UTF16,
    UTF32,
    DecodedUnit,
    EncodingLike,
    EncodingStrategy,
    get_strategy,
)

__all__ = [
    "DecodedUnit",
    "EncodingLike",
    "EncodingStrategy",
    "UTF8",
    "UTF16",
    "UTF32",
    "get_strategy",
]
