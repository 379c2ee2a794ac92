"""Exceptions raised by gstring buffers, resolvers and encodings."""

from __future__ import annotations

from typing import Optional


class GStringError(RuntimeError):
    """Base class for every error raised by this package."""


class InvalidEncoding(GStringError, ValueError):
    """Raised when code units do not form a valid sequence for the encoding.

    ``offset`` is the code-unit offset of the offending sequence when known.
    Also raised when text cannot be encoded (lone surrogates).
    """

    def __init__(
        self, message: str, *, encoding: str, offset: Optional[int] = None
    ) -> None:
        if offset is not None:
            message = f"{message} at unit {offset}"
        super().__init__(f"{encoding}: {message}")
        self.encoding = encoding
        self.offset = offset


class IndexOutOfRange(GStringError, IndexError):
    """Raised when a grapheme ordinal falls outside ``[0, count)``."""

    def __init__(self, index: int, *, count: Optional[int] = None) -> None:
        if count is None:
            message = f"Grapheme index {index} out of range"
        else:
            message = f"Grapheme index {index} out of range for {count} graphemes"
        super().__init__(message)
        self.index = index
        self.count = count


class InvalidRange(GStringError, ValueError):
    """Raised when a grapheme range has ``start > stop``."""

    def __init__(self, start: int, stop: int) -> None:
        super().__init__(f"Invalid grapheme range [{start}, {stop})")
        self.start = start
        self.stop = stop


__all__ = ["GStringError", "InvalidEncoding", "IndexOutOfRange", "InvalidRange"]
