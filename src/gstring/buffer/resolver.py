"""Map grapheme ordinals to storage offsets by walking the segmenter."""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from gstring.errors import IndexOutOfRange, InvalidRange
from gstring.segment import GraphemeSpan, segment

from .buffer import EncodedBuffer
from .cache import BoundaryCache


class OffsetResolver:
    """Resolves ordinals against one buffer.

    Every call walks clusters from the start of the buffer (or from the
    nearest boundary a ``BoundaryCache`` already knows), so a lookup of
    ordinal ``i`` costs ``O(i)``. Nothing is retained between calls except
    what the optional cache holds.
    """

    def __init__(
        self, buffer: EncodedBuffer, *, cache: Optional[BoundaryCache] = None
    ) -> None:
        self.buffer = buffer
        self.cache = cache
        if cache is not None:
            cache.bind(buffer)

    def _walk(self, near: int = 0) -> Iterator[Tuple[int, GraphemeSpan]]:
        ordinal, offset = (0, 0) if self.cache is None else self.cache.nearest(near)
        for span in segment(self.buffer.raw, self.buffer.strategy, offset):
            if self.cache is not None:
                self.cache.record(ordinal, span.offset)
            yield ordinal, span
            ordinal += 1

    def spans(self) -> Iterator[Tuple[int, GraphemeSpan]]:
        """Yield ``(ordinal, span)`` for every cluster in order."""

        return self._walk(0)

    def resolve_span(self, index: int) -> GraphemeSpan:
        if index < 0:
            raise IndexOutOfRange(index)
        seen = 0
        for ordinal, span in self._walk(index):
            if ordinal == index:
                return span
            seen = ordinal + 1
        raise IndexOutOfRange(index, count=seen)

    def resolve(self, index: int) -> Tuple[int, int]:
        """Return ``(offset, length)`` in code units of cluster ``index``."""

        return self.resolve_span(index).as_tuple()

    def resolve_range(self, start: int, stop: int) -> List[GraphemeSpan]:
        """Return the spans of clusters ``[start, stop)``."""

        if start > stop:
            raise InvalidRange(start, stop)
        if start < 0:
            raise IndexOutOfRange(start)
        if stop == 0:
            return []

        spans: List[GraphemeSpan] = []
        seen = 0
        for ordinal, span in self._walk(min(start, stop - 1)):
            if ordinal >= start:
                spans.append(span)
            if ordinal == stop - 1:
                return spans
            seen = ordinal + 1
        raise IndexOutOfRange(stop, count=seen)

    def count(self) -> int:
        total = 0 if self.cache is None else self.cache.known
        for ordinal, _ in self._walk(max(total - 1, 0)):
            total = ordinal + 1
        return total

    def find(self, needle: bytes) -> int:
        """Ordinal of the first cluster start where the raw suffix begins with ``needle``.

        Matches are tested only at cluster starts, so a needle that would line
        up inside a cluster is not found. Returns ``-1`` when nothing matches.
        """

        for ordinal, span in self.spans():
            if self.buffer.starts_with(needle, span.offset):
                return ordinal
        return -1


__all__ = ["OffsetResolver"]
