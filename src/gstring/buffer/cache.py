"""Opportunistic memo of cluster start offsets for sequential access."""

from __future__ import annotations

from typing import List, Optional, Tuple

from gstring.runtime import telemetry

from .buffer import EncodedBuffer


class BoundaryCache:
    """Remembers where clusters ``0..n`` start in one specific buffer.

    The cache is bound to a buffer by identity; binding a different buffer
    (every edit produces one) drops everything. Resolvers use it only to pick
    a later starting point for their walk, so answers are identical with or
    without it.
    """

    def __init__(self) -> None:
        self._buffer: Optional[EncodedBuffer] = None
        self._starts: List[int] = []
        self.hits = 0
        self.misses = 0

    def bind(self, buffer: EncodedBuffer) -> None:
        if self._buffer is buffer:
            return
        if self._buffer is not None:
            telemetry.record_event(
                "cache::reset",
                level="debug",
                data={"known_boundaries": len(self._starts)},
            )
        self._buffer = buffer
        self._starts = []

    def invalidate(self) -> None:
        self._buffer = None
        self._starts = []

    def nearest(self, index: int) -> Tuple[int, int]:
        """Return ``(ordinal, offset)`` of the furthest known cluster at or before ``index``."""

        if not self._starts:
            self.misses += 1
            return 0, 0
        ordinal = min(index, len(self._starts) - 1)
        if ordinal > 0:
            self.hits += 1
        else:
            self.misses += 1
        return ordinal, self._starts[ordinal]

    def record(self, ordinal: int, offset: int) -> None:
        if ordinal == len(self._starts):
            self._starts.append(offset)

    @property
    def known(self) -> int:
        return len(self._starts)


__all__ = ["BoundaryCache"]
