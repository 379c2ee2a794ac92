"""Grapheme-addressed string façade over an encoded buffer."""

from __future__ import annotations

from typing import Any, Iterator, List, Optional, Tuple, Union, overload

from gstring.buffer import (
    BoundaryCache,
    EncodedBuffer,
    OffsetResolver,
    SpliceValue,
    append,
    encode_value,
    prepend,
    replace_grapheme,
)
from gstring.encoding import UTF8, UTF16, UTF32, EncodingLike, get_strategy
from gstring.errors import IndexOutOfRange
from gstring.segment import Grapheme

Value = Union[str, int, Grapheme, "GraphemeString"]


class GraphemeString:
    """A string indexed by visible character rather than by code unit.

    Storage stays in one UTF encoding (``"utf-8"``, ``"utf-16"`` or
    ``"utf-32"``). Positions are grapheme ordinals, recomputed from the
    buffer on every call, so ``at(i)``, ``slice(i, j)`` and ``set(i, ...)``
    cost ``O(i)``. This suits short strings such as labels and identifiers.

    >>> s = GraphemeString("Test R̆ȧm͆b̪õ")
    >>> len(s), str(s[5])
    (10, 'R̆')
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        value: Value = "",
        *,
        encoding: EncodingLike = UTF8,
        cache: bool = False,
    ) -> None:
        strategy = get_strategy(encoding)
        if isinstance(value, GraphemeString):
            buffer = value._buffer.convert(strategy)
        else:
            buffer = EncodedBuffer(raw=encode_value(value, strategy), strategy=strategy)
        self._buffer = buffer
        self._cache: Optional[BoundaryCache] = BoundaryCache() if cache else None

    @classmethod
    def from_raw(
        cls,
        raw: bytes,
        *,
        encoding: EncodingLike = UTF8,
        source_encoding: Optional[EncodingLike] = None,
        cache: bool = False,
    ) -> "GraphemeString":
        """Build from encoded bytes.

        ``raw`` is validated as ``source_encoding`` (default: ``encoding``)
        and converted to ``encoding`` when the two differ.
        """

        buffer = EncodedBuffer.from_raw(raw, source_encoding or encoding)
        instance = cls(encoding=encoding, cache=cache)
        instance._buffer = buffer.convert(encoding)
        return instance

    @classmethod
    def _wrap(cls, buffer: EncodedBuffer, *, cache: bool) -> "GraphemeString":
        instance = cls(encoding=buffer.strategy, cache=cache)
        instance._buffer = buffer
        return instance

    # -- storage ---------------------------------------------------------

    @property
    def buffer(self) -> EncodedBuffer:
        return self._buffer

    @property
    def encoding(self) -> str:
        return self._buffer.encoding

    @property
    def raw(self) -> bytes:
        return self._buffer.raw

    @property
    def storage_length(self) -> int:
        """Length in code units of the current encoding."""

        return self._buffer.unit_count

    def view(self) -> memoryview:
        """Borrowed read-only view of the current code units."""

        return self._buffer.view()

    def _resolver(self) -> OffsetResolver:
        return OffsetResolver(self._buffer, cache=self._cache)

    # -- reads -----------------------------------------------------------

    def _normalize(self, index: int) -> int:
        if index < 0:
            count = len(self)
            if index + count < 0:
                raise IndexOutOfRange(index, count=count)
            return index + count
        return index

    def at(self, index: int) -> Grapheme:
        return self._resolver().resolve_span(self._normalize(index)).grapheme

    def slice(self, start: int, stop: int) -> List[Grapheme]:
        """Clusters ``start`` up to ``stop``; negative bounds count from the end."""

        spans = self._resolver().resolve_range(
            self._normalize(start), self._normalize(stop)
        )
        return [span.grapheme for span in spans]

    @overload
    def __getitem__(self, index: int) -> Grapheme: ...

    @overload
    def __getitem__(self, index: slice) -> List[Grapheme]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Grapheme, List[Grapheme]]:
        if isinstance(index, slice):
            if index.step not in (None, 1):
                raise ValueError("GraphemeString slices do not support steps")
            start = 0 if index.start is None else index.start
            stop = len(self) if index.stop is None else index.stop
            return self.slice(start, stop)
        return self.at(index)

    def iterate(self) -> Iterator[Tuple[int, Grapheme]]:
        """Lazily yield ``(ordinal, grapheme)`` pairs in a fresh forward pass."""

        for ordinal, span in self._resolver().spans():
            yield ordinal, span.grapheme

    def __iter__(self) -> Iterator[Grapheme]:
        for _, grapheme in self.iterate():
            yield grapheme

    def __len__(self) -> int:
        return self._resolver().count()

    def index_of(self, needle: Value) -> int:
        """Ordinal where ``needle`` starts on a cluster boundary, or ``-1``."""

        return self._resolver().find(self._encode(needle))

    def __contains__(self, needle: Any) -> bool:
        return self.index_of(needle) != -1

    # -- writes ----------------------------------------------------------

    def set(self, index: int, value: Value) -> None:
        """Replace cluster ``index`` with ``value``.

        All clusters ``value`` segments into are inserted, so the cluster
        count changes unless ``value`` is a single cluster.
        """

        self._buffer = replace_grapheme(
            self._buffer,
            self._normalize(index),
            self._splice_value(value),
            cache=self._cache,
        )

    def __setitem__(self, index: int, value: Value) -> None:
        self.set(index, value)

    def concat(self, other: Value) -> "GraphemeString":
        return self._wrap(
            append(self._buffer, self._splice_value(other)),
            cache=self._cache is not None,
        )

    def __add__(self, other: Any) -> "GraphemeString":
        if not isinstance(other, (str, int, Grapheme, GraphemeString)):
            return NotImplemented
        return self.concat(other)

    def __radd__(self, other: Any) -> "GraphemeString":
        if not isinstance(other, (str, int, Grapheme)):
            return NotImplemented
        return self._wrap(
            prepend(self._buffer, self._splice_value(other)),
            cache=self._cache is not None,
        )

    def __iadd__(self, other: Any) -> "GraphemeString":
        if not isinstance(other, (str, int, Grapheme, GraphemeString)):
            return NotImplemented
        self._buffer = append(self._buffer, self._splice_value(other))
        return self

    # -- conversions -----------------------------------------------------

    def convert(self, encoding: EncodingLike) -> "GraphemeString":
        return self._wrap(self._buffer.convert(encoding), cache=self._cache is not None)

    def to_utf8(self) -> bytes:
        return self._buffer.convert(UTF8).raw

    def to_utf16(self) -> bytes:
        return self._buffer.convert(UTF16).raw

    def to_utf32(self) -> bytes:
        return self._buffer.convert(UTF32).raw

    def __str__(self) -> str:
        return self._buffer.text()

    def __repr__(self) -> str:
        return f"GraphemeString({str(self)!r}, encoding={self.encoding!r})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, GraphemeString):
            return str(self) == str(other)
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    # -- helpers ---------------------------------------------------------

    def _splice_value(self, value: Value) -> SpliceValue:
        if isinstance(value, GraphemeString):
            return value._buffer
        return value

    def _encode(self, value: Value) -> bytes:
        return encode_value(self._splice_value(value), self._buffer.strategy)


__all__ = ["GraphemeString"]
