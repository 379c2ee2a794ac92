"""Structural edits that produce new encoded buffers."""

from __future__ import annotations

from typing import Optional, Union

from gstring.encoding import EncodingStrategy
from gstring.errors import InvalidEncoding
from gstring.runtime import telemetry
from gstring.segment import Grapheme

from .buffer import EncodedBuffer
from .cache import BoundaryCache
from .resolver import OffsetResolver

SpliceValue = Union[str, int, Grapheme, EncodedBuffer]


def encode_value(value: SpliceValue, strategy: EncodingStrategy) -> bytes:
    """Encode text, a code point, a grapheme or another buffer into ``strategy``."""

    if isinstance(value, EncodedBuffer):
        if value.strategy is strategy:
            return value.raw
        return strategy.encode(value.text())
    if isinstance(value, Grapheme):
        return strategy.encode(value.text)
    if isinstance(value, str):
        return strategy.encode(value)
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value <= 0x10FFFF:
            raise InvalidEncoding(
                f"code point 0x{value:x} out of range", encoding=strategy.name
            )
        return strategy.encode(chr(value))
    raise TypeError(f"Cannot encode value of type {type(value).__name__}")


def replace_grapheme(
    buffer: EncodedBuffer,
    index: int,
    replacement: SpliceValue,
    *,
    cache: Optional[BoundaryCache] = None,
) -> EncodedBuffer:
    """Return a new buffer with cluster ``index`` replaced by ``replacement``.

    The replacement is spliced in whole: text that segments into several
    clusters grows the cluster count, empty text removes the cluster.
    ``buffer`` itself is never modified.
    """

    with telemetry.span(
        "buffer::replace",
        component="buffer",
        metadata={"index": index, "encoding": buffer.encoding},
    ) as handle:
        offset, length = OffsetResolver(buffer, cache=cache).resolve(index)
        encoded = encode_value(replacement, buffer.strategy)
        updated = buffer.splice(offset, length, encoded)
        handle.add_metadata("delta_units", updated.unit_count - buffer.unit_count)
        return updated


def append(buffer: EncodedBuffer, value: SpliceValue) -> EncodedBuffer:
    """Return ``buffer`` followed by ``value``.

    Leading combining marks in ``value`` join the last cluster of ``buffer``.
    """

    with telemetry.span(
        "buffer::append", component="buffer", metadata={"encoding": buffer.encoding}
    ):
        encoded = encode_value(value, buffer.strategy)
        return buffer.splice(buffer.unit_count, 0, encoded)


def prepend(buffer: EncodedBuffer, value: SpliceValue) -> EncodedBuffer:
    """Return ``value`` followed by ``buffer``."""

    with telemetry.span(
        "buffer::prepend", component="buffer", metadata={"encoding": buffer.encoding}
    ):
        encoded = encode_value(value, buffer.strategy)
        return buffer.splice(0, 0, encoded)


__all__ = ["SpliceValue", "append", "encode_value", "prepend", "replace_grapheme"]
