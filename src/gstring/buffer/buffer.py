"""Immutable encoded storage shared by resolvers and the splice engine."""

from __future__ import annotations

from dataclasses import dataclass

from gstring.encoding import UTF8, EncodingLike, EncodingStrategy, get_strategy
from gstring.runtime import telemetry


@dataclass(frozen=True, slots=True)
class EncodedBuffer:
    """Code units of a single UTF width held in immutable ``bytes``.

    Build buffers with ``from_text`` or ``from_raw``; those encode or validate,
    and ``splice`` only joins complete code point sequences, so buffers made
    that way are structurally valid. The field constructor is unchecked and
    meant for code that already holds valid units. Every edit returns a new
    buffer, so holders of an older buffer keep seeing the old content.
    """

    raw: bytes = b""
    strategy: EncodingStrategy = UTF8

    @classmethod
    def from_text(cls, text: str, encoding: EncodingLike = UTF8) -> "EncodedBuffer":
        strategy = get_strategy(encoding)
        return cls(raw=strategy.encode(text), strategy=strategy)

    @classmethod
    def from_raw(cls, raw: bytes, encoding: EncodingLike = UTF8) -> "EncodedBuffer":
        """Adopt already-encoded bytes after a full structural check."""

        strategy = get_strategy(encoding)
        data = bytes(raw)
        with telemetry.span(
            "encoding::validate",
            component="encoding",
            metadata={"encoding": strategy.name, "bytes": len(data)},
        ):
            strategy.validate(data)
        return cls(raw=data, strategy=strategy)

    @property
    def encoding(self) -> str:
        return self.strategy.name

    @property
    def unit_count(self) -> int:
        return self.strategy.unit_count(self.raw)

    def view(self) -> memoryview:
        """Read-only view of the code units; edits must go through ``splice``."""

        return self.strategy.units(self.raw)

    def text(self) -> str:
        return self.strategy.decode(self.raw)

    def starts_with(self, needle: bytes, offset: int) -> bool:
        """Code-unit level prefix test of the suffix beginning at unit ``offset``."""

        return self.raw.startswith(needle, offset * self.strategy.unit_width)

    def splice(self, offset: int, length: int, encoded: bytes) -> "EncodedBuffer":
        """Return a buffer with units ``[offset, offset + length)`` replaced by ``encoded``."""

        width = self.strategy.unit_width
        start = offset * width
        stop = (offset + length) * width
        return EncodedBuffer(
            raw=self.raw[:start] + encoded + self.raw[stop:], strategy=self.strategy
        )

    def convert(self, encoding: EncodingLike) -> "EncodedBuffer":
        target = get_strategy(encoding)
        if target is self.strategy:
            return self
        with telemetry.span(
            "encoding::convert",
            component="encoding",
            metadata={"source": self.strategy.name, "target": target.name},
        ):
            return EncodedBuffer(raw=target.encode(self.text()), strategy=target)

    def __len__(self) -> int:
        return self.unit_count


__all__ = ["EncodedBuffer"]
