"""Width-parametrized UTF encoding strategies.

A strategy converts between raw storage (``bytes`` holding fixed-width code
units) and abstract code points. UTF-16 and UTF-32 strategies store units in
native byte order so that ``memoryview(raw).cast(view_format)`` addresses
code units directly. Strategies carry no state.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, Iterator, Tuple, Union

from gstring.errors import InvalidEncoding

_NATIVE = "le" if sys.byteorder == "little" else "be"

# (offset, unit_length, code_point), offsets and lengths in code units
DecodedUnit = Tuple[int, int, int]


def _utf8_sequence_length(raw: bytes, offset: int) -> int:
    lead = raw[offset]
    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    if 0x80 <= lead <= 0xBF:
        raise InvalidEncoding("stray continuation byte", encoding="utf-8", offset=offset)
    raise InvalidEncoding(f"invalid lead byte 0x{lead:02x}", encoding="utf-8", offset=offset)


def _utf16_sequence_length(raw: bytes, offset: int) -> int:
    unit = int.from_bytes(raw[offset * 2 : offset * 2 + 2], sys.byteorder)
    if 0xD800 <= unit <= 0xDBFF:
        return 2
    if 0xDC00 <= unit <= 0xDFFF:
        raise InvalidEncoding("unpaired low surrogate", encoding="utf-16", offset=offset)
    return 1


def _utf32_sequence_length(raw: bytes, offset: int) -> int:
    return 1


def _utf8_unit_length(code_point: int) -> int:
    if code_point < 0x80:
        return 1
    if code_point < 0x800:
        return 2
    if code_point < 0x10000:
        return 3
    return 4


def _utf16_unit_length(code_point: int) -> int:
    return 2 if code_point > 0xFFFF else 1


def _utf32_unit_length(code_point: int) -> int:
    return 1


@dataclass(frozen=True, slots=True)
class EncodingStrategy:
    """Decode/encode capability for one UTF width.

    ``unit_width`` is the size of a code unit in bytes. All offsets and
    lengths accepted or returned by a strategy are in code units.
    """

    name: str
    bits: int
    unit_width: int
    codec: str
    view_format: str
    _sequence_length: Callable[[bytes, int], int]
    _unit_length: Callable[[int], int]

    def __repr__(self) -> str:
        return f"EncodingStrategy({self.name!r})"

    def unit_count(self, raw: bytes) -> int:
        return len(raw) // self.unit_width

    def units(self, raw: bytes) -> memoryview:
        """Read-only view of ``raw`` indexed by code unit."""

        view = memoryview(raw).toreadonly()
        if self.unit_width == 1:
            return view
        return view.cast(self.view_format)

    def code_unit_length(self, code_point: int) -> int:
        return self._unit_length(code_point)

    def encode(self, text: str) -> bytes:
        try:
            return text.encode(self.codec)
        except UnicodeEncodeError as exc:
            raise InvalidEncoding(
                f"cannot encode character {exc.object[exc.start]!r} "
                f"at position {exc.start}",
                encoding=self.name,
            ) from exc

    def decode(self, raw: bytes) -> str:
        self._check_length(raw)
        try:
            return raw.decode(self.codec)
        except UnicodeDecodeError as exc:
            raise InvalidEncoding(
                exc.reason, encoding=self.name, offset=exc.start // self.unit_width
            ) from exc

    def validate(self, raw: bytes) -> None:
        """Raise ``InvalidEncoding`` unless ``raw`` is a complete, valid encoding."""

        self.decode(raw)

    def decode_at(self, raw: bytes, offset: int) -> Tuple[int, int]:
        """Decode the code point starting at unit ``offset``.

        Returns ``(code_point, unit_length)``. Truncated or malformed
        sequences raise ``InvalidEncoding``.
        """

        length = self._sequence_length(raw, offset)
        start = offset * self.unit_width
        chunk = raw[start : start + length * self.unit_width]
        if len(chunk) < length * self.unit_width:
            raise InvalidEncoding("truncated sequence", encoding=self.name, offset=offset)
        try:
            char = chunk.decode(self.codec)
        except UnicodeDecodeError as exc:
            raise InvalidEncoding(exc.reason, encoding=self.name, offset=offset) from exc
        code_point = ord(char)
        if 0xD800 <= code_point <= 0xDFFF:
            raise InvalidEncoding("surrogate code point", encoding=self.name, offset=offset)
        return code_point, length

    def iter_code_points(self, raw: bytes, start: int = 0) -> Iterator[DecodedUnit]:
        """Lazily decode ``raw`` from unit ``start``, yielding ``(offset, length, code_point)``."""

        self._check_length(raw)
        end = self.unit_count(raw)
        offset = start
        while offset < end:
            code_point, length = self.decode_at(raw, offset)
            yield offset, length, code_point
            offset += length

    def _check_length(self, raw: bytes) -> None:
        if len(raw) % self.unit_width:
            raise InvalidEncoding(
                f"dangling partial code unit ({len(raw)} bytes)",
                encoding=self.name,
                offset=len(raw) // self.unit_width,
            )


UTF8 = EncodingStrategy(
    name="utf-8",
    bits=8,
    unit_width=1,
    codec="utf-8",
    view_format="B",
    _sequence_length=_utf8_sequence_length,
    _unit_length=_utf8_unit_length,
)

UTF16 = EncodingStrategy(
    name="utf-16",
    bits=16,
    unit_width=2,
    codec=f"utf-16-{_NATIVE}",
    view_format="H",
    _sequence_length=_utf16_sequence_length,
    _unit_length=_utf16_unit_length,
)

UTF32 = EncodingStrategy(
    name="utf-32",
    bits=32,
    unit_width=4,
    codec=f"utf-32-{_NATIVE}",
    view_format="I",
    _sequence_length=_utf32_sequence_length,
    _unit_length=_utf32_unit_length,
)

_BY_KEY = {
    "utf-8": UTF8,
    "utf8": UTF8,
    "utf-16": UTF16,
    "utf16": UTF16,
    "utf-32": UTF32,
    "utf32": UTF32,
    8: UTF8,
    16: UTF16,
    32: UTF32,
}

EncodingLike = Union[EncodingStrategy, str, int]


def get_strategy(value: EncodingLike) -> EncodingStrategy:
    """Resolve a strategy from itself, a name (``"utf-16"``) or a bit width (``16``)."""

    if isinstance(value, EncodingStrategy):
        return value
    key = value.lower().replace("_", "-") if isinstance(value, str) else value
    try:
        return _BY_KEY[key]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Unsupported encoding {value!r}") from exc


__all__ = [
    "DecodedUnit",
    "EncodingLike",
    "EncodingStrategy",
    "UTF8",
    "UTF16",
    "UTF32",
    "get_strategy",
]
