"""Value types produced by grapheme segmentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Tuple, Union, overload

from .properties import (
    GraphemeBreak,
    IndicConjunct,
    classify,
    indic_conjunct,
    is_extended_pictographic,
)


@dataclass(frozen=True, slots=True)
class CodePoint:
    """One decoded scalar value and where it sits in its buffer (in code units)."""

    value: int
    offset: int
    length: int
    break_class: GraphemeBreak
    pictographic: bool = False
    conjunct: IndicConjunct = IndicConjunct.NONE

    @classmethod
    def decoded(cls, value: int, offset: int, length: int) -> "CodePoint":
        return cls(
            value=value,
            offset=offset,
            length=length,
            break_class=classify(value),
            pictographic=is_extended_pictographic(value),
            conjunct=indic_conjunct(value),
        )

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def char(self) -> str:
        return chr(self.value)


@dataclass(frozen=True, slots=True, eq=False)
class Grapheme:
    """An ordered, non-empty run of code points shown as one visible character.

    Compares equal to another ``Grapheme`` with the same code points and to a
    ``str`` holding the same characters, independent of any encoding.
    Indexing yields single code points as one-character strings.
    """

    code_points: Tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "code_points", tuple(self.code_points))
        if not self.code_points:
            raise ValueError("Grapheme requires at least one code point")

    @classmethod
    def of(cls, value: Union[str, int, "Grapheme", Iterable[int]]) -> "Grapheme":
        """Build a grapheme from text, a single code point or code point values.

        No segmentation happens here: ``Grapheme.of("ab")`` holds both code
        points even though they would form two clusters in a buffer.
        """

        if isinstance(value, Grapheme):
            return value
        if isinstance(value, str):
            return cls(tuple(ord(char) for char in value))
        if isinstance(value, int):
            return cls((value,))
        return cls(tuple(value))

    @property
    def text(self) -> str:
        return "".join(map(chr, self.code_points))

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Grapheme({self.text!r})"

    def __len__(self) -> int:
        return len(self.code_points)

    def __iter__(self) -> Iterator[str]:
        return (chr(value) for value in self.code_points)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> str: ...

    def __getitem__(self, index: Union[int, slice]) -> str:
        if isinstance(index, slice):
            return "".join(map(chr, self.code_points[index]))
        return chr(self.code_points[index])

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Grapheme):
            return self.code_points == other.code_points
        if isinstance(other, str):
            return self.text == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.text)


@dataclass(frozen=True, slots=True)
class GraphemeSpan:
    """A grapheme together with its storage offset and length in code units."""

    offset: int
    length: int
    grapheme: Grapheme

    @property
    def end(self) -> int:
        return self.offset + self.length

    def as_tuple(self) -> Tuple[int, int]:
        return (self.offset, self.length)


__all__ = ["CodePoint", "Grapheme", "GraphemeSpan"]
