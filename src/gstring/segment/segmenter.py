"""Grapheme cluster segmentation of encoded buffers (UAX #29).

https://www.unicode.org/reports/tr29/

Segmentation walks the buffer forward one code point at a time and decides
for each adjacent pair whether a cluster boundary lies between them. The
state carried across pairs is the Regional Indicator run length plus two
open-sequence markers (emoji ZWJ, Indic conjunct). Nothing is reset at a
boundary, but once the first code point of a cluster is consumed the carried
state matches what a fresh one would hold (RI runs up to parity), so a pass
may start at any known boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

from gstring.encoding import UTF32, EncodingLike, get_strategy

from .models import CodePoint, Grapheme, GraphemeSpan
from .properties import GraphemeBreak as GB
from .properties import IndicConjunct as InCB

_CONTROLS = frozenset({GB.CONTROL, GB.CR, GB.LF})
_EXTENDERS = frozenset({GB.EXTEND, GB.ZWJ, GB.SPACING_MARK})
_PICT_NONE = 0
_PICT_OPEN = 1  # ExtPict Extend*
_PICT_ZWJ = 2  # ExtPict Extend* ZWJ
_CONJUNCT_NONE = 0
_CONJUNCT_OPEN = 1  # Consonant [Extend Linker]*, no Linker yet
_CONJUNCT_LINKED = 2  # Consonant [Extend Linker]* Linker [Extend Linker]*


@dataclass(slots=True)
class BreakState:
    """Context carried from the code points before the pair being tested."""

    ri_run: int = 0
    pictographic: int = _PICT_NONE
    conjunct: int = _CONJUNCT_NONE

    def advance(self, current: CodePoint) -> None:
        if current.break_class is GB.REGIONAL_INDICATOR:
            self.ri_run += 1
        else:
            self.ri_run = 0

        if current.pictographic:
            self.pictographic = _PICT_OPEN
        elif self.pictographic == _PICT_OPEN and current.break_class is GB.EXTEND:
            pass
        elif self.pictographic == _PICT_OPEN and current.break_class is GB.ZWJ:
            self.pictographic = _PICT_ZWJ
        else:
            self.pictographic = _PICT_NONE

        if current.conjunct is InCB.CONSONANT:
            self.conjunct = _CONJUNCT_OPEN
        elif self.conjunct != _CONJUNCT_NONE and current.conjunct is InCB.LINKER:
            self.conjunct = _CONJUNCT_LINKED
        elif self.conjunct != _CONJUNCT_NONE and current.conjunct is InCB.EXTEND:
            pass
        else:
            self.conjunct = _CONJUNCT_NONE


def is_boundary(previous: CodePoint, current: CodePoint, state: BreakState) -> bool:
    # pylint: disable=too-many-return-statements
    """Return whether a cluster boundary separates ``previous`` and ``current``.

    ``state`` must describe the sequence up to and including ``previous``.
    """

    prev, curr = previous.break_class, current.break_class

    # GB3: CR x LF
    if prev is GB.CR and curr is GB.LF:
        return False
    # GB4, GB5
    if prev in _CONTROLS or curr in _CONTROLS:
        return True
    # GB6-GB8: Hangul syllable sequences
    if prev is GB.L and curr in (GB.L, GB.V, GB.LV, GB.LVT):
        return False
    if prev in (GB.LV, GB.V) and curr in (GB.V, GB.T):
        return False
    if prev in (GB.LVT, GB.T) and curr is GB.T:
        return False
    # GB9, GB9a, GB9b
    if curr in _EXTENDERS:
        return False
    if prev is GB.PREPEND:
        return False
    # GB9c: Indic conjunct
    if current.conjunct is InCB.CONSONANT and state.conjunct == _CONJUNCT_LINKED:
        return False
    # GB11: ExtPict Extend* ZWJ x ExtPict
    if prev is GB.ZWJ and current.pictographic and state.pictographic == _PICT_ZWJ:
        return False
    # GB12, GB13: pair up Regional Indicators
    if prev is GB.REGIONAL_INDICATOR and curr is GB.REGIONAL_INDICATOR:
        return state.ri_run % 2 == 0
    # GB999
    return True


def iter_code_points(
    raw: bytes, encoding: EncodingLike = "utf-8", start: int = 0
) -> Iterator[CodePoint]:
    """Decode ``raw`` lazily into classified code points."""

    strategy = get_strategy(encoding)
    for offset, length, value in strategy.iter_code_points(raw, start):
        yield CodePoint.decoded(value, offset, length)


def segment(
    raw: bytes, encoding: EncodingLike = "utf-8", start: int = 0
) -> Iterator[GraphemeSpan]:
    """Yield the grapheme clusters of ``raw`` in order.

    ``start`` is a code-unit offset that must be a cluster boundary. Each call
    returns an independent generator. Malformed input raises
    ``InvalidEncoding`` when the generator reaches it.
    """

    state = BreakState()
    values: List[int] = []
    cluster_start = start
    previous: Optional[CodePoint] = None

    for current in iter_code_points(raw, encoding, start):
        if previous is not None and is_boundary(previous, current, state):
            yield GraphemeSpan(
                offset=cluster_start,
                length=current.offset - cluster_start,
                grapheme=Grapheme(tuple(values)),
            )
            values = []
            cluster_start = current.offset
        values.append(current.value)
        state.advance(current)
        previous = current

    if previous is not None:
        yield GraphemeSpan(
            offset=cluster_start,
            length=previous.end - cluster_start,
            grapheme=Grapheme(tuple(values)),
        )


def boundaries(raw: bytes, encoding: EncodingLike = "utf-8") -> Iterator[int]:
    """Yield every cluster start offset followed by the end offset of ``raw``."""

    strategy = get_strategy(encoding)
    yield 0
    for span in segment(raw, strategy):
        yield span.end


def split(text: str) -> List[str]:
    """Split a Python string into grapheme cluster strings."""

    return [span.grapheme.text for span in segment(UTF32.encode(text), UTF32)]


__all__ = ["BreakState", "boundaries", "is_boundary", "iter_code_points", "segment", "split"]
