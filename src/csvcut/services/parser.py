"""Column range grammar parser (1-based user expressions to 0-based ranges).

Grammar, with ordered alternation inside ``range``::

    selector   := range (',' range)*
    range      := interval | right_open | left_open | single
    natural    := digit+
    interval   := natural '-' natural
    right_open := '-' natural
    left_open  := natural '-'
    single     := natural

``interval`` must be tried before ``left_open`` so ``4-8`` is one interval and
not ``4-`` followed by a stray ``8``. Every alternative backtracks on failure,
including a natural that is zero or exceeds ``max_column``.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from csvcut.domain.models import (
    DEFAULT_MAX_COLUMN,
    Interval,
    LeftOpen,
    OverflowPolicy,
    RangeSpec,
    RightOpen,
    Selector,
    Single,
)

_DIGITS = "0123456789"


class ParseError(ValueError):
    """Selector text could not be parsed completely.

    ``parsed`` and ``remainder`` are set when a valid prefix was recognized but
    input was left over.
    """

    def __init__(
        self,
        message: str,
        *,
        position: int = 0,
        parsed: Selector | None = None,
        remainder: str | None = None,
    ) -> None:
        super().__init__(message)
        self.position = position
        self.parsed = parsed
        self.remainder = remainder


@dataclass(slots=True)
class _Failure:
    position: int
    reason: str


class _Parser:
    def __init__(self, text: str, max_column: int, overflow: OverflowPolicy) -> None:
        if max_column < 1:
            raise ValueError("max_column must be >= 1")
        self.text = text
        self.max_column = max_column
        self.overflow = overflow
        self.furthest = _Failure(-1, "expected a column number")

    def _fail(self, pos: int, reason: str) -> None:
        if pos > self.furthest.position:
            self.furthest = _Failure(pos, reason)

    def _tag(self, pos: int, char: str) -> int | None:
        if self.text.startswith(char, pos):
            return pos + len(char)
        self._fail(pos, f"expected {char!r}")
        return None

    def natural(self, pos: int) -> tuple[int, int] | None:
        """Match a positive decimal number, returning (zero-based index, next pos)."""
        end = pos
        while end < len(self.text) and self.text[end] in _DIGITS:
            end += 1
        if end == pos:
            self._fail(pos, "expected a column number")
            return None
        digits = self.text[pos:end].lstrip("0")
        if not digits:
            self._fail(pos, "column numbers start at 1")
            return None
        # long digit runs are overflow; never hand them to int()
        if len(digits) > len(str(self.max_column)) or int(digits) > self.max_column:
            if self.overflow != "saturate":
                self._fail(pos, f"column {digits} exceeds maximum {self.max_column}")
                return None
            return self.max_column - 1, end
        value = int(digits)
        return value - 1, end

    def interval(self, pos: int) -> tuple[RangeSpec, int] | None:
        left = self.natural(pos)
        if left is None:
            return None
        dash = self._tag(left[1], "-")
        if dash is None:
            return None
        right = self.natural(dash)
        if right is None:
            return None
        return Interval(start=left[0], end=right[0]), right[1]

    def right_open(self, pos: int) -> tuple[RangeSpec, int] | None:
        dash = self._tag(pos, "-")
        if dash is None:
            return None
        limit = self.natural(dash)
        if limit is None:
            return None
        return RightOpen(end=limit[0]), limit[1]

    def left_open(self, pos: int) -> tuple[RangeSpec, int] | None:
        limit = self.natural(pos)
        if limit is None:
            return None
        dash = self._tag(limit[1], "-")
        if dash is None:
            return None
        return LeftOpen(start=limit[0]), dash

    def single(self, pos: int) -> tuple[RangeSpec, int] | None:
        value = self.natural(pos)
        if value is None:
            return None
        return Single(index=value[0]), value[1]

    def range(self, pos: int) -> tuple[RangeSpec, int] | None:
        alternatives: tuple[Callable[[int], tuple[RangeSpec, int] | None], ...] = (
            self.interval,
            self.right_open,
            self.left_open,
            self.single,
        )
        for alt in alternatives:
            hit = alt(pos)
            if hit is not None:
                return hit
        return None

    def selector(self) -> tuple[Selector, int] | None:
        first = self.range(0)
        if first is None:
            return None
        ranges = [first[0]]
        pos = first[1]
        while True:
            comma = self._tag(pos, ",")
            if comma is None:
                break
            nxt = self.range(comma)
            if nxt is None:
                # leave the dangling comma unconsumed
                break
            ranges.append(nxt[0])
            pos = nxt[1]
        return Selector(ranges=tuple(ranges)), pos

    def describe_failure(self) -> str:
        pos = max(self.furthest.position, 0)
        near = self.text[pos : pos + 10] or "end of input"
        return f"{self.furthest.reason} at position {pos + 1} (near {near!r})"


def parse_range(
    text: str,
    *,
    max_column: int = DEFAULT_MAX_COLUMN,
    overflow: OverflowPolicy = "reject",
) -> tuple[RangeSpec, str]:
    """Parse a single range from the start of ``text``; return it and the rest."""
    parser = _Parser(text, max_column, overflow)
    hit = parser.range(0)
    if hit is None:
        raise ParseError(f"Invalid range {text!r}: {parser.describe_failure()}")
    return hit[0], text[hit[1] :]


def parse_selector_prefix(
    text: str,
    *,
    max_column: int = DEFAULT_MAX_COLUMN,
    overflow: OverflowPolicy = "reject",
) -> tuple[Selector, str]:
    """Parse the longest valid selector prefix; return it and the unconsumed rest.

    Raises ``ParseError`` only when not even one range can be recognized.
    """
    if not text:
        raise ParseError("Invalid target: empty selector")
    parser = _Parser(text, max_column, overflow)
    hit = parser.selector()
    if hit is None:
        raise ParseError(
            f"Invalid target {text!r}: {parser.describe_failure()}",
            position=max(parser.furthest.position, 0),
        )
    selector, pos = hit
    return selector, text[pos:]


def parse_selector(
    text: str,
    *,
    max_column: int = DEFAULT_MAX_COLUMN,
    overflow: OverflowPolicy = "reject",
) -> Selector:
    """Parse a full column selector such as ``1,3-5,-2,7-``.

    The whole string must be consumed; a valid prefix followed by leftover
    input raises ``ParseError`` with ``parsed`` and ``remainder`` populated.
    """
    selector, remainder = parse_selector_prefix(
        text, max_column=max_column, overflow=overflow
    )
    if remainder:
        position = len(text) - len(remainder)
        raise ParseError(
            f"Invalid target, parsed as {selector} but remaining {remainder!r}",
            position=position,
            parsed=selector,
            remainder=remainder,
        )
    return selector


__all__ = ["ParseError", "parse_range", "parse_selector", "parse_selector_prefix"]
