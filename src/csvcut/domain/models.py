"""Domain models (Pydantic) for column selection.

Range descriptors are parsed once per invocation and never mutated, so every
model here is frozen. Indices are zero-based: ``Single(index=0)`` is what the
user typed as column ``1``.
"""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

OverflowPolicy = Literal["reject", "saturate"]

DEFAULT_MAX_COLUMN = 255


# -------------------- Range descriptors -------------------- #


class _RangeBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    def bounds(self) -> tuple[int, int | None]:  # pragma: no cover - overridden
        raise NotImplementedError


class Single(_RangeBase):
    """Exactly one column. e.g. ``3``"""

    kind: Literal["single"] = "single"
    index: int = Field(ge=0)

    def bounds(self) -> tuple[int, int | None]:
        return self.index, self.index + 1

    def __str__(self) -> str:
        return f"{self.index + 1}"


class LeftOpen(_RangeBase):
    """All columns from ``start`` to the end of the row. e.g. ``4-``"""

    kind: Literal["left_open"] = "left_open"
    start: int = Field(ge=0)

    def bounds(self) -> tuple[int, int | None]:
        return self.start, None

    def __str__(self) -> str:
        return f"{self.start + 1}-"


class RightOpen(_RangeBase):
    """All columns from the first up to and including ``end``. e.g. ``-5``"""

    kind: Literal["right_open"] = "right_open"
    end: int = Field(ge=0)

    def bounds(self) -> tuple[int, int | None]:
        return 0, self.end + 1

    def __str__(self) -> str:
        return f"-{self.end + 1}"


class Interval(_RangeBase):
    """Inclusive interval. e.g. ``7-9``

    ``start > end`` is allowed and selects nothing.
    """

    kind: Literal["interval"] = "interval"
    start: int = Field(ge=0)
    end: int = Field(ge=0)

    def bounds(self) -> tuple[int, int | None]:
        return self.start, self.end + 1

    def __str__(self) -> str:
        return f"{self.start + 1}-{self.end + 1}"


RangeSpec = Annotated[
    Single | LeftOpen | RightOpen | Interval, Field(discriminator="kind")
]


class Selector(BaseModel):
    """Ordered range descriptors; order (and repetition) dictates output columns."""

    model_config = ConfigDict(frozen=True)

    ranges: tuple[RangeSpec, ...] = ()

    def __str__(self) -> str:
        return ",".join(str(r) for r in self.ranges)


# -------------------- Selection output -------------------- #


@dataclass(frozen=True, slots=True)
class SelectedRow:
    """Field values picked out of one row, in selector order."""

    values: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)


# -------------------- Invocation settings -------------------- #


class CutOptions(BaseModel):
    """Validated settings for one cut invocation (CLI flags merged over config)."""

    target: str
    delimiter: str = ","
    json_output: bool = False
    header: bool = False
    flexible: bool = False
    max_column: int = Field(default=DEFAULT_MAX_COLUMN, ge=1)
    overflow: OverflowPolicy = "reject"

    @field_validator("delimiter")
    @classmethod
    def _one_char_delimiter(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError(f"Delimiter expects exactly 1 character, got {value!r}")
        if value in {"\r", "\n", '"'}:
            raise ValueError(f"Delimiter {value!r} cannot be used")
        return value


class CutStats(BaseModel):
    """Counters for one pass over the input stream."""

    rows_read: int = 0
    rows_written: int = 0
    rows_failed: int = 0


__all__ = [
    "DEFAULT_MAX_COLUMN",
    "CutOptions",
    "CutStats",
    "Interval",
    "LeftOpen",
    "OverflowPolicy",
    "RangeSpec",
    "RightOpen",
    "SelectedRow",
    "Selector",
    "Single",
]
