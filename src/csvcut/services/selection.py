"""Selection engine: apply a parsed selector to one row.

Pure helper with no side effects; each row is selected independently so
unbounded streams never accumulate state.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from csvcut.domain.models import SelectedRow, Selector


class Row(Protocol):
    """Anything indexable by zero-based position with a known length."""

    def __len__(self) -> int: ...

    def get(self, index: int) -> str | None: ...


class RecordRow:
    """Row adapter over a list of fields (data record or header record)."""

    __slots__ = ("fields", "line")

    def __init__(self, fields: Sequence[str], line: int | None = None) -> None:
        self.fields = fields
        self.line = line

    def __len__(self) -> int:
        return len(self.fields)

    def get(self, index: int) -> str | None:
        if 0 <= index < len(self.fields):
            return self.fields[index]
        return None

    def __repr__(self) -> str:
        return f"RecordRow({list(self.fields)!r}, line={self.line})"


def select(selector: Selector, row: Row) -> SelectedRow:
    """Cut the selected portions out of ``row``.

    Ranges are replayed in declared order; overlapping ranges repeat values
    and positions past the end of the row are skipped.
    """
    size = len(row)
    out: list[str] = []
    for rng in selector.ranges:
        start, stop = rng.bounds()
        stop = size if stop is None else min(stop, size)
        for idx in range(start, stop):
            value = row.get(idx)
            if value is not None:
                out.append(value)
    return SelectedRow(tuple(out))


__all__ = ["RecordRow", "Row", "select"]
