"""Result writer: render selected rows as plain text, JSON arrays or JSON objects.

Data goes to ``out``; per-row failures go to the log (stderr) and never stop
the stream.
"""
from __future__ import annotations

import logging
from typing import TextIO

import orjson

from csvcut.domain.models import SelectedRow, Selector
from csvcut.infrastructure.source import RowError
from csvcut.services.selection import Row, select

logger = logging.getLogger(__name__)

# Plain output always joins with a comma, whatever the input delimiter was.
OUTPUT_SEPARATOR = ","


class ResultWriter:
    """Write one selected row (or row error) at a time.

    When a header row is given it is run through the selector once and its
    values become the keys of JSON objects.
    """

    def __init__(
        self,
        out: TextIO,
        *,
        json_output: bool,
        selector: Selector,
        header: Row | None = None,
    ) -> None:
        self.out = out
        self.json_output = json_output
        self.headers: SelectedRow | None = (
            select(selector, header) if header is not None else None
        )

    def write(self, item: SelectedRow | RowError) -> bool:
        """Render ``item``; return False when it was reported instead of written."""
        if isinstance(item, RowError):
            logger.error("%s", item)
            return False
        if self.json_output:
            return self.write_json(item)
        self.write_csv(item)
        return True

    def write_csv(self, row: SelectedRow) -> None:
        self.out.write(OUTPUT_SEPARATOR.join(row.values) + "\n")

    def write_json(self, row: SelectedRow) -> bool:
        payload: list[str] | dict[str, str]
        if self.headers is None:
            payload = list(row.values)
        else:
            payload = zip_headers(self.headers, row)
        try:
            line = orjson.dumps(payload).decode("utf-8")
        except orjson.JSONEncodeError as exc:
            logger.error("JSON encoding failed: %s", exc)
            return False
        self.out.write(line + "\n")
        return True


def zip_headers(headers: SelectedRow, row: SelectedRow) -> dict[str, str]:
    """Zip header names with values positionally; a repeated name keeps its last value."""
    mapping: dict[str, str] = {}
    for name, value in zip(headers.values, row.values):
        mapping[name] = value
    return mapping


__all__ = ["OUTPUT_SEPARATOR", "ResultWriter", "zip_headers"]
