"""Row source: tokenize delimited text from a stream into RecordRows.

Tokenization and quoting belong to the stdlib ``csv`` module. This layer adds
the header split, blank-line skipping and the field-count consistency check,
and turns per-record failures into ``RowError`` values so the stream keeps
going.
"""
from __future__ import annotations

import csv
import logging
import sys
from collections.abc import Iterator
from contextlib import suppress
from dataclasses import dataclass
from typing import TextIO

from csvcut.services.selection import RecordRow

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RowError:
    """A record that could not be turned into a row; reported, then skipped."""

    record: int
    line: int
    message: str

    def __str__(self) -> str:
        return f"CSV error: record {self.record} (line {self.line}): {self.message}"


@dataclass(slots=True)
class RowInput:
    header: RecordRow | None
    rows: Iterator[RecordRow | RowError]


def ensure_max_csv_field_size(target: int | None = None) -> None:
    """Raise the csv parser field size limit so long fields are not rejected.

    Silent if the platform refuses (C long narrower than sys.maxsize).
    """
    with suppress(OverflowError):
        csv.field_size_limit(target or sys.maxsize)


def _undecodable(fields: list[str]) -> bool:
    # streams opened with errors="surrogateescape" carry bad bytes as lone surrogates
    try:
        for field in fields:
            field.encode("utf-8")
    except UnicodeEncodeError:
        return True
    return False


def _records(reader) -> Iterator[tuple[int, list[str] | csv.Error]]:
    while True:
        try:
            fields = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            yield reader.line_num, exc
            continue
        if not fields:
            continue
        yield reader.line_num, fields


def read_rows(
    stream: TextIO,
    *,
    delimiter: str = ",",
    header: bool = False,
    flexible: bool = False,
) -> RowInput:
    """Open ``stream`` as delimited text.

    With ``header`` the first record is split off as the header row. Unless
    ``flexible``, every record must have as many fields as the first one read.
    """
    ensure_max_csv_field_size()
    reader = csv.reader(stream, delimiter=delimiter, strict=True)
    records = _records(reader)
    expected: list[int] = []
    header_row: RecordRow | None = None

    if header:
        for line, first in records:
            if isinstance(first, csv.Error):
                logger.warning("Header could not be read (line %d): %s", line, first)
                break
            if _undecodable(first):
                logger.warning("Header could not be read (line %d): invalid UTF-8", line)
                break
            expected.append(len(first))
            header_row = RecordRow(first, line)
            break

    def rows() -> Iterator[RecordRow | RowError]:
        count = 1 if header_row is not None else 0
        for line, fields in records:
            count += 1
            if isinstance(fields, csv.Error):
                yield RowError(count, line, str(fields))
                continue
            if _undecodable(fields):
                yield RowError(count, line, "invalid UTF-8")
                continue
            if not flexible:
                if not expected:
                    expected.append(len(fields))
                elif len(fields) != expected[0]:
                    yield RowError(
                        count,
                        line,
                        f"found record with {len(fields)} fields, "
                        f"but the previous record has {expected[0]} fields",
                    )
                    continue
            yield RecordRow(fields, line)

    return RowInput(header=header_row, rows=rows())


__all__ = ["RowError", "RowInput", "ensure_max_csv_field_size", "read_rows"]
