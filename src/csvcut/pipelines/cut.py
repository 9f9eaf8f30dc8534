"""Cut pipeline: pull a row, select, write, repeat.

The selector is parsed before the first row is read, so a bad selector aborts
with nothing processed. Row-level failures are counted and skipped.
"""

from __future__ import annotations

import logging
from typing import TextIO

from csvcut.domain.models import CutOptions, CutStats
from csvcut.infrastructure.sink import ResultWriter
from csvcut.infrastructure.source import RowError, read_rows
from csvcut.services.parser import parse_selector
from csvcut.services.selection import select

logger = logging.getLogger(__name__)


def run_cut(options: CutOptions, stream: TextIO, out: TextIO) -> CutStats:
    selector = parse_selector(
        options.target, max_column=options.max_column, overflow=options.overflow
    )
    logger.debug("Selector parsed: %s", selector.model_dump()["ranges"])
    source = read_rows(
        stream,
        delimiter=options.delimiter,
        header=options.header,
        flexible=options.flexible,
    )
    writer = ResultWriter(
        out,
        json_output=options.json_output,
        selector=selector,
        header=source.header,
    )
    stats = CutStats()
    for item in source.rows:
        stats.rows_read += 1
        result = item if isinstance(item, RowError) else select(selector, item)
        if writer.write(result):
            stats.rows_written += 1
        else:
            stats.rows_failed += 1
    logger.debug(
        "rows read=%d written=%d failed=%d",
        stats.rows_read,
        stats.rows_written,
        stats.rows_failed,
    )
    return stats


__all__ = ["run_cut"]
