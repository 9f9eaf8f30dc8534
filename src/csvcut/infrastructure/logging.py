"""Logging helpers for csvcut.

Features:
    * RichHandler based console logging (color, tracebacks) on stderr, so
      stdout stays free for selected rows
    * Optional JSON logging mode (machine ingest), also on stderr
"""

from __future__ import annotations

import json
import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

_INITIALIZED = False
_JSON_MODE = False
_DEFAULT_LEVEL = "WARNING"


class _JsonHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            data = {
                "level": record.levelname,
                "name": record.name,
                "message": record.getMessage(),
            }
            if record.exc_info:
                data["exc_info"] = logging.Formatter().formatException(record.exc_info)
            print(json.dumps(data, ensure_ascii=False), file=sys.stderr)
        except Exception:  # pragma: no cover
            self.handleError(record)


def setup_logging(level: str | None = None, json_mode: bool | None = None) -> None:
    """Configure the root logger once per process.

    Level comes from ``level``, else ``LOG_LEVEL``, else WARNING. JSON mode comes
    from ``json_mode``, else ``CSVCUT_LOG_JSON``.
    """
    global _INITIALIZED, _JSON_MODE
    if _INITIALIZED:
        return
    if json_mode is None:
        json_mode = os.getenv("CSVCUT_LOG_JSON", "").lower() in {"1", "true", "yes"}
    _JSON_MODE = json_mode
    lvl_name = (level or os.getenv("LOG_LEVEL") or _DEFAULT_LEVEL).upper()
    lvl = getattr(logging, lvl_name, None)
    if not isinstance(lvl, int):
        lvl = logging.WARNING
    handler: logging.Handler
    if _JSON_MODE:
        handler = _JsonHandler()
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            show_time=False,
            show_path=False,
        )
    logging.basicConfig(level=lvl, handlers=[handler], force=True, format="%(message)s")
    _INITIALIZED = True


__all__ = ["setup_logging"]
