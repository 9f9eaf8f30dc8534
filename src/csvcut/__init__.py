"""csvcut root package (range grammar, selection engine, csv/json I/O, CLI)."""

__all__ = [
    "cli",
]
