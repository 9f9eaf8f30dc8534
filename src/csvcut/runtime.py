"""Runtime config & bootstrap utilities."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from csvcut.domain.models import DEFAULT_MAX_COLUMN, OverflowPolicy
from csvcut.infrastructure.logging import setup_logging

DEFAULT_CONFIG_PATH = "csvcut.yaml"


@dataclass(slots=True)
class RuntimeConfig:
    """Defaults read from the optional YAML config; CLI flags override them."""

    raw: dict[str, Any]
    path: Path

    @property
    def delimiter(self) -> str:
        return str(self.raw.get("delimiter", ","))

    @property
    def json_output(self) -> bool:
        return bool(self.raw.get("json", False))

    @property
    def header(self) -> bool:
        return bool(self.raw.get("header", False))

    @property
    def flexible(self) -> bool:
        return bool(self.raw.get("flexible", False))

    @property
    def max_column(self) -> int:
        value = self.raw.get("max_column", DEFAULT_MAX_COLUMN)
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(
                f"max_column in {self.path} must be an integer, got {value!r}"
            ) from exc

    @property
    def overflow(self) -> OverflowPolicy:
        return self.raw.get("overflow", "reject")

    @property
    def log_level(self) -> str | None:
        return self.raw.get("log_level")


def load_config(path: Path) -> RuntimeConfig:
    if not path.exists():
        return RuntimeConfig(raw={}, path=path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Config {path} is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping: {path}")
    return RuntimeConfig(raw=data, path=path)


def bootstrap(log_level: str | None = None) -> RuntimeConfig:
    """Load ``.env``, read the config file and configure logging."""
    load_dotenv(override=False)
    cfg_path = Path(os.getenv("CSVCUT_CONFIG", DEFAULT_CONFIG_PATH))
    config = load_config(cfg_path)
    setup_logging(level=log_level or config.log_level)
    return config


__all__ = ["RuntimeConfig", "bootstrap", "load_config"]
