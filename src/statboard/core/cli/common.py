"""Shared setup logic for CLI commands."""

from __future__ import annotations

from pathlib import Path

from statboard.core.config import Config
from statboard.core.utils.logging import setup_logging

STATBOARD_DIR = Path.home() / ".statboard"
CONFIG_PATH = STATBOARD_DIR / "config.yaml"


def load_config(config_path: str | Path = CONFIG_PATH) -> Config:
    """Load config from ``config_path`` (missing file means defaults + env)."""
    return Config(config_file=str(config_path))


def configure_logging(config: Config, level: str | None = None) -> None:
    setup_logging(
        level=level or config.get("log.level", "WARNING"),
        log_file=config.get("log.file") or None,
    )
