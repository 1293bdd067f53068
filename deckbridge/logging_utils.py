"""Loguru helpers for consistent console and file logging."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from deckbridge.config.loader import get_logs_dir
from deckbridge.config.schema import LoggingConfig

_SINK_IDS: dict[str, int] = {}

CONSOLE_FORMAT = "<dim>{time:HH:mm:ss.SSS}</dim> | <level>{level: <8}</level> | <level>{message}</level>"


def ensure_rotating_log_file(name: str, level: str = "INFO", log_dir: Path | None = None) -> Path:
    """Ensure a rotating log sink for the given name."""
    log_dir = log_dir or get_logs_dir()
    log_path = log_dir / f"{name}.log"
    if name in _SINK_IDS:
        return log_path
    log_dir.mkdir(parents=True, exist_ok=True)
    sink_id = logger.add(
        str(log_path),
        level=level,
        rotation="10 MB",
        retention="14 days",
        enqueue=True,
        encoding="utf-8",
        backtrace=False,
        diagnose=False,
    )
    _SINK_IDS[name] = sink_id
    return log_path


def configure_logging(config: LoggingConfig, name: str = "deckbridge") -> Path | None:
    """Replace the default stderr sink with one at the configured level.

    Returns the log file path when file logging is enabled.
    """
    logger.remove()
    _SINK_IDS.clear()
    logger.add(sys.stderr, level=config.level, format=CONSOLE_FORMAT)
    if config.file:
        return ensure_rotating_log_file(name, level=config.level)
    return None
