"""Centralized logging bootstrap for the chanterm runtime.

The TUI owns the terminal while running, so records go to a rotating file
only. Modules log through ``logging.getLogger(__name__)`` under ``chanterm``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "chanterm"
LOG_FILENAME = "chanterm.log"
# Logger that ``logging.captureWarnings`` routes ``warnings.warn`` output to.
WARNINGS_LOGGER = "py.warnings"


@dataclass(frozen=True)
class LoggingRuntime:
    """Resolved runtime logging configuration."""

    level_name: str
    level: int
    file_path: str


_RUNTIME: LoggingRuntime | None = None


def _parse_level(raw: str | None) -> tuple[str, int]:
    normalized = str(raw or "INFO").strip().upper()
    level = getattr(logging, normalized, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    return str(logging.getLevelName(level)), int(level)


def _default_log_path() -> str:
    return str(Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME)


def _make_file_handler(level: int, file_path: str) -> logging.Handler:
    handler = RotatingFileHandler(
        file_path,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def configure(level: str | None = None) -> LoggingRuntime:
    """Send ``chanterm`` records and captured warnings to one rotating log file.

    ``CHANTERM_LOG_LEVEL`` and ``CHANTERM_LOG_FILE`` override ``level`` and the
    platform log directory. Idempotent: repeated calls return the originally
    configured runtime.
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level_name, level_value = _parse_level(os.environ.get("CHANTERM_LOG_LEVEL") or level)
    file_path = os.environ.get("CHANTERM_LOG_FILE") or _default_log_path()
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)

    handler = _make_file_handler(level_value, file_path)
    for name in (APP_NAME, WARNINGS_LOGGER):
        logger = logging.getLogger(name)
        logger.setLevel(level_value)
        logger.propagate = False
        logger.handlers.clear()
        logger.addHandler(handler)
    logging.captureWarnings(True)

    _RUNTIME = LoggingRuntime(level_name=level_name, level=level_value, file_path=file_path)
    return _RUNTIME


def get_runtime() -> LoggingRuntime | None:
    """Return configured logging runtime, if configure() has run."""
    return _RUNTIME
