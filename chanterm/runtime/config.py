"""JSON config loading.

Holds the workspace path, sidebar/chat grid widths, theme, poll interval,
and log level. All access is defensive: malformed or missing config falls back
safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..layout import DEFAULT_MAIN_UNITS, DEFAULT_SIDEBAR_UNITS, clamp_units

logger = logging.getLogger(__name__)

APP_NAME = "chanterm"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LEGACY_CONFIG_PATH = Path.home() / ".config" / "chanterm.json"
CONFIG_PATH = DEFAULT_CONFIG_PATH
DEFAULT_POLL_INTERVAL = 1.0


@dataclass(frozen=True)
class ClientConfig:
    """Validated settings with defaults applied."""

    workspace: Path | None = None
    sidebar_width: int = DEFAULT_SIDEBAR_UNITS
    main_width: int = DEFAULT_MAIN_UNITS
    theme: str | None = None
    poll_interval: float = DEFAULT_POLL_INTERVAL
    log_level: str | None = None


def _resolve_config_path(config_path: Path | None = None) -> Path:
    """Pick the file to read: explicit path, current default, then the legacy file."""
    if config_path is not None:
        return config_path
    if not CONFIG_PATH.exists() and CONFIG_PATH == DEFAULT_CONFIG_PATH and LEGACY_CONFIG_PATH.exists():
        return LEGACY_CONFIG_PATH
    return CONFIG_PATH


def load_config(config_path: Path | None = None) -> dict[str, object]:
    """Read the raw config object.

    A missing, unreadable, or malformed file, or one whose top level is not a
    JSON object, reads as ``{}``.
    """
    path = _resolve_config_path(config_path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_str(value: object) -> str | None:
    text = value.strip() if isinstance(value, str) else ""
    return text or None


def _coerce_poll_interval(value: object) -> float:
    """Accept positive numbers only; booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_POLL_INTERVAL
    if value <= 0:
        return DEFAULT_POLL_INTERVAL
    return float(value)


def load_client_config(config_path: Path | None = None) -> ClientConfig:
    """Read config and normalize every field.

    A relative ``workspace`` is resolved against the config file's directory.
    """
    data = load_config(config_path)
    workspace = None
    raw_workspace = _coerce_str(data.get("workspace"))
    if raw_workspace is not None:
        workspace = Path(raw_workspace).expanduser()
        if not workspace.is_absolute():
            workspace = _resolve_config_path(config_path).parent / workspace

    return ClientConfig(
        workspace=workspace,
        sidebar_width=clamp_units(data.get("sidebar_width"), DEFAULT_SIDEBAR_UNITS),
        main_width=clamp_units(data.get("main_width"), DEFAULT_MAIN_UNITS),
        theme=_coerce_str(data.get("theme")),
        poll_interval=_coerce_poll_interval(data.get("poll_interval")),
        log_level=_coerce_str(data.get("log_level")),
    )

