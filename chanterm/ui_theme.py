"""UI theme definitions and selection helpers.

Themes are ANSI palettes for pane chrome, the channel sidebar, chat messages,
and the help overlay.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    border: str
    title: str
    reset: str
    notification: str
    presence_online: str
    presence_offline: str
    channel_glyph: str
    message_time: str
    message_user: str
    message_self: str
    mode_command: str
    mode_insert: str
    mode_search: str
    status: str
    help_heading: str
    help_key: str
    help_dim: str


DEFAULT_THEME = UITheme(
    name="default",
    border="\033[2m",
    title="\033[1m",
    reset="\033[0m",
    notification="\033[1;38;5;214m",
    presence_online="\033[38;5;42m",
    presence_offline="\033[2;38;5;250m",
    channel_glyph="\033[38;5;44m",
    message_time="\033[2;38;5;250m",
    message_user="\033[1;38;5;110m",
    message_self="\033[1;38;5;229m",
    mode_command="\033[1;38;5;81m",
    mode_insert="\033[1;38;5;42m",
    mode_search="\033[1;38;5;214m",
    status="\033[38;5;203m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    border="\033[2;38;5;31m",
    title="\033[1;38;5;45m",
    reset="\033[0m",
    notification="\033[1;38;5;221m",
    presence_online="\033[38;5;49m",
    presence_offline="\033[2;38;5;110m",
    channel_glyph="\033[38;5;39m",
    message_time="\033[2;38;5;110m",
    message_user="\033[1;38;5;117m",
    message_self="\033[1;38;5;153m",
    mode_command="\033[1;38;5;45m",
    mode_insert="\033[1;38;5;49m",
    mode_search="\033[1;38;5;221m",
    status="\033[38;5;210m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    return tuple(_THEMES)


def normalize_theme_name(name: str | None) -> str:
    """Map arbitrary user input to a known theme name, defaulting to ``default``."""
    if not name:
        return DEFAULT_THEME.name
    candidate = name.strip().lower()
    return candidate if candidate in _THEMES else DEFAULT_THEME.name


def resolve_theme(name: str | None) -> UITheme:
    return _THEMES[normalize_theme_name(name)]
