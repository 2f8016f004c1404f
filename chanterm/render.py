"""Rendering engine for the sidebar/chat terminal view.

Composes full ANSI frames from a ``RenderContext`` snapshot and writes them
with a single ``os.write``. Nothing here mutates runtime state.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

from .ansi import clip_ansi_line, display_width, fit_ansi_line
from .channels import ICON_NOTIFICATION, ICON_OFFLINE, ICON_ONLINE, VisibleEntry
from .layout import INPUT_HEIGHT, ScreenLayout
from .ui_theme import DEFAULT_THEME, UITheme

MODE_COMMAND = "command"
MODE_INSERT = "insert"
MODE_SEARCH = "search"

MODE_LABELS = {
    MODE_COMMAND: "NORMAL",
    MODE_INSERT: "INSERT",
    MODE_SEARCH: "SEARCH",
}

HELP_ROWS: tuple[tuple[str, str], ...] = (
    ("", "CHANNELS"),
    ("j/k Up/Down", "move selection"),
    ("g/G", "first/last channel"),
    ("/", "search channels"),
    ("click/wheel", "select/scroll"),
    ("", "CHAT"),
    ("PgUp/PgDn", "scroll messages"),
    ("i", "write a message"),
    ("Enter", "send"),
    ("Esc", "back to normal mode"),
    ("", "GENERAL"),
    ("?", "toggle help"),
    ("q", "quit"),
)


@dataclass
class RenderContext:
    layout: ScreenLayout
    entries: list[VisibleEntry]
    chat_rows: list[str]
    chat_title: str = ""
    mode: str = MODE_COMMAND
    input_text: str = ""
    input_cursor: int = 0
    search_term: str = ""
    status_message: str = ""
    show_help: bool = False
    theme: UITheme = field(default_factory=lambda: DEFAULT_THEME)


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text

    # Keep reverse video active even when the text contains internal resets.
    return "\033[7m" + text.replace("\033[0m", "\033[0;7m") + "\033[0m"


def style_channel_label(label: str, theme: UITheme = DEFAULT_THEME) -> str:
    """Colorize the notification slot and kind glyph of a sidebar label."""
    if len(label) < 3:
        return label
    slot, glyph, tail = label[0], label[2], label[3:]
    if slot == ICON_NOTIFICATION:
        slot = f"{theme.notification}{slot}{theme.reset}"
    if glyph == ICON_ONLINE:
        glyph_color = theme.presence_online
    elif glyph == ICON_OFFLINE:
        glyph_color = theme.presence_offline
    else:
        glyph_color = theme.channel_glyph
    return f"{slot} {glyph_color}{glyph}{theme.reset}{tail}"


def _border_top(width: int, title: str, theme: UITheme) -> str:
    inner = max(0, width - 2)
    label = clip_ansi_line(title, max(0, inner - 2))
    fill = "─" * max(0, inner - display_width(label) - (2 if label else 0))
    if label:
        return f"{theme.border}┌─{theme.reset}{theme.title}{label}{theme.reset}{theme.border}{fill}─┐{theme.reset}"
    return f"{theme.border}┌{'─' * inner}┐{theme.reset}"


def _border_bottom(width: int, theme: UITheme) -> str:
    return f"{theme.border}└{'─' * max(0, width - 2)}┘{theme.reset}"


def _boxed_row(content: str, width: int, theme: UITheme) -> str:
    side = f"{theme.border}│{theme.reset}"
    # Clipping can drop a trailing reset, so close styles before the border.
    return f"{side}{fit_ansi_line(content, max(0, width - 2))}{theme.reset}{side}"


def _box(title: str, rows: list[str], width: int, height: int, theme: UITheme) -> list[str]:
    """Frame ``rows`` in a ``width`` x ``height`` box; extra rows are dropped."""
    inner_rows = max(0, height - 2)
    body = (rows + [""] * inner_rows)[:inner_rows]
    return [
        _border_top(width, title, theme),
        *(_boxed_row(row, width, theme) for row in body),
        _border_bottom(width, theme),
    ]


def _sidebar_rows(context: RenderContext) -> list[str]:
    layout = context.layout
    inner_width = layout.sidebar_inner_width
    rows = [""] * max(0, layout.pane_height - 2)
    for entry in context.entries:
        slot = entry.row - layout.list_window_top
        if not 0 <= slot < len(rows):
            continue
        styled = style_channel_label(entry.label, context.theme)
        if entry.is_cursor:
            styled = selected_with_ansi(fit_ansi_line(styled, inner_width))
        rows[slot] = styled
    return rows


def _help_rows(theme: UITheme) -> list[str]:
    out: list[str] = []
    for keys, text in HELP_ROWS:
        if not keys:
            out.append(f"{theme.help_heading}{text}{theme.reset}")
        else:
            out.append(f"  {theme.help_key}{keys:<12}{theme.reset} {theme.help_dim}{text}{theme.reset}")
    return out


def _input_content(context: RenderContext, width: int) -> str:
    """Return the input line with a reverse-video cursor cell when editing."""
    if context.mode == MODE_SEARCH:
        text, cursor = "/" + context.search_term, len(context.search_term) + 1
    elif context.mode == MODE_INSERT:
        text, cursor = context.input_text, context.input_cursor
    else:
        return context.input_text

    cursor = max(0, min(cursor, len(text)))
    start = max(0, cursor - max(0, width - 1))
    visible = text[start:]
    local = cursor - start
    under = visible[local] if local < len(visible) else " "
    return visible[:local] + selected_with_ansi(under) + visible[local + 1:]


def _mode_content(context: RenderContext) -> str:
    theme = context.theme
    color = {
        MODE_INSERT: theme.mode_insert,
        MODE_SEARCH: theme.mode_search,
    }.get(context.mode, theme.mode_command)
    return f"{color}{MODE_LABELS.get(context.mode, context.mode.upper())}{theme.reset}"


def build_screen_rows(context: RenderContext) -> list[str]:
    """Compose every screen row, top to bottom, without writing anything."""
    layout = context.layout
    theme = context.theme

    sidebar = _box("Channels", _sidebar_rows(context), layout.sidebar_width, layout.pane_height, theme)
    chat_body = _help_rows(theme) if context.show_help else context.chat_rows
    chat_title = "Help" if context.show_help else context.chat_title
    chat = _box(chat_title, chat_body, layout.main_width, layout.pane_height, theme)

    status = f"{theme.status}{context.status_message}{theme.reset}" if context.status_message else "Input"
    mode_box = _box("Mode", [_mode_content(context)], layout.sidebar_width, INPUT_HEIGHT, theme)
    input_box = _box(
        status,
        [_input_content(context, layout.chat_inner_width)],
        layout.main_width,
        INPUT_HEIGHT,
        theme,
    )

    rows = [left + right for left, right in zip(sidebar, chat)]
    rows.extend(left + right for left, right in zip(mode_box, input_box))
    return rows


def render_screen(context: RenderContext) -> None:
    out: list[str] = ["\033[H\033[J"]
    for row_idx, row in enumerate(build_screen_rows(context)):
        out.append(f"\033[{row_idx + 1};1H{row}")
    out.append("\033[0m")
    os.write(sys.stdout.fileno(), "".join(out).encode("utf-8", errors="replace"))


def render_channel_list(labels: list[str] | tuple[str, ...]) -> str:
    """Plain newline-separated label listing for non-interactive output."""
    return "".join(f"{label}\n" for label in labels)
