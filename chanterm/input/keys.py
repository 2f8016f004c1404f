"""Keyboard and mouse dispatch for command, insert, and search modes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from ..render import MODE_COMMAND, MODE_INSERT, MODE_SEARCH
from ..runtime.state import AppState
from .key_registry import KeyComboBinding, KeyComboRegistry

QUIT_KEYS = ("q", "CTRL_C")


@dataclass(frozen=True)
class KeyContext:
    """State and bound operations required for key handling."""

    state: AppState
    schedule_channel_switch: Callable[[], None]
    switch_channel_now: Callable[[], None]
    send_message: Callable[[str], None]
    command_bindings: KeyComboRegistry = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "command_bindings", build_command_bindings(self))


def parse_mouse_token(key: str) -> tuple[str, int, int] | None:
    """Split ``MOUSE_<KIND>:<col>:<row>`` into kind and 0-based coordinates."""
    if not key.startswith("MOUSE_"):
        return None
    parts = key.split(":")
    if len(parts) != 3:
        return None
    try:
        col = int(parts[1]) - 1
        row = int(parts[2]) - 1
    except ValueError:
        return None
    return parts[0][len("MOUSE_"):], col, row


def _chat_page(state: AppState) -> int:
    return max(1, state.layout.chat_inner_height - 1)


def _handle_mouse(key: str, context: KeyContext) -> bool:
    """Apply one mouse token; return whether it was recognized."""
    parsed = parse_mouse_token(key)
    if parsed is None:
        return False
    kind, col, row = parsed
    state = context.state
    layout = state.layout
    viewport = state.viewport

    if kind == "LEFT_DOWN" and layout.in_sidebar(col, row):
        index = viewport.index_at_row(row)
        if index is not None and index != viewport.selected_index and viewport.select_index(index):
            context.schedule_channel_switch()
            state.dirty = True
    elif kind in {"WHEEL_UP", "WHEEL_DOWN"}:
        upward = kind == "WHEEL_UP"
        if layout.in_sidebar(col, row):
            moved = viewport.move_up() if upward else viewport.move_down()
            if moved:
                context.schedule_channel_switch()
                state.dirty = True
        elif layout.in_chat(col, row):
            if state.chat.scroll_up(3) if upward else state.chat.scroll_down(3):
                state.dirty = True
    return True


def build_command_bindings(context: KeyContext) -> KeyComboRegistry:
    """Bind command-mode keys to actions on ``context``."""
    state = context.state
    viewport = state.viewport

    def moved(changed: bool) -> None:
        if changed:
            context.schedule_channel_switch()
            state.dirty = True

    def move_up() -> None:
        moved(viewport.move_up())

    def move_down() -> None:
        moved(viewport.move_down())

    def move_top() -> None:
        previous = viewport.selected_index
        viewport.move_top()
        moved(viewport.selected_index != previous)

    def move_bottom() -> None:
        previous = viewport.selected_index
        viewport.move_bottom()
        moved(viewport.selected_index != previous)

    def chat_page_up() -> None:
        if state.chat.scroll_up(_chat_page(state)):
            state.dirty = True

    def chat_page_down() -> None:
        if state.chat.scroll_down(_chat_page(state)):
            state.dirty = True

    def enter_insert() -> None:
        state.mode = MODE_INSERT
        state.input_cursor = len(state.input_text)
        state.dirty = True

    def enter_search() -> None:
        state.mode = MODE_SEARCH
        state.search_term = ""
        state.dirty = True

    def toggle_help() -> None:
        state.show_help = not state.show_help
        state.dirty = True

    return KeyComboRegistry().register_bindings(
        KeyComboBinding(("k", "UP"), move_up),
        KeyComboBinding(("j", "DOWN"), move_down),
        KeyComboBinding(("g", "HOME"), move_top),
        KeyComboBinding(("G", "END"), move_bottom),
        KeyComboBinding(("PGUP",), chat_page_up),
        KeyComboBinding(("PGDN",), chat_page_down),
        KeyComboBinding(("i",), enter_insert),
        KeyComboBinding(("/",), enter_search),
        KeyComboBinding(("?",), toggle_help),
    )


def handle_command_key(key: str, context: KeyContext) -> bool:
    """Handle one command-mode key and return ``True`` when app should quit."""
    if key in QUIT_KEYS:
        return True
    if not _handle_mouse(key, context):
        context.command_bindings.dispatch(key)
    return False


def handle_insert_key(key: str, context: KeyContext) -> bool:
    """Edit the message line; ``ENTER`` sends, ``ESC`` leaves insert mode."""
    state = context.state
    text = state.input_text
    cursor = max(0, min(state.input_cursor, len(text)))

    if key == "CTRL_C":
        return True
    if key == "ESC":
        state.mode = MODE_COMMAND
    elif key == "ENTER":
        message = text.strip()
        if message:
            context.send_message(message)
            state.input_text = ""
            state.input_cursor = 0
    elif key == "BACKSPACE":
        if cursor > 0:
            state.input_text = text[: cursor - 1] + text[cursor:]
            state.input_cursor = cursor - 1
    elif key == "DELETE":
        state.input_text = text[:cursor] + text[cursor + 1:]
    elif key == "LEFT":
        state.input_cursor = max(0, cursor - 1)
    elif key == "RIGHT":
        state.input_cursor = min(len(text), cursor + 1)
    elif key == "HOME":
        state.input_cursor = 0
    elif key == "END":
        state.input_cursor = len(text)
    elif key == "CTRL_U":
        state.input_text = ""
        state.input_cursor = 0
    elif len(key) == 1 and key.isprintable():
        state.input_text = text[:cursor] + key + text[cursor:]
        state.input_cursor = cursor + 1
    elif _handle_mouse(key, context):
        return False
    else:
        return False
    state.dirty = True
    return False


def handle_search_key(key: str, context: KeyContext) -> bool:
    """Edit the search term, jumping to the first match after every edit."""
    state = context.state

    if key == "CTRL_C":
        return True
    if key == "ESC":
        state.mode = MODE_COMMAND
        context.schedule_channel_switch()
    elif key == "ENTER":
        state.mode = MODE_COMMAND
        context.switch_channel_now()
    elif key == "BACKSPACE":
        state.search_term = state.search_term[:-1]
        state.viewport.search_jump(state.search_term)
    elif key == "CTRL_U":
        state.search_term = ""
    elif len(key) == 1 and key.isprintable():
        state.search_term += key
        state.viewport.search_jump(state.search_term)
    else:
        return False
    state.dirty = True
    return False


def handle_key(key: str, context: KeyContext) -> bool:
    """Dispatch ``key`` by current mode; return ``True`` when app should quit."""
    mode = context.state.mode
    if mode == MODE_INSERT:
        return handle_insert_key(key, context)
    if mode == MODE_SEARCH:
        return handle_search_key(key, context)
    return handle_command_key(key, context)
