"""Main interactive event loop for the terminal UI.

Serializes key input and drained service events onto one thread, so the
channel viewport always has a single writer. Feature logic lives in
``ClientSession`` and the key handlers.
"""

from __future__ import annotations

import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..input import KeyContext, handle_key, read_key
from ..layout import ScreenLayout
from ..render import RenderContext, render_screen
from ..service.types import ServiceEvent
from ..ui_theme import DEFAULT_THEME, UITheme
from .session import ClientSession
from .state import AppState


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_timeout_ms: int = 100


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected collaborators used by ``run_main_loop``."""

    drain_events: Callable[[], list[ServiceEvent]]
    layout_for_size: Callable[[int, int], ScreenLayout]
    read_key: Callable[[int, int], str] = read_key
    render: Callable[[RenderContext], None] = render_screen


def build_render_context(state: AppState, theme: UITheme, self_name: str | None = None) -> RenderContext:
    layout = state.layout
    return RenderContext(
        layout=layout,
        entries=state.viewport.visible_entries(),
        chat_rows=state.chat.visible_rows(layout.chat_inner_width, layout.chat_inner_height, theme, self_name),
        chat_title=state.chat.title,
        mode=state.mode,
        input_text=state.input_text,
        input_cursor=state.input_cursor,
        search_term=state.search_term,
        status_message=state.status_message,
        show_help=state.show_help,
        theme=theme,
    )


def run_main_loop(
    session: ClientSession,
    terminal,
    stdin_fd: int,
    callbacks: RuntimeLoopCallbacks,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
    theme: UITheme = DEFAULT_THEME,
) -> None:
    """Run until a quit key is pressed.

    Each iteration adopts the terminal size, applies queued service events,
    fires a due channel switch, redraws when dirty, then waits briefly for
    one key.
    """
    state = session.state
    key_context = KeyContext(
        state=state,
        schedule_channel_switch=session.schedule_channel_switch,
        switch_channel_now=session.switch_channel_now,
        send_message=session.send_message,
    )

    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            session.apply_layout(callbacks.layout_for_size(term.columns, term.lines))

            for event in callbacks.drain_events():
                session.apply_event(event)

            now = time.monotonic()
            session.expire_status(now)
            session.maybe_switch_channel(now)

            if state.dirty:
                callbacks.render(build_render_context(state, theme, session.service.self_name))
                state.dirty = False

            key = callbacks.read_key(stdin_fd, timing.key_timeout_ms)
            if not key:
                continue
            if handle_key(key, key_context):
                break
