"""Interactive client bootstrap.

Builds the channel viewport from the service, wires the event pump and the
session, and runs the main loop inside a raw-mode terminal.
"""

from __future__ import annotations

import logging
import shutil
import sys
from collections.abc import Callable

from ..channels import build_channel_viewport
from ..chat import ChatPane
from ..layout import compute_layout
from ..service.base import ChatService
from ..ui_theme import resolve_theme
from .config import ClientConfig
from .events import EventPump
from .loop import RuntimeLoopCallbacks, run_main_loop
from .session import ClientSession
from .state import AppState
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_session(
    service: ChatService,
    config: ClientConfig,
    columns: int,
    lines: int,
    alert: Callable[[], None] | None = None,
) -> ClientSession:
    """Create state for a fresh session: first channel selected, presence loaded."""
    layout = compute_layout(columns, lines, config.sidebar_width, config.main_width)
    viewport = build_channel_viewport(
        service.channels(),
        window_top=layout.list_window_top,
        window_bottom=layout.list_window_bottom,
        alert=alert,
    )
    state = AppState(viewport=viewport, chat=ChatPane(), layout=layout)
    session = ClientSession(service, state)
    session.load_presence()
    session.switch_channel_now()
    return session


def run_client(service: ChatService, config: ClientConfig, theme_name: str | None = None) -> None:
    """Run the interactive client until the user quits."""
    term = shutil.get_terminal_size((80, 24))
    terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
    session = build_session(service, config, term.columns, term.lines, alert=terminal.bell)

    pump = EventPump(service.poll_events, config.poll_interval)
    callbacks = RuntimeLoopCallbacks(
        drain_events=pump.drain,
        layout_for_size=lambda columns, lines: compute_layout(
            columns, lines, config.sidebar_width, config.main_width
        ),
    )
    logger.info("starting client with %d channels", len(session.state.viewport.store))
    pump.start()
    try:
        run_main_loop(
            session,
            terminal,
            sys.stdin.fileno(),
            callbacks,
            theme=resolve_theme(theme_name or config.theme),
        )
    finally:
        pump.stop()
        logger.info("client stopped")
