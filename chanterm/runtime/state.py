"""Mutable runtime state owned by the main loop."""

from __future__ import annotations

from dataclasses import dataclass

from ..channels import ChannelViewport
from ..chat import ChatPane
from ..layout import ScreenLayout
from ..render import MODE_COMMAND


@dataclass
class AppState:
    viewport: ChannelViewport
    chat: ChatPane
    layout: ScreenLayout
    mode: str = MODE_COMMAND
    input_text: str = ""
    input_cursor: int = 0
    search_term: str = ""
    show_help: bool = False
    dirty: bool = True
    status_message: str = ""
    status_message_until: float = 0.0
    channel_switch_due: float | None = None
