"""Chat pane model: messages of the channel currently shown.

Scrolling is counted in wrapped rows from the bottom, so new messages stay in
view unless the user has scrolled back into history.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from .ansi import wrap_plain_text
from .service.types import Message
from .ui_theme import DEFAULT_THEME, UITheme


def message_prefix(message: Message) -> str:
    stamp = time.strftime("%H:%M", time.localtime(message.ts))
    return f"[{stamp}] <{message.user}> "


def format_message_rows(
    message: Message,
    width: int,
    theme: UITheme = DEFAULT_THEME,
    self_name: str | None = None,
) -> list[str]:
    """Wrap one message into styled rows of at most ``width`` columns."""
    prefix = message_prefix(message)
    rows = wrap_plain_text(prefix + message.text, width)
    if rows and rows[0].startswith(prefix):
        stamp, _, user_part = prefix.partition("] ")
        user_color = theme.message_self if message.user == self_name else theme.message_user
        styled = f"{theme.message_time}{stamp}]{theme.reset} {user_color}{user_part.rstrip()}{theme.reset} "
        rows[0] = styled + rows[0][len(prefix):]
    return rows


@dataclass
class ChatPane:
    channel_id: str | None = None
    title: str = ""
    messages: list[Message] = field(default_factory=list)
    scroll: int = 0
    max_scroll: int = 0

    def load(self, channel_id: str, title: str, messages: list[Message]) -> None:
        """Replace pane contents with ``messages`` and jump to the newest."""
        self.channel_id = channel_id
        self.title = title
        self.messages = list(messages)
        self.scroll = 0
        self.max_scroll = 0

    def append(self, message: Message) -> bool:
        """Add ``message`` unless it is already shown; return whether it was added.

        A message polled from the event feed may already be part of the history
        loaded when its channel was opened.
        """
        if message in self.messages:
            return False
        self.messages.append(message)
        return True

    def scroll_up(self, amount: int) -> bool:
        previous = self.scroll
        self.scroll = min(self.max_scroll, self.scroll + max(0, amount))
        return self.scroll != previous

    def scroll_down(self, amount: int) -> bool:
        previous = self.scroll
        self.scroll = max(0, self.scroll - max(0, amount))
        return self.scroll != previous

    def visible_rows(
        self,
        width: int,
        height: int,
        theme: UITheme = DEFAULT_THEME,
        self_name: str | None = None,
    ) -> list[str]:
        """Return the ``height`` rows to draw, bottom-aligned.

        Also refreshes ``max_scroll`` for the current geometry and clamps
        ``scroll`` into it.
        """
        if height <= 0:
            return []
        rows: list[str] = []
        for message in self.messages:
            rows.extend(format_message_rows(message, width, theme, self_name))
        self.max_scroll = max(0, len(rows) - height)
        self.scroll = max(0, min(self.scroll, self.max_scroll))
        end = len(rows) - self.scroll
        window = rows[max(0, end - height):end]
        return [""] * (height - len(window)) + window
