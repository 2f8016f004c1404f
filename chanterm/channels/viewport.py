"""Cursor and scroll state for the channel sidebar.

Three coupled counters describe what is visible and what is selected:
``selected_index`` (list space), ``offset`` (list index drawn at the top of the
window), and ``cursor_row`` (screen row of the highlight). Every transition
keeps ``selected_index == offset + (cursor_row - window_top)``.

The cursor moves freely inside the window and only scrolls the list once it is
pinned against the top or bottom edge.
"""

from __future__ import annotations

from dataclasses import dataclass

from .entries import ChannelEntryStore
from .overlay import ChannelOverlays


@dataclass(frozen=True)
class VisibleEntry:
    """One list row ready to draw."""

    row: int
    index: int
    label: str
    is_cursor: bool


class ChannelViewport:
    """Navigation state machine over a fixed channel entry store."""

    def __init__(
        self,
        store: ChannelEntryStore,
        overlays: ChannelOverlays,
        window_top: int = 0,
        window_bottom: int = 0,
    ) -> None:
        self.store = store
        self.overlays = overlays
        self.window_top = window_top
        self.window_bottom = max(window_top, window_bottom)
        self.selected_index = 0
        self.offset = 0
        self.cursor_row = window_top

    @property
    def window_height(self) -> int:
        return self.window_bottom - self.window_top + 1

    def is_consistent(self) -> bool:
        """Return whether the cursor/offset/selection contract holds."""
        if len(self.store) == 0:
            return self.selected_index == 0 and self.offset == 0 and self.cursor_row == self.window_top
        return (
            self.selected_index == self.offset + (self.cursor_row - self.window_top)
            and 0 <= self.offset
            and self.window_top <= self.cursor_row <= self.window_bottom
            and 0 <= self.selected_index < len(self.store)
        )

    def selected_identity(self) -> str | None:
        if len(self.store) == 0:
            return None
        return self.store.identity_at(self.selected_index)

    def clear_current_notification(self) -> None:
        self.overlays.clear_notification(self.selected_index)

    def move_up(self) -> bool:
        """Select the previous entry; return ``False`` at the top."""
        if self.selected_index <= 0:
            return False
        self.selected_index -= 1
        if self.cursor_row == self.window_top:
            if self.offset > 0:
                self.offset -= 1
        else:
            self.cursor_row -= 1
        self.clear_current_notification()
        return True

    def move_down(self) -> bool:
        """Select the next entry; return ``False`` at the bottom."""
        if self.selected_index >= len(self.store) - 1:
            return False
        self.selected_index += 1
        if self.cursor_row == self.window_bottom:
            if self.offset < len(self.store) - 1:
                self.offset += 1
        else:
            self.cursor_row += 1
        self.clear_current_notification()
        return True

    def move_top(self) -> None:
        self.selected_index = 0
        self.offset = 0
        self.cursor_row = self.window_top

    def move_bottom(self) -> None:
        count = len(self.store)
        if count == 0:
            return
        self.selected_index = count - 1
        if count <= self.window_height:
            self.offset = 0
            self.cursor_row = self.selected_index + self.window_top
        else:
            self.offset = count - self.window_height
            self.cursor_row = self.window_bottom

    def search_jump(self, term: str) -> bool:
        """Select the first entry whose label contains ``term``.

        Matching is a case-sensitive substring test against the rendered label,
        glyphs included. The window scrolls just enough to show the match. An
        empty term or a miss leaves everything unchanged.
        """
        if not term:
            return False
        match = next((idx for idx, label in enumerate(self.store.labels) if term in label), None)
        if match is None:
            return False

        last_visible = self.offset + self.window_height - 1
        if match < self.offset:
            self.offset -= self.offset - match
        elif match > last_visible:
            self.offset += match - last_visible
        self.selected_index = match
        self.cursor_row = (match - self.offset) + self.window_top
        return True

    def select_index(self, index: int) -> bool:
        """Select an entry that is currently on screen, keeping the offset."""
        if not 0 <= index < len(self.store):
            return False
        if not self.offset <= index < self.offset + self.window_height:
            return False
        self.selected_index = index
        self.cursor_row = (index - self.offset) + self.window_top
        self.clear_current_notification()
        return True

    def index_at_row(self, row: int) -> int | None:
        """Map a screen row inside the window to a list index."""
        if not self.window_top <= row <= self.window_bottom:
            return None
        index = self.offset + (row - self.window_top)
        if index >= len(self.store):
            return None
        return index

    def set_window(self, window_top: int, window_bottom: int) -> None:
        """Adopt new window bounds, scrolling only as needed to keep the selection visible."""
        window_bottom = max(window_top, window_bottom)
        if (window_top, window_bottom) == (self.window_top, self.window_bottom):
            return
        self.window_top = window_top
        self.window_bottom = window_bottom
        if self.selected_index >= self.offset + self.window_height:
            self.offset = self.selected_index - self.window_height + 1
        self.cursor_row = (self.selected_index - self.offset) + self.window_top

    def visible_entries(self) -> list[VisibleEntry]:
        """Return at most one window of rows starting at ``offset``."""
        labels = self.store.labels
        out: list[VisibleEntry] = []
        for index in range(self.offset, min(len(labels), self.offset + self.window_height)):
            row = self.window_top + (index - self.offset)
            out.append(
                VisibleEntry(
                    row=row,
                    index=index,
                    label=labels[index],
                    is_cursor=row == self.cursor_row,
                )
            )
        return out
