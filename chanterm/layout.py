"""Screen geometry for the sidebar/chat split and the bottom input row."""

from __future__ import annotations

from dataclasses import dataclass

INPUT_HEIGHT = 3
MIN_PANE_WIDTH = 4
MIN_PANE_HEIGHT = 3
DEFAULT_SIDEBAR_UNITS = 3
DEFAULT_MAIN_UNITS = 9


@dataclass(frozen=True)
class ScreenLayout:
    """Resolved pane rectangles in 0-based screen coordinates."""

    columns: int
    rows: int
    sidebar_width: int
    main_width: int
    pane_height: int

    @property
    def list_window_top(self) -> int:
        return 1

    @property
    def list_window_bottom(self) -> int:
        return self.pane_height - 2

    @property
    def sidebar_inner_width(self) -> int:
        return max(1, self.sidebar_width - 2)

    @property
    def chat_inner_width(self) -> int:
        return max(1, self.main_width - 2)

    @property
    def chat_inner_height(self) -> int:
        return max(1, self.pane_height - 2)

    def in_sidebar(self, col: int, row: int) -> bool:
        return 0 <= col < self.sidebar_width and 0 <= row < self.pane_height

    def in_chat(self, col: int, row: int) -> bool:
        return self.sidebar_width <= col < self.columns and 0 <= row < self.pane_height


def clamp_units(value: object, default: int) -> int:
    """Accept only integer grid units in ``[1, 11]``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    if value < 1 or value > 11:
        return default
    return value


def compute_layout(
    columns: int,
    rows: int,
    sidebar_units: int = DEFAULT_SIDEBAR_UNITS,
    main_units: int = DEFAULT_MAIN_UNITS,
) -> ScreenLayout:
    """Split the terminal by grid units, keeping both panes at least minimally wide."""
    columns = max(2 * MIN_PANE_WIDTH, columns)
    rows = max(MIN_PANE_HEIGHT + INPUT_HEIGHT, rows)
    total_units = max(1, sidebar_units + main_units)
    sidebar_width = (columns * sidebar_units) // total_units
    sidebar_width = max(MIN_PANE_WIDTH, min(columns - MIN_PANE_WIDTH, sidebar_width))
    return ScreenLayout(
        columns=columns,
        rows=rows,
        sidebar_width=sidebar_width,
        main_width=columns - sidebar_width,
        pane_height=rows - INPUT_HEIGHT,
    )
