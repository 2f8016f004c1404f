"""Frame composition tests for the sidebar, chat pane, and input rows."""

from __future__ import annotations

import unittest
from unittest import mock

from chanterm.ansi import ANSI_ESCAPE_RE, display_width
from chanterm.channels import build_channel_viewport
from chanterm.layout import compute_layout
from chanterm.render import (
    MODE_INSERT,
    MODE_SEARCH,
    RenderContext,
    build_screen_rows,
    render_channel_list,
    render_screen,
    style_channel_label,
)
from chanterm.service.types import Channel
from chanterm.ui_theme import DEFAULT_THEME


def _plain(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def _context(**overrides) -> RenderContext:
    layout = compute_layout(80, 24)
    viewport = build_channel_viewport(
        [
            Channel(id="C1", kind="channel", name="general"),
            Channel(id="C2", kind="channel", name="ops"),
            Channel(id="D1", kind="im", name="bob", user_id="U1"),
        ],
        window_top=layout.list_window_top,
        window_bottom=layout.list_window_bottom,
    )
    viewport.overlays.set_notification("C2")
    values = {
        "layout": layout,
        "entries": viewport.visible_entries(),
        "chat_rows": ["hello there"],
        "chat_title": "general",
    }
    values.update(overrides)
    return RenderContext(**values)


class BuildScreenRowsTests(unittest.TestCase):
    def test_frame_fills_terminal_exactly(self) -> None:
        context = _context()
        rows = build_screen_rows(context)
        self.assertEqual(len(rows), context.layout.rows)
        for row in rows:
            self.assertEqual(display_width(row), context.layout.columns, _plain(row))

    def test_panes_carry_titles_and_labels(self) -> None:
        rows = [_plain(row) for row in build_screen_rows(_context())]
        self.assertTrue(rows[0].startswith("┌─Channels"))
        self.assertIn("┌─general", rows[0])
        self.assertIn("  # general", rows[1])
        self.assertIn("1 # ops", rows[2])
        self.assertIn("  ○ bob", rows[3])
        self.assertIn("hello there", rows[1])
        self.assertIn("NORMAL", rows[-2])
        self.assertIn("┌─Input", rows[-3])

    def test_cursor_row_is_reverse_video(self) -> None:
        rows = build_screen_rows(_context())
        self.assertIn("\033[7m", rows[1])
        self.assertNotIn("\033[7m", rows[2])

    def test_help_replaces_chat_body(self) -> None:
        rows = [_plain(row) for row in build_screen_rows(_context(show_help=True))]
        self.assertIn("┌─Help", rows[0])
        joined = "\n".join(rows)
        self.assertIn("toggle help", joined)
        self.assertNotIn("hello there", joined)

    def test_search_mode_shows_term_with_slash(self) -> None:
        rows = build_screen_rows(_context(mode=MODE_SEARCH, search_term="ops"))
        self.assertIn("/ops", _plain(rows[-2]))
        self.assertIn("SEARCH", _plain(rows[-2]))

    def test_insert_mode_shows_draft_and_cursor(self) -> None:
        rows = build_screen_rows(_context(mode=MODE_INSERT, input_text="hey", input_cursor=1))
        self.assertIn("hey", _plain(rows[-2]))
        self.assertIn("\033[7me\033[0m", rows[-2])

    def test_status_message_replaces_input_title(self) -> None:
        rows = [_plain(row) for row in build_screen_rows(_context(status_message="sending message failed"))]
        self.assertIn("sending message failed", rows[-3])
        self.assertNotIn("Input", rows[-3])


class RenderScreenTests(unittest.TestCase):
    def test_render_writes_one_positioned_frame(self) -> None:
        writes: list[bytes] = []

        def capture(_fd: int, data: bytes) -> int:
            writes.append(data)
            return len(data)

        with mock.patch("chanterm.render.os.write", side_effect=capture):
            render_screen(_context())

        self.assertEqual(len(writes), 1)
        rendered = writes[0].decode("utf-8")
        self.assertTrue(rendered.startswith("\033[H\033[J"))
        self.assertIn("\033[1;1H", rendered)
        self.assertIn("\033[24;1H", rendered)
        self.assertNotIn("\033[25;1H", rendered)


class LabelStylingTests(unittest.TestCase):
    def test_notification_and_presence_glyphs_are_colored(self) -> None:
        styled = style_channel_label("1 ● bob", DEFAULT_THEME)
        self.assertIn(f"{DEFAULT_THEME.notification}1", styled)
        self.assertIn(f"{DEFAULT_THEME.presence_online}●", styled)
        self.assertEqual(_plain(styled), "1 ● bob")

    def test_channel_list_output_is_one_label_per_line(self) -> None:
        self.assertEqual(render_channel_list(("  # a", "1 # b")), "  # a\n1 # b\n")
        self.assertEqual(render_channel_list(()), "")


if __name__ == "__main__":
    unittest.main()
