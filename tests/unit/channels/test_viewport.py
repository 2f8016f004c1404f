"""Tests for channel viewport navigation.

Every scenario checks the cursor/offset/selection contract after each step,
including scrolling at window edges, search jumps, and window resizes.
"""

from __future__ import annotations

import random
import unittest

from chanterm.channels import ChannelViewport, build_channel_viewport
from chanterm.service.types import Channel


def _channels(count: int) -> list[Channel]:
    return [Channel(id=f"C{idx}", kind="channel", name=f"chan{idx}") for idx in range(count)]


def _viewport(count: int, top: int = 0, bottom: int = 2) -> ChannelViewport:
    return build_channel_viewport(_channels(count), window_top=top, window_bottom=bottom)


def _state(viewport: ChannelViewport) -> tuple[int, int, int]:
    return viewport.selected_index, viewport.offset, viewport.cursor_row


class ViewportTestCase(unittest.TestCase):
    def assertConsistent(self, viewport: ChannelViewport) -> None:
        self.assertTrue(viewport.is_consistent(), _state(viewport))
        if len(viewport.store):
            self.assertEqual(
                viewport.selected_index,
                viewport.offset + (viewport.cursor_row - viewport.window_top),
            )
            self.assertGreaterEqual(viewport.offset, 0)
            self.assertGreaterEqual(
                viewport.offset + (viewport.window_bottom - viewport.window_top),
                viewport.selected_index,
            )
            self.assertLess(viewport.selected_index, len(viewport.store))


class MoveTests(ViewportTestCase):
    def test_initial_state_is_first_entry_at_window_top(self) -> None:
        viewport = _viewport(5, top=1, bottom=4)
        self.assertEqual(_state(viewport), (0, 0, 1))
        self.assertEqual(viewport.selected_identity(), "C0")
        self.assertConsistent(viewport)

    def test_move_down_pins_cursor_then_scrolls(self) -> None:
        viewport = _viewport(5)
        expected = [(1, 0, 1), (2, 0, 2), (3, 1, 2), (4, 2, 2)]
        for step in expected:
            self.assertTrue(viewport.move_down())
            self.assertEqual(_state(viewport), step)
            self.assertConsistent(viewport)

    def test_move_down_at_last_index_is_noop(self) -> None:
        viewport = _viewport(5)
        viewport.move_bottom()
        before = _state(viewport)
        self.assertFalse(viewport.move_down())
        self.assertEqual(_state(viewport), before)

    def test_move_up_at_first_index_is_noop(self) -> None:
        viewport = _viewport(5)
        self.assertFalse(viewport.move_up())
        self.assertEqual(_state(viewport), (0, 0, 0))

    def test_move_up_pins_cursor_at_top_then_scrolls(self) -> None:
        viewport = _viewport(5)
        for _ in range(4):
            viewport.move_down()
        expected = [(3, 2, 1), (2, 2, 0), (1, 1, 0), (0, 0, 0)]
        for step in expected:
            self.assertTrue(viewport.move_up())
            self.assertEqual(_state(viewport), step)
            self.assertConsistent(viewport)

    def test_move_bottom_scrolls_when_list_overflows(self) -> None:
        viewport = _viewport(10)
        viewport.move_bottom()
        self.assertEqual(_state(viewport), (9, 7, 2))
        self.assertConsistent(viewport)

    def test_move_bottom_without_overflow_keeps_offset_zero(self) -> None:
        viewport = _viewport(2, top=1, bottom=5)
        viewport.move_bottom()
        self.assertEqual(_state(viewport), (1, 0, 2))
        self.assertConsistent(viewport)

    def test_move_bottom_with_exact_fit(self) -> None:
        viewport = _viewport(3)
        viewport.move_bottom()
        self.assertEqual(_state(viewport), (2, 0, 2))

    def test_move_top_resets_everything(self) -> None:
        viewport = _viewport(10, top=1, bottom=3)
        viewport.move_bottom()
        viewport.move_top()
        self.assertEqual(_state(viewport), (0, 0, 1))
        self.assertConsistent(viewport)

    def test_long_walk_keeps_contract(self) -> None:
        viewport = _viewport(23, top=1, bottom=6)
        rng = random.Random(7)
        actions = [
            viewport.move_up,
            viewport.move_down,
            viewport.move_down,
            viewport.move_top,
            viewport.move_bottom,
            lambda: viewport.search_jump(f"chan{rng.randrange(23)}"),
            lambda: viewport.set_window(1, rng.randrange(1, 12)),
        ]
        for _ in range(500):
            rng.choice(actions)()
            self.assertConsistent(viewport)


class SearchJumpTests(ViewportTestCase):
    def _mixed_viewport(self) -> ChannelViewport:
        channels = [
            Channel(id="C1", kind="channel", name="general"),
            Channel(id="C2", kind="channel", name="random"),
            Channel(id="C3", kind="channel", name="ops"),
            Channel(id="D1", kind="im", name="bob", user_id="U1"),
        ]
        return build_channel_viewport(channels, window_top=0, window_bottom=1)

    def test_jump_below_window_scrolls_by_excess_and_keeps_notification(self) -> None:
        viewport = self._mixed_viewport()
        viewport.overlays.set_notification("C3")
        self.assertEqual(viewport.store.labels, ("  # general", "  # random", "1 # ops", "  ○ bob"))

        self.assertTrue(viewport.search_jump("ops"))

        self.assertEqual(_state(viewport), (2, 1, 1))
        self.assertEqual(viewport.store.label_at(2), "1 # ops")
        self.assertConsistent(viewport)

        viewport.move_up()
        viewport.move_down()
        self.assertEqual(viewport.store.label_at(2), "  # ops")
        self.assertConsistent(viewport)

    def test_jump_above_window_makes_match_top_row(self) -> None:
        viewport = _viewport(10)
        viewport.move_bottom()
        self.assertTrue(viewport.search_jump("chan2"))
        self.assertEqual(_state(viewport), (2, 2, 0))
        self.assertConsistent(viewport)

    def test_jump_inside_window_keeps_offset(self) -> None:
        viewport = _viewport(10, top=1, bottom=4)
        viewport.move_down()
        self.assertTrue(viewport.search_jump("chan3"))
        self.assertEqual(_state(viewport), (3, 0, 4))
        self.assertConsistent(viewport)

    def test_miss_and_empty_term_leave_state_unchanged(self) -> None:
        viewport = _viewport(10)
        viewport.move_down()
        before = _state(viewport)
        self.assertFalse(viewport.search_jump("nothing-here"))
        self.assertFalse(viewport.search_jump(""))
        self.assertEqual(_state(viewport), before)

    def test_only_first_match_is_honored(self) -> None:
        channels = [
            Channel(id="C1", kind="channel", name="alerts"),
            Channel(id="C2", kind="channel", name="ops"),
            Channel(id="C3", kind="channel", name="ops-alerts"),
        ]
        viewport = build_channel_viewport(channels, window_top=0, window_bottom=2)
        viewport.search_jump("ops")
        first = _state(viewport)
        viewport.search_jump("ops")
        self.assertEqual(first, (1, 0, 1))
        self.assertEqual(_state(viewport), first)

    def test_search_is_case_sensitive(self) -> None:
        viewport = _viewport(5)
        self.assertFalse(viewport.search_jump("CHAN3"))
        self.assertEqual(_state(viewport), (0, 0, 0))

    def test_search_matches_rendered_glyphs(self) -> None:
        channels = [
            Channel(id="C1", kind="channel", name="general"),
            Channel(id="G1", kind="group", name="secret"),
        ]
        viewport = build_channel_viewport(channels, window_top=0, window_bottom=5)
        self.assertTrue(viewport.search_jump("☰"))
        self.assertEqual(viewport.selected_identity(), "G1")


class SelectionAndWindowTests(ViewportTestCase):
    def test_select_index_only_accepts_visible_rows(self) -> None:
        viewport = _viewport(10, top=1, bottom=3)
        self.assertTrue(viewport.select_index(2))
        self.assertEqual(_state(viewport), (2, 0, 3))
        self.assertFalse(viewport.select_index(5))
        self.assertFalse(viewport.select_index(-1))
        self.assertEqual(_state(viewport), (2, 0, 3))
        self.assertConsistent(viewport)

    def test_index_at_row_maps_screen_rows(self) -> None:
        viewport = _viewport(4, top=1, bottom=6)
        self.assertEqual(viewport.index_at_row(1), 0)
        self.assertEqual(viewport.index_at_row(4), 3)
        self.assertIsNone(viewport.index_at_row(5))
        self.assertIsNone(viewport.index_at_row(0))

    def test_shrinking_window_scrolls_to_keep_selection(self) -> None:
        viewport = _viewport(10, top=0, bottom=4)
        for _ in range(4):
            viewport.move_down()
        self.assertEqual(_state(viewport), (4, 0, 4))

        viewport.set_window(0, 1)
        self.assertEqual(_state(viewport), (4, 3, 1))
        self.assertConsistent(viewport)

        viewport.set_window(0, 9)
        self.assertEqual(_state(viewport), (4, 3, 1))
        self.assertConsistent(viewport)

    def test_moving_window_top_shifts_cursor_row(self) -> None:
        viewport = _viewport(10, top=0, bottom=4)
        viewport.move_down()
        viewport.set_window(2, 6)
        self.assertEqual(_state(viewport), (1, 0, 3))
        self.assertConsistent(viewport)

    def test_visible_entries_cover_one_window(self) -> None:
        viewport = _viewport(10, top=1, bottom=3)
        viewport.move_bottom()
        rows = viewport.visible_entries()
        self.assertEqual([entry.row for entry in rows], [1, 2, 3])
        self.assertEqual([entry.index for entry in rows], [7, 8, 9])
        self.assertEqual([entry.is_cursor for entry in rows], [False, False, True])
        self.assertEqual(rows[0].label, "  # chan7")

    def test_empty_list_navigation_is_noop(self) -> None:
        viewport = build_channel_viewport([], window_top=1, window_bottom=4)
        self.assertFalse(viewport.move_down())
        self.assertFalse(viewport.move_up())
        viewport.move_bottom()
        viewport.move_top()
        self.assertFalse(viewport.search_jump("x"))
        self.assertIsNone(viewport.selected_identity())
        self.assertEqual(viewport.visible_entries(), [])
        self.assertEqual(_state(viewport), (0, 0, 1))
        self.assertTrue(viewport.is_consistent())


if __name__ == "__main__":
    unittest.main()
