"""Raw byte decoding tests for ``read_key`` using an OS pipe as the tty."""

from __future__ import annotations

import os
import unittest

from chanterm.input import KeyComboBinding, KeyComboRegistry, read_key


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.read_fd, self.write_fd = os.pipe()

    def tearDown(self) -> None:
        os.close(self.read_fd)
        os.close(self.write_fd)

    def _feed(self, data: bytes) -> None:
        os.write(self.write_fd, data)

    def _keys(self, data: bytes, count: int) -> list[str]:
        self._feed(data)
        return [read_key(self.read_fd, 50) for _ in range(count)]

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(read_key(self.read_fd, 10), "")

    def test_printable_and_utf8_characters(self) -> None:
        self.assertEqual(self._keys("jé●".encode("utf-8"), 3), ["j", "é", "●"])

    def test_control_keys(self) -> None:
        self.assertEqual(
            self._keys(b"\r\x7f\x03\x15\t", 5),
            ["ENTER", "BACKSPACE", "CTRL_C", "CTRL_U", "TAB"],
        )

    def test_arrow_and_navigation_sequences(self) -> None:
        self.assertEqual(
            self._keys(b"\x1b[A\x1b[B\x1bOH\x1b[F\x1b[5~\x1b[6~\x1b[3~", 7),
            ["UP", "DOWN", "HOME", "END", "PGUP", "PGDN", "DELETE"],
        )

    def test_lone_escape(self) -> None:
        self.assertEqual(self._keys(b"\x1b", 1), ["ESC"])

    def test_sgr_mouse_events(self) -> None:
        self.assertEqual(
            self._keys(b"\x1b[<64;10;4M\x1b[<65;2;3M\x1b[<0;5;6M\x1b[<0;5;6m\x1b[<2;1;1M", 5),
            [
                "MOUSE_WHEEL_UP:10:4",
                "MOUSE_WHEEL_DOWN:2:3",
                "MOUSE_LEFT_DOWN:5:6",
                "MOUSE_LEFT_UP:5:6",
                "MOUSE",
            ],
        )


class KeyComboRegistryTests(unittest.TestCase):
    def test_later_bindings_override_and_unbound_keys_return_none(self) -> None:
        calls: list[str] = []
        registry = KeyComboRegistry().register_bindings(
            KeyComboBinding(("j", "DOWN"), lambda: calls.append("down")),
            KeyComboBinding(("DOWN",), lambda: calls.append("override")),
        )
        registry.dispatch("j")
        registry.dispatch("DOWN")
        self.assertIsNone(registry.dispatch("x"))
        self.assertEqual(calls, ["down", "override"])


if __name__ == "__main__":
    unittest.main()
