"""Regression tests for raw-key decoding and key coalescing.

Covers ESC timing, arrow sequences, draining of queued keys, and the
per-mode key-to-action tables.
"""

from __future__ import annotations

import os
import unittest

from dropkick import input as input_mod
from dropkick.browser import Action


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()
        self.read_fd, self.write_fd = os.pipe()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()
        os.close(self.read_fd)
        os.close(self.write_fd)

    def test_timeout_returns_empty(self) -> None:
        self.assertEqual(input_mod.read_key(self.read_fd, timeout_ms=10), "")

    def test_single_escape_returns_esc(self) -> None:
        os.write(self.write_fd, b"\x1b")
        self.assertEqual(input_mod.read_key(self.read_fd, timeout_ms=20), "ESC")

    def test_arrow_sequences(self) -> None:
        os.write(self.write_fd, b"\x1b[A\x1bOB\x1b[C\x1b[D")
        keys = [input_mod.read_key(self.read_fd, timeout_ms=20) for _ in range(4)]
        self.assertEqual(keys, ["UP", "DOWN", "RIGHT", "LEFT"])

    def test_escape_does_not_swallow_following_key(self) -> None:
        os.write(self.write_fd, b"\x1bq")
        self.assertEqual(input_mod.read_key(self.read_fd, timeout_ms=20), "ESC")
        self.assertEqual(input_mod.read_key(self.read_fd, timeout_ms=20), "q")

    def test_control_keys(self) -> None:
        os.write(self.write_fd, b"\x03\r\n ")
        keys = [input_mod.read_key(self.read_fd, timeout_ms=20) for _ in range(4)]
        self.assertEqual(keys, ["CTRL_C", "ENTER", "ENTER", " "])

    def test_read_latest_key_keeps_only_last(self) -> None:
        os.write(self.write_fd, b"jjjk")
        self.assertEqual(input_mod.read_latest_key(self.read_fd, timeout_ms=20), "k")
        self.assertEqual(input_mod.read_latest_key(self.read_fd, timeout_ms=10), "")

    def test_read_latest_key_coalesces_arrows(self) -> None:
        os.write(self.write_fd, b"\x1b[B\x1b[B\x1b[A")
        self.assertEqual(input_mod.read_latest_key(self.read_fd, timeout_ms=20), "UP")


class ActionForKeyTests(unittest.TestCase):
    def test_tree_keymap(self) -> None:
        self.assertIs(input_mod.action_for_key("j", False), Action.DOWN)
        self.assertIs(input_mod.action_for_key("RIGHT", False), Action.RIGHT)
        self.assertIs(input_mod.action_for_key("ENTER", False), Action.VIEW)
        self.assertIs(input_mod.action_for_key(" ", False), Action.TOGGLE)
        self.assertIs(input_mod.action_for_key("e", False), Action.EXPORT)
        self.assertIs(input_mod.action_for_key("q", False), Action.QUIT)
        self.assertIsNone(input_mod.action_for_key("x", False))

    def test_file_keymap(self) -> None:
        self.assertIs(input_mod.action_for_key("q", True), Action.BACK)
        self.assertIs(input_mod.action_for_key("ESC", True), Action.BACK)
        self.assertIs(input_mod.action_for_key("h", True), Action.BACK)
        self.assertIs(input_mod.action_for_key("CTRL_C", True), Action.QUIT)
        self.assertIsNone(input_mod.action_for_key(" ", True))


if __name__ == "__main__":
    unittest.main()
