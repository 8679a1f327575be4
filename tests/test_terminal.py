"""Tests for terminal raw-mode lifecycle.

Verifies the local-mode flags cleared for raw input and that the captured
attributes are restored on every exit path, failures included.
"""

from __future__ import annotations

import termios
import unittest
from unittest import mock

from cline.errors import TerminalError
from cline.terminal import RAW_LFLAG_MASK, TerminalController

_ALL_LFLAGS = termios.ICANON | termios.ECHO | termios.ISIG | termios.IEXTEN | termios.ECHOE


def _saved_state() -> list:
    return [1, 2, 3, _ALL_LFLAGS, 38400, 38400, [b"\x00"] * 32]


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_clears_canonical_echo_signal_and_extended_flags(self) -> None:
        saved_state = _saved_state()

        with mock.patch("cline.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "cline.terminal.termios.tcsetattr"
        ) as setattr_mock, mock.patch("cline.terminal.termios.tcflush") as flush_mock:
            controller = TerminalController(stdin_fd=0)
            controller.enable_raw_mode()
            self.assertTrue(controller.raw_enabled)
            controller.restore()

        fd, when, raw_attrs = setattr_mock.call_args_list[0].args
        self.assertEqual((fd, when), (0, termios.TCSANOW))
        self.assertEqual(raw_attrs[3], termios.ECHOE)
        self.assertEqual(raw_attrs[3] & RAW_LFLAG_MASK, 0)
        self.assertEqual(raw_attrs[:3], [1, 2, 3])
        flush_mock.assert_called_once_with(0, termios.TCIOFLUSH)
        self.assertEqual(setattr_mock.call_args_list[1].args, (0, termios.TCSANOW, saved_state))
        self.assertFalse(controller.raw_enabled)
        # the captured state itself is left untouched
        self.assertEqual(saved_state[3], _ALL_LFLAGS)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("cline.terminal.termios.tcgetattr", return_value=_saved_state()):
            controller = TerminalController(stdin_fd=0)

        with mock.patch.object(controller, "enable_raw_mode") as enable_mock, mock.patch.object(
            controller, "restore"
        ) as restore_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        restore_mock.assert_called_once()

    def test_capture_failure_raises_terminal_error(self) -> None:
        with mock.patch("cline.terminal.termios.tcgetattr", side_effect=termios.error(25, "Inappropriate ioctl")):
            with self.assertRaises(TerminalError):
                TerminalController(stdin_fd=0)

    def test_enable_failure_still_restores_inside_raw_mode(self) -> None:
        saved_state = _saved_state()

        with mock.patch("cline.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "cline.terminal.termios.tcsetattr"
        ) as setattr_mock, mock.patch(
            "cline.terminal.termios.tcflush", side_effect=termios.error(5, "I/O error")
        ):
            controller = TerminalController(stdin_fd=0)
            with self.assertRaises(TerminalError):
                with controller.raw_mode():
                    self.fail("body must not run when raw mode cannot be enabled")

        self.assertEqual(setattr_mock.call_args_list[-1].args, (0, termios.TCSANOW, saved_state))


if __name__ == "__main__":
    unittest.main()
