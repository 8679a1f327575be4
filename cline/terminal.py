"""Terminal control helpers for the line session.

Owns the raw-mode lifecycle: capture the original tty attributes, switch to
non-canonical no-echo input, and put the captured attributes back afterwards.
"""

from __future__ import annotations

import contextlib
import logging
import termios

from .errors import TerminalError

logger = logging.getLogger(__name__)

# Local-mode flags cleared for raw input.
RAW_LFLAG_MASK = termios.ICANON | termios.ECHO | termios.ISIG | termios.IEXTEN
_LFLAG_INDEX = 3


class TerminalController:
    """Manage raw-mode transitions for one stdin file descriptor."""

    def __init__(self, stdin_fd: int) -> None:
        """Capture the current tty state of ``stdin_fd``."""
        self.stdin_fd = stdin_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalError(f"cannot read terminal attributes of fd {stdin_fd}: {exc}") from exc
        self._raw_enabled = False

    @property
    def raw_enabled(self) -> bool:
        return self._raw_enabled

    def enable_raw_mode(self) -> None:
        """Disable line buffering, echo, signal keys and extended input; flush input."""
        attrs = list(self._saved_tty_state)
        attrs[_LFLAG_INDEX] = attrs[_LFLAG_INDEX] & ~RAW_LFLAG_MASK
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSANOW, attrs)
            self._raw_enabled = True
            termios.tcflush(self.stdin_fd, termios.TCIOFLUSH)
        except termios.error as exc:
            raise TerminalError(f"cannot enable raw mode on fd {self.stdin_fd}: {exc}") from exc
        logger.debug("raw mode enabled on fd %d", self.stdin_fd)

    def restore(self) -> None:
        """Put back the tty attributes captured at construction."""
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSANOW, self._saved_tty_state)
        except termios.error as exc:
            raise TerminalError(f"cannot restore terminal attributes on fd {self.stdin_fd}: {exc}") from exc
        self._raw_enabled = False
        logger.debug("terminal attributes restored on fd %d", self.stdin_fd)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with raw-mode enter/restore calls."""
        try:
            self.enable_raw_mode()
            yield
        finally:
            self.restore()
