"""Interactive line session over a raw terminal.

Turns decoded keys into edits of a single-line buffer, renders suggestions on
Tab and dispatches the buffer to the command trie on Enter. The loop is
blocking and single-threaded; handler callbacks run inline before the next
byte is read.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable

from .errors import UnsupportedPlatformError
from .input import iter_keys
from .keys import Key, KeyKind
from .trie import CommandTrie

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = ">> "
ERASE_LAST_CHAR = "\b \b"


def fd_writer(fd: int) -> Callable[[str], None]:
    """Return a writer that sends text straight to ``fd``."""

    def write(text: str) -> None:
        os.write(fd, text.encode("utf-8"))

    return write


class LineSession:
    """Line buffer plus key handling for one interactive session."""

    def __init__(
        self,
        trie: CommandTrie,
        write: Callable[[str], None],
        prompt: str = DEFAULT_PROMPT,
    ) -> None:
        self.trie = trie
        self.write = write
        self.prompt = prompt
        self._buffer: list[str] = []

    @property
    def buffer(self) -> str:
        return "".join(self._buffer)

    def start(self) -> None:
        self.write(self.prompt)

    def handle_key(self, key: Key) -> bool:
        """Apply ``key`` to the session; return ``False`` once the loop should stop."""
        if key.is_printable:
            text = key.text
            self._buffer.append(text)
            self.write(text)
        elif key.kind in (KeyKind.BACKSPACE, KeyKind.DEL):
            if self._buffer:
                self._buffer.pop()
            self.write(ERASE_LAST_CHAR)
        elif key.kind is KeyKind.TAB:
            self._show_suggestions()
        elif key.kind is KeyKind.NEWLINE:
            self.write("\n")
            self.trie.exec(self.buffer)
            self._buffer.clear()
            self.write(self.prompt)
        elif key.kind is KeyKind.ETX:
            self.write("\n")
            return False
        else:
            logger.debug("ignoring key %r", key)
        return True

    def _show_suggestions(self) -> None:
        line = self.buffer
        suggestions = self.trie.complete(line)
        self.write("\n" + "".join(f"{candidate} " for candidate in suggestions))
        self.write(f"\n{self.prompt}{line}")

    def run(self, stdin_fd: int) -> None:
        """Print the prompt and process keys until Ctrl-C or end of input."""
        self.start()
        for key in iter_keys(stdin_fd):
            if not self.handle_key(key):
                return
        logger.debug("input stream ended")


def run_session(
    trie: CommandTrie,
    *,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
    prompt: str = DEFAULT_PROMPT,
) -> None:
    """Run an interactive session on the controlling terminal.

    Blocks until Ctrl-C or end of input. The terminal is switched to raw mode
    for the duration and restored on every exit path, exceptions raised by
    handlers included.
    """
    if os.name != "posix":
        raise UnsupportedPlatformError(f"interactive sessions need a POSIX terminal, not {os.name!r}")

    from .terminal import TerminalController

    if stdin_fd is None:
        stdin_fd = sys.stdin.fileno()
    if stdout_fd is None:
        stdout_fd = sys.stdout.fileno()

    terminal = TerminalController(stdin_fd)
    session = LineSession(trie, fd_writer(stdout_fd), prompt=prompt)
    with terminal.raw_mode():
        session.run(stdin_fd)


__all__ = [
    "DEFAULT_PROMPT",
    "ERASE_LAST_CHAR",
    "LineSession",
    "UnsupportedPlatformError",
    "fd_writer",
    "run_session",
]
