"""Command-line front door for the cline demo shell.

Registers a small demo command set, then either answers a single
``--complete``/``--exec`` request or runs the interactive raw-terminal session.
"""

from __future__ import annotations

import argparse
import itertools
import logging
import sys
from collections.abc import Callable

from .config import load_log_level, load_prompt
from .errors import TerminalError, UnsupportedPlatformError
from .session import run_session
from .trie import CommandTrie


def _stdout_write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


class DemoSessions:
    """In-memory session ids used to show runtime-dependent completion."""

    def __init__(self, write: Callable[[str], None]) -> None:
        self.write = write
        self.ids: list[str] = []
        self._counter = itertools.count(1)
        self.attached: str | None = None

    def open_session(self, args: list[str]) -> None:
        session_id = f"s{next(self._counter)}"
        self.ids.append(session_id)
        self.write(f"opened {session_id}\n")

    def list_sessions(self, args: list[str]) -> None:
        self.write(" ".join(self.ids) + "\n" if self.ids else "no sessions\n")

    def attach(self, args: list[str]) -> None:
        # args is the whole line: ["session", "attach", <id>, ...]
        if len(args) < 3 or args[2] not in self.ids:
            self.write("usage: session attach <id>\n")
            return
        self.attached = args[2]
        self.write(f"attached to {self.attached}\n")

    def complete_ids(self, args: list[str]) -> list[str]:
        partial = args[0] if args else ""
        return [session_id for session_id in self.ids if session_id.startswith(partial)]


def build_demo_trie(write: Callable[[str], None] = _stdout_write) -> CommandTrie:
    """Return a trie populated with the demo commands."""
    trie = CommandTrie()
    sessions = DemoSessions(write)

    def show_help(args: list[str]) -> None:
        for path in sorted(trie.commands()):
            write(" ".join(path) + "\n")

    def echo(args: list[str]) -> None:
        write(" ".join(args[1:]) + "\n")

    trie.register(["help"], show_help)
    trie.register(["echo"], echo)
    trie.register(["session", "open"], sessions.open_session)
    trie.register(["session", "list"], sessions.list_sessions)
    trie.register_dyn_complete(["session", "attach"], sessions.attach, sessions.complete_ids)
    return trie


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the demo shell."""
    parser = argparse.ArgumentParser(description="Interactive command shell with tab completion.")
    parser.add_argument("--prompt", default=None, help="Prompt string (default: from config or '>> ').")
    parser.add_argument("--log-level", default=None, help="Logging level for diagnostics on stderr.")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--complete", metavar="LINE", help="Print completion candidates for LINE and exit.")
    group.add_argument("--exec", metavar="LINE", dest="exec_line", help="Execute LINE and exit.")
    args = parser.parse_args(argv)

    level_name = (args.log_level or load_log_level()).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise SystemExit(f"Unknown log level: {args.log_level}")
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    trie = build_demo_trie()

    if args.complete is not None:
        for candidate in trie.complete(args.complete):
            _stdout_write(candidate + "\n")
        return
    if args.exec_line is not None:
        trie.exec(args.exec_line)
        return

    prompt = args.prompt if args.prompt is not None else load_prompt()
    try:
        run_session(trie, prompt=prompt)
    except (TerminalError, UnsupportedPlatformError) as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
