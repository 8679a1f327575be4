"""Public package surface for cline.

Exports the command trie, the key types and the interactive session entry.
``main`` runs the demo shell; most implementation lives in submodules.
"""

from __future__ import annotations

from .errors import TerminalError, UnsupportedPlatformError
from .keys import Direction, Key, KeyKind
from .session import LineSession, run_session
from .trie import CommandTrie, HandlerBusyError, RegisterError, RegisterResult


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = [
    "CommandTrie",
    "Direction",
    "HandlerBusyError",
    "Key",
    "KeyKind",
    "LineSession",
    "RegisterError",
    "RegisterResult",
    "TerminalError",
    "UnsupportedPlatformError",
    "main",
    "run_session",
]
