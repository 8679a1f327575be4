"""Semantic key events produced by the raw-input decoder."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class KeyKind(Enum):
    CHAR = "char"
    DIGIT = "digit"
    SYMBOL = "symbol"
    WHITESPACE = "whitespace"
    BACKSPACE = "backspace"
    DEL = "del"
    TAB = "tab"
    NEWLINE = "newline"
    ETX = "etx"
    ARROW = "arrow"


_PRINTABLE_KINDS = frozenset({KeyKind.CHAR, KeyKind.DIGIT, KeyKind.SYMBOL, KeyKind.WHITESPACE})


@dataclass(frozen=True)
class Key:
    """One decoded key press.

    ``value`` carries the character for ``CHAR``/``SYMBOL``, the integer
    0-9 for ``DIGIT`` and a ``Direction`` for ``ARROW``; it is ``None`` for
    every other kind.
    """

    kind: KeyKind
    value: str | int | Direction | None = None

    @property
    def is_printable(self) -> bool:
        return self.kind in _PRINTABLE_KINDS

    @property
    def text(self) -> str:
        """Return the text a printable key contributes to the line buffer."""
        if self.kind is KeyKind.WHITESPACE:
            return " "
        if self.kind in (KeyKind.CHAR, KeyKind.DIGIT, KeyKind.SYMBOL):
            return str(self.value)
        return ""


__all__ = ["Direction", "Key", "KeyKind"]
