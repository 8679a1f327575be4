"""Low-level terminal input decoding.

Reads raw bytes and translates them into ``Key`` events, one key per call.
Only the ASCII byte table is interpreted; escape sequences other than the
four ``ESC [ A-D`` arrows are dropped with a debug log entry.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator

from .keys import Direction, Key, KeyKind

logger = logging.getLogger(__name__)

ESC = 0x1B
CSI_INTRODUCER = 0x5B

_ARROWS: dict[int, Direction] = {
    0x41: Direction.UP,
    0x42: Direction.DOWN,
    0x43: Direction.RIGHT,
    0x44: Direction.LEFT,
}

_CONTROL_KEYS: dict[int, KeyKind] = {
    0x03: KeyKind.ETX,
    0x08: KeyKind.BACKSPACE,
    0x09: KeyKind.TAB,
    0x0A: KeyKind.NEWLINE,
    0x20: KeyKind.WHITESPACE,
    0x7F: KeyKind.DEL,
}


def _fd_byte_reader(fd: int) -> Callable[[], int | None]:
    def read_byte() -> int | None:
        chunk = os.read(fd, 1)
        if not chunk:
            return None
        return chunk[0]

    return read_byte


def _decode_escape(next_byte: Callable[[], int | None]) -> Key | None:
    """Decode the remainder of a sequence that started with ESC."""
    second = next_byte()
    if second != CSI_INTRODUCER:
        logger.debug("dropping escape sequence: %r %r", ESC, second)
        return None
    third = next_byte()
    direction = _ARROWS.get(third) if third is not None else None
    if direction is None:
        logger.debug("dropping escape sequence: %r %r %r", ESC, CSI_INTRODUCER, third)
        return None
    return Key(KeyKind.ARROW, direction)


def decode_key(next_byte: Callable[[], int | None]) -> Key | None:
    """Classify the next key from ``next_byte``.

    ``next_byte`` returns one byte value per call, or ``None`` at end of
    stream. Returns ``None`` at end of stream and for unrecognized escape
    sequences.
    """
    byte = next_byte()
    if byte is None:
        return None
    if byte == ESC:
        return _decode_escape(next_byte)
    if 0x30 <= byte <= 0x39:
        return Key(KeyKind.DIGIT, byte - 0x30)
    if 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A:
        return Key(KeyKind.CHAR, chr(byte))
    kind = _CONTROL_KEYS.get(byte)
    if kind is not None:
        return Key(kind)
    logger.debug("symbol byte: %r", byte)
    return Key(KeyKind.SYMBOL, chr(byte))


def read_key(fd: int) -> Key | None:
    """Block on ``fd`` until one key is decoded or the stream ends."""
    return decode_key(_fd_byte_reader(fd))


def iter_keys(fd: int) -> Iterator[Key]:
    """Yield keys from ``fd`` until the decoder produces none."""
    read_byte = _fd_byte_reader(fd)
    while True:
        key = decode_key(read_byte)
        if key is None:
            return
        yield key


__all__ = ["decode_key", "iter_keys", "read_key"]
