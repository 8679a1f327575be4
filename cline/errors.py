"""Exceptions raised by the interactive session layer."""

from __future__ import annotations


class TerminalError(RuntimeError):
    """Raised when tty attributes cannot be queried or changed."""


class UnsupportedPlatformError(RuntimeError):
    """Raised when the host has no POSIX terminal control."""
