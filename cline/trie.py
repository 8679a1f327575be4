"""Command trie behind registration, completion, and execution.

Commands are sequences of whitespace-delimited tokens. Each token descends one
level in the trie; the handler for a command lives on the node reached after
its last token. Completion and execution walk the same path over the tokens of
an input line and act on the deepest node the line reaches.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)

ExecCallback = Callable[[list[str]], None]
CompleteCallback = Callable[[list[str]], Iterable[str]]

# Passed to a dynamic completer when nothing follows the matched command.
EMPTY_TOKEN = ""


def tokenize_line(line: str) -> list[str]:
    """Split ``line`` on runs of whitespace, ignoring leading/trailing blanks."""
    return line.split()


class HandlerBusyError(RuntimeError):
    """Raised when a handler is invoked while one of its callbacks is running."""


class RegisterError(Enum):
    EMPTY_PATH = "empty_path"
    INVALID_TOKEN = "invalid_token"


@dataclass(frozen=True)
class RegisterResult:
    """Outcome of a registration call; truthy on success."""

    error: RegisterError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok


class Handler:
    """Exec callback plus optional dynamic completer bound to one trie node.

    Only one callback of a handler may run at a time. A callback that re-enters
    its own handler gets ``HandlerBusyError`` instead of a nested call.
    """

    def __init__(
        self,
        path: Sequence[str],
        exec_callback: ExecCallback,
        complete_callback: CompleteCallback | None = None,
    ) -> None:
        self.path = tuple(path)
        self.exec_callback = exec_callback
        self.complete_callback = complete_callback
        self._running = False

    def __repr__(self) -> str:
        return f"Handler(path={' '.join(self.path)!r}, dynamic={self.has_dynamic_complete})"

    @property
    def has_dynamic_complete(self) -> bool:
        return self.complete_callback is not None

    def _acquire(self) -> None:
        if self._running:
            raise HandlerBusyError(f"handler for {' '.join(self.path)!r} is already running")
        self._running = True

    def run_exec(self, args: list[str]) -> None:
        self._acquire()
        try:
            self.exec_callback(args)
        finally:
            self._running = False

    def run_complete(self, args: list[str]) -> list[str]:
        if self.complete_callback is None:
            return []
        self._acquire()
        try:
            return list(self.complete_callback(args))
        finally:
            self._running = False


@dataclass
class Node:
    """Trie vertex: children keyed by token and an optional handler."""

    children: dict[str, Node] = field(default_factory=dict)
    handler: Handler | None = None

    def child_for(self, token: str) -> Node:
        """Return the child for ``token``, creating it when missing."""
        child = self.children.get(token)
        if child is None:
            child = Node()
            self.children[token] = child
        return child


def _valid_token(token: str) -> bool:
    return bool(token) and not any(ch.isspace() for ch in token)


class CommandTrie:
    """Registry of commands with trie-based completion and dispatch.

    Example::

        trie = CommandTrie()
        trie.register(["list", "files"], lambda args: print(args))
        trie.complete("l")           # ["list"]
        trie.complete("list")        # ["files"]
        trie.exec("list files -a")   # callback gets ["list", "files", "-a"]
    """

    def __init__(self) -> None:
        self.root = Node()

    def register(
        self,
        path: Sequence[str] | str,
        exec_callback: ExecCallback,
        complete_callback: CompleteCallback | None = None,
    ) -> RegisterResult:
        """Attach a handler at ``path``, replacing any handler already there.

        ``path`` is a token sequence or a string tokenized like input lines.
        Empty paths and tokens containing whitespace are rejected without
        touching the trie.
        """
        tokens = tokenize_line(path) if isinstance(path, str) else list(path)
        if not tokens:
            logger.warning("refusing to register an empty command path")
            return RegisterResult(RegisterError.EMPTY_PATH)
        if not all(_valid_token(token) for token in tokens):
            logger.warning("refusing to register command path with invalid token: %r", tokens)
            return RegisterResult(RegisterError.INVALID_TOKEN)

        node = self.root
        for token in tokens:
            node = node.child_for(token)
        if node.handler is not None:
            logger.debug("replacing handler for %r", " ".join(tokens))
        node.handler = Handler(tokens, exec_callback, complete_callback)
        return RegisterResult()

    def register_dyn_complete(
        self,
        path: Sequence[str] | str,
        exec_callback: ExecCallback,
        complete_callback: CompleteCallback,
    ) -> RegisterResult:
        """Register ``path`` with a completer for runtime-dependent suggestions."""
        return self.register(path, exec_callback, complete_callback)

    def _descend(self, tokens: list[str]) -> tuple[Node, int]:
        """Follow exact token matches from the root.

        Returns the deepest node reached and the index of the first token that
        had no matching child (``len(tokens)`` when every token matched).
        """
        node = self.root
        index = 0
        while index < len(tokens):
            child = node.children.get(tokens[index])
            if child is None:
                break
            node = child
            index += 1
        return node, index

    def complete(self, line: str) -> list[str]:
        """Return completion candidates for ``line``.

        When a token has no exact child, candidates are the dynamic completer's
        results for the remaining tokens followed by child tokens starting with
        the unmatched one. When every token matched, a dynamic completer is
        asked with ``[""]``; without one all child tokens are returned. Child
        order follows registration order and carries no meaning.
        """
        tokens = tokenize_line(line)
        node, index = self._descend(tokens)
        handler = node.handler

        if index == len(tokens):
            if handler is not None and handler.has_dynamic_complete:
                return handler.run_complete([EMPTY_TOKEN])
            return list(node.children)

        partial = tokens[index]
        candidates: list[str] = []
        if handler is not None and handler.has_dynamic_complete:
            candidates.extend(handler.run_complete(tokens[index:]))
        candidates.extend(token for token in node.children if token.startswith(partial))
        return candidates

    def exec(self, line: str) -> None:
        """Run the handler of the deepest node ``line`` reaches, if any.

        The handler receives every token of ``line``, its own command tokens
        included. Lines that reach a node without a handler do nothing.
        """
        tokens = tokenize_line(line)
        node, _ = self._descend(tokens)
        if node.handler is None:
            logger.debug("no handler for %r", line)
            return
        node.handler.run_exec(list(tokens))

    def commands(self) -> list[tuple[str, ...]]:
        """Return every registered command path, depth first."""
        return [handler.path for handler in self._iter_handlers(self.root)]

    def _iter_handlers(self, node: Node) -> Iterator[Handler]:
        if node.handler is not None:
            yield node.handler
        for child in node.children.values():
            yield from self._iter_handlers(child)


__all__ = [
    "CommandTrie",
    "CompleteCallback",
    "EMPTY_TOKEN",
    "ExecCallback",
    "Handler",
    "HandlerBusyError",
    "Node",
    "RegisterError",
    "RegisterResult",
    "tokenize_line",
]
