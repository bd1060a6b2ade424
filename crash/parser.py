"""Building a binary command tree out of a flat token list."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .tokens import Token, TokenType

# Operators are searched in this order; the first one found at brace depth
# zero becomes the root of the (sub)tree.
_PRIORITY = (TokenType.LOG_AND, TokenType.LOG_OR, TokenType.PIPE, TokenType.REDIR)


@dataclass
class Node:
    """A node of the command tree.

    Leaves hold a whole simple command; inner nodes hold one operator token.
    ``redirected`` marks a redirection node that has already been applied.
    """

    tokens: list[Token]
    left: Node | None = None
    right: Node | None = None
    parent: Node | None = field(default=None, repr=False, compare=False)
    redirected: bool = False
    in_fd: int = 0
    out_fd: int = 1

    @property
    def token(self) -> Token:
        """The first token of the node: the operator, or the command name."""
        return self.tokens[0]

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


def _depth_change(token: Token) -> int:
    if token.type == TokenType.OPEN_BRACE:
        return 1
    if token.type == TokenType.CLOSE_BRACE:
        return -1
    return 0


def _wrapped(tokens: Sequence[Token]) -> bool:
    """Tell whether the whole list is enclosed in one pair of braces."""
    if len(tokens) < 2 or tokens[-1].type != TokenType.CLOSE_BRACE:
        return False
    depth = 0
    for token in tokens[:-1]:
        depth += _depth_change(token)
        if depth == 0:
            return False
    return depth + _depth_change(tokens[-1]) == 0


def strip_outer_braces(tokens: Sequence[Token]) -> list[Token]:
    """Remove every pair of braces that encloses the whole list."""
    tokens = list(tokens)
    while _wrapped(tokens):
        inner = tokens[1:-1]
        if not inner:
            return tokens[:1]
        tokens = inner
    return tokens


def dominant_operator(tokens: Sequence[Token]) -> int | None:
    """Return the index of the operator to split at, or None for a command."""
    for target in _PRIORITY:
        depth = 0
        for index, token in enumerate(tokens):
            depth += _depth_change(token)
            if token.type == target and depth == 0:
                return index
    return None


def parse(tokens: Sequence[Token]) -> Node | None:
    """Parse tokens into a tree; return None for an empty list."""
    tokens = strip_outer_braces(tokens)
    if not tokens:
        return None
    index = dominant_operator(tokens)
    if index is None:
        return Node(list(tokens))
    node = Node([tokens[index]])
    node.left = parse(tokens[:index])
    node.right = parse(tokens[index + 1 :])
    for child in (node.left, node.right):
        if child is not None:
            child.parent = node
    return node