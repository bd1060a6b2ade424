"""Human-readable dumps of tokens and command trees."""

from __future__ import annotations

from collections.abc import Iterable

from .parser import Node
from .tokens import Token, TokenType

_LABELS = {
    TokenType.WORD: "Command or Argument",
    TokenType.S_QUOTE: "Single Quote",
    TokenType.D_QUOTE: "Double Quote",
    TokenType.REDIR: "Redirection",
    TokenType.PIPE: "Pipe",
    TokenType.LOG_OR: "Logical OR",
    TokenType.LOG_AND: "Logical AND",
    TokenType.BUILTIN: "Builtin",
    TokenType.OPEN_BRACE: "Open Brace",
    TokenType.CLOSE_BRACE: "Close Brace",
}

_TREE_HEADER = "BIN TREE VIS\nleft childs are red, right childs are blue.\n"
_LEFT_COLOR = "\x1b[31m"
_RIGHT_COLOR = "\x1b[34m"
_RESET = "\x1b[0m"


def describe_token(token: Token | None) -> str:
    """Return one line describing a token's kind and value."""
    if token is None:
        return "Token is NULL\n"
    return f'  Type: {_LABELS.get(token.type, "")}, \tValue: "{token.value}"\n'


def format_tokens(tokens: Iterable[Token]) -> str:
    """Return a listing of all tokens."""
    return "Tokens:\n" + "".join(describe_token(token) for token in tokens)


def format_tree(node: Node, depth: int = 0) -> str:
    """Return the tree indented by depth; left children red, right blue."""
    parts = [_TREE_HEADER] if depth == 0 else []
    parts.extend("\t" * depth + describe_token(token) for token in node.tokens)
    if node.left is not None:
        parts.append(_LEFT_COLOR + format_tree(node.left, depth + 1) + _RESET)
    if node.right is not None:
        parts.append(_RIGHT_COLOR + format_tree(node.right, depth + 1) + _RESET)
    return "".join(parts)