"""Syntax checks run on a token list before it is parsed."""

from __future__ import annotations

import errno
import os
from collections.abc import Iterable, Sequence

from .tokens import Token, TokenType

READ = 0
WRITE = 1
APPEND = 2

_OPERATORS = (TokenType.PIPE, TokenType.LOG_OR, TokenType.LOG_AND)


class ShellSyntaxError(Exception):
    """A syntax error near ``token``; the shell's status becomes ``exit_code``."""

    def __init__(self, token: str, exit_code: int = 2) -> None:
        super().__init__(f"crash: syntax error near unexpected token `{token}'")
        self.token = token
        self.exit_code = exit_code


def _access_error(path: str, flag: int) -> int | None:
    if os.access(path, flag):
        return None
    try:
        os.stat(path)
    except FileNotFoundError:
        return errno.ENOENT
    except NotADirectoryError:
        return errno.ENOTDIR
    except PermissionError:
        return errno.EACCES
    except OSError as exc:
        return exc.errno
    return errno.EACCES


def check_files(paths: Iterable[str | os.PathLike], mode: int = READ) -> bool:
    """Tell whether every path can be used for ``mode``.

    ``READ`` files must exist and be readable; ``WRITE`` and ``APPEND`` files
    fail only when they exist without write permission.
    """
    flag = os.R_OK if mode == READ else os.W_OK
    for path in paths:
        error = _access_error(os.fspath(path), flag)
        if error == errno.EACCES or (mode == READ and error == errno.ENOENT):
            return False
    return True


def _is_operator(token: Token) -> bool:
    return TokenType.PIPE <= token.type <= TokenType.LOG_AND


def _check_operators(token: Token, following: Token | None) -> None:
    if _is_operator(token) and following is not None and _is_operator(following):
        raise ShellSyntaxError(token.value, 2)
    if token.type == TokenType.REDIR:
        if following is None:
            raise ShellSyntaxError("newline", 2)
        if following.type > TokenType.BUILTIN:
            raise ShellSyntaxError(token.value, 2)


def _check_braces(token: Token, following: Token | None, depth: int) -> int:
    if token.type == TokenType.OPEN_BRACE:
        depth += 1
    elif token.type == TokenType.CLOSE_BRACE:
        depth -= 1
    if depth < 0:
        raise ShellSyntaxError(")", 2)
    if following is None:
        return depth
    if token.type == TokenType.OPEN_BRACE and following.type == TokenType.CLOSE_BRACE:
        raise ShellSyntaxError(")", 258)
    if token.type == TokenType.CLOSE_BRACE:
        if following.type == TokenType.OPEN_BRACE:
            raise ShellSyntaxError("(", 258)
        if following.type <= TokenType.BUILTIN:
            raise ShellSyntaxError(following.value, 258)
    return depth


def validate(tokens: Sequence[Token]) -> None:
    """Raise ShellSyntaxError if the token list is not a valid command line."""
    tokens = list(tokens)
    if not tokens:
        return
    first = tokens[0]
    if first.type in _OPERATORS:
        raise ShellSyntaxError(first.value, 258)
    depth = 0
    for token, following in zip(tokens, [*tokens[1:], None]):
        _check_operators(token, following)
        depth = _check_braces(token, following, depth)
    last = tokens[-1]
    if last.type in _OPERATORS:
        raise ShellSyntaxError(last.value, 2)
    if depth > 0:
        raise ShellSyntaxError("(", 2)
    if depth < 0:
        raise ShellSyntaxError(")", 2)