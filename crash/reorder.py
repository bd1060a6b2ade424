"""Moving command arguments that follow a redirection in front of it."""

from __future__ import annotations

from collections.abc import Sequence

from .tokens import Token, TokenType


def _should_switch(tokens: list[Token], position: int) -> bool:
    return (
        position + 2 < len(tokens)
        and tokens[position].type == TokenType.REDIR
        and tokens[position + 2].type <= TokenType.D_QUOTE
    )


def switch_redir_args(tokens: Sequence[Token]) -> list[Token]:
    """Return a new list where ``> file arg`` becomes ``arg > file``.

    Every word after a redirection's target is moved before the redirection,
    so ``> out echo hi`` turns into ``echo hi > out``.
    """
    result = list(tokens)
    for start in reversed(range(len(result))):
        position = start
        while _should_switch(result, position):
            result.insert(position, result.pop(position + 2))
            position += 1
    return result