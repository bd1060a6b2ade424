"""Token kinds and character-level helpers shared by the expander and lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class TokenType(IntEnum):
    """Kinds of lexical tokens; the ordering is significant to later stages."""

    WORD = 0
    S_QUOTE = 1
    D_QUOTE = 2
    BUILTIN = 3
    REDIR = 4
    PIPE = 5
    LOG_OR = 6
    LOG_AND = 7
    OPEN_BRACE = 8
    CLOSE_BRACE = 9


@dataclass
class Token:
    """A single lexed token."""

    type: TokenType
    value: str


_DOUBLE_OPERATORS = frozenset({"<<", ">>", "||", "&&"})
_SINGLE_OPERATORS = frozenset("<>|&()")


def is_operator_symbol(c: str | None, d: str | None = "") -> int:
    """Return 2 for a two-character operator, 1 for a single one, else 0."""
    c = c or ""
    d = d or ""
    if c and d and c + d in _DOUBLE_OPERATORS:
        return 2
    if c and c in _SINGLE_OPERATORS:
        return 1
    return 0


def is_redirect(c: str | None) -> bool:
    """Tell whether a character starts a redirection."""
    return c in ("<", ">")


def in_quote(text: str | None, quote: str | None, index: int | None) -> bool:
    """Tell whether the character at ``index`` lies inside the given quote kind.

    Characters up to and including ``index`` are scanned, so an opening quote
    counts as being inside its own quotation.
    """
    if not quote or text is None or index is None:
        return False
    double = False
    single = False
    for ch in text[: index + 1]:
        if ch == '"' and not single:
            double = not double
        elif ch == "'" and not double:
            single = not single
    return double if quote == '"' else single


def remove_quotes(text: str) -> str:
    """Drop the quote characters that are not themselves quoted."""
    out = []
    single = False
    double = False
    for ch in text:
        if ch == "'" and not double:
            single = not single
        elif ch == '"' and not single:
            double = not double
        else:
            out.append(ch)
    return "".join(out)


def find_closing_quote(text: str) -> int:
    """Return the offset of the quote matching ``text[0]``, or ``len(text)``."""
    if not text:
        raise ValueError("cannot search for a closing quote in empty text")
    closing = text.find(text[0], 1)
    return closing if closing >= 0 else len(text)


def quote_operators(value: str) -> str:
    """Wrap operator symbols in double quotes so they stay literal."""
    out = []
    i = 0
    while i < len(value):
        width = is_operator_symbol(value[i], value[i + 1 : i + 2])
        if width:
            out.append('"' + value[i : i + width] + '"')
            i += width
        else:
            out.append(value[i])
            i += 1
    return "".join(out)