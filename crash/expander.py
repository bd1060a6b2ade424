"""Expansion of ``~``, ``$NAME``, ``$?``, ``$"..."`` and ``*`` in input lines."""

from __future__ import annotations

from .environment import ShellState
from .tokens import find_closing_quote, in_quote, is_operator_symbol, quote_operators
from .wildcard import expand_wildcard

_SPACES = frozenset(" \t\n\v\f\r")


def _char(text: str, index: int) -> str:
    return text[index] if 0 <= index < len(text) else ""


def _isspace(ch: str) -> bool:
    return ch in _SPACES


def _not_after_heredoc(text: str, index: int) -> bool:
    """Tell whether the word at ``index`` is not a here-document delimiter."""
    j = index
    while j > 0 and not is_operator_symbol(text[j], " ") and not _isspace(text[j]):
        j -= 1
    while j > 0 and _isspace(text[j]):
        j -= 1
    if (
        j > 0
        and text[j - 1 : j + 1] == "<<"
        and not in_quote(text, '"', j - 1)
        and not in_quote(text, "'", j - 1)
    ):
        return False
    return True


def is_valid_variable(text: str) -> bool:
    """Tell whether ``text`` starts with a valid variable name."""
    if not text:
        return False
    first = text[0]
    return first == "_" or (first.isascii() and first.isalpha())


def isolate_var(text: str) -> str:
    """Return the variable name at the start of ``text``."""
    for i, ch in enumerate(text):
        if ch in " '\"$/?" or is_operator_symbol(ch, text[i + 1 : i + 2]):
            return text[:i]
    return text


def lookup_variable(name: str, state: ShellState) -> str:
    """Return the value of ``name``, or an empty string when it is not set."""
    value = state.env.get(name)
    return "" if value is None else value


def should_expand(text: str, index: int, kind: str) -> bool:
    """Tell whether the expansion ``kind`` applies at ``text[index]``.

    ``kind`` is one of ``~``, ``?``, ``"``, ``$``, ``s`` and ``*``.
    """
    if not _not_after_heredoc(text, index):
        return False
    in_single = in_quote(text, "'", index)
    in_double = in_quote(text, '"', index)
    following = _char(text, index + 1)
    if kind == "~":
        before = _char(text, index - 1)
        return (
            (_isspace(following) or following == "" or following == "/")
            and (index == 0 or _isspace(before) or bool(is_operator_symbol(before, " ")))
            and not in_single
            and not in_double
        )
    if kind == "?":
        return text[index : index + 2] == "$?" and not in_single
    if kind == '"':
        return (
            _char(text, index) == "$"
            and not in_double
            and not in_single
            and following in ("'", '"')
        )
    if kind == "$":
        return is_valid_variable(text[index + 1 :]) and not in_single
    if kind == "s":
        return not is_valid_variable(text[index + 1 :]) and not in_single and not in_double
    if kind == "*":
        return not in_single and not in_double
    return False


def expand(text: str, state: ShellState, heredoc: bool = False) -> str:
    """Return ``text`` with every applicable expansion performed.

    In a here-document (``heredoc``) stars are left alone.
    """
    out = ""
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "~" and should_expand(text, i, "~"):
            out += lookup_variable("HOME", state)
        elif ch == "$" and should_expand(text, i, "?"):
            out += str(state.exit_status)
            i += 1
        elif ch == "$" and should_expand(text, i, '"'):
            width = find_closing_quote(text[i + 1 :])
            out += text[i + 1 : i + 1 + width]
            i += width
        elif ch == "$" and should_expand(text, i, "$"):
            name = isolate_var(text[i + 1 :])
            i += len(name)
            out += quote_operators(lookup_variable(name, state))
        elif ch == "*" and not heredoc and should_expand(text, i, "*"):
            out, i = expand_wildcard(text, i, out)
        else:
            out += ch
        i += 1
    return out