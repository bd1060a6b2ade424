"""Splitting an expanded input line into typed tokens."""

from __future__ import annotations

from .tokens import (
    Token,
    TokenType,
    in_quote,
    is_operator_symbol,
    is_redirect,
    remove_quotes,
)

BUILTINS = frozenset({"echo", "cd", "pwd", "export", "unset", "env", "exit"})

_SPACES = frozenset(" \t\n\v\f\r")


def _char(text: str, index: int) -> str:
    return text[index] if 0 <= index < len(text) else ""


def _isspace(ch: str) -> bool:
    return ch in _SPACES


def count_tokens(text: str) -> int:
    """Return an upper bound on the number of words ``split_words`` yields.

    Operators count on their own, even inside quotes; a quoted word is
    counted at its closing quote.
    """
    count = 0
    in_word = False
    quote = 0  # 0: none, 1: double quote, 2: single quote
    i = 0
    while i < len(text):
        ch = text[i]
        if (ch == '"' and quote != 2) or (ch == "'" and quote != 1):
            if quote == 0:
                quote = 1 if ch == '"' else 2
            else:
                quote = 0
        width = is_operator_symbol(ch, _char(text, i + 1))
        if width:
            if width == 2:
                i += 1
                ch = text[i]
            count += 1
            in_word = False
        if not _isspace(ch) and not in_word and not quote:
            count += 1
            in_word = True
        elif _isspace(ch) and not quote:
            in_word = False
        i += 1
    return count


def _extra_spaces(text: str) -> int:
    """Estimate how many spaces ``put_space_between_tokens`` may add."""
    current = 0
    spaces = 0
    for ch in text:
        code = ord(ch)
        if ch in "'\"" and current != code:
            current = code
        elif current == code:
            current = 0
        if 1 <= current <= 2 and ch == " ":
            spaces += 1
            current = 0
        elif current < 3:
            current = 1
    return max(count_tokens(text) - spaces - 1, 0)


def put_space_between_tokens(text: str) -> str:
    """Insert spaces between unquoted operators and the words next to them."""
    limit = len(text) + _extra_spaces(text)
    out: list[str] = []
    written = 0
    spacing = 0  # 0: after a space, 1: inside a word, 2: after an operator
    quote = ""
    i = 0
    while i < len(text) and written < limit:
        ch = text[i]
        if (ch == "'" and quote != "'") or (ch == '"' and quote != '"'):
            quote = ch
        elif quote == ch:
            quote = ""
        width = is_operator_symbol(ch, _char(text, i + 1))
        if not quote and width:
            if spacing:
                out.append(" ")
                written += 1
            spacing = 2
        elif ch == " ":
            spacing = 0
        elif not quote:
            if spacing == 2:
                out.append(" ")
                written += 1
            spacing = 1
        else:
            spacing = 1
        step = 2 if width == 2 else 1
        piece = text[i : i + step]
        out.append(piece)
        written += len(piece)
        i += step
    return "".join(out)


def split_words(text: str) -> list[str]:
    """Split ``text`` at unquoted whitespace, keeping the quotes in the words."""
    limit = count_tokens(text)
    words: list[str] = []
    i = 0
    while i < len(text) and len(words) < limit:
        if is_operator_symbol(text[i], _char(text, i + 1)) or not _isspace(text[i]):
            start = i
            quote = ""
            while i < len(text):
                ch = text[i]
                if ch in "'\"":
                    if not quote:
                        quote = ch
                    elif quote == ch:
                        quote = ""
                if _isspace(ch) and not quote:
                    break
                i += 1
            words.append(text[start:i])
        else:
            i += 1
    return words


def _classify(word: str, command_position: bool) -> TokenType:
    if in_quote(word, "'", 0):
        return TokenType.S_QUOTE
    if in_quote(word, '"', 0):
        return TokenType.D_QUOTE
    if word.startswith(("<", ">")):
        return TokenType.REDIR
    if word.startswith("||"):
        return TokenType.LOG_OR
    if word.startswith("&&"):
        return TokenType.LOG_AND
    if word.startswith("|"):
        return TokenType.PIPE
    if command_position and word in BUILTINS:
        return TokenType.BUILTIN
    if word.startswith("("):
        return TokenType.OPEN_BRACE
    if word.startswith(")"):
        return TokenType.CLOSE_BRACE
    return TokenType.WORD


def detect_token_type(word: str, command_position: bool = False) -> list[Token]:
    """Turn one word into tokens.

    An operator glued to a quoted word (``>"file"``) is split off, so one word
    may give several tokens. Unquoted quote characters are removed.
    """
    kind = _classify(word, command_position)
    width = is_operator_symbol(word[:1], word[1:2])
    rest: list[Token] = []
    if kind > TokenType.BUILTIN and len(word) > width:
        rest = detect_token_type(word[width:], False)
        word = word[:width]
    return [Token(kind, remove_quotes(word)), *rest]


def lex(text: str) -> list[Token]:
    """Split an input line into a list of typed tokens."""
    tokens: list[Token] = []
    previous: str | None = None
    for word in split_words(put_space_between_tokens(text)):
        if previous is None:
            command_position = True
        else:
            command_position = bool(
                is_operator_symbol(previous[:1], previous[1:2])
            ) and not is_redirect(previous[:1])
        tokens.extend(detect_token_type(word, command_position))
        previous = word
    return tokens