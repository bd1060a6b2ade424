"""Expansion of unquoted ``*`` patterns against the current directory."""

from __future__ import annotations

import os
import sys

from .tokens import in_quote, is_operator_symbol


def _char(text: str, index: int) -> str:
    return text[index] if 0 <= index < len(text) else ""


def _unescaped_star(pattern: str, index: int) -> bool:
    return _char(pattern, index) == "*" and (index == 0 or pattern[index - 1] != "\\")


def _in_word(text: str, index: int) -> bool:
    """Tell whether ``text[index]`` belongs to the current word."""
    ch = _char(text, index)
    return (
        (ch != " " and not is_operator_symbol(ch, " "))
        or in_quote(text, '"', index)
        or in_quote(text, "'", index)
    )


def match(pattern: str, filename: str) -> bool:
    """Match ``filename`` against ``pattern``; ``\\*`` stands for a literal star."""
    p = f = 0
    star: int | None = None
    mark = 0
    while f < len(filename):
        pc = _char(pattern, p)
        fc = filename[f]
        if pc == fc and pc != "*":
            p += 1
            f += 1
        elif pc == "\\" and _char(pattern, p + 1) == "*" and fc == "*":
            p += 2
            f += 1
        elif _unescaped_star(pattern, p):
            star = p
            p += 1
            mark = f
        elif star is not None:
            p = star + 1
            mark += 1
            f = mark
        else:
            return False
    while _unescaped_star(pattern, p):
        p += 1
    return p == len(pattern)


def _unquote_pattern(text: str) -> str:
    """Remove quotes and escape every star that was inside them."""
    out = []
    single = double = False
    for ch in text:
        if ch == "*" and (single or double):
            out.append("\\")
        if ch == "'" and not double:
            single = not single
        elif ch == '"' and not single:
            double = not double
        if ch not in "'\"":
            out.append(ch)
    return "".join(out)


def get_pattern(text: str, index: int) -> str:
    """Return the unquoted word of ``text`` that contains position ``index``."""
    end = index
    while end < len(text) and _in_word(text, end):
        end += 1
    start = index
    while start > 0 and _in_word(text, start - 1):
        start -= 1
    return _unquote_pattern(text[start:end])


def list_matching_files(pattern: str, directory: str | os.PathLike = ".") -> str | None:
    """Return the matching names, each single-quoted and space separated.

    Hidden entries are only considered when the pattern starts with a dot.
    Returns None when nothing matches or the directory cannot be read.
    """
    try:
        names = sorted(os.listdir(directory))
    except OSError as exc:
        sys.stderr.write(f"opendir() error: {exc.strerror}\n")
        return None
    matches = [
        name
        for name in (".", "..", *names)
        if not (name.startswith(".") and not pattern.startswith("."))
        and match(pattern, name)
    ]
    if not matches:
        return None
    return " ".join(f"'{name}'" for name in matches)


def expand_wildcard(text: str, index: int, buffer: str) -> tuple[str, int]:
    """Expand the pattern around ``text[index]`` into ``buffer``.

    Returns the new buffer and the index of the last character consumed.
    """
    found = list_matching_files(get_pattern(text, index))
    if found is None:
        return buffer + "*", index
    pos = len(buffer)
    while pos > 0 and _in_word(text, pos - 1):
        pos -= 1
    buffer = (buffer[:pos] + found)[: index + len(found)]
    end = index
    while (
        end < len(text)
        and (text[end] != " " or in_quote(text, '"', end) or in_quote(text, "'", end))
        and not is_operator_symbol(text[end], " ")
    ):
        end += 1
    return buffer, end - 1