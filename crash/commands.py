"""Locating external programs and building their argument lists."""

from __future__ import annotations

import os
from collections.abc import Sequence

from .environment import Environment
from .tokens import Token


def find_command_path(env: Environment, name: str) -> str | None:
    """Return the path to run for ``name``, or None when it is not found.

    Names that are executable as given, or start with ``./`` or ``/``, are
    used directly; otherwise each directory of ``PATH`` is tried in order.
    """
    if os.access(name, os.X_OK) or name.startswith(("./", "/")):
        return name
    search = env.get("PATH")
    if search is None:
        return None
    for directory in filter(None, search.split(":")):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None


def build_command(env: Environment, tokens: Sequence[Token]) -> tuple[str, list[str]] | None:
    """Return the program path and argument list, or None if not found."""
    if not tokens:
        return None
    path = find_command_path(env, tokens[0].value)
    if path is None:
        return None
    return path, [token.value for token in tokens]