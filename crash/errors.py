"""Error reporting for the shell."""

from __future__ import annotations

import sys


class FatalError(Exception):
    """An error after which the shell has to stop with ``exit_code``."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


def format_error(message: str | None, *args: str | None) -> str:
    """Build ``crash: path1: path2: message``, skipping paths that are None."""
    parts = ["crash", *(path for path in args if path is not None)]
    parts.append(message if message is not None else "error")
    return ": ".join(parts)


def log_error(message: str | None, *args: str | None) -> None:
    """Write a formatted error line to standard error."""
    sys.stderr.write(format_error(message, *args) + "\n")
    sys.stderr.flush()