"""The welcome banner shown when the shell starts."""

from __future__ import annotations

import os
import sys
from pathlib import Path

ANSI_COLOR_RED = "\x1b[31m"
ANSI_COLOR_YELLOW = "\x1b[33m"
ANSI_COLOR_CYAN = "\x1b[36m"
ANSI_COLOR_RESET = "\x1b[0m"
CLEAR_SCREEN = "\033[H\033[J"

HEADING_LINES = 10
HEADING_LINE_LENGTH = 47


def _paint(color: str, ch: str) -> str:
    return f"{color}{ch}{ANSI_COLOR_RESET}"


def colorize_heading_line(line: str, line_number: int) -> str:
    """Colour the drawing characters of one line of the heading."""
    out = []
    for ch in line.split("\0", 1)[0]:
        if ch in "()":
            out.append(_paint(ANSI_COLOR_RED, ch))
        elif line_number < 6:
            if ch in "/\\":
                out.append(_paint(ANSI_COLOR_YELLOW, ch))
            elif ch in "|_'`-,<":
                out.append(_paint(ANSI_COLOR_CYAN, ch))
            else:
                out.append(ch)
        elif ch in "|/'\\_`-,<":
            out.append(_paint(ANSI_COLOR_CYAN, ch))
        else:
            out.append(ch)
    return "".join(out)


def render_logo(user: str | None, heading_lines) -> str:
    """Build the whole banner: clear screen, heading and welcome line."""
    parts = [CLEAR_SCREEN]
    parts.extend(
        colorize_heading_line(line, number) for number, line in enumerate(heading_lines)
    )
    name = user if user is not None else "(null)"
    parts.append(
        f"   Welcome to {ANSI_COLOR_RED}CRASH{ANSI_COLOR_RESET}, {name}!"
        " - crazy robust & advanced shell!\n"
    )
    parts.append("\n                               ---\n\n")
    return "".join(parts)


def _read_heading(path: str | os.PathLike) -> list[str]:
    """Read the heading in fixed-size chunks; short reads keep older bytes."""
    try:
        data = Path(path).read_bytes()
    except OSError:
        return []
    lines = []
    buffer = b""
    for number in range(HEADING_LINES):
        chunk = data[number * HEADING_LINE_LENGTH : (number + 1) * HEADING_LINE_LENGTH]
        buffer = chunk + buffer[len(chunk) :]
        lines.append(buffer.decode("utf-8", errors="replace"))
    return lines


def print_logo(heading_path: str | os.PathLike = "./src/logo.txt") -> None:
    """Clear the terminal and print the banner to standard output."""
    sys.stdout.write(render_logo(os.environ.get("USER"), _read_heading(heading_path)))
    sys.stdout.flush()