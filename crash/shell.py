"""The read-expand-lex-validate-parse-execute loop of the shell."""

from __future__ import annotations

import os
import sys
from typing import TextIO

from . import interrupts
from .environment import Environment, ShellState
from .errors import FatalError, log_error
from .executor import execute
from .expander import expand
from .lexer import lex
from .logo import print_logo
from .parser import parse
from .processes import ProcessList
from .reorder import switch_redir_args
from .validator import ShellSyntaxError, validate

try:
    import readline
except ImportError:  # not available on every platform
    readline = None

PROMPT_OK = "\x1b[36mcrash 💣 \x1b[0m"
PROMPT_FAILED = "\x1b[31mcrash 💥 \x1b[0m"

_SPACES = " \t\n\v\f\r"


def _isatty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError, OSError):
        return False


def run_line(line: str, state: ShellState) -> int:
    """Run one input line and return the shell's status afterwards."""
    tokens = lex(expand(line, state, False))
    if not tokens:
        return state.exit_status
    try:
        validate(tokens)
    except ShellSyntaxError as exc:
        sys.stderr.write(f"{exc}\n")
        sys.stderr.flush()
        state.exit_status = exc.exit_code
        if not _isatty(sys.stdin):
            state.exit_flag = True
        return state.exit_status
    state.exit_status = 0
    tree = parse(switch_redir_args(tokens))
    if tree is None:
        return state.exit_status
    tree.parent = None
    processes = ProcessList()
    execute(tree, state, processes)
    processes.resolve(state)
    return state.exit_status


def read_input(state: ShellState, stream: TextIO | None = None) -> str | None:
    """Read the next line; None at end of input.

    On a terminal a prompt shows whether the last command failed, and an
    interrupt gives back an empty line.
    """
    stream = sys.stdin if stream is None else stream
    if _isatty(stream):
        prompt = PROMPT_OK if state.exit_status == 0 else PROMPT_FAILED
        try:
            if stream is sys.stdin:
                return input(prompt)
            sys.stdout.write(prompt)
            sys.stdout.flush()
            line = stream.readline()
            return line.rstrip("\n") if line else None
        except EOFError:
            return None
        except KeyboardInterrupt:
            return ""
    line = stream.readline()
    if not line:
        return None
    return line.strip("\n")


def run_input_loop(state: ShellState, stream: TextIO | None = None) -> None:
    """Read and run lines until end of input or ``exit``."""
    stream = sys.stdin if stream is None else stream
    interactive = _isatty(stream)
    while not state.exit_flag:
        line = read_input(state, stream)
        if line is None:
            break
        if interrupts.sigint_received():
            interrupts.clear()
            state.exit_status = 1
            continue
        if not line.strip(_SPACES):
            continue
        if interactive and readline is not None:
            readline.add_history(line)
        run_line(line, state)
        interrupts.clear()


def main(argv: list[str] | None = None) -> int:
    """Start the shell on standard input; return its final status."""
    print_logo()
    state = ShellState(env=Environment(os.environ))
    interrupts.setup_signals()
    try:
        run_input_loop(state, sys.stdin)
    except FatalError as exc:
        log_error(exc.message)
        return exc.exit_code
    return state.exit_status