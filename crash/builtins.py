"""The commands the shell runs itself: echo, cd, pwd, export, unset, env, exit."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from itertools import takewhile
from typing import TextIO

from .environment import ShellState
from .errors import log_error
from .tokens import Token, TokenType


def _is_word(token: Token) -> bool:
    return token.type <= TokenType.D_QUOTE


def run_echo(tokens: Sequence[Token], out: TextIO, state: ShellState) -> int:
    """Print the arguments; leading ``-n``/``-nnn`` flags drop the newline."""
    if len(tokens) < 2:
        out.write("\n")
        return 0
    index = 1
    newline = True
    while index < len(tokens) and tokens[index].value.startswith("-"):
        flag = tokens[index].value[1:]
        if not flag or flag.strip("n"):
            break
        newline = False
        index += 1
    words = takewhile(_is_word, tokens[index:])
    out.write(" ".join(token.value for token in words))
    if newline:
        out.write("\n")
    state.exit_status = 0
    return 0


def _cd_target(tokens: Sequence[Token], state: ShellState, out: TextIO) -> str | None:
    if len(tokens) < 2 or tokens[1].value.startswith("--"):
        home = state.env.get("HOME")
        if home is None:
            log_error("HOME not set", "cd")
            state.exit_status = 1
        return home
    if tokens[1].value.startswith("-"):
        previous = state.env.get("OLDPWD")
        if previous is None:
            state.exit_status = 1
            log_error("OLDPWD not set", "cd")
            return None
        out.write(previous + "\n")
        return previous
    return tokens[1].value


def run_cd(tokens: Sequence[Token], state: ShellState, out: TextIO) -> int:
    """Change directory and update ``PWD`` and ``OLDPWD``."""
    path = _cd_target(tokens, state, out)
    if path is None:
        return 1
    try:
        os.chdir(path)
    except OSError:
        log_error("error changing directory", "cd")
        state.exit_status = 1
        return 1
    try:
        current = os.getcwd()
    except OSError:
        log_error("getcwd failed", "cd")
        state.exit_status = 1
        return -1
    state.env.set("OLDPWD", state.env.get("PWD"), create=True)
    state.env.set("PWD", current, create=False)
    return 0


def run_pwd(out: TextIO, state: ShellState) -> int:
    """Print the current working directory."""
    try:
        current = os.getcwd()
    except OSError as exc:
        log_error("error changing directory", "pwd")
        return exc.errno or 1
    out.write(current + "\n")
    state.exit_status = 0
    return 0


def _valid_export_name(text: str) -> bool:
    name = text.split("=", 1)[0]
    if not name or not (name[0] == "_" or (name[0].isascii() and name[0].isalpha())):
        return False
    return all(ch == "_" or (ch.isascii() and ch.isalnum()) for ch in name[1:])


def _export_error(argument: str, state: ShellState) -> int:
    sys.stderr.write(f"crash: export: `{argument}': not a valid identifier\n")
    sys.stderr.flush()
    state.exit_status = 1
    return 1


def run_export(tokens: Sequence[Token], out: TextIO, state: ShellState) -> int:
    """Set ``NAME=value`` arguments, or list the environment with no arguments."""
    if len(tokens) < 2:
        for entry in state.env:
            out.write(f"declare -x {entry}\n")
        return 0
    for token in tokens[1:]:
        text = token.value
        equals = text.find("=")
        if equals == 0 or not _valid_export_name(text):
            return _export_error(text, state)
        if equals < 0:
            continue
        state.env.set(text[:equals], text[equals + 1 :], create=True)
    return state.exit_status


def _valid_unset_name(text: str) -> bool:
    if not text or not (text[0] == "_" or (text[0].isascii() and text[0].isalpha())):
        return False
    return all(ch == "_" or (ch.isascii() and ch.isalnum()) for ch in text[1:])


def run_unset(tokens: Sequence[Token], state: ShellState) -> int:
    """Remove variables; stop at the first invalid name."""
    for token in tokens[1:]:
        name = token.value
        if "=" in name or not _valid_unset_name(name) or name[:1] in ("?", "$"):
            log_error("not a valid identifier", "unset", name)
            state.exit_status = 1
            return 1
        state.env.delete(name)
    state.exit_status = 0
    return 0


def run_env(state: ShellState, out: TextIO) -> int:
    """Print every environment entry on its own line."""
    for entry in state.env:
        out.write(entry + "\n")
    return 0


def _is_number(text: str) -> bool:
    digits = text[1:] if text[:1] in ("-", "+") else text
    return all(ch in "0123456789" for ch in digits)


def _atoi(text: str) -> int:
    sign = -1 if text.startswith("-") else 1
    digits = text[1:] if text[:1] in ("-", "+") else text
    return sign * int(digits) if digits else 0


def run_exit(
    tokens: Sequence[Token],
    state: ShellState,
    out: TextIO,
    interactive: bool | None = None,
) -> int:
    """Ask the shell to stop, with the given status taken modulo 256."""
    argument = tokens[1].value if len(tokens) > 1 else None
    if argument is not None and (not _is_number(argument) or argument == ""):
        log_error("numeric argument required", "exit")
        state.exit_status = 255
    elif argument is not None and len(tokens) > 2:
        sys.stderr.write("exit: too many arguments\n")
        sys.stderr.flush()
        state.exit_status = 1
    elif argument is not None:
        state.exit_status = _atoi(argument) % 256
    else:
        state.exit_status = 0
    state.exit_flag = True
    if interactive is None:
        try:
            interactive = sys.stdin.isatty()
        except (AttributeError, ValueError):
            interactive = False
    if interactive:
        out.write("exit\n")
    return state.exit_status


def run_builtin(tokens: Sequence[Token], state: ShellState, out: TextIO) -> int:
    """Run the builtin named by the first token and record its status."""
    name = tokens[0].value
    if name.startswith("echo"):
        state.exit_status = run_echo(tokens, out, state)
    elif name.startswith("cd"):
        state.exit_status = run_cd(tokens, state, out)
    elif name.startswith("pwd"):
        state.exit_status = run_pwd(out, state)
    elif name.startswith("export"):
        state.exit_status = run_export(tokens, out, state)
    elif name.startswith("unset"):
        state.exit_status = run_unset(tokens, state)
    elif name.startswith("env"):
        state.exit_status = run_env(state, out)
    elif name.startswith("exit"):
        state.exit_status = run_exit(tokens, state, out)
    out.flush()
    return state.exit_status