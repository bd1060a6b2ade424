"""Walking the command tree: running commands, builtins and operators."""

from __future__ import annotations

import os
import subprocess
import sys
from contextlib import suppress
from dataclasses import dataclass

from .builtins import run_builtin
from .commands import build_command
from .environment import Environment, ShellState
from .errors import log_error
from .parser import Node
from .processes import ProcessList
from .redirection import redirect, setup_pipe
from .tokens import TokenType


@dataclass
class _Unlaunched:
    """A command that could not be started; it "exits" with ``returncode``."""

    returncode: int

    def wait(self) -> int:
        return self.returncode


def close_fds(node: Node) -> None:
    """Close the node's descriptors that are not the standard ones."""
    if node.in_fd != 0:
        with suppress(OSError):
            os.close(node.in_fd)
    if node.out_fd != 1:
        with suppress(OSError):
            os.close(node.out_fd)


def _child_environment(env: Environment) -> dict[str, str]:
    return dict(entry.split("=", 1) for entry in env if "=" in entry)


def execute_node(node: Node, state: ShellState, processes: ProcessList) -> int:
    """Start an external command for a leaf node without waiting for it."""
    name = node.token.value
    command = build_command(state.env, node.tokens)
    try:
        if command is None:
            raise FileNotFoundError(name)
        path, args = command
        child = subprocess.Popen(
            args,
            executable=path,
            stdin=node.in_fd if node.in_fd != 0 else None,
            stdout=node.out_fd if node.out_fd != 1 else None,
            env=_child_environment(state.env),
            close_fds=True,
        )
    except PermissionError:
        log_error("is a directory", name)
        processes.add(_Unlaunched(126), False)
    except OSError:
        log_error("command not found", name)
        processes.add(_Unlaunched(127), False)
    else:
        processes.add(child, False)
    close_fds(node)
    return state.exit_status


def _execute_builtin(node: Node, state: ShellState, processes: ProcessList) -> int:
    if node.out_fd == 1:
        state.exit_status = run_builtin(node.tokens, state, sys.stdout)
    else:
        try:
            with open(node.out_fd, "w", encoding="utf-8", closefd=False) as out:
                state.exit_status = run_builtin(node.tokens, state, out)
        except BrokenPipeError:
            pass
    close_fds(node)
    processes.add(None, True)
    return state.exit_status


def _execute_leaf(node: Node, state: ShellState, processes: ProcessList) -> None:
    if node.token.type == TokenType.BUILTIN:
        state.exit_status = _execute_builtin(node, state, processes)
    else:
        state.exit_status = execute_node(node, state, processes)


def logical_and(node: Node, state: ShellState, processes: ProcessList) -> int:
    """Run the right side only when the left side succeeded."""
    local = ProcessList()
    if node.left is not None:
        state.exit_status = execute(node.left, state, local)
    local.resolve(state)
    if state.exit_status == 0 and node.right is not None:
        state.exit_status = execute(node.right, state, processes)
    return state.exit_status


def logical_or(node: Node, state: ShellState, processes: ProcessList) -> int:
    """Run the right side only when the left side failed."""
    local = ProcessList()
    if node.left is not None:
        state.exit_status = execute(node.left, state, local)
    local.resolve(state)
    if state.exit_status != 0 and node.right is not None:
        state.exit_status = execute(node.right, state, processes)
    return state.exit_status


def _execute_branch(tree: Node, state: ShellState, processes: ProcessList) -> int:
    kind = tree.token.type
    if kind == TokenType.LOG_AND:
        return logical_and(tree, state, processes)
    if kind == TokenType.LOG_OR:
        return logical_or(tree, state, processes)
    if kind == TokenType.PIPE:
        setup_pipe(tree)
    elif kind == TokenType.REDIR:
        if not redirect(tree, state) or tree.left is None:
            return state.exit_status
    right = tree.right
    if (
        kind == TokenType.REDIR
        and right is not None
        and right.token.type == TokenType.REDIR
        and (
            (tree.left is not None and tree.left.token.type < right.token.type)
            or (tree.parent is not None and tree.parent.token.type == TokenType.REDIR)
        )
    ):
        if not redirect(right, state):
            return state.exit_status
    state.exit_status = execute(tree.left, state, processes)
    if kind == TokenType.PIPE and right is not None and not right.redirected:
        state.exit_status = execute(right, state, processes)
    return state.exit_status


def execute(tree: Node | None, state: ShellState, processes: ProcessList) -> int:
    """Run a (sub)tree; started processes are added to ``processes``."""
    if state.exit_flag or tree is None:
        return state.exit_status
    if tree.is_leaf:
        _execute_leaf(tree, state, processes)
    else:
        _execute_branch(tree, state, processes)
    return state.exit_status