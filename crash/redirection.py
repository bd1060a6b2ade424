"""File redirections, here-documents and pipes between tree nodes."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from contextlib import suppress

from . import interrupts
from .environment import ShellState
from .errors import log_error
from .expander import expand
from .parser import Node
from .tokens import TokenType

HEREDOC_PROMPT = "crash_doc 📄 "


def _close(fd: int) -> None:
    with suppress(OSError):
        os.close(fd)


def get_filename(node: Node) -> str:
    """Return the word a redirection node applies to."""
    target = node.right
    while target.token.type > TokenType.D_QUOTE:
        target = target.left
    return target.token.value


def _open_target(node: Node, state: ShellState) -> int | None:
    symbol = node.token.value
    if symbol.startswith("<"):
        flags = os.O_RDONLY
    elif symbol.startswith(">>"):
        flags = os.O_APPEND | os.O_WRONLY | os.O_CREAT
    else:
        flags = os.O_TRUNC | os.O_WRONLY | os.O_CREAT
    filename = get_filename(node)
    try:
        return os.open(filename, flags, 0o644)
    except OSError as exc:
        if node.in_fd != 0:
            _close(node.in_fd)
        if node.out_fd != 1:
            _close(node.out_fd)
        log_error(exc.strerror, filename)
        state.exit_status = 1
        return None


def _assign(target: Node | None, fd: int, output: bool) -> None:
    if target is None:
        return
    if output:
        target.out_fd = fd
    else:
        target.in_fd = fd


def _propagate(node: Node, fd: int) -> None:
    """Hand ``fd`` to the command under the outermost chained redirection."""
    output = node.token.value.startswith(">")
    while node.parent is not None and node.parent.token.type == TokenType.REDIR:
        node = node.parent
        if node.parent is None or node.parent.token.type != TokenType.REDIR:
            _assign(node.left, fd, output)
            return
    _assign(node.left, fd, not node.token.value.startswith("<"))


def redirect(node: Node, state: ShellState) -> bool:
    """Apply a redirection node.

    Returns False when a file could not be opened (the error is reported and
    the status set to 1); the command should then not run.
    """
    node.redirected = True
    symbol = node.token.value[:1]
    if node.in_fd != 0 and symbol == ">" and node.left is not None:
        node.left.in_fd = node.in_fd
    elif node.in_fd != 0:
        _close(node.in_fd)
    if node.out_fd != 1 and symbol == "<" and node.left is not None:
        node.left.out_fd = node.out_fd
    elif node.out_fd != 1:
        _close(node.out_fd)
    if node.token.value.startswith("<<"):
        heredoc(node, state)
        return True
    fd = _open_target(node, state)
    if fd is None:
        return False
    following = node.right
    if (
        following is not None
        and following.token.type == TokenType.REDIR
        and following.token.value[:1] == symbol
    ):
        _close(fd)
        return redirect(following, state)
    _propagate(node, fd)
    return True


def _read_heredoc_line() -> str | None:
    stream = sys.stdin
    if stream.isatty():
        try:
            return input(HEREDOC_PROMPT)
        except EOFError:
            return None
    line = stream.readline()
    if not line:
        return None
    return line[:-1]


def heredoc(
    node: Node,
    state: ShellState,
    read_line: Callable[[], str | None] | None = None,
) -> bool:
    """Collect here-document lines into a pipe read by the node's command.

    Reading stops at end of input or at a non-empty line that is a prefix of
    the delimiter. Lines are expanded unless the delimiter was quoted.
    Returns False when an interrupt cut the document short.
    """
    reader = read_line or _read_heredoc_line
    if node.right.token.type == TokenType.REDIR:
        redirect(node.right, state)
    try:
        read_end, write_end = os.pipe()
    except OSError:
        return False
    delimiter = get_filename(node)
    quoted = node.right.token.type in (TokenType.D_QUOTE, TokenType.S_QUOTE)
    interrupted = False
    previous = interrupts.current_mode()
    interrupts.set_mode(interrupts.InterruptMode.HEREDOC)
    try:
        while not interrupts.sigint_received():
            try:
                line = reader()
            except KeyboardInterrupt:
                interrupted = True
                break
            if line is None or (line and delimiter.startswith(line)):
                break
            if interrupts.sigint_received():
                break
            if line and not quoted:
                line = expand(line, state, True)
            os.write(write_end, (line + "\n").encode())
    finally:
        interrupts.set_mode(previous)
    if interrupted or interrupts.sigint_received():
        _close(read_end)
        _close(write_end)
        interrupts.clear()
        return False
    _close(write_end)
    if node.left is None:
        _close(read_end)
    else:
        node.left.in_fd = read_end
    return True


def setup_pipe(node: Node) -> None:
    """Connect the last command on the left to the first one on the right."""
    try:
        read_end, write_end = os.pipe()
    except OSError:
        sys.stderr.write("pipe error\n")
        sys.stderr.flush()
        return
    source = node.left
    while source.right is not None and source.token.type != TokenType.REDIR:
        source = source.right
    sink = node.right
    while sink.left is not None and sink.token.type != TokenType.REDIR:
        sink = sink.left
    source.out_fd = write_end
    sink.in_fd = read_end