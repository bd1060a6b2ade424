"""Bookkeeping of the commands started for one command line."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from . import interrupts
from .environment import ShellState


@dataclass
class _Entry:
    process: Any
    is_builtin: bool


def _exit_code(process: Any) -> int:
    """Wait for a child and return its status the way a shell reports it."""
    if isinstance(process, int):
        try:
            _, status = os.waitpid(process, 0)
        except ChildProcessError:
            return 0
        code = os.waitstatus_to_exitcode(status)
    else:
        code = process.wait()
    if code < 0:
        return 128 - code
    return code


class ProcessList:
    """Commands started in order; builtins are recorded without a process.

    A process is either a pid or an object with a ``wait()`` method that
    returns its exit code, negative when a signal ended it.
    """

    def __init__(self) -> None:
        self._entries: list[_Entry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Any]:
        return iter([entry.process for entry in self._entries])

    def add(self, pid: Any, is_builtin: bool = False) -> None:
        """Record a started process, or a builtin that ran in the shell."""
        self._entries.append(_Entry(pid, is_builtin))

    def resolve(self, state: ShellState) -> None:
        """Wait for every process and empty the list.

        The status of the last process waited for becomes the shell's status,
        unless the shell's status is already non-zero. When the last entry is
        a builtin its own status is kept.
        """
        entries, self._entries = self._entries, []
        previous = interrupts.current_mode()
        interrupts.set_mode(interrupts.InterruptMode.CHILDREN)
        exit_status = 0
        try:
            for position, entry in enumerate(entries):
                if entry.is_builtin:
                    if position == len(entries) - 1:
                        return
                    continue
                exit_status = _exit_code(entry.process)
        finally:
            interrupts.set_mode(previous)
        if state.exit_status == 0:
            state.exit_status = exit_status