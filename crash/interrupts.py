"""Interrupt handling: what Ctrl-C does depends on what the shell is doing."""

from __future__ import annotations

import signal
import sys
from dataclasses import dataclass
from enum import Enum


class InterruptMode(Enum):
    """What the shell is busy with when an interrupt arrives."""

    PROMPT = "prompt"
    CHILDREN = "children"
    HEREDOC = "heredoc"


@dataclass
class _Status:
    mode: InterruptMode = InterruptMode.PROMPT
    received: bool = False


_status = _Status()


def _handle_sigint(signum, frame) -> None:
    _status.received = True
    sys.stdout.write("\n")
    sys.stdout.flush()
    if _status.mode is not InterruptMode.CHILDREN:
        # Abort the pending read so the prompt or here-document starts over.
        raise KeyboardInterrupt


def setup_signals() -> None:
    """Install the interrupt handler and ignore the quit signal."""
    signal.signal(signal.SIGINT, _handle_sigint)
    sigquit = getattr(signal, "SIGQUIT", None)
    if sigquit is not None:
        signal.signal(sigquit, signal.SIG_IGN)


def set_mode(mode: InterruptMode) -> None:
    """Record what the shell is doing now."""
    _status.mode = InterruptMode(mode)


def current_mode() -> InterruptMode:
    """Return what the shell is doing now."""
    return _status.mode


def sigint_received() -> bool:
    """Tell whether an interrupt arrived since the last ``clear``."""
    return _status.received


def clear() -> None:
    """Forget any interrupt received so far."""
    _status.received = False