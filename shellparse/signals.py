"""Signal dispositions for the shell's different states."""

from __future__ import annotations

import os
import signal
from enum import Enum, auto

_SIGQUIT = getattr(signal, "SIGQUIT", None)


class SignalMode(Enum):
    """The states the shell sets signal handling for."""

    INTERACTIVE = auto()
    EXECUTE = auto()
    HEREDOC = auto()
    CONTINUATION = auto()
    CHILD = auto()


class _Received:
    """The number of the last signal caught, 0 when none."""

    value = 0


def _note(signum: int) -> None:
    _Received.value = signum
    try:
        os.write(1, b"\n")
    except OSError:
        pass


def _interactive_sigint(signum, frame) -> None:
    _note(signum)


def _interrupting_sigint(signum, frame) -> None:
    _note(signum)
    raise KeyboardInterrupt


_SIGINT_HANDLERS = {
    SignalMode.INTERACTIVE: _interactive_sigint,
    SignalMode.EXECUTE: signal.SIG_IGN,
    SignalMode.HEREDOC: _interrupting_sigint,
    SignalMode.CONTINUATION: _interrupting_sigint,
    SignalMode.CHILD: signal.SIG_DFL,
}


def install(mode: SignalMode) -> None:
    """Install the SIGINT and SIGQUIT handling for ``mode``.

    SIGQUIT is ignored in every mode but CHILD, which restores the
    defaults. While reading a here-document or a continuation line,
    SIGINT interrupts the read with KeyboardInterrupt.
    """
    signal.signal(signal.SIGINT, _SIGINT_HANDLERS[mode])
    if _SIGQUIT is not None:
        quit_handler = signal.SIG_DFL if mode is SignalMode.CHILD else signal.SIG_IGN
        signal.signal(_SIGQUIT, quit_handler)


def received_signal() -> int:
    """Return the number of the last signal caught, or 0."""
    return _Received.value


def reset() -> None:
    """Forget the last signal caught."""
    _Received.value = 0