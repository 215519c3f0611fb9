"""Checks on a typed line and reading the rest of a line left open by a pipe."""

from __future__ import annotations

import signal
from collections.abc import Callable

from shellparse import signals
from shellparse.signals import SignalMode

ReadLine = Callable[[str], "str | None"]

_PROMPT = "> "
_BLANKS = " \t"


def is_quote_closed(text: str) -> bool:
    """Return True if no single or double quote is left open in ``text``."""
    in_single = False
    in_double = False
    for char in text:
        if char == "'" and not in_double:
            in_single = not in_single
        elif char == '"' and not in_single:
            in_double = not in_double
    return not in_single and not in_double


def is_input_incomplete(text: str) -> bool:
    """Return True if ``text`` ends with a single pipe and needs more input.

    Trailing blanks are ignored. A line ending in ``||`` or with an open
    quote is not treated as incomplete.
    """
    stripped = text.rstrip(_BLANKS)
    if not stripped or not stripped.endswith("|"):
        return False
    before = stripped[:-1].rstrip(_BLANKS)
    if before.endswith("|"):
        return False
    return is_quote_closed(text)


def join_continuation(text: str, continuation: str) -> str:
    """Join a line and its continuation with a single space."""
    return f"{text} {continuation}"


def _default_read_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def read_continuation(
    text: str, read_line: ReadLine | None = None
) -> str | None:
    """Prompt for the rest of ``text`` and return the joined line.

    Returns None when input ends or the user interrupts; returns ``text``
    unchanged when the continuation is empty.
    """
    reader = read_line or _default_read_line
    signals.reset()
    signals.install(SignalMode.CONTINUATION)
    try:
        continuation = reader(_PROMPT)
    except KeyboardInterrupt:
        continuation = None
    finally:
        signals.install(SignalMode.INTERACTIVE)
    if continuation is None or signals.received_signal() == signal.SIGINT:
        return None
    if continuation:
        return join_continuation(text, continuation)
    return text