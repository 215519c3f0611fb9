"""Shell variables: an ordered store and lookup with environment fallback."""

from __future__ import annotations

import os
import re
from collections.abc import Iterator

from shellparse.pid import pid_value

_ASSIGNMENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*=")


def is_var_assignment(text: str | None) -> bool:
    """Return True if ``text`` starts with ``NAME=``."""
    if text is None:
        return False
    return _ASSIGNMENT.match(text) is not None


class VarStore:
    """Shell variables kept in the order they were first set."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def set(self, key: str, value: str) -> None:
        """Set ``key``, replacing its value if it already exists."""
        self._values[key] = value

    def get(self, key: str) -> str | None:
        """Return the value of ``key``, or None if it is not set."""
        return self._values.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def clear(self) -> None:
        """Remove every variable."""
        self._values.clear()

    def declare_from(self, word: str) -> bool:
        """Store ``KEY=VALUE`` from ``word`` if it holds an ``=``.

        Everything before the first ``=`` is the key, everything after it
        the value. Returns whether a variable was stored.
        """
        key, sep, value = word.partition("=")
        if not sep:
            return False
        self.set(key, value)
        return True

    def lookup(self, name: str) -> str:
        """Return what ``$name`` expands to.

        ``$`` gives the shell's pid, ``?`` the last exit status (``0``
        when unset or empty); other names come from the store, then from
        the process environment, and are empty when found in neither.
        """
        if name == "$":
            return pid_value()
        if name == "?":
            return self._values.get("?") or "0"
        if name in self._values:
            value = self._values[name]
        else:
            value = os.environ.get(name)
        return value or ""