"""Reading here-documents into temporary files."""

from __future__ import annotations

import itertools
import os
from collections.abc import Callable, Iterable

from shellparse.expansion import expand
from shellparse.variables import VarStore

_PREFIX = "/tmp/heredoc_"
_PROMPT = "> "
_INTERRUPTED_STATUS = "130"

_counter = itertools.count()

ReadLine = Callable[[str], "str | None"]


class HeredocInterrupted(Exception):
    """Reading a here-document was interrupted by the user."""

    def __init__(self, filename: str | None = None) -> None:
        super().__init__("heredoc interrupted")
        self.filename = filename


def temp_filename() -> str:
    """Return the next here-document file name."""
    return f"{_PREFIX}{next(_counter)}"


def collect_heredoc(
    lines: Iterable[str | None], delimiter: str, store: VarStore
) -> list[str]:
    """Gather expanded lines until ``delimiter``, a None line or the end.

    Raises HeredocInterrupted if reading is interrupted; nothing gathered
    so far is kept.
    """
    collected: list[str] = []
    try:
        for line in lines:
            if line is None or line == delimiter:
                break
            collected.append(expand(line, store))
    except KeyboardInterrupt as exc:
        raise HeredocInterrupted() from exc
    return collected


def _default_read_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def _prompted_lines(read_line: ReadLine):
    while True:
        line = read_line(_PROMPT)
        if line is None:
            return
        yield line


def create_heredoc_file(
    delimiter: str, store: VarStore, read_line: ReadLine | None = None
) -> str:
    """Read a here-document and write it to a fresh temporary file.

    Returns the file name. On interruption the file is removed, the exit
    status ``130`` is stored and HeredocInterrupted is raised.
    """
    reader = read_line or _default_read_line
    filename = temp_filename()
    fd = os.open(filename, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o644)
    with os.fdopen(fd, "w") as handle:
        try:
            lines = collect_heredoc(_prompted_lines(reader), delimiter, store)
        except HeredocInterrupted:
            handle.close()
            os.unlink(filename)
            store.set("?", _INTERRUPTED_STATUS)
            raise HeredocInterrupted(filename) from None
        for line in lines:
            handle.write(line + "\n")
    return filename