"""Finding the process id of the running shell from ``ps`` output."""

from __future__ import annotations

import subprocess

SHELL_NAME = "minishell"

_PS_COMMAND = ("/bin/ps", "-o", "pid,ppid,command")
_READ_LIMIT = 4095
_COMMAND_LIMIT = 63
_BLANKS = " \t"


def _leading_int(text: str) -> int:
    """Read an optionally signed integer at the start of ``text``."""
    text = text.lstrip(" \t\n\v\f\r")
    sign = 1
    if text[:1] in ("+", "-"):
        if text[0] == "-":
            sign = -1
        text = text[1:]
    digits = []
    for char in text:
        if not char.isdigit():
            break
        digits.append(char)
    return sign * int("".join(digits)) if digits else 0


def _split_line(line: str) -> tuple[str, str]:
    """Return the pid field and the (truncated) command field of a line."""
    rest = line.lstrip(_BLANKS)
    pid_field, _, rest = _partition_blank(rest)
    rest = rest.lstrip(_BLANKS)
    _ppid_field, _, rest = _partition_blank(rest)
    command = rest.lstrip(_BLANKS)[:_COMMAND_LIMIT]
    return pid_field, command


def _partition_blank(text: str) -> tuple[str, str, str]:
    for index, char in enumerate(text):
        if char in _BLANKS:
            return text[:index], char, text[index + 1 :]
    return text, "", ""


def parse_ps_output(output: str) -> int:
    """Return the pid of the first shell process listed, or 0.

    The first line is the column header and is skipped. A line counts
    when its command mentions the shell's name and does not mention
    ``ps``.
    """
    if not output:
        return 0
    for line in output.split("\n")[1:]:
        if not line:
            continue
        pid_field, command = _split_line(line)
        if SHELL_NAME in command and "ps" not in command:
            pid = _leading_int(pid_field)
            if pid > 0:
                return pid
    return 0


def find_shell_pid() -> int:
    """Run ``ps`` and return the shell's pid, or 0 if it cannot be found."""
    try:
        result = subprocess.run(
            list(_PS_COMMAND),
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            env={},
            check=False,
        )
    except OSError:
        return 0
    data = (result.stdout or b"")[:_READ_LIMIT]
    if not data:
        return 0
    return parse_ps_output(data.decode("utf-8", errors="replace"))


def pid_value() -> str:
    """Return the value that ``$$`` expands to."""
    pid = find_shell_pid()
    return str(pid) if pid > 0 else "0"