"""Grouping tokens into simple commands joined by pipes."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum, auto

from shellparse.expansion import expand_word
from shellparse.heredoc import HeredocInterrupted, create_heredoc_file
from shellparse.pid import SHELL_NAME
from shellparse.quoting import remove_quotes
from shellparse.tokens import (
    ShellSyntaxError,
    Token,
    TokenType,
    is_redirection,
    lex,
    validate_syntax,
)
from shellparse.variables import VarStore

ReadLine = Callable[[str], "str | None"]

_SYNTAX_ERROR_STATUS = "2"


class IoType(Enum):
    """Where a command reads from or writes to."""

    STDIN = auto()
    STDOUT = auto()
    PIPE_IN = auto()
    PIPE_OUT = auto()
    FILE_IN = auto()
    FILE_OUT = auto()
    HEREDOC = auto()
    APPEND = auto()


@dataclass
class SimpleCommand:
    """One command of a pipeline with its words, flags and redirections."""

    words: list[str] = field(default_factory=list)
    flags: list[str] = field(default_factory=list)
    content: list[str] = field(default_factory=list)
    redirections: list[Token] = field(default_factory=list)
    heredoc_file: str | None = None
    num_redirections: int = 0
    pipe: bool = False
    return_value: int = 0
    input_type: IoType = IoType.STDIN
    output_type: IoType = IoType.STDOUT
    input_fd: int = 0
    output_fd: int = 1


_INPUT_REDIRECTS = {
    TokenType.REDIRECT_IN: IoType.FILE_IN,
    TokenType.REDIRECT_HEREDOC: IoType.HEREDOC,
}
_OUTPUT_REDIRECTS = {
    TokenType.REDIRECT_OUT: IoType.FILE_OUT,
    TokenType.REDIRECT_APPEND: IoType.APPEND,
}


def is_flag(word: str | None) -> bool:
    """Return True for a word such as ``-l``: one dash, then something else."""
    if word is None:
        return False
    unquoted = remove_quotes(word)
    return len(unquoted) > 1 and unquoted[0] == "-" and unquoted[1] != "-"


def _remove_heredoc_file(command: SimpleCommand) -> None:
    if command.heredoc_file:
        try:
            os.unlink(command.heredoc_file)
        except FileNotFoundError:
            pass
        command.heredoc_file = None


def _collect_redirections(command: SimpleCommand, tokens: list[Token]) -> None:
    for position, token in enumerate(tokens):
        if token.kind is TokenType.PIPE:
            break
        if not is_redirection(token.kind):
            continue
        command.num_redirections += 1
        if token.kind in _INPUT_REDIRECTS:
            command.input_type = _INPUT_REDIRECTS[token.kind]
            command.input_fd = -1
        else:
            command.output_type = _OUTPUT_REDIRECTS[token.kind]
            command.output_fd = -1
        following = tokens[position + 1] if position + 1 < len(tokens) else None
        if following is not None and following.kind is TokenType.WORD:
            command.redirections.append(replace(token))
            command.redirections.append(replace(following))


def _read_heredocs(
    command: SimpleCommand, store: VarStore, read_line: ReadLine | None
) -> None:
    pairs = zip(command.redirections[::2], command.redirections[1::2])
    for operator, target in pairs:
        if operator.kind is not TokenType.REDIRECT_HEREDOC:
            continue
        try:
            filename = create_heredoc_file(
                remove_quotes(target.text), store, read_line
            )
        except HeredocInterrupted:
            _remove_heredoc_file(command)
            raise
        _remove_heredoc_file(command)
        command.heredoc_file = filename
        command.input_type = IoType.HEREDOC
        command.input_fd = -1


def _content(tokens: list[Token]) -> list[str]:
    content: list[str] = []
    skip = False
    for position, token in enumerate(tokens):
        if skip:
            skip = False
            continue
        if is_redirection(token.kind) and position + 1 < len(tokens):
            skip = True
            continue
        content.append(remove_quotes(token.text))
    return content


def build_command(
    tokens: list[Token], store: VarStore, read_line: ReadLine | None = None
) -> SimpleCommand | None:
    """Build one command from the tokens of a pipeline segment.

    The segment may begin with the pipe token that opens it; that token
    only serves as the word before the first one. Here-documents are
    read while building. Returns None when the segment has no words.
    """
    previous: Token | None = None
    if tokens and tokens[0].kind is TokenType.PIPE:
        previous, tokens = tokens[0], tokens[1:]
    command = SimpleCommand()
    _collect_redirections(command, tokens)
    _read_heredocs(command, store, read_line)

    neighbours = list(zip([previous, *tokens[:-1]], tokens))
    command.flags = [
        remove_quotes(token.text)
        for before, token in neighbours
        if token.kind is TokenType.WORD
        and is_flag(token.text)
        and (before is None or before.kind is TokenType.WORD)
    ]
    command.words = [
        remove_quotes(token.text)
        for before, token in neighbours
        if token.kind is TokenType.WORD
        and (before is None or not is_redirection(before.kind))
        and not is_flag(token.text)
    ]
    if not command.words:
        _remove_heredoc_file(command)
        return None
    command.content = _content(tokens)
    return command


def _segment(tokens: list[Token], start: int, end: int) -> list[Token]:
    if 0 < start <= len(tokens) and tokens[start - 1].kind is TokenType.PIPE:
        start -= 1
    return tokens[start:end]


def _discard(commands: list[SimpleCommand]) -> None:
    for command in commands:
        _remove_heredoc_file(command)


def parse_commands(
    tokens: list[Token], store: VarStore, read_line: ReadLine | None = None
) -> list[SimpleCommand]:
    """Expand words and split ``tokens`` into the commands of a pipeline.

    Commands are built first and the syntax is checked afterwards. On a
    syntax error the exit status ``2`` is stored, any here-document files
    are removed and ShellSyntaxError is raised.
    """
    commands: list[SimpleCommand] = []
    start = 0
    last = len(tokens) - 1
    try:
        for index, token in enumerate(tokens):
            if token.kind is TokenType.WORD:
                expand_word(tokens, index, store)
                if token.text == "" and index == start:
                    start = index + 1
            if token.kind is TokenType.PIPE:
                command = build_command(
                    _segment(tokens, start, index), store, read_line
                )
                if command is not None:
                    command.pipe = True
                    command.output_type = IoType.PIPE_OUT
                    command.output_fd = -1
                    commands.append(command)
                start = index + 1
            elif index == last:
                command = build_command(
                    _segment(tokens, start, len(tokens)), store, read_line
                )
                if command is not None:
                    commands.append(command)
    except HeredocInterrupted:
        _discard(commands)
        raise
    try:
        validate_syntax(tokens)
    except ShellSyntaxError:
        store.set("?", _SYNTAX_ERROR_STATUS)
        _discard(commands)
        raise
    return commands


def parse(
    line: str, store: VarStore, read_line: ReadLine | None = None
) -> list[SimpleCommand]:
    """Parse a command line into its pipeline of simple commands.

    Raises UnclosedQuoteError for unbalanced quotes and ShellSyntaxError
    for misplaced pipes or redirections.
    """
    store.set("0", SHELL_NAME)
    tokens = lex(line)
    if not tokens:
        return []
    return parse_commands(tokens, store, read_line)