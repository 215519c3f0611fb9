"""Splitting a command line into tokens and checking their syntax."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from shellparse.quoting import quotes_balanced


class TokenType(Enum):
    """Kinds of token found on a command line."""

    WORD = auto()
    PIPE = auto()
    REDIRECT_IN = auto()
    REDIRECT_HEREDOC = auto()
    REDIRECT_OUT = auto()
    REDIRECT_APPEND = auto()
    EMPTY = auto()


_REDIRECTIONS = frozenset(
    {
        TokenType.REDIRECT_IN,
        TokenType.REDIRECT_OUT,
        TokenType.REDIRECT_APPEND,
        TokenType.REDIRECT_HEREDOC,
    }
)

_OPERATORS = {
    "|": TokenType.PIPE,
    "<<": TokenType.REDIRECT_HEREDOC,
    "<": TokenType.REDIRECT_IN,
    ">>": TokenType.REDIRECT_APPEND,
    ">": TokenType.REDIRECT_OUT,
}


@dataclass
class Token:
    """One token: its text, its kind and the input position after it."""

    text: str
    kind: TokenType
    position: int = 0


class UnclosedQuoteError(ValueError):
    """The input has a quote that is never closed."""

    def __init__(self, message: str = "Error: Unclosed quotes") -> None:
        super().__init__(message)
        self.message = message


class ShellSyntaxError(ValueError):
    """The token sequence is not a valid command line."""

    status = 2

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def classify(text: str | None) -> TokenType:
    """Return the kind of token that ``text`` is."""
    if text is None:
        return TokenType.WORD
    return _OPERATORS.get(text, TokenType.WORD)


def is_redirection(kind: TokenType) -> bool:
    """Return True for the four redirection token kinds."""
    return kind in _REDIRECTIONS


def extract_token(text: str, pos: int) -> tuple[str, int]:
    """Read one token starting at ``pos``.

    Returns the token text (possibly empty) and the position after it.
    Only spaces separate words; pipes and redirections outside quotes
    are tokens of their own.
    """
    length = len(text)
    while pos < length and text[pos] == " ":
        pos += 1
    chars: list[str] = []
    in_single = False
    in_double = False
    while pos < length:
        char = text[pos]
        if char == "'" and not in_double:
            in_single = not in_single
        elif char == '"' and not in_single:
            in_double = not in_double
        quoted = in_single or in_double
        if char == "|" and not quoted:
            if not chars:
                chars.append(char)
                pos += 1
            break
        if char in "<>" and not quoted:
            if not chars:
                chars.append(char)
                pos += 1
                if pos < length and text[pos] in "<>":
                    chars.append(text[pos])
                    pos += 1
            break
        if char == " " and not quoted and chars:
            break
        chars.append(char)
        pos += 1
    if pos < length and text[pos] == " ":
        pos += 1
    return "".join(chars), pos


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into tokens without checking quotes."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        word, pos = extract_token(text, pos)
        if word:
            tokens.append(Token(word, classify(word), pos))
    return tokens


def lex(text: str) -> list[Token]:
    """Check that quotes are closed, then split ``text`` into tokens."""
    if not quotes_balanced(text):
        raise UnclosedQuoteError()
    return tokenize(text)


def validate_syntax(tokens: list[Token]) -> None:
    """Raise ShellSyntaxError if pipes or redirections are misplaced.

    A trailing pipe is accepted; the caller asks for more input.
    """
    if tokens and tokens[0].kind is TokenType.PIPE:
        raise ShellSyntaxError("bash: syntax error near unexpected token `|'")
    for current, following in zip(tokens, tokens[1:] + [None]):
        if is_redirection(current.kind):
            if (
                following is None
                or is_redirection(following.kind)
                or following.kind is TokenType.PIPE
            ):
                raise ShellSyntaxError(
                    "bash: syntax error near unexpected token`newline'"
                )
        elif current.kind is TokenType.PIPE:
            if following is not None and following.kind is TokenType.PIPE:
                raise ShellSyntaxError(
                    "bash: syntax error near unexpected token `|'"
                )