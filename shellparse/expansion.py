"""Expansion of ``$`` references in words and lines."""

from __future__ import annotations

import string

from shellparse.tokens import Token, TokenType
from shellparse.variables import VarStore

_ALPHA = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)
_NAME_CHARS = _ALPHA | _DIGITS | {"_"}


def _starts_name(char: str) -> bool:
    return char in _ALPHA or char in _DIGITS or char == "_"


def _replace_reference(text: str, pos: int, store: VarStore) -> str:
    """Replace the reference whose ``$`` is at ``pos`` with its value.

    ``$?`` names the exit status, a digit after ``$`` is a one-character
    name, otherwise the name runs over letters, digits and underscores.
    """
    start = pos + 1
    following = text[start:start + 1]
    if following == "?":
        end = start + 1
    elif following in _DIGITS and following:
        end = start + 1
    else:
        end = start
        while end < len(text) and text[end] in _NAME_CHARS:
            end += 1
    return text[:pos] + store.lookup(text[start:end]) + text[end:]


def expand(text: str, store: VarStore) -> str:
    """Expand ``$$``, ``$?`` and ``$NAME`` references in ``text``.

    After each replacement scanning starts again from the beginning, so
    references produced by a replacement are expanded too. A ``$``
    followed by anything else is kept together with the character after it.
    """
    pos = 0
    while pos < len(text):
        if text[pos] != "$":
            pos += 1
            continue
        following = text[pos + 1:pos + 2]
        if following == "$":
            text = text[:pos] + store.lookup("$") + text[pos + 2:]
            pos = 0
        elif following == "?" or (following and _starts_name(following)):
            text = _replace_reference(text, pos, store)
            pos = 0
        else:
            pos += 2
    return text


def expand_lenient(text: str, store: VarStore) -> str:
    """Expand ``$NAME`` references and drop every other ``$`` sequence.

    A ``$`` followed by a letter is replaced by the variable's value; any
    other ``$`` is removed together with the non-letters that follow it.
    """
    pos = 0
    while pos < len(text):
        if text[pos] != "$":
            pos += 1
            continue
        following = text[pos + 1:pos + 2]
        if following and following in _ALPHA:
            text = _replace_reference(text, pos, store)
        else:
            end = pos
            while end < len(text) and text[end] not in _ALPHA:
                end += 1
            text = text[:pos] + text[end:]
        pos = 0
    return text


def expand_word(tokens: list[Token], index: int, store: VarStore) -> str:
    """Expand the word token at ``index`` in place and return its text.

    Words starting with a single quote and heredoc delimiters are left
    alone. A ``NAME=value`` word is stored as a variable when it stands
    alone at the start of the line or belongs to an ``export`` command.
    """
    token = tokens[index]
    text = token.text
    if text.startswith("'"):
        return text
    previous = tokens[index - 1] if index > 0 else None
    if previous is not None and previous.kind is TokenType.REDIRECT_HEREDOC:
        return text
    if "=" in text and previous is not None:
        first = index
        while first > 0 and tokens[first - 1].kind is not TokenType.PIPE:
            first -= 1
        if tokens[first].text != "export":
            token.text = expand(text, store)
            return token.text
    store.declare_from(text)
    token.text = expand(text, store)
    return token.text