"""Quote checking and quote removal for shell words."""

_SINGLE = "'"
_DOUBLE = '"'


def quotes_balanced(text: str) -> bool:
    """Return True if every quoted section in ``text`` is closed."""
    pos = 0
    length = len(text)
    while pos < length:
        char = text[pos]
        if char in (_SINGLE, _DOUBLE):
            closing = text.find(char, pos + 1)
            if closing == -1:
                return False
            pos = closing
        pos += 1
    return True


def remove_quotes(text: str) -> str:
    """Strip the quote characters that delimit quoted sections of a word.

    A word made of nothing but an empty pair of quotes is kept as it is.
    Quote characters inside the other kind of quotes are kept.
    """
    if text in ("''", '""'):
        return text
    in_single = False
    in_double = False
    kept = []
    for char in text:
        if char == _SINGLE and not in_double:
            in_single = not in_single
        elif char == _DOUBLE and not in_single:
            in_double = not in_double
        else:
            kept.append(char)
    return "".join(kept)