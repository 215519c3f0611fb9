import pytest

from shellparse.tokens import (
    ShellSyntaxError,
    Token,
    TokenType,
    UnclosedQuoteError,
    classify,
    extract_token,
    is_redirection,
    lex,
    tokenize,
    validate_syntax,
)


@pytest.mark.parametrize(
    "text, kind",
    [
        ("|", TokenType.PIPE),
        ("<<", TokenType.REDIRECT_HEREDOC),
        ("<", TokenType.REDIRECT_IN),
        (">>", TokenType.REDIRECT_APPEND),
        (">", TokenType.REDIRECT_OUT),
        ("echo", TokenType.WORD),
        ("<>", TokenType.WORD),
        ("||", TokenType.WORD),
        (None, TokenType.WORD),
    ],
)
def test_classify(text, kind):
    assert classify(text) is kind


def test_is_redirection():
    assert is_redirection(TokenType.REDIRECT_IN)
    assert is_redirection(TokenType.REDIRECT_OUT)
    assert is_redirection(TokenType.REDIRECT_APPEND)
    assert is_redirection(TokenType.REDIRECT_HEREDOC)
    assert not is_redirection(TokenType.PIPE)
    assert not is_redirection(TokenType.WORD)


def test_extract_skips_leading_spaces_and_trailing_space():
    word, pos = extract_token("   ls -l", 0)
    assert word == "ls"
    assert pos == len("   ls ")


def test_extract_operator_stops_word():
    word, pos = extract_token("cat>out", 0)
    assert word == "cat"
    op, pos = extract_token("cat>out", pos)
    assert op == ">"


def test_extract_double_redirect():
    op, pos = extract_token(">>file", 0)
    assert op == ">>"
    assert pos == 2


def test_tokenize_pipeline_kinds():
    tokens = tokenize("echo hi|wc -l")
    assert [t.kind for t in tokens] == [
        TokenType.WORD,
        TokenType.WORD,
        TokenType.PIPE,
        TokenType.WORD,
        TokenType.WORD,
    ]
    assert "".join(t.text for t in tokens) == "echohi|wc-l"


def test_tokenize_heredoc():
    tokens = tokenize("cat<<EOF")
    assert [t.text for t in tokens] == ["cat", "<<", "EOF"]
    assert tokens[1].kind is TokenType.REDIRECT_HEREDOC


def test_quoted_operators_stay_in_word():
    tokens = tokenize("echo 'a | b > c' \"x<y\"")
    assert [t.text for t in tokens] == ["echo", "'a | b > c'", '"x<y"']
    assert all(t.kind is TokenType.WORD for t in tokens)


def test_positions_increase_and_end_at_length():
    text = "ls -a | grep x > out"
    tokens = tokenize(text)
    positions = [t.position for t in tokens]
    assert positions == sorted(set(positions))
    assert positions[-1] == len(text)


def test_tokenize_only_spaces():
    assert tokenize("    ") == []


def test_lex_rejects_unclosed_quote():
    with pytest.raises(UnclosedQuoteError, match="Error: Unclosed quotes"):
        lex("echo 'oops")


def test_lex_matches_tokenize_when_balanced():
    text = "echo \"a b\" | cat"
    assert lex(text) == tokenize(text)


def test_token_is_mutable():
    token = Token("x", TokenType.WORD, 1)
    token.text = "y"
    assert token.text == "y"


def test_leading_pipe_rejected():
    with pytest.raises(ShellSyntaxError, match="`\\|'") as info:
        validate_syntax(tokenize("| ls"))
    assert info.value.status == 2


def test_double_pipe_rejected():
    with pytest.raises(ShellSyntaxError, match="unexpected token `\\|'"):
        validate_syntax(tokenize("ls | | wc"))


@pytest.mark.parametrize("line", ["cat <", "cat < > out", "cat > | wc", "<< <<"])
def test_bad_redirection_rejected(line):
    with pytest.raises(ShellSyntaxError, match="newline"):
        validate_syntax(tokenize(line))


def test_trailing_pipe_accepted():
    tokens = tokenize("ls |")
    assert tokens[-1].kind is TokenType.PIPE
    assert validate_syntax(tokens) is None


def test_valid_line_accepted():
    tokens = tokenize("cat < in | grep x >> out")
    assert validate_syntax(tokens) is None
    assert len(tokens) == 8