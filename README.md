# shellparse

The front end of a small POSIX-style shell: lexing, syntax checks,
variable expansion, here-documents and splitting a line into the simple
commands of a pipeline.

## Install

    pip install .

For the test suite:

    pip install ".[test]"
    pytest

## Usage

### Tokens

    from shellparse.tokens import lex, validate_syntax

    tokens = lex('echo "a | b" | wc -l > out.txt')
    validate_syntax(tokens)

`lex` raises `UnclosedQuoteError` when a quote is left open; `tokenize`
splits without that check. Each `Token` has `text`, `kind` (a
`TokenType`: word, pipe or one of the four redirections) and `position`.
`validate_syntax` raises `ShellSyntaxError` for a leading pipe, a double
pipe, or a redirection not followed by a word; a trailing pipe is
accepted. `shellparse.quoting` has `quotes_balanced` and `remove_quotes`.

### Variables and expansion

    from shellparse.variables import VarStore
    from shellparse.expansion import expand

    store = VarStore()
    store.set("NAME", "world")
    expand("hello $NAME, last status $?", store)

`VarStore.lookup` resolves `?` (the stored exit status, `0` when unset
or empty), `$` (the shell's process id, found with `ps` by
`shellparse.pid`) and other names, which fall back to the process
environment and are empty when found nowhere. `VarStore.declare_from`
stores a `KEY=VALUE` word; `is_var_assignment` tests for `NAME=`.
`expand_lenient` expands only `$NAME` and drops any other `$` sequence.

### Here-documents

`shellparse.heredoc.create_heredoc_file(delimiter, store, read_line)`
reads lines through `read_line` (a callable taking a prompt and returning
a line, or `None` at end of input) until the delimiter, expands them and
writes them to a `/tmp/heredoc_<n>` file, returning its name. If reading
is interrupted the file is removed, `?` is set to `130` and
`HeredocInterrupted` is raised. `collect_heredoc` does the gathering on
any iterable of lines.

### Commands

    from shellparse.commands import parse

    commands = parse("ls -la | grep py > found.txt", store, input)
    for cmd in commands:
        print(cmd.words, cmd.flags, cmd.content, cmd.output_type)

Each `SimpleCommand` holds its `words`, `flags` (words such as `-l`),
`content` (all words without redirections), `redirections`,
`heredoc_file`, `pipe`, and input and output `IoType`s. On a syntax error
`parse` stores `?` as `2`, removes any here-document files and raises
`ShellSyntaxError`.

### Interactive helpers

`shellparse.input` has `is_quote_closed`, `is_input_incomplete` (a line
ending in a single pipe), `join_continuation` and `read_continuation`.
`shellparse.signals` switches SIGINT and SIGQUIT handling between
`SignalMode`s with `install`, and reports the last signal caught with
`received_signal` and `reset`.

## What it does not do

The package parses; it does not run anything. There are no builtins
(`echo`, `cd`, `export` and the like), no command execution, no opening
of redirection files, and no interactive prompt loop or command to start
a shell.