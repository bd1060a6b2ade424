# crash

A small interactive shell for POSIX systems. It reads a command line,
expands variables, `~` and `*` wildcards, splits the line into tokens,
checks the syntax, builds a command tree and runs it.

## Installing

```
pip install .
```

## Running

```
crash
```

On start the screen is cleared and a welcome banner is printed (with an
ASCII heading read from `./src/logo.txt` when that file exists).

The prompt shows a cyan 💣 after a command that succeeded and a red 💥
after one that failed. When standard input is not a terminal, commands
are read line by line from it, so the shell can also run a script:

```
crash < commands.txt
```

The shell stops at end of input or on `exit` and returns the last
command's exit status. When reading from a non-terminal, a syntax error
also stops the shell.

## What it understands

- Commands found through `PATH`, or given as a path (`./prog`, `/bin/ls`)
- Pipes: `ls | grep py | wc -l`
- Redirections: `<`, `>`, `>>`, and here-documents with `<<`
  (lines are expanded unless the delimiter is quoted)
- Logical operators `&&` and `||`, grouped with parentheses:
  `(false || echo one) && echo two`
- Single and double quotes
- `$NAME`, `$?`, `$"text"`, `~` and `*` expansion; wildcards match names
  in the current directory, and hidden names only when the pattern
  starts with a dot
- Builtins: `echo` (with `-n`), `cd` (with `-`, `--` and no argument),
  `pwd`, `export`, `unset`, `env` and `exit`

`Ctrl-C` gives a fresh prompt and sets the status to 1; `Ctrl-\` is
ignored.

Syntax errors are reported as

```
crash: syntax error near unexpected token `|'
```

and set the exit status to 2 or 258. A command that cannot be found
gives status 127; one that cannot be run gives 126.

## What it does not do

There is no `;` separator, no background jobs or job control, no
`VAR=value command` prefix assignments, and no redirection of file
descriptors other than standard input and output.

## Using it from Python

The stages can be used on their own:

```python
from crash.environment import Environment, ShellState
from crash.expander import expand
from crash.lexer import lex
from crash.validator import validate
from crash.parser import parse
from crash.printing import format_tree

state = ShellState(Environment(["HOME=/home/example", "USER=example"]))
line = expand("echo $USER | cat", state, False)
tokens = lex(line)
validate(tokens)  # raises crash.validator.ShellSyntaxError on bad input
print(format_tree(parse(tokens), 0))
```

`crash.shell.run_line(line, state)` runs a single command line against a
`ShellState` and returns the resulting status, and
`crash.shell.run_input_loop(state, stream)` runs every line from a
stream until end of input or `exit`.