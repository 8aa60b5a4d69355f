# minishell

A small interactive shell. It reads a line at the `minishell>` prompt,
splits it on pipes, handles redirections and here-documents, and runs either
a built-in command or an external program found on `PATH`.

## Installing

```
pip install .
```

## Running

```
minishell
```

Type commands at the prompt. End of input (Ctrl-D) prints `exit` and leaves
the shell with status 0. Ctrl-C at the prompt prints a newline and discards
the current line. If the standard `readline` module is available, it is
loaded so the prompt gets line editing and history.

## What it understands

- Pipelines: `ls -l | grep py | wc -l`. A `|` inside single or double quotes
  does not split the line.
- Redirections: `< file`, `> file`, `>> file`, and here-documents `<< END`.
  The operator may be a word of its own or attached to the file name
  (`>out.txt`). When several redirections of one direction are given, the
  last one wins. A here-document ends at the first line that starts with the
  delimiter, or at end of input.
- Quotes: the quote characters are removed from each word. Words are split on
  spaces only, so quotes do not keep spaces together. At the first word whose
  quotes are unbalanced, that word and every word after it are dropped.
- Built-in commands:
  - `echo [-n] args...` — a word starting with `$` is replaced by the value of
    the variable whose entry starts with the rest of the word; `-n` drops the
    final newline
  - `pwd` — prints the current directory, only when given no arguments
  - `cd [dir]` — with no argument or `~`, goes to `$HOME`; rewrites existing
    `PWD` and `OLDPWD` entries
  - `env` — prints every variable entry
  - `export [NAME=value ...]` — with no arguments, lists the variables whose
    names start with a letter or `_`, grouped by first letter (A, a, B, b, …);
    arguments without `=` are ignored
  - `unset NAME ...` — removes every entry starting with one of the names
  - `exit [n]` — leaves the shell with `n` when `n` is alphanumeric, else 0

Variable changes made by `export`, `unset` and `cd` carry over to later lines
when they happen in the first command of a pipeline.

## Using it from Python

```python
from minishell.shell import Shell

shell = Shell({"PATH": "/usr/bin:/bin", "HOME": "/tmp"})
status = shell.run_line("echo hello | tr a-z A-Z")
```

`Shell` takes a mapping of variables, an iterable of `NAME=value` strings, or
nothing (then it uses `os.environ`). `Shell.run_line` returns the status of
the line; after `exit`, `Shell.exit_code` holds the requested code.
`Shell.loop(reader)` runs a session with any function that takes a prompt and
returns a line, or `None` at end of input.

The pieces are also usable on their own:

- `minishell.lexer` — `split_pipe`, `tokenize`, `strip_quotes` and
  `extract_redirections` break a line apart; `Redirection` and `RedirKind`
  describe redirections.
- `minishell.command` — `parse_line` builds `Command` objects.
- `minishell.environment` — `Environment` holds the variables that
  `export`, `unset` and `cd` change.
- `minishell.builtins` — `run_builtin` and the individual built-ins, which
  write to any text stream.
- `minishell.executor` — `execute_pipeline` runs a list of commands;
  `open_redirections` and `read_heredoc` set up their input and output.

## What it does not do

- Commands in a pipeline run one after another: each one finishes before its
  collected output is given to the next, so endless producers never finish.
- `$NAME` is expanded only by `echo`; there is no `$?`, no globbing, no
  `&&`, `||`, `;`, subshells or background jobs.
- Quoted strings do not keep spaces together inside one argument.

## Tests

```
pip install .[test]
pytest
```