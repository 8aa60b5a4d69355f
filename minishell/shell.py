"""The interactive read–parse–execute loop."""

from __future__ import annotations

import os
import signal
import sys
from typing import Callable, Iterable, Mapping, Optional

from .builtins import EXIT, exit_status
from .command import parse_line
from .environment import Environment
from .executor import execute_pipeline

PROMPT = "minishell>"

Reader = Callable[[str], Optional[str]]


class Shell:
    """A shell session holding the variable table carried from line to line."""

    def __init__(self, environ: Mapping[str, str] | Iterable[str] | None = None) -> None:
        if environ is None:
            environ = os.environ
        if isinstance(environ, Mapping):
            self.env = Environment.from_mapping(environ)
        else:
            self.env = Environment(environ)
        self.last_status = 0
        self.exit_code: int | None = None
        self._reader: Reader | None = None

    def run_line(self, line: str) -> int:
        """Parse and run one input line; return its status.

        When the line runs ``exit`` the requested code is stored in
        :attr:`exit_code` and returned.
        """
        commands = parse_line(line, self.env)
        if not commands:
            return self.last_status
        status = execute_pipeline(commands, self._reader)
        if status == EXIT:
            self.exit_code = exit_status(commands[0])
            return self.exit_code
        self.env = commands[0].env.copy()
        self.last_status = status
        return status

    def loop(self, reader: Reader) -> int:
        """Read lines with ``reader`` until ``exit`` or end of input.

        ``reader`` takes a prompt and returns a line, or None at end of input.
        Returns the code the shell exits with.
        """
        self.exit_code = None
        self._reader = reader
        try:
            while self.exit_code is None:
                try:
                    line = reader(PROMPT)
                except KeyboardInterrupt:
                    sys.stdout.write("\n")
                    sys.stdout.flush()
                    continue
                if line is None:
                    sys.stdout.write("exit\n")
                    sys.stdout.flush()
                    return 0
                if line:
                    self.run_line(line)
            return self.exit_code
        finally:
            self._reader = None


def _read_line(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def main(argv: list[str] | None = None) -> int:
    """Start an interactive session on standard input; return the exit code."""
    try:
        import readline  # noqa: F401  (enables line editing and history)
    except ImportError:
        pass
    saved_quit = None
    if hasattr(signal, "SIGQUIT"):
        saved_quit = signal.signal(signal.SIGQUIT, signal.SIG_IGN)
    try:
        return Shell(os.environ).loop(_read_line)
    finally:
        if saved_quit is not None:
            signal.signal(signal.SIGQUIT, saved_quit)