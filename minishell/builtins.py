"""Commands the shell carries out itself instead of starting a program."""

from __future__ import annotations

import os
import sys
from enum import IntEnum
from typing import TextIO

from .command import Command
from .strutil import atoi, is_alnum_word

EXIT = -1
"""Status returned by :func:`run_builtin` when the shell is asked to exit."""


class BuiltinKind(IntEnum):
    """Where a builtin runs: not at all, like a child process, or in the shell."""

    NONE = 0
    CHILD = 1
    PARENT = 2


_KINDS = (
    ("cd", BuiltinKind.PARENT),
    ("exit", BuiltinKind.PARENT),
    ("unset", BuiltinKind.PARENT),
    ("export", BuiltinKind.PARENT),
    ("env", BuiltinKind.CHILD),
    ("echo", BuiltinKind.CHILD),
    ("pwd", BuiltinKind.CHILD),
)


def _error(message: str) -> None:
    print(message, file=sys.stderr)


def builtin_kind(name: str | None) -> BuiltinKind:
    """Classify a command name; any prefix of a builtin's name counts as it."""
    if name is None:
        return BuiltinKind.NONE
    for builtin, kind in _KINDS:
        if builtin.startswith(name):
            return kind
    return BuiltinKind.NONE


def echo(command: Command, out: TextIO) -> None:
    """Write the arguments; ``$NAME`` words are replaced by their value.

    A leading ``-n`` suppresses the final newline.
    """
    args = command.args[1:]
    newline = True
    if args and args[0] == "-n":
        newline = False
        args = args[1:]
    parts: list[str] = []
    for position, arg in enumerate(args):
        if arg.startswith("$"):
            parts.append(command.env.get(arg[1:]) or "")
        else:
            parts.append(arg + " ")
        if position + 1 < len(args):
            parts.append(" ")
    if newline:
        parts.append("\n")
    out.write("".join(parts))


def pwd(command: Command, out: TextIO) -> None:
    """Write the current directory, but only when no argument is given."""
    if len(command.args) > 1:
        return
    try:
        out.write(os.getcwd() + "\n")
    except OSError as exc:
        _error(f"pwd: {exc.strerror}")


def cd(command: Command) -> int:
    """Change directory and rewrite ``PWD`` and ``OLDPWD``; return a status.

    With no argument or ``~`` the directory is the value of ``HOME``.
    """
    env = command.env
    try:
        old_pwd = os.getcwd()
    except OSError:
        old_pwd = ""
    args = command.args[1:]
    target = args[0] if args else None
    if target is None or target == "~":
        target = env.get("HOME")
    status = 0
    if target is None:
        _error("cd: HOME not set")
        status = 1
    else:
        try:
            os.chdir(target)
        except OSError as exc:
            _error(f"cd: {exc.strerror}")
            status = 1
    try:
        new_pwd = os.getcwd()
    except OSError:
        new_pwd = ""
    env.set_pwd(old_pwd, new_pwd)
    return status


def print_env(command: Command, out: TextIO) -> None:
    """Write every environment entry on a line of its own."""
    for entry in command.env:
        out.write(entry + "\n")


def export(command: Command, out: TextIO) -> None:
    """List the environment when called bare, then apply any assignments."""
    args = command.args[1:]
    if not args:
        for line in command.env.export_listing():
            out.write(line + "\n")
    command.env.export(args)


def unset(command: Command) -> None:
    """Remove the named variables from the command's environment."""
    try:
        command.env.unset(command.args[1:])
    except ValueError as exc:
        _error(str(exc))


def exit_status(command: Command) -> int:
    """The status requested by ``exit``: its alphanumeric argument, else 0."""
    args = command.args[1:]
    if args and is_alnum_word(args[0]):
        return atoi(args[0])
    return 0


def run_builtin(command: Command, out: TextIO) -> int:
    """Run the builtin named by the command; :data:`EXIT` asks the shell to stop."""
    name = command.name
    rest = command.args[1:]
    if name == "pwd" and not rest:
        pwd(command, out)
    elif name == "echo":
        echo(command, out)
    elif name == "export":
        export(command, out)
    elif name == "cd":
        return cd(command)
    elif name == "exit":
        return EXIT
    elif name == "env":
        print_env(command, out)
    elif name == "unset":
        unset(command)
    return 0