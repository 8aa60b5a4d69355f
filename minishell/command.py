"""Parsed commands: one per pipeline segment of an input line."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .environment import Environment
from .lexer import (
    RedirKind,
    Redirection,
    extract_redirections,
    has_content,
    split_pipe,
    tokenize,
)


@dataclass
class Command:
    """A single command with its arguments, redirections and environment."""

    name: str | None
    args: list[str]
    env: Environment
    redirections: list[Redirection] = field(default_factory=list)

    @property
    def has_heredoc(self) -> bool:
        """True when any redirection is a here-document."""
        return any(r.kind is RedirKind.HEREDOC for r in self.redirections)

    @classmethod
    def from_segment(cls, segment: str, env: Iterable[str]) -> "Command":
        """Parse one pipeline segment; the command gets its own copy of ``env``."""
        args, redirections = extract_redirections(tokenize(segment))
        return cls(
            name=args[0] if args else None,
            args=args,
            env=Environment(env),
            redirections=redirections,
        )


def parse_line(line: str, env: Iterable[str]) -> list[Command]:
    """Parse a full input line into its pipeline of commands.

    A line holding only spaces and tabs yields no commands.
    """
    if not has_content(line):
        return []
    entries = list(env)
    return [Command.from_segment(segment, entries) for segment in split_pipe(line)]


def join_path(directory: str, name: str) -> str:
    """Join a directory and a file name with a single ``/``."""
    return f"{directory}/{name}"