"""Splitting of a command line into pipeline segments, words and redirections."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable

from .strutil import split_words, trim

_QUOTES = "\"'"


class RedirKind(IntEnum):
    """The kinds of redirection operator."""

    INPUT = 1
    HEREDOC = 2
    OUTPUT = 3
    APPEND = 4


@dataclass(frozen=True)
class Redirection:
    """One redirection: its kind and its target (file name or delimiter)."""

    kind: RedirKind
    target: str | None


def has_content(line: str | None) -> bool:
    """True when the line holds anything other than spaces and tabs."""
    if line is None:
        return False
    return any(ch not in " \t" for ch in line)


def split_pipe(line: str) -> list[str]:
    """Split a line on ``|`` outside quotes, trimming spaces from each segment.

    The final segment is always present, even when empty.
    """
    segments: list[str] = []
    current: list[str] = []
    quote: str | None = None
    for ch in line:
        if quote is not None:
            current.append(ch)
            if ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
            current.append(ch)
        elif ch == "|":
            segments.append(trim("".join(current), " "))
            current = []
        else:
            current.append(ch)
    segments.append(trim("".join(current), " "))
    return segments


def strip_quotes(word: str) -> str:
    """Remove every quote character from ``word``.

    Raises ValueError when single or double quotes are unbalanced.
    """
    if word.count('"') % 2 or word.count("'") % 2:
        raise ValueError(f"unbalanced quotes in {word!r}")
    return "".join(ch for ch in word if ch not in _QUOTES)


def tokenize(segment: str) -> list[str]:
    """Split a segment on spaces and strip quotes from each word.

    The word list ends before the first word with unbalanced quotes.
    """
    words: list[str] = []
    for word in split_words(segment, " "):
        try:
            words.append(strip_quotes(word))
        except ValueError:
            break
    return words


def redirect_kind(token: str) -> RedirKind | None:
    """The redirection kind a token starts with, or None."""
    if token.startswith(">>"):
        return RedirKind.APPEND
    if token.startswith("<<"):
        return RedirKind.HEREDOC
    if token.startswith("<"):
        return RedirKind.INPUT
    if token.startswith(">"):
        return RedirKind.OUTPUT
    return None


def is_bare_operator(token: str) -> bool:
    """True when the token is a redirection operator with nothing attached."""
    return token in ("<", ">", "<<", ">>")


def is_redirection(token: str) -> bool:
    """True when the token starts with a redirection operator."""
    return token.startswith(("<", ">"))


def extract_redirections(
    tokens: Iterable[str],
) -> tuple[list[str], list[Redirection]]:
    """Separate redirections from ordinary arguments.

    A bare operator takes the next token as its target; otherwise the target
    is the rest of the token after the operator.
    """
    args: list[str] = []
    redirections: list[Redirection] = []
    stream = iter(tokens)
    for token in stream:
        if not is_redirection(token):
            args.append(token)
            continue
        kind = redirect_kind(token)
        if is_bare_operator(token):
            target = next(stream, None)
        else:
            width = 1 if kind in (RedirKind.INPUT, RedirKind.OUTPUT) else 2
            target = token[width:]
        redirections.append(Redirection(kind, target))
    return args, redirections