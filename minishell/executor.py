"""Running a parsed pipeline: redirections, here-documents and programs."""

from __future__ import annotations

import io
import os
import signal
import subprocess
import sys
import tempfile
import threading
from contextlib import contextmanager
from typing import BinaryIO, Callable, Iterable, Iterator, Optional

from .builtins import EXIT, BuiltinKind, builtin_kind, run_builtin
from .command import Command, join_path
from .environment import Environment
from .lexer import RedirKind, Redirection
from .strutil import split_words

Reader = Callable[[str], Optional[str]]


class RedirectionError(Exception):
    """A redirection could not be set up."""


class _Streams:
    """Files opened for a command's standard input and output."""

    def __init__(self) -> None:
        self.stdin: BinaryIO | None = None
        self.stdout: BinaryIO | None = None
        self._opened: list[BinaryIO] = []

    def track(self, stream: BinaryIO) -> BinaryIO:
        self._opened.append(stream)
        return stream

    def close(self) -> None:
        for stream in self._opened:
            stream.close()
        self._opened.clear()

    def __enter__(self) -> "_Streams":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _error(message: str) -> None:
    print(message, file=sys.stderr)


def _prompt(prompt: str) -> str | None:
    try:
        return input(prompt)
    except EOFError:
        return None


def resolve_program(command: Command) -> str:
    """Find the program to start, searching ``PATH`` for bare names."""
    name = command.name or ""
    if name.startswith("/") or name.startswith("./"):
        return name
    search = command.env.get("PATH")
    if search is None:
        return name
    for directory in split_words(search, ":"):
        candidate = join_path(directory, name)
        if os.path.exists(candidate):
            return candidate
    return name


def read_heredoc(delimiter: str | None, reader: Reader) -> str:
    """Collect lines until one starts with ``delimiter`` or input ends."""
    if delimiter is None:
        raise RedirectionError("parse error near `\\n'")
    lines: list[str] = []
    while True:
        line = reader("> ")
        if line is None or line.startswith(delimiter):
            break
        lines.append(line + "\n")
    return "".join(lines)


def open_redirections(
    redirections: Iterable[Redirection], reader: Reader
) -> _Streams:
    """Open the files a command's redirections name; later ones win.

    Here-documents are read first and joined into one input.
    """
    redirections = list(redirections)
    streams = _Streams()
    try:
        heredocs = [r for r in redirections if r.kind is RedirKind.HEREDOC]
        if heredocs:
            buffer = streams.track(tempfile.TemporaryFile())
            for redirection in heredocs:
                buffer.write(read_heredoc(redirection.target, reader).encode())
            buffer.seek(0)
            streams.stdin = buffer
        for redirection in redirections:
            kind, target = redirection.kind, redirection.target
            if kind is RedirKind.HEREDOC:
                continue
            if target is None:
                raise RedirectionError("parse error near `\\n'")
            if kind is RedirKind.INPUT:
                try:
                    streams.stdin = streams.track(open(target, "rb"))
                except OSError:
                    raise RedirectionError(
                        f"{target}: no such file or directory"
                    ) from None
                continue
            flags = os.O_CREAT | os.O_WRONLY
            if kind is RedirKind.APPEND:
                flags |= os.O_APPEND
            try:
                descriptor = os.open(target, flags, 0o644)
            except OSError as exc:
                raise RedirectionError(f"open: {exc.strerror}") from None
            streams.stdout = streams.track(os.fdopen(descriptor, "wb"))
    except BaseException:
        streams.close()
        raise
    return streams


def _env_dict(env: Environment) -> dict[str, str]:
    result: dict[str, str] = {}
    for entry in env:
        name, sep, value = entry.partition("=")
        if sep:
            result[name] = value
    return result


def _default_signals() -> None:
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    signal.signal(signal.SIGQUIT, signal.SIG_DFL)


@contextmanager
def _ignoring_interrupts() -> Iterator[None]:
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    saved = {
        sig: signal.signal(sig, signal.SIG_IGN)
        for sig in (signal.SIGINT, signal.SIGQUIT)
    }
    try:
        yield
    finally:
        for sig, handler in saved.items():
            signal.signal(sig, handler)


def _deliver(data: bytes, streams: _Streams, has_next: bool) -> bytes | None:
    if has_next:
        return data
    if streams.stdout is not None:
        streams.stdout.write(data)
        streams.stdout.flush()
    else:
        sys.stdout.write(data.decode(errors="replace"))
        sys.stdout.flush()
    return None


def _run_external(
    command: Command, streams: _Streams, piped: bytes | None, has_next: bool
) -> tuple[int, bytes | None]:
    argv = [resolve_program(command), *command.args[1:]]
    options: dict = {
        "env": _env_dict(command.env),
        "preexec_fn": _default_signals,
        "stdout": subprocess.PIPE if has_next else streams.stdout,
    }
    if piped is not None:
        options["input"] = piped
    else:
        options["stdin"] = streams.stdin
    sys.stdout.flush()
    try:
        with _ignoring_interrupts():
            finished = subprocess.run(argv, **options)
    except OSError as exc:
        _error(f"{command.name}: {exc.strerror}")
        return 1, (b"" if has_next else None)
    status = finished.returncode
    if status < 0:
        sig = -status
        if sig == signal.SIGQUIT:
            sys.stdout.write("Quit (core dumped)\n")
        elif sig == signal.SIGINT:
            sys.stdout.write("\n")
        sys.stdout.flush()
        status = 128 + sig
    output = finished.stdout if has_next else None
    return status, (output or b"") if has_next else None


def _run_one(
    command: Command, streams: _Streams, piped: bytes | None, has_next: bool
) -> tuple[int, bytes | None]:
    if command.name is None:
        return 0, (b"" if has_next else None)
    if builtin_kind(command.name) is BuiltinKind.NONE:
        return _run_external(command, streams, piped, has_next)
    buffer = io.StringIO()
    status = run_builtin(command, buffer)
    return status, _deliver(buffer.getvalue().encode(), streams, has_next)


def execute_pipeline(
    commands: Iterable[Command], reader: Reader | None = None
) -> int:
    """Run the commands in order, each one's output feeding the next.

    Returns the last status, or :data:`EXIT` as soon as ``exit`` runs.
    """
    if reader is None:
        reader = _prompt
    commands = list(commands)
    status = 0
    piped: bytes | None = None
    for index, command in enumerate(commands):
        has_next = index + 1 < len(commands)
        try:
            streams = open_redirections(command.redirections, reader)
        except RedirectionError as exc:
            _error(str(exc))
            status = 1
            piped = b"" if has_next else None
            continue
        with streams:
            status, piped = _run_one(command, streams, piped, has_next)
        if status == EXIT:
            return EXIT
    return status