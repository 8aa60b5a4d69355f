"""The shell's variable table: an ordered list of ``NAME=value`` entries."""

from __future__ import annotations

from string import ascii_lowercase, ascii_uppercase
from typing import Iterable, Iterator, Mapping


def _same_key(arg: str, entry: str) -> bool:
    """True when ``arg`` assigns the variable that ``entry`` defines."""
    name, sep, _ = entry.partition("=")
    return bool(sep) and arg.startswith(name + "=")


class Environment:
    """An ordered, mutable collection of ``NAME=value`` strings."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries: list[str] = list(entries)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "Environment":
        """Build an environment from a name-to-value mapping, keeping its order."""
        return cls(f"{name}={value}" for name, value in mapping.items())

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Environment):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"Environment({self._entries!r})"

    def copy(self) -> "Environment":
        """Return an independent copy."""
        return Environment(self._entries)

    def get(self, name: str) -> str | None:
        """Value of the first entry that starts with ``name``.

        Returns None when no entry matches, when the matching entry has no
        ``=``, or when some entry after the first is itself a prefix of
        ``name``.
        """
        if any(name.startswith(entry) for entry in self._entries[1:]):
            return None
        for entry in self._entries:
            if entry.startswith(name):
                _, sep, value = entry.partition("=")
                return value if sep else None
        return None

    def lookup(self, name: str) -> str | None:
        """Value of the variable named exactly ``name``, or None."""
        prefix = name + "="
        for entry in self._entries:
            if entry.startswith(prefix):
                return entry[len(prefix):]
        return None

    def export(self, args: Iterable[str]) -> None:
        """Apply ``NAME=value`` assignments; arguments without ``=`` are ignored.

        Entries replaced by an assignment are dropped and the assignments are
        appended in the order given.
        """
        args = list(args)
        kept = [
            entry
            for entry in self._entries
            if not any(_same_key(arg, entry) for arg in args)
        ]
        self._entries = kept + [arg for arg in args if "=" in arg]

    def _first_match(self, prefix: str) -> int:
        for index, entry in enumerate(self._entries):
            if entry.startswith(prefix):
                return index
        return -1

    def unset(self, args: Iterable[str]) -> bool:
        """Remove every entry that starts with one of ``args``.

        Nothing is removed unless some argument first matches an entry other
        than the first one. Returns whether the table changed. Raises
        ValueError when no argument is given.
        """
        args = list(args)
        if not args:
            raise ValueError("unset: not enough arguments")
        if not any(self._first_match(arg) > 0 for arg in args):
            return False
        self._entries = [
            entry
            for entry in self._entries
            if not any(entry.startswith(arg) for arg in args)
        ]
        return True

    def set_pwd(self, old_pwd: str, pwd: str) -> None:
        """Rewrite existing ``PWD`` and ``OLDPWD`` entries; none are added."""
        updated = []
        for entry in self._entries:
            if entry.startswith("PWD"):
                entry = "PWD=" + pwd
            elif entry.startswith("OLDPWD"):
                entry = "OLDPWD=" + old_pwd
            updated.append(entry)
        self._entries = updated

    def export_listing(self) -> list[str]:
        """Entries grouped by first letter: A, a, B, b, ... z, then ``_``."""
        lines: list[str] = []
        for upper, lower in zip(ascii_uppercase, ascii_lowercase):
            lines.extend(e for e in self._entries if e[:1] == upper)
            lines.extend(e for e in self._entries if e[:1] == lower)
        lines.extend(e for e in self._entries if e[:1] == "_")
        return lines