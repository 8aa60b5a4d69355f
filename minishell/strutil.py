"""Small string helpers with the exact semantics the shell relies on."""

from __future__ import annotations

_C_WHITESPACE = " \t\n\v\f\r"


def atoi(text: str) -> int:
    """Parse a leading, optionally signed decimal integer; 0 if there is none.

    Leading whitespace is skipped and parsing stops at the first non-digit.
    """
    rest = text.lstrip(_C_WHITESPACE)
    sign = 1
    if rest[:1] == "-":
        sign = -1
        rest = rest[1:]
    elif rest[:1] == "+":
        rest = rest[1:]
    digits = []
    for ch in rest:
        if not ("0" <= ch <= "9"):
            break
        digits.append(ch)
    if not digits:
        return 0
    return sign * int("".join(digits))


def split_words(text: str, sep: str) -> list[str]:
    """Split ``text`` on the single character ``sep``, dropping empty pieces."""
    return [piece for piece in text.split(sep) if piece]


def strncmp(left: str, right: str, n: int) -> int:
    """Compare at most ``n`` characters; return the difference of the first mismatch.

    The end of a string compares as a character of value 0.
    """
    for position in range(max(n, 0)):
        a = ord(left[position]) if position < len(left) else 0
        b = ord(right[position]) if position < len(right) else 0
        if a != b:
            return a - b
        if a == 0:
            break
    return 0


def trim(text: str, chars: str) -> str:
    """Remove every leading and trailing character that appears in ``chars``."""
    return text.strip(chars)


def is_alnum_word(text: str) -> bool:
    """True when every character of ``text`` is an ASCII letter or digit."""
    return all(ch.isascii() and ch.isalnum() for ch in text)


def substr(text: str, start: int, length: int) -> str:
    """Return up to ``length`` characters of ``text`` beginning at ``start``."""
    if start >= len(text):
        return ""
    return text[start:start + length]