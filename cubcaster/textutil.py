"""Small text helpers used while reading scene files."""

from __future__ import annotations

_LEADING_WHITESPACE = " \t\n\v\f\r"


def atoi(text: str) -> int:
    """Read a leading decimal integer, skipping whitespace and one sign.

    Anything after the digits is ignored; text without digits gives 0.
    """
    body = text.lstrip(_LEADING_WHITESPACE)
    sign = 1
    if body[:1] in ("-", "+"):
        if body[0] == "-":
            sign = -1
        body = body[1:]
    value = 0
    for char in body:
        if not "0" <= char <= "9":
            break
        value = value * 10 + (ord(char) - ord("0"))
    return sign * value


def split(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping empty pieces."""
    return [piece for piece in text.split(sep) if piece]


def trim(text: str, chars: str) -> str:
    """Remove every character found in ``chars`` from both ends of ``text``."""
    return text.strip(chars)