"""Validation of the lines of a scene file before they are used."""

from __future__ import annotations

import os
from typing import Optional, Sequence

from cubcaster.details import first_map_line
from cubcaster.textutil import atoi, split

_TEXTURE_TAGS = {"NO": 1, "SO": 2, "EA": 3, "WE": 4}
_TEXTURE_TOTAL = sum(_TEXTURE_TAGS.values())

_ELEMENT_WEIGHTS = (
    ("NO", 1),
    ("SO", 10),
    ("WE", 100),
    ("EA", 1000),
    ("F", 10000),
    ("C", 100000),
)
_ELEMENT_TOTAL = sum(weight for _, weight in _ELEMENT_WEIGHTS)

_PLAYER_MARKS = "NSOE"
_MAP_CHARS = set(_PLAYER_MARKS + "10 \n")


class SceneError(Exception):
    """Raised when a scene file is malformed or refers to missing files."""


def texture_path(line: str) -> str:
    """Path named by a texture line: text after the tag, up to the newline."""
    content = line.split("\n", 1)[0]
    return content[2:].lstrip(" ")


def check_texture_access(line: str) -> str:
    """Make sure the texture named by ``line`` can be opened; return its path."""
    path = texture_path(line)
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError as exc:
        raise SceneError(
            f"Erreur lors de l'ouverture de la texture: {exc.strerror}"
        ) from exc
    os.close(fd)
    return path


def check_number(text: str) -> bool:
    """True when ``text`` is optional spaces, digits, then spaces or newlines."""
    rest = text.lstrip(" ")
    digits = len(rest) - len(rest.lstrip("0123456789"))
    return rest[digits:].strip(" \n") == ""


def check_rgb(parts: Sequence[str]) -> list[int]:
    """Check colour components: at most three, each a number in 0..255."""
    if len(parts) > 3:
        raise SceneError("Error: mauvais format rgb")
    values = []
    for part in parts:
        value = atoi(part)
        if not 0 <= value <= 255 or not check_number(part):
            raise SceneError("Error: range rgb non respecte")
        values.append(value)
    return values


def check_colors(lines: Sequence[str]) -> None:
    """Check every floor and ceiling colour line."""
    for line in lines:
        if line.startswith(("F", "C")):
            check_rgb(split(line[1:], ","))


def check_elements(lines: Sequence[str]) -> bool:
    """True when each of NO, SO, WE, EA, F and C appears exactly once."""
    total = 0
    for line in lines:
        for tag, weight in _ELEMENT_WEIGHTS:
            if line.startswith(tag):
                total += weight
                break
    return total == _ELEMENT_TOTAL


def check_order(lines: Sequence[str]) -> None:
    """The map must come last and every element must be present once."""
    if not lines or not lines[-1].lstrip(" ").startswith("1"):
        raise SceneError("Error: la map doit etre en dernier")
    if not check_elements(lines):
        raise SceneError("Error: mauvais nombre d'elements")


def check_textures(lines: Sequence[str]) -> None:
    """Every texture must be readable and each direction named once."""
    total = 0
    for line in lines:
        weight = _TEXTURE_TAGS.get(line[:2])
        if weight is not None:
            check_texture_access(line)
            total += weight
    if total != _TEXTURE_TOTAL:
        raise SceneError("Error: problemes avec les textures")


def _escapes_at(rows: Sequence[str], y: int, x: int) -> bool:
    if y < 0 or x < 0 or y >= len(rows):
        return True
    row = rows[y]
    return x >= len(row) - 1 or row[x] == " "


def flood_fill_escapes(rows: Sequence[str], y: int, x: int) -> bool:
    """True when the open area around ``(y, x)`` reaches the map's edge."""
    stack = [(y, x)]
    seen: set[tuple[int, int]] = set()
    while stack:
        cy, cx = stack.pop()
        if _escapes_at(rows, cy, cx):
            return True
        if rows[cy][cx] == "1" or (cy, cx) in seen:
            continue
        seen.add((cy, cx))
        stack.extend(((cy, cx + 1), (cy, cx - 1), (cy + 1, cx), (cy - 1, cx)))
    return False


def _find_start(lines: Sequence[str]) -> Optional[tuple[int, int]]:
    for y in range(first_map_line(lines), len(lines)):
        for x, char in enumerate(lines[y]):
            if char in _PLAYER_MARKS:
                return y, x
    return None


def check_map(lines: Sequence[str]) -> tuple[int, int]:
    """Check the map is closed around the player; return the start ``(y, x)``."""
    start = _find_start(lines)
    if start is None or flood_fill_escapes(lines, *start):
        raise SceneError("Map invalid")
    return start


def check_map_content(lines: Sequence[str]) -> str:
    """Check map characters and that one player is present; return its mark."""
    marks = []
    for line in lines[first_map_line(lines):]:
        if not set(line) <= _MAP_CHARS:
            raise SceneError("Invalid character in map")
        marks.extend(char for char in line if char in _PLAYER_MARKS)
    if len(marks) != 1:
        raise SceneError(
            f"there must be exactly one player; found {len(marks)}"
        )
    return marks[0]


def check_data(lines: Sequence[str]) -> None:
    """Run every check on the lines of a scene file."""
    check_order(lines)
    check_textures(lines)
    check_colors(lines)
    check_map(lines)
    check_map_content(lines)