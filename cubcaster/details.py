"""Extraction of textures, colours, map and player start from scene lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from cubcaster.textutil import atoi, split, trim

Color = tuple[int, int, int]

UNSET_COLOR: Color = (-1, -1, -1)
PLAYER_MARKS = "NESW"

_FACINGS: dict[str, tuple[float, float, float, float]] = {
    "N": (-1.0, 0.0, 0.0, 0.66),
    "S": (1.0, 0.0, 0.0, -0.66),
    "E": (0.0, 1.0, 0.66, 0.0),
    "W": (0.0, -1.0, -0.66, 0.0),
}


@dataclass
class SceneDetails:
    """Everything read from a validated scene description."""

    north: Optional[str] = None
    south: Optional[str] = None
    west: Optional[str] = None
    east: Optional[str] = None
    floor: Color = UNSET_COLOR
    ceiling: Color = UNSET_COLOR
    rows: list[str] = field(default_factory=list)
    width: int = 0
    height: int = 0
    pos_x: float = 0.0
    pos_y: float = 0.0
    dir_x: float = 0.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.0
    screen_w: int = 640
    screen_h: int = 480
    texture_w: int = 32
    texture_h: int = 32

    def describe(self) -> str:
        """Return a readable multi-line summary of the scene."""
        lines = [
            f"NO:{self.north}",
            f"SO:{self.south}",
            f"WE:{self.west}",
            f"EA:{self.east}",
            "Floor:R={} G={} B={}".format(*self.floor),
            "Ceiling:R={} G={} B={}".format(*self.ceiling),
            f"Position:x={self.pos_x:.2f} y={self.pos_y:.2f}",
            f"Direction:x={self.dir_x:.2f} y={self.dir_y:.2f}",
            f"Map({self.height} x {self.width}):",
        ]
        lines.extend(f"'{row}'" for row in self.rows)
        return "\n".join(lines)


def first_map_line(lines: Sequence[str]) -> int:
    """Index of the line where the map starts, or 0 when none is found.

    The map begins at the first line starting with ``1`` or a space; when it
    starts with a space, the first line from there on holding a ``1`` is taken.
    """
    for index, line in enumerate(lines):
        head = line[:1]
        if head == "1":
            return index
        if head == " ":
            for offset, candidate in enumerate(lines[index:]):
                if "1" in candidate:
                    return index + offset
            return len(lines)
    return 0


def width_of(line: str) -> int:
    """Width of a line once leading and trailing spaces are ignored."""
    return len(line.lstrip(" ").rstrip(" "))


def map_size(rows: Sequence[str]) -> tuple[int, int]:
    """Return ``(width, height)``: the longest row length and the row count."""
    width = max((len(row) for row in rows), default=0)
    return width, len(rows)


def extract_map(lines: Sequence[str]) -> list[str]:
    """Map rows from the first map line to the end, without newlines."""
    return [trim(line, "\n") for line in lines[first_map_line(lines):]]


def parse_textures(lines: Iterable[str]) -> dict[str, Optional[str]]:
    """Texture paths keyed by ``north``, ``south``, ``west`` and ``east``."""
    keys = {"NO": "north", "SO": "south", "WE": "west", "EA": "east"}
    textures: dict[str, Optional[str]] = dict.fromkeys(keys.values())
    for line in lines:
        name = keys.get(line[:2])
        if name is not None:
            textures[name] = trim(line[2:], " \n")
    return textures


def parse_color(line: str) -> Optional[Color]:
    """Read an ``R,G,B`` colour after its ``F`` or ``C`` tag.

    Returns None when fewer than three components are present.
    """
    body = line.lstrip(" FC")
    parts = split(body, ",")
    if len(parts) < 3:
        return None
    return atoi(parts[0]), atoi(parts[1]), atoi(parts[2])


def parse_colors(lines: Iterable[str]) -> tuple[Color, Color]:
    """Return ``(floor, ceiling)``; a missing colour stays ``(-1, -1, -1)``."""
    floor = ceiling = UNSET_COLOR
    for line in lines:
        if line.startswith("F "):
            floor = parse_color(line) or floor
        elif line.startswith("C "):
            ceiling = parse_color(line) or ceiling
    return floor, ceiling


def facing(direction: str) -> tuple[float, float, float, float]:
    """Return ``(dir_x, dir_y, plane_x, plane_y)`` for a compass letter."""
    try:
        return _FACINGS[direction]
    except KeyError:
        raise ValueError(f"unknown direction {direction!r}") from None


def find_player(rows: Sequence[str]) -> Optional[tuple[float, float, str]]:
    """Locate the first player mark as ``(row + 0.5, column + 0.5, mark)``."""
    for row_index, row in enumerate(rows):
        for col_index, char in enumerate(row):
            if char in PLAYER_MARKS:
                return row_index + 0.5, col_index + 0.5, char
    return None


def fill_details(lines: Sequence[str]) -> SceneDetails:
    """Build a :class:`SceneDetails` from the lines of a scene file."""
    floor, ceiling = parse_colors(lines)
    rows = extract_map(lines)
    width, height = map_size(rows)
    details = SceneDetails(
        **parse_textures(lines),
        floor=floor,
        ceiling=ceiling,
        rows=rows,
        width=width,
        height=height,
    )
    player = find_player(rows)
    if player is not None:
        details.pos_x, details.pos_y, mark = player
        (details.dir_x, details.dir_y,
         details.plane_x, details.plane_y) = facing(mark)
    return details