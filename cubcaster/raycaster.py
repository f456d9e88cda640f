"""Grid ray casting, frame drawing and player movement."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from cubcaster.details import Color, SceneDetails

MOVE_SPEED = 0.08
ROT_SPEED = 0.025
SCREEN_W = 640
SCREEN_H = 480
TEXTURE_SIZE = 32
TEXTURE_NAMES = ("north", "south", "east", "west")

_FAR = 1e30


def rgb(r: int, g: int, b: int) -> int:
    """Pack a colour as ``0x00RRGGBB``."""
    return 0 << 24 | r << 16 | g << 8 | b


@dataclass
class Texture:
    """A wall texture as row-major packed colours."""

    width: int
    height: int
    pixels: list[int]

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("texture size must be positive")
        if len(self.pixels) != self.width * self.height:
            raise ValueError("texture pixel count does not match its size")


class Frame:
    """An image being drawn, one packed colour per pixel."""

    def __init__(self, width: int = SCREEN_W, height: int = SCREEN_H,
                 fill: int = 0) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("frame size must be positive")
        self.width = width
        self.height = height
        self.pixels = [fill] * (width * height)

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel off limit: ({x}, {y})")
        return y * self.width + x

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set the pixel at column ``x``, row ``y``."""
        self.pixels[self._offset(x, y)] = color

    def get_pixel(self, x: int, y: int) -> int:
        """Colour of the pixel at column ``x``, row ``y``."""
        return self.pixels[self._offset(x, y)]


@dataclass
class Player:
    """Position, view direction, camera plane and pending moves."""

    pos_x: float = 0.0
    pos_y: float = 0.0
    dir_x: float = 0.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.0
    time: float = 0.0
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    r_left: bool = False
    r_right: bool = False

    def reset_moves(self) -> None:
        """Clear every pending movement and rotation."""
        self.up = self.down = self.left = self.right = False
        self.r_left = self.r_right = False


@dataclass
class RayHit:
    """Where one screen column's ray met a wall and how to draw it."""

    side: int
    ray_dir_x: float
    ray_dir_y: float
    map_x: int
    map_y: int
    perp_dist: float
    line_height: int
    draw_start: int
    draw_end: int
    texture: str
    tex_x: int


@dataclass
class Game:
    """The map, colours, textures and player of a running scene."""

    rows: list[str]
    floor: Color
    ceiling: Color
    player: Player
    textures: dict[str, Texture]
    width: int = 0
    height: int = 0
    screen_w: int = SCREEN_W
    screen_h: int = SCREEN_H
    texture_w: int = TEXTURE_SIZE
    texture_h: int = TEXTURE_SIZE

    @classmethod
    def from_details(cls, details: SceneDetails,
                     textures: Mapping[str, Texture]) -> "Game":
        """Set up a game from parsed scene details and loaded textures."""
        missing = [name for name in TEXTURE_NAMES if name not in textures]
        if missing:
            raise ValueError(f"missing textures: {', '.join(missing)}")
        player = Player(
            pos_x=details.pos_x,
            pos_y=details.pos_y,
            dir_x=details.dir_x,
            dir_y=details.dir_y,
            plane_x=details.plane_x,
            plane_y=details.plane_y,
        )
        return cls(
            rows=list(details.rows),
            floor=details.floor,
            ceiling=details.ceiling,
            player=player,
            textures={name: textures[name] for name in TEXTURE_NAMES},
            width=details.width,
            height=details.height,
        )

    def _cell(self, x: int, y: int) -> str:
        """Map character at row ``x``, column ``y``; outside counts as wall."""
        if 0 <= x < len(self.rows) and 0 <= y < len(self.rows[x]):
            return self.rows[x][y]
        return "1"

    def fill_background(self, frame: Frame) -> None:
        """Paint the upper half with the ceiling and the lower with the floor."""
        middle = frame.height // 2
        ceiling = rgb(*self.ceiling)
        floor = rgb(*self.floor)
        for y in range(frame.height):
            color = ceiling if y < middle else floor
            for x in range(frame.width):
                frame.put_pixel(x, y, color)

    def cast_ray(self, x: int, width: int) -> RayHit:
        """Trace the ray for screen column ``x`` until it hits a wall."""
        p = self.player
        h = self.screen_h
        camera_x = 2 * x / width - 1
        ray_x = p.dir_x + p.plane_x * camera_x
        ray_y = p.dir_y + p.plane_y * camera_x
        map_x = int(p.pos_x)
        map_y = int(p.pos_y)
        delta_x = _FAR if ray_x == 0 else abs(1.0 / ray_x)
        delta_y = _FAR if ray_y == 0 else abs(1.0 / ray_y)

        if ray_x < 0:
            step_x = -1
            side_x = (p.pos_x - map_x) * delta_x
        else:
            step_x = 1
            side_x = (map_x + 1.0 - p.pos_x) * delta_x
        if ray_y < 0:
            step_y = -1
            side_y = (p.pos_y - map_y) * delta_y
        else:
            step_y = 1
            side_y = (map_y + 1.0 - p.pos_y) * delta_y

        while True:
            if side_x < side_y:
                side_x += delta_x
                map_x += step_x
                side = 0
            else:
                side_y += delta_y
                map_y += step_y
                side = 1
            if self._cell(map_x, map_y) == "1":
                break

        perp = side_x - delta_x if side == 0 else side_y - delta_y
        line_height = int(h / perp) if perp > 0 else h
        draw_start = max(-(line_height // 2) + h // 2, 0)
        draw_end = min(line_height // 2 + h // 2, h - 1)

        if side == 0:
            name = "south" if ray_x > 0 else "north"
            wall_x = p.pos_y + perp * ray_y
        else:
            name = "east" if ray_y > 0 else "west"
            wall_x = p.pos_x + perp * ray_x
        wall_x -= math.floor(wall_x)

        texture = self.textures[name]
        tex_x = int(wall_x * texture.width)
        if (side == 0 and ray_x > 0) or (side == 1 and ray_y < 0):
            tex_x = texture.width - tex_x - 1

        return RayHit(side, ray_x, ray_y, map_x, map_y, perp, line_height,
                      draw_start, draw_end, name, tex_x)

    def draw_column(self, frame: Frame, x: int, hit: RayHit) -> None:
        """Draw the textured wall slice described by ``hit`` in column ``x``."""
        texture = self.textures[hit.texture]
        line_height = max(hit.line_height, 1)
        step = texture.height / line_height
        tex_pos = (hit.draw_start - self.screen_h / 2.0
                   + line_height / 2.0) * step
        start = max(hit.draw_start, 0)
        end = min(hit.draw_end, self.screen_h - 1)
        for y in range(start, end + 1):
            tex_y = min(max(int(tex_pos), 0), texture.height - 1)
            tex_pos += step
            color = texture.pixels[tex_y * texture.width + hit.tex_x]
            frame.put_pixel(x, y, color)

    def render(self, frame: Frame) -> Frame:
        """Draw the background and every wall column into ``frame``."""
        self.fill_background(frame)
        for x in range(frame.width):
            self.draw_column(frame, x, self.cast_ray(x, frame.width))
        return frame

    def _rotate(self, angle: float) -> None:
        p = self.player
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        old_dir_x = p.dir_x
        p.dir_x = p.dir_x * cos_a - p.dir_y * sin_a
        p.dir_y = old_dir_x * sin_a + p.dir_y * cos_a
        old_plane_x = p.plane_x
        p.plane_x = p.plane_x * cos_a - p.plane_y * sin_a
        p.plane_y = old_plane_x * sin_a + p.plane_y * cos_a

    def handle_movement(self) -> None:
        """Apply the pending moves and rotations, stopping at walls."""
        p = self.player
        ms = MOVE_SPEED
        if p.up:
            if self._cell(int(p.pos_x + p.dir_x * ms), int(p.pos_y)) != "1":
                p.pos_x += p.dir_x * ms
            if self._cell(int(p.pos_x), int(p.pos_y + p.dir_y * ms)) != "1":
                p.pos_y += p.dir_y * ms
        if p.down:
            if self._cell(int(p.pos_x - p.dir_x * ms), int(p.pos_y)) == "0":
                p.pos_x -= p.dir_x * ms
            if self._cell(int(p.pos_x), int(p.pos_y - p.dir_y * ms)) == "0":
                p.pos_y -= p.dir_y * ms
        if p.r_right:
            self._rotate(-ROT_SPEED)
        if p.r_left:
            self._rotate(ROT_SPEED)
        if p.right:
            if self._cell(int(p.pos_x + p.dir_y * ms * 2), int(p.pos_y)) != "1":
                p.pos_x += p.dir_y * ms
            if self._cell(int(p.pos_x), int(p.pos_y - p.dir_x * ms * 2)) != "1":
                p.pos_y -= p.dir_x * ms
        if p.left:
            if self._cell(int(p.pos_x - p.dir_y * ms * 2), int(p.pos_y)) != "1":
                p.pos_x -= p.dir_y * ms
            if self._cell(int(p.pos_x), int(p.pos_y + p.dir_x * ms * 2)) != "1":
                p.pos_y += p.dir_x * ms

    def step(self, frame: Optional[Frame] = None) -> Frame:
        """Render one frame, then move the player and clear pending moves."""
        if frame is None:
            frame = Frame(self.screen_w, self.screen_h)
        self.render(frame)
        self.handle_movement()
        self.player.reset_moves()
        return frame


def _rows_of(lines: Sequence[str]) -> list[str]:
    return [line.rstrip("\n") for line in lines]