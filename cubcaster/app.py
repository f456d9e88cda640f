"""Command-line entry point: load a scene, its textures, and run the view."""

from __future__ import annotations

import sys
from array import array
from typing import Mapping, Optional, Sequence

from cubcaster.details import SceneDetails
from cubcaster.raycaster import TEXTURE_NAMES, Frame, Game, Player, Texture, rgb
from cubcaster.reader import load_scene
from cubcaster.validate import SceneError

WINDOW_TITLE = "cub3D"
FRAME_RATE = 60

_KEY_FLAGS: Mapping[str, str] = {
    "w": "up",
    "a": "left",
    "s": "down",
    "d": "right",
    "left": "r_left",
    "right": "r_right",
}
QUIT_KEY = "escape"


def has_xpm(path: Optional[str]) -> bool:
    """True when ``path`` ends with ``.xpm``."""
    if not path or len(path) < 4:
        return False
    return path[-4:] == ".xpm"


def load_texture(path: str) -> Texture:
    """Read an image file into a :class:`Texture` of packed colours."""
    from PIL import Image

    try:
        with Image.open(path) as image:
            converted = image.convert("RGB")
            width, height = converted.size
            pixels = [rgb(r, g, b) for r, g, b in converted.getdata()]
    except (OSError, ValueError) as exc:
        raise SceneError(f"Error: Invalid texture file(s): {path}") from exc
    return Texture(width, height, pixels)


def load_all_textures(details: SceneDetails) -> dict[str, Texture]:
    """Load the north, south, east and west textures named by ``details``."""
    textures = {}
    for name in TEXTURE_NAMES:
        path = getattr(details, name)
        if not path:
            raise SceneError("Error: Invalid texture file(s)")
        textures[name] = load_texture(path)
    return textures


def apply_key(player: Player, key: str) -> bool:
    """Record a key press on ``player``; return False when the key quits."""
    if key == QUIT_KEY:
        return False
    flag = _KEY_FLAGS.get(key)
    if flag is not None:
        setattr(player, flag, True)
    return True


def _frame_bytes(frame: Frame) -> bytes:
    data = array("I", [pixel | 0xFF000000 for pixel in frame.pixels])
    if sys.byteorder == "big":
        data.byteswap()
    return data.tobytes()


def _run(game: Game) -> int:
    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((game.screen_w, game.screen_h))
        pygame.display.set_caption(WINDOW_TITLE)
        pygame.key.set_repeat(200, 30)
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return 1
                if event.type == pygame.KEYDOWN:
                    if not apply_key(game.player, pygame.key.name(event.key)):
                        return 1
            frame = Frame(game.screen_w, game.screen_h)
            game.render(frame)
            surface = pygame.image.frombuffer(
                _frame_bytes(frame), (frame.width, frame.height), "BGRA"
            )
            screen.blit(surface, (0, 0))
            pygame.display.flip()
            game.handle_movement()
            game.player.reset_moves()
            clock.tick(FRAME_RATE)
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the viewer on the scene file given as the single argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        sys.stderr.write("Error: Wrong number of arguments\n")
        sys.stderr.write("Expected: ./cub3D exemple.cub\n")
        return 0
    try:
        details = load_scene(args[0])
        textures = load_all_textures(details)
    except SceneError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    game = Game.from_details(details, textures)
    return _run(game)


if __name__ == "__main__":
    sys.exit(main())