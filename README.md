# cubcaster

A small first-person raycaster. It reads a `.cub` scene file and checks it.
It then shows the maze in a 640×480 window with textured walls. The floor and
the ceiling are drawn in solid colours.

## Installation

```
pip install .
```

## Running

```
cubcaster path/to/scene.cub
```

Controls (holding a key repeats it):

| Key          | Action              |
|--------------|---------------------|
| `W` / `S`    | move forward / back |
| `A` / `D`    | strafe left / right |
| `←` / `→`    | turn left / right   |
| `Esc`        | quit                |

Exit status and messages:

- Wrong number of arguments: a usage message goes to stderr and the exit status is 0.
- Invalid scene, or a texture that cannot be loaded: the error goes to stderr and the exit status is 1.
- Leaving with `Esc` or by closing the window: the exit status is 1.

## Scene file format

The file name must end in `.cub` and have at least one character before the
extension. The file holds six elements followed by the map, and the map must
come last:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm

F 220,100,0
C 225,30,0

        1111111111
        1000000001
111111111000N00001
100000000000000001
111111111111111111
```

- **Wall textures.** `NO`, `SO`, `WE` and `EA` each appear exactly once. Each names a texture file that must be readable.
- **Loading textures.** Textures are loaded with Pillow, so any image format Pillow can open will work. `cubcaster.app.has_xpm` is a helper that reports whether a path ends in `.xpm`.
- **Floor and ceiling.** `F` sets the floor colour and `C` sets the ceiling colour. Each is an `R,G,B` list with at most three parts. Each part is a number from 0 to 255, and spaces may come before or after it.
- **Map characters.** The map may contain only `0` (floor), `1` (wall), spaces and the player mark.
- **Player mark.** The map must hold exactly one player mark. The checks accept `N`, `S`, `E` and `O`:
  - `N`, `S` and `E` set the start position and the direction the player faces.
  - `O` passes the checks, but no start position or facing is read from it.
  - `W` is rejected as an invalid character.
- **Closed map.** Flood-filling from the player must never reach a space or the edge of the map.

## Using it as a library

```python
from cubcaster.reader import load_scene
from cubcaster.app import load_all_textures
from cubcaster.raycaster import Game, Frame

details = load_scene("maps/demo.cub")          # SceneDetails
game = Game.from_details(details, load_all_textures(details))
frame = Frame(640, 480)
game.render(frame)
print(hex(frame.get_pixel(320, 10)))           # packed 0x00RRGGBB
```

Modules:

- **`cubcaster.reader`**
  - `valid_extension` checks the file name.
  - `read_lines` reads the file.
  - `load_scene` reads the file, validates it and builds a `SceneDetails`.
  - `load_scene` raises `cubcaster.validate.SceneError` when the file is not valid.
- **`cubcaster.validate`**: the individual checks, among them `check_order`, `check_textures`, `check_colors`, `check_map`, `check_map_content` and `check_data`.
- **`cubcaster.details`**: `SceneDetails` and `fill_details`, which extract textures, colours, map rows and the player start. `SceneDetails.describe()` gives a text summary.
- **`cubcaster.raycaster`**: the drawing and movement model.
  - `Frame` is a pixel buffer.
  - `Game.cast_ray` traces the ray for one screen column.
  - `Game.render` draws a frame.
  - `Game.handle_movement` applies pending moves and stops at walls.
  - `Game.step` renders, then moves the player.
- **`cubcaster.app`**
  - `load_texture` and `load_all_textures` load the wall images.
  - `apply_key` records a key press on a `Player`.
  - `main` is the command's entry point.

## Limitations

The viewer draws only walls, a solid floor and a solid ceiling. It has no
sprites, doors, minimap, mouse look or sound.

## Tests

```
pip install .[test]
pytest
```