# raycube

raycube renders a walkable 3D maze from a plain-text `.cub` map. It uses DDA
grid raycasting and one XPM texture for each wall side. Next to the 3D view
it shows a top-down minimap. The minimap draws the player, the view
direction, the camera plane and every cast ray.

## Installing

```
pip install .
```

This also installs pygame, which raycube uses for the window, input and
drawing on screen. To run the tests, install the `test` extra:

```
pip install .[test]
pytest
```

## Running

```
raycube path/to/level.cub
```

If you give anything other than exactly one argument, raycube prints
`Usage: raycube <map_file.cub>` to standard error and exits with status 1.
It also exits with status 1 and prints `Error: ...` in these cases:

* the map file cannot be read;
* the map is malformed or not enclosed;
* a texture cannot be loaded;
* no display can be opened.

The 3D view and the minimap are shown side by side in one pygame window.

### Controls

| Key          | Action              |
|--------------|---------------------|
| `W` / `S`    | move forward / back |
| `A` / `D`    | strafe left / right |
| `←` / `→`    | turn                |
| `Esc`        | quit                |

Closing the window also quits. The player cannot come closer than 0.2 cells
to a wall. When a move is blocked, the player slides along the wall where it
can.

## Map files

A `.cub` file has exactly seven header lines, and the map grid follows them:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0

111111
100001
1000N1
111111
```

* `NO`, `SO`, `WE` and `EA` give the XPM texture for each wall side. The path
  is opened as written, so a relative path is relative to the current
  directory. All four entries are required.
* `F` and `C` give the floor and ceiling colours as `R,G,B`. Both are
  required.
* In the grid, `1` is a wall and every other character is open floor. A tab
  counts as four cells. Short rows are padded with open floor.
* Exactly one of `N`, `S`, `W` or `E` must appear in the grid. It marks the
  player's start and facing, and the player starts in the centre of that
  cell.
* Every open cell that can be reached from the player must be closed off by
  walls. If one reaches the edge of the grid, the map is rejected.

## Using it as a library

Each part of the engine can be used on its own.

* `raycube.config` reads scene files. It has `read_config` (returns a
  `Config`), `load_map` (returns a `GameMap`), `find_player`, `parse_color`
  and `is_map_enclosed`. Malformed files raise `ParseError`.
* `raycube.raycast` casts the ray for one screen column with `cast_ray`,
  which returns a `RayHit`. It also has `window_bound`, `vector_to_screen`,
  `wall_color` and `wall_side`.
* `raycube.movement` holds `PlayerState`, with an `update(game_map)` step.
  It also has `new_player`, a `Rotation` enum, and the collision helpers
  `min_wall_dist` and `check_wall`.
* `raycube.vector` has the immutable `Vector`, the `Direction` enum and
  `direction_vector`.
* `raycube.image` has an in-memory 32-bit `Image` with pixel, line and
  square drawing.
* `raycube.xpm` loads XPM textures with `read_xpm_file` or `xpm_to_image`.
  Bad data raises `XpmError`.
* `raycube.colors` looks up X11 colour names, ignoring case, with
  `lookup_color`.
* `raycube.render` fills an `Image` with the 3D view (`render_view`) or the
  minimap (`render_minimap`).
* `raycube.window` wraps pygame. It has a `Display` with windows, an event
  loop, and key, mouse, expose and loop hooks.
* `raycube.app` has the `Game` class and the `main` entry point.

Example:

```python
from raycube.colors import lookup_color
from raycube.image import Image

img = Image(64, 64)
img.draw_square((8, 8), 16, lookup_color("steel blue"))
assert img.get_pixel(10, 10) == 0x4682B4
```

## Limits

* Texture files must be XPM. Only the `c` colour key of an XPM colour table
  is read.
* There are no sprites, doors, sound or mouse look.