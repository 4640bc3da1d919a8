# raycube

A first-person maze explorer with textured walls, drawn by raycasting with
pygame. A scene is described by a `.cub` file. It gives four wall textures,
a floor colour, a ceiling colour, and a map of walls and open floor with one
starting position for the player.

## Installing

```
pip install .
```

Running the tests needs the `test` extra:

```
pip install ".[test]"
pytest
```

## Playing

```
raycube level.cub
```

To play with an overhead minimap in the bottom-right corner of the window:

```
raycube-minimap level.cub
```

The command takes exactly one argument, and its name must end in `.cub`.
The window is 1600×900 pixels. A new frame is drawn at most every 40 ms.

| Key             | Action            |
|-----------------|-------------------|
| `W`             | move forward      |
| `S`             | move backwards    |
| `A` / `D`       | strafe left/right |
| `←` / `→`       | turn left/right   |
| `Esc` or close  | quit              |

Only one movement key and one turning key count as held at a time. Pressing a
new one replaces the one held before it. Walls block movement.

On the minimap, walls are white, open floor is black and empty space is gray.
The player is a yellow disc with a magenta line showing where they look.

## The `.cub` file

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png

F 220,100,0
C 225,30,0

111111
100001
1010N1
100001
111111
```

* `NO`, `SO`, `WE`, `EA` give the texture files for the four wall faces. Each
  must be a readable file, not a directory, in any image format Pillow can
  open. Texture rows wrap with a bit mask, so heights that are powers of two
  (64, 128, ...) work best.
* `F` and `C` give the floor and ceiling colours as `R,G,B`. Each part is 0 to
  255, written as digits only, with no spaces or signs.
* These six lines may come in any order, with blank lines between them. Each
  may appear only once.
* The map comes last. It uses `1` for walls, `0` for open floor, spaces for
  empty space outside the maze, and one of `N`, `S`, `E`, `W` for where the
  player starts and which way they face. There must be exactly one start. It
  may not lie on the map's edge, and its four neighbours must be `0` or `1`.
* The map must be closed: no open cell may lead to a space or the map's edge.
  Nothing but blank lines may follow the map, and its area (rows × widest row)
  may be at most 91200 cells.

When the arguments or the file break one of these rules, the command prints
the reason to standard error and exits with status 1. For example:

```
Error
Map not closed
```

## Using it as a library

```python
from raycube.parser import load_world

world = load_world("level.cub")
print(world.map_len, world.map_wid, hex(world.sky), hex(world.ground))
print(world.cam)
```

`load_world` reads a file and `parse_lines` takes its lines, each with its
newline kept. Both return a `raycube.models.World` and raise
`raycube.errors.ConfigError` when the scene is invalid. The error's `code` is
a member of `raycube.errors.ErrorCode`, and `raycube.errors.error_message`
gives the text the command prints for it.

The other modules:

* `raycube.specs`: argument, texture path and colour checks (`parse_color`).
* `raycube.mapcheck`: map section checks, player placement and the closed-map
  flood fill (`check_closed`).
* `raycube.raycast`: `cast_ray`, `render_walls` and a `FrameBuffer` of
  `0xRRGGBB` integers.
* `raycube.controls`: `KeyState` and `Player`, which moves and turns the
  camera.
* `raycube.minimap`: `draw_minimap` into a `FrameBuffer`.
* `raycube.app`: `Game`, which owns the window and frame loop, and the
  `main` and `main_bonus` commands.

To run a scene from code:

```python
from raycube.app import Game
from raycube.parser import load_world

Game(load_world("level.cub"), bonus=True).run()
```

## What it does not do

It is a maze to walk through. There are no enemies, weapons, sprites, doors,
sound or mouse look, and no saving of progress.