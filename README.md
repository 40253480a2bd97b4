# cubrender

A small first-person ray-casting renderer. It reads a `.cub` scene file
describing a grid maze, its wall textures, a sprite and two background
colours, then either lets you walk through the maze in a pygame window or
renders a single frame to a BMP screenshot.

## Installing

```
pip install .
```

pygame is installed as a dependency; it is only imported when the window is
opened.

## Running

```
cubrender path/to/map.cub
```

Add `--save` (any second argument starting with `--save` is accepted) to
render one frame to `screenshot.bmp` in the current directory and exit
instead of opening a window:

```
cubrender path/to/map.cub --save
```

Any other number or form of arguments prints the usage message.

Keys while the window is open: `W`/`S` move forward and back, `A`/`D` strafe,
the left and right arrows turn, and `Escape` or closing the window quits. Up
to four keys are tracked as held at once.

Errors are written to standard error as `Error` followed by a message on the
next line, and the command returns exit status 255.

## The scene file

Each setting sits on its own line; blank lines are ignored. The maze comes
last: everything after its first row is read as maze rows.

```
R 1024 768
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
S ./textures/sprite.xpm
F 220,100,0
C 225,30,0
1111111
1000201
10N0001
1111111
```

- `R` gives the width and height. Both must be at least 1; if either is above
  2560 or 1440 respectively, the size becomes 2560x1440.
- `NO`, `SO`, `WE`, `EA` and `S` name XPM files for the four wall faces and
  the sprite. Each may appear only once.
- `F` and `C` are colours written `r,g,b`, each 0-255. `F` fills the upper
  half of each frame and `C` the lower half. A colour of `0,0,0` counts as
  missing and is rejected.
- In the maze, `1` is a wall, `2` a sprite, `0` empty floor, and one of `N`,
  `S`, `E` or `W` marks where the player starts and which way they face. More
  than one start is an error; with none, the player starts at the map origin.
  The first row must be all walls, every row must start and end with a wall,
  and all rows must have the same length. Spaces inside maze rows are
  ignored, as are blank lines within the maze.

XPM textures may use colours written as `#RRGGBB`, 12-digit hex, `None`, or
the names black, white, red, green and blue. In the sprite texture, the
colour `0x980088` is treated as transparent.

## Using it from Python

```python
from cubrender.parsing import load_scene
from cubrender.app import save_screenshot

scene = load_scene("map.cub")
image = save_screenshot(scene, "frame.bmp")
```

- `cubrender.parsing`: `parse_scene(lines)` and `load_scene(path)` return a
  `Scene` and raise `SceneError` on bad input; `parse_color`, `build_grid`
  and `atoi` are the pieces they are built from.
- `cubrender.image`: `Image`, a plain 0xRRGGBB pixel buffer with
  `set_pixel`, `get_pixel`, `fill_rect` and `draw_grid`; `bmp_bytes` and
  `save_bmp` encode it as a 24-bit BMP.
- `cubrender.xpm`: `parse_xpm` and `load_xpm` read XPM data into an `Image`,
  raising `XpmError`.
- `cubrender.raycast`: `caster_from_scene` builds a `Caster` whose `cast`,
  `trace` and `check_hit` find wall `Hit`s and collect `SpriteSlice`s, and
  whose `is_free` tells whether a position is walkable.
- `cubrender.movement`: `KeyHold`, `step` and `apply` move and turn a
  `Caster` for the `KeyAction` codes.
- `cubrender.render`: `load_textures` and `Renderer`, whose `frame` draws a
  full view into an `Image`.
- `cubrender.app`: `save_screenshot`, `run_window` and the command's `main`.

## What it does not do

There is no mouse look, no minimap, no sound and no game logic beyond walking
around: sprites are drawn but cannot be interacted with. Textures can only be
read from XPM files, and screenshots are only written as BMP.