"""Reading scene description files: resolution, textures, colours and the map."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

CELL = 64
MAX_WIDTH = 2560
MAX_HEIGHT = 1440

READ_FAILED = "Couldn't Read The Map"
INVALID_MAP = "Invalid Map File"
BAD_COLOR = "Wrong Floor/Ceilling Color"
MANY_SPAWNS = "There's More Than One Spawn"

_WHITESPACE = " \t\n\v\f\r"
_NUMBER = re.compile(r"[+-]?([0-9]*)")
_INT64_MAX = 2**63 - 1

_SPAWN_ROTATIONS = {"N": 180.0, "S": 0.0, "W": -90.0, "E": 90.0}

# Order matters: "SO" must be tried before the sprite key "S".
_FIELDS = (
    ("NO", "north"),
    ("SO", "south"),
    ("WE", "west"),
    ("EA", "east"),
    ("S", "sprite"),
    ("F", "floor"),
    ("C", "ceiling"),
)
_COLOR_FIELDS = {"floor", "ceiling"}


class SceneError(ValueError):
    """Raised when a scene description cannot be read or is invalid."""


@dataclass
class Scene:
    """Everything a scene file describes.

    ``grid`` is indexed ``grid[x][y]``: 0 is empty, 1 a wall, 2 a sprite.
    """

    width: int
    height: int
    north: str
    south: str
    west: str
    east: str
    sprite: str
    floor: int
    ceiling: int
    grid: list[list[int]]
    spawn_x: float = 0.0
    spawn_y: float = 0.0
    rotation: float = 0.0

    @property
    def columns(self) -> int:
        return len(self.grid)

    @property
    def rows(self) -> int:
        return len(self.grid[0]) if self.grid else 0


def atoi(text: str) -> int:
    """Parse a leading decimal integer the lenient C way, wrapping to 32 bits.

    Leading whitespace and one sign are accepted; parsing stops at the first
    non-digit. A positive value beyond 64 bits gives -1, a negative one 0.
    """
    stripped = text.lstrip(_WHITESPACE)
    negative = stripped.startswith("-")
    match = _NUMBER.match(stripped)
    digits = match.group(1) if match else ""
    number = int(digits) if digits else 0
    if not negative and number > _INT64_MAX:
        return -1
    if negative and number > _INT64_MAX + 1:
        return 0
    value = -number if negative else number
    return (value + 2**31) % 2**32 - 2**31


def parse_color(text: str) -> int:
    """Turn ``"r,g,b"`` into a 0xRRGGBB integer."""
    parts = [part for part in text.split(",") if part]
    if len(parts) != 3:
        raise SceneError(BAD_COLOR)
    red, green, blue = (atoi(part) for part in parts)
    if not all(0 <= channel < 256 for channel in (red, green, blue)):
        raise SceneError(BAD_COLOR)
    return (red << 16) + (green << 8) + blue


def build_grid(
    first_line: str, lines: Iterable[str]
) -> tuple[list[list[int]], tuple[float, float, float] | None]:
    """Build the map from its first row and the rows after it.

    Returns the grid (indexed ``[x][y]``) and the spawn as
    ``(x, y, rotation)``, or ``None`` when the map has no spawn.
    """
    top = first_line.replace(" ", "")
    if not top or set(top) != {"1"}:
        raise SceneError(INVALID_MAP)
    width = len(top)
    rows = [top]
    for raw in lines:
        row = raw.replace(" ", "")
        if not row:
            continue
        if row[0] != "1" or row[-1] != "1" or len(row) != width:
            raise SceneError(INVALID_MAP)
        rows.append(row)

    grid = [[0] * len(rows) for _ in range(width)]
    spawn: tuple[float, float, float] | None = None
    for y, row in enumerate(rows):
        for x, cell in enumerate(row):
            if cell in ("1", "2"):
                grid[x][y] = int(cell)
            elif cell in _SPAWN_ROTATIONS:
                if spawn is not None:
                    raise SceneError(MANY_SPAWNS)
                spawn = (
                    x * CELL + CELL / 2,
                    y * CELL + CELL / 2,
                    _SPAWN_ROTATIONS[cell],
                )
            elif cell != "0":
                raise SceneError(INVALID_MAP)
    return grid, spawn


def _argument(words: list[str], index: int) -> str:
    if index >= len(words):
        raise SceneError(INVALID_MAP)
    return words[index]


def parse_scene(lines: Iterable[str]) -> Scene:
    """Parse the lines of a scene description. The map must come last."""
    stripped: Iterator[str] = (line.rstrip("\n") for line in lines)
    values: dict[str, object] = {}
    width = height = 0
    grid: list[list[int]] | None = None
    spawn: tuple[float, float, float] | None = None

    for line in stripped:
        if not line:
            continue
        words = [word for word in line.split(" ") if word]
        if not words:
            raise SceneError(INVALID_MAP)
        key = words[0]
        if key.startswith("R"):
            width = atoi(_argument(words, 1))
            if width:
                height = atoi(_argument(words, 2))
            continue
        if key.startswith("1"):
            grid, spawn = build_grid(line, stripped)
            break
        name = next((field for prefix, field in _FIELDS if key.startswith(prefix)), None)
        if name is None:
            raise SceneError(INVALID_MAP)
        # A colour of 0 is indistinguishable from an unset one.
        if values.get(name):
            raise SceneError(INVALID_MAP)
        argument = _argument(words, 1)
        values[name] = parse_color(argument) if name in _COLOR_FIELDS else argument

    if (
        width < 1
        or height < 1
        or grid is None
        or not all(values.get(name) for _, name in _FIELDS)
    ):
        raise SceneError(INVALID_MAP)
    if width > MAX_WIDTH or height > MAX_HEIGHT:
        width, height = MAX_WIDTH, MAX_HEIGHT

    spawn_x, spawn_y, rotation = spawn if spawn is not None else (0.0, 0.0, 0.0)
    return Scene(
        width=width,
        height=height,
        north=str(values["north"]),
        south=str(values["south"]),
        west=str(values["west"]),
        east=str(values["east"]),
        sprite=str(values["sprite"]),
        floor=int(values["floor"]),  # type: ignore[arg-type]
        ceiling=int(values["ceiling"]),  # type: ignore[arg-type]
        grid=grid,
        spawn_x=spawn_x,
        spawn_y=spawn_y,
        rotation=rotation,
    )


def load_scene(path: str | Path) -> Scene:
    """Read and parse a scene file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SceneError(f"{READ_FAILED}: {exc}") from exc
    return parse_scene(text.split("\n"))