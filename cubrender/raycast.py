"""Casting rays through the map grid to find walls and sprites."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from cubrender.parsing import CELL, Scene

DEG = math.pi / 180
RAD = 180 / math.pi
FOV = 66
SPEED = 3.0


class Face(str, Enum):
    """Which side of a wall a ray struck."""

    WEST = "W"
    EAST = "E"
    NORTH = "N"
    SOUTH = "S"


@dataclass(frozen=True)
class Hit:
    """A wall hit at map coordinates ``(x, y)``."""

    x: int
    y: int
    face: Face


@dataclass(frozen=True)
class SpriteSlice:
    """One screen column of a sprite."""

    top: float
    height: float
    cell_x: int
    cell_y: int
    column: int
    offset: float
    distance: float


def sign(value: float) -> int:
    """Return -1 for negative values and 1 otherwise, zero included."""
    number = float(value)
    if math.isnan(number):
        return 1
    if number < 0.0:
        return -1
    return 1


def _round(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass
class Caster:
    """The player in a grid, able to cast rays for screen columns."""

    grid: list[list[int]]
    width: int
    height: int
    x: float
    y: float
    rotation: float
    fov: int = FOV
    speed: float = SPEED
    sprites: list[SpriteSlice] = field(default_factory=list)

    @property
    def columns(self) -> int:
        return len(self.grid)

    @property
    def rows(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def _cell(self, cx: int, cy: int) -> int:
        if 0 <= cx < self.columns and 0 <= cy < self.rows:
            return self.grid[cx][cy]
        return 0

    def ray_angle(self, column: int) -> float:
        """Angle in radians of the ray for a screen column."""
        return (self.rotation - self.fov * (column / self.width - 0.5)) * DEG

    def cast(self, column: int) -> Hit | None:
        """Cast the ray for a column; sprites crossed go to ``sprites``."""
        angle = self.ray_angle(column)
        end_x = self.x + self.width * math.sin(angle)
        end_y = self.y + self.width * math.cos(angle)
        return self.trace(self.x, self.y, end_x, end_y, column)

    def trace(self, x0: float, y0: float, x1: float, y1: float, column: int) -> Hit | None:
        """Step from one point to another until a wall is met."""
        dx, dy = x1 - x0, y1 - y0
        steps = int(max(abs(dx), abs(dy)))
        if steps == 0:
            step_x = step_y = 0.0
        else:
            step_x, step_y = int(dx) / steps, int(dy) / steps
        mx, my = x0, y0
        for _ in range(steps + 1):
            px, py = _round(mx), _round(my)
            face = self.check_hit(px, py, column)
            if face is not None:
                return Hit(px, py, face)
            mx += step_x
            my += step_y
        return None

    def check_hit(self, x: int, y: int, column: int) -> Face | None:
        """Return the wall face at a grid-line point, if any."""
        if x < 0 or y < 0 or (x % CELL and y % CELL):
            return None
        rx, ry = x // CELL, y // CELL
        if not (rx < self.columns and ry < self.rows):
            return None
        self._check_sprite(x, y, column)
        cell = self._cell
        on_x, on_y = x % CELL == 0, y % CELL == 0
        if on_x and on_y and (
            cell(rx, ry) == 1
            or (rx > 0 and cell(rx - 1, ry) != 0)
            or (ry > 0 and cell(rx, ry - 1) == 1)
            or (rx > 0 and ry > 0 and cell(rx - 1, ry - 1) == 1)
        ):
            return self._corner(rx, ry)
        if on_x and cell(rx, ry) == 1:
            return Face.WEST
        if on_x and rx > 0 and cell(rx - 1, ry) == 1:
            return Face.EAST
        if on_y and cell(rx, ry) == 1:
            return Face.NORTH
        if on_y and ry > 0 and cell(rx, ry - 1) == 1:
            return Face.SOUTH
        return None

    def _corner(self, rx: int, ry: int) -> Face | None:
        cell = self._cell
        bx, by = rx * CELL, ry * CELL
        half = CELL // 2
        if cell(rx, ry) == 1:
            c = (bx + half, by, bx, by + half)
        elif cell(rx - 1, ry) == 1:
            c = (bx - half, by, bx, by + half)
        elif cell(rx, ry - 1) == 1:
            c = (bx + half, by, bx, by - half)
        elif cell(rx - 1, ry - 1) == 1:
            c = (bx - half, by, bx, by - half)
        else:
            return None
        d1 = int(math.hypot(c[0] - self.x, c[1] - self.y))
        d2 = int(math.hypot(c[2] - self.x, c[3] - self.y))
        if cell(rx, ry) == 1:
            west = (d1 > d2 and rx > 0 and cell(rx - 1, ry) == 0) or (
                ry > 0 and cell(rx, ry - 1) != 0
            )
            return Face.WEST if west else Face.NORTH
        if cell(rx - 1, ry) == 1:
            east = d1 > d2 or (ry > 0 and cell(rx - 1, ry - 1) != 0)
            return Face.EAST if east else Face.NORTH
        if cell(rx, ry - 1) == 1:
            west = d1 > d2 and ry > 0 and cell(rx - 1, ry - 1) == 0
            return Face.WEST if west else Face.SOUTH
        return Face.EAST if d1 > d2 else Face.SOUTH

    def _check_sprite(self, x: int, y: int, column: int) -> None:
        rx, ry = x // CELL, y // CELL
        on_x, on_y = x % CELL == 0, y % CELL == 0
        cell = self._cell
        if on_x and cell(rx, ry) == 2:
            self._add_sprite(column, rx, ry)
        elif on_x and rx > 0 and cell(rx - 1, ry) == 2:
            self._add_sprite(column, rx - 1, ry)
        elif on_y and ry > 0 and cell(rx, ry - 1) == 2:
            self._add_sprite(column, rx, ry - 1)
        elif on_x and on_y and rx > 0 and ry > 0 and cell(rx - 1, ry - 1) == 2:
            self._add_sprite(column, rx - 1, ry - 1)

    def _add_sprite(self, column: int, cx: int, cy: int) -> None:
        if any(
            s.cell_x == cx and s.cell_y == cy and s.column == column for s in self.sprites
        ):
            return
        dcx = self.x - (cx * CELL + CELL / 2)
        dcy = self.y - (cy * CELL + CELL / 2)
        bearing = math.atan2(dcy, dcx) * RAD + 180
        view = self.fov * (column / self.width)
        view = math.fmod(90 - self.rotation + (view - self.fov // 2), 360.0)
        distance = math.hypot(dcx, dcy)
        spread = math.atan2(CELL / 2, distance) * RAD
        delta = math.fmod(view - bearing, 360.0)
        if delta < -180:
            delta += 360
        elif delta >= 180:
            delta -= 360
        size = CELL * self.height / (distance + 1)
        offset = (delta / spread + 1.0) / 2.0
        if not 0.0 <= offset < 1.0:
            return
        sprite = SpriteSlice(
            (self.height - size) / 2.0, size, cx, cy, column, offset, distance
        )
        # Nearer than the first entry goes to the front, otherwise to the back.
        if not self.sprites or self.sprites[0].distance > distance:
            self.sprites.insert(0, sprite)
        else:
            self.sprites.append(sprite)

    def is_free(self, x: float, y: float) -> bool:
        """Whether the player may stand at ``(x, y)``."""
        ix, iy = int(x), int(y)
        if ix < 0 or iy < 0:
            return False
        rx, ry = ix // CELL, iy // CELL
        if not (rx < self.columns and ry < self.rows):
            return False
        if self.grid[rx][ry]:
            return False
        if ix % CELL == 0 and rx > 0 and self.grid[rx - 1][ry]:
            return False
        if iy % CELL == 0 and ry > 0 and self.grid[rx][ry - 1]:
            return False
        return True


def caster_from_scene(scene: Scene) -> Caster:
    """Create a caster placed at the scene's spawn."""
    return Caster(
        grid=scene.grid,
        width=scene.width,
        height=scene.height,
        x=scene.spawn_x,
        y=scene.spawn_y,
        rotation=scene.rotation,
    )