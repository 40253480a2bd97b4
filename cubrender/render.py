"""Drawing frames: floor, ceiling, textured walls and sprites."""

from __future__ import annotations

import math
from dataclasses import dataclass

from cubrender.image import Image
from cubrender.parsing import CELL, INVALID_MAP, Scene, SceneError
from cubrender.raycast import DEG, Caster, Face, Hit, SpriteSlice
from cubrender.xpm import XpmError, load_xpm

TRANSPARENT = 0x980088


@dataclass
class Textures:
    """The four wall textures and the sprite texture."""

    west: Image
    east: Image
    north: Image
    south: Image
    sprite: Image


def load_textures(scene: Scene) -> Textures:
    """Load every texture a scene names."""
    try:
        return Textures(
            west=load_xpm(scene.west),
            east=load_xpm(scene.east),
            north=load_xpm(scene.north),
            south=load_xpm(scene.south),
            sprite=load_xpm(scene.sprite),
        )
    except XpmError as exc:
        raise SceneError(INVALID_MAP) from exc


class Renderer:
    """Renders the caster's view into an image, one frame at a time."""

    def __init__(self, caster: Caster, textures: Textures, floor: int, ceiling: int) -> None:
        self.caster = caster
        self.textures = textures
        self.floor = floor
        self.ceiling = ceiling
        self.image = Image(caster.width, caster.height)
        self._walls = {
            Face.WEST: textures.west,
            Face.EAST: textures.east,
            Face.NORTH: textures.north,
            Face.SOUTH: textures.south,
        }

    def frame(self) -> Image:
        """Render a full frame and return it."""
        width, height = self.caster.width, self.caster.height
        self.image = Image(width, height)
        half = height // 2
        self.image.fill_rect(0, 0, width, half, self.floor)
        self.image.fill_rect(0, half, width, half, self.ceiling)
        for column in range(width):
            self.draw_wall(column, self.caster.cast(column))
            for sprite in list(self.caster.sprites):
                if sprite.column == column:
                    self.draw_sprite(sprite)
        self.caster.sprites.clear()
        return self.image

    def draw_wall(self, column: int, hit: Hit | None) -> None:
        """Draw the textured wall slice for one column."""
        if hit is None or hit.x < 0:
            return
        caster = self.caster
        angle = abs(caster.fov * column / caster.width - caster.fov / 2)
        distance = math.hypot(hit.x - caster.x, hit.y - caster.y) * math.cos(angle * DEG)
        height = CELL * caster.height / (distance + 1)
        if hit.face is Face.WEST:
            offset = hit.y % CELL
        elif hit.face is Face.SOUTH:
            offset = hit.x % CELL
        elif hit.face is Face.EAST:
            offset = CELL - hit.y % CELL
        else:
            offset = CELL - hit.x % CELL
        texture = self._walls[hit.face]
        if not texture.pixels:
            return
        top = (caster.height - height) / 2
        scale = texture.height / height
        column_offset = offset * (texture.width // CELL)
        for row in range(math.ceil(height)):
            y = top + row
            if not (0 <= column < self.image.width and 0 <= y < self.image.height):
                continue
            index = texture.width * int(row * scale) + column_offset
            self.image.set_pixel(column, y, texture.pixels[index % len(texture.pixels)])

    def draw_sprite(self, sprite: SpriteSlice) -> bool:
        """Draw one sprite column. Returns False when it falls outside the texture."""
        texture = self.textures.sprite
        offset = sprite.offset * texture.width
        if offset < 0.0 or offset >= texture.width:
            return False
        for row in range(math.ceil(sprite.height)):
            y = sprite.top + row
            if not (0 <= sprite.column < self.image.width and 0 <= y < self.image.height):
                continue
            ty = int(row * (texture.height / sprite.height))
            color = texture.get_pixel(offset, ty)
            if color != TRANSPARENT:
                self.image.set_pixel(sprite.column, y, color)
        return True