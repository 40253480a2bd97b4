"""An in-memory 32-bit pixel buffer and BMP export."""

from __future__ import annotations

import math
import struct
from pathlib import Path

GRID_COLOR = 0x00999999
_HEADER_SIZE = 54
_INFO_SIZE = 40
_BIT_COUNT = 24


class Image:
    """A width x height buffer of 0xRRGGBB pixels, stored row by row."""

    def __init__(self, width: int, height: int, fill: int = 0) -> None:
        if width < 0 or height < 0:
            raise ValueError("image dimensions must not be negative")
        self.width = width
        self.height = height
        self.pixels = [fill] * (width * height)

    def _contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_pixel(self, x: float, y: float, color: int) -> None:
        """Set one pixel; coordinates outside the image are ignored."""
        x, y = int(x), int(y)
        if self._contains(x, y):
            self.pixels[x + self.width * y] = color

    def get_pixel(self, x: float, y: float) -> int:
        """Return one pixel, or -1 outside the image."""
        x, y = int(x), int(y)
        if not self._contains(x, y):
            return -1
        return self.pixels[x + self.width * y]

    @staticmethod
    def _span(start: float, length: float, limit: int) -> range:
        covered = {int(start + step) for step in range(math.ceil(length))}
        inside = [value for value in covered if 0 <= value < limit]
        if not inside:
            return range(0)
        return range(min(inside), max(inside) + 1)

    def fill_rect(
        self, x: float, y: float, width: float, height: float, color: int
    ) -> None:
        """Fill a rectangle, clipped to the image."""
        columns = self._span(x, width, self.width)
        if not columns:
            return
        run = [color] * len(columns)
        for row in self._span(y, height, self.height):
            base = row * self.width
            self.pixels[base + columns.start : base + columns.stop] = run

    def draw_grid(self, cell: int = 64) -> None:
        """Draw grid lines every ``cell`` pixels."""
        if cell <= 0:
            raise ValueError("cell size must be positive")
        for x in range(0, self.width + 1, cell):
            for y in range(self.height + 1):
                self.set_pixel(x, y, GRID_COLOR)
        for y in range(0, self.height + 1, cell):
            for x in range(self.width + 1):
                self.set_pixel(x, y, GRID_COLOR)


def bmp_bytes(image: Image) -> bytes:
    """Encode the image as a 24-bit uncompressed BMP file."""
    row_size = (image.width * _BIT_COUNT + 31) // 32 * 4
    image_size = row_size * image.height
    header = struct.pack(
        "<2sIHHIIiiHHIIiiII",
        b"BM",
        _HEADER_SIZE + image_size,
        0,
        0,
        _HEADER_SIZE,
        _INFO_SIZE,
        image.width,
        image.height,
        1,
        _BIT_COUNT,
        0,
        image_size,
        0,
        0,
        0,
        0,
    )
    padding = bytes(row_size - 3 * image.width)
    body = bytearray()
    for y in reversed(range(image.height)):
        row = image.pixels[y * image.width : (y + 1) * image.width]
        for color in row:
            body += bytes((color & 0xFF, (color >> 8) & 0xFF, (color >> 16) & 0xFF))
        body += padding
    return header + bytes(body)


def save_bmp(image: Image, path: str | Path) -> None:
    """Write the image to ``path`` as a BMP file."""
    Path(path).write_bytes(bmp_bytes(image))