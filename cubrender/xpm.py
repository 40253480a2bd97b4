"""Loading XPM pixmaps into :class:`~cubrender.image.Image` buffers."""

from __future__ import annotations

import re
from pathlib import Path

from cubrender.image import Image

_STRING = re.compile(r'"((?:[^"\\]|\\.)*)"')
_NAMED = {"black": 0x000000, "white": 0xFFFFFF, "red": 0xFF0000,
          "green": 0x00FF00, "blue": 0x0000FF}


class XpmError(ValueError):
    """Raised when XPM data cannot be parsed."""


def _parse_color(spec: str) -> int:
    words = spec.split()
    try:
        value = words[words.index("c") + 1]
    except (ValueError, IndexError) as exc:
        raise XpmError(f"no colour key in {spec!r}") from exc
    if value.lower() == "none":
        return 0
    if value.startswith("#"):
        digits = value[1:]
        if len(digits) == 12:
            digits = digits[0:2] + digits[4:6] + digits[8:10]
        if len(digits) != 6:
            raise XpmError(f"unsupported colour {value!r}")
        try:
            return int(digits, 16)
        except ValueError as exc:
            raise XpmError(f"bad colour {value!r}") from exc
    try:
        return _NAMED[value.lower()]
    except KeyError as exc:
        raise XpmError(f"unknown colour {value!r}") from exc


def parse_xpm(text: str) -> Image:
    """Parse the text of an XPM file into an image."""
    strings = _STRING.findall(text)
    if not strings:
        raise XpmError("no XPM data found")
    try:
        width, height, ncolors, cpp = (int(v) for v in strings[0].split()[:4])
    except ValueError as exc:
        raise XpmError("bad XPM header") from exc
    if min(width, height, ncolors, cpp) < 0 or cpp == 0:
        raise XpmError("bad XPM header")
    if len(strings) < 1 + ncolors + height:
        raise XpmError("truncated XPM data")
    palette = {}
    for entry in strings[1 : 1 + ncolors]:
        palette[entry[:cpp]] = _parse_color(entry[cpp:])
    image = Image(width, height)
    for y, row in enumerate(strings[1 + ncolors : 1 + ncolors + height]):
        if len(row) < width * cpp:
            raise XpmError(f"row {y} is too short")
        for x in range(width):
            key = row[x * cpp : (x + 1) * cpp]
            if key not in palette:
                raise XpmError(f"undefined pixel {key!r}")
            image.set_pixel(x, y, palette[key])
    return image


def load_xpm(path: str | Path) -> Image:
    """Read and parse an XPM file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm(text)