"""Held keys and player movement."""

from __future__ import annotations

import math
from enum import Enum, IntEnum

from cubrender.raycast import DEG, Caster, sign

_SLOTS = 4
_MARGIN = 9


class Direction(str, Enum):
    LEFT = "l"
    RIGHT = "r"
    FORWARD = "f"
    BACK = "b"


class KeyAction(IntEnum):
    """Key codes the game reacts to."""

    STRAFE_RIGHT = 0
    BACK = 1
    STRAFE_LEFT = 2
    FORWARD = 13
    QUIT = 53
    TURN_LEFT = 123
    TURN_RIGHT = 124


_MOVES = {
    KeyAction.STRAFE_RIGHT: Direction.RIGHT,
    KeyAction.STRAFE_LEFT: Direction.LEFT,
    KeyAction.BACK: Direction.BACK,
    KeyAction.FORWARD: Direction.FORWARD,
}


class KeyHold:
    """Up to four keys held down at once."""

    def __init__(self) -> None:
        self._slots: list[int | None] = [None] * _SLOTS

    def press(self, key: int) -> None:
        if key in self._slots:
            return
        for index, slot in enumerate(self._slots):
            if slot is None:
                self._slots[index] = key
                return

    def release(self, key: int) -> None:
        self._slots = [None if slot == key else slot for slot in self._slots]

    def held(self) -> list[int]:
        return [slot for slot in self._slots if slot is not None]


def step(caster: Caster, direction: Direction) -> None:
    """Move the player one step, blocked by walls on each axis."""
    dx = math.cos(caster.rotation * DEG) * caster.speed
    dy = math.sin(caster.rotation * DEG) * caster.speed
    if direction is Direction.LEFT:
        if caster.is_free(caster.x - dx - _MARGIN * sign(dx), caster.y):
            caster.x -= dx
        if caster.is_free(caster.x, caster.y + dy + _MARGIN * sign(dy)):
            caster.y += dy
    elif direction is Direction.RIGHT:
        if caster.is_free(caster.x + dx + _MARGIN * sign(dx), caster.y):
            caster.x += dx
        if caster.is_free(caster.x, caster.y - dy - _MARGIN * sign(dy)):
            caster.y -= dy
    elif direction is Direction.FORWARD:
        if caster.is_free(caster.x + dy + _MARGIN * sign(dy), caster.y):
            caster.x += dy
        if caster.is_free(caster.x, caster.y + dx + _MARGIN * sign(dx)):
            caster.y += dx
    elif direction is Direction.BACK:
        if caster.is_free(caster.x - dy - _MARGIN * sign(dy), caster.y):
            caster.x -= dy
        if caster.is_free(caster.x, caster.y - dx - _MARGIN * sign(dx)):
            caster.y -= dx


def apply(caster: Caster, action: int) -> bool:
    """Act on one held key. Returns False when the game should quit."""
    try:
        action = KeyAction(action)
    except ValueError:
        return True
    if action is KeyAction.QUIT:
        return False
    if action is KeyAction.TURN_LEFT:
        caster.rotation += 0.5 * caster.speed
    elif action is KeyAction.TURN_RIGHT:
        caster.rotation -= 0.5 * caster.speed
    else:
        step(caster, _MOVES[action])
    return True