"""Keyboard state, player movement and view rotation."""

from __future__ import annotations

import math
import time
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto

from .models import Camera

MOVE_STEP = 0.066
ROTATION_SPEED = 0.05
COOLDOWN_MS = 30
FOV_FACTOR = 0.66

_WALL = "1"


class Key(Enum):
    """Keys the player can hold down."""

    W = auto()
    A = auto()
    S = auto()
    D = auto()
    LEFT = auto()
    RIGHT = auto()


_MOVEMENT_KEYS = {
    Key.W: "forward",
    Key.A: "left",
    Key.S: "backward",
    Key.D: "right",
}


@dataclass
class KeyState:
    """Which movement and rotation keys are currently held."""

    forward: bool = False
    left: bool = False
    backward: bool = False
    right: bool = False
    rotate_left: bool = False
    rotate_right: bool = False

    def press(self, key: Key) -> None:
        """Record a key press; only one movement and one rotation key is held."""
        if key in _MOVEMENT_KEYS:
            self.forward = self.left = self.backward = self.right = False
            setattr(self, _MOVEMENT_KEYS[key], True)
        elif key is Key.LEFT:
            self.rotate_left, self.rotate_right = True, False
        elif key is Key.RIGHT:
            self.rotate_left, self.rotate_right = False, True

    def release(self, key: Key) -> None:
        """Record a key release."""
        if key in _MOVEMENT_KEYS:
            setattr(self, _MOVEMENT_KEYS[key], False)
        elif key is Key.LEFT:
            self.rotate_left = False
        elif key is Key.RIGHT:
            self.rotate_right = False


def now_ms() -> int:
    """Wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass
class Player:
    """The camera together with its view plane and movement cooldowns."""

    cam: Camera
    plane_x: float | None = None
    plane_y: float | None = None
    last_move: int = 0
    last_rotation: int = 0

    def __post_init__(self) -> None:
        if self.plane_x is None:
            self.plane_x = -self.cam.dir_y * FOV_FACTOR
        if self.plane_y is None:
            self.plane_y = self.cam.dir_x * FOV_FACTOR

    def _step(self, grid: Sequence[str], dx: float, dy: float, now: int) -> None:
        cam = self.cam
        y = cam.pos_y + dy
        x = cam.pos_x + dx
        if grid[int(y)][int(cam.pos_x)] != _WALL:
            cam.pos_y = y
        if grid[int(cam.pos_y)][int(x)] != _WALL:
            cam.pos_x = x
        self.last_move = now

    def move(self, grid: Sequence[str], keys: KeyState, now: int) -> bool:
        """Move along the held direction unless blocked by a wall.

        Returns True if a movement key was acted on.
        """
        if now - self.last_move <= COOLDOWN_MS:
            return False
        cam = self.cam
        step = MOVE_STEP
        moved = False
        if keys.forward:
            self._step(grid, cam.dir_x * step, cam.dir_y * step, now)
            moved = True
        if keys.left:
            self._step(grid, cam.dir_y * step, -cam.dir_x * step, now)
            moved = True
        if keys.backward:
            self._step(grid, -cam.dir_x * step, -cam.dir_y * step, now)
            moved = True
        if keys.right:
            self._step(grid, -cam.dir_y * step, cam.dir_x * step, now)
            moved = True
        return moved

    def rotate(self, keys: KeyState, now: int) -> bool:
        """Turn the view direction and plane; return True if it turned."""
        if now - self.last_rotation <= COOLDOWN_MS:
            return False
        if keys.rotate_left:
            rot = -ROTATION_SPEED
        elif keys.rotate_right:
            rot = ROTATION_SPEED
        else:
            return False
        cos_r, sin_r = math.cos(rot), math.sin(rot)
        cam = self.cam
        cam.dir_x, cam.dir_y = (
            cam.dir_x * cos_r - cam.dir_y * sin_r,
            cam.dir_x * sin_r + cam.dir_y * cos_r,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_r - self.plane_y * sin_r,
            self.plane_x * sin_r + self.plane_y * cos_r,
        )
        self.last_rotation = now
        return True