"""Validation and extraction of the map section of a scene file."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .errors import ConfigError, ErrorCode
from .models import Camera
from .specs import is_space, line_width

MAP_CHARS = frozenset("10NSEW\n ")
PLAYER_MARKS = frozenset("NSEW")
_FLOOR_CHARS = frozenset("0NSEW")

_DIRECTIONS = {
    "N": (0.0, -1.0),
    "S": (0.0, 1.0),
    "E": (1.0, 0.0),
    "W": (-1.0, 0.0),
}


def is_map_line(line: str) -> bool:
    """True if ``line`` holds only map characters, spaces and newlines."""
    return all(c in MAP_CHARS for c in line)


def count_players(line: str) -> int:
    """Number of player start marks in ``line``."""
    return sum(1 for c in line if c in PLAYER_MARKS)


def check_map_lines(lines: Iterable[str]) -> list[str]:
    """Validate the map section and return its rows without newlines.

    ``lines`` starts at the first map line and runs to the end of the file.
    The map ends at the first empty line; only empty lines may follow it.
    """
    rows: list[str] = []
    players = 0
    remaining = iter(lines)
    for line in remaining:
        if rows and line == "\n":
            break
        if not is_map_line(line):
            raise ConfigError(ErrorCode.MAP_INVALID)
        players += count_players(line)
        if players > 1:
            raise ConfigError(ErrorCode.PLAYER_POS_EXTRA)
        rows.append(line.partition("\n")[0])
    if not players:
        raise ConfigError(ErrorCode.PLAYER_POS_NONE)
    if any(line != "\n" for line in remaining):
        raise ConfigError(ErrorCode.MAP_EXTRA)
    return rows


def build_grid(lines: Iterable[str], width: int) -> list[str]:
    """Return the map rows padded with spaces to ``width`` columns."""
    grid = []
    for line in lines:
        row = line.partition("\n")[0]
        if len(row) > width:
            raise ValueError(f"row of {len(row)} columns exceeds width {width}")
        grid.append(row.ljust(width))
    return grid


def find_player(grid: Sequence[str]) -> Camera:
    """Return a camera placed on the first player mark in ``grid``."""
    for y, row in enumerate(grid):
        for x, c in enumerate(row):
            if c in PLAYER_MARKS:
                return Camera(pos_x=float(x), pos_y=float(y))
    raise ConfigError(ErrorCode.PLAYER_POS_NONE)


def _cell(grid: Sequence[str], x: int, y: int) -> str:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    return ""


def check_player_position(
    grid: Sequence[str], cam: Camera, length: int, width: int
) -> str:
    """Require the player to stand inside the map, bordered by floor or wall.

    Returns the player mark found under the camera.
    """
    x, y = int(cam.pos_x), int(cam.pos_y)
    if y == 0 or y == length or x == 0 or x == width:
        raise ConfigError(ErrorCode.PLAYER_POS_INVALID)
    for nx, ny in ((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)):
        if _cell(grid, nx, ny) not in ("0", "1"):
            raise ConfigError(ErrorCode.PLAYER_POS_INVALID)
    return _cell(grid, x, y)


def player_direction(mark: str) -> tuple[float, float]:
    """Return the unit view direction for a player mark."""
    try:
        return _DIRECTIONS[mark]
    except KeyError:
        raise ValueError(f"{mark!r} is not a player mark") from None


def clear_player_marks(grid: Iterable[str]) -> list[str]:
    """Return ``grid`` with every player mark turned into floor."""
    table = str.maketrans({mark: "0" for mark in PLAYER_MARKS})
    return [row.translate(table) for row in grid]


def _fill(
    grid: Sequence[str], length: int, x: int, y: int, visited: set[tuple[int, int]]
) -> None:
    stack = [(x, y)]
    while stack:
        x, y = stack.pop()
        if (x, y) in visited:
            continue
        if (
            x < 0
            or y < 0
            or y >= length
            or y >= len(grid)
            or x >= len(grid[y])
            or is_space(grid[y][x])
        ):
            raise ConfigError(ErrorCode.MAP_OPEN)
        if grid[y][x] == "1":
            continue
        visited.add((x, y))
        stack.extend(((x + 1, y), (x - 1, y), (x, y - 1), (x, y + 1)))


def check_closed(grid: Sequence[str], length: int) -> frozenset[tuple[int, int]]:
    """Require every walkable cell to be enclosed by walls.

    Returns the set of ``(x, y)`` cells reachable from the floor.
    """
    visited: set[tuple[int, int]] = set()
    for y, row in enumerate(grid[:length]):
        for x, c in enumerate(row):
            if c in _FLOOR_CHARS and (x, y) not in visited:
                _fill(grid, length, x, y, visited)
    return frozenset(visited)


__all__ = [
    "build_grid",
    "check_closed",
    "check_map_lines",
    "check_player_position",
    "clear_player_marks",
    "count_players",
    "find_player",
    "is_map_line",
    "line_width",
    "player_direction",
]