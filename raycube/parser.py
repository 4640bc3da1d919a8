"""Reading and validating a whole scene description file."""

from __future__ import annotations

from collections.abc import Sequence

from .errors import ConfigError, ErrorCode
from .mapcheck import (
    build_grid,
    check_closed,
    check_map_lines,
    check_player_position,
    clear_player_marks,
    find_player,
    is_map_line,
    player_direction,
)
from .models import World
from .specs import (
    IDENTIFIERS,
    check_missing_identifiers,
    check_texture_paths,
    matches_identifier,
    parse_color,
    record_spec,
    spec_value,
)

MAX_MAP_AREA = 91200


def _read_spec(world: World, line: str) -> None:
    ident = next((i for i in IDENTIFIERS if matches_identifier(line, i)), None)
    if ident is None:
        if world.specs_complete():
            raise ConfigError(ErrorCode.SPEC_UNEXPECTED)
        raise ConfigError(ErrorCode.SPEC_INVALID)
    record_spec(world, ident, spec_value(line, ident))


def _check_specs(world: World, lines: Sequence[str]) -> int:
    """Read specifications; return the index of the first map line."""
    start = len(lines)
    for index, line in enumerate(lines):
        if line == "\n":
            continue
        if is_map_line(line):
            start = index
            break
        _read_spec(world, line)
    if world.specs_complete():
        check_texture_paths(world)
        world.sky = parse_color(world.sky_str)
        world.ground = parse_color(world.ground_str)
    else:
        check_missing_identifiers(world)
    return start


def check_map_size(world: World) -> int:
    """Reject maps whose area exceeds the accepted maximum; return the area."""
    area = world.map_len * world.map_wid
    if area > MAX_MAP_AREA:
        raise ConfigError(ErrorCode.MAP_SIZE)
    return area


def parse_lines(lines: Sequence[str]) -> World:
    """Build a validated world from the lines of a scene file.

    Each line keeps its trailing newline, as read from the file.
    """
    world = World()
    start = _check_specs(world, lines)
    rows = check_map_lines(lines[start:])
    world.map_len = len(rows)
    world.map_wid = max((len(row) for row in rows), default=0)
    grid = build_grid(rows, world.map_wid)

    cam = find_player(grid)
    mark = check_player_position(grid, cam, world.map_len, world.map_wid)
    cam.dir_x, cam.dir_y = player_direction(mark)
    world.cam = cam
    world.grid = clear_player_marks(grid)

    check_map_size(world)
    check_closed(world.grid, world.map_len)
    return world


def _split_lines(text: str) -> list[str]:
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def load_world(path: str) -> World:
    """Read and validate the scene file at ``path``."""
    try:
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as f:
            text = f.read()
    except OSError:
        raise ConfigError(ErrorCode.CONFIG_OPEN) from None
    return parse_lines(_split_lines(text))