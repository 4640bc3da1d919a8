"""Overhead minimap drawn in the lower-right corner of the frame."""

from __future__ import annotations

import math

from .models import Camera, World
from .raycast import BLACK, GRAY, MAGENTA, WHITE, WIN_H, WIN_W, YELLOW, FrameBuffer


def _roundf(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def minimap_spacing(map_len: int, map_wid: int) -> float:
    """Side length in pixels of one map cell on the minimap."""
    if map_len <= 0 or map_wid <= 0:
        raise ValueError("map dimensions must be positive")
    if map_len > map_wid:
        spacing = float((WIN_H // 4) // map_len)
    else:
        spacing = float((WIN_W // 5) // map_wid)
    return max(spacing, 1.0)


def _cell_color(cell: str) -> int:
    if cell == "0":
        return BLACK
    if cell == "1":
        return WHITE
    return GRAY


def _cell_step(spacing: float) -> tuple[int, float]:
    step = int(abs(spacing))
    return step, spacing / step


def draw_minimap(buffer: FrameBuffer, world: World, cam: Camera) -> float:
    """Draw cells, grid and player; return the cell spacing used."""
    spacing = minimap_spacing(world.map_len, world.map_wid)
    x_ofs = WIN_W - world.map_wid * spacing
    y_ofs = WIN_H - world.map_len * spacing
    step, inc = _cell_step(spacing)
    x1 = 0.0
    for y in range(world.map_len):
        row = world.grid[y]
        for x in range(world.map_wid):
            color = _cell_color(row[x] if x < len(row) else " ")
            y1 = y * spacing
            for _ in range(step + 1):
                buffer.put_pixel(
                    int(_roundf(x1) + x_ofs), int(_roundf(y1) + y_ofs), color
                )
                y1 += inc
                x1 = x * spacing
                for _ in range(step):
                    buffer.put_pixel(
                        int(_roundf(x1) + x_ofs), int(_roundf(y1) + y_ofs), color
                    )
                    x1 += inc
    draw_grid(buffer, world, spacing, x_ofs, y_ofs)
    draw_player(buffer, world, cam, spacing)
    return spacing


def draw_grid(
    buffer: FrameBuffer, world: World, spacing: float, x_ofs: float, y_ofs: float
) -> None:
    """Outline each cell's left and bottom edges; skipped at one-pixel cells."""
    if spacing == 1:
        return
    step, inc = _cell_step(spacing)
    for y in range(world.map_len):
        for x in range(world.map_wid):
            y1 = y * spacing
            x1 = x * spacing
            for _ in range(step + 1):
                buffer.put_pixel(
                    int(_roundf(x1) + x_ofs), int(_roundf(y1) + y_ofs), GRAY
                )
                y1 += inc
            for _ in range(step + 1):
                buffer.put_pixel(
                    int(_roundf(x1) + x_ofs), int(_roundf(y1) + y_ofs), GRAY
                )
                x1 += inc


def draw_player(buffer: FrameBuffer, world: World, cam: Camera, spacing: float) -> None:
    """Draw the player as a filled disc with a line showing the view direction."""
    x_ofs = WIN_W - world.map_wid * spacing
    y_ofs = WIN_H - world.map_len * spacing
    radius = int(spacing / 4)
    for y in range(-radius, radius + 1):
        dx = int(math.sqrt(radius * radius - y * y))
        for x in range(-dx, dx + 1):
            buffer.put_pixel(
                int(spacing * cam.pos_x + x + x_ofs),
                int(spacing * cam.pos_y + y + y_ofs),
                YELLOW,
            )
    _draw_gaze(buffer, cam, spacing, x_ofs, y_ofs)


def _draw_gaze(
    buffer: FrameBuffer, cam: Camera, spacing: float, x_ofs: float, y_ofs: float
) -> None:
    dx = cam.dir_x * (spacing / 1.25)
    dy = cam.dir_y * (spacing / 1.25)
    step = int(max(abs(dx), abs(dy)) if abs(dx) > abs(dy) else abs(dy))
    x1 = spacing * cam.pos_x
    y1 = spacing * cam.pos_y
    if step == 0:
        buffer.put_pixel(int(x1 + x_ofs), int(y1 + y_ofs), MAGENTA)
        return
    x_inc = dx / step
    y_inc = dy / step
    for _ in range(step + 1):
        buffer.put_pixel(int(x1 + x_ofs), int(y1 + y_ofs), MAGENTA)
        x1 += x_inc
        y1 += y_inc