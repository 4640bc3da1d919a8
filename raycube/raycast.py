"""Ray casting, wall texturing and the frame buffer they draw into."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum, auto

from .models import Camera, Texture, World

WIN_W = 1600
WIN_H = 900

BLACK = 0x000000
WHITE = 0xFFFFFF
GRAY = 0x303030
YELLOW = 0xFFFF00
MAGENTA = 0xFF00FF

_INFINITY = 1e30
_MIN_WALL_DIST = 0.001


class Wall(Enum):
    """Which face of a wall block a ray struck."""

    NORTH = auto()
    SOUTH = auto()
    EAST = auto()
    WEST = auto()


@dataclass
class Ray:
    """Everything computed for one screen column."""

    cam_x: float = 0.0
    dir_x: float = 0.0
    dir_y: float = 0.0
    map_x: int = 0
    map_y: int = 0
    side_dist_x: float = 0.0
    side_dist_y: float = 0.0
    delta_dist_x: float = 0.0
    delta_dist_y: float = 0.0
    step_x: int = 0
    step_y: int = 0
    wall: Wall = Wall.NORTH
    perp_wall_dist: float = 0.0
    wall_x: float = 0.0
    line_height: int = 0
    line_start: int = 0
    line_end: int = 0


@dataclass
class FrameBuffer:
    """A row-major image of 0xRRGGBB integers."""

    width: int = WIN_W
    height: int = WIN_H
    pixels: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("frame buffer dimensions must be positive")
        self.pixels = [BLACK] * (self.width * self.height)

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set a pixel; the first row, first column and outside are ignored."""
        x, y = int(x), int(y)
        if 0 < x < self.width and 0 < y < self.height:
            self.pixels[y * self.width + x] = color

    def get_pixel(self, x: int, y: int) -> int:
        """Return the colour at column ``x`` and row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return self.pixels[y * self.width + x]

    def fill_background(self, sky: int, ground: int) -> None:
        """Paint the upper half with ``sky`` and the lower half with ``ground``."""
        half = self.height / 2
        for y in range(1, self.height):
            color = sky if y < half else ground
            start = y * self.width
            self.pixels[start + 1:start + self.width] = [color] * (self.width - 1)


def _c_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _start_ray(cam: Camera, plane_x: float, plane_y: float, x: int) -> Ray:
    cam_x = 2 * x / float(WIN_W) - 1
    ray = Ray(
        cam_x=cam_x,
        dir_x=cam.dir_x + plane_x * cam_x,
        dir_y=cam.dir_y + plane_y * cam_x,
        map_x=int(cam.pos_x),
        map_y=int(cam.pos_y),
    )
    ray.delta_dist_x = _INFINITY if ray.dir_x == 0 else 1 / abs(ray.dir_x)
    ray.delta_dist_y = _INFINITY if ray.dir_y == 0 else 1 / abs(ray.dir_y)
    if ray.dir_x < 0:
        ray.step_x = -1
        ray.side_dist_x = (cam.pos_x - ray.map_x) * ray.delta_dist_x
    else:
        ray.step_x = 1
        ray.side_dist_x = (ray.map_x + 1.0 - cam.pos_x) * ray.delta_dist_x
    if ray.dir_y < 0:
        ray.step_y = -1
        ray.side_dist_y = (cam.pos_y - ray.map_y) * ray.delta_dist_y
    else:
        ray.step_y = 1
        ray.side_dist_y = (ray.map_y + 1.0 - cam.pos_y) * ray.delta_dist_y
    return ray


def _walk(grid: Sequence[str], ray: Ray) -> None:
    while True:
        if abs(ray.side_dist_x) < abs(ray.side_dist_y):
            ray.side_dist_x += ray.delta_dist_x
            ray.map_x += ray.step_x
            ray.wall = Wall.EAST if ray.step_x > 0 else Wall.WEST
        else:
            ray.side_dist_y += ray.delta_dist_y
            ray.map_y += ray.step_y
            ray.wall = Wall.NORTH if ray.step_y < 0 else Wall.SOUTH
        if not (0 <= ray.map_y < len(grid) and 0 <= ray.map_x < len(grid[ray.map_y])):
            raise ValueError(f"ray left the map at ({ray.map_x}, {ray.map_y})")
        if grid[ray.map_y][ray.map_x] == "1":
            return


def cast_ray(
    grid: Sequence[str], cam: Camera, plane_x: float, plane_y: float, x: int
) -> Ray:
    """Trace the ray for screen column ``x`` until it hits a wall."""
    ray = _start_ray(cam, plane_x, plane_y, x)
    _walk(grid, ray)

    horizontal = ray.wall in (Wall.EAST, Wall.WEST)
    if horizontal:
        dist = ray.side_dist_x - ray.delta_dist_x
    else:
        dist = ray.side_dist_y - ray.delta_dist_y
    ray.perp_wall_dist = max(dist, _MIN_WALL_DIST)

    if horizontal:
        hit = cam.pos_y + ray.perp_wall_dist * ray.dir_y
    else:
        hit = cam.pos_x + ray.perp_wall_dist * ray.dir_x
    ray.wall_x = hit - math.floor(hit)

    ray.line_height = int(WIN_H / ray.perp_wall_dist)
    ray.line_start = max(_c_div(-ray.line_height, 2) + WIN_H // 2, 0)
    ray.line_end = min(ray.line_height // 2 + WIN_H // 2, WIN_H - 1)
    return ray


def wall_texture(world: World, wall: Wall) -> Texture:
    """Return the texture drawn on the face ``wall``."""
    texture = {
        Wall.NORTH: world.tex_south,
        Wall.SOUTH: world.tex_north,
        Wall.EAST: world.tex_west,
        Wall.WEST: world.tex_east,
    }[wall]
    if texture is None:
        raise ValueError(f"no texture loaded for {wall.name} wall")
    return texture


def texture_column(ray: Ray, texture: Texture) -> int:
    """Map the ray's wall hit point to a texture column."""
    tex_x = int(ray.wall_x * float(texture.width))
    if tex_x == 0:
        tex_x = 1
    if ray.wall in (Wall.WEST, Wall.SOUTH):
        tex_x = texture.width - tex_x
    return tex_x


def texel(texture: Texture, x: int, y: int) -> int:
    """Colour of a texture pixel; the first row, first column and outside give 0."""
    if 0 < x < texture.width and 0 < y < texture.height:
        return texture.pixel(x, y)
    return 0


def draw_vertical_line(buffer: FrameBuffer, world: World, ray: Ray, x: int) -> None:
    """Draw the textured wall slice for ``ray`` into column ``x``."""
    texture = wall_texture(world, ray)
    if ray.line_height <= 0:
        return
    tex_x = texture_column(ray, texture)
    step = 1.0 * texture.height / ray.line_height
    tex_pos = (ray.line_start - WIN_H // 2 + ray.line_height // 2) * step
    for y in range(ray.line_start, ray.line_end):
        tex_y = int(tex_pos) & (texture.height - 1)
        if tex_y == 0:
            tex_y = 1
        tex_pos += step
        buffer.put_pixel(x, y, texel(texture, tex_x, tex_y))


def render_walls(
    buffer: FrameBuffer, world: World, cam: Camera, plane_x: float, plane_y: float
) -> list[Ray]:
    """Cast and draw one ray per screen column; return the rays cast."""
    rays = []
    for x in range(WIN_W):
        ray = cast_ray(world.grid, cam, plane_x, plane_y, x)
        draw_vertical_line(buffer, world, ray, x)
        rays.append(ray)
    return rays