"""Data shared by the scene parser and the renderer."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Camera:
    """Player position and view direction.

    Directions follow screen axes: north is -y, south +y, east +x, west -x.
    """

    pos_x: float = 0.0
    pos_y: float = 0.0
    dir_x: float = 0.0
    dir_y: float = 0.0


@dataclass
class Texture:
    """A decoded wall texture stored as row-major 0xRRGGBB integers."""

    width: int = 0
    height: int = 0
    pixels: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("texture dimensions must not be negative")
        if len(self.pixels) != self.width * self.height:
            raise ValueError(
                f"expected {self.width * self.height} pixels, got {len(self.pixels)}"
            )

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at column ``x`` and row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return self.pixels[y * self.width + x]


@dataclass
class World:
    """Everything a scene description file provides."""

    tex_n: str | None = None
    tex_s: str | None = None
    tex_w: str | None = None
    tex_e: str | None = None
    tex_north: Texture | None = None
    tex_south: Texture | None = None
    tex_west: Texture | None = None
    tex_east: Texture | None = None
    ground_str: str | None = None
    ground: int = 0
    sky_str: str | None = None
    sky: int = 0
    map_len: int = 0
    map_wid: int = 0
    grid: list[str] = field(default_factory=list)
    cam: Camera | None = None

    def specs_complete(self) -> bool:
        """True once all four textures and both colours have been given."""
        return all(
            value is not None
            for value in (
                self.tex_n,
                self.tex_s,
                self.tex_e,
                self.tex_w,
                self.sky_str,
                self.ground_str,
            )
        )