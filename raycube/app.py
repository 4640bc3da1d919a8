"""Window, frame loop and command entry points."""

from __future__ import annotations

import os
import sys
from array import array
from collections.abc import Sequence

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame
from PIL import Image

from .controls import Key, KeyState, Player, now_ms
from .errors import ConfigError, ErrorCode
from .minimap import draw_minimap
from .models import Texture, World
from .parser import load_world
from .raycast import (
    WIN_H,
    WIN_W,
    FrameBuffer,
    Ray,
    cast_ray,
    texel,
    texture_column,
    wall_texture,
)
from .specs import check_input

FRAME_INTERVAL_MS = 40
TITLE = "raycube"

_KEYMAP = {
    pygame.K_w: Key.W,
    pygame.K_a: Key.A,
    pygame.K_s: Key.S,
    pygame.K_d: Key.D,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
}

_TEXTURE_FIELDS = (
    ("tex_n", "tex_north"),
    ("tex_s", "tex_south"),
    ("tex_e", "tex_east"),
    ("tex_w", "tex_west"),
)


def load_texture(path: str) -> Texture:
    """Decode the image at ``path`` into a texture of 0xRRGGBB integers."""
    try:
        with Image.open(path) as image:
            rgb = image.convert("RGB")
            width, height = rgb.size
            pixels = [r << 16 | g << 8 | b for r, g, b in rgb.getdata()]
    except (OSError, ValueError):
        raise ConfigError(ErrorCode.TEXTURE_LOAD) from None
    return Texture(width=width, height=height, pixels=pixels)


class Game:
    """A validated world together with the player, keyboard and frame buffer."""

    def __init__(self, world: World, bonus: bool = False) -> None:
        if world.cam is None:
            raise ValueError("world has no camera")
        self.world = world
        self.bonus = bonus
        self.buffer = FrameBuffer(WIN_W, WIN_H)
        self.player = Player(world.cam)
        self.keys = KeyState()
        self.prev_time_ms = now_ms()
        self.running = True

    def load_textures(self) -> None:
        """Load all four wall textures; on failure none stays loaded."""
        try:
            for path_attr, tex_attr in _TEXTURE_FIELDS:
                path = getattr(self.world, path_attr)
                if path is None:
                    raise ConfigError(ErrorCode.TEXTURE_LOAD)
                setattr(self.world, tex_attr, load_texture(path))
        except ConfigError:
            for _, tex_attr in _TEXTURE_FIELDS:
                setattr(self.world, tex_attr, None)
            raise

    def _draw_column(self, ray: Ray, x: int) -> None:
        texture = wall_texture(self.world, ray.wall)
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
            self.buffer.put_pixel(x, y, texel(texture, tex_x, tex_y))

    def _cast_walls(self) -> None:
        cam = self.world.cam
        for x in range(WIN_W):
            ray = cast_ray(
                self.world.grid, cam, self.player.plane_x, self.player.plane_y, x
            )
            self._draw_column(ray, x)

    def render_frame(self, now: int) -> bool:
        """Draw a new frame if enough time has passed; return True if drawn."""
        if now - self.prev_time_ms <= FRAME_INTERVAL_MS:
            return False
        self.prev_time_ms = now
        world = self.world
        self.buffer.fill_background(world.sky, world.ground)
        self._cast_walls()
        if self.bonus:
            draw_minimap(self.buffer, world, world.cam)
        self.player.move(world.grid, self.keys, now)
        self.player.rotate(self.keys, now)
        return True

    def handle_keydown(self, key: int) -> None:
        """React to a pressed key; Escape ends the game."""
        if key == pygame.K_ESCAPE:
            self.running = False
            return
        mapped = _KEYMAP.get(key)
        if mapped is not None:
            self.keys.press(mapped)

    def handle_keyup(self, key: int) -> None:
        """React to a released key."""
        mapped = _KEYMAP.get(key)
        if mapped is not None:
            self.keys.release(mapped)

    def _present(self, screen: pygame.Surface) -> None:
        data = array("I", (p | 0xFF000000 for p in self.buffer.pixels))
        if sys.byteorder == "little":
            data.byteswap()
        surface = pygame.image.frombuffer(
            data.tobytes(), (self.buffer.width, self.buffer.height), "ARGB"
        )
        screen.blit(surface, (0, 0))
        pygame.display.flip()

    def run(self) -> None:
        """Open the window and run the frame loop until the player quits."""
        pygame.init()
        try:
            if not pygame.display.get_init():
                raise ConfigError(ErrorCode.DISPLAY_INIT)
            try:
                screen = pygame.display.set_mode((WIN_W, WIN_H))
            except pygame.error:
                raise ConfigError(ErrorCode.DISPLAY_WINDOW) from None
            pygame.display.set_caption(TITLE)
            self.load_textures()
            clock = pygame.time.Clock()
            self.running = True
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYDOWN:
                        self.handle_keydown(event.key)
                    elif event.type == pygame.KEYUP:
                        self.handle_keyup(event.key)
                if self.running and self.render_frame(now_ms()):
                    self._present(screen)
                clock.tick(1000)
        finally:
            pygame.quit()


def _start(argv: Sequence[str] | None, bonus: bool) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        path = check_input(args)
        world = load_world(path)
        Game(world, bonus=bonus).run()
    except ConfigError as err:
        sys.stderr.write(str(err))
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on the scene file named on the command line."""
    return _start(argv, bonus=False)


def main_bonus(argv: Sequence[str] | None = None) -> int:
    """Run the game with the minimap drawn over each frame."""
    return _start(argv, bonus=True)