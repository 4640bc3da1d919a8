import math

import pygame
import pytest
from PIL import Image

from raycube.app import Game, load_texture, main, main_bonus
from raycube.errors import ConfigError, ErrorCode, error_message
from raycube.minimap import minimap_spacing
from raycube.models import World
from raycube.parser import load_world
from raycube.raycast import WHITE, WIN_H, WIN_W

MAP = (
    "1111111\n"
    "1000001\n"
    "1000001\n"
    "100N001\n"
    "1000001\n"
    "1000001\n"
    "1111111\n"
)

COLORS = {
    "NO": (200, 10, 10),
    "SO": (10, 200, 10),
    "WE": (10, 10, 200),
    "EA": (200, 200, 10),
}


def _rgb(color):
    r, g, b = color
    return r << 16 | g << 8 | b


def _write_scene(tmp_path, broken=None):
    paths = {}
    for ident, color in COLORS.items():
        path = tmp_path / f"{ident.lower()}.png"
        if ident == broken:
            path.write_text("not an image")
        else:
            Image.new("RGB", (8, 8), color).save(path)
        paths[ident] = path
    scene = tmp_path / "room.cub"
    scene.write_text(
        "".join(f"{ident} {paths[ident]}\n" for ident in COLORS)
        + "F 40,50,60\nC 70,80,90\n\n"
        + MAP
    )
    return scene


@pytest.fixture
def game(tmp_path):
    world = load_world(str(_write_scene(tmp_path)))
    g = Game(world)
    g.load_textures()
    return g


def test_load_texture_reads_pixels(tmp_path):
    path = tmp_path / "tex.png"
    image = Image.new("RGB", (3, 2), (0, 0, 0))
    image.putpixel((2, 1), (0x12, 0x34, 0x56))
    image.save(path)
    texture = load_texture(str(path))
    assert (texture.width, texture.height) == (3, 2)
    assert texture.pixel(2, 1) == 0x123456
    assert texture.pixel(0, 0) == 0


def test_load_texture_missing_file(tmp_path):
    with pytest.raises(ConfigError) as info:
        load_texture(str(tmp_path / "absent.xpm"))
    assert info.value.code is ErrorCode.TEXTURE_LOAD


def test_load_textures_failure_leaves_none_loaded(tmp_path):
    world = load_world(str(_write_scene(tmp_path, broken="EA")))
    g = Game(world)
    with pytest.raises(ConfigError) as info:
        g.load_textures()
    assert info.value.code is ErrorCode.TEXTURE_LOAD
    assert world.tex_north is None and world.tex_east is None


def test_game_requires_camera():
    with pytest.raises(ValueError):
        Game(World())


def test_frame_skipped_before_interval(game):
    before = list(game.buffer.pixels[:100])
    assert game.render_frame(game.prev_time_ms + 40) is False
    assert game.buffer.pixels[:100] == before


def test_frame_draws_sky_ground_and_wall(game):
    now = game.prev_time_ms + 41
    assert game.render_frame(now) is True
    assert game.prev_time_ms == now
    mid = WIN_W // 2
    assert game.buffer.get_pixel(mid, 1) == game.world.sky
    assert game.buffer.get_pixel(mid, WIN_H - 1) == game.world.ground
    # Facing north, the north face of the wall shows the SO texture.
    assert game.buffer.get_pixel(mid, WIN_H // 2) == _rgb(COLORS["SO"])


def test_keys_pressed_and_released(game):
    game.handle_keydown(pygame.K_w)
    assert game.keys.forward is True
    game.handle_keydown(pygame.K_d)
    assert (game.keys.forward, game.keys.right) == (False, True)
    game.handle_keyup(pygame.K_d)
    assert game.keys.right is False


def test_escape_stops_game(game):
    assert game.running is True
    game.handle_keydown(pygame.K_ESCAPE)
    assert game.running is False


def test_forward_key_moves_player_north(game):
    cam = game.world.cam
    start_x, start_y = cam.pos_x, cam.pos_y
    game.handle_keydown(pygame.K_w)
    assert game.render_frame(game.prev_time_ms + 41) is True
    assert cam.pos_y < start_y
    assert cam.pos_x == start_x


def test_left_key_rotates_view(game):
    cam = game.world.cam
    game.handle_keydown(pygame.K_LEFT)
    game.render_frame(game.prev_time_ms + 41)
    assert cam.dir_x < 0
    assert math.isclose(math.hypot(cam.dir_x, cam.dir_y), 1.0)


def test_bonus_draws_minimap(tmp_path):
    world = load_world(str(_write_scene(tmp_path)))
    plain = Game(world)
    plain.load_textures()
    bonus = Game(world, bonus=True)
    bonus.load_textures()
    spacing = minimap_spacing(world.map_len, world.map_wid)
    x = int(WIN_W - world.map_wid * spacing) + 20
    y = int(WIN_H - world.map_len * spacing) + 20
    plain.render_frame(plain.prev_time_ms + 41)
    bonus.render_frame(bonus.prev_time_ms + 41)
    assert bonus.buffer.get_pixel(x, y) == WHITE
    assert plain.buffer.get_pixel(x, y) != WHITE


def test_main_rejects_argument_count(capsys):
    assert main([]) == 1
    assert error_message(ErrorCode.INPUT_ARGC) in capsys.readouterr().err


def test_main_rejects_extension(capsys):
    assert main(["scene.txt"]) == 1
    assert error_message(ErrorCode.INPUT_FORMAT) in capsys.readouterr().err


def test_main_reports_unopenable_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.cub")]) == 1
    assert error_message(ErrorCode.CONFIG_OPEN) in capsys.readouterr().err


def test_main_bonus_rejects_argument_count(capsys):
    assert main_bonus(["a.cub", "b.cub"]) == 1
    assert error_message(ErrorCode.INPUT_ARGC) in capsys.readouterr().err