import pytest

from raycube.errors import ConfigError, ErrorCode
from raycube.models import World
from raycube.parser import check_map_size, load_world, parse_lines
from raycube.specs import parse_color

MAP = [
    "111111\n",
    "100001\n",
    "10N001\n",
    "100001\n",
    "111111\n",
]


@pytest.fixture
def texture(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text("pixels")
    return str(path)


def _specs(texture):
    return [
        f"NO {texture}\n",
        f"SO {texture}\n",
        f"WE {texture}\n",
        f"EA {texture}\n",
        "\n",
        "F 220,100,0\n",
        "C 225,30,0\n",
        "\n",
    ]


def _code(lines):
    with pytest.raises(ConfigError) as excinfo:
        parse_lines(lines)
    return excinfo.value.code


def test_parse_valid_scene(texture):
    world = parse_lines(_specs(texture) + MAP)
    assert world.tex_n == texture
    assert world.tex_e == texture
    assert world.sky == parse_color("225,30,0")
    assert world.ground == parse_color("220,100,0")
    assert world.map_len == len(MAP)
    assert world.map_wid == len(MAP[0]) - 1
    assert (world.cam.pos_x, world.cam.pos_y) == (2.0, 2.0)
    assert (world.cam.dir_x, world.cam.dir_y) == (0.0, -1.0)


def test_parsed_grid_has_no_player_marks(texture):
    world = parse_lines(_specs(texture) + MAP)
    assert len(world.grid) == world.map_len
    assert all(len(row) == world.map_wid for row in world.grid)
    assert not any(c in "NSEW" for row in world.grid for c in row)


def test_repeated_identifier(texture):
    lines = [f"NO {texture}\n", f"NO {texture}\n"] + MAP
    assert _code(lines) is ErrorCode.SPEC_REPEATED


def test_identifier_without_value(texture):
    lines = ["NO   \n"] + MAP
    assert _code(lines) is ErrorCode.SPEC_INVALID


def test_unknown_line_before_specs_complete(texture):
    lines = ["XX something\n"] + _specs(texture) + MAP
    assert _code(lines) is ErrorCode.SPEC_INVALID


def test_unknown_line_after_specs_complete(texture):
    lines = _specs(texture) + ["XX something\n"] + MAP
    assert _code(lines) is ErrorCode.SPEC_UNEXPECTED


def test_missing_texture(texture):
    lines = [line for line in _specs(texture) if not line.startswith("EA")] + MAP
    assert _code(lines) is ErrorCode.TEX_MISSING


def test_missing_color(texture):
    lines = [line for line in _specs(texture) if not line.startswith("C")] + MAP
    assert _code(lines) is ErrorCode.COLOR_MISSING


def test_bad_texture_path(texture, tmp_path):
    lines = _specs(texture) + MAP
    lines[0] = f"NO {tmp_path / 'absent.xpm'}\n"
    assert _code(lines) is ErrorCode.TEX_PATH


def test_texture_path_is_directory(texture, tmp_path):
    lines = _specs(texture) + MAP
    lines[1] = f"SO {tmp_path}\n"
    assert _code(lines) is ErrorCode.TEX_PATH


def test_bad_color(texture):
    lines = _specs(texture) + MAP
    lines[5] = "F 256,0,0\n"
    assert _code(lines) is ErrorCode.COLOR_RGB


def test_no_map(texture):
    assert _code(_specs(texture)) is ErrorCode.PLAYER_POS_NONE


def test_content_after_map(texture):
    lines = _specs(texture) + MAP + ["\n", "111\n"]
    assert _code(lines) is ErrorCode.MAP_EXTRA


def test_player_on_map_edge(texture):
    lines = _specs(texture) + ["1N11\n", "1001\n", "1111\n"]
    assert _code(lines) is ErrorCode.PLAYER_POS_INVALID


def test_open_map(texture):
    lines = _specs(texture) + [
        "111111\n",
        "100001\n",
        "10N000\n",
        "100001\n",
        "111111\n",
    ]
    assert _code(lines) is ErrorCode.MAP_OPEN


def test_check_map_size_at_limit():
    assert check_map_size(World(map_len=300, map_wid=304)) == 91200


def test_check_map_size_too_big():
    with pytest.raises(ConfigError) as excinfo:
        check_map_size(World(map_len=301, map_wid=304))
    assert excinfo.value.code is ErrorCode.MAP_SIZE


def test_load_world_matches_parse_lines(texture, tmp_path):
    lines = _specs(texture) + MAP
    scene = tmp_path / "scene.cub"
    scene.write_text("".join(lines).rstrip("\n"))
    loaded = load_world(str(scene))
    parsed = parse_lines(lines)
    assert loaded.grid == parsed.grid
    assert loaded.cam == parsed.cam
    assert loaded.sky == parsed.sky


def test_load_world_missing_file(tmp_path):
    with pytest.raises(ConfigError) as excinfo:
        load_world(str(tmp_path / "missing.cub"))
    assert excinfo.value.code is ErrorCode.CONFIG_OPEN