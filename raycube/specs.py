"""Checks for the command line and for texture and colour specifications."""

from __future__ import annotations

import os
from collections.abc import Sequence
from itertools import takewhile

from .errors import ConfigError, ErrorCode
from .models import World

SPACES = " \t\n\v\f\r"
EXTENSION = ".cub"

IDENTIFIERS = ("NO", "SO", "WE", "EA", "F", "C")

_SPEC_FIELDS = {
    "NO": "tex_n",
    "SO": "tex_s",
    "WE": "tex_w",
    "EA": "tex_e",
    "F": "ground_str",
    "C": "sky_str",
}


def check_input(argv: Sequence[str]) -> str:
    """Validate the command-line arguments and return the scene path."""
    if len(argv) != 1:
        raise ConfigError(ErrorCode.INPUT_ARGC)
    path = argv[0]
    if len(path) <= len(EXTENSION) or not has_extension(path, EXTENSION):
        raise ConfigError(ErrorCode.INPUT_FORMAT)
    return path


def has_extension(path: str, ext: str) -> bool:
    """True if ``path`` ends with ``ext``."""
    return path.endswith(ext)


def is_space(c: str) -> bool:
    """True for the six ASCII whitespace characters."""
    return len(c) == 1 and c in SPACES


def line_width(line: str) -> int:
    """Length of ``line`` up to its first newline."""
    return len(line.partition("\n")[0])


def matches_identifier(line: str, ident: str) -> bool:
    """True if the first word of ``line`` is exactly ``ident``."""
    stripped = line.lstrip(SPACES)
    if not stripped:
        return False
    word = "".join(takewhile(lambda c: not is_space(c), stripped))
    return word == ident


def spec_value(line: str, ident: str) -> str:
    """Return the text after ``ident`` with surrounding whitespace removed.

    An empty string means the specification has no value.
    """
    start = line.find(ident)
    if start < 0:
        raise ValueError(f"{ident!r} does not occur in line")
    return line[start + len(ident):].strip(SPACES)


def record_spec(world: World, ident: str, value: str) -> None:
    """Store a texture path or colour text on ``world``.

    A repeated identifier is reported before a missing value.
    """
    try:
        attr = _SPEC_FIELDS[ident]
    except KeyError:
        raise ValueError(f"unknown identifier {ident!r}") from None
    if getattr(world, attr) is not None:
        raise ConfigError(ErrorCode.SPEC_REPEATED)
    if not value:
        raise ConfigError(ErrorCode.SPEC_INVALID)
    setattr(world, attr, value)


def _check_color_chars(text: str) -> None:
    for c in text:
        if c == "-":
            raise ConfigError(ErrorCode.COLOR_RGB)
        if not ("0" <= c <= "9") and c != ",":
            raise ConfigError(ErrorCode.COLOR_INVALID)


def parse_color(text: str) -> int:
    """Convert ``"R,G,B"`` into a 0xRRGGBB integer."""
    if text.count(",") != 2:
        raise ConfigError(ErrorCode.COLOR_INVALID)
    _check_color_chars(text)
    parts = text.split(",")
    if any(not part for part in parts):
        raise ConfigError(ErrorCode.COLOR_INVALID)
    r, g, b = (int(part) for part in parts)
    if r > 255 or g > 255 or b > 255:
        raise ConfigError(ErrorCode.COLOR_RGB)
    return r << 16 | g << 8 | b


def _readable_file(path: str | None) -> bool:
    if path is None or os.path.isdir(path):
        return False
    try:
        with open(path, "rb"):
            return True
    except OSError:
        return False


def check_texture_paths(world: World) -> None:
    """Require every texture path to name a readable regular file."""
    paths = (world.tex_n, world.tex_s, world.tex_e, world.tex_w)
    if not all(_readable_file(path) for path in paths):
        raise ConfigError(ErrorCode.TEX_PATH)


def check_missing_identifiers(world: World) -> None:
    """Report which kind of specification is absent, textures first."""
    if None in (world.tex_n, world.tex_s, world.tex_e, world.tex_w):
        raise ConfigError(ErrorCode.TEX_MISSING)
    if world.sky_str is None or world.ground_str is None:
        raise ConfigError(ErrorCode.COLOR_MISSING)