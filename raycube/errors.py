"""Error codes and the messages reported for them."""

from __future__ import annotations

from enum import Enum, auto


class ErrorCode(Enum):
    MEMALLOC = auto()
    INPUT_ARGC = auto()
    INPUT_FORMAT = auto()
    CONFIG_OPEN = auto()
    SPEC_INVALID = auto()
    SPEC_REPEATED = auto()
    SPEC_UNEXPECTED = auto()
    COLOR_RGB = auto()
    COLOR_INVALID = auto()
    COLOR_MISSING = auto()
    TEX_PATH = auto()
    TEX_MISSING = auto()
    MAP_EXTRA = auto()
    PLAYER_POS_INVALID = auto()
    PLAYER_POS_EXTRA = auto()
    PLAYER_POS_NONE = auto()
    MAP_OPEN = auto()
    MAP_INVALID = auto()
    MAP_SIZE = auto()
    DISPLAY_INIT = auto()
    DISPLAY_WINDOW = auto()
    DISPLAY_IMAGE = auto()
    TEXTURE_LOAD = auto()


_USAGE = "Usage: raycube map.cub\n"

_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.MEMALLOC: "Error\nMemory allocation failed\n",
    ErrorCode.INPUT_ARGC: "raycube: invalid argument count\n" + _USAGE,
    ErrorCode.INPUT_FORMAT: "raycube: invalid file type\n" + _USAGE,
    ErrorCode.CONFIG_OPEN: "Error\nFailed to open config file\n",
    ErrorCode.SPEC_UNEXPECTED: "Error\nUnexpected line after configuration\n",
    ErrorCode.SPEC_INVALID: "Error\nSpec misconfiguration\n",
    ErrorCode.SPEC_REPEATED: "Error\nRepeated identifier\n",
    ErrorCode.COLOR_RGB: "Error\nInvalid RGB values\n",
    ErrorCode.COLOR_INVALID: "Error\nColor specs misconfiguration\n",
    ErrorCode.COLOR_MISSING: "Error\nColor identifiers missing\n",
    ErrorCode.TEX_PATH: "Error\nTexture path misconfiguration\n",
    ErrorCode.TEX_MISSING: "Error\nTexture identifiers missing\n",
    ErrorCode.MAP_EXTRA: "Error\nUnexpected content after map\n",
    ErrorCode.PLAYER_POS_INVALID: "Error\nInvalid player position\n",
    ErrorCode.PLAYER_POS_EXTRA: "Error\nMultiple player positions\n",
    ErrorCode.PLAYER_POS_NONE: "Error\nMissing player position\n",
    ErrorCode.MAP_OPEN: "Error\nMap not closed\n",
    ErrorCode.MAP_INVALID: "Error\nMap content misconfiguration\n",
    ErrorCode.MAP_SIZE: (
        "Error\nMap size too big - maximum accepted map area: 91200\n"
    ),
    ErrorCode.DISPLAY_INIT: "Display: Failed to initialize graphics\n",
    ErrorCode.DISPLAY_WINDOW: "Display: Failed to open window\n",
    ErrorCode.DISPLAY_IMAGE: "Display: Failed to create new image\n",
    ErrorCode.TEXTURE_LOAD: (
        "Display: Failed to convert XPM file to a new image instance\n"
    ),
}


def error_message(code: ErrorCode) -> str:
    """Return the text printed to standard error for ``code``."""
    return _MESSAGES[code]


class ConfigError(Exception):
    """Raised when input, scene file or display set-up is rejected."""

    def __init__(self, code: ErrorCode) -> None:
        super().__init__(error_message(code))
        self.code = code