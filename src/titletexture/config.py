"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths and magic numbers (tile height,
   overlay offset, default scale) scattered throughout the code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (bundled fonts) when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    FONTS_PATH (str): Absolute path to the directory with bundled fonts.
    DEFAULT_OUTPUT_PATH (str): Where the texture is saved when no path is chosen.
"""
import sys
import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/titletexture/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
FONTS_PATH: str = os.path.join(ASSETS_PATH, "fonts")

DEFAULT_OUTPUT_DIR: str = os.path.join(".", "title_texture_map")
DEFAULT_OUTPUT_PATH: str = os.path.join(DEFAULT_OUTPUT_DIR, "title_texture_map.png")

DEFAULT_SCALE: float = 1.5
DEFAULT_FONT_SIZE: int = 16
MIN_TEXTURE_HEIGHT: int = 32
TEXT_OFFSET: tuple[int, int] = (-1, 0)

CHECKER_TILE_SIZE: int = 32
CHECKER_CELLS: int = 4

FONT_EXTENSIONS: tuple[str, ...] = (".fnt", ".ttf", ".otf")

LOG_LEVEL_ENV: str = "TITLETEXTURE_LOG_LEVEL"


def list_bundled_fonts() -> list[str]:
    """Font files shipped in assets/fonts, sorted by name."""
    if not os.path.isdir(FONTS_PATH):
        return []
    return sorted(
        os.path.join(FONTS_PATH, name)
        for name in os.listdir(FONTS_PATH)
        if name.lower().endswith(FONT_EXTENSIONS)
    )


if not os.path.exists(ASSETS_PATH):
    logger.warning(f"Assets path not found at {ASSETS_PATH}")
