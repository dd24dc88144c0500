"""
UV Guide Background
===================
Generates the UV-checker tile and repeats a background tile over an area.
"""
from __future__ import annotations

import logging
import math
import os
from typing import Optional

import numpy as np
from PIL import Image

from titletexture.config import CHECKER_CELLS, CHECKER_TILE_SIZE

logger = logging.getLogger(__name__)


def uv_checker(size: int = CHECKER_TILE_SIZE, cells: int = CHECKER_CELLS) -> Image.Image:
    """
    Square UV-guide tile. Red grows with u (column), green with v (row),
    and every other cell is darkened so the grid stays readable.
    """
    if size < 1 or cells < 1:
        raise ValueError(f"Checker size and cell count must be positive (got {size}, {cells}).")

    idx = np.arange(size)
    col = np.minimum(idx * cells // size, cells - 1)
    u, v = np.meshgrid(col, col)

    denom = max(cells - 1, 1)
    red = 64 + (u * 191) // denom
    green = 64 + (v * 191) // denom
    odd = (u + v) % 2 == 1
    blue = np.where(odd, 64, 224)

    rgb = np.stack([red, green, blue], axis=-1)
    rgb[odd] = rgb[odd] * 3 // 4
    alpha = np.full((size, size, 1), 255)
    pixels = np.concatenate([rgb, alpha], axis=-1).astype(np.uint8)
    return Image.fromarray(pixels)


def tile_background(bg: Image.Image, width: int, height: int) -> Image.Image:
    """
    Repeats `bg` to cover (width, height). The result is always a whole
    number of tiles wide (at least one); the height is exactly `height`.
    """
    if bg.width < 1 or bg.height < 1:
        raise ValueError("Background tile is empty.")
    if height < 1:
        raise ValueError(f"Tiled height must be positive (got {height}).")

    columns = max(1, math.ceil(width / bg.width))
    rows = math.ceil(height / bg.height)

    tile = np.asarray(bg.convert("RGBA"))
    tiled = np.tile(tile, (rows, columns, 1))[:height]
    return Image.fromarray(np.ascontiguousarray(tiled))


def load_background(path: Optional[str] = None) -> Image.Image:
    """RGBA image from `path`, or the generated UV checker when None."""
    if path is None:
        return uv_checker()
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Background image not found: {path}")
    try:
        with Image.open(path) as img:
            bg = img.convert("RGBA")
    except OSError as e:
        raise ValueError(f"Cannot read background image '{path}': {e}") from None
    logger.info(f"Loaded background {bg.width}x{bg.height} from: {path}")
    return bg
