"""
Final texture composition: tiled UV guide under the text layer.
"""
from __future__ import annotations

import logging
from typing import Tuple

from PIL import Image

from titletexture.config import MIN_TEXTURE_HEIGHT, TEXT_OFFSET
from titletexture.model.background import tile_background
from titletexture.model.imaging import overlay

logger = logging.getLogger(__name__)


def compose_texture(
    text_layer: Image.Image,
    background: Image.Image,
    min_height: int = MIN_TEXTURE_HEIGHT,
    offset: Tuple[int, int] = TEXT_OFFSET,
) -> Image.Image:
    """
    Tiles `background` to the text width and to max(text height, min_height),
    then composites the text at `offset` (clipped to the canvas).
    """
    if min_height < 1:
        raise ValueError(f"Minimum height must be positive (got {min_height}).")

    height = max(text_layer.height, min_height)
    canvas = tile_background(background, text_layer.width, height)
    overlay(canvas, text_layer, offset[0], offset[1])

    logger.debug(f"Composed texture {canvas.width}x{canvas.height} (text {text_layer.width}x{text_layer.height}).")
    return canvas
