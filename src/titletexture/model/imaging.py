"""
Small Pillow/NumPy helpers shared by the renderer and the compositor.
"""
from __future__ import annotations

from typing import Tuple

import numpy as np
from PIL import Image, ImageColor


def parse_color(value: str) -> Tuple[int, int, int]:
    """'#RRGGBB', '#RGB' or a CSS colour name -> (r, g, b)."""
    try:
        rgb = ImageColor.getrgb(value)
    except (ValueError, AttributeError):
        raise ValueError(f"Invalid colour: {value!r}") from None
    return rgb[0], rgb[1], rgb[2]


def overlay(base: Image.Image, layer: Image.Image, x: int, y: int) -> Image.Image:
    """
    Alpha-composites `layer` onto `base` in place with its top-left at (x, y).
    Parts outside `base` are clipped, so negative coordinates are allowed.
    """
    left, top = max(0, x), max(0, y)
    right = min(base.width, x + layer.width)
    bottom = min(base.height, y + layer.height)
    if right <= left or bottom <= top:
        return base

    src_left, src_top = left - x, top - y
    region = layer.crop((src_left, src_top, src_left + (right - left), src_top + (bottom - top)))
    base.alpha_composite(region.convert("RGBA"), dest=(left, top))
    return base


def tint(image: Image.Image, color: Tuple[int, int, int]) -> Image.Image:
    """Multiplies the RGB channels by `color`, alpha untouched."""
    if image.width == 0 or image.height == 0:
        return image.copy()
    pixels = np.asarray(image.convert("RGBA"), dtype=np.float32)
    factors = np.asarray(color, dtype=np.float32) / 255.0
    pixels[..., :3] *= factors
    return Image.fromarray(np.clip(np.rint(pixels), 0, 255).astype(np.uint8))
