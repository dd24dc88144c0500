"""
Vector Font Rasterisation
=========================
Turns a TrueType/OpenType font (or Pillow's built-in default font) into a
BitmapFont, so the renderer handles every font source the same way.

The glyphs are drawn white on a transparent atlas, packed row by row.
Kerning pairs are measured from the font's advance lengths.
"""
from __future__ import annotations

import logging
import os
import string
from typing import Dict, Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from titletexture.config import DEFAULT_FONT_SIZE
from titletexture.model.bmfont import BitmapFont, Glyph, load_bmfont

logger = logging.getLogger(__name__)

PRINTABLE_ASCII: str = "".join(chr(code) for code in range(32, 127))
ATLAS_WIDTH: int = 256
GLYPH_PADDING: int = 1
BUILTIN_FACE: str = "Built-in"

AnyFont = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]


def _open_font(font_path: Optional[str], size: int) -> AnyFont:
    if font_path is None:
        # Pillow >= 10.1 rasterises its bundled Aileron through FreeType at any size
        return ImageFont.load_default(size=size)
    if not os.path.isfile(font_path):
        raise FileNotFoundError(f"Font file not found: {font_path}")
    try:
        return ImageFont.truetype(font_path, size)
    except OSError as e:
        raise ValueError(f"Cannot read font '{font_path}': {e}") from None


def _line_metrics(font: AnyFont) -> Tuple[int, int]:
    """(line_height, base) in pixels."""
    if hasattr(font, "getmetrics"):
        ascent, descent = font.getmetrics()
        return ascent + descent, ascent
    bbox = font.getbbox(string.ascii_letters)
    return bbox[3], bbox[3]


def _measure_kerning(font: AnyFont, charset: str, advances: Dict[str, float]) -> Dict[Tuple[int, int], int]:
    kerning: Dict[Tuple[int, int], int] = {}
    for first in charset:
        for second in charset:
            amount = round(font.getlength(first + second) - advances[first] - advances[second])
            if amount:
                kerning[(ord(first), ord(second))] = amount
    return kerning


def build_font(font_path: Optional[str] = None, size: int = DEFAULT_FONT_SIZE,
               charset: str = PRINTABLE_ASCII) -> BitmapFont:
    """
    Rasterises a vector font into a single-page BitmapFont.

    Args:
        font_path: Path to a .ttf/.otf file. None selects Pillow's default font.
        size: Pixel size passed to the rasteriser.
        charset: Characters to include in the atlas.
    """
    if size < 1:
        raise ValueError(f"Font size must be at least 1 (got {size}).")

    font = _open_font(font_path, size)
    line_height, base = _line_metrics(font)

    # 1. Measure every glyph box and advance
    boxes: Dict[str, Tuple[int, int, int, int]] = {}
    advances: Dict[str, float] = {}
    for char in dict.fromkeys(charset):
        boxes[char] = font.getbbox(char)
        advances[char] = font.getlength(char)

    # 2. Shelf-pack the boxes into the atlas
    positions: Dict[str, Tuple[int, int]] = {}
    x = y = shelf_height = 0
    for char, (left, top, right, bottom) in boxes.items():
        width, height = right - left, bottom - top
        if width <= 0 or height <= 0:
            continue
        if x + width > ATLAS_WIDTH:
            x, y = 0, y + shelf_height + GLYPH_PADDING
            shelf_height = 0
        positions[char] = (x, y)
        x += width + GLYPH_PADDING
        shelf_height = max(shelf_height, height)
    atlas_height = max(1, y + shelf_height)

    # 3. Draw the glyphs
    atlas = Image.new("RGBA", (ATLAS_WIDTH, atlas_height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(atlas)
    glyphs: Dict[int, Glyph] = {}
    for char, (left, top, right, bottom) in boxes.items():
        gx, gy = positions.get(char, (0, 0))
        if char in positions:
            draw.text((gx - left, gy - top), char, font=font, fill=(255, 255, 255, 255))
        glyphs[ord(char)] = Glyph(
            char_id=ord(char),
            x=gx,
            y=gy,
            width=max(0, right - left) if char in positions else 0,
            height=max(0, bottom - top) if char in positions else 0,
            xoffset=left,
            yoffset=top,
            xadvance=round(advances[char]),
        )

    kerning = _measure_kerning(font, "".join(boxes), advances)

    face = BUILTIN_FACE if font_path is None else os.path.splitext(os.path.basename(font_path))[0]
    logger.info(f"Rasterised font '{face}' at {size}px: {len(glyphs)} glyphs, {len(kerning)} kerning pairs.")
    return BitmapFont(
        face=face,
        size=size,
        line_height=line_height,
        base=base,
        glyphs=glyphs,
        kerning=kerning,
        pages=[atlas],
    )


def load_font(font_path: Optional[str] = None, size: int = DEFAULT_FONT_SIZE) -> BitmapFont:
    """Loads a .fnt bitmap font, or rasterises anything else (None = built-in)."""
    if font_path is not None and font_path.lower().endswith(".fnt"):
        return load_bmfont(font_path)
    return build_font(font_path, size)
