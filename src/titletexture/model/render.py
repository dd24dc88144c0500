"""
Text Layer Rendering
====================
Lays out a string with a BitmapFont and draws it onto a transparent layer.

The layout is the plain pen-advance model of bitmap fonts: every glyph is
placed at (pen + xoffset, line_top + yoffset), then the pen moves by xadvance.
With kerning enabled the pair amount is added to the pen before the second
character is placed.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from PIL import Image

from titletexture.config import DEFAULT_SCALE
from titletexture.model.bmfont import BitmapFont, Glyph
from titletexture.model.imaging import overlay, parse_color, tint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    glyph: Glyph
    x: int
    y: int


@dataclass
class TextLayout:
    width: int
    height: int
    placements: List[Placement] = field(default_factory=list)


def layout_text(font: BitmapFont, text: str, use_kerning: bool = False) -> TextLayout:
    """
    Positions every glyph of `text`. '\\n' starts a new line one line_height
    lower and resets the kerning context.
    """
    lines = text.replace("\r\n", "\n").split("\n")
    placements: List[Placement] = []
    width = 0
    height = len(lines) * font.line_height
    missing: set[str] = set()

    for row, line in enumerate(lines):
        line_top = row * font.line_height
        pen = 0
        extent = 0
        previous: Optional[str] = None

        for char in line:
            glyph = font.glyph_for(char)
            if glyph is None:
                missing.add(char)
                previous = None
                continue

            if use_kerning and previous is not None:
                pen += font.kerning_amount(previous, char)

            x = pen + glyph.xoffset
            y = line_top + glyph.yoffset
            if glyph.width > 0 and glyph.height > 0:
                placements.append(Placement(glyph, x, y))
                extent = max(extent, x + glyph.width)
                height = max(height, y + glyph.height)

            pen += glyph.xadvance
            previous = char

        width = max(width, pen, extent)

    if missing:
        logger.warning(f"Font '{font.face}' has no glyph for: {''.join(sorted(missing))!r} (skipped)")

    return TextLayout(width=width, height=height, placements=placements)


def _scaled(dimension: int, scale: float) -> int:
    if dimension == 0:
        return 0
    return max(1, round(dimension * scale))


def render_text(
    font: BitmapFont,
    text: str,
    use_kerning: bool = False,
    scale: float = DEFAULT_SCALE,
    color: Optional[str] = None,
    smooth: bool = False,
) -> Image.Image:
    """
    Draws `text` on a transparent RGBA layer.

    Args:
        font: Loaded bitmap font.
        text: The title; may contain line breaks.
        use_kerning: Apply the font's kerning pairs.
        scale: Resize factor applied after drawing.
        color: Optional tint multiplied into the glyph colours.
        smooth: Lanczos instead of nearest-neighbour scaling.
    """
    if not math.isfinite(scale) or scale <= 0:
        raise ValueError(f"Scale must be a positive finite number (got {scale}).")

    layout = layout_text(font, text, use_kerning)
    layer = Image.new("RGBA", (layout.width, layout.height), (0, 0, 0, 0))
    for placement in layout.placements:
        overlay(layer, font.glyph_image(placement.glyph), placement.x, placement.y)

    if color:
        layer = tint(layer, parse_color(color))

    if scale != 1.0:
        size = (_scaled(layer.width, scale), _scaled(layer.height, scale))
        if layer.width and layer.height:
            resample = Image.Resampling.LANCZOS if smooth else Image.Resampling.NEAREST
            layer = layer.resize(size, resample=resample)
        else:
            layer = Image.new("RGBA", size, (0, 0, 0, 0))

    logger.debug(f"Rendered {len(layout.placements)} glyphs into {layer.width}x{layer.height} layer.")
    return layer
