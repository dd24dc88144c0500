"""
Texture Generator
=================
Runs one generation pass: settings -> font -> text layer -> tiled texture.

Why is this file needed?
------------------------
1. Orchestration: The preview and the Save action share exactly the same
   pipeline, so what the user sees is what gets written.
2. Caching: Live preview regenerates on every keystroke; fonts and
   backgrounds are loaded once and reused until their source changes.

Classes:
    GenerationResult: The texture plus a few numbers for the status line.
    TextureGenerator: The pipeline with its caches.
"""
from __future__ import annotations

import logging
import math
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from PIL import Image

from titletexture.model.background import load_background
from titletexture.model.bmfont import BitmapFont
from titletexture.model.compose import compose_texture
from titletexture.model.font_builder import load_font
from titletexture.model.io import IOManager
from titletexture.model.render import render_text
from titletexture.model.state import TitleSettings

logger = logging.getLogger(__name__)

FontKey = Tuple[Optional[str], Optional[int]]

# Dragging the size spin box loads a font per step; keep the recent ones only
FONT_CACHE_SIZE: int = 4


@dataclass
class GenerationResult:
    image: Image.Image
    text_size: Tuple[int, int]
    tile_count: int
    font_name: str


class TextureGenerator:
    def __init__(self) -> None:
        self._fonts: OrderedDict[FontKey, BitmapFont] = OrderedDict()
        self._backgrounds: Dict[Optional[str], Image.Image] = {}

    def clear_cache(self) -> None:
        self._fonts.clear()
        self._backgrounds.clear()
        logger.debug("Font and background caches cleared.")

    def get_font(self, settings: TitleSettings) -> BitmapFont:
        path = settings.font_path
        # Bitmap fonts have a fixed size; only vector fonts are keyed by size
        is_bitmap = path is not None and path.lower().endswith(".fnt")
        key: FontKey = (path, None if is_bitmap else settings.font_size)
        if key in self._fonts:
            self._fonts.move_to_end(key)
            return self._fonts[key]

        font = load_font(path, settings.font_size)
        self._fonts[key] = font
        while len(self._fonts) > FONT_CACHE_SIZE:
            evicted, _ = self._fonts.popitem(last=False)
            logger.debug(f"Dropped cached font {evicted}.")
        return font

    def get_background(self, settings: TitleSettings) -> Image.Image:
        path = settings.background_path
        if path not in self._backgrounds:
            self._backgrounds[path] = load_background(path)
        return self._backgrounds[path]

    def generate(self, settings: TitleSettings) -> GenerationResult:
        settings.validate()

        font = self.get_font(settings)
        background = self.get_background(settings)

        text_layer = render_text(
            font,
            settings.text,
            use_kerning=settings.use_kerning,
            scale=settings.scale,
            color=settings.color,
            smooth=settings.smooth,
        )
        texture = compose_texture(
            text_layer,
            background,
            min_height=settings.min_height,
            offset=(settings.offset_x, settings.offset_y),
        )

        tiles = max(1, math.ceil(text_layer.width / background.width))
        return GenerationResult(
            image=texture,
            text_size=(text_layer.width, text_layer.height),
            tile_count=tiles,
            font_name=font.face or "Unnamed",
        )

    def save(self, settings: TitleSettings, filepath: Optional[str] = None) -> str:
        """Generates the texture and writes it; returns the written path."""
        result = self.generate(settings)
        return IOManager.save_texture(result.image, filepath or settings.output_path)
