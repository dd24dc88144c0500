"""
Title Settings (Data Model)
===========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds every user choice (text, font, kerning, scale,
   background, output path) in one place.
2. Persistence: This object is what gets serialized into presets and into the
   QSettings session.
3. Decoupling: Views read from this object; the generator reads it to build
   the texture.

Classes:
    TitleSettings: The main container class.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional

from titletexture.config import (
    DEFAULT_FONT_SIZE, DEFAULT_OUTPUT_PATH, DEFAULT_SCALE, MIN_TEXTURE_HEIGHT, TEXT_OFFSET,
)
from titletexture.model.imaging import parse_color

logger = logging.getLogger(__name__)


@dataclass
class TitleSettings:
    """
    Everything needed to generate one title texture.
    Pass this instance to the Generator and the Views.
    """
    text: str = ""
    use_kerning: bool = False
    scale: float = DEFAULT_SCALE

    # None -> built-in font
    font_path: Optional[str] = None
    # Only used for vector fonts (.ttf/.otf and the built-in one)
    font_size: int = DEFAULT_FONT_SIZE

    # None -> generated UV checker
    background_path: Optional[str] = None
    min_height: int = MIN_TEXTURE_HEIGHT
    offset_x: int = TEXT_OFFSET[0]
    offset_y: int = TEXT_OFFSET[1]

    color: Optional[str] = None
    smooth: bool = False

    output_path: str = DEFAULT_OUTPUT_PATH

    def validate(self) -> None:
        if not math.isfinite(self.scale) or self.scale <= 0:
            raise ValueError(f"Scale must be a positive finite number (got {self.scale}).")
        if self.font_size < 1:
            raise ValueError(f"Font size must be at least 1 (got {self.font_size}).")
        if self.min_height < 1:
            raise ValueError(f"Minimum height must be at least 1 (got {self.min_height}).")
        if self.color:
            parse_color(self.color)

    def reset(self) -> None:
        """Restore every field to its default."""
        defaults = TitleSettings()
        for f in fields(self):
            setattr(self, f.name, getattr(defaults, f.name))
        logger.info("Title settings have been reset.")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TitleSettings:
        """
        Builds settings from a plain dict (preset file, QSettings).
        Unknown keys are ignored; values of the wrong type raise ValueError.
        """
        settings = cls()
        known = {f.name: f for f in fields(cls)}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown setting '{key}'.")
                continue
            setattr(settings, key, _coerce(key, getattr(settings, key), value))
        return settings


_OPTIONAL_STR = ("font_path", "background_path", "color")


def _coerce(key: str, default: Any, value: Any) -> Any:
    if key in _OPTIONAL_STR:
        if value is None or value == "":
            return None
        if not isinstance(value, str):
            raise ValueError(f"Setting '{key}' must be a string or null.")
        return value

    # bool is checked before int because bool is an int subclass
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ValueError(f"Setting '{key}' must be true or false.")
        return value
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Setting '{key}' must be an integer.")
        return value
    if isinstance(default, float):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Setting '{key}' must be a number.")
        return float(value)
    if not isinstance(value, str):
        raise ValueError(f"Setting '{key}' must be a string.")
    return value
