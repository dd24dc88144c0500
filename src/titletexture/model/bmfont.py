"""
Bitmap Fonts (AngelCode BMFont)
===============================
Loads the text variant of the BMFont descriptor (.fnt) together with its
glyph atlas pages.

A descriptor is a list of lines, each a tag followed by key=value pairs:

    info face="Minecraft" size=16
    common lineHeight=18 base=14 scaleW=256 scaleH=256 pages=1
    page id=0 file="minecraft_0.png"
    char id=65 x=8 y=0 width=6 height=8 xoffset=0 yoffset=3 xadvance=7 page=0
    kerning first=65 second=86 amount=-1

Classes:
    Glyph: One character rectangle in an atlas page.
    BitmapFont: Glyph table, kerning table and the loaded pages.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from PIL import Image

logger = logging.getLogger(__name__)

FALLBACK_CHAR = "?"


@dataclass(frozen=True)
class Glyph:
    char_id: int
    x: int
    y: int
    width: int
    height: int
    xoffset: int
    yoffset: int
    xadvance: int
    page: int = 0


@dataclass
class BitmapFont:
    """A rasterised font: glyph rectangles on one or more RGBA pages."""
    face: str
    size: int
    line_height: int
    base: int
    glyphs: Dict[int, Glyph] = field(default_factory=dict)
    kerning: Dict[Tuple[int, int], int] = field(default_factory=dict)
    pages: List[Image.Image] = field(default_factory=list)

    def glyph_for(self, char: str) -> Optional[Glyph]:
        glyph = self.glyphs.get(ord(char))
        if glyph is None:
            glyph = self.glyphs.get(ord(FALLBACK_CHAR))
        return glyph

    def kerning_amount(self, first: str, second: str) -> int:
        return self.kerning.get((ord(first), ord(second)), 0)

    def glyph_image(self, glyph: Glyph) -> Image.Image:
        """Crop of the glyph rectangle from its page."""
        page = self.pages[glyph.page]
        return page.crop((glyph.x, glyph.y, glyph.x + glyph.width, glyph.y + glyph.height))


# A quoted value runs to the last quote before the next key or the line end;
# exporters write letter=""" and letter="\" without escaping.
_PAIR_RE = re.compile(r'(\w+)=("(?:.*?)"(?=\s+\w+=|\s*$)|\S+)')


def _parse_line(line: str) -> Tuple[str, Dict[str, str]]:
    parts = line.split(None, 1)
    tag, rest = parts[0], parts[1] if len(parts) > 1 else ""
    pairs: Dict[str, str] = {}
    for match in _PAIR_RE.finditer(rest):
        key, value = match.groups()
        if value.startswith('"'):
            if len(value) < 2 or not value.endswith('"'):
                raise ValueError(f"Unterminated quoted value for '{key}'.")
            value = value[1:-1]
        pairs[key] = value
    return tag, pairs


def _int(pairs: Dict[str, str], key: str, default: Optional[int] = None, line_no: int = 0) -> int:
    if key not in pairs:
        if default is None:
            raise ValueError(f"Line {line_no}: missing '{key}'.")
        return default
    try:
        return int(pairs[key])
    except ValueError:
        raise ValueError(f"Line {line_no}: '{key}' is not an integer ({pairs[key]!r}).") from None


def parse_bmfont(text: str, base_dir: str = ".") -> BitmapFont:
    """
    Parses a text BMFont descriptor and loads the pages it references.

    Args:
        text: Content of the .fnt file.
        base_dir: Directory that page file names are relative to.

    Raises:
        ValueError: The descriptor is malformed or incomplete.
        FileNotFoundError: A page image does not exist.
    """
    face, size = "", 0
    common: Optional[Dict[str, str]] = None
    common_line = 0
    page_files: Dict[int, str] = {}
    glyphs: Dict[int, Glyph] = {}
    kerning: Dict[Tuple[int, int], int] = {}

    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        try:
            tag, pairs = _parse_line(line)
        except ValueError as e:
            raise ValueError(f"Line {line_no}: {e}") from None

        if tag == "info":
            face = pairs.get("face", "")
            size = abs(_int(pairs, "size", 0, line_no))
        elif tag == "common":
            common, common_line = pairs, line_no
        elif tag == "page":
            page_files[_int(pairs, "id", line_no=line_no)] = pairs.get("file", "")
        elif tag == "char":
            glyph = Glyph(
                char_id=_int(pairs, "id", line_no=line_no),
                x=_int(pairs, "x", 0, line_no),
                y=_int(pairs, "y", 0, line_no),
                width=_int(pairs, "width", 0, line_no),
                height=_int(pairs, "height", 0, line_no),
                xoffset=_int(pairs, "xoffset", 0, line_no),
                yoffset=_int(pairs, "yoffset", 0, line_no),
                xadvance=_int(pairs, "xadvance", 0, line_no),
                page=_int(pairs, "page", 0, line_no),
            )
            glyphs[glyph.char_id] = glyph
        elif tag == "kerning":
            pair = (_int(pairs, "first", line_no=line_no), _int(pairs, "second", line_no=line_no))
            kerning[pair] = _int(pairs, "amount", 0, line_no)
        # 'chars' and 'kernings' only carry counts

    if common is None:
        raise ValueError("Font descriptor has no 'common' line.")

    line_height = _int(common, "lineHeight", line_no=common_line)
    base = _int(common, "base", line_height, common_line)

    pages: List[Image.Image] = []
    for page_id in sorted(page_files):
        if page_id != len(pages):
            raise ValueError(f"Page ids are not contiguous (missing page {len(pages)}).")
        page_path = os.path.join(base_dir, page_files[page_id])
        if not os.path.isfile(page_path):
            raise FileNotFoundError(f"Font page not found: {page_path}")
        with Image.open(page_path) as img:
            pages.append(img.convert("RGBA"))
        logger.debug(f"Loaded font page {page_id}: {page_path}")

    for glyph in glyphs.values():
        if glyph.page >= len(pages) and glyph.width and glyph.height:
            raise ValueError(f"Glyph {glyph.char_id} references undeclared page {glyph.page}.")

    logger.info(f"Parsed font '{face}': {len(glyphs)} glyphs, {len(kerning)} kerning pairs, {len(pages)} page(s).")
    return BitmapFont(
        face=face,
        size=size,
        line_height=line_height,
        base=base,
        glyphs=glyphs,
        kerning=kerning,
        pages=pages,
    )


def load_bmfont(path: str) -> BitmapFont:
    """Reads a .fnt file from disk; pages resolve relative to its folder."""
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Font file not found: {path}")

    with open(path, "rb") as f:
        data = f.read()
    if data.startswith(b"BMF"):
        raise ValueError("Binary BMFont descriptors are not supported; export the font in text format.")
    if data.lstrip().startswith(b"<"):
        raise ValueError("XML BMFont descriptors are not supported; export the font in text format.")

    text = data.decode("utf-8-sig")
    logger.info(f"Loading bitmap font from: {path}")
    return parse_bmfont(text, base_dir=os.path.dirname(os.path.abspath(path)))
