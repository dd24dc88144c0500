"""
Test configuration and fixtures for the title texture generator.
"""
import os
import logging

import pytest
from PIL import Image, ImageDraw

from titletexture.model.bmfont import BitmapFont, Glyph

# Widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

FNT_TEMPLATE = """\
info face="Test Font" size=8 bold=0 italic=0 charset="" unicode=1
common lineHeight=10 base=8 scaleW=64 scaleH=16 pages=1 packed=0
page id=0 file="{page}"
chars count=4
char id=32   x=0  y=0 width=0 height=0 xoffset=0 yoffset=0 xadvance=3 page=0 chnl=15
char id=65   x=0  y=0 width=4 height=6 xoffset=0 yoffset=2 xadvance=5 page=0 chnl=15
char id=86   x=5  y=0 width=4 height=6 xoffset=0 yoffset=2 xadvance=5 page=0 chnl=15
char id=63   x=10 y=0 width=3 height=6 xoffset=1 yoffset=2 xadvance=5 page=0 chnl=15
kernings count=1
kerning first=65 second=86 amount=-2
"""


def make_atlas() -> Image.Image:
    """Solid white boxes where the test glyphs live."""
    atlas = Image.new("RGBA", (64, 16), (0, 0, 0, 0))
    draw = ImageDraw.Draw(atlas)
    draw.rectangle((0, 0, 3, 5), fill=(255, 255, 255, 255))
    draw.rectangle((5, 0, 8, 5), fill=(255, 255, 255, 255))
    draw.rectangle((10, 0, 12, 5), fill=(255, 255, 255, 255))
    return atlas


def make_font(with_fallback: bool = True) -> BitmapFont:
    """The same font as the .fnt fixture, built in memory."""
    glyphs = {
        32: Glyph(32, 0, 0, 0, 0, 0, 0, 3),
        65: Glyph(65, 0, 0, 4, 6, 0, 2, 5),
        86: Glyph(86, 5, 0, 4, 6, 0, 2, 5),
    }
    if with_fallback:
        glyphs[63] = Glyph(63, 10, 0, 3, 6, 1, 2, 5)
    return BitmapFont(
        face="Test Font",
        size=8,
        line_height=10,
        base=8,
        glyphs=glyphs,
        kerning={(65, 86): -2},
        pages=[make_atlas()],
    )


@pytest.fixture
def font() -> BitmapFont:
    return make_font()


@pytest.fixture
def fnt_path(tmp_path) -> str:
    """A text BMFont descriptor with its page written next to it."""
    make_atlas().save(tmp_path / "test_0.png")
    path = tmp_path / "test.fnt"
    path.write_text(FNT_TEMPLATE.format(page="test_0.png"), encoding="utf-8")
    return str(path)


@pytest.fixture
def checker_tile() -> Image.Image:
    """32x32 tile whose pixels are unique per position, so tiling is checkable."""
    tile = Image.new("RGBA", (32, 32))
    for y in range(32):
        for x in range(32):
            tile.putpixel((x, y), (x * 8, y * 8, 100, 255))
    return tile
