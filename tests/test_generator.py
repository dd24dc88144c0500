import os

import pytest
from PIL import Image

from titletexture.controller.generator import FONT_CACHE_SIZE, TextureGenerator
from titletexture.model.state import TitleSettings


@pytest.fixture
def generator() -> TextureGenerator:
    return TextureGenerator()


@pytest.fixture
def settings(fnt_path) -> TitleSettings:
    return TitleSettings(text="AV", font_path=fnt_path, scale=1.0)


def test_generate_short_title(generator, settings):
    result = generator.generate(settings)

    assert result.image.size == (32, 32)
    assert result.text_size == (10, 10)
    assert result.tile_count == 1
    assert result.font_name == "Test Font"
    # 'A' drawn at offset -1: column 0 is its second pixel column
    assert result.image.getpixel((0, 3)) == (255, 255, 255, 255)


def test_kerning_changes_text_width(generator, settings):
    settings.use_kerning = True
    assert generator.generate(settings).text_size == (8, 10)


def test_long_title_spans_several_tiles(generator, settings):
    settings.text = "A" * 20
    result = generator.generate(settings)

    assert result.text_size[0] == 100
    assert result.tile_count == 4
    assert result.image.size == (128, 32)


def test_default_scale_and_builtin_font(generator):
    result = generator.generate(TitleSettings(text="Title"))
    assert result.image.width % 32 == 0
    assert result.image.height >= 32


def test_empty_text_gives_one_tile(generator, settings):
    settings.text = ""
    result = generator.generate(settings)
    assert result.image.size == (32, 32)
    assert result.tile_count == 1


def test_custom_background_tile(generator, settings, tmp_path):
    bg_path = tmp_path / "bg.png"
    Image.new("RGBA", (16, 16), (0, 0, 255, 255)).save(bg_path)
    settings.background_path = str(bg_path)
    settings.text = "AAAA"

    result = generator.generate(settings)
    assert result.image.size == (32, 32)
    assert result.image.getpixel((31, 31)) == (0, 0, 255, 255)


def test_fonts_are_cached_by_path(generator, settings):
    first = generator.get_font(settings)
    settings.font_size = 40
    # bitmap fonts ignore the size
    assert generator.get_font(settings) is first

    generator.clear_cache()
    assert generator.get_font(settings) is not first


def test_vector_fonts_are_cached_by_size(generator):
    small = generator.get_font(TitleSettings(font_size=12))
    assert generator.get_font(TitleSettings(font_size=12)) is small
    assert generator.get_font(TitleSettings(font_size=24)) is not small


def test_font_cache_keeps_recent_fonts_only(generator):
    first = generator.get_font(TitleSettings(font_size=10))
    for size in range(11, 11 + FONT_CACHE_SIZE):
        latest = generator.get_font(TitleSettings(font_size=size))

    assert len(generator._fonts) == FONT_CACHE_SIZE
    assert generator.get_font(TitleSettings(font_size=size)) is latest
    assert generator.get_font(TitleSettings(font_size=10)) is not first


def test_font_cache_hit_refreshes_entry(generator):
    kept = generator.get_font(TitleSettings(font_size=10))
    for size in range(11, 10 + FONT_CACHE_SIZE):
        generator.get_font(TitleSettings(font_size=size))
    assert generator.get_font(TitleSettings(font_size=10)) is kept

    generator.get_font(TitleSettings(font_size=99))
    assert generator.get_font(TitleSettings(font_size=10)) is kept


def test_invalid_settings_raise(generator, settings):
    settings.scale = 0
    with pytest.raises(ValueError):
        generator.generate(settings)


def test_missing_font_raises(generator, tmp_path):
    with pytest.raises(FileNotFoundError):
        generator.generate(TitleSettings(text="A", font_path=str(tmp_path / "gone.fnt")))


def test_save_uses_default_output_path(generator, settings, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    written = generator.save(settings)

    assert os.path.normpath(written) == os.path.join("title_texture_map", "title_texture_map.png")
    assert (tmp_path / "title_texture_map" / "title_texture_map.png").is_file()


def test_save_to_explicit_path(generator, settings, tmp_path):
    written = generator.save(settings, str(tmp_path / "out" / "custom"))
    assert written == str(tmp_path / "out" / "custom.png")
    with Image.open(written) as img:
        assert img.size == (32, 32)
