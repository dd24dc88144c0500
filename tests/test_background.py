import numpy as np
import pytest
from PIL import Image

from titletexture.model.background import load_background, tile_background, uv_checker


def test_uv_checker_is_opaque_square():
    tile = uv_checker()
    assert tile.size == (32, 32)
    assert tile.mode == "RGBA"
    assert np.all(np.asarray(tile)[..., 3] == 255)


def test_uv_checker_cells_differ():
    tile = uv_checker(size=32, cells=4)
    # same cell
    assert tile.getpixel((0, 0)) == tile.getpixel((7, 7))
    # neighbouring cells in u and in v
    assert tile.getpixel((0, 0)) != tile.getpixel((8, 0))
    assert tile.getpixel((0, 0)) != tile.getpixel((0, 8))


def test_uv_checker_encodes_u_in_red():
    tile = uv_checker(size=32, cells=4)
    reds = [tile.getpixel((x, 0))[0] for x in (0, 8, 16, 24)]
    # every other cell is darkened, so compare cells of equal parity
    assert reds[2] > reds[0]
    assert reds[3] > reds[1]


def test_uv_checker_rejects_bad_size():
    with pytest.raises(ValueError):
        uv_checker(size=0)


def test_tile_width_is_whole_number_of_tiles(checker_tile):
    tiled = tile_background(checker_tile, 70, 40)
    assert tiled.size == (96, 40)


def test_tile_repeats_in_both_directions(checker_tile):
    tiled = tile_background(checker_tile, 70, 40)
    assert tiled.getpixel((33, 5)) == checker_tile.getpixel((1, 5))
    assert tiled.getpixel((65, 5)) == checker_tile.getpixel((1, 5))
    assert tiled.getpixel((5, 35)) == checker_tile.getpixel((5, 3))


def test_tile_exact_multiple(checker_tile):
    assert tile_background(checker_tile, 64, 32).size == (64, 32)


def test_tile_zero_width_gives_one_tile(checker_tile):
    assert tile_background(checker_tile, 0, 32).size == (32, 32)


def test_tile_rejects_non_positive_height(checker_tile):
    with pytest.raises(ValueError):
        tile_background(checker_tile, 10, 0)


def test_load_background_default_is_checker():
    assert load_background(None).size == (32, 32)


def test_load_background_from_file(tmp_path):
    path = tmp_path / "bg.png"
    Image.new("RGB", (16, 8), (10, 20, 30)).save(path)

    bg = load_background(str(path))
    assert bg.mode == "RGBA"
    assert bg.size == (16, 8)
    assert bg.getpixel((0, 0)) == (10, 20, 30, 255)


def test_load_background_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_background(str(tmp_path / "missing.png"))


def test_load_background_not_an_image(tmp_path):
    path = tmp_path / "bg.png"
    path.write_text("not an image")
    with pytest.raises(ValueError):
        load_background(str(path))
