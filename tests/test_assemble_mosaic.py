import numpy as np
import pytest
from PIL import Image

from bucket_mosaic.assemble_mosaic import assemble_mosaic, render_mosaic
from bucket_mosaic.canvas_utils import apply_overlay, create_canvas, paint_tile
from bucket_mosaic.index_builder import build_index


@pytest.fixture
def rgb_index(solid_tile):
	tiles = [((255, 0, 0), solid_tile((255, 0, 0))), ((0, 255, 0), solid_tile((0, 255, 0))), ((0, 0, 255), solid_tile((0, 0, 255)))]
	return build_index(tiles, verbose=False)


def test_build_index_balances_once(rgb_index):
	assert rgb_index.balanced
	assert len(rgb_index) == 3
	assert len(rgb_index.elements) == 3


def test_build_index_reports(solid_tile, capsys):
	build_index([((10, 10, 10), solid_tile((10, 10, 10)))], verbose=True)
	out = capsys.readouterr().out
	assert "Balancing buckets..." in out
	assert "=== INDEX SUMMARY ===" in out


def test_create_and_paint_canvas(solid_tile):
	canvas = create_canvas(2, 3, 4)
	assert canvas.size == (12, 8)

	paint_tile(canvas, solid_tile((9, 8, 7), size=10), row=1, col=2, tile_size=4)

	assert canvas.getpixel((8, 4)) == (9, 8, 7)
	assert canvas.getpixel((11, 7)) == (9, 8, 7)
	assert canvas.getpixel((7, 3)) == (0, 0, 0)


def test_apply_overlay_blends():
	canvas = Image.new("RGB", (4, 4), (0, 0, 0))
	target = np.full((4, 4, 3), 200, dtype=np.uint8)

	assert apply_overlay(canvas, target, 0.0) is canvas
	blended = apply_overlay(canvas, target, 0.5)
	assert blended.getpixel((0, 0))[0] in (99, 100, 101)


def test_render_mosaic_paints_matching_tiles(rgb_index, two_color_frame):
	grid = np.array([[(250, 5, 5), (0, 0, 240)], [(0, 250, 0), (255, 0, 0)]], dtype=np.uint8)

	canvas, usage = render_mosaic(rgb_index, grid, tile_size=4)

	assert canvas.size == (8, 8)
	assert canvas.getpixel((0, 0)) == (255, 0, 0)
	assert canvas.getpixel((7, 0)) == (0, 0, 255)
	assert canvas.getpixel((0, 7)) == (0, 255, 0)
	assert canvas.getpixel((7, 7)) == (255, 0, 0)
	assert sorted(usage.values()) == [1, 1, 2]


def test_assemble_mosaic_saves_output(tmp_path, rgb_index, two_color_frame):
	target_path = tmp_path / "target.png"
	Image.fromarray(two_color_frame).save(target_path)
	output = tmp_path / "out.png"

	mosaic = assemble_mosaic(str(target_path), tile_size=4, output_file=str(output), index=rgb_index, verbose=False)

	assert mosaic is not None
	saved = Image.open(output).convert("RGB")
	assert saved.size == (8, 8)
	assert saved.getpixel((1, 1)) == (255, 0, 0)
	assert saved.getpixel((6, 6)) == (0, 0, 255)


def test_assemble_mosaic_missing_target(tmp_path, rgb_index, capsys):
	result = assemble_mosaic(str(tmp_path / "missing.png"), output_file=str(tmp_path / "o.png"), index=rgb_index)
	assert result is None
	assert "not found" in capsys.readouterr().out


def test_assemble_mosaic_target_smaller_than_tile(tmp_path, rgb_index):
	target_path = tmp_path / "tiny.png"
	Image.new("RGB", (2, 2), (255, 0, 0)).save(target_path)
	assert assemble_mosaic(str(target_path), tile_size=4, output_file=str(tmp_path / "o.png"), index=rgb_index) is None
