"""Canvas creation and tile painting utilities."""

import numpy as np
from PIL import Image


def create_canvas(grid_rows, grid_cols, tile_size):
	"""
	Create a blank RGB canvas for a grid of square tiles.

	Args:
	    grid_rows: Number of tile rows
	    grid_cols: Number of tile columns
	    tile_size: Edge length of a tile in pixels

	Returns:
	    PIL Image of size (grid_cols * tile_size, grid_rows * tile_size)
	"""
	return Image.new("RGB", (grid_cols * tile_size, grid_rows * tile_size), (0, 0, 0))


def paint_tile(canvas, img, row, col, tile_size):
	"""Paste img into the (row, col) cell, resizing it if it is not tile-sized."""
	if img.size != (tile_size, tile_size):
		img = img.resize((tile_size, tile_size), Image.Resampling.LANCZOS)
	if img.mode != "RGB":
		img = img.convert("RGB")
	canvas.paste(img, (col * tile_size, row * tile_size))


def apply_overlay(canvas, target, opacity):
	"""
	Blend the target over the finished mosaic.

	Args:
	    canvas: PIL Image of the mosaic
	    target: PIL Image or (H, W, 3) array of the target
	    opacity: 0.0 (mosaic only) to 1.0 (target only)

	Returns:
	    New blended PIL Image, or canvas unchanged when opacity is 0
	"""
	if opacity <= 0:
		return canvas
	if isinstance(target, np.ndarray):
		target = Image.fromarray(target)
	overlay = target.convert("RGB").resize(canvas.size, Image.Resampling.LANCZOS)
	return Image.blend(canvas.convert("RGB"), overlay, min(opacity, 1.0))
