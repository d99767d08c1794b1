"""Target image analysis utilities."""

import numpy as np
from PIL import Image


def compute_tile_grid(frame, tile_size):
	"""
	Average an RGB frame into one color per tile.

	Trailing rows and columns that do not fill a whole tile are cropped.

	Args:
	    frame: (H, W, 3) numpy array
	    tile_size: Edge length of a tile in pixels

	Returns:
	    (rows, cols, 3) uint8 array of rounded average colors
	"""
	frame = np.asarray(frame)
	if frame.ndim != 3 or frame.shape[2] < 3:
		raise ValueError(f"expected an (H, W, 3) frame, got shape {frame.shape}")
	if tile_size < 1:
		raise ValueError(f"tile_size must be positive, got {tile_size}")

	grid_rows = frame.shape[0] // tile_size
	grid_cols = frame.shape[1] // tile_size
	if grid_rows == 0 or grid_cols == 0:
		return np.zeros((grid_rows, grid_cols, 3), dtype=np.uint8)
	cropped = frame[: grid_rows * tile_size, : grid_cols * tile_size, :3].astype(np.float64)

	blocks = cropped.reshape(grid_rows, tile_size, grid_cols, tile_size, 3)
	avg = blocks.mean(axis=(1, 3))
	return np.rint(avg).astype(np.uint8)


def load_target_frame(target_path, max_dimension=None):
	"""
	Load a target image as an RGB numpy array.

	Args:
	    target_path: Path to target image
	    max_dimension: Downscale so the larger side is at most this many pixels

	Returns:
	    (H, W, 3) uint8 array
	"""
	with Image.open(target_path) as img:
		img = img.convert("RGB")
		if max_dimension and max(img.size) > max_dimension:
			scale = max_dimension / max(img.size)
			new_size = (max(1, int(img.size[0] * scale)), max(1, int(img.size[1] * scale)))
			img = img.resize(new_size, Image.Resampling.LANCZOS)
		return np.array(img)


def analyze_target_image(target_path, tile_size=16, max_dimension=None):
	"""
	Analyze target image and extract average RGB for each grid cell.

	Args:
	    target_path: Path to target image
	    tile_size: Size of each grid cell in pixels (of the possibly downscaled target)
	    max_dimension: Optional downscale limit for the target

	Returns:
	    dict with 'grid' (rows x cols x 3 array), 'image', 'dimensions', 'grid_size', 'tile_size'
	"""
	frame = load_target_frame(target_path, max_dimension)
	grid = compute_tile_grid(frame, tile_size)
	height, width = frame.shape[:2]

	return {
		"grid": grid,
		"image": frame,
		"dimensions": (width, height),
		"grid_size": grid.shape[:2],
		"tile_size": tile_size,
	}
