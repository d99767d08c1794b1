"""
Main mosaic assembly module.

This module coordinates still-image mosaic creation:
1. Load candidate tiles and build the color index
2. Analyze the target image into a grid of tile colors
3. Query the index once per grid cell
4. Paint the chosen tiles and save the result
"""

import os

from tqdm import tqdm

from bucket_mosaic.big_bucket import (
	DEFAULT_DISTANCE_THRESHOLD,
	DEFAULT_MAX_BUCKET_SIZE,
	DEFAULT_MERGE_THRESHOLD,
	DEFAULT_MIN_BUCKET_SIZE,
)
from bucket_mosaic.canvas_utils import apply_overlay, create_canvas, paint_tile
from bucket_mosaic.image_loader import load_tile_images
from bucket_mosaic.index_builder import build_index
from bucket_mosaic.target_analyzer import analyze_target_image


def render_mosaic(index, grid, tile_size, show_progress=False):
	"""
	Paint one index match per grid cell.

	Args:
	    index: Balanced BigBucket whose elements hold tile images
	    grid: (rows, cols, 3) array of target colors
	    tile_size: Edge length of a tile in pixels
	    show_progress: Show a tqdm bar over rows

	Returns:
	    Tuple of (PIL Image canvas, dict of per-element usage counts keyed by element_id)
	"""
	grid_rows, grid_cols = grid.shape[:2]
	canvas = create_canvas(grid_rows, grid_cols, tile_size)
	usage = {}

	for row in tqdm(range(grid_rows), desc="Matching tiles", disable=not show_progress):
		for col in range(grid_cols):
			target_color = tuple(int(c) for c in grid[row, col])
			element = index.get_closest_element(target_color)
			paint_tile(canvas, element.image, row, col, tile_size)
			usage[element.element_id] = usage.get(element.element_id, 0) + 1

	return canvas, usage


def print_final_summary(usage, num_cells, num_tiles):
	"""Print final statistics about the mosaic."""
	print("\n=== FINAL SUMMARY ===")
	print(f"Tiles painted: {num_cells}")
	print(f"Unique images used: {len(usage)} out of {num_tiles} available")
	if usage:
		print(f"  Most repeated image used {max(usage.values())} times")
	unique_usage_percentage = (len(usage) / num_tiles * 100) if num_tiles > 0 else 0
	print(f"Unique image usage: {unique_usage_percentage:.1f}%")


def assemble_mosaic(
	TARGET_FILENAME,
	IMAGE_FOLDER="tiles",
	tile_size=16,
	output_file="mosaic_output.png",
	max_target_size=None,
	distance_threshold=DEFAULT_DISTANCE_THRESHOLD,
	min_bucket_size=DEFAULT_MIN_BUCKET_SIZE,
	max_bucket_size=DEFAULT_MAX_BUCKET_SIZE,
	merge_threshold=DEFAULT_MERGE_THRESHOLD,
	overlay_opacity=0.0,
	index=None,
	verbose=True,
):
	"""
	Assemble a mosaic of tile images that recreates a target image.

	Args:
	    TARGET_FILENAME: Path to target image
	    IMAGE_FOLDER: Folder containing candidate tile images
	    tile_size: Edge length of each tile, both in the target grid and in the output
	    output_file: Output filename for the mosaic
	    max_target_size: Downscale the target so its larger side is at most this
	    distance_threshold: Index insertion threshold
	    min_bucket_size: Index balancing lower size
	    max_bucket_size: Index balancing upper size
	    merge_threshold: Index balancing merge distance
	    overlay_opacity: Opacity of target image overlay (0.0-1.0). Default 0.0
	    index: Reuse an already built index instead of loading IMAGE_FOLDER
	    verbose: Print progress

	Returns:
	    PIL Image object of the completed mosaic, or None if nothing could be rendered
	"""
	if verbose:
		print("\n=== MOSAIC ASSEMBLY ===")
		print(f"Target image: {TARGET_FILENAME}")

	if not os.path.exists(TARGET_FILENAME):
		print(f"ERROR: target image '{TARGET_FILENAME}' not found!")
		return None

	if index is None:
		tiles = load_tile_images(IMAGE_FOLDER, tile_size, show_progress=verbose)
		if not tiles:
			print("No images to process. Exiting.")
			return None
		index = build_index(
			tiles,
			distance_threshold=distance_threshold,
			min_bucket_size=min_bucket_size,
			max_bucket_size=max_bucket_size,
			merge_threshold=merge_threshold,
			verbose=verbose,
		)

	if verbose:
		print("\nAnalyzing target image grid...")
	target = analyze_target_image(TARGET_FILENAME, tile_size=tile_size, max_dimension=max_target_size)
	grid_rows, grid_cols = target["grid_size"]
	if grid_rows == 0 or grid_cols == 0:
		print(f"ERROR: target is smaller than one {tile_size}px tile")
		return None
	if verbose:
		print(f"Grid: {grid_rows} rows x {grid_cols} cols = {grid_rows * grid_cols} cells")

	canvas, usage = render_mosaic(index, target["grid"], tile_size, show_progress=verbose)

	if verbose:
		print_final_summary(usage, grid_rows * grid_cols, len(index.elements))

	if overlay_opacity > 0:
		if verbose:
			print(f"\nApplying target image overlay (opacity: {overlay_opacity * 100:.0f}%)...")
		canvas = apply_overlay(canvas, target["image"], overlay_opacity)

	if verbose:
		print(f"\nSaving mosaic to {output_file}...")
	canvas.save(output_file)
	if verbose:
		print("[OK] Mosaic saved successfully!")

	return canvas
