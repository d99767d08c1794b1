"""Batch processing utilities for multiple target images."""

import os

from tqdm import tqdm

from bucket_mosaic.assemble_mosaic import assemble_mosaic
from bucket_mosaic.image_loader import SUPPORTED_FORMATS, load_tile_images
from bucket_mosaic.index_builder import build_index


def output_name_for(target_file):
	"""'beach.jpg' -> 'beach Mosaic.png'"""
	base_name = os.path.splitext(target_file)[0]
	return f"{base_name} Mosaic.png"


def process_targets_folder(
	targets_folder="targets",
	tiles_folder="tiles",
	outputs_folder="outputs",
	tile_size=16,
	overlay_opacity=0.3,
	index_settings=None,
	verbose=False,
):
	"""
	Render every target image in a folder against one shared index.

	The tiles are loaded and indexed once; usage counts carry over from
	target to target, so later mosaics favor tiles used less so far.

	Args:
	    targets_folder: Folder containing target images
	    tiles_folder: Folder containing candidate tile images
	    outputs_folder: Folder for output mosaics
	    tile_size: Edge length of each tile in pixels
	    overlay_opacity: Opacity of target image overlay (0.0-1.0)
	    index_settings: Optional dict of build_index keyword arguments
	    verbose: If True, show detailed output. If False, show one progress bar

	Returns:
	    Tuple of (processed, skipped) counts, or None if the folders are missing
	"""
	if not os.path.exists(targets_folder):
		print(f"ERROR: '{targets_folder}' folder not found!")
		print(f"Please create a '{targets_folder}' folder and add target images.")
		return None

	if not os.path.exists(outputs_folder):
		os.makedirs(outputs_folder)
		if verbose:
			print(f"Created '{outputs_folder}' folder")

	target_files = sorted(f for f in os.listdir(targets_folder) if f.lower().endswith(SUPPORTED_FORMATS))
	if not target_files:
		print(f"No target images found in '{targets_folder}' folder!")
		return 0, 0

	tiles = load_tile_images(tiles_folder, tile_size, show_progress=True)
	if not tiles:
		print("No tile images to process. Exiting.")
		return None
	index = build_index(tiles, verbose=verbose, **(index_settings or {}))

	print(f"\nProcessing {len(target_files)} target image(s)...")

	processed = 0
	skipped = 0

	target_files_iter = tqdm(target_files, desc="Overall progress", disable=verbose)
	for target_file in target_files_iter:
		if verbose:
			print("\n" + "=" * 70)
			print(f"Processing: {target_file}")
			print("=" * 70)
		else:
			target_files_iter.set_description(f"Processing: {target_file[:40]}")

		target_path = os.path.join(targets_folder, target_file)
		output_filename = output_name_for(target_file)
		output_path = os.path.join(outputs_folder, output_filename)

		try:
			result = assemble_mosaic(
				target_path,
				tile_size=tile_size,
				output_file=output_path,
				overlay_opacity=overlay_opacity,
				index=index,
				verbose=verbose,
			)
		except (OSError, ValueError) as e:
			tqdm.write(f"✗ ERROR: {target_file}: {e}")
			skipped += 1
			continue

		if result is None:
			tqdm.write(f"⚠ SKIPPED: {target_file}")
			skipped += 1
			continue

		processed += 1
		tqdm.write(f"✓ {output_filename}")

	print("\n" + "=" * 70)
	print("BATCH PROCESSING COMPLETE")
	print("=" * 70)
	print(f"✓ Successfully processed: {processed}")
	if skipped > 0:
		print(f"⚠ Skipped: {skipped}")
	print(f"\nOutput mosaics saved to: {outputs_folder}/")
	print("=" * 70)

	return processed, skipped
