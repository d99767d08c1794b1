"""Tile image loading and preprocessing utilities."""

import os
import multiprocessing
from functools import partial

import numpy as np
from PIL import Image, ImageOps
from tqdm import tqdm

SUPPORTED_FORMATS = (".jpg", ".jpeg", ".png")


def list_tile_paths(folder_path):
	"""Sorted paths of supported image files in folder_path."""
	return [
		os.path.join(folder_path, fn)
		for fn in sorted(os.listdir(folder_path))
		if fn.lower().endswith(SUPPORTED_FORMATS)
	]


def average_rgb(img):
	"""
	Average color of a PIL image.

	Returns:
	    (r, g, b) tuple of ints in 0-255
	"""
	np_array = np.array(img.convert("RGB"))
	avg_color = np.mean(np_array, axis=(0, 1))
	return tuple(int(round(c)) for c in avg_color)


def analyze_tile_image(file_path, tile_size):
	"""
	Load one candidate image as a square tile and compute its average color.

	Args:
	    file_path: Path to the image file
	    tile_size: Edge length of the square tile in pixels

	Returns:
	    (avg_rgb, tile_image) tuple, or (None, None) if the file cannot be decoded
	"""
	filename = os.path.basename(file_path)
	try:
		with Image.open(file_path) as img:
			tile = ImageOps.fit(img.convert("RGB"), (tile_size, tile_size), Image.Resampling.LANCZOS)
		return average_rgb(tile), tile
	except (OSError, ValueError) as e:
		print(f"  [ERROR] Could not process {filename}. Reason: {e}")
		return None, None


def load_tile_images(folder_path, tile_size, processes=None, show_progress=True):
	"""
	Decode every supported image in a folder into (avg_rgb, tile_image) pairs.

	Undecodable files are skipped. Files are returned in sorted filename
	order so that index insertion order is reproducible.

	Args:
	    folder_path: Folder containing candidate tile images
	    tile_size: Edge length of the square tiles in pixels
	    processes: Worker processes (None = one per CPU, 0 = decode in this process)
	    show_progress: Show a tqdm progress bar

	Returns:
	    List of (avg_rgb, tile_image) tuples
	"""
	if not os.path.isdir(folder_path):
		print(f"ERROR: '{folder_path}' folder not found!")
		return []

	image_paths = list_tile_paths(folder_path)
	print(f"Scanning folder: {folder_path} ({len(image_paths)} images)")

	worker = partial(analyze_tile_image, tile_size=tile_size)
	tiles = []
	with tqdm(total=len(image_paths), desc="Loading tiles", disable=not show_progress) as pbar:
		if processes == 0:
			results = map(worker, image_paths)
			for avg_rgb, tile in results:
				if avg_rgb is not None:
					tiles.append((avg_rgb, tile))
				pbar.update()
		else:
			# imap keeps the sorted order, unlike imap_unordered
			with multiprocessing.Pool(processes) as pool:
				for avg_rgb, tile in pool.imap(worker, image_paths):
					if avg_rgb is not None:
						tiles.append((avg_rgb, tile))
					pbar.update()

	skipped = len(image_paths) - len(tiles)
	if skipped:
		print(f"  Skipped {skipped} images that could not be decoded")
	return tiles
