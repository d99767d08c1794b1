"""
Batch Mosaic Maker - Process every target image in a folder with one tile index

Place target images in 'targets/' folder.
Mosaics will be saved to 'outputs/' folder as: "<name> Mosaic.png"
"""

from bucket_mosaic.batch_processor import process_targets_folder

# ==================== CONFIGURATION ====================

# Folder containing target images
TARGETS_FOLDER = "targets"

# Folder containing the photos to use as mosaic tiles
TILES_FOLDER = "tiles"

# Folder where output mosaics will be saved
OUTPUTS_FOLDER = "outputs"

# Edge length of each square tile in pixels
TILE_SIZE = 16

# Color index settings (see mosaic_maker.py)
INDEX_SETTINGS = {
	"distance_threshold": 10.0,
	"min_bucket_size": 5,
	"max_bucket_size": 40,
	"merge_threshold": 30.0,
}

# Target image overlay (0.0 to 1.0)
OVERLAY_OPACITY = 0.3

# ======================================================

if __name__ == "__main__":
	print("=" * 70)
	print("BATCH MOSAIC MAKER")
	print("=" * 70)
	print(f"\nProcessing all target images in '{TARGETS_FOLDER}/' folder...")
	print(f"Output mosaics will be saved to '{OUTPUTS_FOLDER}/' folder")
	print("=" * 70)

	process_targets_folder(
		targets_folder=TARGETS_FOLDER,
		tiles_folder=TILES_FOLDER,
		outputs_folder=OUTPUTS_FOLDER,
		tile_size=TILE_SIZE,
		overlay_opacity=OVERLAY_OPACITY,
		index_settings=INDEX_SETTINGS,
		verbose=False,
	)
