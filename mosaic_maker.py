"""
Mosaic Maker - Recreate an image as a photo mosaic of your tile images

Every tile of the target is matched by average color against a bucketed
color index built from the tile folder, with repeat avoidance so the same
photo is not stamped over every similar patch.
"""

from bucket_mosaic.assemble_mosaic import assemble_mosaic

# ==================== CONFIGURATION ====================

# Target image - the image you want to recreate as a mosaic
TARGET_IMAGE = "target.jpg"

# Folder containing the photos to use as mosaic tiles
IMAGE_FOLDER = "tiles"

# Edge length of each square tile in pixels
TILE_SIZE = 16

# Downscale the target so its longer side is at most this many pixels (None = keep)
MAX_TARGET_SIZE = 2000

# Color index settings
DISTANCE_THRESHOLD = 10.0  # Max color distance for a photo to join an existing bucket
MIN_BUCKET_SIZE = 5  # Buckets smaller than this are merged with similar small ones
MAX_BUCKET_SIZE = 40  # Buckets larger than this are split
MERGE_THRESHOLD = 30.0  # Max color distance between two small buckets to merge them

# Target image overlay (0.0 to 1.0)
# 0.0 = no overlay (just the mosaic)
# 0.3 = subtle overlay (recommended - helps see original image through mosaic)
# 1.0 = full overlay (target image fully visible)
OVERLAY_OPACITY = 0.3

# Output filename
OUTPUT_FILE = "mosaic_output.png"

# ======================================================

if __name__ == "__main__":
	print("=" * 60)
	print("MOSAIC MAKER")
	print("=" * 60)

	mosaic = assemble_mosaic(
		TARGET_IMAGE,
		IMAGE_FOLDER=IMAGE_FOLDER,
		tile_size=TILE_SIZE,
		output_file=OUTPUT_FILE,
		max_target_size=MAX_TARGET_SIZE,
		distance_threshold=DISTANCE_THRESHOLD,
		min_bucket_size=MIN_BUCKET_SIZE,
		max_bucket_size=MAX_BUCKET_SIZE,
		merge_threshold=MERGE_THRESHOLD,
		overlay_opacity=OVERLAY_OPACITY,
	)

	if mosaic is not None:
		print("\n" + "=" * 60)
		print(f"✓ Mosaic saved to: {OUTPUT_FILE}")
		print("=" * 60)
