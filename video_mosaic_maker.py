"""
Video Mosaic Maker - Turn a video file or webcam stream into a photo mosaic video

Each frame is cut into tiles and every tile is replaced by the best
matching photo from the tile folder. Audio is not copied.
"""

from bucket_mosaic.video_mosaic import process_video

# ==================== CONFIGURATION ====================

# Video file path, or a camera index such as 0 for the default webcam
VIDEO_SOURCE = "input.mp4"

# Folder containing the photos to use as mosaic tiles
TILES_FOLDER = "tiles"

# Output video (mp4)
OUTPUT_FILE = "mosaic_video.mp4"

# Edge length of each square tile in pixels
TILE_SIZE = 16

# Stop after this many frames (None = whole video; set a limit for webcams)
MAX_FRAMES = None

# Output frame rate (None = same as the source)
OUTPUT_FPS = None

# Color index settings (see mosaic_maker.py)
INDEX_SETTINGS = {
	"distance_threshold": 10.0,
	"min_bucket_size": 5,
	"max_bucket_size": 40,
	"merge_threshold": 30.0,
}

# Source frame overlay (0.0 to 1.0)
OVERLAY_OPACITY = 0.0

# ======================================================

if __name__ == "__main__":
	print("=" * 60)
	print("VIDEO MOSAIC MAKER")
	print("=" * 60)

	frames = process_video(
		VIDEO_SOURCE,
		tiles_folder=TILES_FOLDER,
		output_path=OUTPUT_FILE,
		tile_size=TILE_SIZE,
		overlay_opacity=OVERLAY_OPACITY,
		max_frames=MAX_FRAMES,
		fps=OUTPUT_FPS,
		index_settings=INDEX_SETTINGS,
	)

	if frames:
		print("\n" + "=" * 60)
		print(f"✓ {frames} frames saved to: {OUTPUT_FILE}")
		print("=" * 60)
