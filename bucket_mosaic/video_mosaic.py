"""Frame-by-frame mosaic rendering for video files and cameras."""

import os

import cv2
import numpy as np
from tqdm import tqdm

from bucket_mosaic.assemble_mosaic import render_mosaic
from bucket_mosaic.canvas_utils import apply_overlay
from bucket_mosaic.image_loader import load_tile_images
from bucket_mosaic.index_builder import build_index
from bucket_mosaic.target_analyzer import compute_tile_grid
from bucket_mosaic.video_source import iter_frames, open_video_source, source_properties


def render_frame(index, frame, tile_size, overlay_opacity=0.0):
	"""
	Render one RGB frame as a mosaic.

	Returns:
	    (H, W, 3) uint8 RGB array, cropped to whole tiles
	"""
	grid = compute_tile_grid(frame, tile_size)
	canvas, _ = render_mosaic(index, grid, tile_size)
	if overlay_opacity > 0:
		rows, cols = grid.shape[:2]
		canvas = apply_overlay(canvas, frame[: rows * tile_size, : cols * tile_size], overlay_opacity)
	return np.array(canvas)


def process_video(
	source,
	tiles_folder="tiles",
	output_path="mosaic_video.mp4",
	tile_size=16,
	overlay_opacity=0.0,
	max_frames=None,
	fps=None,
	index_settings=None,
	index=None,
):
	"""
	Render every frame of a video source and write an mp4.

	Args:
	    source: Video file path or camera index
	    tiles_folder: Folder containing candidate tile images
	    output_path: Output video path
	    tile_size: Edge length of each tile in pixels
	    overlay_opacity: Opacity of the source frame blended over each mosaic
	    max_frames: Stop after this many frames (required for endless camera streams)
	    fps: Output frame rate (defaults to the source's)
	    index_settings: Optional dict of build_index keyword arguments
	    index: Reuse an already built index instead of loading tiles_folder

	Returns:
	    Number of frames written, or None if nothing could be rendered
	"""
	capture = open_video_source(source)
	frames_written = 0
	try:
		props = source_properties(capture)
		print(f"  Video: {props['width']}x{props['height']}, {props['frame_count']} frames, {props['fps']:.1f} fps")

		grid_rows = props["height"] // tile_size
		grid_cols = props["width"] // tile_size
		if grid_rows == 0 or grid_cols == 0:
			print(f"ERROR: video frames are smaller than one {tile_size}px tile")
			return None

		if index is None:
			tiles = load_tile_images(tiles_folder, tile_size)
			if not tiles:
				print("No tile images to process. Exiting.")
				return None
			index = build_index(tiles, **(index_settings or {}))

		out_w = grid_cols * tile_size
		out_h = grid_rows * tile_size
		out_dir = os.path.dirname(output_path)
		if out_dir and not os.path.exists(out_dir):
			os.makedirs(out_dir)

		fourcc = cv2.VideoWriter_fourcc(*"mp4v")
		writer = cv2.VideoWriter(output_path, fourcc, fps or props["fps"], (out_w, out_h), True)

		total = max_frames or props["frame_count"] or None
		try:
			for frame in tqdm(iter_frames(capture, max_frames), total=total, desc="Rendering frames"):
				mosaic = render_frame(index, frame, tile_size, overlay_opacity)
				writer.write(cv2.cvtColor(mosaic, cv2.COLOR_RGB2BGR))
				frames_written += 1
		finally:
			writer.release()
	finally:
		# iter_frames releases on normal exit; this covers errors during setup
		capture.release()

	print(f"  Saved: {output_path} ({frames_written} frames)")
	return frames_written
