"""Frame sources: video files and live cameras via OpenCV."""

import cv2


def open_video_source(source):
	"""
	Open a video file or camera.

	Args:
	    source: Path to a video file, or an int camera index (e.g. 0)

	Returns:
	    Opened cv2.VideoCapture

	Raises:
	    OSError: if the source cannot be opened
	"""
	capture = cv2.VideoCapture(source)
	if not capture.isOpened():
		capture.release()
		raise OSError(f"Cannot open video source: {source!r}")
	return capture


def source_properties(capture):
	"""fps, frame count (0 for live streams), width and height of a capture."""
	return {
		"fps": capture.get(cv2.CAP_PROP_FPS) or 30.0,
		"frame_count": max(0, int(capture.get(cv2.CAP_PROP_FRAME_COUNT))),
		"width": int(capture.get(cv2.CAP_PROP_FRAME_WIDTH)),
		"height": int(capture.get(cv2.CAP_PROP_FRAME_HEIGHT)),
	}


def iter_frames(capture, max_frames=None):
	"""
	Yield RGB frames until the source ends or max_frames is reached.

	The capture is released when iteration stops.
	"""
	count = 0
	try:
		while max_frames is None or count < max_frames:
			ok, frame = capture.read()
			if not ok or frame is None:
				break
			yield cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
			count += 1
	finally:
		capture.release()
