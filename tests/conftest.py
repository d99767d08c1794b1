import numpy as np
import pytest
from PIL import Image

from bucket_mosaic.element import Element


@pytest.fixture
def make_element():
	"""Factory: make_element((r, g, b), image=None) -> Element"""
	counter = {"n": 0}

	def _make(color, image=None):
		counter["n"] += 1
		return Element(*color, image if image is not None else f"img-{counter['n']}")

	return _make


@pytest.fixture
def solid_tile():
	"""Factory for solid-color square PIL tiles."""

	def _make(color, size=4):
		return Image.new("RGB", (size, size), color)

	return _make


@pytest.fixture
def two_color_frame():
	"""8x8 RGB frame: left half red, right half blue."""
	frame = np.zeros((8, 8, 3), dtype=np.uint8)
	frame[:, :4] = (255, 0, 0)
	frame[:, 4:] = (0, 0, 255)
	return frame
