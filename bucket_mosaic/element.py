"""A candidate tile image and its average color."""

from bucket_mosaic.errors import InvalidColorError


def _check_channel(name, value):
	# numpy integer scalars are accepted and stored as plain ints
	try:
		channel = int(value)
	except (TypeError, ValueError):
		raise InvalidColorError(f"{name} channel must be an integer, got {value!r}") from None
	if channel != value or not 0 <= channel <= 255:
		raise InvalidColorError(f"{name} channel must be in 0-255, got {value!r}")
	return channel


class Element:
	"""
	One candidate image with its precomputed average color.

	The color never changes after construction. use_count is owned by
	whichever Bucket currently holds the element.
	"""

	__slots__ = ("_color", "image", "use_count", "element_id")

	def __init__(self, r, g, b, image, element_id=None):
		self._color = (
			_check_channel("red", r),
			_check_channel("green", g),
			_check_channel("blue", b),
		)
		self.image = image
		self.use_count = 0
		self.element_id = element_id

	@classmethod
	def from_color(cls, color, image):
		"""Build an element from an (r, g, b) sequence."""
		r, g, b = color
		return cls(r, g, b, image)

	@property
	def color(self):
		return self._color

	def __repr__(self):
		return f"Element(id={self.element_id}, color={self._color}, use_count={self.use_count})"
