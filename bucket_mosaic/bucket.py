"""A group of elements with similar average color."""

import contextlib
import threading

from bucket_mosaic.color_math import color_distance, mean_color
from bucket_mosaic.errors import DuplicateElementError, EmptyBucketError

# An element picked this many times is passed over for a closer-but-fresher one
REPEAT_CEILING = 3


class Bucket:
	"""
	Unordered collection of elements sharing a cached average color.

	A bucket is always built from at least one element, and avg_color is
	recomputed from the members on every insertion.

	Args:
	    elements: Non-empty iterable of Element objects
	    thread_safe: Serialize closest() calls with a per-bucket lock
	"""

	def __init__(self, elements, thread_safe=False):
		self._elements = []
		self._members = set()
		for element in elements:
			self._append(element)
		if not self._elements:
			raise EmptyBucketError("a bucket needs at least one element")
		self._lock = threading.Lock() if thread_safe else contextlib.nullcontext()
		self.avg_color = None
		self.recompute()

	@property
	def elements(self):
		return list(self._elements)

	@property
	def thread_safe(self):
		return not isinstance(self._lock, contextlib.nullcontext)

	def __len__(self):
		return len(self._elements)

	def __iter__(self):
		return iter(self._elements)

	def __contains__(self, element):
		return id(element) in self._members

	def __repr__(self):
		return f"Bucket(avg_color={self.avg_color}, size={len(self._elements)})"

	def _append(self, element):
		if id(element) in self._members:
			raise DuplicateElementError(f"{element!r} is already in this bucket")
		self._elements.append(element)
		self._members.add(id(element))

	def recompute(self):
		"""Recompute avg_color from the current members."""
		if not self._elements:
			raise EmptyBucketError("cannot average an empty bucket")
		self.avg_color = mean_color([element.color for element in self._elements])
		return self.avg_color

	def add(self, element):
		"""Add an element and refresh the average color."""
		self._append(element)
		self.recompute()

	def closest(self, target_color):
		"""
		Pick the element closest to target_color, avoiding heavy repeats.

		A strictly closer candidate replaces the current best only while its
		use_count is below REPEAT_CEILING or below the best's use_count.
		Otherwise it is penalised by one use and the scan moves on. Ties
		keep the first element seen. If every closer candidate was over-used
		and nothing was accepted, the plain nearest element is returned.

		Args:
		    target_color: (r, g, b) tuple

		Returns:
		    The chosen Element, whose use_count has been incremented
		"""
		if not self._elements:
			raise EmptyBucketError("closest() called on an empty bucket")
		# numpy uint8 channels would wrap around when subtracted
		target_color = tuple(int(c) for c in target_color)

		with self._lock:
			best = None
			best_distance = float("inf")
			nearest = None
			nearest_distance = float("inf")

			for element in self._elements:
				distance = color_distance(element.color, target_color)
				if distance < nearest_distance:
					nearest, nearest_distance = element, distance

				if distance >= best_distance:
					continue

				if element.use_count < REPEAT_CEILING or (
					best is not None and element.use_count < best.use_count
				):
					best, best_distance = element, distance
				else:
					element.use_count -= 1

			if best is None:
				best = nearest
			best.use_count += 1
			return best
