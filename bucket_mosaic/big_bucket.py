"""
Top-level color index.

Elements are routed into Buckets while tiles are loaded, bucket sizes are
rebalanced once after loading, and every output tile then asks for the
closest element: closest bucket first, then the closest element inside it.
A query costs O(buckets) + O(bucket size), independent of the corpus size.
"""

import math

import numpy as np

from bucket_mosaic.bucket import Bucket
from bucket_mosaic.color_math import color_distance
from bucket_mosaic.errors import (
	DuplicateElementError,
	EmptyIndexError,
	IndexStateError,
	InvalidConfigurationError,
)

DEFAULT_DISTANCE_THRESHOLD = 10.0
DEFAULT_MIN_BUCKET_SIZE = 5
DEFAULT_MAX_BUCKET_SIZE = 40
DEFAULT_MERGE_THRESHOLD = 30.0


def validate_config(distance_threshold, min_bucket_size, max_bucket_size, merge_threshold):
	"""Raise InvalidConfigurationError for settings that cannot build an index."""
	if distance_threshold is None or distance_threshold <= 0:
		raise InvalidConfigurationError(f"distance_threshold must be positive, got {distance_threshold}")
	if merge_threshold is None or merge_threshold <= 0:
		raise InvalidConfigurationError(f"merge_threshold must be positive, got {merge_threshold}")
	for name, value in (("min_bucket_size", min_bucket_size), ("max_bucket_size", max_bucket_size)):
		if not isinstance(value, int) or isinstance(value, bool) or value < 1:
			raise InvalidConfigurationError(f"{name} must be a positive integer, got {value!r}")
	if min_bucket_size > max_bucket_size:
		raise InvalidConfigurationError(
			f"min_bucket_size ({min_bucket_size}) is larger than max_bucket_size ({max_bucket_size})"
		)


def split_sizes(size, max_size):
	"""
	Slice lengths used to split an oversized bucket.

	Uses ceil(size / max_size) slices of round(size / splits) elements, the
	last slice taking the remainder. When that would leave a last slice
	that is empty or above max_size, falls back to nearly-equal slices with
	the larger ones at the end.

	Args:
	    size: Number of elements in the bucket
	    max_size: Largest allowed bucket size

	Returns:
	    List of slice lengths summing to size
	"""
	splits = math.ceil(size / max_size)
	if splits <= 1:
		return [size]

	slice_size = int(round(size / splits))
	last = size - slice_size * (splits - 1)
	if 0 < last <= max_size:
		return [slice_size] * (splits - 1) + [last]

	base, extra = divmod(size, splits)
	return [base + 1 if i >= splits - extra else base for i in range(splits)]


class BigBucket:
	"""
	Owns every Bucket and answers closest-element queries.

	Args:
	    distance_threshold: Max distance for joining an existing bucket at load time
	    min_bucket_size: Buckets smaller than this are merge candidates when balancing
	    max_bucket_size: Buckets larger than this are split when balancing
	    merge_threshold: Max distance between two small buckets' averages to merge them
	    thread_safe: Give each bucket a lock so closest() can be called from several threads
	"""

	def __init__(
		self,
		distance_threshold=DEFAULT_DISTANCE_THRESHOLD,
		min_bucket_size=DEFAULT_MIN_BUCKET_SIZE,
		max_bucket_size=DEFAULT_MAX_BUCKET_SIZE,
		merge_threshold=DEFAULT_MERGE_THRESHOLD,
		thread_safe=False,
	):
		validate_config(distance_threshold, min_bucket_size, max_bucket_size, merge_threshold)
		self.distance_threshold = distance_threshold
		self.min_bucket_size = min_bucket_size
		self.max_bucket_size = max_bucket_size
		self.merge_threshold = merge_threshold
		self.thread_safe = thread_safe

		self._buckets = []
		self._elements = []  # arena, position == element_id
		self._element_ids = set()
		self._centers = None  # cached (n_buckets, 3) array of bucket averages
		self._balanced = False

	def __len__(self):
		return len(self._buckets)

	@property
	def buckets(self):
		return list(self._buckets)

	@property
	def elements(self):
		return list(self._elements)

	@property
	def balanced(self):
		return self._balanced

	def _new_bucket(self, elements):
		return Bucket(elements, thread_safe=self.thread_safe)

	def _bucket_centers(self):
		if self._centers is None:
			self._centers = np.array([bucket.avg_color for bucket in self._buckets], dtype=np.float64).reshape(-1, 3)
		return self._centers

	def _closest_bucket_index(self, target_color):
		centers = self._bucket_centers()
		diff = centers - np.asarray(target_color, dtype=np.float64)
		distances = np.sqrt(np.sum(diff * diff, axis=1))
		# argmin returns the first minimum, so earlier buckets win ties
		index = int(np.argmin(distances))
		return index, float(distances[index])

	def add_element(self, element):
		"""
		Route a freshly loaded element into a bucket.

		Joins the nearest bucket when its average is within
		distance_threshold, otherwise opens a new single-element bucket.
		Placement is greedy and never revisited.

		Returns:
		    The Bucket the element was placed in
		"""
		if self._balanced:
			raise IndexStateError("buckets are frozen after balance_buckets()")
		if id(element) in self._element_ids:
			raise DuplicateElementError(f"{element!r} is already in the index")

		element.element_id = len(self._elements)
		self._elements.append(element)
		self._element_ids.add(id(element))

		if not self._buckets:
			bucket = self._new_bucket([element])
			self._buckets.append(bucket)
			self._centers = None
			return bucket

		index, distance = self._closest_bucket_index(element.color)
		if distance <= self.distance_threshold:
			bucket = self._buckets[index]
			bucket.add(element)
			self._centers[index] = bucket.avg_color
		else:
			bucket = self._new_bucket([element])
			self._buckets.append(bucket)
			self._centers = None
		return bucket

	def get_closest_bucket(self, target_color):
		"""Bucket whose average color is nearest to target_color."""
		if not self._buckets:
			raise EmptyIndexError("the index has no elements yet")
		index, _ = self._closest_bucket_index(target_color)
		return self._buckets[index]

	def get_closest_element(self, target_color):
		"""Element chosen for one output tile of color target_color."""
		return self.get_closest_bucket(target_color).closest(target_color)

	def balance_buckets(self, min_size=None, max_size=None, merge_threshold=None):
		"""
		Split oversized buckets, then merge undersized ones. Runs once.

		Splitting slices an oversized bucket in insertion order, not by
		color. Merging is a single greedy pass: a bucket produced by a merge
		is not examined again. Merging is not size-capped, so a merge of
		many small buckets may end up larger than max_size.

		Args:
		    min_size: Defaults to min_bucket_size
		    max_size: Defaults to max_bucket_size
		    merge_threshold: Defaults to the configured merge_threshold

		Returns:
		    Dict of counts: split, created_by_split, merged, created_by_merge, bucket_count
		"""
		if self._balanced:
			raise IndexStateError("balance_buckets() has already run on this index")

		min_size = self.min_bucket_size if min_size is None else min_size
		max_size = self.max_bucket_size if max_size is None else max_size
		merge_threshold = self.merge_threshold if merge_threshold is None else merge_threshold
		validate_config(self.distance_threshold, min_size, max_size, merge_threshold)

		stats = {"split": 0, "created_by_split": 0, "merged": 0, "created_by_merge": 0}
		self._split_oversized(max_size, stats)
		self._merge_undersized(min_size, merge_threshold, stats)

		self._centers = None
		self._balanced = True
		stats["bucket_count"] = len(self._buckets)
		return stats

	def _split_oversized(self, max_size, stats):
		rebuilt = []
		for bucket in self._buckets:
			if len(bucket) <= max_size:
				rebuilt.append(bucket)
				continue

			members = bucket.elements
			start = 0
			for length in split_sizes(len(members), max_size):
				rebuilt.append(self._new_bucket(members[start:start + length]))
				start += length
				stats["created_by_split"] += 1
			stats["split"] += 1
		self._buckets = rebuilt

	def _merge_undersized(self, min_size, merge_threshold, stats):
		candidates = [bucket for bucket in self._buckets if len(bucket) < min_size]
		merged = set()

		for position, seed in enumerate(candidates):
			if id(seed) in merged:
				continue

			matches = [
				other
				for other in candidates[position + 1:]
				if id(other) not in merged
				and color_distance(seed.avg_color, other.avg_color) <= merge_threshold
			]
			if not matches:
				continue

			participants = [seed] + matches
			members = []
			for bucket in participants:
				members.extend(bucket.elements)
			merged.update(id(bucket) for bucket in participants)

			self._buckets = [bucket for bucket in self._buckets if id(bucket) not in merged]
			self._buckets.append(self._new_bucket(members))
			stats["merged"] += len(participants)
			stats["created_by_merge"] += 1

	def summarize(self):
		"""Bucket count plus each bucket's average color and size. Read only."""
		return {
			"bucket_count": len(self._buckets),
			"element_count": sum(len(bucket) for bucket in self._buckets),
			"buckets": [{"avg_color": bucket.avg_color, "size": len(bucket)} for bucket in self._buckets],
		}

	def print_summary(self, limit=None):
		"""Print the summary, listing at most `limit` buckets (None = all)."""
		summary = self.summarize()
		print("\n=== INDEX SUMMARY ===")
		print(f"Buckets: {summary['bucket_count']}")
		print(f"Elements: {summary['element_count']}")
		if summary["bucket_count"]:
			sizes = [entry["size"] for entry in summary["buckets"]]
			print(f"  Bucket size: min {min(sizes)}, max {max(sizes)}, mean {np.mean(sizes):.1f}")

		shown = summary["buckets"] if limit is None else summary["buckets"][:limit]
		for number, entry in enumerate(shown):
			print(f"  [{number}] avg_color={entry['avg_color']} size={entry['size']}")
		hidden = summary["bucket_count"] - len(shown)
		if hidden > 0:
			print(f"  ... {hidden} more buckets")
