"""Exceptions raised by the color bucket index."""


class MosaicIndexError(Exception):
	"""Base class for every error raised by the index."""


class InvalidConfigurationError(MosaicIndexError, ValueError):
	"""Thresholds or bucket sizes that cannot produce a usable index."""


class InvalidColorError(MosaicIndexError, ValueError):
	"""A color channel outside 0-255 or not an integer."""


class EmptyIndexError(MosaicIndexError, LookupError):
	"""Queried the index before any element was inserted."""


class EmptyBucketError(MosaicIndexError, LookupError):
	"""A bucket with no elements. Buckets are never created empty."""


class DuplicateElementError(MosaicIndexError, ValueError):
	"""The same element was inserted twice."""


class IndexStateError(MosaicIndexError, RuntimeError):
	"""Operation not allowed in the current load/query phase."""
