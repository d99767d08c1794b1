"""Load phase: stream tiles into a BigBucket and balance it once."""

from tqdm import tqdm

from bucket_mosaic.big_bucket import (
	BigBucket,
	DEFAULT_DISTANCE_THRESHOLD,
	DEFAULT_MAX_BUCKET_SIZE,
	DEFAULT_MERGE_THRESHOLD,
	DEFAULT_MIN_BUCKET_SIZE,
)
from bucket_mosaic.element import Element


def build_index(
	tiles,
	distance_threshold=DEFAULT_DISTANCE_THRESHOLD,
	min_bucket_size=DEFAULT_MIN_BUCKET_SIZE,
	max_bucket_size=DEFAULT_MAX_BUCKET_SIZE,
	merge_threshold=DEFAULT_MERGE_THRESHOLD,
	thread_safe=False,
	verbose=True,
):
	"""
	Build a balanced index from loaded tiles.

	Args:
	    tiles: Iterable of (avg_rgb, image) pairs from the tile loader
	    distance_threshold: Max distance for joining an existing bucket
	    min_bucket_size: Merge buckets smaller than this when balancing
	    max_bucket_size: Split buckets larger than this when balancing
	    merge_threshold: Max distance between small buckets to merge them
	    thread_safe: Lock each bucket for concurrent queries
	    verbose: Print progress and the index summary

	Returns:
	    The balanced BigBucket
	"""
	index = BigBucket(
		distance_threshold=distance_threshold,
		min_bucket_size=min_bucket_size,
		max_bucket_size=max_bucket_size,
		merge_threshold=merge_threshold,
		thread_safe=thread_safe,
	)

	for avg_rgb, image in tqdm(tiles, desc="Indexing tiles", disable=not verbose):
		index.add_element(Element.from_color(avg_rgb, image))

	if verbose:
		print(f"\nBuckets after loading: {len(index)}")

	stats = index.balance_buckets()

	if verbose:
		print("Balancing buckets...")
		print(f"  Split {stats['split']} oversized buckets into {stats['created_by_split']}")
		print(f"  Merged {stats['merged']} undersized buckets into {stats['created_by_merge']}")
		index.print_summary(limit=10)

	return index
