import threading

import numpy as np
import pytest

from bucket_mosaic.bucket import REPEAT_CEILING, Bucket
from bucket_mosaic.errors import DuplicateElementError, EmptyBucketError


def test_empty_bucket_is_rejected():
	with pytest.raises(EmptyBucketError):
		Bucket([])


def test_average_tracks_every_add(make_element):
	bucket = Bucket([make_element((0, 0, 0))])
	assert bucket.avg_color == (0, 0, 0)

	bucket.add(make_element((4, 6, 8)))
	assert bucket.avg_color == (2, 3, 4)

	bucket.add(make_element((5, 0, 1)))
	assert bucket.avg_color == (3, 4, 4)
	assert len(bucket) == 3


def test_built_from_list(make_element):
	elements = [make_element((10, 10, 10)), make_element((20, 30, 40))]
	bucket = Bucket(elements)
	assert bucket.avg_color == (15, 20, 25)
	assert bucket.elements == elements
	assert all(element in bucket for element in elements)


def test_duplicate_element_rejected(make_element):
	element = make_element((1, 1, 1))
	bucket = Bucket([element])
	with pytest.raises(DuplicateElementError):
		bucket.add(element)


def test_single_element_always_returned(make_element):
	element = make_element((50, 50, 50))
	bucket = Bucket([element])
	for _ in range(10):
		assert bucket.closest((0, 0, 0)) is element


def test_closest_picks_nearest_and_counts_use(make_element):
	far = make_element((200, 200, 200))
	near = make_element((90, 90, 90))
	bucket = Bucket([far, near])

	assert bucket.closest((100, 100, 100)) is near
	assert near.use_count == 1
	assert far.use_count == 0


def test_ties_keep_first_seen(make_element):
	first = make_element((10, 10, 10))
	second = make_element((10, 10, 10))
	bucket = Bucket([first, second])
	assert bucket.closest((10, 10, 10)) is first


def test_repeat_ceiling_hands_over_to_next_best(make_element):
	colors = [(0, 0, 0), (10, 10, 10), (20, 20, 20), (30, 30, 30)]
	a, b, c, d = [make_element(color) for color in colors]
	bucket = Bucket([a, b, c, d])

	picks = [bucket.closest((0, 0, 0)) for _ in range(REPEAT_CEILING + 1)]

	assert picks[:REPEAT_CEILING] == [a] * REPEAT_CEILING
	assert picks[REPEAT_CEILING] is b
	# passed over once, so penalised by one use
	assert a.use_count == REPEAT_CEILING - 1


def test_exact_match_is_not_repeated_forever(make_element):
	colors = [(0, 0, 0), (10, 10, 10), (20, 20, 20), (30, 30, 30)]
	elements = [make_element(color) for color in colors]
	bucket = Bucket(elements)

	picks = [bucket.closest((0, 0, 0)) for _ in range(30)]

	longest_run = run = 0
	for pick in picks:
		run = run + 1 if pick is elements[0] else 0
		longest_run = max(longest_run, run)
	assert longest_run <= REPEAT_CEILING
	assert len({id(pick) for pick in picks}) > 1
	assert all(element.use_count >= 0 for element in elements)


def test_thread_safe_bucket_serves_concurrent_queries(make_element):
	elements = [make_element((i, i, i)) for i in range(0, 50, 5)]
	bucket = Bucket(elements, thread_safe=True)
	assert bucket.thread_safe

	results = []

	def worker():
		for _ in range(50):
			results.append(bucket.closest((12, 12, 12)))

	threads = [threading.Thread(target=worker) for _ in range(4)]
	for thread in threads:
		thread.start()
	for thread in threads:
		thread.join()

	assert len(results) == 200
	assert all(result in bucket for result in results)
	assert all(element.use_count >= 0 for element in elements)


def test_closest_accepts_numpy_uint8_target(make_element):
	near = make_element((11, 11, 11))
	far = make_element((28, 28, 28))
	bucket = Bucket([far, near])

	assert bucket.closest(np.array([12, 12, 12], dtype=np.uint8)) is near
