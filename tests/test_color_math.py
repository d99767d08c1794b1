import pytest

from bucket_mosaic.color_math import color_distance, mean_color


def test_color_distance():
	assert color_distance((0, 0, 0), (2, 2, 2)) == pytest.approx(3.4641, abs=1e-4)
	assert color_distance((0, 0, 0), (255, 255, 255)) == pytest.approx(441.673, abs=1e-3)
	assert color_distance((7, 8, 9), (7, 8, 9)) == 0


def test_mean_color_rounds_to_nearest():
	assert mean_color([(0, 0, 0), (4, 6, 8)]) == (2, 3, 4)
	assert mean_color([(0, 0, 0), (4, 6, 8), (5, 0, 1)]) == (3, 4, 4)
	assert mean_color([(10, 10, 10)] * 5 + [(12, 12, 12)] * 6) == (11, 11, 11)


def test_mean_color_halves_round_to_even():
	assert mean_color([(0, 0, 0), (1, 1, 1)]) == (0, 0, 0)
	assert mean_color([(1, 2, 3), (2, 3, 4)]) == (2, 2, 4)
