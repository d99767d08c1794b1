"""Color distance and averaging helpers."""

import math


def color_distance(color_a, color_b):
	"""
	Euclidean distance between two RGB triples.

	Args:
	    color_a: (r, g, b) tuple
	    color_b: (r, g, b) tuple

	Returns:
	    Distance as a float
	"""
	dr = color_a[0] - color_b[0]
	dg = color_a[1] - color_b[1]
	db = color_a[2] - color_b[2]
	return math.sqrt(dr * dr + dg * dg + db * db)


def mean_color(colors):
	"""
	Component-wise mean of RGB triples, each channel rounded to the nearest int.

	Rounding is Python round(), so exact halves go to the even value:
	the mean of 0 and 1 is 0, the mean of 1 and 2 is 2.

	Args:
	    colors: Non-empty sequence of (r, g, b) tuples

	Returns:
	    (r, g, b) tuple of ints
	"""
	count = len(colors)
	totals = [0, 0, 0]
	for r, g, b in colors:
		totals[0] += r
		totals[1] += g
		totals[2] += b
	return tuple(int(round(total / count)) for total in totals)
