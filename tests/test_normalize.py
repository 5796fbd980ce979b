import numpy as np

from buddha.buddhabrot.normalize import normalize


def test_all_zero_histogram_is_black():
    image = normalize(np.zeros((4, 4), dtype=np.int64))
    assert image.dtype == np.uint8
    assert image.shape == (4, 4)
    assert not image.any()


def test_empty_histogram():
    assert normalize(np.zeros((0, 0), dtype=np.int64)).shape == (0, 0)


def test_maximum_maps_to_white():
    histogram = np.array([[0, 1], [3, 3]], dtype=np.int64)
    image = normalize(histogram)
    assert image[1, 0] == 255
    assert image[1, 1] == 255


def test_intensities_are_floored():
    histogram = np.array([[0, 1, 2, 3]], dtype=np.int64)
    assert normalize(histogram).tolist() == [[0, 85, 170, 255]]
    histogram = np.array([[1, 7]], dtype=np.int64)
    # 255 / 7 = 36.4
    assert normalize(histogram).tolist() == [[36, 255]]


def test_source_histogram_is_untouched():
    histogram = np.array([[2, 4]], dtype=np.int64)
    normalize(histogram)
    assert histogram.tolist() == [[2, 4]]


def test_large_counts_do_not_overflow():
    histogram = np.array([[2 ** 40, 2 ** 41]], dtype=np.int64)
    assert normalize(histogram).tolist() == [[127, 255]]
