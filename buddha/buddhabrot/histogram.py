import numpy as np
from numba import njit

from buddha.buddhabrot.mapping import coord_to_pixel
from buddha.utils.buddhabrot_utils import PlaneRegion


def new_histogram(size: int):
    return np.zeros((size, size), dtype=np.int64, order="C")


def accumulate(histogram: np.ndarray, orbit: np.ndarray, region: PlaneRegion):
    accumulate_orbit(histogram, orbit, orbit.shape[0], *region.bounds())


@njit(nogil=True)
def accumulate_orbit(histogram, orbit, length, min_r, max_r, min_i, max_i):
    rows, cols = histogram.shape
    plotted = 0
    for k in range(length):
        point = orbit[k]
        if not (min_r <= point.real and point.real <= max_r and min_i <= point.imag and point.imag <= max_i):
            continue

        # rows follow the real axis so the figure is drawn upright
        row = coord_to_pixel(point.real, min_r, max_r, rows)
        col = coord_to_pixel(point.imag, min_i, max_i, cols)
        # points on the maximum edge land one past the last pixel
        histogram[min(row, rows - 1), min(col, cols - 1)] += 1
        plotted += 1

    return plotted
