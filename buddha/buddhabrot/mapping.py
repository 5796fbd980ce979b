import math

from numba import njit


@njit
def coord_to_pixel(value, lo, hi, resolution):
    # callers are responsible for bounds checking the result
    return int(math.floor((value - lo) * resolution / (hi - lo)))
