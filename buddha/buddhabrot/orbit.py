import numpy as np
from numba import njit

from buddha.utils.constants import BREAKOUT_R2


@njit
def sq_mod(point):
    return point.real * point.real + point.imag * point.imag


@njit
def trace_orbit_into(c, max_iter, orbit):
    """
    Iterate z -> z^2 + c from z = 0, writing each iterate into ``orbit``.

    Returns the number of iterates written if the point broke out, or 0 if the
    iteration bound was reached first (the whole orbit is then discarded).
    """
    z = 0j
    i = 0
    while i < max_iter and sq_mod(z) <= BREAKOUT_R2:
        z = z * z + c
        orbit[i] = z
        i += 1

    if i == max_iter:
        return 0
    return i


def trace_orbit(c: complex, max_iter: int) -> np.ndarray:
    orbit = np.empty(max_iter, dtype=np.complex128)
    length = trace_orbit_into(complex(c), max_iter, orbit)
    return orbit[:length].copy()
