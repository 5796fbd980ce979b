import math

from numba import njit

from buddha.utils.constants import BULB_R2, CARDIOID_OFFSET


@njit
def in_main_cardioid(c_real, c_imag):
    p = math.sqrt((c_real - CARDIOID_OFFSET) * (c_real - CARDIOID_OFFSET) + c_imag * c_imag)
    return c_real <= p - 2 * p * p + CARDIOID_OFFSET


@njit
def in_period2_bulb(c_real, c_imag):
    return (c_real + 1) * (c_real + 1) + c_imag * c_imag <= BULB_R2


@njit
def is_rejected(c_real, c_imag):
    """Points inside the main cardioid or the period-2 bulb never escape, so they are never worth iterating."""
    return in_main_cardioid(c_real, c_imag) or in_period2_bulb(c_real, c_imag)
