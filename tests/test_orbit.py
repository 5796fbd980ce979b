import numpy as np
import pytest

from buddha.buddhabrot.orbit import sq_mod, trace_orbit, trace_orbit_into
from buddha.utils.constants import BREAKOUT_R2


def test_sq_mod():
    assert sq_mod(complex(3, 4)) == 25.0


def test_immediate_escape():
    orbit = trace_orbit(complex(2, 2), 5)
    assert orbit.shape == (1,)
    assert orbit[0] == complex(2, 2)


def test_non_escaping_point_gives_empty_orbit():
    assert trace_orbit(0j, 50).shape == (0,)
    assert trace_orbit(complex(-1, 0), 50).shape == (0,)


def test_zero_iteration_bound_gives_empty_orbit():
    assert trace_orbit(complex(2, 2), 0).shape == (0,)


def test_orbit_of_length_bound_is_discarded():
    # c = 1 visits 1, 2 so it needs exactly two iterations to break out
    assert trace_orbit(complex(1, 0), 3).tolist() == [1, 2]
    assert trace_orbit(complex(1, 0), 2).shape == (0,)


def test_orbit_is_full_history():
    c = complex(0.5, 0.5)
    orbit = trace_orbit(c, 100)
    expected = []
    z = 0j
    for _ in range(orbit.size):
        z = z * z + c
        expected.append(z)
    assert orbit.size == 3
    np.testing.assert_allclose(orbit, expected, rtol=1e-12)


@pytest.mark.parametrize("c", [complex(0.3, 0.1), complex(-1.8, 0.05), complex(0.1, 0.9), complex(-0.75, 0.2)])
def test_escape_invariant(c):
    max_iter = 200
    orbit = trace_orbit(c, max_iter)
    if orbit.size == 0:
        return
    assert orbit.size < max_iter
    assert sq_mod(orbit[-1]) > BREAKOUT_R2
    assert all(sq_mod(point) <= BREAKOUT_R2 for point in orbit[:-1])


def test_tracing_is_deterministic():
    c = complex(-1.8, 0.05)
    first = trace_orbit(c, 500)
    second = trace_orbit(c, 500)
    np.testing.assert_array_equal(first, second)


def test_trace_into_reuses_buffer():
    buffer = np.zeros(10, dtype=np.complex128)
    assert trace_orbit_into(complex(2, 2), 10, buffer) == 1
    assert buffer[0] == complex(2, 2)
    assert trace_orbit_into(0j, 10, buffer) == 0


def test_orbit_on_escape_radius_never_escapes():
    # i cycles through -1 + i whose squared magnitude is exactly the breakout value
    assert trace_orbit(1j, 1000).shape == (0,)
