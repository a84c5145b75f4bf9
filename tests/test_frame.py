import numpy as np
import pytest

from lajolla.frame import Frame, coordinate_system, to_local, to_world


def _unit(v):
    v = np.asarray(v, dtype=float)
    return v / np.linalg.norm(v)


def test_round_trip_local_world():
    f = Frame.from_normal(_unit([0.3, 0.4, 0.5]))
    v = np.array([-1.0, -2.0, -3.0])
    world_v = to_world(f, to_local(f, v))
    assert np.linalg.norm(v - world_v) <= 1e-3


@pytest.mark.parametrize(
    "n", [[0, 0, 1], [1, 0, 0], [0.3, 0.4, 0.5], [-0.2, 0.9, -0.4], [0, 0, -1]]
)
def test_frame_is_orthonormal(n):
    f = Frame.from_normal(_unit(n))
    basis = np.stack([f[0], f[1], f[2]])
    np.testing.assert_allclose(basis @ basis.T, np.eye(3), atol=1e-9)


def test_coordinate_system_degenerate_case():
    x, y = coordinate_system([0.0, 0.0, -1.0])
    np.testing.assert_array_equal(x, [0.0, -1.0, 0.0])
    np.testing.assert_array_equal(y, [-1.0, 0.0, 0.0])


def test_negated_frame_flips_all_axes():
    f = Frame.from_normal(_unit([0.1, 0.2, 0.9]))
    g = -f
    for a, b in zip(f, g):
        np.testing.assert_allclose(a, -b)


def test_to_local_of_normal_is_z_axis():
    n = _unit([0.5, -0.5, 0.7])
    f = Frame.from_normal(n)
    np.testing.assert_allclose(to_local(f, n), [0.0, 0.0, 1.0], atol=1e-12)


def test_getitem_out_of_range():
    f = Frame.from_normal([0.0, 0.0, 1.0])
    assert np.allclose(f[2], [0.0, 0.0, 1.0])
    assert np.allclose(f[0], [1.0, 0.0, 0.0])
    with pytest.raises(IndexError):
        f[3]