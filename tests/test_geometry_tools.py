import numpy as np
import pytest
from pyrtdose.utils.geometry_tools import GeometryTools


def test_build_grid_shapes_and_range():
    x, y, X, Y = GeometryTools.build_grid(9.0, 11)
    assert x.shape == (11,)
    assert X.shape == (11, 11)
    assert x[0] == pytest.approx(-4.5)
    assert x[-1] == pytest.approx(4.5)
    # rows follow y, columns follow x
    np.testing.assert_allclose(X[0], x)
    np.testing.assert_allclose(Y[:, 0], y)


def test_build_grid_is_read_only():
    x, y, X, Y = GeometryTools.build_grid(2.0, 5)
    with pytest.raises(ValueError):
        X[0, 0] = 1.0


@pytest.mark.parametrize("extent, resolution", [(0.0, 10), (-1.0, 10), (5.0, 1), (5.0, 2.5)])
def test_build_grid_invalid_inputs(extent, resolution):
    with pytest.raises(ValueError):
        GeometryTools.build_grid(extent, resolution)


def test_disc_mask_includes_edge():
    X = np.array([[0.0, 1.0, 2.0]])
    Y = np.zeros_like(X)
    mask = GeometryTools.disc_mask(X, Y, radius=1.0)
    np.testing.assert_array_equal(mask, [[True, True, False]])


def test_disc_mask_offset_center():
    X = np.array([[0.0, 1.0, 2.0]])
    Y = np.zeros_like(X)
    mask = GeometryTools.disc_mask(X, Y, radius=0.5, center=(2.0, 0.0))
    np.testing.assert_array_equal(mask, [[False, False, True]])


def test_disc_mask_negative_radius():
    with pytest.raises(ValueError, match="non-negative"):
        GeometryTools.disc_mask(np.zeros(3), np.zeros(3), radius=-1.0)


def test_gaussian_lateral_profile():
    x = np.array([0.0, 1.0, -1.0])
    profile = GeometryTools.gaussian_lateral_profile(x, sigma=1.0)
    assert profile[0] == pytest.approx(1.0)
    assert profile[1] == pytest.approx(np.exp(-0.5))
    assert profile[1] == pytest.approx(profile[2])


def test_gaussian_lateral_profile_invalid_sigma():
    with pytest.raises(ValueError, match="sigma"):
        GeometryTools.gaussian_lateral_profile([0.0], sigma=0.0)


def test_depth_from_surface():
    Y = np.array([4.5, 0.0, -4.5])
    np.testing.assert_allclose(GeometryTools.depth_from_surface(Y, 4.5), [0.0, 4.5, 9.0])
