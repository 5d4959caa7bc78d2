import numpy as np
import pytest
from pyrtdose.utils.interpolation import Interpolator


@pytest.fixture
def peaked_curve():
    # Rising then falling, like a Bragg curve
    depth = np.array([0.0, 1.0, 2.0, 3.0, 4.0])
    dose = np.array([20.0, 40.0, 100.0, 40.0, 0.0])
    return depth, dose


def test_interpolate_dose_at_depth(peaked_curve):
    depth, dose = peaked_curve
    interp = Interpolator(depth, dose)
    result = interp.interpolate(depth=[0.5, 2.5])
    np.testing.assert_allclose(result, [30.0, 70.0])


def test_interpolate_depth_for_dose_multiple_crossings(peaked_curve):
    depth, dose = peaked_curve
    interp = Interpolator(depth, dose)
    result = interp.interpolate(dose=70.0)
    assert isinstance(result, dict)
    assert 70.0 in result
    np.testing.assert_allclose(result[70.0], [1.5, 2.5])


def test_interpolate_depth_for_dose_at_peak_reported_once(peaked_curve):
    depth, dose = peaked_curve
    interp = Interpolator(depth, dose)
    result = interp.interpolate(dose=100.0)
    np.testing.assert_allclose(result[100.0], [2.0])


def test_interpolate_monotonic_curve():
    depth = np.array([0.0, 1.0, 2.0])
    dose = np.array([100.0, 50.0, 0.0])
    interp = Interpolator(depth, dose)
    result = interp.interpolate(dose=[50.0, 25.0])
    np.testing.assert_allclose(result[50.0], [1.0])
    np.testing.assert_allclose(result[25.0], [1.5])


def test_out_of_bounds_depth(peaked_curve):
    interp = Interpolator(*peaked_curve)
    with pytest.raises(ValueError, match="out of bounds"):
        interp.interpolate(depth=[-1.0, 5.0])


def test_out_of_bounds_dose(peaked_curve):
    interp = Interpolator(*peaked_curve)
    with pytest.raises(ValueError, match="out of bounds"):
        interp.interpolate(dose=[150.0])


def test_both_inputs_raise(peaked_curve):
    interp = Interpolator(*peaked_curve)
    with pytest.raises(ValueError, match="Provide only one"):
        interp.interpolate(depth=[1.0], dose=[50.0])


def test_no_input_raises(peaked_curve):
    interp = Interpolator(*peaked_curve)
    with pytest.raises(ValueError, match="must provide either"):
        interp.interpolate()


def test_invalid_construction():
    with pytest.raises(ValueError, match="same shape"):
        Interpolator([0.0, 1.0], [1.0])
    with pytest.raises(ValueError, match="At least two"):
        Interpolator([0.0], [1.0])
