import logging
import numpy as np
import pytest

from pyrtdose.physics.scattering import (
    highland_angle,
    moliere_angle,
    rms_angle,
    survival_fraction,
    sample_scattering_angles,
    truncate_survivors,
)


def test_highland_angle_value():
    expected_deg = 14.1 / 150 ** 0.57 * np.sqrt(0.5)
    assert highland_angle(150.0, 0.5) == pytest.approx(np.deg2rad(expected_deg))


def test_highland_angle_energy_floor():
    assert highland_angle(0.0, 1.0) == pytest.approx(highland_angle(0.1, 1.0))


def test_highland_angle_grows_with_length():
    assert highland_angle(150.0, 2.0) > highland_angle(150.0, 1.0)


def test_highland_angle_negative_length():
    with pytest.raises(ValueError, match="non-negative"):
        highland_angle(150.0, -1.0)


def test_moliere_angle_value():
    expected_deg = (13.6 / 10.0) * np.sqrt(1.5) * (1 + 0.038 * np.log(1.5))
    assert moliere_angle(10.0, 1.5) == pytest.approx(np.deg2rad(expected_deg))


def test_moliere_angle_requires_positive_depth():
    with pytest.raises(ValueError, match="positive"):
        moliere_angle(10.0, 0.0)


def test_rms_angle_dispatch():
    assert rms_angle("proton", 150.0, 1.0) == pytest.approx(highland_angle(150.0, 1.0))
    assert rms_angle("Electron", 150.0, 1.0) == pytest.approx(moliere_angle(150.0, 1.0))
    with pytest.raises(ValueError, match="Unsupported particle type"):
        rms_angle("photon", 150.0, 1.0)


def test_survival_fraction():
    assert survival_fraction("proton", 3.0) == pytest.approx(np.exp(-1.0))
    assert survival_fraction("electron", 2.0) == pytest.approx(np.exp(-1.0))


def test_sample_scattering_angles_statistics():
    rng = np.random.default_rng(0)
    theta = np.deg2rad(2.0)
    angles = sample_scattering_angles(theta, 20000, rng)
    assert angles.shape == (20000,)
    assert np.std(angles) == pytest.approx(2.0, rel=0.05)
    assert abs(np.mean(angles)) < 0.1


def test_sample_scattering_angles_reproducible():
    a = sample_scattering_angles(0.01, 10, np.random.default_rng(42))
    b = sample_scattering_angles(0.01, 10, np.random.default_rng(42))
    np.testing.assert_array_equal(a, b)


def test_sample_scattering_angles_negative_count():
    with pytest.raises(ValueError):
        sample_scattering_angles(0.01, -1)


def test_truncate_survivors_count_and_cut():
    angles = np.array([1.0, 60.0, -2.0, 3.0, -70.0, 4.0, 5.0])
    kept = truncate_survivors(angles, "proton", depth=3.0 * np.log(2), n_initial=8)
    # survival fraction 0.5 -> 4 survivors taken after removing |angle| >= 50
    np.testing.assert_array_equal(kept, [1.0, -2.0, 3.0, 4.0])


def test_truncate_survivors_half_up_rounding(monkeypatch):
    monkeypatch.setattr("pyrtdose.physics.scattering.survival_fraction", lambda p, d: 0.5)
    angles = np.zeros(10)
    # 5 * 0.5 = 2.5 rounds to 3
    kept = truncate_survivors(angles, "electron", depth=1.0, n_initial=5)
    assert kept.size == 3


def test_truncate_survivors_short_sample_warns(caplog):
    angles = np.array([1.0, 90.0])
    with caplog.at_level(logging.WARNING, logger="pyrtdose.physics.scattering"):
        kept = truncate_survivors(angles, "proton", depth=0.001, n_initial=2)
    assert kept.size == 1
    assert "samples left" in caplog.text
