import numpy as np
import pandas as pd
import pytest

from pyrtdose.dosefield import DoseField, DoseFieldParameters


@pytest.fixture(scope="module")
def field():
    f = DoseField(DoseFieldParameters(resolution=201))
    f.compute()
    return f


def test_central_axis_index_near_origin(field):
    idx = field.central_axis_index("proton")
    assert abs(field.x[idx]) <= 0.5


def test_central_axis_profile(field):
    profile = field.central_axis_profile("photon")
    assert isinstance(profile, pd.DataFrame)
    assert list(profile.columns) == ["y", "depth", "dose"]
    idx = field.central_axis_index("photon")
    assert len(profile) == field.masks["body"][:, idx].sum()
    assert profile["depth"].is_monotonic_increasing


def test_proton_peak_depth_in_tumor(field):
    # tumor density 1.05 pulls the peak shallower than 4.7 cm
    assert field.peak_depth("proton") == pytest.approx(4.7 / 1.05, abs=0.05)


def test_electron_peak_near_surface(field):
    assert field.peak_depth("electron") < 0.1


def test_photon_peak_below_surface(field):
    peak = field.peak_depth("photon")
    assert 0.2 < peak < 3.0


def test_isodose_depths_proton_bracket_peak(field):
    depths = field.isodose_depths("proton", 50)
    peak = field.peak_depth("proton")
    assert len(depths) == 2
    assert depths[0] < peak < depths[1]
    # distal fall-off is steeper than the proximal rise
    assert depths[1] - peak < peak - depths[0]


def test_isodose_depths_electron(field):
    depths = field.isodose_depths("electron", 50)
    assert len(depths) == 1
    assert depths[0] == pytest.approx(3.855, abs=0.05)


def test_isodose_depths_invalid_level(field):
    with pytest.raises(ValueError, match="within"):
        field.isodose_depths("proton", 120)


def test_isodose_table_levels(field):
    table = field.isodose_table("proton")
    assert set(table) == {50.0, 80.0, 95.0}
    assert all(isinstance(v, np.ndarray) for v in table.values())


def test_dose_statistics_columns(field):
    stats = field.dose_statistics("proton")
    assert list(stats["tissue"]) == ["tumor", "skin", "normal"]
    assert list(stats.columns) == ["tissue", "voxels", "min", "mean", "max", "coverage"]
    tumor = stats.set_index("tissue").loc["tumor"]
    assert tumor["max"] == pytest.approx(100.0)
    assert 0.0 <= tumor["coverage"] <= 1.0


def test_dose_statistics_empty_normal_tissue(field):
    # default skin reaches the body edge, leaving no normal tissue
    stats = field.dose_statistics("photon").set_index("tissue")
    assert stats.loc["normal", "voxels"] == 0
    assert np.isnan(stats.loc["normal", "mean"])


def test_dose_statistics_with_normal_tissue():
    f = DoseField(DoseFieldParameters(body_diameter=12.0, resolution=61, modalities=("electron",)))
    f.compute()
    stats = f.dose_statistics("electron").set_index("tissue")
    assert stats.loc["normal", "voxels"] > 0
    assert stats.loc["normal", "max"] <= 100.0


@pytest.fixture(scope="module")
def even_grid_field():
    # 512 points per axis: no grid column sits exactly on x = 0
    f = DoseField(DoseFieldParameters(modalities=("electron", "proton")))
    f.compute()
    return f


def test_profile_excludes_points_outside_body(even_grid_field):
    profile = even_grid_field.central_axis_profile("electron")
    idx = even_grid_field.central_axis_index("electron")
    assert len(profile) == even_grid_field.masks["body"][:, idx].sum()
    assert profile["dose"].iloc[0] > 95.0


def test_isodose_depths_electron_even_grid(even_grid_field):
    depths = even_grid_field.isodose_depths("electron", 50)
    assert len(depths) == 1
    assert depths[0] == pytest.approx(3.855, abs=0.05)


def test_isodose_depths_proton_even_grid(even_grid_field):
    depths = even_grid_field.isodose_depths("proton", 50)
    assert len(depths) == 2
    assert depths[0] > 3.5
