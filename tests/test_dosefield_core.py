import pytest
import numpy as np

from pyrtdose.dosefield import DoseField, DoseFieldParameters
from pyrtdose.physics.anatomy import TissueModel


# Automatically redirect Path.home() to tmp_path to avoid polluting ~/.pyRTDose
@pytest.fixture(autouse=True)
def redirect_home_to_tmp(tmp_path, monkeypatch):
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)


@pytest.fixture
def small_params():
    return DoseFieldParameters(resolution=41, modalities=("proton", "electron"))


# --- DoseFieldParameters ---
def test_parameters_defaults():
    params = DoseFieldParameters()
    assert params.body_diameter == 9.0
    assert params.tumor_radius == 3.0
    assert params.skin_thickness == 1.5
    assert params.resolution == 512
    assert params.modalities == ("photon", "proton", "electron")
    assert isinstance(params.tissue_model(), TissueModel)


def test_parameters_from_dict():
    params = DoseFieldParameters.from_dict({"tumor_radius": 2.0, "modalities": ["Proton"]})
    assert params.tumor_radius == 2.0
    assert params.modalities == ("proton",)


def test_parameters_from_dict_raises_on_extra_keys():
    with pytest.raises(ValueError, match="Unrecognized keys"):
        DoseFieldParameters.from_dict({"tumor_radius": 2.0, "dose_rate": 1.0})


@pytest.mark.parametrize("kwargs, message", [
    ({"resolution": 1}, "resolution"),
    ({"modalities": ("neutron",)}, "Unsupported modalities"),
    ({"modalities": ()}, "At least one modality"),
    ({"beam_options": {"carbon": {}}}, "unknown modalities"),
    ({"tumor_radius": -1.0}, "tumor_radius"),
])
def test_parameters_validation(kwargs, message):
    with pytest.raises(ValueError, match=message):
        DoseFieldParameters(**kwargs)


# --- DoseField ---
def test_dosefield_rejects_wrong_parameters():
    with pytest.raises(TypeError, match="DoseFieldParameters"):
        DoseField(parameters={"resolution": 64})


def test_dosefield_initial_state(small_params):
    field = DoseField(small_params)
    assert field.fields == {}
    assert field.X is None
    assert "computed=none" in repr(field)
    assert field.spacing == pytest.approx(9.0 / 40)


def test_get_field_requires_compute(small_params):
    field = DoseField(small_params)
    with pytest.raises(ValueError, match="No computed dose fields"):
        field.get_field("proton")


def test_get_field_missing_modality(small_params):
    field = DoseField(small_params)
    field.compute(["proton"])
    with pytest.raises(ValueError, match="not found in computed fields"):
        field.get_field("electron")


def test_summary_output(capsys, small_params):
    field = DoseField(small_params)
    field.summary(verbose=True)
    out = capsys.readouterr().out
    assert "DoseField Configuration" in out
    assert "Tumor radius [cm]" in out
    assert "defaults" in out


def test_display_requires_compute(small_params):
    with pytest.raises(ValueError, match="No computed dose fields"):
        DoseField(small_params).display()


def test_display_output(capsys, small_params):
    field = DoseField(small_params)
    field.compute()
    field.display()
    out = capsys.readouterr().out
    assert "Computed Dose Fields" in out
    assert "Proton (150 MeV)" in out
    assert "Peak depth on central axis" in out


# --- Save / load ---
def test_save_requires_compute(small_params):
    with pytest.raises(ValueError, match="Cannot save"):
        DoseField(small_params).save()


def test_save_default_location(tmp_path, small_params):
    field = DoseField(small_params)
    field.compute()
    path = field.save()
    assert path.exists()
    assert path.parent == tmp_path / ".pyRTDose" / "pkl"
    assert path.name.startswith("dosefield_proton-electron_")


def test_save_and_load_roundtrip(tmp_path, capsys, small_params):
    field = DoseField(small_params)
    field.compute()
    path = field.save(tmp_path / "fields.pkl")

    restored = DoseField()
    restored.load(path)
    out = capsys.readouterr().out
    assert "saved to" in out and "loaded from" in out

    assert restored.params.resolution == 41
    assert restored.X.shape == (41, 41)
    assert set(restored.fields) == {"proton", "electron"}
    np.testing.assert_allclose(restored.get_field("proton"), field.get_field("proton"))
    for values in restored.fields.values():
        assert not values.flags.writeable
    with pytest.raises(ValueError):
        restored.fields["electron"][0, 0] = 1.0


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        DoseField().load(tmp_path / "missing.pkl")
