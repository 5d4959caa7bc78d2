import numpy as np
import pytest

from pyrtdose.biology.radiobiology import (
    apply_rbe,
    classify_plan,
    linear_quadratic_survival,
    normal_tissue_complication_probability,
    relative_biological_effectiveness,
    tumor_control_probability,
)


def test_rbe_values():
    assert relative_biological_effectiveness("proton") == 1.2
    assert relative_biological_effectiveness("Electron") == 1.0
    assert apply_rbe(10.0, "proton") == pytest.approx(12.0)
    assert apply_rbe(10.0, "electron") == pytest.approx(10.0)


def test_linear_quadratic_survival():
    assert linear_quadratic_survival(0.0) == pytest.approx(1.0)
    assert linear_quadratic_survival(2.0, 0.3, 0.03) == pytest.approx(np.exp(-0.6 - 0.12))


def test_tcp_limits():
    assert tumor_control_probability(0.0) == pytest.approx(np.exp(-1e9))
    assert tumor_control_probability(200.0) == pytest.approx(1.0)
    doses = np.array([20.0, 22.0, 25.0])
    tcp = tumor_control_probability(doses)
    assert np.all(np.diff(tcp) > 0)


def test_tcp_negative_clonogens():
    with pytest.raises(ValueError, match="clonogens"):
        tumor_control_probability(10.0, clonogens=-1)


def test_ntcp_at_td50():
    assert normal_tissue_complication_probability(60.0) == pytest.approx(0.5)


def test_ntcp_closed_form():
    dose = 30.0
    expected = 1 / (1 + (60.0 / dose) ** 3.0)
    assert normal_tissue_complication_probability(dose) == pytest.approx(expected)


def test_ntcp_range():
    doses = np.array([1e-6, 1.0, 60.0, 1000.0])
    ntcp = normal_tissue_complication_probability(doses)
    assert np.all((ntcp > 0) & (ntcp < 1))
    assert normal_tissue_complication_probability(0.0) == 0.0


def test_ntcp_invalid_parameters():
    with pytest.raises(ValueError, match="td50 and gamma"):
        normal_tissue_complication_probability(10.0, td50=0.0)


@pytest.mark.parametrize("tcp, ntcp, expected", [
    (0.95, 0.01, "excellent"),
    (0.95, 0.07, "acceptable"),
    (0.80, 0.01, "acceptable"),
    (0.60, 0.01, "needs_improvement"),
    (0.95, 0.20, "needs_improvement"),
    (0.90, 0.01, "acceptable"),
])
def test_classify_plan(tcp, ntcp, expected):
    assert classify_plan(tcp, ntcp) == expected


def test_classify_plan_invalid():
    with pytest.raises(ValueError, match="probabilities"):
        classify_plan(1.5, 0.0)


def test_ntcp_extreme_doses_stay_bounded():
    ntcp = normal_tissue_complication_probability(np.array([1e-120, 1e8]))
    assert np.all((ntcp >= 0.0) & (ntcp <= 1.0))
    assert ntcp[0] < ntcp[1]
