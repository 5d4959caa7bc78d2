"""
Radiobiological response models.

This module implements functions to compute:

- RBE-weighted dose :func:`apply_rbe`
- Linear-quadratic cell survival :func:`linear_quadratic_survival`
- Tumor control probability (Poisson over clonogens) :func:`tumor_control_probability`
- Normal tissue complication probability (Lyman-type logistic)
  :func:`normal_tissue_complication_probability`
- Plan classification from TCP and NTCP :func:`classify_plan`
"""

import numpy as np
from typing import Union
from scipy.special import expit

ArrayLike = Union[float, np.ndarray]

# Relative biological effectiveness per particle type
RBE = {
    "proton": 1.2,
}

# Default tumor and normal-tissue parameters
ALPHA_TUMOR = 0.3      # Gy⁻¹
BETA_TUMOR = 0.03      # Gy⁻²
CLONOGENS = 1e9
TD50 = 60.0            # Gy
NTCP_GAMMA = 3.0


def relative_biological_effectiveness(particle_type: str) -> float:
    """
    RBE of a particle type (1.2 for protons, 1.0 otherwise).

    :param particle_type: Particle name, case-insensitive.
    :type particle_type: str
    :returns: RBE factor.
    :rtype: float
    """
    return RBE.get(str(particle_type).lower(), 1.0)


def apply_rbe(dose: ArrayLike, particle_type: str) -> ArrayLike:
    """
    Scale a physical dose by the RBE of the particle type.

    :param dose: Physical dose (Gy).
    :param particle_type: Particle name.
    :returns: RBE-weighted dose (Gy(RBE)).
    """
    return dose * relative_biological_effectiveness(particle_type)


def linear_quadratic_survival(dose: ArrayLike, alpha: float = ALPHA_TUMOR, beta: float = BETA_TUMOR) -> np.ndarray:
    """
    Surviving fraction from the linear-quadratic model, exp(-αD - βD²).

    :param dose: Dose (Gy).
    :type dose: float or np.ndarray
    :param alpha: Linear coefficient (Gy⁻¹).
    :type alpha: float
    :param beta: Quadratic coefficient (Gy⁻²).
    :type beta: float
    :returns: Surviving fraction.
    :rtype: np.ndarray
    """
    dose = np.asarray(dose, dtype=float)
    return np.exp(-alpha * dose - beta * dose ** 2)


def tumor_control_probability(
    dose: ArrayLike,
    alpha: float = ALPHA_TUMOR,
    beta: float = BETA_TUMOR,
    clonogens: float = CLONOGENS
) -> np.ndarray:
    """
    Poisson tumor control probability, exp(-N · SF(D)).

    :param dose: Tumor dose (Gy).
    :type dose: float or np.ndarray
    :param alpha: Linear coefficient (Gy⁻¹).
    :param beta: Quadratic coefficient (Gy⁻²).
    :param clonogens: Initial number of clonogenic cells.
    :returns: TCP in [0, 1].
    :rtype: np.ndarray

    :raises ValueError: If clonogens is negative.
    """
    if clonogens < 0:
        raise ValueError("clonogens must be non-negative.")
    return np.exp(-clonogens * linear_quadratic_survival(dose, alpha, beta))


def normal_tissue_complication_probability(
    dose: ArrayLike,
    td50: float = TD50,
    gamma: float = NTCP_GAMMA
) -> np.ndarray:
    """
    Normal tissue complication probability, 1 / (1 + (TD50 / D)^γ).

    Non-positive doses give zero. Positive doses give values inside (0, 1)
    up to float64 saturation of the logistic: doses many decades away from
    TD50 round to exactly 0 or 1.

    :param dose: Normal-tissue dose (Gy).
    :type dose: float or np.ndarray
    :param td50: Dose giving 50% complication probability (Gy).
    :type td50: float
    :param gamma: Slope parameter.
    :type gamma: float
    :returns: NTCP values.
    :rtype: np.ndarray

    :raises ValueError: If td50 or gamma is not positive.
    """
    if td50 <= 0 or gamma <= 0:
        raise ValueError("td50 and gamma must be positive.")
    dose = np.asarray(dose, dtype=float)
    positive = dose > 0
    safe_dose = np.where(positive, dose, 1.0)
    # logistic in log-dose, equal to 1 / (1 + (TD50 / D)^γ)
    return np.where(positive, expit(gamma * (np.log(safe_dose) - np.log(td50))), 0.0)


def classify_plan(tcp: float, ntcp: float) -> str:
    """
    Classify a treatment plan from its TCP and NTCP (fractions in [0, 1]).

    - ``"excellent"``: TCP > 90% and NTCP < 5%
    - ``"acceptable"``: TCP > 70% and NTCP < 10%
    - ``"needs_improvement"``: otherwise

    :param tcp: Tumor control probability.
    :type tcp: float
    :param ntcp: Normal tissue complication probability.
    :type ntcp: float
    :returns: Plan category.
    :rtype: str

    :raises ValueError: If a probability is outside [0, 1].
    """
    tcp, ntcp = float(tcp), float(ntcp)
    if not (0 <= tcp <= 1 and 0 <= ntcp <= 1):
        raise ValueError("TCP and NTCP must be probabilities in [0, 1].")
    tcp_pct, ntcp_pct = tcp * 100, ntcp * 100
    if tcp_pct > 90 and ntcp_pct < 5:
        return "excellent"
    elif tcp_pct > 70 and ntcp_pct < 10:
        return "acceptable"
    return "needs_improvement"
