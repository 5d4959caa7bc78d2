"""
Multiple Coulomb scattering approximations for thin slabs.

Implements the simplified angular-spread formulas used to study protons
and electrons crossing gelatin layers:

- Highland-type formula (protons)::

    theta_rms [deg] = 14.1 / E^0.57 * sqrt(L)

- Molière-type approximation (electrons)::

    theta_rms [deg] = (13.6 / E) * sqrt(d) * (1 + 0.038 ln d)

Each RMS angle is used as the standard deviation of a zero-mean Gaussian
sampled independently for every particle. The number of transmitted
particles is reduced with an exponential survival fraction, applied by
keeping the first N samples of the generated distribution.

References:
    - Highland, NIM 129, 497 (1975)
    - Molière, Z. Naturforsch. A 2, 133 (1947)
"""

import logging
from typing import Optional, Union
import numpy as np

logger = logging.getLogger(__name__)
logger.setLevel(logging.WARNING)

ArrayLike = Union[float, np.ndarray]

MIN_ENERGY = 0.1  # MeV, floor applied before evaluating the formulas

# Attenuation length (cm) of the transmitted fraction exp(-depth / length)
SURVIVAL_LENGTH = {
    "proton": 3.0,
    "electron": 2.0,
}


def _check_particle(particle_type: str) -> str:
    key = str(particle_type).lower()
    if key not in SURVIVAL_LENGTH:
        raise ValueError(f"Unsupported particle type: '{particle_type}'. Choose one of: {sorted(SURVIVAL_LENGTH)}")
    return key


def highland_angle(energy: ArrayLike, step_length: float) -> np.ndarray:
    """
    RMS scattering angle of protons from the Highland-type formula.

    :param energy: Kinetic energy in MeV. Values below 0.1 MeV are clamped.
    :type energy: float or np.ndarray
    :param step_length: Path length in the material (cm).
    :type step_length: float

    :returns: RMS scattering angle in radians.
    :rtype: np.ndarray

    :raises ValueError: If step_length is negative.
    """
    if step_length < 0:
        raise ValueError("step_length must be non-negative.")
    energy = np.maximum(np.asarray(energy, dtype=float), MIN_ENERGY)
    theta_deg = 14.1 / energy ** 0.57 * np.sqrt(step_length)
    return np.deg2rad(theta_deg)


def moliere_angle(energy: ArrayLike, depth: float) -> np.ndarray:
    """
    RMS scattering angle of electrons from the Molière-type approximation.

    :param energy: Kinetic energy in MeV. Values below 0.1 MeV are clamped.
    :type energy: float or np.ndarray
    :param depth: Slab thickness (cm).
    :type depth: float

    :returns: RMS scattering angle in radians.
    :rtype: np.ndarray

    :raises ValueError: If depth is not positive.
    """
    if depth <= 0:
        raise ValueError("depth must be positive for the logarithmic correction.")
    energy = np.maximum(np.asarray(energy, dtype=float), MIN_ENERGY)
    theta_deg = (13.6 / energy) * np.sqrt(depth) * (1 + 0.038 * np.log(depth))
    return np.deg2rad(theta_deg)


def rms_angle(particle_type: str, energy: ArrayLike, depth: float) -> np.ndarray:
    """
    Dispatch to the scattering formula of a particle type.

    :param particle_type: 'proton' (Highland) or 'electron' (Molière).
    :type particle_type: str

    :returns: RMS scattering angle in radians.
    :rtype: np.ndarray

    :raises ValueError: If the particle type is not supported.
    """
    key = _check_particle(particle_type)
    if key == "proton":
        return highland_angle(energy, depth)
    return moliere_angle(energy, depth)


def survival_fraction(particle_type: str, depth: ArrayLike) -> np.ndarray:
    """
    Fraction of particles kept after a slab of given thickness.

    Exponential approximation: exp(-depth / 3) for protons and
    exp(-depth / 2) for electrons.

    :param particle_type: 'proton' or 'electron'.
    :type particle_type: str
    :param depth: Slab thickness (cm).
    :type depth: float or np.ndarray

    :returns: Surviving fraction in (0, 1].
    :rtype: np.ndarray
    """
    key = _check_particle(particle_type)
    return np.exp(-np.asarray(depth, dtype=float) / SURVIVAL_LENGTH[key])


def sample_scattering_angles(
    theta_rms: ArrayLike,
    n_particles: int,
    rng: Optional[np.random.Generator] = None
) -> np.ndarray:
    """
    Sample one scattering angle per particle.

    :param theta_rms: RMS angle in radians, scalar or one value per particle.
    :type theta_rms: float or np.ndarray
    :param n_particles: Number of particles.
    :type n_particles: int
    :param rng: Random generator. A fresh default generator is used if None.
    :type rng: np.random.Generator, optional

    :returns: Scattering angles in degrees.
    :rtype: np.ndarray

    :raises ValueError: If n_particles is negative.
    """
    if n_particles < 0:
        raise ValueError("n_particles must be non-negative.")
    rng = rng if rng is not None else np.random.default_rng()
    theta = np.asarray(theta_rms, dtype=float) * rng.standard_normal(int(n_particles))
    return np.rad2deg(theta)


def truncate_survivors(
    angles_deg: np.ndarray,
    particle_type: str,
    depth: float,
    n_initial: int,
    cutoff: float = 50.0
) -> np.ndarray:
    """
    Apply the outlier cut and the survival decimation to sampled angles.

    Angles with ``|angle| >= cutoff`` are dropped, then only the first
    ``round(n_initial * survival_fraction)`` remaining samples are kept.

    :param angles_deg: Sampled angles in degrees.
    :type angles_deg: np.ndarray
    :param particle_type: 'proton' or 'electron'.
    :type particle_type: str
    :param depth: Slab thickness (cm).
    :type depth: float
    :param n_initial: Number of simulated particles.
    :type n_initial: int
    :param cutoff: Absolute angle cut in degrees.
    :type cutoff: float

    :returns: Angles of the surviving particles (degrees).
    :rtype: np.ndarray
    """
    angles_deg = np.asarray(angles_deg, dtype=float)
    kept = angles_deg[np.abs(angles_deg) < cutoff]
    # half-up rounding
    n_survivors = int(np.floor(n_initial * float(survival_fraction(particle_type, depth)) + 0.5))
    if n_survivors > kept.size:
        logger.warning(
            "Only %d samples left after the %.1f deg cut, %d survivors requested.",
            kept.size, cutoff, n_survivors
        )
    return kept[:n_survivors]
