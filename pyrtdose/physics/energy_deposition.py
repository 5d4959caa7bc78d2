"""
Energy deposition along a 1-D depth axis and conversion to organ dose.

A beam of ``n`` particles is described by a simplified depth profile:

- proton: Gaussian Bragg peak at depth E/100 cm with width 0.1 * E/100
- electron: exponential attenuation with length E/50 cm

The profile is integrated over the tumor depth range (a sphere of radius
r, density 1.04 g/cm³) and over the 5 cm healthy-tissue shell beyond it,
and converted to dose with 1.6e-13 J/MeV.
"""

from typing import Optional, Tuple
import numpy as np
from scipy.integrate import trapezoid

MEV_TO_JOULE = 1.6e-13
TISSUE_DENSITY = 1.04  # g/cm³
HEALTHY_MARGIN = 5.0  # cm
DEFAULT_DEPTH = np.arange(0, 301) * 0.1  # 0:0.1:30 cm


def depth_profile(
    particle_type: str,
    energy: float,
    n_particles: float,
    depth: Optional[np.ndarray] = None
) -> np.ndarray:
    """
    Deposited-energy profile of a beam along depth.

    :param particle_type: 'proton' or 'electron' (case-insensitive).
    :type particle_type: str
    :param energy: Beam energy in MeV.
    :type energy: float
    :param n_particles: Number of particles.
    :type n_particles: float
    :param depth: Depth axis in cm. Defaults to 0–30 cm in 1 mm steps.
    :type depth: np.ndarray, optional

    :returns: Profile values on the depth axis.
    :rtype: np.ndarray

    :raises ValueError: If the particle type is unsupported or energy is not positive.
    """
    if energy <= 0:
        raise ValueError("Beam energy must be positive.")
    depth = DEFAULT_DEPTH if depth is None else np.asarray(depth, dtype=float)

    particle = str(particle_type).lower()
    if particle == "proton":
        peak_position = energy / 100
        sigma = 0.1 * peak_position
        return n_particles * np.exp(-(depth - peak_position) ** 2 / (2 * sigma ** 2))
    elif particle == "electron":
        attenuation_length = energy / 50
        return n_particles * np.exp(-depth / attenuation_length)
    raise ValueError(f"Unsupported particle type: '{particle_type}'")


def sphere_mass(radius: float, density: float = TISSUE_DENSITY) -> float:
    """Mass of a sphere, (4/3) pi r^3 rho."""
    return (4 / 3) * np.pi * radius ** 3 * density


def simulate_energy_deposition(
    radius: float,
    energy: float,
    particle_type: str,
    n_particles: float,
    depth: Optional[np.ndarray] = None
) -> Tuple[float, float]:
    """
    Compute tumor and healthy-tissue doses from a 1-D depth profile.

    The tumor dose integrates the profile over ``depth <= radius``; the
    healthy dose integrates over ``radius < depth <= radius + 5`` and uses
    the mass of the 5 cm spherical shell around the tumor. Ranges holding
    fewer than two depth samples integrate to zero.

    :param radius: Tumor radius (cm).
    :type radius: float
    :param energy: Beam energy (MeV).
    :type energy: float
    :param particle_type: 'proton' or 'electron'.
    :type particle_type: str
    :param n_particles: Number of particles.
    :type n_particles: float
    :param depth: Optional depth axis (cm).
    :type depth: np.ndarray, optional

    :returns: Tuple (dose_tumor, dose_healthy) in Gy.
    :rtype: tuple[float, float]

    :raises ValueError: If radius is not positive.
    """
    if radius <= 0:
        raise ValueError("Tumor radius must be positive.")
    depth = DEFAULT_DEPTH if depth is None else np.asarray(depth, dtype=float)
    profile = depth_profile(particle_type, energy, n_particles, depth)

    in_tumor = depth <= radius
    mass_tumor = sphere_mass(radius)
    dose_tumor = trapezoid(profile[in_tumor], depth[in_tumor]) * MEV_TO_JOULE / mass_tumor

    in_shell = (depth > radius) & (depth <= radius + HEALTHY_MARGIN)
    mass_healthy = sphere_mass(radius + HEALTHY_MARGIN) - sphere_mass(radius)
    dose_healthy = trapezoid(profile[in_shell], depth[in_shell]) * MEV_TO_JOULE / mass_healthy

    return float(dose_tumor), float(dose_healthy)
