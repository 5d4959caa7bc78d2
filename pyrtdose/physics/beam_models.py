"""
Closed-form depth-dose models for external radiotherapy beams.

This module defines three analytical beam models:

- :class:`PhotonBeam`: dual-energy (4 MV + 20 MV) exponential attenuation
  with a surface build-up correction
- :class:`ProtonBeam`: Gaussian Bragg peak with exponential post-peak fall-off
- :class:`ElectronBeam`: hyperbolic-tangent depth-dose curve

Each model computes dose as a function of depth below the entry surface,
lateral offset from the beam axis and local relative density. Densities
scale the photon attenuation coefficients and shift the proton and
electron ranges. Output values are relative (arbitrary units); absolute
normalization happens in :mod:`pyrtdose.dosefield`.

Examples
--------

>>> from pyrtdose.physics.beam_models import get_beam_model
>>> beam = get_beam_model("proton")
>>> depth = np.linspace(0, 9, 901)
>>> dose = beam.depth_dose(depth)
>>> depth[np.argmax(dose)]
4.7
"""

import logging
import warnings
from typing import Sequence, Union
import numpy as np

from pyrtdose.utils.geometry_tools import GeometryTools

logger = logging.getLogger(__name__)
logger.setLevel(logging.WARNING)

ArrayLike = Union[float, np.ndarray]


class BeamModel:
    """
    Base class for analytical beam models.

    Subclasses implement :meth:`depth_dose` and may override :meth:`dose`
    when the lateral spread depends on the depth-dose component.
    """

    particle_type: str = ""

    def __init__(self, energy: float, lateral_sigma: float) -> None:
        """
        :param energy: Nominal beam energy in MeV (label of the model calibration).
        :type energy: float
        :param lateral_sigma: Lateral Gaussian spread in cm.
        :type lateral_sigma: float

        :raises ValueError: If energy or lateral_sigma is not positive.
        """
        if energy <= 0:
            raise ValueError("Beam energy must be positive.")
        if lateral_sigma <= 0:
            raise ValueError("lateral_sigma must be positive.")
        self.energy = float(energy)
        self.lateral_sigma = float(lateral_sigma)

    def __repr__(self):
        return f"<{self.__class__.__name__} E={self.energy:g} MeV>"

    @property
    def label(self) -> str:
        return f"{self.particle_type.capitalize()} ({self.energy:g} MeV)"

    def depth_dose(self, depth: ArrayLike, density: ArrayLike = 1.0) -> np.ndarray:
        raise NotImplementedError

    def lateral_profile(self, x: ArrayLike) -> np.ndarray:
        """
        Lateral Gaussian profile of the beam.

        :param x: Lateral offset from the beam axis (cm).
        :type x: float or np.ndarray

        :returns: Unit-height lateral profile.
        :rtype: np.ndarray
        """
        return GeometryTools.gaussian_lateral_profile(x, self.lateral_sigma)

    def dose(self, depth: ArrayLike, x: ArrayLike, density: ArrayLike = 1.0) -> np.ndarray:
        """
        Relative dose at (depth, x) for the given local density.

        :param depth: Depth below the entry surface (cm).
        :type depth: float or np.ndarray
        :param x: Lateral offset from the beam axis (cm).
        :type x: float or np.ndarray
        :param density: Relative density at each point.
        :type density: float or np.ndarray

        :returns: Relative dose values (broadcast shape of the inputs).
        :rtype: np.ndarray
        """
        return self.depth_dose(depth, density) * self.lateral_profile(x)


class PhotonBeam(BeamModel):
    """
    Dual-energy photon beam with build-up and exponential attenuation.

    For each energy component i the dose is::

        w_i * (1 - exp(-5 d / b_i)) * exp(-mu_i * rho * d) * exp(-x^2 / (2 s_i^2))

    where the build-up factor is zero above the surface (d < 0).
    """

    particle_type = "photon"

    def __init__(self,
                 energies: Sequence[float] = (4.0, 20.0),
                 attenuation: Sequence[float] = (0.28, 0.075),
                 build_up: Sequence[float] = (0.4, 1.2),
                 lateral_sigmas: Sequence[float] = (1.5, 2.2),
                 weights: Sequence[float] = (0.3, 0.7)) -> None:
        """
        :param energies: Component energies in MeV.
        :param attenuation: Linear attenuation coefficients at unit density (cm⁻¹).
        :param build_up: Build-up region thickness per component (cm).
        :param lateral_sigmas: Lateral spread per component (cm).
        :param weights: Mixing weight per component.

        :raises ValueError: If the component sequences differ in length or hold invalid values.
        """
        arrays = [np.asarray(v, dtype=float) for v in (energies, attenuation, build_up, lateral_sigmas, weights)]
        n = arrays[0].size
        if n == 0 or any(a.ndim != 1 or a.size != n for a in arrays):
            raise ValueError("Photon components must be non-empty 1-D sequences of equal length.")
        energies, attenuation, build_up, lateral_sigmas, weights = arrays
        if np.any(attenuation < 0):
            raise ValueError("Attenuation coefficients must be non-negative.")
        if np.any(build_up <= 0):
            raise ValueError("Build-up thicknesses must be positive.")
        if np.any(weights < 0):
            raise ValueError("Component weights must be non-negative.")
        if not np.isclose(weights.sum(), 1.0):
            warnings.warn(f"Photon component weights sum to {weights.sum():.3f}, not 1.")

        super().__init__(energy=float(energies.max()), lateral_sigma=float(lateral_sigmas.max()))
        self.energies = energies
        self.attenuation = attenuation
        self.build_up = build_up
        self.lateral_sigmas = lateral_sigmas
        self.weights = weights

    @property
    def label(self) -> str:
        components = " + ".join(f"{e:g}MV" for e in self.energies)
        return f"Photon ({components})"

    def _build_up_factor(self, depth: np.ndarray, index: int) -> np.ndarray:
        factor = 1 - np.exp(-5 * depth / self.build_up[index])
        return np.where(depth < 0, 0.0, factor)

    def component_depth_dose(self, index: int, depth: ArrayLike, density: ArrayLike = 1.0) -> np.ndarray:
        """
        Unweighted depth dose of a single energy component.

        :param index: Component index.
        :type index: int
        :param depth: Depth below the entry surface (cm).
        :param density: Relative density.

        :returns: Build-up factor times attenuation.
        :rtype: np.ndarray
        """
        depth = np.asarray(depth, dtype=float)
        mu = self.attenuation[index] * np.asarray(density, dtype=float)
        return self._build_up_factor(depth, index) * np.exp(-mu * depth)

    def depth_dose(self, depth: ArrayLike, density: ArrayLike = 1.0) -> np.ndarray:
        """
        Weighted depth dose on the beam axis (x = 0).
        """
        return sum(
            w * self.component_depth_dose(i, depth, density)
            for i, w in enumerate(self.weights)
        )

    def dose(self, depth: ArrayLike, x: ArrayLike, density: ArrayLike = 1.0) -> np.ndarray:
        # each component carries its own lateral spread
        return sum(
            w * self.component_depth_dose(i, depth, density)
            * GeometryTools.gaussian_lateral_profile(x, self.lateral_sigmas[i])
            for i, w in enumerate(self.weights)
        )


class ProtonBeam(BeamModel):
    """
    Proton Bragg-peak model.

    The peak depth scales inversely with density (d_peak = d0 / rho); the
    peak width is fixed by the unit-density peak depth (sigma = k * d0).
    Past the peak the Gaussian is further multiplied by exp(-r / sigma).
    """

    particle_type = "proton"

    def __init__(self,
                 energy: float = 150.0,
                 peak_depth: float = 4.7,
                 width_fraction: float = 0.07,
                 lateral_sigma: float = 0.7) -> None:
        """
        :param energy: Nominal energy (MeV).
        :param peak_depth: Bragg-peak depth at unit density (cm).
        :param width_fraction: Peak width as a fraction of ``peak_depth``.
        :param lateral_sigma: Lateral spread (cm).
        """
        super().__init__(energy=energy, lateral_sigma=lateral_sigma)
        if peak_depth <= 0:
            raise ValueError("peak_depth must be positive.")
        if width_fraction <= 0:
            raise ValueError("width_fraction must be positive.")
        self.peak_depth = float(peak_depth)
        self.width_fraction = float(width_fraction)

    @property
    def sigma_depth(self) -> float:
        return self.width_fraction * self.peak_depth

    def range_at(self, density: ArrayLike = 1.0) -> np.ndarray:
        """Density-corrected Bragg-peak depth (cm)."""
        density = np.asarray(density, dtype=float)
        if np.any(density <= 0):
            raise ValueError("Density must be positive.")
        return self.peak_depth / density

    def depth_dose(self, depth: ArrayLike, density: ArrayLike = 1.0) -> np.ndarray:
        depth = np.asarray(depth, dtype=float)
        sigma = self.sigma_depth
        r = depth - self.range_at(density)
        peak = np.exp(-r ** 2 / (2 * sigma ** 2))
        distal = r > 0
        return np.where(distal, peak * np.exp(-np.where(distal, r, 0.0) / sigma), peak)


class ElectronBeam(BeamModel):
    """
    Electron depth-dose model based on a hyperbolic tangent fall-off.

    D(d) = A * (1 - tanh((d - R50) / s)), with R50 = R50_0 * rho^-0.8 and
    s = R50_0 / 2.8.
    """

    particle_type = "electron"

    def __init__(self,
                 energy: float = 4.0,
                 r50: float = 4.0,
                 gradient_divisor: float = 2.8,
                 density_exponent: float = -0.8,
                 amplitude: float = 1.1,
                 lateral_sigma: float = 1.2) -> None:
        """
        :param energy: Nominal energy (MeV).
        :param r50: Depth of 50% dose at unit density (cm).
        :param gradient_divisor: Divisor giving the fall-off width s = r50 / divisor.
        :param density_exponent: Exponent of the density correction of R50.
        :param amplitude: Curve amplitude A.
        :param lateral_sigma: Lateral spread (cm).
        """
        super().__init__(energy=energy, lateral_sigma=lateral_sigma)
        if r50 <= 0:
            raise ValueError("r50 must be positive.")
        if gradient_divisor <= 0:
            raise ValueError("gradient_divisor must be positive.")
        self.r50 = float(r50)
        self.gradient_divisor = float(gradient_divisor)
        self.density_exponent = float(density_exponent)
        self.amplitude = float(amplitude)

    @property
    def sigma_depth(self) -> float:
        return self.r50 / self.gradient_divisor

    def r50_at(self, density: ArrayLike = 1.0) -> np.ndarray:
        """Density-corrected R50 (cm)."""
        density = np.asarray(density, dtype=float)
        if np.any(density <= 0):
            raise ValueError("Density must be positive.")
        return self.r50 * density ** self.density_exponent

    def depth_dose(self, depth: ArrayLike, density: ArrayLike = 1.0) -> np.ndarray:
        depth = np.asarray(depth, dtype=float)
        return self.amplitude * (1 - np.tanh((depth - self.r50_at(density)) / self.sigma_depth))


BEAM_MODELS = {
    "photon": PhotonBeam,
    "proton": ProtonBeam,
    "electron": ElectronBeam,
}


def get_beam_model(particle_type: str, **kwargs) -> BeamModel:
    """
    Instantiate the beam model for a particle type.

    :param particle_type: 'photon', 'proton' or 'electron' (case-insensitive).
    :type particle_type: str
    :param kwargs: Overrides forwarded to the model constructor.

    :returns: Configured beam model.
    :rtype: BeamModel

    :raises ValueError: If the particle type is not supported.
    """
    key = str(particle_type).lower()
    if key not in BEAM_MODELS:
        raise ValueError(f"Unsupported particle type: '{particle_type}'. Choose one of: {sorted(BEAM_MODELS)}")
    logger.debug("Creating %s beam model with overrides %s", key, kwargs)
    return BEAM_MODELS[key](**kwargs)
