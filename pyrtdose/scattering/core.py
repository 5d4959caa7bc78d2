"""
Core classes for multiple-scattering studies through slabs.

This module defines:

- :class:`ScatteringParameters`: A dataclass storing the beam, phantom and
  sampling settings of a scattering study.
- :class:`ScatteringStudy`: A computation manager that samples scattering
  angles for a series of slab thicknesses and stores the surviving particles.
"""

from dataclasses import dataclass, field
from typing import Optional
import numpy as np
import pandas as pd
from tabulate import tabulate

from pyrtdose.physics.scattering import SURVIVAL_LENGTH

# Histogram bins per particle: 50 bins for protons, 50 edges (49 bins) for electrons
DEFAULT_BINS = {
    "proton": 50,
    "electron": 49,
}


@dataclass
class ScatteringParameters:
    """
    Configuration container for a scattering study.

    :param particle_type: 'proton' (Highland formula) or 'electron' (Molière approximation).
    :type particle_type: str

    :param initial_energy: Beam kinetic energy [MeV].
    :type initial_energy: float

    :param n_particles: Number of particles simulated per thickness.
    :type n_particles: int

    :param thicknesses: Slab thicknesses [mm]. Defaults to 5, 7, ..., 35 mm.
    :type thicknesses: np.ndarray

    :param angle_cutoff: Samples with an absolute angle at or above this value [deg] are discarded.
    :type angle_cutoff: float

    :param bins: Number of histogram bins used by :meth:`ScatteringStudy.angular_distribution`.
        None selects the particle default (50 for protons, 49 for electrons).
    :type bins: Optional[int]

    :param seed: Seed of the random generator. None gives a non-reproducible run.
    :type seed: Optional[int]
    """

    particle_type: str = "proton"
    initial_energy: float = 150.0
    n_particles: int = 10000
    thicknesses: np.ndarray = field(default_factory=lambda: np.arange(5, 36, 2, dtype=float))
    angle_cutoff: float = 50.0
    bins: Optional[int] = None
    seed: Optional[int] = None

    def __post_init__(self):
        """
        Validate parameter consistency.

        :raises ValueError: If the particle type is unsupported or a numeric setting is invalid.
        """
        self.particle_type = str(self.particle_type).lower()
        if self.particle_type not in SURVIVAL_LENGTH:
            raise ValueError(f"Unsupported particle type: '{self.particle_type}'. Choose one of: {sorted(SURVIVAL_LENGTH)}")

        if not isinstance(self.thicknesses, np.ndarray):
            self.thicknesses = np.array(self.thicknesses, dtype=float)
        self.thicknesses = np.atleast_1d(self.thicknesses).astype(float)
        if self.thicknesses.size == 0 or np.any(self.thicknesses <= 0):
            raise ValueError("thicknesses must be a non-empty sequence of positive values [mm].")

        if self.initial_energy <= 0:
            raise ValueError("initial_energy must be positive.")
        if int(self.n_particles) != self.n_particles or self.n_particles < 1:
            raise ValueError("n_particles must be a positive integer.")
        self.n_particles = int(self.n_particles)
        if self.angle_cutoff <= 0:
            raise ValueError("angle_cutoff must be positive.")
        if self.bins is None:
            self.bins = DEFAULT_BINS[self.particle_type]
        if self.bins < 1:
            raise ValueError("bins must be at least 1.")

    @classmethod
    def from_dict(cls, config: dict) -> "ScatteringParameters":
        """
        Create a ScatteringParameters instance from a dictionary.

        :param config: Dictionary of parameters with keys matching the dataclass fields.
        :type config: dict

        :returns: A populated ScatteringParameters instance.
        :rtype: ScatteringParameters

        :raises ValueError: If unknown keys are present in the configuration dictionary.
        """
        valid_keys = set(cls.__dataclass_fields__.keys())
        extra_keys = set(config.keys()) - valid_keys

        if extra_keys:
            raise ValueError(
                f"Unrecognized keys in ScatteringParameters config: {sorted(extra_keys)}"
            )

        return cls(**config)


class ScatteringStudy:
    """
    Scattering-angle study over a series of slab thicknesses.

    After :meth:`compute`, ``self.table`` holds one result dictionary per
    thickness, with the slab parameters under ``"params"`` and the surviving
    angles under ``"data"``.
    """

    def __init__(self, parameters: Optional[ScatteringParameters] = None):
        """
        Initialize the study with a set of beam and sampling parameters.

        :param parameters: A ScatteringParameters instance. Defaults are used if None.
        :type parameters: ScatteringParameters, optional

        :raises TypeError: If parameters is not a ScatteringParameters instance.
        """
        parameters = parameters if parameters is not None else ScatteringParameters()
        if not isinstance(parameters, ScatteringParameters):
            raise TypeError("parameters must be an instance of ScatteringParameters")
        self.params = parameters
        self.table = None

    def __repr__(self):
        p = self.params
        return f"<ScatteringStudy | {p.particle_type}, E = {p.initial_energy} MeV, N = {p.n_particles}>"

    def summary(self):
        """
        Print the current study configuration.
        """
        p = self.params
        formula = "Highland" if p.particle_type == "proton" else "Molière"
        print("\nScatteringStudy Configuration")
        table = [
            ("Particle", p.particle_type),
            ("Scattering formula", formula),
            ("E [MeV]", f"{p.initial_energy:.1f}"),
            ("Particles", p.n_particles),
            ("Thicknesses [mm]", ", ".join(f"{t:g}" for t in p.thicknesses)),
            ("Angle cut [deg]", f"{p.angle_cutoff:.1f}"),
            ("Survival length [cm]", f"{SURVIVAL_LENGTH[p.particle_type]:.1f}"),
            ("Seed", p.seed if p.seed is not None else "None"),
        ]
        print(tabulate(table, headers=["Parameter", "Value"], tablefmt="fancy_grid"))

    def _get_result(self, thickness: float) -> dict:
        if not self.table:
            raise ValueError("No scattering data available. Run 'compute()' first.")
        tolerance = 1e-6
        for result in self.table:
            if abs(result["params"]["thickness"] - thickness) < tolerance:
                return result
        raise ValueError(f"No results found for thickness = {thickness} mm.")

    def to_dataframe(self) -> pd.DataFrame:
        """
        Collect the per-thickness parameters and angle statistics.

        :returns: One row per thickness with the study parameters plus the
            sample mean and standard deviation of the surviving angles.
        :rtype: pandas.DataFrame

        :raises ValueError: If no results are available.
        """
        if not self.table:
            raise ValueError("No scattering data available. Run 'compute()' first.")
        rows = []
        for result in self.table:
            angles = result["data"]["angle"].values
            row = dict(result["params"])
            row["mean_angle"] = float(angles.mean()) if angles.size else np.nan
            row["std_angle"] = float(angles.std()) if angles.size else np.nan
            rows.append(row)
        return pd.DataFrame(rows)

    def display(self):
        """
        Display the computed study results in a tabular format.

        :raises ValueError: If no results are available.
        """
        df = self.to_dataframe()
        print("\n📈 Scattering Study Results:")
        print(tabulate(df, headers="keys", tablefmt="fancy_grid", showindex=False, floatfmt=".4g"))
