"""
Sampling of scattering-angle distributions for a series of slabs.

This module defines :meth:`ScatteringStudy.compute`, which for every slab
thickness:

- evaluates the RMS angle (Highland for protons, Molière for electrons)
- samples one Gaussian angle per particle
- drops outliers and keeps the first N survivors

and :meth:`ScatteringStudy.angular_distribution`, which bins the surviving
angles into a probability density.

Each thickness draws from its own child of a common seed sequence, so a
seeded study gives the same samples in serial and parallel mode.
"""

from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Optional
import numpy as np
import pandas as pd
from tqdm import tqdm

from pyrtdose.physics.scattering import (
    rms_angle,
    sample_scattering_angles,
    survival_fraction,
    truncate_survivors,
)
from pyrtdose.utils.parallel import optimal_worker_count

from .core import ScatteringStudy, ScatteringParameters


def _compute_for_thickness(params: ScatteringParameters, thickness: float, seed_seq: np.random.SeedSequence) -> dict:
    """
    Sample the surviving scattering angles for one slab.

    :param params: Study parameters.
    :type params: ScatteringParameters
    :param thickness: Slab thickness [mm].
    :type thickness: float
    :param seed_seq: Seed sequence of this slab.
    :type seed_seq: np.random.SeedSequence

    :returns: Result dictionary with keys 'params' and 'data'.
    :rtype: dict
    """
    rng = np.random.default_rng(seed_seq)
    depth = thickness / 10  # mm -> cm

    energies = np.full(params.n_particles, params.initial_energy)
    theta_rms = rms_angle(params.particle_type, energies, depth)
    angles = sample_scattering_angles(theta_rms, params.n_particles, rng)
    survivors = truncate_survivors(
        angles, params.particle_type, depth, params.n_particles, cutoff=params.angle_cutoff
    )

    return {
        "params": {
            "particle": params.particle_type,
            "thickness": float(thickness),
            "depth": float(depth),
            "theta_rms": float(np.rad2deg(theta_rms[0])),
            "survival_fraction": float(survival_fraction(params.particle_type, depth)),
            "n_survivors": int(survivors.size),
        },
        "data": pd.DataFrame({"angle": survivors}),
    }


def compute(self: ScatteringStudy, *, parallel: bool = False, workers: Optional[int] = None) -> None:
    """
    Run the scattering study over all configured thicknesses.

    This function stores the results in ``self.table`` as a list of result
    dictionaries, in the order of ``params.thicknesses``.

    :param parallel: If True, thicknesses are sampled concurrently in threads.
    :type parallel: bool
    :param workers: Optional requested number of worker threads.
    :type workers: Optional[int]

    :returns: None. Results are stored in ``self.table``.
    """
    params = self.params
    thicknesses = params.thicknesses
    seeds = np.random.SeedSequence(params.seed).spawn(len(thicknesses))
    func = partial(_compute_for_thickness, params)

    if parallel:
        worker_count = optimal_worker_count(thicknesses, user_requested=workers)
        with ThreadPoolExecutor(max_workers=worker_count) as executor:
            results = list(tqdm(
                executor.map(func, thicknesses, seeds),
                total=len(thicknesses),
                desc=f"[{worker_count} workers] {params.particle_type} scattering",
                unit="slab"
            ))
    else:
        results = [
            func(t, s)
            for t, s in tqdm(zip(thicknesses, seeds), total=len(thicknesses),
                             desc=f"{params.particle_type} scattering", unit="slab")
        ]

    self.table = results


def angular_distribution(self: ScatteringStudy, thickness: float, bins: Optional[int] = None) -> pd.DataFrame:
    """
    Probability density of the surviving scattering angles of one slab.

    Bins span the range of the surviving samples; the density integrates to one.

    :param thickness: Slab thickness [mm].
    :type thickness: float
    :param bins: Number of bins. Defaults to ``params.bins``.
    :type bins: Optional[int]

    :returns: DataFrame with columns ``angle`` (bin centers, deg) and ``density`` [1/deg].
    :rtype: pandas.DataFrame

    :raises ValueError: If no results are available for the thickness or
        fewer than two angles survived.
    """
    result = self._get_result(thickness)
    angles = result["data"]["angle"].values
    if angles.size < 2:
        raise ValueError(f"Not enough surviving particles to build a distribution at {thickness} mm.")
    density, edges = np.histogram(angles, bins=bins or self.params.bins, density=True)
    centers = 0.5 * (edges[:-1] + edges[1:])
    return pd.DataFrame({"angle": centers, "density": density})


ScatteringStudy.compute = compute
ScatteringStudy.angular_distribution = angular_distribution
