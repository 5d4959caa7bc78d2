"""
Scattering-angle studies for protons and electrons crossing slabs.

After running `compute()`, the results are stored in `self.table` as a list of result dictionaries:

.. code-block:: python

    ScatteringStudy.table = [
        {
            "params": {
                "particle": "proton",
                "thickness": 5.0,          # [mm]
                "depth": 0.5,              # [cm]
                "theta_rms": 0.58,         # [deg]
                "survival_fraction": 0.85,
                "n_survivors": 8465
            },
            "data": pd.DataFrame({
                "angle": [...]             # [deg]
            })
        },
        ...
    ]

Modules
-------

- :mod:`core`:
  Defines :class:`~pyrtdose.scattering.core.ScatteringParameters` and
  :class:`~pyrtdose.scattering.core.ScatteringStudy`.

- :mod:`compute`:
  Provides :meth:`~pyrtdose.scattering.compute.compute` and
  :meth:`~pyrtdose.scattering.compute.angular_distribution`.

Usage
-----

.. code-block:: python

    from pyrtdose.scattering import ScatteringParameters, ScatteringStudy

    study = ScatteringStudy(ScatteringParameters(particle_type="electron", seed=1))
    study.compute()
    study.angular_distribution(thickness=15)
"""

from .core import ScatteringStudy, ScatteringParameters
from . import compute  # noqa

__all__ = ["ScatteringStudy", "ScatteringParameters"]
