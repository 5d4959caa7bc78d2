"""
Physics models and computational core for pyRTDose.

This subpackage contains the closed-form physical models used to build
planar dose fields, to study multiple scattering and to estimate organ
doses from depth profiles.

Modules
-------

- :mod:`anatomy`:
  Implements :class:`~pyrtdose.physics.anatomy.TissueModel`, the concentric-disc
  phantom (tumor, skin, normal tissue) and its density map.

- :mod:`beam_models`:
  Provides :class:`~pyrtdose.physics.beam_models.PhotonBeam`,
  :class:`~pyrtdose.physics.beam_models.ProtonBeam` and
  :class:`~pyrtdose.physics.beam_models.ElectronBeam`.

- :mod:`scattering`:
  Highland and Molière-type RMS angles, Gaussian angle sampling and
  survival decimation.

- :mod:`energy_deposition`:
  1-D depth profiles and their conversion to tumor and healthy-tissue dose.
"""

from .anatomy import TissueModel
from .beam_models import PhotonBeam, ProtonBeam, ElectronBeam, get_beam_model

__all__ = ["TissueModel", "PhotonBeam", "ProtonBeam", "ElectronBeam", "get_beam_model"]
