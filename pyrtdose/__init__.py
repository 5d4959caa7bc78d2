"""
pyRTDose: Analytic dose and scattering models for radiotherapy teaching.

pyRTDose provides closed-form approximations of radiation-therapy dose
deposition and charged-particle scattering. It supports:

- Planar dose synthesis over a concentric-disc phantom (tumor, skin, normal tissue)
- Photon dual-energy attenuation with build-up, proton Bragg peak and
  electron depth-dose models
- Central-axis profiles, peak depth, iso-dose depths and per-tissue statistics
- Highland and Molière-type multiple-scattering angle sampling
- TCP (linear-quadratic, Poisson) and NTCP (Lyman-type) evaluation with RBE weighting

Main subpackages
----------------

- :mod:`pyrtdose.io`: Loading of bundled tissue data.
- :mod:`pyrtdose.data`: Tissue density table.
- :mod:`pyrtdose.physics`: Anatomy, beam, scattering and energy-deposition models.
- :mod:`pyrtdose.dosefield`: Dose-field synthesis and read-out.
- :mod:`pyrtdose.scattering`: Scattering-angle studies over slab thicknesses.
- :mod:`pyrtdose.biology`: Radiobiological response models.
- :mod:`pyrtdose.evaluation`: Single-beam TCP / NTCP treatment evaluation.
- :mod:`pyrtdose.utils`: Grid geometry, interpolation and worker sizing.
"""


from .physics import TissueModel, PhotonBeam, ProtonBeam, ElectronBeam, get_beam_model
from .dosefield import DoseField, DoseFieldParameters
from .scattering import ScatteringStudy, ScatteringParameters
from .evaluation import TreatmentEvaluation, TreatmentEvaluationParameters

__all__ = [
    "TissueModel",
    "PhotonBeam",
    "ProtonBeam",
    "ElectronBeam",
    "get_beam_model",
    "DoseField",
    "DoseFieldParameters",
    "ScatteringStudy",
    "ScatteringParameters",
    "TreatmentEvaluation",
    "TreatmentEvaluationParameters",
    ]
