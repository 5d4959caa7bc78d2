"""
Radiobiological evaluation of a single-beam treatment.

After running `compute()`, the result is stored in `self.result`:

.. code-block:: python

    TreatmentEvaluation.result = {
        "particle": "proton",
        "energy": 160.0,            # [MeV]
        "dose_tumor": ...,          # [Gy]
        "dose_healthy": ...,        # [Gy]
        "rbe": 1.2,
        "dose_tumor_rbe": ...,      # [Gy(RBE)]
        "survival_fraction": ...,
        "tcp": ...,
        "ntcp": ...,
        "plan": "acceptable"
    }

Modules
-------

- :mod:`core`:
  Defines :class:`~pyrtdose.evaluation.core.TreatmentEvaluationParameters`
  and :class:`~pyrtdose.evaluation.core.TreatmentEvaluation`.

- :mod:`compute`:
  Implements :meth:`~pyrtdose.evaluation.compute.compute`.
"""

from .core import TreatmentEvaluation, TreatmentEvaluationParameters
from . import compute  # noqa

__all__ = ["TreatmentEvaluation", "TreatmentEvaluationParameters"]
