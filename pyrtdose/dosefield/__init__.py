"""
Tools for synthesizing planar radiotherapy dose fields (DoseField).

This subpackage evaluates three closed-form beam models (photon dual-energy
attenuation, proton Bragg peak, electron depth-dose) over a 2-D grid
covering a concentric-disc phantom, and normalizes each field to its own
maximum.

After running `compute()`, results are stored in the `self.fields` dictionary:

.. code-block:: python

    DoseField.fields = {
        "photon": np.ndarray,    # shape (resolution, resolution), max == 100
        "proton": np.ndarray,
        "electron": np.ndarray,
    }

Modules
-------

- :mod:`core`:
  Defines :class:`~pyrtdose.dosefield.core.DoseFieldParameters` and
  :class:`~pyrtdose.dosefield.core.DoseField`, which manage configuration,
  geometry and result storage.

- :mod:`compute`:
  Implements :meth:`~pyrtdose.dosefield.core.DoseField.compute`, the engine
  that evaluates and normalizes the fields.

- :mod:`analysis`:
  Adds central-axis profiles, peak depth, iso-dose depths and per-tissue
  statistics.

Usage
-----

.. code-block:: python

    from pyrtdose.dosefield import DoseField, DoseFieldParameters

    field = DoseField(DoseFieldParameters(resolution=256))
    field.compute()
    field.peak_depth("proton")
    field.dose_statistics("photon")
"""

from .core import DoseField, DoseFieldParameters
from . import compute  # noqa
from . import analysis  # noqa

__all__ = ["DoseField", "DoseFieldParameters"]
