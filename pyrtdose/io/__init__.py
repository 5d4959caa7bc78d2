"""
I/O submodule for pyRTDose.

This package provides access to the reference data bundled with pyRTDose.

Modules
-------

- :mod:`data_registry`:
  Functions for loading the tissue lookup table (`tissues.json`), such as
  :func:`~pyrtdose.io.data_registry.load_tissue_table` and
  :func:`~pyrtdose.io.data_registry.get_tissue_density`.
"""

from .data_registry import load_tissue_table, get_tissue_density

__all__ = ["load_tissue_table", "get_tissue_density"]
