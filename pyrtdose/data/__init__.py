# This file marks this directory as a Python package
"""
Data resources for pyRTDose.

Contents
--------

- ``tissues.json``:
  Lookup table mapping tissue keys (``normal``, ``skin``, ``tumor``,
  ``gelatin``) to a display name and a density relative to soft tissue.
  Used to build the density map of the concentric-disc anatomy, which in
  turn scales attenuation coefficients and particle ranges.
  Values follow ICRU Report 44.
"""
