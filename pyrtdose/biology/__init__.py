# This file marks this directory as a Python package
"""
Biological effect models.

This subpackage contains functions used to turn physical doses into
radiobiological outcome estimates.

Modules
-------

- :mod:`radiobiology`:
  Provides RBE weighting, linear-quadratic survival, tumor control
  probability (TCP), normal tissue complication probability (NTCP) and
  the plan classification used by :mod:`pyrtdose.evaluation`.
"""
