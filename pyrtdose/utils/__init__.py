# This file marks this directory as a Python package
"""
Utility submodule for pyRTDose.

This package contains helper tools used throughout pyRTDose for grid
geometry, depth-dose interpolation, and thread-pool sizing.

Modules
-------

- :mod:`geometry_tools`:
  Provides grid construction, disc masks, lateral Gaussian profiles and
  depth maps. See :class:`~pyrtdose.utils.geometry_tools.GeometryTools`.

- :mod:`interpolation`:
  Contains an :class:`~pyrtdose.utils.interpolation.Interpolator` that
  inverts non-monotonic depth-dose curves (iso-dose depth read-out).

- :mod:`parallel`:
  Defines the :func:`~pyrtdose.utils.parallel.optimal_worker_count` utility
  to size worker pools based on workload and CPU count.
"""
