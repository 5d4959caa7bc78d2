"""
Interpolation utilities for non-monotonic depth-dose curves.

This module defines the :class:`Interpolator`, a general-purpose tool
for reading values off sampled depth-dose profiles. It supports:

- Monotonic and non-monotonic data
- Depth → dose lookup
- Dose → depth inversion (one-to-many for curves with a peak, such as
  the proton Bragg curve or the photon build-up region)

The main use case is extracting iso-dose depths (e.g. R80, R50) from the
central-axis profile of a synthesized dose field.

Examples
--------

>>> interp = Interpolator(depth_array, dose_array)
>>> dose_vals = interp.interpolate(depth=[1.0, 2.0])
>>> depth_vals = interp.interpolate(dose=[50.0])
"""

from typing import Union, Sequence, Dict
import numpy as np

class Interpolator:
    """
    General-purpose interpolator for depth-dose curves.

    Supports non-monotonic data by segmenting the input into monotonic
    pieces before inverting.
    """

    def __init__(self, depth: np.ndarray, values: np.ndarray):
        """
        Initialize the Interpolator.

        :param depth: Array of depth values (x-axis), sorted ascending.
        :type depth: np.ndarray
        :param values: Array of dose values (y-axis).
        :type values: np.ndarray

        :raises ValueError: If the arrays differ in length or have fewer than two points.
        """
        self.depth = np.asarray(depth, dtype=float)
        self.values = np.asarray(values, dtype=float)
        if self.depth.shape != self.values.shape:
            raise ValueError("depth and values must have the same shape.")
        if self.depth.size < 2:
            raise ValueError("At least two points are required for interpolation.")

    def _identify_monotonic_segments(self):
        """
        Identify contiguous monotonic segments in the values array.

        :returns: List of (start_index, end_index) tuples defining each monotonic segment.
        :rtype: list[tuple[int, int]]
        """
        diff = np.diff(self.values)
        sign_changes = np.where(np.diff(np.sign(diff)))[0] + 1

        segments = []
        start_idx = 0
        for change in sign_changes:
            segments.append((start_idx, change))
            start_idx = change
        segments.append((start_idx, len(self.values) - 1))
        return segments

    def _interpolate_depth_for_dose(self, dose_input: Union[float, Sequence[float]]) -> Dict[float, np.ndarray]:
        """
        Interpolate the depths at which the curve crosses one or more dose levels.

        Each crossing found in each monotonic segment is reported once, in
        increasing depth order.

        :param dose_input: A single dose level or a sequence of levels.
        :type dose_input: float or Sequence[float]

        :returns: A dictionary mapping each input level to an array of depths.
        :rtype: dict[float, np.ndarray]

        :raises ValueError: If any level is outside the range of known values.
        """
        dose_input = np.atleast_1d(np.asarray(dose_input, dtype=float))
        min_val = self.values.min()
        max_val = self.values.max()

        out_of_bounds = (dose_input < min_val) | (dose_input > max_val)
        if np.any(out_of_bounds):
            raise ValueError(f"Dose input(s) {dose_input[out_of_bounds]} are out of bounds: [{min_val}, {max_val}].")

        segments = self._identify_monotonic_segments()
        result = {}

        for level in dose_input:
            depths = []
            for start_idx, end_idx in segments:
                x = self.values[start_idx:end_idx + 1]
                y = self.depth[start_idx:end_idx + 1]
                if len(x) < 2:
                    continue

                for i in range(len(x) - 1):
                    x0, x1 = x[i], x[i + 1]
                    if (x0 - level) * (x1 - level) > 0 or x0 == x1:
                        continue
                    y0, y1 = y[i], y[i + 1]
                    depths.append(y0 + (level - x0) * (y1 - y0) / (x1 - x0))

            # adjacent segments share an end point
            result[float(level)] = np.unique(np.round(depths, 12))

        return result

    def _interpolate_dose_for_depth(self, depth_input: Union[float, Sequence[float]]) -> np.ndarray:
        """
        Interpolate dose values at one or more depths.

        :param depth_input: A single depth or a sequence of depths.
        :type depth_input: float or Sequence[float]

        :returns: Array of interpolated dose values.
        :rtype: np.ndarray

        :raises ValueError: If any depth is outside the sampled range.
        """
        depth_input = np.atleast_1d(np.asarray(depth_input, dtype=float))
        min_d, max_d = self.depth.min(), self.depth.max()

        if np.any(depth_input < min_d) or np.any(depth_input > max_d):
            raise ValueError(f"Depth input(s) {depth_input} out of bounds: [{min_d}, {max_d}].")

        return np.interp(depth_input, self.depth, self.values)

    def interpolate(self, *, depth=None, dose=None):
        """
        Interpolate dose or depth values depending on the input.

        :param depth: Depth value(s) at which to interpolate dose.
        :type depth: float or array-like, optional
        :param dose: Dose level(s) at which to find crossing depths.
        :type dose: float or array-like, optional

        :returns:
            - If `depth` is provided, returns an array of dose values.
            - If `dose` is provided, returns a dict mapping each level to an array of depths.
        :rtype: np.ndarray or dict[float, np.ndarray]

        :raises ValueError: If both `depth` and `dose` are provided, or if neither is provided.
        """
        if depth is not None and dose is not None:
            raise ValueError("Provide only one of `depth` or `dose`, not both.")
        if depth is not None:
            return self._interpolate_dose_for_depth(depth)
        elif dose is not None:
            return self._interpolate_depth_for_dose(dose)
        raise ValueError("You must provide either `depth` or `dose`.")
