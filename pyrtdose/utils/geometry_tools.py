"""
Geometric utilities for building planar dose grids.

This module provides helper functions to construct the 2-D coordinate grid
on which dose fields are evaluated, and to describe concentric-disc regions
and lateral beam profiles on that grid.

All methods operate in centimeter units.
"""

import numpy as np
from typing import Tuple, Sequence

class GeometryTools:
    """
    Collection of geometric helper methods for planar dose synthesis.

    Includes utilities to build square coordinate grids, disc-shaped region
    masks, Gaussian lateral profiles and depth maps measured from the beam
    entry surface.
    """

    @staticmethod
    def build_grid(extent: float, resolution: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """
        Build a square grid centered on the origin.

        The grid spans ``[-extent/2, extent/2]`` along both axes with
        ``resolution`` points per axis. The 2-D meshes use Cartesian (xy)
        indexing, so rows follow ``y`` and columns follow ``x``.

        :param extent: Full width of the grid in cm.
        :type extent: float
        :param resolution: Number of points per axis (at least 2).
        :type resolution: int

        :returns: Tuple (x, y, X, Y) of 1-D coordinates and 2-D meshes.
            All arrays are read-only.
        :rtype: tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]

        :raises ValueError: If extent is not positive or resolution < 2.
        """
        if extent <= 0:
            raise ValueError("Grid extent must be positive.")
        if int(resolution) != resolution or resolution < 2:
            raise ValueError("Grid resolution must be an integer >= 2.")

        half = extent / 2
        x = np.linspace(-half, half, int(resolution))
        y = np.linspace(-half, half, int(resolution))
        X, Y = np.meshgrid(x, y)

        for arr in (x, y, X, Y):
            arr.setflags(write=False)
        return x, y, X, Y

    @staticmethod
    def disc_mask(X: np.ndarray, Y: np.ndarray, radius: float,
                  center: Sequence[float] = (0.0, 0.0)) -> np.ndarray:
        """
        Return a boolean mask of the points inside a disc (edge included).

        :param X: x-coordinate mesh.
        :type X: np.ndarray
        :param Y: y-coordinate mesh.
        :type Y: np.ndarray
        :param radius: Disc radius in cm.
        :type radius: float
        :param center: Disc center (cx, cy) in cm.
        :type center: Sequence[float]

        :returns: Boolean array with the shape of ``X``.
        :rtype: np.ndarray

        :raises ValueError: If radius is negative.
        """
        if radius < 0:
            raise ValueError("Disc radius must be non-negative.")
        cx, cy = center
        return (X - cx) ** 2 + (Y - cy) ** 2 <= radius ** 2

    @staticmethod
    def gaussian_lateral_profile(x: np.ndarray, sigma: float) -> np.ndarray:
        """
        Unit-height Gaussian lateral profile ``exp(-x^2 / (2 sigma^2))``.

        :param x: Lateral offsets from the beam axis in cm.
        :type x: np.ndarray
        :param sigma: Lateral spread in cm.
        :type sigma: float

        :returns: Profile values in [0, 1].
        :rtype: np.ndarray

        :raises ValueError: If sigma is not positive.
        """
        if sigma <= 0:
            raise ValueError("Lateral sigma must be positive.")
        x = np.asarray(x, dtype=float)
        return np.exp(-x ** 2 / (2 * sigma ** 2))

    @staticmethod
    def depth_from_surface(Y: np.ndarray, surface: float) -> np.ndarray:
        """
        Depth of each point below a horizontal entry surface at ``y = surface``.

        The beam enters from +y and travels towards -y, so depth grows as y decreases.

        :param Y: y-coordinate mesh.
        :type Y: np.ndarray
        :param surface: y position of the entry surface in cm.
        :type surface: float

        :returns: Depth map in cm (negative above the surface).
        :rtype: np.ndarray
        """
        return surface - np.asarray(Y, dtype=float)
