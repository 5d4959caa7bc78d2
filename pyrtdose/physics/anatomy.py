"""
Concentric-disc anatomy model.

This module defines :class:`TissueModel`, a planar phantom made of a
circular body section containing a circular tumor wrapped by a skin layer:

- ``tumor``: disc of radius r_t around the tumor center
- ``skin``: annulus of thickness t_skin around the tumor
- ``normal``: remaining points of the body disc (centered on the origin)

The three masks are mutually exclusive and their union is the body region.
Relative tissue densities are read from the bundled tissue table.

Examples
--------

>>> from pyrtdose.utils.geometry_tools import GeometryTools
>>> x, y, X, Y = GeometryTools.build_grid(9.0, 128)
>>> anatomy = TissueModel()
>>> masks = anatomy.masks(X, Y)
>>> density = anatomy.density_map(masks)
"""

from dataclasses import dataclass
from typing import Dict, Tuple
import numpy as np

from pyrtdose.io.data_registry import load_tissue_table
from pyrtdose.utils.geometry_tools import GeometryTools

TISSUES = ("tumor", "skin", "normal")


@dataclass
class TissueModel:
    """
    Geometry of the concentric-disc phantom.

    :ivar body_diameter: Diameter of the body section (cm).
    :ivar tumor_radius: Tumor radius (cm).
    :ivar skin_thickness: Thickness of the skin layer around the tumor (cm).
    :ivar tumor_center: Tumor center (x, y) in cm.
    """

    body_diameter: float = 9.0
    tumor_radius: float = 3.0
    skin_thickness: float = 1.5
    tumor_center: Tuple[float, float] = (0.0, 0.0)

    def __post_init__(self):
        if self.body_diameter <= 0:
            raise ValueError("body_diameter must be positive.")
        if self.tumor_radius <= 0:
            raise ValueError("tumor_radius must be positive.")
        if self.skin_thickness < 0:
            raise ValueError("skin_thickness must be non-negative.")
        self.tumor_center = tuple(float(c) for c in self.tumor_center)
        if len(self.tumor_center) != 2:
            raise ValueError("tumor_center must be a pair (x, y).")

    @property
    def body_radius(self) -> float:
        return self.body_diameter / 2

    @property
    def skin_outer_radius(self) -> float:
        return self.tumor_radius + self.skin_thickness

    def masks(self, X: np.ndarray, Y: np.ndarray) -> Dict[str, np.ndarray]:
        """
        Compute the tissue masks on a grid.

        :param X: x-coordinate mesh (cm).
        :type X: np.ndarray
        :param Y: y-coordinate mesh (cm).
        :type Y: np.ndarray

        :returns: Dictionary with boolean arrays for ``tumor``, ``skin``,
            ``normal`` and their union ``body``.
        :rtype: dict[str, np.ndarray]
        """
        tumor = GeometryTools.disc_mask(X, Y, self.tumor_radius, self.tumor_center)
        skin = GeometryTools.disc_mask(X, Y, self.skin_outer_radius, self.tumor_center) & ~tumor
        normal = GeometryTools.disc_mask(X, Y, self.body_radius) & ~skin & ~tumor
        body = normal | skin | tumor

        masks = {"tumor": tumor, "skin": skin, "normal": normal, "body": body}
        for m in masks.values():
            m.setflags(write=False)
        return masks

    @staticmethod
    def density_map(masks: Dict[str, np.ndarray]) -> np.ndarray:
        """
        Build the relative density map from tissue masks.

        Points outside skin and tumor (including points outside the body)
        take the normal-tissue density.

        :param masks: Tissue masks as returned by :meth:`masks`.
        :type masks: dict[str, np.ndarray]

        :returns: Relative density array.
        :rtype: np.ndarray
        """
        table = load_tissue_table()
        density = np.full(masks["body"].shape, float(table["normal"]["density"]), dtype=float)
        density[masks["skin"]] = float(table["skin"]["density"])
        density[masks["tumor"]] = float(table["tumor"]["density"])
        return density
