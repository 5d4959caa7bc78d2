"""
Computation engine for DoseField.

This module defines the logic to synthesize planar dose fields for the
photon, proton and electron beam models over the concentric-disc phantom.

For every modality the engine:
  - evaluates the closed-form beam model on the depth / lateral grid
    using the local tissue density
  - zeroes the dose outside the body
  - normalizes the field to a maximum of exactly 100
"""

import logging
import time
from typing import List, Optional
import numpy as np
from tqdm import tqdm

from pyrtdose.physics.beam_models import get_beam_model
from pyrtdose.utils.geometry_tools import GeometryTools

from .core import DoseField

logger = logging.getLogger(__name__)
logger.setLevel(logging.WARNING)


def normalize_dose(dose: np.ndarray, body_mask: np.ndarray) -> np.ndarray:
    """
    Mask a dose array to the body and scale it to a maximum of 100.

    :param dose: Raw dose array.
    :type dose: np.ndarray
    :param body_mask: Boolean body mask with the same shape.
    :type body_mask: np.ndarray

    :returns: Normalized dose (percent of maximum), zero outside the body.
    :rtype: np.ndarray

    :raises ValueError: If shapes differ or the masked dose has no positive maximum.
    """
    dose = np.asarray(dose, dtype=float)
    if dose.shape != body_mask.shape:
        raise ValueError(f"Dose shape {dose.shape} does not match mask shape {body_mask.shape}.")
    masked = dose * body_mask
    peak = masked.max()
    if not np.isfinite(peak) or peak <= 0:
        raise ValueError("Cannot normalize a dose field without a positive maximum inside the body.")
    normalized = masked / peak * 100
    normalized.setflags(write=False)
    return normalized


def _build_geometry(self: DoseField) -> None:
    """
    Build grid, depth map, tissue masks and density map from the parameters.
    """
    p = self.params
    self.x, self.y, self.X, self.Y = GeometryTools.build_grid(p.body_diameter, p.resolution)
    self.depth = GeometryTools.depth_from_surface(self.Y, surface=p.body_diameter / 2)
    self.depth.setflags(write=False)
    self.masks = self.anatomy.masks(self.X, self.Y)
    self.density = self.anatomy.density_map(self.masks)
    self.density.setflags(write=False)
    self.beams = {
        m: get_beam_model(m, **p.beam_options.get(m, {}))
        for m in p.modalities
    }
    logger.info("Built %dx%d grid (spacing %.4f cm)", p.resolution, p.resolution, self.spacing)


def compute(self: DoseField, modalities: Optional[List[str]] = None) -> None:
    """
    Synthesize normalized dose fields.

    Results are stored in ``self.fields``; previously computed modalities
    not requested again are kept.

    :param self: DoseField instance.
    :type self: DoseField
    :param modalities: Modalities to compute. If None, all configured modalities are used.
    :type modalities: list[str], optional

    :raises ValueError: If a requested modality is not configured.
    """
    requested = [str(m).lower() for m in (modalities or self.params.modalities)]
    missing = [m for m in requested if m not in self.params.modalities]
    if missing:
        raise ValueError(f"Modalities {missing} are not configured. Available: {list(self.params.modalities)}")

    start_time = time.time()
    if self.X is None:
        self._build_geometry()

    # beam axis runs along x = 0
    for modality in tqdm(requested, desc="Dose fields", unit="beam"):
        beam = self.beams[modality]
        raw = beam.dose(self.depth, self.X, self.density)
        self.fields[modality] = normalize_dose(raw, self.masks["body"])
        logger.info("Computed %s field", beam.label)

    elapsed = time.time() - start_time
    logger.info("Dose synthesis completed in %.2f seconds.", elapsed)


DoseField.compute = compute
DoseField._build_geometry = _build_geometry
