"""
Read-out utilities for computed dose fields.

This module adds the following methods to :class:`DoseField`:

- :meth:`central_axis_index`: column of the beam central axis
- :meth:`central_axis_profile`: depth-dose profile along that column
- :meth:`peak_depth`: depth of the profile maximum (Bragg peak for protons)
- :meth:`isodose_depths`: depths at which the profile crosses a dose level
- :meth:`dose_statistics`: per-tissue dose summary
"""

from typing import Dict, Sequence
import numpy as np
import pandas as pd

from pyrtdose.physics.anatomy import TISSUES
from pyrtdose.utils.interpolation import Interpolator

from .core import DoseField

ISODOSE_LEVELS = (50, 80, 95)


def central_axis_index(self: DoseField, modality: str, threshold: float = 5.0) -> int:
    """
    Locate the central-axis column of a dose field.

    The central axis is the column with the largest number of points above
    ``threshold`` percent; ties resolve to the first such column.

    :param modality: Computed modality.
    :type modality: str
    :param threshold: Dose threshold in percent.
    :type threshold: float

    :returns: Column index into the x axis.
    :rtype: int
    """
    dose = self.get_field(modality)
    counts = np.sum(dose > threshold, axis=0)
    return int(np.argmax(counts))


def central_axis_profile(self: DoseField, modality: str, threshold: float = 5.0) -> pd.DataFrame:
    """
    Depth-dose profile along the central axis.

    :param modality: Computed modality.
    :type modality: str
    :param threshold: Threshold used to locate the central axis.
    :type threshold: float

    :returns: DataFrame with columns ``y`` [cm], ``depth`` [cm] and ``dose`` [%],
        sorted by increasing depth. Only points inside the body are kept.
    :rtype: pandas.DataFrame
    """
    dose = self.get_field(modality)
    idx = self.central_axis_index(modality, threshold)
    # off-axis columns start and end outside the body disc
    inside = self.masks["body"][:, idx]
    df = pd.DataFrame({
        "y": self.y[inside],
        "depth": self.depth[inside, idx],
        "dose": dose[inside, idx],
    })
    return df.sort_values("depth").reset_index(drop=True)


def peak_depth(self: DoseField, modality: str) -> float:
    """
    Depth of the maximum of the central-axis profile.

    :param modality: Computed modality.
    :type modality: str

    :returns: Peak depth in cm.
    :rtype: float
    """
    profile = self.central_axis_profile(modality)
    return float(profile["depth"].iloc[int(profile["dose"].values.argmax())])


def isodose_depths(self: DoseField, modality: str, level: float) -> np.ndarray:
    """
    Depths at which the central-axis profile crosses a dose level.

    Peaked curves (build-up, Bragg peak) may cross a level more than once;
    all crossings are returned in increasing depth order.

    :param modality: Computed modality.
    :type modality: str
    :param level: Dose level in percent of maximum.
    :type level: float

    :returns: Array of crossing depths in cm (possibly empty).
    :rtype: np.ndarray

    :raises ValueError: If level is outside [0, 100].
    """
    if not 0 <= level <= 100:
        raise ValueError("Dose level must be within [0, 100] percent.")
    profile = self.central_axis_profile(modality)
    interp = Interpolator(profile["depth"].values, profile["dose"].values)
    if level > profile["dose"].max() or level < profile["dose"].min():
        return np.array([])
    return interp.interpolate(dose=level)[float(level)]


def isodose_table(self: DoseField, modality: str, levels: Sequence[float] = ISODOSE_LEVELS) -> Dict[float, np.ndarray]:
    """
    Crossing depths for several dose levels.

    :param modality: Computed modality.
    :type modality: str
    :param levels: Dose levels in percent.
    :type levels: Sequence[float]

    :returns: Mapping level → crossing depths.
    :rtype: dict[float, np.ndarray]
    """
    return {float(level): self.isodose_depths(modality, level) for level in levels}


def dose_statistics(self: DoseField, modality: str, coverage_level: float = 95.0) -> pd.DataFrame:
    """
    Per-tissue dose statistics.

    :param modality: Computed modality.
    :type modality: str
    :param coverage_level: Dose level (percent) used for the coverage column.
    :type coverage_level: float

    :returns: DataFrame with one row per tissue and columns ``tissue``,
        ``voxels``, ``min``, ``mean``, ``max`` and ``coverage`` (fraction of
        voxels at or above ``coverage_level``).
    :rtype: pandas.DataFrame
    """
    dose = self.get_field(modality)
    rows = []
    for tissue in TISSUES:
        values = dose[self.masks[tissue]]
        if values.size == 0:
            rows.append({"tissue": tissue, "voxels": 0, "min": np.nan, "mean": np.nan,
                         "max": np.nan, "coverage": np.nan})
            continue
        rows.append({
            "tissue": tissue,
            "voxels": int(values.size),
            "min": float(values.min()),
            "mean": float(values.mean()),
            "max": float(values.max()),
            "coverage": float(np.mean(values >= coverage_level)),
        })
    return pd.DataFrame(rows)


DoseField.central_axis_index = central_axis_index
DoseField.central_axis_profile = central_axis_profile
DoseField.peak_depth = peak_depth
DoseField.isodose_depths = isodose_depths
DoseField.isodose_table = isodose_table
DoseField.dose_statistics = dose_statistics
