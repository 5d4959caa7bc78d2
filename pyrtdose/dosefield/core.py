"""
Core classes for planar dose-field synthesis.

This module defines:
- :class:`DoseFieldParameters`: configuration container for anatomy, grid and beam settings
- :class:`DoseField`: main interface for synthesizing, storing and exporting dose fields

A dose field is a 2-D array of relative dose (percent of its own maximum)
for one beam modality (photon, proton or electron) over a concentric-disc
phantom. Each DoseField instance manages the grid, the tissue masks, the
density map and the normalized fields, including saving and loading.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Optional, Tuple, Union, Sequence
from tabulate import tabulate
from pathlib import Path
import datetime
import logging
import pickle
import numpy as np

from pyrtdose.physics.anatomy import TissueModel
from pyrtdose.physics.beam_models import BEAM_MODELS

logger = logging.getLogger(__name__)
logger.setLevel(logging.WARNING)


@dataclass
class DoseFieldParameters:
    """
    Configuration container for DoseField anatomy, grid and beam parameters.

    :ivar body_diameter: Diameter of the body section and width of the grid (cm).
    :ivar tumor_radius: Tumor radius (cm).
    :ivar skin_thickness: Thickness of the skin layer around the tumor (cm).
    :ivar tumor_center: Tumor center (x, y) in cm.
    :ivar resolution: Number of grid points per axis.
    :ivar modalities: Beam modalities to synthesize.
    :ivar beam_options: Optional per-modality overrides forwarded to the beam
        model constructors, e.g. ``{"proton": {"peak_depth": 5.0}}``.
    """

    @classmethod
    def from_dict(cls, config: dict) -> "DoseFieldParameters":
        """
        Create a DoseFieldParameters instance from a dictionary.

        :param config: Dictionary of configuration fields.
        :type config: dict

        :returns: Populated DoseFieldParameters instance.
        :rtype: DoseFieldParameters

        :raises ValueError: If unknown keys are present in the dictionary.
        """
        valid_keys = set(cls.__dataclass_fields__.keys())
        extra_keys = set(config.keys()) - valid_keys

        if extra_keys:
            raise ValueError(
                f"Unrecognized keys in DoseFieldParameters config: {sorted(extra_keys)}"
            )

        return cls(**config)

    body_diameter: float = 9.0
    tumor_radius: float = 3.0
    skin_thickness: float = 1.5
    tumor_center: Tuple[float, float] = (0.0, 0.0)
    resolution: int = 512
    modalities: Sequence[str] = ("photon", "proton", "electron")
    beam_options: Dict[str, dict] = field(default_factory=dict)

    def __post_init__(self):
        """
        Validate grid and modality settings.

        :raises ValueError: If resolution is too small, a modality is unknown,
            or beam options reference an unknown modality.
        """
        if int(self.resolution) != self.resolution or self.resolution < 2:
            raise ValueError("resolution must be an integer >= 2.")
        self.resolution = int(self.resolution)

        self.modalities = tuple(str(m).lower() for m in self.modalities)
        if not self.modalities:
            raise ValueError("At least one modality must be requested.")
        unknown = [m for m in self.modalities if m not in BEAM_MODELS]
        if unknown:
            raise ValueError(f"Unsupported modalities: {unknown}. Choose from: {sorted(BEAM_MODELS)}")

        unknown_opts = [m for m in self.beam_options if m not in BEAM_MODELS]
        if unknown_opts:
            raise ValueError(f"beam_options given for unknown modalities: {unknown_opts}")

        # validates the anatomy early
        self.tissue_model()

    def tissue_model(self) -> TissueModel:
        """Build the :class:`TissueModel` described by these parameters."""
        return TissueModel(
            body_diameter=self.body_diameter,
            tumor_radius=self.tumor_radius,
            skin_thickness=self.skin_thickness,
            tumor_center=self.tumor_center,
        )


class DoseField:
    """
    Main handler for planar dose synthesis.

    After :meth:`compute`, the normalized fields are stored in ``self.fields``
    as a dictionary mapping modality names to 2-D arrays (percent of maximum).
    """

    def __init__(self, parameters: Optional[DoseFieldParameters] = None):
        """
        Initialize a DoseField with anatomy and grid configuration.

        :param parameters: Configuration. If None, default parameters are used.
        :type parameters: Optional[DoseFieldParameters]

        :raises TypeError: If parameters is not a DoseFieldParameters instance.
        """
        parameters = parameters if parameters is not None else DoseFieldParameters()
        if not isinstance(parameters, DoseFieldParameters):
            raise TypeError("parameters must be an instance of DoseFieldParameters")
        self.params = parameters
        self.anatomy = parameters.tissue_model()
        self.fields: Dict[str, np.ndarray] = {}
        self.beams = {}
        self.x = self.y = self.X = self.Y = None
        self.depth = None
        self.masks: Dict[str, np.ndarray] = {}
        self.density = None

    def __repr__(self):
        computed = ", ".join(self.fields) or "none"
        return (f"<DoseField D={self.params.body_diameter} cm, r_t={self.params.tumor_radius} cm, "
                f"n={self.params.resolution}, computed={computed}>")

    @property
    def spacing(self) -> float:
        """Grid spacing in cm."""
        return self.params.body_diameter / (self.params.resolution - 1)

    def _require_fields(self):
        if not self.fields:
            raise ValueError("No computed dose fields found. Run 'compute()' first.")

    def get_field(self, modality: str) -> np.ndarray:
        """
        Retrieve the normalized dose field of a modality.

        :param modality: 'photon', 'proton' or 'electron'.
        :type modality: str

        :returns: 2-D array of relative dose (percent).
        :rtype: np.ndarray

        :raises ValueError: If nothing has been computed or the modality is missing.
        """
        self._require_fields()
        key = str(modality).lower()
        if key not in self.fields:
            raise ValueError(f"Modality '{modality}' not found in computed fields: {list(self.fields)}")
        return self.fields[key]

    def summary(self, verbose: bool = False):
        """
        Print a summary of the current DoseField configuration.

        :param verbose: If True, also list the beam model settings.
        :type verbose: bool, optional
        """
        p = self.params
        main_parameters = [
            ("Body diameter [cm]", p.body_diameter),
            ("Tumor radius [cm]", p.tumor_radius),
            ("Skin thickness [cm]", p.skin_thickness),
            ("Tumor center [cm]", p.tumor_center),
            ("Grid resolution", p.resolution),
            ("Grid spacing [cm]", f"{self.spacing:.4f}"),
        ]

        print("\nDoseField Configuration")
        print(f"\nModalities: {', '.join(p.modalities)}")
        print(tabulate(main_parameters, headers=["Parameter", "Value"], tablefmt="fancy_grid"))

        if verbose:
            beam_rows = []
            for modality in p.modalities:
                opts = p.beam_options.get(modality, {})
                beam_rows.append((modality, opts if opts else "defaults"))
            print()
            print(tabulate(beam_rows, headers=["Beam", "Options"], tablefmt="fancy_grid"))

    def display(self):
        """
        Print per-tissue dose statistics for every computed modality.

        :raises ValueError: If no fields have been computed.
        """
        self._require_fields()

        print("\n📊 Computed Dose Fields:")
        for modality in self.fields:
            beam = self.beams.get(modality)
            print(f"\n🔹 {beam.label if beam is not None else modality}")
            stats = self.dose_statistics(modality)
            print(tabulate(stats, headers="keys", tablefmt="fancy_grid", showindex=False, floatfmt=".2f"))
            print(f"Peak depth on central axis: {self.peak_depth(modality):.2f} cm")
            print("-" * 60)

    def _default_filename(self, extension: str = ".pkl") -> Path:
        """
        Generate a default filename based on anatomy and grid settings.

        :param extension: File extension.
        :type extension: str

        :returns: Path object pointing to default output location.
        :rtype: Path
        """
        root = Path.home() / ".pyRTDose" / extension.strip(".")
        root.mkdir(parents=True, exist_ok=True)
        suffix = extension if extension.startswith(".") else f".{extension}"

        p = self.params
        mods = "-".join(self.fields) if self.fields else "empty"
        timestamp = datetime.datetime.now().strftime('%Y%m%d_%H%M%S')
        filename = (f"dosefield_{mods}_D{p.body_diameter:.1f}_rt{p.tumor_radius:.1f}"
                    f"_skin{p.skin_thickness:.1f}_n{p.resolution}_{timestamp}{suffix}")
        return root / filename

    def save(self, filename: Optional[Union[str, Path]] = None) -> Path:
        """
        Save the computed dose fields and their configuration to a pickle file.

        :param filename: Optional output file path. If None, uses default name.
        :type filename: str or Path, optional

        :returns: Path of the written file.
        :rtype: Path

        :raises ValueError: If no fields have been computed.
        """
        if not self.fields:
            raise ValueError("Cannot save: DoseField has not been computed yet. Run 'compute()' first.")
        path = Path(filename) if filename else self._default_filename(".pkl")
        payload = {
            "params": asdict(self.params),
            "fields": self.fields,
        }
        with open(path, "wb") as f:
            pickle.dump(payload, f)
        print(f"✅ Dose fields saved to: {path}")
        return path

    def load(self, filename: Union[str, Path]):
        """
        Load previously saved dose fields from a pickle file.

        The stored configuration replaces the current one and the grid,
        masks and density map are rebuilt from it.

        :param filename: Path to the .pkl file.
        :type filename: str or Path

        :raises FileNotFoundError: If the specified file does not exist.
        """
        path = Path(filename)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        with open(path, "rb") as f:
            payload = pickle.load(f)

        self.params = DoseFieldParameters.from_dict(payload["params"])
        self.anatomy = self.params.tissue_model()
        self._build_geometry()
        self.fields = {}
        for modality, values in payload["fields"].items():
            values = np.array(values, dtype=float)
            values.setflags(write=False)
            self.fields[modality] = values
        print(f"📂 Dose fields loaded from: {path}")
