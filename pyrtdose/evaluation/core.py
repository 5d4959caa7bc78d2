"""
Core classes for radiobiological treatment evaluation.

This module defines:

- :class:`TreatmentEvaluationParameters`: beam and biological parameters of
  a single-beam treatment estimate.
- :class:`TreatmentEvaluation`: runs the 1-D energy deposition model,
  converts the result to tumor and healthy-tissue doses and derives TCP,
  NTCP and the plan category.
"""

from dataclasses import dataclass, asdict
from typing import Optional
import pandas as pd
from tabulate import tabulate

from pyrtdose.biology import radiobiology


@dataclass
class TreatmentEvaluationParameters:
    """
    Configuration container for a treatment evaluation.

    :ivar tumor_radius: Tumor radius [cm].
    :ivar beam_energy: Beam energy [MeV].
    :ivar particle_type: 'proton' or 'electron'.
    :ivar n_particles: Number of particles delivered.
    :ivar alpha: Tumor LQ linear coefficient [Gy⁻¹].
    :ivar beta: Tumor LQ quadratic coefficient [Gy⁻²].
    :ivar clonogens: Initial number of tumor clonogens.
    :ivar td50: Healthy-tissue TD50 [Gy].
    :ivar gamma: NTCP slope parameter.
    """

    tumor_radius: float = 500.0
    beam_energy: float = 160.0
    particle_type: str = "electron"
    n_particles: float = 1e12

    alpha: float = radiobiology.ALPHA_TUMOR
    beta: float = radiobiology.BETA_TUMOR
    clonogens: float = radiobiology.CLONOGENS
    td50: float = radiobiology.TD50
    gamma: float = radiobiology.NTCP_GAMMA

    def __post_init__(self):
        """
        Validate the parameters.

        :raises ValueError: If a value is out of range or the particle type is unsupported.
        """
        self.particle_type = str(self.particle_type).lower()
        if self.particle_type not in ("proton", "electron"):
            raise ValueError(f"Unsupported particle type: '{self.particle_type}'")
        if self.tumor_radius <= 0:
            raise ValueError("tumor_radius must be positive.")
        if self.beam_energy <= 0:
            raise ValueError("beam_energy must be positive.")
        if self.n_particles < 0:
            raise ValueError("n_particles must be non-negative.")
        if self.td50 <= 0 or self.gamma <= 0:
            raise ValueError("td50 and gamma must be positive.")

    @classmethod
    def from_dict(cls, config: dict) -> "TreatmentEvaluationParameters":
        """
        Create a TreatmentEvaluationParameters instance from a dictionary.

        :param config: Dictionary of parameters with keys matching the dataclass fields.
        :type config: dict

        :returns: A populated instance.
        :rtype: TreatmentEvaluationParameters

        :raises ValueError: If unknown keys are present in the configuration dictionary.
        """
        valid_keys = set(cls.__dataclass_fields__.keys())
        extra_keys = set(config.keys()) - valid_keys

        if extra_keys:
            raise ValueError(
                f"Unrecognized keys in TreatmentEvaluationParameters config: {sorted(extra_keys)}"
            )

        return cls(**config)


class TreatmentEvaluation:
    """
    Single-beam treatment estimate from a 1-D depth profile.

    After :meth:`compute`, ``self.result`` holds a dictionary with the
    physical doses, the RBE-weighted tumor dose, TCP, NTCP and the plan
    category.
    """

    def __init__(self, parameters: Optional[TreatmentEvaluationParameters] = None):
        """
        :param parameters: Evaluation parameters. Defaults are used if None.
        :type parameters: TreatmentEvaluationParameters, optional

        :raises TypeError: If parameters is not a TreatmentEvaluationParameters instance.
        """
        parameters = parameters if parameters is not None else TreatmentEvaluationParameters()
        if not isinstance(parameters, TreatmentEvaluationParameters):
            raise TypeError("parameters must be an instance of TreatmentEvaluationParameters")
        self.params = parameters
        self.result = None

    def __repr__(self):
        p = self.params
        return f"<TreatmentEvaluation | {p.particle_type}, E = {p.beam_energy} MeV, r = {p.tumor_radius} cm>"

    def summary(self):
        """
        Print the evaluation configuration.
        """
        print("\nTreatmentEvaluation Configuration")
        rows = [(k, v) for k, v in asdict(self.params).items()]
        print(tabulate(rows, headers=["Parameter", "Value"], tablefmt="fancy_grid"))

    def to_dataframe(self) -> pd.DataFrame:
        """
        Return the evaluation result as a one-row DataFrame.

        :raises ValueError: If :meth:`compute` has not been run.
        """
        if self.result is None:
            raise ValueError("No evaluation result available. Run 'compute()' first.")
        return pd.DataFrame([self.result])
