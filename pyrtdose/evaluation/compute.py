"""
Computation of TCP and NTCP for a single-beam treatment.

This module defines :meth:`TreatmentEvaluation.compute`, which chains:

1. energy deposition along depth and conversion to tumor / shell dose
2. RBE weighting of the tumor dose (protons)
3. linear-quadratic survival and Poisson TCP
4. Lyman-type NTCP of the healthy shell
5. plan classification
"""

import logging

from pyrtdose.biology.radiobiology import (
    apply_rbe,
    classify_plan,
    linear_quadratic_survival,
    normal_tissue_complication_probability,
    relative_biological_effectiveness,
    tumor_control_probability,
)
from pyrtdose.physics.energy_deposition import simulate_energy_deposition

from .core import TreatmentEvaluation

logger = logging.getLogger(__name__)
logger.setLevel(logging.WARNING)


def compute(self: TreatmentEvaluation) -> dict:
    """
    Evaluate the configured treatment.

    :returns: The result dictionary, also stored in ``self.result``.
    :rtype: dict
    """
    p = self.params
    dose_tumor, dose_healthy = simulate_energy_deposition(
        p.tumor_radius, p.beam_energy, p.particle_type, p.n_particles
    )
    if dose_healthy == 0:
        logger.warning("Healthy shell lies beyond the depth axis; NTCP is zero.")

    weighted_dose = apply_rbe(dose_tumor, p.particle_type)
    sf = float(linear_quadratic_survival(weighted_dose, p.alpha, p.beta))
    tcp = float(tumor_control_probability(weighted_dose, p.alpha, p.beta, p.clonogens))
    ntcp = float(normal_tissue_complication_probability(dose_healthy, p.td50, p.gamma))

    self.result = {
        "particle": p.particle_type,
        "energy": p.beam_energy,
        "dose_tumor": dose_tumor,
        "dose_healthy": dose_healthy,
        "rbe": relative_biological_effectiveness(p.particle_type),
        "dose_tumor_rbe": weighted_dose,
        "survival_fraction": sf,
        "tcp": tcp,
        "ntcp": ntcp,
        "plan": classify_plan(tcp, ntcp),
    }
    logger.info("Evaluated %s plan: TCP=%.4f NTCP=%.4f", p.particle_type, tcp, ntcp)
    return self.result


TreatmentEvaluation.compute = compute
