"""
IS 456:2000 code provisions (design code A).

Key clauses implemented:
- Clause 38.1: Limiting depth of neutral axis (0.36 fck stress block, 0.87 fy)
- Clause 26.5.1: Minimum and maximum reinforcement
- Clause 40.2 / Table 19: Design shear strength of concrete τc (closed form)
"""

import math

from beamshape.materials import MaterialProperties
from beamshape.utils.constants import RATIO_FLOOR
from .aci318 import aci318_concrete_shear
from .base_code import DesignCode, ConcreteShear


def is456_shear_stress(fc: float, rho: float) -> float:
    """
    Design shear strength of concrete τc (closed form of Table 19).

    β = max(0.8×fck / (6.89×pt), 1.0), pt in percent
    τc = 0.85 × √(0.8×fck) × (√(1 + 5β) - 1) / (6β)

    Args:
        fc: Concrete strength in MPa
        rho: Reinforcement ratio As / (bw × d)

    Returns:
        τc in MPa
    """
    pt = max(rho, RATIO_FLOOR) * 100
    beta = max(0.8 * fc / (6.89 * pt), 1)
    return 0.85 * math.sqrt(0.8 * fc) * (math.sqrt(1 + 5 * beta) - 1) / (6 * beta)


class IS456(DesignCode):
    """
    IS 456:2000 - Indian Standard for Plain and Reinforced Concrete.
    """

    # Clause 38.1: design stress in steel is 0.87 fy
    TENSION_FACTOR = 0.87

    RHO_MAX_FORMULA = "ρmax = 0.36×fc / (0.87×fy) × cd,max"

    @property
    def code_name(self) -> str:
        return "IS 456:2000"

    def get_maximum_reinforcement_ratio(self, materials: MaterialProperties) -> float:
        fc, fy = materials.fc, materials.fy
        return 0.36 * fc / (0.87 * fy) * materials.cd_max

    def get_shear_effective_depth(self, depth: float, cover: float) -> float:
        """Overall principal depth of the section (m); cover is not deducted."""
        return depth

    def get_concrete_shear(self, fc, rho, bw, d, Vu, Mu) -> ConcreteShear:
        """
        Concrete shear resistance.

        The IS 456 value is checked against the ACI 318 value and the
        smaller one governs.
        """
        tau_c = is456_shear_stress(fc, rho)
        Vc_is = tau_c * bw * d / 1000
        Vc1, Vc2, Vc_aci, ratio = aci318_concrete_shear(fc, rho, bw, d, Vu, Mu)
        return ConcreteShear(
            candidates={"is456": Vc_is, "aci318": Vc_aci},
            governing=min(Vc_is, Vc_aci),
            details={"tau_c": tau_c, "Vc1": Vc1, "Vc2": Vc2, "Vud_Mu": ratio},
        )
