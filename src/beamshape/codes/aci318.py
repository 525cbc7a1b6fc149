"""
ACI 318 provisions (design code B).

Key clauses implemented:
- Clause 22.2.2.4.3: Stress block factor β1
- Clause 9.6.1.2: Minimum flexural reinforcement
- Clause 22.5.5.1: Concrete shear strength Vc (detailed method)
"""

import math
from typing import Optional, Tuple

from beamshape.materials import MaterialProperties
from beamshape.utils.constants import MOMENT_FLOOR
from .base_code import DesignCode, ConcreteShear


def aci318_concrete_shear(
    fc: float,
    rho: float,
    bw: float,
    d: float,
    Vu: float,
    Mu: float,
) -> Tuple[float, float, float, float]:
    """
    Concrete shear strength per ACI 318 detailed method.

    Vc1 = (0.16×√fc + 17×ρw×Vu×d/Mu) × bw × d
    Vc2 = 0.29×√fc × bw × d
    Vc = min(Vc1, Vc2)

    Vu×d/Mu is limited to 1.0 and taken as 1.0 where the moment vanishes.

    Args:
        fc: Concrete strength in MPa
        rho: Reinforcement ratio As / (bw × d)
        bw: Web width in mm
        d: Effective depth in mm
        Vu: Shear demand in kN
        Mu: Moment demand in kNm

    Returns:
        (Vc1, Vc2, Vc) in kN and the Vu×d/Mu ratio used
    """
    Mu_abs = abs(Mu)
    if Mu_abs < MOMENT_FLOOR:
        shear_span_ratio = 1.0
    else:
        shear_span_ratio = min(abs(Vu) * d / (Mu_abs * 1000), 1.0)

    Vc1 = (0.16 * math.sqrt(fc) + 17 * rho * shear_span_ratio) * bw * d / 1000
    Vc2 = 0.29 * math.sqrt(fc) * bw * d / 1000
    return Vc1, Vc2, min(Vc1, Vc2), shear_span_ratio


class ACI318(DesignCode):
    """
    ACI 318 - Building Code Requirements for Structural Concrete.
    """

    TENSION_FACTOR = 1.0

    RHO_MAX_FORMULA = "ρmax = 0.85×fc/fy × β1 × cd,max"

    @property
    def code_name(self) -> str:
        return "ACI 318"

    def get_beta1(self, fc: float) -> Optional[float]:
        """
        Stress block factor.

        β1 = 0.85 - 0.05 × (fc - 28) / 7
        """
        return 0.85 - 0.05 * ((fc - 28) / 7)

    def get_maximum_reinforcement_ratio(self, materials: MaterialProperties) -> float:
        fc, fy = materials.fc, materials.fy
        return 0.85 * fc / fy * self.get_beta1(fc) * materials.cd_max

    def get_shear_effective_depth(self, depth: float, cover: float) -> float:
        """
        Effective depth for shear.

        d = 0.96 × h - cover

        Args:
            depth: Overall section depth in m
            cover: Cover to steel centroid in mm
        """
        return 0.96 * depth - cover / 1000

    def get_concrete_shear(self, fc, rho, bw, d, Vu, Mu) -> ConcreteShear:
        Vc1, Vc2, Vc, ratio = aci318_concrete_shear(fc, rho, bw, d, Vu, Mu)
        return ConcreteShear(
            candidates={"aci318": Vc},
            governing=Vc,
            details={"Vc1": Vc1, "Vc2": Vc2, "Vud_Mu": ratio},
        )
