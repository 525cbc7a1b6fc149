"""
Abstract base class for design code provisions.
Enables switching between the IS 456 (code A) and ACI 318 (code B) rule sets.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from beamshape.materials import MaterialProperties
from beamshape.models.outputs import CalculationStep


@dataclass(frozen=True)
class CodeLimits:
    """Code-derived design limits and the steel sizing constant."""
    cd_max: float       # ec / (ec + es)
    rho_max: float      # Maximum reinforcement ratio
    rho_min: float      # Minimum reinforcement ratio
    rho_des: float      # Design reinforcement ratio (0.66 × rho_max)
    s_const: float      # Tensile steel stress constant for sizing (MPa)
    beta1: Optional[float] = None  # Stress block factor (code B only)
    steps: List[CalculationStep] = field(default_factory=list, compare=False)


@dataclass(frozen=True)
class ConcreteShear:
    """Concrete shear resistance candidates for one station (kN)."""
    candidates: Dict[str, float]
    governing: float
    details: Dict[str, float] = field(default_factory=dict)


class DesignCode(ABC):
    """
    Abstract base class for concrete design codes.

    Purpose:
    - Define interface for code-specific provisions
    - Centralize the formula sets selected by the design code option
    - Share the limits common to both codes
    """

    # Fraction of yield used to convert steel area to tension force
    TENSION_FACTOR = 1.0

    # Shown in calculation steps
    RHO_MAX_FORMULA = ""

    @property
    @abstractmethod
    def code_name(self) -> str:
        """Return the code name/version."""
        pass

    @abstractmethod
    def get_maximum_reinforcement_ratio(self, materials: MaterialProperties) -> float:
        """Return maximum reinforcement ratio (As / b·d)."""
        pass

    @abstractmethod
    def get_shear_effective_depth(self, depth: float, cover: float) -> float:
        """Return effective depth (m) used in the shear formulas."""
        pass

    @abstractmethod
    def get_concrete_shear(
        self,
        fc: float,
        rho: float,
        bw: float,
        d: float,
        Vu: float,
        Mu: float,
    ) -> ConcreteShear:
        """Return concrete shear resistance candidates and the governing value."""
        pass

    def get_beta1(self, fc: float) -> Optional[float]:
        """Return the stress block factor beta1, if the code uses one."""
        return None

    def get_minimum_reinforcement_ratio(self, materials: MaterialProperties) -> float:
        """
        Minimum reinforcement ratio.

        rho_min = max(0.25×√fc / fy, 1.4 / fy)
        """
        fc, fy = materials.fc, materials.fy
        return max(0.25 * math.sqrt(fc) / fy, 1.4 / fy)

    def get_tension_force(self, As: float, fy: float) -> float:
        """
        Tension force in the longitudinal steel.

        Args:
            As: Steel area in mm²
            fy: Yield strength in MPa

        Returns:
            Tension force in kN
        """
        return self.TENSION_FACTOR * fy * As / 1000

    def get_limits(self, materials: MaterialProperties) -> CodeLimits:
        """
        Derive code limits and the steel sizing constant.

        sConst depends on the code only through rho_max; the sizing formula
        itself is the same for both codes.
        """
        fc, fy = materials.fc, materials.fy
        steps = []

        cd_max = materials.cd_max
        steps.append(CalculationStep(
            step_number=1,
            description="Balanced neutral axis ratio",
            formula="cd,max = εc / (εc + εs)",
            substitution=f"= {materials.ec} / ({materials.ec} + {materials.es})",
            result=round(cd_max, 5),
            unit="",
            code_reference=self.code_name
        ))

        beta1 = self.get_beta1(fc)
        rho_max = self.get_maximum_reinforcement_ratio(materials)
        steps.append(CalculationStep(
            step_number=2,
            description="Maximum reinforcement ratio",
            formula=self.RHO_MAX_FORMULA,
            substitution=f"fc = {fc}, fy = {fy}, cd,max = {cd_max:.4f}"
                         + (f", β1 = {beta1:.4f}" if beta1 is not None else ""),
            result=round(rho_max, 5),
            unit="",
            code_reference=self.code_name
        ))

        rho_min = self.get_minimum_reinforcement_ratio(materials)
        steps.append(CalculationStep(
            step_number=3,
            description="Minimum reinforcement ratio",
            formula="ρmin = max(0.25×√fc / fy, 1.4 / fy)",
            substitution=f"= max(0.25×√{fc} / {fy}, 1.4 / {fy})",
            result=round(rho_min, 5),
            unit="",
            code_reference=self.code_name
        ))

        rho_des = 0.66 * rho_max
        s_const = 0.87 * fy * (1 - 1.005 * rho_des * fy / fc)
        steps.append(CalculationStep(
            step_number=4,
            description="Steel sizing constant",
            formula="sConst = 0.87×fy×(1 - 1.005×ρdes×fy/fc), ρdes = 0.66×ρmax",
            substitution=f"= 0.87×{fy}×(1 - 1.005×{rho_des:.5f}×{fy}/{fc})",
            result=round(s_const, 2),
            unit="MPa",
            code_reference=""
        ))

        return CodeLimits(
            cd_max=cd_max,
            rho_max=rho_max,
            rho_min=rho_min,
            rho_des=rho_des,
            s_const=s_const,
            beta1=beta1,
            steps=steps,
        )
