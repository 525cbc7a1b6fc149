"""
Output data models for beam section analysis results.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class DesignStatus(str, Enum):
    """Status of a design check."""
    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"


class CalculationStep(BaseModel):
    """Single calculation step for transparency."""
    step_number: int
    description: str
    formula: str
    substitution: str
    result: float
    unit: str
    code_reference: Optional[str] = None


class CodeLimitsOutput(BaseModel):
    """Design limits derived from materials and design code."""
    design_code: str
    cd_max: float
    rho_max: float
    rho_min: float
    rho_des: float
    s_const: float  # MPa
    beta1: Optional[float] = None
    calculation_steps: list[CalculationStep]


class StationOutput(BaseModel):
    """Capacity and serviceability results at one station."""
    index: int
    position: float  # m from the first support
    moment_demand: float  # Mu (kNm)
    shear_demand: float  # Vu (kN)

    # Reinforcement
    steel_area: float  # As (mm²)
    effective_depth: float  # d (m)
    tension_face: str  # "top" or "bottom"

    # Flexure
    moment_capacity: float  # Mn (kNm)
    compression_depth: float  # xc (m)
    compression_centroid: float  # depth of compression centroid (m)
    lever_arm: float  # Z (m)
    moment_error_percent: Optional[float] = None
    target_reached: bool = True

    # Shear
    web_width: float  # bw (m)
    shear_depth: float  # d for shear (m)
    concrete_shear: float  # governing Vc (kN)
    stirrup_shear: float  # Vs (kN)
    shear_capacity: float  # Vn (kN)

    # Reinforcement ratio
    rho: float
    rho_within_limits: bool

    # Section properties
    gross_mi: float  # Ig (m⁴)
    cracked_mi: float  # Icr (m⁴)
    cracking_moment: float  # Mcr (kNm)
    effective_mi: float  # Ieff (m⁴)

    # Deflection (half span only)
    rotation: Optional[float] = None  # rad
    deflection: Optional[float] = None  # m

    status: DesignStatus = DesignStatus.PASS


class DeflectionOutput(BaseModel):
    """Rotation and deflection profile over the half span."""
    dx: float  # m
    rotation: list[float]  # rad
    deflection: list[float]  # m
    max_deflection: float  # m


class AnalysisOutput(BaseModel):
    """Complete analysis results."""
    design_code: str
    ieff_method: str
    span: float  # m
    limits: CodeLimitsOutput
    stations: list[StationOutput]
    deflection: DeflectionOutput
    status: DesignStatus
    warnings: List[str]

    def series(self, name: str) -> list:
        """Return one station attribute as a list along the span."""
        return [getattr(st, name) for st in self.stations]
