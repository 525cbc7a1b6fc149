"""
Shear capacity of arbitrary concrete sections.

The governing web width is the narrowest width found when the depth is
divided into M equal increments, so the waist of an I- or T-section governs.
The concrete contribution Vc comes from the selected design code and is
combined with the stirrup resistance Vs:

    Vn = 0.5 × Vc        when no stirrups are provided (Vs below tolerance)
    Vn = Vc + Vs         otherwise

Stirrup resistance for a given layout:

    Vs = 0.87 × fy × Av × d × (sin θ + cos θ) / s
"""

import logging
import math
import warnings
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from beamshape.codes import DesignCode, get_design_code
from beamshape.core.reinforcement import ReinforcementDesign
from beamshape.exceptions import DegenerateGeometryWarning
from beamshape.geometry import SectionProfile
from beamshape.materials import MaterialProperties
from beamshape.models.outputs import CalculationStep, DesignStatus
from beamshape.utils.constants import (
    DEFAULT_COVER, DEFAULT_SUBDIVISIONS, GEOMETRY_TOLERANCE, RATIO_FLOOR, SHEAR_TOLERANCE
)

logger = logging.getLogger(__name__)


@dataclass
class ShearResult:
    """Internal result from shear capacity calculations."""
    status: DesignStatus

    # Design forces
    design_shear: float  # Vu (kN)
    design_moment: float  # Mu (kNm)

    # Geometry
    web_width: float  # bw (m)
    web_level: float  # depth of the narrowest cut below the top fibre (m)
    effective_depth: float  # d (m)
    rho: float  # As / (bw × d)

    # Resistance
    concrete_candidates: Dict[str, float]  # Vc per formula (kN)
    concrete_shear: float  # governing Vc (kN)
    stirrup_shear: float  # Vs (kN)
    shear_capacity: float  # Vn (kN)
    shear_reinf_provided: bool
    error_percent: Optional[float]

    details: Dict[str, float] = field(default_factory=dict)
    steps: List[CalculationStep] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def stirrup_shear_resistance(
    materials: MaterialProperties,
    depth: float,
    diameter: float,
    spacing: float,
    angle: float = 90.0,
) -> float:
    """
    Shear resistance of one stirrup set.

    Args:
        materials: Material constants (fy)
        depth: Section depth in m
        diameter: Stirrup bar diameter in mm
        spacing: Stirrup spacing in mm
        angle: Inclination to the beam axis in degrees

    Returns:
        Vs in kN
    """
    if spacing <= 0:
        raise ValueError(f"Stirrup spacing must be positive, got {spacing}")
    Av = math.pi * diameter ** 2 / 4
    theta = math.radians(angle)
    d = depth * 1000
    return 0.87 * materials.fy * Av * d * (math.sin(theta) + math.cos(theta)) / (1000 * spacing)


class ShearSolver:
    """
    Shear capacity from a minimum web width search and code formulas.
    """

    def __init__(self, code: DesignCode = None, subdivisions: int = DEFAULT_SUBDIVISIONS):
        if subdivisions <= 2:
            raise ValueError(f"subdivisions must be an integer greater than 2, got {subdivisions}")
        self.code = code or get_design_code()
        self.subdivisions = subdivisions

    def find_web_width(self, profile: SectionProfile) -> Tuple[float, float]:
        """
        Narrowest width over the interior division levels k/M × h, k = 1 .. M-1.

        Returns:
            (bw, level) in m, level measured down from the top fibre;
            bw is 0 when no division level cuts the section
        """
        h = profile.depth
        best = None
        for k in range(1, self.subdivisions):
            level = k / self.subdivisions * h
            width = profile.width_at_depth(level)
            if width > 0 and (best is None or width < best[0]):
                best = (width, level)
        if best is None:
            return 0.0, h / 2
        return best

    def solve(
        self,
        moment: float,                       # Mu (kNm)
        shear: float,                        # Vu (kN)
        profile: SectionProfile,
        reinforcement: ReinforcementDesign,
        materials: MaterialProperties,
        stirrup_shear: Optional[float] = None,  # Vs (kN)
        cover: float = DEFAULT_COVER,        # mm
        station: int = 0,
    ) -> ShearResult:
        """
        Shear capacity of one station.

        Args:
            moment: Moment demand in kNm
            shear: Shear demand in kN
            profile: Concrete section
            reinforcement: Tension steel at this station
            materials: Material constants
            stirrup_shear: Stirrup resistance Vs in kN (None = no stirrups)
            cover: Cover to steel centroid in mm
            station: Station index for messages

        Returns:
            ShearResult with complete capacity details
        """
        fc = materials.fc
        steps = []
        notes = []

        def degenerate(msg):
            warnings.warn(msg, DegenerateGeometryWarning, stacklevel=3)
            notes.append(msg)

        bw, level = self.find_web_width(profile)
        if bw <= GEOMETRY_TOLERANCE:
            bw_mid = profile.width_at_depth(profile.depth / 2)
            if bw_mid > GEOMETRY_TOLERANCE:
                degenerate(f"Station {station}: no web width found; using mid-depth width")
                bw, level = bw_mid, profile.depth / 2
            else:
                degenerate(f"Station {station}: web width {bw:.2e} m clamped to tolerance")
                bw = GEOMETRY_TOLERANCE

        steps.append(CalculationStep(
            step_number=1,
            description="Web width (bw)",
            formula=f"min width over {self.subdivisions - 1} depth cuts",
            substitution=f"narrowest at {level * 1000:.0f} mm below top",
            result=round(bw * 1000, 1),
            unit="mm",
            code_reference=""
        ))

        d = self.code.get_shear_effective_depth(profile.depth, cover)
        if d <= GEOMETRY_TOLERANCE:
            degenerate(f"Station {station}: shear depth {d:.4f} m clamped to tolerance")
            d = GEOMETRY_TOLERANCE

        steps.append(CalculationStep(
            step_number=2,
            description="Effective depth for shear (d)",
            formula="d = h" if d == profile.depth else "d = 0.96×h - cover",
            substitution=f"h = {profile.depth * 1000:.0f} mm, cover = {cover:.0f} mm",
            result=round(d * 1000, 1),
            unit="mm",
            code_reference=self.code.code_name
        ))

        bw_mm, d_mm = bw * 1000, d * 1000
        rho = reinforcement.As / (bw_mm * d_mm)
        if rho <= RATIO_FLOOR:
            degenerate(f"Station {station}: reinforcement ratio {rho:.2e} floored to {RATIO_FLOOR}")
            rho = RATIO_FLOOR

        steps.append(CalculationStep(
            step_number=3,
            description="Reinforcement ratio (ρ)",
            formula="ρ = As / (bw × d)",
            substitution=f"= {reinforcement.As:.0f} / ({bw_mm:.0f} × {d_mm:.0f})",
            result=round(rho, 5),
            unit="",
            code_reference=""
        ))

        concrete = self.code.get_concrete_shear(fc, rho, bw_mm, d_mm, shear, moment)
        Vc = concrete.governing
        steps.append(CalculationStep(
            step_number=4,
            description="Concrete shear resistance (Vc)",
            formula="Vc = min(" + ", ".join(concrete.candidates) + ")",
            substitution=", ".join(f"{k} = {v:.1f}" for k, v in concrete.candidates.items()),
            result=round(Vc, 2),
            unit="kN",
            code_reference=self.code.code_name
        ))

        Vs = 0.0 if stirrup_shear is None else stirrup_shear
        provided = not math.isnan(Vs) and Vs >= SHEAR_TOLERANCE
        # min() hides a NaN candidate, so every input is checked
        undefined = [Vc, Vs, shear, moment, *concrete.candidates.values()]
        if any(math.isnan(v) for v in undefined):
            Vn = 0.0
            notes.append(f"Station {station}: shear capacity undefined (NaN); Vn set to 0")
        elif not provided:
            Vn = 0.5 * Vc
        else:
            Vn = Vc + Vs

        steps.append(CalculationStep(
            step_number=5,
            description="Shear capacity (Vn)",
            formula="Vn = Vc + Vs" if provided else "Vn = 0.5 × Vc (no stirrups)",
            substitution=f"Vc = {Vc:.1f}, Vs = {Vs:.1f}",
            result=round(Vn, 2),
            unit="kN",
            code_reference=""
        ))

        Vu = abs(shear)
        error = (Vn - Vu) / Vu * 100 if Vu > SHEAR_TOLERANCE else None
        status = DesignStatus.PASS if Vn >= Vu else DesignStatus.FAIL

        logger.debug(
            "Station %d: bw = %.4f m, d = %.4f m, rho = %.5f, Vc = %.2f kN, Vn = %.2f kN",
            station, bw, d, rho, Vc, Vn
        )

        return ShearResult(
            status=status,
            design_shear=shear,
            design_moment=moment,
            web_width=bw,
            web_level=level,
            effective_depth=d,
            rho=rho,
            concrete_candidates=dict(concrete.candidates),
            concrete_shear=Vc,
            stirrup_shear=Vs,
            shear_capacity=Vn,
            shear_reinf_provided=provided,
            error_percent=error,
            details=dict(concrete.details),
            steps=steps,
            warnings=notes,
        )
