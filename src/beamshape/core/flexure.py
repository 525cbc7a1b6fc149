"""
Flexural capacity of arbitrary concrete sections.

The compression block is found by scanning cutting depths from the extreme
compression fibre towards the tension face until the compression zone area
reaches the area needed to balance the yielded steel:

    Ac,req = As × 0.87 × fy / (0.36 × fc)

The scan uses M equal depth increments and keeps the first cut whose area
reaches Ac,req (no interpolation), so the lever arm is short by at most one
increment and the capacity errs on the safe side.

    Mn = T × Z,  T = k × fy × As   (k = 0.87 for IS 456, 1.0 for ACI 318)
"""

import logging
import warnings
from dataclasses import dataclass, field
from typing import List, Optional

from beamshape.codes import DesignCode, get_design_code
from beamshape.core.reinforcement import ReinforcementDesign
from beamshape.exceptions import UnderReinforcedWarning
from beamshape.geometry import SectionProfile, ZoneProperties
from beamshape.materials import MaterialProperties
from beamshape.models.outputs import CalculationStep, DesignStatus
from beamshape.utils.constants import DEFAULT_SUBDIVISIONS, MOMENT_FLOOR

logger = logging.getLogger(__name__)


@dataclass
class FlexureResult:
    """Internal result from the flexural capacity search."""
    status: DesignStatus

    design_moment: float  # Mu (kNm)
    required_area: float  # Ac,req (m²)

    # Compression block
    compression_depth: float  # xc (m)
    compression_area: float  # Ac (m²)
    compression_centroid: float  # depth of Ac centroid from compression face (m)
    zone: ZoneProperties
    target_reached: bool

    # Capacity
    steel_depth: float  # d (m)
    lever_arm: float  # Z (m)
    tension_force: float  # T (kN)
    moment_capacity: float  # Mn (kNm)
    error_percent: Optional[float]  # (Mn - |Mu|) / |Mu| × 100

    steps: List[CalculationStep] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def required_compression_area(As: float, fc: float, fy: float) -> float:
    """
    Compression block area that balances the yielded steel.

    Args:
        As: Steel area in mm²
        fc: Concrete strength in MPa
        fy: Steel yield strength in MPa

    Returns:
        Area in m²
    """
    return As * 1e-6 * 0.87 * fy / (0.36 * fc)


def find_compression_zone(
    profile: SectionProfile,
    required_area: float,
    subdivisions: int,
    from_top: bool = True,
) -> ZoneProperties:
    """
    Scan cutting depths j/M × h (j = 1 .. M-1) until the zone area reaches
    ``required_area``; return the last zone evaluated.
    """
    h = profile.depth
    zone = profile.compression_zone(0.0, from_top)
    for j in range(1, subdivisions):
        if zone.area >= required_area:
            break
        zone = profile.compression_zone(j / subdivisions * h, from_top)
    return zone


class FlexureSolver:
    """
    Nominal moment capacity from an equivalent compression block search.
    """

    def __init__(self, code: DesignCode = None, subdivisions: int = DEFAULT_SUBDIVISIONS):
        if subdivisions <= 2:
            raise ValueError(f"subdivisions must be an integer greater than 2, got {subdivisions}")
        self.code = code or get_design_code()
        self.subdivisions = subdivisions

    def solve(
        self,
        moment: float,                        # Mu (kNm)
        profile: SectionProfile,
        reinforcement: ReinforcementDesign,
        materials: MaterialProperties,
        station: int = 0,
    ) -> FlexureResult:
        """
        Find the compression block and moment capacity of one station.

        Args:
            moment: Moment demand in kNm
            profile: Concrete section
            reinforcement: Tension steel at this station
            materials: Material constants
            station: Station index for messages

        Returns:
            FlexureResult; target_reached is False when the section cannot
            develop the required compression area
        """
        fc, fy = materials.fc, materials.fy
        As = reinforcement.As
        steps = []
        notes = []

        Ac_req = required_compression_area(As, fc, fy)
        steps.append(CalculationStep(
            step_number=1,
            description="Required compression area (Ac,req)",
            formula="Ac,req = As × 0.87×fy / (0.36×fc)",
            substitution=f"= {As:.0f}×10⁻⁶ × 0.87×{fy} / (0.36×{fc})",
            result=round(Ac_req * 1e6, 0),
            unit="mm²",
            code_reference=""
        ))

        zone = find_compression_zone(
            profile, Ac_req, self.subdivisions, reinforcement.compression_from_top
        )
        target_reached = zone.area >= Ac_req
        steps.append(CalculationStep(
            step_number=2,
            description="Compression block depth (xc)",
            formula=f"first cut j/{self.subdivisions} × h with Ac ≥ Ac,req",
            substitution=f"Ac = {zone.area * 1e6:.0f} mm² at xc = {zone.depth * 1000:.0f} mm",
            result=round(zone.depth * 1000, 1),
            unit="mm",
            code_reference=""
        ))

        if not target_reached:
            msg = (f"Station {station}: compression zone reaches only "
                   f"{zone.area * 1e6:.0f} of {Ac_req * 1e6:.0f} mm²; "
                   f"capacity reported at the deepest cut")
            warnings.warn(msg, UnderReinforcedWarning, stacklevel=2)
            notes.append(msg)

        d = reinforcement.d
        Z = abs(zone.centroid_depth - d)
        T = self.code.get_tension_force(As, fy)
        Mn = T * Z

        steps.append(CalculationStep(
            step_number=3,
            description="Lever arm (Z)",
            formula="Z = |c - d|",
            substitution=f"= |{zone.centroid_depth * 1000:.1f} - {d * 1000:.1f}|",
            result=round(Z * 1000, 1),
            unit="mm",
            code_reference=""
        ))
        steps.append(CalculationStep(
            step_number=4,
            description="Moment capacity (Mn)",
            formula=f"Mn = {self.code.TENSION_FACTOR}×fy×As × Z",
            substitution=f"= {T:.1f} × {Z:.4f}",
            result=round(Mn, 2),
            unit="kNm",
            code_reference=self.code.code_name
        ))

        Mu = abs(moment)
        error = (Mn - Mu) / Mu * 100 if Mu > MOMENT_FLOOR else None

        if not target_reached:
            status = DesignStatus.WARNING
        elif Mn >= Mu:
            status = DesignStatus.PASS
        else:
            status = DesignStatus.FAIL

        logger.debug(
            "Station %d: xc = %.4f m, Ac = %.5f m², Z = %.4f m, Mn = %.2f kNm",
            station, zone.depth, zone.area, Z, Mn
        )

        return FlexureResult(
            status=status,
            design_moment=moment,
            required_area=Ac_req,
            compression_depth=zone.depth,
            compression_area=zone.area,
            compression_centroid=zone.centroid_depth,
            zone=zone,
            target_reached=target_reached,
            steel_depth=d,
            lever_arm=Z,
            tension_force=T,
            moment_capacity=Mn,
            error_percent=error,
            steps=steps,
            warnings=notes,
        )
