"""
Longitudinal reinforcement sizing from the moment demand envelope.

Each station is sized with the design steel stress constant sConst:

    As = 1e6 × |Mu| / (sConst × d × 1000)     [mm², Mu in kNm, d in m]

An explicit area override, or a single "constant As" sized for the
largest demand in the envelope, replaces the per-station areas.
"""

import logging
import math
import warnings
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from beamshape.codes import CodeLimits, DesignCode, get_design_code
from beamshape.exceptions import DegenerateGeometryWarning, InsufficientStationsError
from beamshape.geometry import SectionProfile
from beamshape.materials import MaterialProperties
from beamshape.utils.constants import DEFAULT_COVER, GEOMETRY_TOLERANCE

logger = logging.getLogger(__name__)


@dataclass
class ReinforcementDesign:
    """Tension steel at one station."""
    As: float  # Steel area (mm²)
    d: float  # Depth from compression face to steel centroid (m)
    radius: float  # Equivalent single-bar radius (m)
    tension_face: str  # "top" or "bottom"
    steel_level: float  # y coordinate of the steel centroid in the profile (m)
    is_override: bool = False
    is_constant: bool = False
    warnings: List[str] = field(default_factory=list)

    @property
    def compression_from_top(self) -> bool:
        return self.tension_face == "bottom"


def required_steel_area(moment: float, d: float, s_const: float) -> float:
    """
    Steel area for a moment demand.

    Args:
        moment: Moment demand in kNm (sign ignored)
        d: Effective depth in m
        s_const: Steel stress constant in MPa

    Returns:
        Required area in mm²
    """
    return 1e6 * abs(moment) / (s_const * d * 1000)


def tension_face_for(moment: float) -> str:
    """Hogging (positive) moment puts the top face in tension."""
    return "top" if moment > GEOMETRY_TOLERANCE else "bottom"


class ReinforcementDesigner:
    """
    Sizes tension steel for every station of a demand envelope.
    """

    def __init__(self, code: DesignCode = None):
        self.code = code or get_design_code()

    def design(
        self,
        moments: Sequence[float],            # Mu per station (kNm)
        profiles: Sequence[SectionProfile],  # Section per station
        materials: MaterialProperties,
        cover: float = DEFAULT_COVER,        # Tension face to steel centroid (mm)
        area_override: Optional[float] = None,  # As for all stations (mm²)
        constant_as: bool = False,
        limits: Optional[CodeLimits] = None,
    ) -> List[ReinforcementDesign]:
        """
        Size longitudinal reinforcement along the span.

        Args:
            moments: Moment demand per station in kNm
            profiles: Section profile per station
            materials: Material constants
            cover: Distance from tension face to steel centroid in mm
            area_override: Steel area used at every station, if given
            constant_as: Size every station for the largest |Mu|
            limits: Pre-computed code limits (derived when omitted)

        Returns:
            One ReinforcementDesign per station

        Raises:
            InsufficientStationsError: fewer than 2 stations
        """
        if len(moments) < 2:
            raise InsufficientStationsError(
                f"Moment envelope needs at least 2 values, got {len(moments)}"
            )
        if len(profiles) != len(moments):
            raise ValueError(
                f"Got {len(profiles)} sections for {len(moments)} moment values"
            )

        limits = limits or self.code.get_limits(materials)
        s_const = limits.s_const

        designs = []
        for i, (Mu, profile) in enumerate(zip(moments, profiles)):
            notes = []
            d = profile.depth - cover / 1000
            if d <= GEOMETRY_TOLERANCE:
                msg = (f"Station {i}: effective depth {d:.4f} m is not positive; "
                       f"clamped to {GEOMETRY_TOLERANCE} m")
                warnings.warn(msg, DegenerateGeometryWarning, stacklevel=2)
                notes.append(msg)
                d = GEOMETRY_TOLERANCE

            face = tension_face_for(Mu)
            if face == "bottom":
                steel_level = profile.top - d
            else:
                steel_level = profile.bottom + d

            designs.append(ReinforcementDesign(
                As=required_steel_area(Mu, d, s_const),
                d=d,
                radius=0.0,
                tension_face=face,
                steel_level=steel_level,
                warnings=notes,
            ))

        if area_override is not None:
            logger.info("Using steel area override %.1f mm² at every station", area_override)
            for design in designs:
                design.As = area_override
                design.is_override = True
        elif constant_as:
            governing = max(range(len(moments)), key=lambda k: abs(moments[k]))
            As_const = designs[governing].As
            logger.info(
                "Constant As %.1f mm² from station %d (|Mu| = %.2f kNm)",
                As_const, governing, abs(moments[governing])
            )
            for design in designs:
                design.As = As_const
                design.is_constant = True

        for i, design in enumerate(designs):
            radius = math.sqrt(design.As / math.pi) / 1000
            if radius <= GEOMETRY_TOLERANCE:
                msg = (f"Station {i}: bar radius {radius:.2e} m clamped to "
                       f"{GEOMETRY_TOLERANCE} m")
                warnings.warn(msg, DegenerateGeometryWarning, stacklevel=2)
                design.warnings.append(msg)
                radius = GEOMETRY_TOLERANCE
            design.radius = radius
            logger.debug("Station %d: As = %.1f mm², d = %.4f m", i, design.As, design.d)

        return designs
