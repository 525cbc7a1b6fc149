"""
Gross, cracked and effective moment of inertia of a reinforced section.

- Ig: gross concrete profile transformed with (n - 1)·As, n = Es / Ec
- Icr: compression zone about the cut at xc plus transformed steel
- Mcr = 0.7 × √fc × Ig,c / yt (kNm), yt = centroid to tension face
- Ieff: Branson cubic interpolation or Bischoff rational form, used only
  when the section is cracked (Mcr < |Mu|); otherwise Ieff = Ig.
"""

import logging
import math
from dataclasses import dataclass

from beamshape.core.flexure import FlexureResult
from beamshape.core.reinforcement import ReinforcementDesign
from beamshape.geometry import SectionProfile
from beamshape.materials import MaterialProperties
from beamshape.models.inputs import IeffMethod, resolve_ieff_method

logger = logging.getLogger(__name__)


@dataclass
class SectionPropertyResult:
    """Moments of inertia (m⁴) and cracking moment (kNm) at one station."""
    modular_ratio: float
    concrete_mi: float  # Ig of the plain concrete profile
    gross_mi: float  # Ig, transformed
    cracked_mi: float  # Icr
    tension_fibre_distance: float  # yt (m)
    cracking_moment: float  # Mcr (kNm)
    effective_mi: float  # Ieff
    is_cracked: bool
    method: IeffMethod


def branson_effective_inertia(Ig: float, Icr: float, Mcr: float, Mu: float) -> float:
    """
    Empirical cubic interpolation.

    Ieff = Ig × (Mcr/Mu)³ + Icr × (1 - (Mcr/Mu)³)
    """
    r3 = (Mcr / Mu) ** 3
    return Ig * r3 + Icr * (1 - r3)


def bischoff_effective_inertia(Ig: float, Icr: float, Mcr: float, Mu: float) -> float:
    """
    Rational closed form.

    r = Mcr/Mu, ε = 1 - √(1 - r), η = 1 - Icr/Ig
    γ = (1.6ε³ - 0.6ε⁴) / r² + 2.4 × ln(2 - ε)
    Ieff = Icr / (1 - γ × η × r²)
    """
    r = Mcr / Mu
    epsilon = 1 - math.sqrt(1 - r)
    nau = 1 - Icr / Ig
    gamma = (1.6 * epsilon ** 3 - 0.6 * epsilon ** 4) / (r * r) + 2.4 * math.log(2 - epsilon)
    return Icr / (1 - gamma * nau * r * r)


_METHODS = {
    IeffMethod.BRANSON: branson_effective_inertia,
    IeffMethod.BISCHOFF: bischoff_effective_inertia,
}


class SectionPropertyCalculator:
    """
    Section stiffness properties for deflection analysis.
    """

    def __init__(self, method=IeffMethod.BRANSON):
        # Raises InvalidMethodError for unknown selectors
        self.method = resolve_ieff_method(method)

    def gross_inertia(
        self,
        profile: SectionProfile,
        reinforcement: ReinforcementDesign,
        materials: MaterialProperties,
    ) -> float:
        """Ig = Ig,c + (n - 1) × As × (ys - yc)² in m⁴."""
        n = materials.modular_ratio
        As = reinforcement.As * 1e-6
        offset = reinforcement.steel_level - profile.centroid[1]
        return profile.second_moment + (n - 1) * As * offset ** 2

    def cracked_inertia(
        self,
        flexure: FlexureResult,
        reinforcement: ReinforcementDesign,
        materials: MaterialProperties,
    ) -> float:
        """Icr = Iconc(xc) + (n - 1) × As × (d - xc)² in m⁴."""
        n = materials.modular_ratio
        As = reinforcement.As * 1e-6
        xc = flexure.compression_depth
        return flexure.zone.second_moment + (n - 1) * As * (reinforcement.d - xc) ** 2

    def cracking_moment(
        self,
        profile: SectionProfile,
        reinforcement: ReinforcementDesign,
        materials: MaterialProperties,
    ) -> float:
        """Mcr = 1000 × 0.7 × √fc × Ig,c / yt in kNm."""
        if reinforcement.tension_face == "bottom":
            yt = profile.distance_to_bottom
        else:
            yt = profile.distance_to_top
        return 1000 * 0.7 * math.sqrt(materials.fc) * profile.second_moment / yt

    def effective_inertia(self, Ig: float, Icr: float, Mcr: float, moment: float) -> float:
        """
        Effective moment of inertia for the selected method.

        Returns Ig exactly when the section is uncracked (Mcr ≥ |Mu|);
        otherwise the method result limited to the range [Icr, Ig].
        """
        Mu = abs(moment)
        if Mcr >= Mu:
            return Ig
        Ieff = _METHODS[self.method](Ig, Icr, Mcr, Mu)
        lower, upper = min(Icr, Ig), max(Icr, Ig)
        if math.isnan(Ieff):
            return lower
        return min(max(Ieff, lower), upper)

    def compute(
        self,
        moment: float,
        profile: SectionProfile,
        reinforcement: ReinforcementDesign,
        flexure: FlexureResult,
        materials: MaterialProperties,
        station: int = 0,
    ) -> SectionPropertyResult:
        """
        All section properties of one station.

        Args:
            moment: Moment demand in kNm
            profile: Concrete section
            reinforcement: Tension steel at this station
            flexure: Compression block from the flexural search
            materials: Material constants
            station: Station index for messages
        """
        Ig = self.gross_inertia(profile, reinforcement, materials)
        Icr = self.cracked_inertia(flexure, reinforcement, materials)
        Mcr = self.cracking_moment(profile, reinforcement, materials)
        Ieff = self.effective_inertia(Ig, Icr, Mcr, moment)

        logger.debug(
            "Station %d: Ig = %.4e, Icr = %.4e, Mcr = %.2f kNm, Ieff = %.4e m⁴",
            station, Ig, Icr, Mcr, Ieff
        )

        return SectionPropertyResult(
            modular_ratio=materials.modular_ratio,
            concrete_mi=profile.second_moment,
            gross_mi=Ig,
            cracked_mi=Icr,
            tension_fibre_distance=(
                profile.distance_to_bottom if reinforcement.tension_face == "bottom"
                else profile.distance_to_top
            ),
            cracking_moment=Mcr,
            effective_mi=Ieff,
            is_cracked=Mcr < abs(moment),
            method=self.method,
        )
