"""
Reinforcement ratio check against code limits.

The ratio is reported and flagged, never corrected.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from beamshape.codes import CodeLimits
from beamshape.models.outputs import CalculationStep, DesignStatus

logger = logging.getLogger(__name__)


@dataclass
class DuctilityResult:
    status: DesignStatus
    rho: float
    rho_max: float
    rho_min: float
    max_margin_percent: float  # 100 × (rho_max - rho) / rho_max
    min_margin_percent: float  # 100 × (rho - rho_min) / rho_min
    within_limits: bool
    steps: List[CalculationStep] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def check_reinforcement_ratio(rho: float, limits: CodeLimits, station: int = 0) -> DuctilityResult:
    """
    Compare a station's reinforcement ratio with rho_min and rho_max.

    Args:
        rho: As / (bw × d)
        limits: Code limits for the current materials
        station: Station index for messages

    Returns:
        DuctilityResult; status WARNING when outside the limits
    """
    max_margin = 100 * (limits.rho_max - rho) / limits.rho_max
    min_margin = 100 * (rho - limits.rho_min) / limits.rho_min
    notes = []

    if rho > limits.rho_max:
        notes.append(f"Station {station}: ρ = {rho:.5f} exceeds ρmax = {limits.rho_max:.5f} "
                     f"(over-reinforced, brittle failure)")
    if rho < limits.rho_min:
        notes.append(f"Station {station}: ρ = {rho:.5f} below ρmin = {limits.rho_min:.5f}")
    for msg in notes:
        logger.warning(msg)

    within = not notes
    steps = [
        CalculationStep(
            step_number=1,
            description="Margin to maximum ratio",
            formula="100 × (ρmax - ρ) / ρmax",
            substitution=f"= 100 × ({limits.rho_max:.5f} - {rho:.5f}) / {limits.rho_max:.5f}",
            result=round(max_margin, 1),
            unit="%",
            code_reference=""
        ),
        CalculationStep(
            step_number=2,
            description="Margin to minimum ratio",
            formula="100 × (ρ - ρmin) / ρmin",
            substitution=f"= 100 × ({rho:.5f} - {limits.rho_min:.5f}) / {limits.rho_min:.5f}",
            result=round(min_margin, 1),
            unit="%",
            code_reference=""
        ),
    ]

    return DuctilityResult(
        status=DesignStatus.PASS if within else DesignStatus.WARNING,
        rho=rho,
        rho_max=limits.rho_max,
        rho_min=limits.rho_min,
        max_margin_percent=max_margin,
        min_margin_percent=min_margin,
        within_limits=within,
        steps=steps,
        warnings=notes,
    )
