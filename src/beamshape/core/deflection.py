"""
Rotation and deflection by double integration of curvature.

Only the first half of the span is integrated (ceil(N/2) stations); for a
simply supported symmetric beam the rotation is zero at mid-span and the
deflection is zero at the support:

    φ[i] = |Mu[i]| / (Ec × Ieff[i] × 1000) × dx
    R    = cumsum(φ) - cumsum(φ)[-1]          (R[-1] = 0)
    D'   = cumsum(R × dx)
    D    = D' - D'[0]                          (D[0] = 0)
"""

import logging
import math
import warnings
from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

from beamshape.exceptions import DegenerateGeometryWarning, InsufficientStationsError
from beamshape.utils.constants import INERTIA_FLOOR

logger = logging.getLogger(__name__)


@dataclass
class DeflectionProfile:
    """Half-span rotation (rad) and deflection (m) profiles."""
    dx: float
    curvature: np.ndarray  # φ per segment (rad)
    rotation: np.ndarray
    deflection: np.ndarray
    warnings: List[str] = field(default_factory=list)

    @property
    def max_deflection(self) -> float:
        return float(np.max(np.abs(self.deflection))) if self.deflection.size else 0.0


class DeflectionIntegrator:
    """
    Integrates curvature twice over the half span.
    """

    def integrate(
        self,
        moments: Sequence[float],   # Mu per station (kNm)
        inertias: Sequence[float],  # Ieff per station (m⁴)
        span: float,                # L (m)
        Ec: float,                  # MPa
    ) -> DeflectionProfile:
        """
        Rotation and deflection over the first ceil(N/2) stations.

        Args:
            moments: Moment demand per station in kNm
            inertias: Effective moment of inertia per station in m⁴
            span: Beam span in m
            Ec: Concrete modulus in MPa

        Returns:
            DeflectionProfile with R[-1] == 0 and D[0] == 0

        Raises:
            InsufficientStationsError: fewer than 2 stations
        """
        n = len(moments)
        if n < 2:
            raise InsufficientStationsError(
                f"Deflection needs at least 2 stations, got {n}"
            )
        if len(inertias) != n:
            raise ValueError(f"Got {len(inertias)} inertia values for {n} stations")

        count = math.ceil(n / 2)
        dx = span / (n - 1)
        notes = []

        Mu = np.abs(np.asarray(moments[:count], dtype=float))
        Ieff = np.asarray(inertias[:count], dtype=float)

        low = Ieff <= INERTIA_FLOOR
        if np.any(low):
            for i in np.flatnonzero(low):
                msg = (f"Station {i}: effective inertia {Ieff[i]:.2e} m⁴ floored "
                       f"to {INERTIA_FLOOR}")
                warnings.warn(msg, DegenerateGeometryWarning, stacklevel=2)
                logger.warning(msg)
                notes.append(msg)
            Ieff = np.where(low, INERTIA_FLOOR, Ieff)

        phi = Mu / (Ec * Ieff * 1000) * dx
        total = np.cumsum(phi)
        rotation = total - total[-1]
        partial = np.cumsum(rotation * dx)
        deflection = partial - partial[0]

        logger.debug("Integrated %d of %d stations, dx = %.4f m", count, n, dx)

        return DeflectionProfile(
            dx=dx,
            curvature=phi,
            rotation=rotation,
            deflection=deflection,
            warnings=notes,
        )
