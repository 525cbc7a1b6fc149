"""Material properties for reinforced concrete section analysis.

Holds the ten concrete and reinforcing steel constants shared by every
station of an analysis run.  Instances are immutable and validated on
construction, so a run aborts before any station is processed when the
constants are non-physical.

Units
-----
* Strengths and moduli -- MPa
* Strains -- mm/mm
* Densities -- kg/m³
* Embodied energy coefficients -- MJ/kg
"""

from __future__ import annotations

import math
from dataclasses import dataclass, asdict
from typing import Any

from .exceptions import InvalidMaterialError
from .utils.constants import DEFAULT_MATERIALS, MATERIAL_UNITS


@dataclass(frozen=True)
class MaterialProperties:
    """Concrete and longitudinal steel constants for one analysis run.

    Attributes
    ----------
    fc : float
        Characteristic compressive strength of concrete, MPa.
    Ec : float
        Young's modulus of concrete, MPa.
    ec : float
        Ultimate (maximum allowed) concrete strain.
    rhoc : float
        Concrete density, kg/m³.
    EEc : float
        Embodied energy coefficient of concrete, MJ/kg.
    fy : float
        Characteristic yield strength of longitudinal steel, MPa.
    Es : float
        Young's modulus of steel, MPa.
    es : float
        Maximum allowed steel strain.
    rhos : float
        Steel density, kg/m³.
    EEs : float
        Embodied energy coefficient of steel, MJ/kg.
    """

    fc: float = DEFAULT_MATERIALS["fc"]
    Ec: float = DEFAULT_MATERIALS["Ec"]
    ec: float = DEFAULT_MATERIALS["ec"]
    rhoc: float = DEFAULT_MATERIALS["rhoc"]
    EEc: float = DEFAULT_MATERIALS["EEc"]
    fy: float = DEFAULT_MATERIALS["fy"]
    Es: float = DEFAULT_MATERIALS["Es"]
    es: float = DEFAULT_MATERIALS["es"]
    rhos: float = DEFAULT_MATERIALS["rhos"]
    EEs: float = DEFAULT_MATERIALS["EEs"]

    def __post_init__(self) -> None:
        values = asdict(self)
        for name, value in values.items():
            if value is None or math.isnan(float(value)):
                raise InvalidMaterialError(f"{name} must be a number, got {value!r}")
        if self.fc <= 0:
            raise InvalidMaterialError(f"fc must be positive, got {self.fc}")
        if self.fy <= 0:
            raise InvalidMaterialError(f"fy must be positive, got {self.fy}")
        if self.Ec <= 0:
            raise InvalidMaterialError(f"Ec must be positive, got {self.Ec}")
        if self.Es <= 0:
            raise InvalidMaterialError(f"Es must be positive, got {self.Es}")
        if self.ec + self.es == 0:
            raise InvalidMaterialError(
                f"ec + es must be non-zero, got ec={self.ec}, es={self.es}"
            )

    @property
    def modular_ratio(self) -> float:
        """Short-term modular ratio ``n = Es / Ec``."""
        return self.Es / self.Ec

    @property
    def cd_max(self) -> float:
        """Balanced neutral axis ratio ``ec / (ec + es)``."""
        return self.ec / (self.ec + self.es)

    def summary(self) -> list[str]:
        """One ``name = value unit`` line per constant."""
        return [
            f"{name} = {value:g} {MATERIAL_UNITS[name]}"
            for name, value in asdict(self).items()
        ]

    def __str__(self) -> str:
        return "\n".join(self.summary())


def get_material_properties(config: dict[str, Any] | None = None) -> MaterialProperties:
    """Build :class:`MaterialProperties` from a mapping, filling defaults.

    Parameters
    ----------
    config : dict or None
        Keys are the attribute names of :class:`MaterialProperties`.
        Missing keys take the default values.

    Raises
    ------
    InvalidMaterialError
        If a key is unknown or a value is non-physical.
    """
    config = dict(config or {})
    unknown = sorted(set(config) - set(DEFAULT_MATERIALS))
    if unknown:
        raise InvalidMaterialError(f"Unknown material constant(s): {', '.join(unknown)}")
    try:
        supplied = {k: float(v) for k, v in config.items()}
    except (TypeError, ValueError) as exc:
        raise InvalidMaterialError(f"Material constants must be numeric: {exc}") from exc
    return MaterialProperties(**{**DEFAULT_MATERIALS, **supplied})
