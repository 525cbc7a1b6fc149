"""
Input data models for beam section analysis using Pydantic for validation.

Section dimensions are given in millimetres, as a designer enters them, and
converted to metre-based profiles for the analysis engine.
"""

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from beamshape.exceptions import InvalidMethodError
from beamshape.geometry import SectionProfile
from beamshape.utils.constants import DEFAULT_COVER, DEFAULT_MATERIALS, DEFAULT_SUBDIVISIONS


class DesignCodeType(str, Enum):
    """Design code rule set used for limits, tension force and shear."""
    CODE_A = "is456"   # IS 456 style
    CODE_B = "aci318"  # ACI 318 style


class IeffMethod(str, Enum):
    """Effective moment of inertia method."""
    BRANSON = "branson"    # Empirical cubic interpolation
    BISCHOFF = "bischoff"  # Rational closed form


# Aliases accepted from configuration files and callers
_CODE_ALIASES = {
    "a": DesignCodeType.CODE_A,
    "code_a": DesignCodeType.CODE_A,
    "is456": DesignCodeType.CODE_A,
    "is 456": DesignCodeType.CODE_A,
    "0": DesignCodeType.CODE_A,
    "b": DesignCodeType.CODE_B,
    "code_b": DesignCodeType.CODE_B,
    "aci318": DesignCodeType.CODE_B,
    "aci 318": DesignCodeType.CODE_B,
    "1": DesignCodeType.CODE_B,
}

_METHOD_ALIASES = {
    "branson": IeffMethod.BRANSON,
    "a": IeffMethod.BRANSON,
    "0": IeffMethod.BRANSON,
    "bischoff": IeffMethod.BISCHOFF,
    "b": IeffMethod.BISCHOFF,
    "1": IeffMethod.BISCHOFF,
}


def resolve_design_code(value) -> DesignCodeType:
    """Map a selector (enum, name or 0/1 index) to a DesignCodeType."""
    if isinstance(value, DesignCodeType):
        return value
    key = str(value).strip().lower()
    if key not in _CODE_ALIASES:
        raise ValueError(
            f"Unknown design code {value!r}. Valid: {[c.value for c in DesignCodeType]}"
        )
    return _CODE_ALIASES[key]


def resolve_ieff_method(value) -> IeffMethod:
    """Map a selector (enum, name or 0/1 index) to an IeffMethod.

    Raises:
        InvalidMethodError: for any other value
    """
    if isinstance(value, IeffMethod):
        return value
    key = str(value).strip().lower()
    if key not in _METHOD_ALIASES:
        raise InvalidMethodError(
            f"Ieff method can only be 0 ({IeffMethod.BRANSON.value}) or "
            f"1 ({IeffMethod.BISCHOFF.value}), got {value!r}"
        )
    return _METHOD_ALIASES[key]


class MaterialInput(BaseModel):
    """Material constants (MPa, mm/mm, kg/m³, MJ/kg)."""
    fc: float = Field(default=DEFAULT_MATERIALS["fc"], gt=0, description="Concrete strength")
    Ec: float = Field(default=DEFAULT_MATERIALS["Ec"], gt=0, description="Concrete modulus")
    ec: float = Field(default=DEFAULT_MATERIALS["ec"], ge=0, description="Concrete ultimate strain")
    rhoc: float = Field(default=DEFAULT_MATERIALS["rhoc"], ge=0, description="Concrete density")
    EEc: float = Field(default=DEFAULT_MATERIALS["EEc"], ge=0, description="Concrete embodied energy")
    fy: float = Field(default=DEFAULT_MATERIALS["fy"], gt=0, description="Steel yield strength")
    Es: float = Field(default=DEFAULT_MATERIALS["Es"], gt=0, description="Steel modulus")
    es: float = Field(default=DEFAULT_MATERIALS["es"], ge=0, description="Steel maximum strain")
    rhos: float = Field(default=DEFAULT_MATERIALS["rhos"], ge=0, description="Steel density")
    EEs: float = Field(default=DEFAULT_MATERIALS["EEs"], ge=0, description="Steel embodied energy")

    @model_validator(mode="after")
    def _check_strains(self):
        if self.ec + self.es <= 0:
            raise ValueError("ec + es must be greater than zero")
        return self


class AnalysisConfig(BaseModel):
    """Explicit configuration of one analysis run."""
    design_code: DesignCodeType = DesignCodeType.CODE_A
    ieff_method: IeffMethod = IeffMethod.BRANSON
    subdivisions: int = Field(
        default=DEFAULT_SUBDIVISIONS,
        gt=2,
        description="Number of cutting depths for compression block and web searches"
    )
    cover: float = Field(
        default=DEFAULT_COVER,
        ge=0,
        description="Cover from the tension face to the steel centroid in mm"
    )
    area_override: Optional[float] = Field(
        None,
        gt=0,
        description="Steel area applied to every station in mm²"
    )
    constant_as: bool = Field(
        default=False,
        description="Size every station for the largest |Mu| in the envelope"
    )

    @model_validator(mode="before")
    @classmethod
    def _resolve_selectors(cls, data):
        if isinstance(data, dict):
            data = dict(data)
            if data.get("design_code") is not None:
                data["design_code"] = resolve_design_code(data["design_code"])
            if data.get("ieff_method") is not None:
                data["ieff_method"] = resolve_ieff_method(data["ieff_method"])
        return data

    @classmethod
    def create(cls, **options) -> "AnalysisConfig":
        """
        Build a configuration from plain options.

        Unlike the constructor, an unknown Ieff method selector raises
        InvalidMethodError directly instead of a pydantic ValidationError.
        """
        if options.get("ieff_method") is not None:
            options["ieff_method"] = resolve_ieff_method(options["ieff_method"])
        if options.get("design_code") is not None:
            options["design_code"] = resolve_design_code(options["design_code"])
        return cls(**options)


class StirrupInput(BaseModel):
    """Transverse reinforcement layout used to derive Vs."""
    diameter: float = Field(..., gt=0, description="Stirrup bar diameter in mm")
    spacing: float = Field(..., gt=0, description="Stirrup spacing in mm")
    angle: float = Field(
        default=90,
        gt=0,
        le=90,
        description="Inclination to the beam axis in degrees"
    )


class SectionInput(BaseModel):
    """Cross-section shape in mm."""
    type: Literal["rectangle", "tee", "i_section", "polygon"] = "rectangle"
    width: Optional[float] = Field(None, gt=0)
    depth: Optional[float] = Field(None, gt=0)
    flange_width: Optional[float] = Field(None, gt=0)
    flange_depth: Optional[float] = Field(None, gt=0)
    web_width: Optional[float] = Field(None, gt=0)
    bottom_flange_width: Optional[float] = Field(None, gt=0)
    bottom_flange_depth: Optional[float] = Field(None, gt=0)
    vertices: Optional[List[List[float]]] = None

    @model_validator(mode="after")
    def _check_dimensions(self):
        required = {
            "rectangle": ("width", "depth"),
            "tee": ("flange_width", "flange_depth", "web_width", "depth"),
            "i_section": ("flange_width", "flange_depth", "web_width", "depth"),
            "polygon": ("vertices",),
        }[self.type]
        missing = [name for name in required if getattr(self, name) is None]
        if missing:
            raise ValueError(f"{self.type} section requires: {', '.join(missing)}")
        if self.type == "polygon":
            if len(self.vertices) < 3 or any(len(v) != 2 for v in self.vertices):
                raise ValueError("polygon vertices must be at least 3 [x, y] pairs")
        if self.type in ("tee", "i_section") and self.flange_depth >= self.depth:
            raise ValueError("flange_depth must be smaller than depth")
        if self.type == "i_section":
            bottom = self.bottom_flange_depth or self.flange_depth
            if self.flange_depth + bottom >= self.depth:
                raise ValueError("flange_depth + bottom_flange_depth must be smaller than depth")
        # Rejects degenerate and self-intersecting outlines
        self.to_profile()
        return self

    def to_profile(self) -> SectionProfile:
        """Build the metre-based profile for the analysis engine."""
        mm = 1 / 1000
        if self.type == "rectangle":
            return SectionProfile.rectangle(self.width * mm, self.depth * mm)
        if self.type == "tee":
            return SectionProfile.tee(
                self.flange_width * mm, self.flange_depth * mm,
                self.web_width * mm, self.depth * mm,
            )
        if self.type == "i_section":
            return SectionProfile.i_section(
                self.flange_width * mm, self.flange_depth * mm,
                self.web_width * mm, self.depth * mm,
                self.bottom_flange_width * mm if self.bottom_flange_width else None,
                self.bottom_flange_depth * mm if self.bottom_flange_depth else None,
            )
        return SectionProfile([(x * mm, y * mm) for x, y in self.vertices])


class StationInput(BaseModel):
    """Demand and section at one station."""
    Mu: float = Field(..., description="Moment demand in kNm (negative = sagging)")
    Vu: float = Field(default=0.0, description="Shear demand in kN")
    Vs: Optional[float] = Field(None, ge=0, description="Stirrup shear resistance in kN")
    section: Optional[SectionInput] = None


class BeamAnalysisInput(BaseModel):
    """Complete input model for a beam analysis run."""
    span: float = Field(..., gt=0, description="Span length in m")
    materials: MaterialInput = Field(default_factory=MaterialInput)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    section: Optional[SectionInput] = Field(
        None,
        description="Section used by stations that do not define their own"
    )
    stirrups: Optional[StirrupInput] = None
    stations: List[StationInput] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_sections(self):
        if self.section is None:
            missing = [i for i, st in enumerate(self.stations) if st.section is None]
            if missing:
                raise ValueError(
                    f"stations {missing} have no section and no default section is given"
                )
        return self
