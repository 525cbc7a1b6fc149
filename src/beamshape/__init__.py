"""Beam Shape Explorer - capacity and serviceability of shaped RC beams."""

__version__ = "0.1.0"

from .exceptions import (
    BeamShapeError, InvalidMaterialError, InsufficientStationsError,
    InvalidMethodError, InputError, AnalysisWarning,
    DegenerateGeometryWarning, UnderReinforcedWarning
)
from .materials import MaterialProperties, get_material_properties
from .geometry import SectionProfile, ZoneProperties
from .models import AnalysisConfig, AnalysisOutput, DesignCodeType, IeffMethod
from .codes import get_design_code
from .core import BeamAnalysisEngine, Station, analyse_input
