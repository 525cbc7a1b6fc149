# Data models for beam section analysis
from .outputs import (
    AnalysisOutput, StationOutput, CodeLimitsOutput, DeflectionOutput,
    CalculationStep, DesignStatus
)
from .inputs import (
    BeamAnalysisInput, AnalysisConfig, MaterialInput, SectionInput,
    StationInput, StirrupInput, DesignCodeType, IeffMethod,
    resolve_design_code, resolve_ieff_method
)
