# Core calculation engine
from .beam_analysis import BeamAnalysisEngine, Station, analyse_input, build_stations
from .reinforcement import ReinforcementDesigner, ReinforcementDesign
from .flexure import FlexureSolver, FlexureResult
from .shear import ShearSolver, ShearResult, stirrup_shear_resistance
from .section_properties import SectionPropertyCalculator, SectionPropertyResult
from .deflection import DeflectionIntegrator, DeflectionProfile
from .ductility import check_reinforcement_ratio, DuctilityResult
