"""
Error and warning taxonomy for section analysis runs.

Fatal misconfiguration raises an exception before any station is processed.
Per-station numerical degeneracies are recovered locally and reported through
warning categories so the rest of the span is still analysed.
"""


class BeamShapeError(Exception):
    """Base class for all fatal analysis errors."""


class InvalidMaterialError(BeamShapeError, ValueError):
    """Raised when material constants are non-physical (fc <= 0, fy <= 0, ...)."""


class InsufficientStationsError(BeamShapeError, ValueError):
    """Raised when the demand envelope holds fewer than 2 stations."""


class InvalidMethodError(BeamShapeError, ValueError):
    """Raised for an unknown effective moment of inertia method selector."""


class InputError(BeamShapeError):
    """Raised when a YAML run file is invalid or incomplete."""


class AnalysisWarning(UserWarning):
    """Base class for recovered per-station degeneracies."""


class DegenerateGeometryWarning(AnalysisWarning):
    """Zero or negative width, ratio, radius or stiffness clamped to a tolerance."""


class UnderReinforcedWarning(AnalysisWarning):
    """Compression block search never reached the target compression area."""
