"""
Engineering constants and numeric tolerances for section analysis.
"""

# Geometric tolerance (m). Mirrors a 1 mm model tolerance.
GEOMETRY_TOLERANCE = 1e-3

# Stirrup shear resistance (kN) below which no transverse steel is assumed
SHEAR_TOLERANCE = 1e-3

# Floor for reinforcement ratios used as denominators
RATIO_FLOOR = 1e-6

# Floor for moments (kN·m) used as denominators
MOMENT_FLOOR = 1e-9

# Floor for moment of inertia (m⁴) used as denominators
INERTIA_FLOOR = 1e-12

# Default number of cutting depths for the compression block and web searches
DEFAULT_SUBDIVISIONS = 15

# Default clear cover to steel centroid (mm)
DEFAULT_COVER = 50.0

# Default material constants (MPa, mm/mm, kg/m³, MJ/kg)
DEFAULT_MATERIALS = {
    "fc": 40.0,
    "Ec": 27500.0,
    "ec": 0.0035,
    "rhoc": 2400.0,
    "EEc": 0.87,
    "fy": 415.0,
    "Es": 205000.0,
    "es": 0.004,
    "rhos": 8050.0,
    "EEs": 30.0,
}

# Units used in material summaries
MATERIAL_UNITS = {
    "fc": "MPa",
    "Ec": "MPa",
    "ec": "mm/mm",
    "rhoc": "kg/m3",
    "EEc": "MJ/kg",
    "fy": "MPa",
    "Es": "MPa",
    "es": "mm/mm",
    "rhos": "kg/m3",
    "EEs": "MJ/kg",
}
