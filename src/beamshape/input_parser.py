"""Parse and validate YAML run files for beam section analysis.

A run file has the sections ``beam`` (span and default section),
``materials``, ``analysis``, optional ``stirrups`` and a list of
``stations``.  Every problem found is collected and reported in one
:class:`~beamshape.exceptions.InputError`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import InputError
from .models.inputs import BeamAnalysisInput


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_KNOWN_SECTIONS = {"beam", "materials", "analysis", "stirrups", "stations"}
_REQUIRED_SECTIONS = ("beam", "stations")


def _format_location(loc: tuple) -> str:
    """``('stations', 2, 'Mu')`` -> ``stations[2].Mu``."""
    text = ""
    for part in loc:
        if isinstance(part, int):
            text += f"[{part}]"
        else:
            text += f".{part}" if text else str(part)
    return text


def _to_model_data(raw: dict[str, Any], errors: list[str]) -> dict[str, Any]:
    """Map the run file layout onto :class:`BeamAnalysisInput` fields."""
    for name in _REQUIRED_SECTIONS:
        if name not in raw:
            errors.append(f"Missing required section: {name}")
    for name in sorted(set(raw) - _KNOWN_SECTIONS):
        errors.append(f"Unknown section: {name}")

    beam = raw.get("beam") or {}
    if not isinstance(beam, dict):
        errors.append("beam: must be a mapping")
        beam = {}
    stations = raw.get("stations") or []
    if not isinstance(stations, list):
        errors.append("stations: must be a list")
        stations = []
    elif len(stations) < 2:
        errors.append(f"stations: at least 2 stations are required, got {len(stations)}")

    data: dict[str, Any] = {"stations": stations}
    if "span" in beam:
        data["span"] = beam["span"]
    elif "beam" in raw:
        errors.append("beam.span: field required")
    if beam.get("section") is not None:
        data["section"] = beam["section"]
    for name in ("materials", "analysis", "stirrups"):
        if raw.get(name) is not None:
            data[name] = raw[name]
    return data


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def load_input(raw: dict[str, Any]) -> BeamAnalysisInput:
    """Validate an already loaded run file mapping.

    Raises
    ------
    InputError
        If validation fails (the message lists every problem found).
    """
    if not isinstance(raw, dict):
        raise InputError("YAML root must be a mapping (dict)")

    errors: list[str] = []
    data = _to_model_data(raw, errors)

    model = None
    try:
        model = BeamAnalysisInput(**data)
    except ValidationError as exc:
        for err in exc.errors():
            loc = _format_location(err["loc"])
            if loc == "span":
                loc = "beam.span"
            elif loc == "section" or loc.startswith("section."):
                loc = "beam." + loc
            msg = err["msg"]
            errors.append(f"{loc}: {msg}" if loc else msg)
    except ValueError as exc:
        errors.append(str(exc))

    if errors:
        bullet_list = "\n  - ".join(dict.fromkeys(errors))
        raise InputError(
            f"Input validation failed with {len(dict.fromkeys(errors))} error(s):\n"
            f"  - {bullet_list}"
        )
    return model


def parse_input(yaml_path: str | Path) -> BeamAnalysisInput:
    """Read and validate a run file.

    Parameters
    ----------
    yaml_path:
        Filesystem path to the YAML input file.

    Returns
    -------
    BeamAnalysisInput
        Validated input model with defaults applied.

    Raises
    ------
    FileNotFoundError
        If *yaml_path* does not exist.
    InputError
        If the file is not valid YAML or validation fails.
    """
    path = Path(yaml_path)
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {yaml_path}")

    with open(path, "r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise InputError(f"Invalid YAML in {path}: {exc}") from exc

    return load_input(raw)


# ---------------------------------------------------------------------------
# Template generator
# ---------------------------------------------------------------------------

_TEMPLATE_YAML = """\
# Beam Section Analysis Run File
# ==============================
# Moments in kNm (negative = sagging), shears in kN, section sizes in mm.

beam:
  span: 6.0                     # m - Simply supported span
  section:                      # Default section for stations without one
    type: rectangle             # Options: rectangle | tee | i_section | polygon
    width: 300                  # mm
    depth: 600                  # mm

materials:
  fc: 40                        # MPa - Concrete strength
  Ec: 27500                     # MPa - Concrete modulus
  ec: 0.0035                    # Concrete ultimate strain
  fy: 415                       # MPa - Steel yield strength
  Es: 205000                    # MPa - Steel modulus
  es: 0.004                     # Steel maximum strain

analysis:
  design_code: is456            # Options: is456 | aci318
  ieff_method: branson          # Options: branson | bischoff
  subdivisions: 15              # Cutting depths for block and web searches
  cover: 50                     # mm - Tension face to steel centroid
  constant_as: false            # Size every station for the largest |Mu|
  # area_override: 1500         # mm2 - Same steel area at every station

stirrups:                       # Used for stations without Vs
  diameter: 8                   # mm
  spacing: 200                  # mm
  angle: 90                     # degrees

stations:                       # Evenly spaced from the first support
  - {Mu: 0.0, Vu: 120.0}
  - {Mu: -100.0, Vu: 80.0}
  - {Mu: -160.0, Vu: 40.0}
  - {Mu: -180.0, Vu: 0.0}
  - {Mu: -160.0, Vu: -40.0}
  - {Mu: -100.0, Vu: -80.0}
  - {Mu: 0.0, Vu: -120.0}
"""


def generate_template() -> str:
    """Return a complete sample YAML run file as a string."""
    return _TEMPLATE_YAML
