"""Shared fixtures for beam section analysis tests."""
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from beamshape.geometry import SectionProfile
from beamshape.materials import MaterialProperties


def udl_envelope(q, span, n):
    """Moment and shear of a simply supported beam under a UDL (sagging negative)."""
    xs = [span * i / (n - 1) for i in range(n)]
    moments = [-0.5 * q * x * (span - x) for x in xs]
    shears = [q * (span / 2 - x) for x in xs]
    return xs, moments, shears


@pytest.fixture(scope="module")
def materials():
    return MaterialProperties()


@pytest.fixture(scope="module")
def rectangle():
    """300 x 600 mm rectangle."""
    return SectionProfile.rectangle(0.3, 0.6)


@pytest.fixture(scope="module")
def config_path():
    return Path(__file__).parent.parent / "config" / "sample_input.yaml"
