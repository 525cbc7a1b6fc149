"""Reinforcement sizing tests."""
import pytest

from beamshape.codes import IS456
from beamshape.core.reinforcement import (
    ReinforcementDesigner, required_steel_area, tension_face_for
)
from beamshape.exceptions import DegenerateGeometryWarning, InsufficientStationsError
from beamshape.geometry import SectionProfile

from conftest import udl_envelope


@pytest.fixture(scope="module")
def designer():
    return ReinforcementDesigner(IS456())


@pytest.fixture(scope="module")
def s_const(materials):
    return IS456().get_limits(materials).s_const


class TestSteelArea:
    """Per-station sizing formula."""

    def test_formula(self, s_const):
        """As = Mu / (sConst x d)."""
        assert required_steel_area(-200, 0.3, s_const) == pytest.approx(
            1e6 * 200 / (s_const * 0.3 * 1000)
        )

    def test_sign_ignored(self, s_const):
        """Sagging and hogging moments of equal size need equal steel."""
        assert required_steel_area(150, 0.5, s_const) == required_steel_area(-150, 0.5, s_const)

    def test_tension_face(self):
        """Negative and zero moments put the steel at the bottom."""
        assert tension_face_for(-100) == "bottom"
        assert tension_face_for(100) == "top"
        assert tension_face_for(0.0) == "bottom"


class TestReinforcementDesigner:
    """Sizing along a demand envelope."""

    def test_area_grows_with_moment(self, designer, materials, rectangle):
        """Steel area grows strictly with the moment demand."""
        moments = [-50, -100, -200, -300]
        designs = designer.design(moments, [rectangle] * 4, materials)
        areas = [d.As for d in designs]
        assert all(a < b for a, b in zip(areas, areas[1:]))
        assert all(a > 0 for a in areas)

    def test_effective_depth(self, designer, materials, rectangle):
        """d = h - cover."""
        designs = designer.design([-100, -100], [rectangle] * 2, materials, cover=40)
        assert designs[0].d == pytest.approx(0.56)

    def test_steel_level_follows_tension_face(self, designer, materials, rectangle):
        """Steel sits at cover from the tension face."""
        sag, hog = designer.design([-100, 100], [rectangle] * 2, materials)
        assert sag.tension_face == "bottom"
        assert sag.steel_level == pytest.approx(0.05)
        assert sag.compression_from_top
        assert hog.tension_face == "top"
        assert hog.steel_level == pytest.approx(0.55)
        assert not hog.compression_from_top

    def test_area_override(self, designer, materials, rectangle):
        """An override sets the same area at every station."""
        designs = designer.design([-50, -200], [rectangle] * 2, materials, area_override=1500)
        assert [d.As for d in designs] == [1500, 1500]
        assert all(d.is_override for d in designs)

    def test_override_wins_over_constant(self, designer, materials, rectangle):
        """The override takes precedence over constant As."""
        designs = designer.design(
            [-50, -200], [rectangle] * 2, materials, area_override=900, constant_as=True
        )
        assert all(d.As == 900 for d in designs)
        assert not any(d.is_constant for d in designs)

    def test_constant_as_uses_envelope_maximum(self, designer, materials, rectangle):
        """Constant As repeats the peak station area."""
        _, moments, _ = udl_envelope(40, 6.0, 7)
        designs = designer.design(moments, [rectangle] * 7, materials, constant_as=True)
        peak = designer.design(moments, [rectangle] * 7, materials)[3].As
        assert all(d.As == pytest.approx(peak) for d in designs)
        assert all(d.is_constant for d in designs)

    def test_zero_moment_radius_floored(self, designer, materials, rectangle):
        """Zero steel gives a floored bar radius and a warning."""
        with pytest.warns(DegenerateGeometryWarning):
            designs = designer.design([0.0, -100], [rectangle] * 2, materials)
        assert designs[0].As == 0.0
        assert designs[0].radius == pytest.approx(1e-3)
        assert designs[0].warnings

    def test_radius(self, designer, materials, rectangle):
        """Equivalent bar radius is sqrt(As / pi)."""
        designs = designer.design([-100, -100], [rectangle] * 2, materials, area_override=1000)
        assert designs[0].radius == pytest.approx((1000 / 3.141592653589793) ** 0.5 / 1000)

    def test_shallow_section_depth_floored(self, designer, materials):
        """A section shallower than the cover floors d."""
        shallow = SectionProfile.rectangle(0.3, 0.04)
        with pytest.warns(DegenerateGeometryWarning):
            designs = designer.design([-1, -1], [shallow] * 2, materials)
        assert designs[0].d == pytest.approx(1e-3)

    def test_insufficient_stations(self, designer, materials, rectangle):
        """A single station is rejected."""
        with pytest.raises(InsufficientStationsError):
            designer.design([-100], [rectangle], materials)

    def test_section_count_mismatch(self, designer, materials, rectangle):
        """Moments and sections must pair up."""
        with pytest.raises(ValueError):
            designer.design([-100, -100], [rectangle], materials)
