"""Shear capacity solver tests."""
import math

import pytest

from beamshape.codes import ACI318, IS456
from beamshape.codes.aci318 import aci318_concrete_shear
from beamshape.codes.is456 import is456_shear_stress
from beamshape.core.reinforcement import ReinforcementDesign
from beamshape.core.shear import ShearSolver, stirrup_shear_resistance
from beamshape.exceptions import DegenerateGeometryWarning
from beamshape.geometry import SectionProfile
from beamshape.models.outputs import DesignStatus
from beamshape.utils.constants import GEOMETRY_TOLERANCE


CODES = [IS456(), ACI318()]
CODE_IDS = ["is456", "aci318"]


def _steel(As, d=0.55):
    return ReinforcementDesign(As=As, d=d, radius=0.02, tension_face="bottom", steel_level=0.6 - d)


class _PinchedProfile:
    """Section with concrete only at mid-depth, so every division level misses it."""

    depth = 0.6

    def __init__(self, mid_width):
        self.mid_width = mid_width

    def width_at_depth(self, depth, from_top=True):
        return self.mid_width if abs(depth - self.depth / 2) < 1e-12 else 0.0


class TestConcreteShearFormulas:
    """Closed-form concrete shear candidates."""

    def test_is456_shear_stress(self):
        """IS 456 shear stress follows the beta formula."""
        rho = 0.01
        beta = max(0.8 * 40 / (6.89 * rho * 100), 1)
        expected = 0.85 * math.sqrt(0.8 * 40) * (math.sqrt(1 + 5 * beta) - 1) / (6 * beta)
        assert is456_shear_stress(40, rho) == pytest.approx(expected)

    def test_is456_beta_floor(self):
        """Beta is limited to 1 for heavily reinforced sections."""
        expected = 0.85 * math.sqrt(32) * (math.sqrt(6) - 1) / 6
        assert is456_shear_stress(40, 0.1) == pytest.approx(expected)

    def test_aci_ratio_capped(self):
        """Vu.d/Mu is capped at 1."""
        _, _, _, ratio = aci318_concrete_shear(40, 0.01, 300, 550, 500, 10)
        assert ratio == 1.0

    def test_aci_ratio_at_zero_moment(self):
        """Zero moment takes the capped ratio."""
        _, _, _, ratio = aci318_concrete_shear(40, 0.01, 300, 550, 100, 0.0)
        assert ratio == 1.0

    def test_aci_ratio_uses_shear_span(self):
        """Below the cap the ratio is Vu.d/Mu."""
        _, _, _, ratio = aci318_concrete_shear(40, 0.01, 300, 550, 100, 200)
        assert ratio == pytest.approx(100 * 550 / (200 * 1000))

    def test_aci_governing_is_minimum(self):
        """ACI 318 Vc is the smaller of the detailed and upper-bound formulas."""
        Vc1, Vc2, Vc, _ = aci318_concrete_shear(40, 0.02, 300, 550, 100, 50)
        assert Vc == min(Vc1, Vc2)
        assert Vc2 == pytest.approx(0.29 * math.sqrt(40) * 300 * 550 / 1000)


class TestStirrups:
    """Stirrup shear resistance."""

    def test_vertical_stirrups(self, materials):
        """Vertical stirrups give 0.87.fy.Av.d/s."""
        Av = math.pi * 8 ** 2 / 4
        expected = 0.87 * 415 * Av * 600 / (200 * 1000)
        assert stirrup_shear_resistance(materials, 0.6, 8, 200) == pytest.approx(expected)

    def test_inclined_stirrups_stronger(self, materials):
        """45 degree stirrups carry sqrt(2) times the vertical resistance."""
        vertical = stirrup_shear_resistance(materials, 0.6, 8, 200, 90)
        inclined = stirrup_shear_resistance(materials, 0.6, 8, 200, 45)
        assert inclined == pytest.approx(vertical * math.sqrt(2))

    def test_zero_spacing(self, materials):
        """Zero stirrup spacing is rejected."""
        with pytest.raises(ValueError):
            stirrup_shear_resistance(materials, 0.6, 8, 0)


class TestWebWidth:
    """Governing web width search."""

    def test_rectangle_web_width(self, rectangle):
        """A rectangle's web width is its full width."""
        bw, _ = ShearSolver(IS456()).find_web_width(rectangle)
        assert bw == pytest.approx(0.3)

    def test_i_section_web_governs(self):
        """The I-section waist governs, found between the flanges."""
        section = SectionProfile.i_section(0.4, 0.1, 0.15, 0.6)
        bw, level = ShearSolver(IS456(), 15).find_web_width(section)
        assert bw == pytest.approx(0.15)
        assert 0.1 < level < 0.5

    def test_mid_depth_fallback(self, materials):
        """With no width at any division level, the mid-depth width is used."""
        solver = ShearSolver(IS456(), 15)
        with pytest.warns(DegenerateGeometryWarning, match="mid-depth"):
            result = solver.solve(-200, 150, _PinchedProfile(0.25), _steel(1500), materials)
        assert result.web_width == pytest.approx(0.25)
        assert result.web_level == pytest.approx(0.3)
        assert any("mid-depth" in msg for msg in result.warnings)

    def test_web_width_clamped_to_tolerance(self, materials):
        """A section with no width anywhere clamps bw to the geometry tolerance."""
        solver = ShearSolver(IS456(), 15)
        with pytest.warns(DegenerateGeometryWarning, match="clamped"):
            result = solver.solve(-200, 150, _PinchedProfile(0.0), _steel(1500), materials)
        assert result.web_width == GEOMETRY_TOLERANCE
        assert math.isfinite(result.shear_capacity)


class TestShearSolver:
    """Shear capacity at a single station."""

    @pytest.mark.parametrize("code", CODES, ids=CODE_IDS)
    def test_no_stirrups_halves_concrete_shear(self, code, materials, rectangle):
        """Without stirrups Vn is half of Vc."""
        result = ShearSolver(code).solve(-200, 150, rectangle, _steel(1500), materials)
        assert not result.shear_reinf_provided
        assert result.shear_capacity == pytest.approx(0.5 * result.concrete_shear)

    @pytest.mark.parametrize("code", CODES, ids=CODE_IDS)
    def test_small_stirrup_shear_ignored(self, code, materials, rectangle):
        """Vs below the tolerance counts as no stirrups."""
        result = ShearSolver(code).solve(
            -200, 150, rectangle, _steel(1500), materials, stirrup_shear=1e-4
        )
        assert not result.shear_reinf_provided
        assert result.shear_capacity == pytest.approx(0.5 * result.concrete_shear)

    @pytest.mark.parametrize("code", CODES, ids=CODE_IDS)
    def test_stirrups_add_to_concrete(self, code, materials, rectangle):
        """With stirrups Vn = Vc + Vs."""
        result = ShearSolver(code).solve(
            -200, 150, rectangle, _steel(1500), materials, stirrup_shear=100.0
        )
        assert result.shear_reinf_provided
        assert result.shear_capacity == pytest.approx(result.concrete_shear + 100.0)

    def test_code_a_depth_and_governing(self, materials, rectangle):
        """IS 456 uses d = h and the smaller of both Vc formulas."""
        result = ShearSolver(IS456()).solve(-200, 150, rectangle, _steel(1500), materials)
        assert result.effective_depth == pytest.approx(0.6)
        assert set(result.concrete_candidates) == {"is456", "aci318"}
        assert result.concrete_shear == pytest.approx(min(result.concrete_candidates.values()))
        assert result.rho == pytest.approx(1500 / (300 * 600))

    def test_code_b_depth(self, materials, rectangle):
        """ACI 318 uses d = 0.96h - cover and its own Vc only."""
        result = ShearSolver(ACI318()).solve(-200, 150, rectangle, _steel(1500), materials)
        assert result.effective_depth == pytest.approx(0.96 * 0.6 - 0.05)
        assert list(result.concrete_candidates) == ["aci318"]
        d = result.effective_depth * 1000
        _, _, Vc, _ = aci318_concrete_shear(40, 1500 / (300 * d), 300, d, 150, -200)
        assert result.concrete_shear == pytest.approx(Vc)

    def test_code_b_capacity_with_stirrups(self, materials, rectangle):
        """ACI 318 capacity with stirrups adds Vs to the ACI Vc."""
        result = ShearSolver(ACI318()).solve(
            -200, 150, rectangle, _steel(1500), materials, stirrup_shear=80.0
        )
        d = (0.96 * 0.6 - 0.05) * 1000
        _, _, Vc, _ = aci318_concrete_shear(40, 1500 / (300 * d), 300, d, 150, -200)
        assert result.shear_capacity == pytest.approx(Vc + 80.0)

    def test_status(self, materials, rectangle):
        """Status fails when Vn < |Vu| and passes otherwise."""
        solver = ShearSolver(IS456())
        weak = solver.solve(-200, 2000, rectangle, _steel(1500), materials)
        strong = solver.solve(-200, 10, rectangle, _steel(1500), materials, stirrup_shear=300)
        assert weak.status == DesignStatus.FAIL
        assert strong.status == DesignStatus.PASS
        assert strong.error_percent > 0

    def test_zero_steel_ratio_floored(self, materials, rectangle):
        """A zero steel ratio is floored and still gives a capacity."""
        with pytest.warns(DegenerateGeometryWarning):
            result = ShearSolver(IS456()).solve(0.0, 100, rectangle, _steel(0.0), materials)
        assert result.rho == pytest.approx(1e-6)
        assert result.shear_capacity > 0

    @pytest.mark.parametrize("code", CODES, ids=CODE_IDS)
    def test_nan_stirrup_shear_gives_zero_capacity(self, code, materials, rectangle):
        """An undefined Vs gives Vn = 0."""
        result = ShearSolver(code).solve(
            -200, 150, rectangle, _steel(1500), materials, stirrup_shear=float("nan")
        )
        assert result.shear_capacity == 0.0

    @pytest.mark.parametrize("code", CODES, ids=CODE_IDS)
    def test_nan_shear_demand_gives_zero_capacity(self, code, materials, rectangle):
        """An undefined shear demand gives Vn = 0 under either code."""
        result = ShearSolver(code).solve(-200, float("nan"), rectangle, _steel(1500), materials)
        assert result.shear_capacity == 0.0
        assert result.status == DesignStatus.FAIL
        assert any("NaN" in msg for msg in result.warnings)

    @pytest.mark.parametrize("code", CODES, ids=CODE_IDS)
    def test_nan_moment_gives_zero_capacity(self, code, materials, rectangle):
        """An undefined moment demand gives Vn = 0 under either code."""
        result = ShearSolver(code).solve(float("nan"), 150, rectangle, _steel(1500), materials)
        assert result.shear_capacity == 0.0

    def test_calculation_steps(self, materials, rectangle):
        """Five numbered calculation steps are recorded."""
        result = ShearSolver(IS456()).solve(-200, 150, rectangle, _steel(1500), materials)
        assert [s.step_number for s in result.steps] == [1, 2, 3, 4, 5]
