"""
Beam section analysis orchestrator.

Coordinates the complete analysis of a demand envelope:
1. Validation of stations and configuration
2. Code limits (rho_max, rho_min, sConst)
3. Reinforcement sizing along the span
4. Per station: flexural capacity, shear capacity, ratio check and
   section properties (independent of each other station)
5. Rotation and deflection over the half span (after every Ieff is known)
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from beamshape.codes import get_design_code
from beamshape.core.deflection import DeflectionIntegrator
from beamshape.core.ductility import check_reinforcement_ratio
from beamshape.core.flexure import FlexureSolver
from beamshape.core.reinforcement import ReinforcementDesigner
from beamshape.core.section_properties import SectionPropertyCalculator
from beamshape.core.shear import ShearSolver, stirrup_shear_resistance
from beamshape.exceptions import InsufficientStationsError
from beamshape.geometry import SectionProfile
from beamshape.materials import MaterialProperties
from beamshape.models.inputs import AnalysisConfig, BeamAnalysisInput
from beamshape.models.outputs import (
    AnalysisOutput, CodeLimitsOutput, DeflectionOutput, DesignStatus, StationOutput
)

logger = logging.getLogger(__name__)


@dataclass
class Station:
    """Demand and section at one position along the span."""
    index: int
    x: float  # m
    Mu: float  # kNm
    Vu: float  # kN
    profile: SectionProfile
    Vs: Optional[float] = None  # kN


def _worst(statuses) -> DesignStatus:
    statuses = list(statuses)
    if DesignStatus.FAIL in statuses:
        return DesignStatus.FAIL
    if DesignStatus.WARNING in statuses:
        return DesignStatus.WARNING
    return DesignStatus.PASS


class BeamAnalysisEngine:
    """
    Main calculation engine for beam section capacity and serviceability.

    The design code and Ieff method are explicit configuration; nothing is
    read from module state.
    """

    def __init__(self, materials: MaterialProperties = None, config=None):
        """
        Args:
            materials: Material constants (defaults when omitted)
            config: AnalysisConfig, or a mapping of its options

        Raises:
            InvalidMethodError: unknown Ieff method selector in a mapping config
        """
        self.materials = materials or MaterialProperties()
        if config is None:
            config = AnalysisConfig()
        elif not isinstance(config, AnalysisConfig):
            config = AnalysisConfig.create(**config)
        self.config = config
        self.code = get_design_code(self.config.design_code)
        self.designer = ReinforcementDesigner(self.code)
        self.flexure_solver = FlexureSolver(self.code, self.config.subdivisions)
        self.shear_solver = ShearSolver(self.code, self.config.subdivisions)
        self.property_calculator = SectionPropertyCalculator(self.config.ieff_method)
        self.integrator = DeflectionIntegrator()

    def analyse(self, stations: Sequence[Station], span: float) -> AnalysisOutput:
        """
        Execute the complete analysis of a demand envelope.

        Args:
            stations: Stations ordered from the first support
            span: Span length in m

        Returns:
            AnalysisOutput with per-station results and the deflection profile

        Raises:
            InsufficientStationsError: fewer than 2 stations
            ValueError: non-positive span
        """
        if len(stations) < 2:
            raise InsufficientStationsError(
                f"Analysis needs at least 2 stations, got {len(stations)}"
            )
        if span <= 0:
            raise ValueError(f"Span must be positive, got {span}")

        materials = self.materials
        cfg = self.config
        notes: List[str] = []

        logger.info(
            "Analysing %d stations over %.3f m (%s, %s Ieff)",
            len(stations), span, self.code.code_name, cfg.ieff_method.value
        )

        limits = self.code.get_limits(materials)
        logger.info(
            "Limits: rho_max = %.5f, rho_min = %.5f, sConst = %.2f MPa",
            limits.rho_max, limits.rho_min, limits.s_const
        )

        moments = [st.Mu for st in stations]
        designs = self.designer.design(
            moments,
            [st.profile for st in stations],
            materials,
            cover=cfg.cover,
            area_override=cfg.area_override,
            constant_as=cfg.constant_as,
            limits=limits,
        )

        results = []
        inertias = []
        for st, reinf in zip(stations, designs):
            flexure = self.flexure_solver.solve(st.Mu, st.profile, reinf, materials, st.index)
            shear = self.shear_solver.solve(
                st.Mu, st.Vu, st.profile, reinf, materials,
                stirrup_shear=st.Vs, cover=cfg.cover, station=st.index,
            )
            ratio = check_reinforcement_ratio(shear.rho, limits, st.index)
            props = self.property_calculator.compute(
                st.Mu, st.profile, reinf, flexure, materials, st.index
            )
            notes.extend(reinf.warnings + flexure.warnings + shear.warnings + ratio.warnings)
            inertias.append(props.effective_mi)
            results.append((st, reinf, flexure, shear, ratio, props))

        profile = self.integrator.integrate(moments, inertias, span, materials.Ec)
        notes.extend(profile.warnings)

        station_outputs = []
        for i, (st, reinf, flexure, shear, ratio, props) in enumerate(results):
            on_half = i < len(profile.rotation)
            station_outputs.append(StationOutput(
                index=st.index,
                position=st.x,
                moment_demand=st.Mu,
                shear_demand=st.Vu,
                steel_area=reinf.As,
                effective_depth=reinf.d,
                tension_face=reinf.tension_face,
                moment_capacity=flexure.moment_capacity,
                compression_depth=flexure.compression_depth,
                compression_centroid=flexure.compression_centroid,
                lever_arm=flexure.lever_arm,
                moment_error_percent=flexure.error_percent,
                target_reached=flexure.target_reached,
                web_width=shear.web_width,
                shear_depth=shear.effective_depth,
                concrete_shear=shear.concrete_shear,
                stirrup_shear=shear.stirrup_shear,
                shear_capacity=shear.shear_capacity,
                rho=ratio.rho,
                rho_within_limits=ratio.within_limits,
                gross_mi=props.gross_mi,
                cracked_mi=props.cracked_mi,
                cracking_moment=props.cracking_moment,
                effective_mi=props.effective_mi,
                rotation=float(profile.rotation[i]) if on_half else None,
                deflection=float(profile.deflection[i]) if on_half else None,
                status=_worst([flexure.status, shear.status, ratio.status]),
            ))

        status = _worst(so.status for so in station_outputs)
        logger.info(
            "Analysis complete: status %s, max deflection %.2f mm, %d warnings",
            status.value, profile.max_deflection * 1000, len(notes)
        )

        return AnalysisOutput(
            design_code=self.code.code_name,
            ieff_method=cfg.ieff_method.value,
            span=span,
            limits=CodeLimitsOutput(
                design_code=self.code.code_name,
                cd_max=limits.cd_max,
                rho_max=limits.rho_max,
                rho_min=limits.rho_min,
                rho_des=limits.rho_des,
                s_const=limits.s_const,
                beta1=limits.beta1,
                calculation_steps=limits.steps,
            ),
            stations=station_outputs,
            deflection=DeflectionOutput(
                dx=profile.dx,
                rotation=profile.rotation.tolist(),
                deflection=profile.deflection.tolist(),
                max_deflection=profile.max_deflection,
            ),
            status=status,
            warnings=notes,
        )


def build_stations(inputs: BeamAnalysisInput, materials: MaterialProperties) -> List[Station]:
    """
    Stations from a validated run file, evenly spaced over the span.

    Vs is derived from the stirrup layout for stations that give none.
    """
    n = len(inputs.stations)
    default_profile = inputs.section.to_profile() if inputs.section else None
    stations = []
    for i, st in enumerate(inputs.stations):
        profile = st.section.to_profile() if st.section else default_profile
        Vs = st.Vs
        if Vs is None and inputs.stirrups is not None:
            Vs = stirrup_shear_resistance(
                materials,
                profile.depth,
                inputs.stirrups.diameter,
                inputs.stirrups.spacing,
                inputs.stirrups.angle,
            )
        stations.append(Station(
            index=i,
            x=inputs.span * i / (n - 1) if n > 1 else 0.0,
            Mu=st.Mu,
            Vu=st.Vu,
            profile=profile,
            Vs=Vs,
        ))
    return stations


def analyse_input(inputs: BeamAnalysisInput) -> AnalysisOutput:
    """Run a complete analysis from a validated input model."""
    materials = MaterialProperties(**inputs.materials.model_dump())
    engine = BeamAnalysisEngine(materials, inputs.analysis)
    return engine.analyse(build_stations(inputs, materials), inputs.span)
