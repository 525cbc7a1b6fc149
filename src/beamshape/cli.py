"""Command-line interface for beam section analysis.

Usage::

    beamshape run <input_yaml> [-o results.json] [--code is456|aci318] [--method branson|bischoff]
    beamshape template
    beamshape validate <input_yaml>
"""

from __future__ import annotations

import logging
import warnings
from pathlib import Path

import click

from .exceptions import AnalysisWarning, BeamShapeError
from .input_parser import generate_template, parse_input
from .models.inputs import DesignCodeType, IeffMethod, resolve_design_code, resolve_ieff_method


# ---------------------------------------------------------------------------
# Top-level group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(package_name="beam-shape-explorer")
def main():
    """Beam Shape Explorer - RC section capacity and deflection."""


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.option("-o", "--output", default=None, help="Write results as JSON to this file.")
@click.option(
    "--code",
    type=click.Choice([c.value for c in DesignCodeType]),
    default=None,
    help="Override the design code of the run file.",
)
@click.option(
    "--method",
    type=click.Choice([m.value for m in IeffMethod]),
    default=None,
    help="Override the effective moment of inertia method.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log per-station intermediates.")
def run(input_file: str, output: str | None, code: str | None, method: str | None,
        verbose: bool) -> None:
    """Run the section analysis for INPUT_FILE."""
    from .core.beam_analysis import analyse_input

    _configure_logging(verbose)
    input_path = Path(input_file)

    # ------------------------------------------------------------------
    # 1. Parse input
    # ------------------------------------------------------------------
    click.echo(f"Reading input file: {input_path}")
    try:
        inputs = parse_input(input_path)
    except BeamShapeError as exc:
        click.secho(f"Error parsing input: {exc}", fg="red", err=True)
        raise SystemExit(1) from exc

    updates = {}
    if code:
        updates["design_code"] = resolve_design_code(code)
    if method:
        updates["ieff_method"] = resolve_ieff_method(method)
    if updates:
        inputs.analysis = inputs.analysis.model_copy(update=updates)

    # ------------------------------------------------------------------
    # 2. Analyse
    # ------------------------------------------------------------------
    click.echo(
        f"Analysing {len(inputs.stations)} stations "
        f"({inputs.analysis.design_code.value}, {inputs.analysis.ieff_method.value}) ..."
    )
    try:
        with warnings.catch_warnings():
            # Recorded on the result and printed below
            warnings.simplefilter("ignore", AnalysisWarning)
            result = analyse_input(inputs)
    except (BeamShapeError, ValueError) as exc:
        click.secho(f"Analysis error: {exc}", fg="red", err=True)
        raise SystemExit(1) from exc

    # ------------------------------------------------------------------
    # 3. Report
    # ------------------------------------------------------------------
    lim = result.limits
    click.echo(
        f"\nLimits: rho_max = {lim.rho_max:.5f}, rho_min = {lim.rho_min:.5f}, "
        f"sConst = {lim.s_const:.1f} MPa"
    )
    click.echo(
        f"\n{'#':>3} {'x (m)':>7} {'Mu':>9} {'As':>8} {'Mn':>9} "
        f"{'Vu':>8} {'Vn':>8} {'Ieff (m4)':>11} {'D (mm)':>8}  status"
    )
    for st in result.stations:
        defl = f"{st.deflection * 1000:8.2f}" if st.deflection is not None else f"{'-':>8}"
        click.echo(
            f"{st.index:>3} {st.position:7.3f} {st.moment_demand:9.1f} {st.steel_area:8.0f} "
            f"{st.moment_capacity:9.1f} {st.shear_demand:8.1f} {st.shear_capacity:8.1f} "
            f"{st.effective_mi:11.3e} {defl}  {st.status.value}"
        )
    click.echo(f"\nMaximum deflection: {result.deflection.max_deflection * 1000:.2f} mm")

    if result.warnings:
        click.secho(f"\n{len(result.warnings)} warning(s):", fg="yellow")
        for msg in result.warnings:
            click.echo(f"  - {msg}")

    colour = {"pass": "green", "warning": "yellow", "fail": "red"}[result.status.value]
    click.secho(f"\nOverall status: {result.status.value.upper()}", fg=colour)

    if output:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(result.model_dump_json(indent=2), encoding="utf-8")
        click.echo(f"Results written to {out_path}")


# ---------------------------------------------------------------------------
# template
# ---------------------------------------------------------------------------

@main.command()
def template() -> None:
    """Print a sample input YAML to stdout."""
    click.echo(generate_template())


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True))
def validate(input_file: str) -> None:
    """Validate INPUT_FILE without running the analysis."""
    input_path = Path(input_file)
    click.echo(f"Validating: {input_path}")
    try:
        inputs = parse_input(input_path)
    except BeamShapeError as exc:
        click.secho(f"\n{exc}", fg="yellow")
        raise SystemExit(1) from exc

    click.echo(f"  {len(inputs.stations)} stations over {inputs.span} m")
    click.secho("\nInput file is valid.", fg="green")


# ---------------------------------------------------------------------------
# Allow ``python -m beamshape.cli``
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
