#!/usr/bin/env python3
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import typer

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from forestplot import (  # noqa: E402
    ForestPlotError,
    build_scale,
    compute_domain,
    compute_layout,
    load_theme,
    parse_payload,
    render_svg,
)
from forestplot.export import RasterizeError, rasterize_svg_to_png  # noqa: E402
from forestplot.renderer import load_payload  # noqa: E402
from validators import validate_svg  # noqa: E402

app = typer.Typer(
    add_completion=False,
    help="Render forest plots from JSON, inspect their axis, or validate output SVGs.",
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(exc: ForestPlotError) -> None:
    typer.echo(f"ERROR {exc.code}: {exc.message}", err=True)
    typer.echo(f"HINT: {exc.hint}", err=True)
    raise typer.Exit(code=1)


@app.command("render")
def render(
    input_json: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Input JSON with plotConfig and data.",
    ),
    output_svg: Path = typer.Argument(
        ...,
        dir_okay=False,
        help="Output SVG path.",
    ),
    png: Path | None = typer.Option(
        None,
        "--png",
        dir_okay=False,
        help="Optional PNG copy of the rendered SVG.",
    ),
    theme: Path | None = typer.Option(
        None,
        "--theme",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Optional layout theme YAML.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details."),
) -> None:
    """Render a forest plot SVG."""
    _configure_logging(verbose)
    try:
        render_svg(input_json, output_svg, theme)
    except ForestPlotError as exc:
        _fail(exc)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"ERROR E1199_UNEXPECTED: {exc}", err=True)
        typer.echo("HINT: Check input paths and JSON content.", err=True)
        raise typer.Exit(code=1)
    if png is not None:
        try:
            backend = rasterize_svg_to_png(output_svg, png)
        except RasterizeError as exc:
            typer.echo(f"ERROR E3001_RASTERIZE_FAILED: {exc}", err=True)
            typer.echo("HINT: Install resvg or the cairosvg package.", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Wrote {png} ({backend})")
    typer.echo(f"Wrote {output_svg}")


@app.command()
def domain(
    input_json: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Input JSON with plotConfig and data.",
    ),
    theme: Path | None = typer.Option(
        None,
        "--theme",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Optional layout theme YAML.",
    ),
) -> None:
    """Print the padded axis domain, ticks and chart size as JSON."""
    try:
        config, rows = parse_payload(load_payload(input_json))
        layout = (
            compute_layout(len(rows), config, load_theme(theme))
            if theme is not None
            else compute_layout(len(rows), config)
        )
        scale = build_scale(compute_domain(rows), layout)
    except ForestPlotError as exc:
        _fail(exc)
    fmt = scale.tick_format(config.n_ticks)
    payload = {
        "domain": list(scale.domain),
        "ticks": [fmt(value) for value in scale.ticks(config.n_ticks)],
        "width": config.width,
        "height": layout.height,
    }
    typer.echo(json.dumps(payload, indent=2, sort_keys=True))


@app.command()
def validate(
    input_svg: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Path to the SVG to validate.",
    ),
    contract: Path = typer.Option(
        REPO_ROOT / "config" / "figure_contract.v1.yaml",
        "--contract",
        "-c",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Path to the figure contract YAML.",
    ),
    report: Path | None = typer.Option(
        None,
        "--report",
        "-o",
        dir_okay=False,
        help="Optional path to write the JSON report.",
    ),
) -> None:
    """Validate a rendered SVG and emit a JSON report."""
    result = validate_svg(input_svg, contract)
    payload = json.dumps(result.to_dict(), indent=2, sort_keys=True)
    if report is not None:
        report.write_text(payload)
    typer.echo(payload)
    raise typer.Exit(code=0 if result.status == "pass" else 1)


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] not in {
        "render",
        "domain",
        "validate",
        "-h",
        "--help",
    }:
        sys.argv.insert(1, "render")
    app(prog_name="forestplot")
