"""graticule CLI.

Command-line interface for computing and previewing graticules.
"""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from graticule import __version__
from graticule.config import ConfigError
from graticule.core import (
    Graticule,
    GraticuleOptions,
    GraticuleResult,
    ProjectionStatusClassifier,
    ViewState,
)
from graticule.geometry import Extent
from graticule.geometry.overlay import GraticuleRenderer
from graticule.proj import Projection, ProjectionError, default_registry
from graticule.utils.logging import configure_logging, get_logger

app = typer.Typer(
    name="graticule",
    help="graticule: adaptive longitude/latitude grids for projected maps",
    add_completion=False,
)

# Shared option types
ProjectionOpt = Annotated[
    str, typer.Option("--projection", "-p", help="Projection code, e.g. EPSG:3857")
]
CenterOpt = Annotated[
    tuple[float, float],
    typer.Option("--center", "-c", help="View center X Y in projected units"),
]
ResolutionOpt = Annotated[
    float, typer.Option("--resolution", "-r", help="Projected units per pixel")
]
SizeOpt = Annotated[
    tuple[int, int], typer.Option("--size", "-s", help="View size W H in pixels")
]
PixelRatioOpt = Annotated[
    float, typer.Option("--pixel-ratio", help="Device pixel ratio")
]
TargetSizeOpt = Annotated[
    float | None,
    typer.Option("--target-size", help="Target line spacing in pixels"),
]
MaxLinesOpt = Annotated[
    int | None,
    typer.Option("--max-lines", help="Max lines per axis on each side of center"),
]
PyprojOpt = Annotated[
    bool,
    typer.Option(
        "--pyproj/--no-pyproj",
        help="Resolve codes and projection families with pyproj",
    ),
]
VerboseOpt = Annotated[
    int,
    typer.Option("--verbose", "-v", count=True, help="Increase verbosity (-v, -vv)"),
]
JsonOpt = Annotated[bool, typer.Option("--json", help="Output as JSON")]


# =============================================================================
# Commands
# =============================================================================


@app.command()
def version(json_output: JsonOpt = False) -> None:
    """Show version information."""
    if json_output:
        typer.echo(json.dumps({"version": __version__}))
    else:
        typer.echo(f"graticule {__version__}")


@app.command()
def projections(json_output: JsonOpt = False) -> None:
    """List the built-in projection codes."""
    codes = default_registry.codes()
    if json_output:
        typer.echo(json.dumps({"projections": codes}))
    else:
        for code in codes:
            typer.echo(code)


@app.command()
def build(  # noqa: PLR0913
    projection: ProjectionOpt = "EPSG:3857",
    center: CenterOpt = (0.0, 0.0),
    resolution: ResolutionOpt = 10_000.0,
    size: SizeOpt = (800, 600),
    pixel_ratio: PixelRatioOpt = 1.0,
    target_size: TargetSizeOpt = None,
    max_lines: MaxLinesOpt = None,
    use_pyproj: PyprojOpt = False,
    verbose: VerboseOpt = 0,
    json_output: JsonOpt = False,
) -> None:
    """Compute the graticule for one view and print it."""
    _configure_logging(verbose)
    logger = get_logger(__name__)

    try:
        graticule, proj = _setup(projection, target_size, max_lines, use_pyproj)
        view = _view(center, resolution, size, pixel_ratio)
        logger.info(
            "Building graticule",
            projection=proj.code,
            resolution=resolution,
            size=list(size),
        )
        result = graticule.compute(proj, view)
    except (ConfigError, ProjectionError, ValueError) as e:
        _fail(e, json_output)

    if json_output:
        typer.echo(json.dumps(_result_payload(graticule, result), indent=2))
    else:
        _print_summary(graticule, result)


@app.command()
def render(  # noqa: PLR0913
    output: Annotated[
        Path, typer.Option("--output", "-o", help="PNG file to write")
    ],
    projection: ProjectionOpt = "EPSG:3857",
    center: CenterOpt = (0.0, 0.0),
    resolution: ResolutionOpt = 10_000.0,
    size: SizeOpt = (800, 600),
    pixel_ratio: PixelRatioOpt = 1.0,
    target_size: TargetSizeOpt = None,
    max_lines: MaxLinesOpt = None,
    use_pyproj: PyprojOpt = False,
    verbose: VerboseOpt = 0,
    json_output: JsonOpt = False,
) -> None:
    """Render the graticule for one view to a PNG preview."""
    _configure_logging(verbose)
    logger = get_logger(__name__)

    try:
        graticule, proj = _setup(projection, target_size, max_lines, use_pyproj)
        view = _view(center, resolution, size, pixel_ratio)
        result = graticule.compute(proj, view)
        renderer = GraticuleRenderer(
            stroke_style=graticule.options.stroke_style,
            text_style=graticule.options.text_style,
        )
        image = renderer.render(
            result, view.extent, view.resolution, graticule.formatter
        )
        image.save(output, format="PNG")
    except (ConfigError, ProjectionError, ValueError, OSError) as e:
        _fail(e, json_output)

    logger.info("Preview saved", path=str(output))
    if json_output:
        typer.echo(
            json.dumps(
                {
                    "output": str(output),
                    "mode": result.mode.value,
                    "interval": result.interval,
                    "meridians": len(result.meridians),
                    "parallels": len(result.parallels),
                },
                indent=2,
            )
        )
    else:
        typer.echo(f"Saved {output}")


# =============================================================================
# Helpers
# =============================================================================


def _configure_logging(verbose: int) -> None:
    """Configure logging based on verbosity level."""
    if verbose >= 2:
        level = "DEBUG"
    elif verbose == 1:
        level = "INFO"
    else:
        level = "WARNING"
    configure_logging(level=level)


def _setup(
    code: str,
    target_size: float | None,
    max_lines: int | None,
    use_pyproj: bool,
) -> tuple[Graticule, Projection]:
    """Resolve the projection and create a configured Graticule."""
    options = GraticuleOptions.from_settings()
    if target_size is not None:
        if target_size <= 0:
            raise ValueError(f"--target-size must be > 0, got {target_size}")
        options = replace(options, target_size=target_size)
    if max_lines is not None:
        if max_lines < 0:
            raise ValueError(f"--max-lines must be >= 0, got {max_lines}")
        options = replace(options, max_lines=max_lines)

    if use_pyproj:
        from graticule.proj.pyproj_backend import (  # noqa: PLC0415
            projection_from_crs,
            pyproj_family,
        )

        proj = (
            default_registry.get(code)
            if code in default_registry
            else projection_from_crs(code)
        )
        classifier = ProjectionStatusClassifier(
            definitions=pyproj_family, use_definitions=True
        )
    else:
        proj = default_registry.get(code)
        classifier = ProjectionStatusClassifier()

    return Graticule(options, classifier=classifier), proj


def _view(
    center: tuple[float, float],
    resolution: float,
    size: tuple[int, int],
    pixel_ratio: float,
) -> ViewState:
    if size[0] <= 0 or size[1] <= 0:
        raise ValueError(f"size must be positive, got {size}")
    return ViewState(
        extent=Extent.from_center(center, resolution, size),
        center=center,
        resolution=resolution,
        pixel_ratio=pixel_ratio,
    )


def _fail(error: Exception, json_output: bool) -> NoReturn:
    if json_output:
        typer.echo(json.dumps({"error": str(error)}))
    else:
        typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1) from None


def _result_payload(graticule: Graticule, result: GraticuleResult) -> dict[str, object]:
    payload = result.to_dict()
    formatter = graticule.formatter
    if formatter is not None:
        payload["label_text"] = {
            "top": [formatter.format(label) for label in result.top_labels],
            "bottom": [formatter.format(label) for label in result.bottom_labels],
            "left": [formatter.format(label) for label in result.left_labels],
            "right": [formatter.format(label) for label in result.right_labels],
        }
    return payload


def _print_summary(graticule: Graticule, result: GraticuleResult) -> None:
    typer.echo(f"Mode: {result.mode.value}")
    if result.interval < 0:
        typer.echo("Interval: disabled")
    else:
        typer.echo(f"Interval: {result.interval}\N{DEGREE SIGN}")
    typer.echo(f"Meridians: {len(result.meridians)}")
    typer.echo(f"Parallels: {len(result.parallels)}")
    formatter = graticule.formatter
    if formatter is None:
        return
    if result.top_labels:
        longitudes = [formatter.format(label) for label in result.top_labels]
        typer.echo("Longitudes: " + ", ".join(longitudes))
    if result.left_labels:
        latitudes = [formatter.format(label) for label in result.left_labels]
        typer.echo("Latitudes: " + ", ".join(latitudes))
