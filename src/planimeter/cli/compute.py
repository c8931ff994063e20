from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, TextIO

import click
from pyproj.exceptions import GeodError

from planimeter.core.engine import GeographicLibEngine
from planimeter.core.polygon import PolygonAccumulator
from planimeter.core.settings import EllipsoidSettings, Settings, current_settings
from planimeter.utils.geom import geojson_to_geometry, geometry_area_perimeter
from planimeter.utils.logging import configure_logging, get_logger
from planimeter.utils.points import parse_edge, parse_point, read_polygons

if TYPE_CHECKING:
    from planimeter.core.polygon import PolygonResult

_logger = get_logger(__name__)


def _ellipsoid_options(func):  # noqa: ANN001, ANN202
    func = click.option(
        "--flattening",
        type=float,
        help="Flattening of a custom ellipsoid - requires --major-radius",
    )(func)
    func = click.option(
        "--major-radius",
        type=float,
        help="Equatorial radius of a custom ellipsoid in meters - requires --flattening",
    )(func)
    func = click.option(
        "--ellipsoid",
        help="Name of the ellipsoid as known to PROJ - uses the configured default if not specified",
    )(func)
    return click.option(
        "--precision",
        type=click.IntRange(min=0, max=10),
        help="Number of decimal places in the output - uses the configured default if not specified",
    )(func)


def _resolve_engine(
    ellipsoid: str | None,
    major_radius: float | None,
    flattening: float | None,
) -> tuple[GeographicLibEngine, Settings]:
    settings = current_settings()
    configure_logging(settings.log_level)
    if ellipsoid is not None or major_radius is not None or flattening is not None:
        try:
            settings.ellipsoid = EllipsoidSettings(
                name=ellipsoid or settings.ellipsoid.name,
                major_radius=major_radius,
                flattening=flattening,
            )
        except ValueError as e:
            raise click.BadParameter(str(e)) from e
    try:
        engine = GeographicLibEngine.from_settings(settings)
    except (KeyError, GeodError) as e:
        msg = f"Unknown ellipsoid: {settings.ellipsoid.name}"
        raise click.BadParameter(msg) from e
    return engine, settings


def _format_result(result: PolygonResult, precision: int) -> str:
    fields = [str(result.num), f"{result.perimeter:.{precision}f}"]
    if result.area is not None:
        fields.append(f"{result.area:.{precision}f}")
    return " ".join(fields)


def _accumulate(accumulator: PolygonAccumulator, lines: list[str], *, edges: bool) -> None:
    accumulator.clear()
    accumulator.add_point(*parse_point(lines[0]))
    for line in lines[1:]:
        if edges:
            accumulator.add_edge(*parse_edge(line))
        else:
            accumulator.add_point(*parse_point(line))


@click.command(help="Compute perimeters and areas of geodesic polygons read line by line")
@click.option(
    "--input",
    "input_file",
    type=click.File("r"),
    help="File with one 'lat lon' pair per line and polygons separated by blank lines - reads stdin if not provided",
)
@click.option("--reverse", is_flag=True, default=False, help="Count clockwise traversal as positive area")
@click.option(
    "--unsigned",
    is_flag=True,
    default=False,
    help="Report the area of the rest of the ellipsoid for polygons traversed the wrong way round",
)
@click.option("--polyline", is_flag=True, default=False, help="Treat the points as a polyline and skip the area")
@click.option(
    "--edges",
    is_flag=True,
    default=False,
    help="Lines after the first point of each polygon hold 'azimuth distance' pairs instead of points",
)
@_ellipsoid_options
def compute(  # noqa: PLR0913, PLR0917
    input_file: TextIO | None,
    reverse: bool,  # noqa: FBT001
    unsigned: bool,  # noqa: FBT001
    polyline: bool,  # noqa: FBT001
    edges: bool,  # noqa: FBT001
    ellipsoid: str | None = None,
    major_radius: float | None = None,
    flattening: float | None = None,
    precision: int | None = None,
) -> None:
    engine, settings = _resolve_engine(ellipsoid, major_radius, flattening)
    precision = precision if precision is not None else settings.output.precision
    _logger.info(
        "Running with:\n%s",
        json.dumps(
            {
                "input": getattr(input_file, "name", "<stdin>"),
                "reverse": reverse,
                "unsigned": unsigned,
                "polyline": polyline,
                "edges": edges,
                "major_radius": engine.major_radius(),
                "flattening": engine.flattening(),
                "precision": precision,
            },
            indent=4,
        ),
    )

    accumulator = PolygonAccumulator(engine, polyline=polyline)
    for lines in read_polygons(input_file or sys.stdin):
        try:
            _accumulate(accumulator, lines, edges=edges)
        except ValueError as e:
            raise click.ClickException(str(e)) from e
        result = accumulator.compute(reverse=reverse, signed=not unsigned)
        click.echo(_format_result(result, precision))


@click.command(help="Compute the geodesic area and perimeter of a GeoJSON Polygon or LineString")
@click.option("--aoi", required=True, help="Area of Interest as GeoJSON")
@click.option("--reverse", is_flag=True, default=False, help="Count clockwise traversal as positive area")
@click.option(
    "--unsigned",
    is_flag=True,
    default=False,
    help="Report the area of the rest of the ellipsoid for polygons traversed the wrong way round",
)
@_ellipsoid_options
def aoi(  # noqa: PLR0913, PLR0917
    aoi: str,
    reverse: bool,  # noqa: FBT001
    unsigned: bool,  # noqa: FBT001
    ellipsoid: str | None = None,
    major_radius: float | None = None,
    flattening: float | None = None,
    precision: int | None = None,
) -> None:
    engine, settings = _resolve_engine(ellipsoid, major_radius, flattening)
    precision = precision if precision is not None else settings.output.precision
    _logger.info(
        "Running with:\n%s",
        json.dumps(
            {
                "aoi": aoi,
                "reverse": reverse,
                "unsigned": unsigned,
                "major_radius": engine.major_radius(),
                "flattening": engine.flattening(),
                "precision": precision,
            },
            indent=4,
        ),
    )

    try:
        geometry = geojson_to_geometry(aoi)
    except (ValueError, KeyError) as e:
        msg = f"Invalid AOI: {e}"
        raise click.ClickException(msg) from e

    result = geometry_area_perimeter(geometry, engine, reverse=reverse, signed=not unsigned)
    click.echo(_format_result(result, precision))
