from __future__ import annotations

import json
from typing import TYPE_CHECKING

import numpy as np
from shapely.geometry import LineString, Polygon, shape

from planimeter.consts.ellipsoids import DEFAULT_ELLIPSOID
from planimeter.core.engine import GeographicLibEngine
from planimeter.core.polygon import PolygonAccumulator

if TYPE_CHECKING:
    from planimeter.core.engine import GeodesicEngine
    from planimeter.core.polygon import PolygonResult

SUPPORTED_GEOMETRY_TYPES = {"Polygon", "LineString"}


def geojson_to_geometry(geojson_str: str) -> Polygon | LineString:
    geojson = json.loads(geojson_str)
    if geojson["type"] not in SUPPORTED_GEOMETRY_TYPES:
        msg = "Provided GeoJSON is not a polygon or a line string"
        raise ValueError(msg)

    geometry = shape(geojson)
    if not geometry.is_valid:
        msg = f"The provided {geojson['type'].lower()} is not valid"
        raise ValueError(msg)

    return geometry


def geometry_area_perimeter(
    geometry: Polygon | LineString,
    engine: GeodesicEngine,
    *,
    reverse: bool = False,
    signed: bool = True,
) -> PolygonResult:
    """Geodesic perimeter and area of a polygon's exterior ring, or the length of a line string.

    Coordinates are taken as (lon, lat) pairs in degrees, the order GeoJSON and shapely use.
    """
    if isinstance(geometry, Polygon):
        coords = np.asarray(geometry.exterior.coords)
        # Rings repeat the first vertex at the end; the accumulator closes the polygon itself
        coords = coords[:-1]
        accumulator = PolygonAccumulator(engine)
    elif isinstance(geometry, LineString):
        coords = np.asarray(geometry.coords)
        accumulator = PolygonAccumulator(engine, polyline=True)
    else:
        msg = f"Unsupported geometry type: {geometry.geom_type}"
        raise ValueError(msg)

    if coords.size:
        for lon, lat in coords[:, :2]:
            accumulator.add_point(float(lat), float(lon))
    return accumulator.compute(reverse=reverse, signed=signed)


def calculate_geodesic_area(polygon: Polygon, engine: GeodesicEngine | None = None) -> float:
    engine = engine or GeographicLibEngine.from_ellipsoid(DEFAULT_ELLIPSOID)
    result = geometry_area_perimeter(polygon, engine)
    # Return the area in square meters (clockwise rings come out negative, so we take the absolute value)
    return float(abs(result.area))
