from __future__ import annotations

from planimeter.core.accumulator import CompensatedSum
from planimeter.core.engine import GeodesicEngine, GeographicLibEngine
from planimeter.core.polygon import PolygonAccumulator, PolygonResult

__all__ = ["CompensatedSum", "GeodesicEngine", "GeographicLibEngine", "PolygonAccumulator", "PolygonResult"]
