from __future__ import annotations

import abc
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import pyproj
from geographiclib.geodesic import Geodesic

from planimeter.utils.logging import get_logger

if TYPE_CHECKING:
    from planimeter.core.settings import Settings

_logger = get_logger(__name__)


@dataclass(frozen=True)
class InverseSolution:
    distance: float
    area: float | None = None


@dataclass(frozen=True)
class DirectSolution:
    lat: float
    lon: float
    area: float | None = None


class GeodesicEngine(abc.ABC):
    """Geodesic calculations needed to measure polygons on an ellipsoid.

    ``area`` in a solution is the signed area between the geodesic and the equator (the quadrilateral with
    corners at both end points and their projections on the equator), clockwise positive. It is ``None`` when
    the caller asked for no area.
    """

    @abc.abstractmethod
    def major_radius(self) -> float: ...

    @abc.abstractmethod
    def flattening(self) -> float: ...

    @abc.abstractmethod
    def ellipsoid_area(self) -> float: ...

    @abc.abstractmethod
    def inverse(
        self,
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        *,
        with_area: bool = True,
    ) -> InverseSolution: ...

    @abc.abstractmethod
    def direct(
        self,
        lat1: float,
        lon1: float,
        azi1: float,
        distance: float,
        *,
        with_area: bool = True,
    ) -> DirectSolution: ...


def ellipsoid_area(major_radius: float, flattening: float) -> float:
    """Total surface area of an ellipsoid of revolution, ``4 * pi * c2`` with ``c2`` the authalic radius squared."""
    b = major_radius * (1 - flattening)
    e2 = flattening * (2 - flattening)
    if e2 == 0:
        factor = 1.0
    elif e2 > 0:
        factor = math.atanh(math.sqrt(e2)) / math.sqrt(e2)
    else:
        factor = math.atan(math.sqrt(-e2)) / math.sqrt(-e2)
    c2 = (major_radius**2 + b**2 * factor) / 2
    return 4 * math.pi * c2


class GeographicLibEngine(GeodesicEngine):
    def __init__(self, major_radius: float, flattening: float) -> None:
        self._geod = Geodesic(major_radius, flattening)
        self._area0 = ellipsoid_area(major_radius, flattening)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(major_radius={self._geod.a!r}, flattening={self._geod.f!r})"

    @classmethod
    def from_ellipsoid(cls, name: str) -> GeographicLibEngine:
        geod = pyproj.Geod(ellps=name)
        _logger.debug("Using ellipsoid %s (a=%s, f=%s)", name, geod.a, geod.f)
        return cls(geod.a, geod.f)

    @classmethod
    def from_settings(cls, settings: Settings) -> GeographicLibEngine:
        ellipsoid = settings.ellipsoid
        if ellipsoid.major_radius is not None and ellipsoid.flattening is not None:
            return cls(ellipsoid.major_radius, ellipsoid.flattening)
        return cls.from_ellipsoid(ellipsoid.name)

    def major_radius(self) -> float:
        return self._geod.a

    def flattening(self) -> float:
        return self._geod.f

    def ellipsoid_area(self) -> float:
        return self._area0

    def inverse(
        self,
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        *,
        with_area: bool = True,
    ) -> InverseSolution:
        mask = Geodesic.DISTANCE | (Geodesic.AREA if with_area else Geodesic.EMPTY)
        result = self._geod.Inverse(lat1, lon1, lat2, lon2, mask)
        return InverseSolution(distance=result["s12"], area=result["S12"] if with_area else None)

    def direct(
        self,
        lat1: float,
        lon1: float,
        azi1: float,
        distance: float,
        *,
        with_area: bool = True,
    ) -> DirectSolution:
        mask = Geodesic.LATITUDE | Geodesic.LONGITUDE | (Geodesic.AREA if with_area else Geodesic.EMPTY)
        result = self._geod.Direct(lat1, lon1, azi1, distance, mask)
        return DirectSolution(lat=result["lat2"], lon=result["lon2"], area=result["S12"] if with_area else None)
