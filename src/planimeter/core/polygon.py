from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from planimeter.core.accumulator import CompensatedSum
from planimeter.utils.angles import ang_normalize, transit

if TYPE_CHECKING:
    from planimeter.core.engine import GeodesicEngine


@dataclass(frozen=True)
class PolygonResult:
    num: int
    perimeter: float
    area: float | None = None


class PolygonAccumulator:
    """Perimeter and area of a geodesic polygon built up one vertex or edge at a time.

    The sequence starts with a vertex; after that vertices and edges may be added in any order. Any vertex after
    the first creates an edge which is the shortest geodesic from the previous vertex. Perimeter and area are
    accumulated in double-word precision so that polygons with many sides keep their accuracy. With
    ``polyline=True`` only the length of the path is tracked and the path is never closed.

    Not safe for concurrent mutation; use one instance per thread.
    """

    def __init__(self, engine: GeodesicEngine, *, polyline: bool = False) -> None:
        self._engine = engine
        self._area0 = engine.ellipsoid_area()
        self._polyline = polyline
        self._perimeter_sum = CompensatedSum()
        self._area_sum = CompensatedSum()
        self.clear()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(engine={self._engine!r}, polyline={self._polyline!r}, num={self._num})"

    @property
    def num(self) -> int:
        return self._num

    @property
    def polyline(self) -> bool:
        return self._polyline

    @property
    def ellipsoid_area(self) -> float:
        return self._area0

    def major_radius(self) -> float:
        return self._engine.major_radius()

    def flattening(self) -> float:
        return self._engine.flattening()

    def current_point(self) -> tuple[float, float]:
        return self._lat1, self._lon1

    def clear(self) -> None:
        self._num = 0
        self._crossings = 0
        self._perimeter_sum.reset()
        self._area_sum.reset()
        self._lat0 = self._lon0 = self._lat1 = self._lon1 = math.nan

    def add_point(self, lat: float, lon: float) -> None:
        lon = ang_normalize(lon)
        if self._num == 0:
            self._lat0 = self._lat1 = lat
            self._lon0 = self._lon1 = lon
            self._num = 1
            return
        edge = self._engine.inverse(self._lat1, self._lon1, lat, lon, with_area=not self._polyline)
        self._commit(edge.distance, edge.area, lat, lon)

    def add_edge(self, azi: float, s: float) -> None:
        if self._num == 0:
            return
        dest = self._engine.direct(self._lat1, self._lon1, azi, s, with_area=not self._polyline)
        self._commit(s, dest.area, dest.lat, ang_normalize(dest.lon))

    def compute(self, reverse: bool = False, signed: bool = True) -> PolygonResult:  # noqa: FBT001, FBT002
        """Perimeter and area so far, closing the polygon back to the first vertex.

        ``reverse`` makes clockwise traversal count as positive area. ``signed`` reports a polygon traversed
        the "wrong" way round as a negative area; otherwise the area of the rest of the ellipsoid is returned.
        """
        if self._num < 2:
            return PolygonResult(self._num, 0.0, None if self._polyline else 0.0)
        if self._polyline:
            return PolygonResult(self._num, self._perimeter_sum.value())
        perimeter, area = self._close(
            self._perimeter_sum.copy(),
            self._area_sum.copy(),
            self._crossings,
            self._lat1,
            self._lon1,
            reverse=reverse,
            signed=signed,
        )
        return PolygonResult(self._num, perimeter, area)

    def test_point(
        self,
        lat: float,
        lon: float,
        reverse: bool = False,  # noqa: FBT001, FBT002
        signed: bool = True,  # noqa: FBT001, FBT002
    ) -> PolygonResult:
        """Results as if ``(lat, lon)`` were added, without adding it.

        The tentative edges are accumulated in ordinary floating point, so the results are a little less
        accurate than calling :meth:`add_point` followed by :meth:`compute`.
        """
        if self._num == 0:
            return PolygonResult(1, 0.0, None if self._polyline else 0.0)
        lon = ang_normalize(lon)
        edge = self._engine.inverse(self._lat1, self._lon1, lat, lon, with_area=not self._polyline)
        return self._speculate(edge.distance, edge.area, lat, lon, reverse=reverse, signed=signed)

    def test_edge(
        self,
        azi: float,
        s: float,
        reverse: bool = False,  # noqa: FBT001, FBT002
        signed: bool = True,  # noqa: FBT001, FBT002
    ) -> PolygonResult:
        """Results as if an edge of azimuth ``azi`` and length ``s`` were added, without adding it."""
        if self._num == 0:
            return PolygonResult(0, math.nan, None if self._polyline else math.nan)
        dest = self._engine.direct(self._lat1, self._lon1, azi, s, with_area=not self._polyline)
        return self._speculate(s, dest.area, dest.lat, ang_normalize(dest.lon), reverse=reverse, signed=signed)

    def _commit(self, distance: float, area: float | None, lat: float, lon: float) -> None:
        self._perimeter_sum.add(distance)
        if not self._polyline:
            self._area_sum.add(area)
        self._crossings += transit(self._lon1, lon)
        self._lat1, self._lon1 = lat, lon
        self._num += 1

    def _speculate(
        self,
        distance: float,
        area: float | None,
        lat: float,
        lon: float,
        *,
        reverse: bool,
        signed: bool,
    ) -> PolygonResult:
        num = self._num + 1
        perimeter = self._perimeter_sum.value() + distance
        if self._polyline:
            return PolygonResult(num, perimeter)
        perimeter, area = self._close(
            CompensatedSum(perimeter),
            CompensatedSum(self._area_sum.value() + area),
            self._crossings + transit(self._lon1, lon),
            lat,
            lon,
            reverse=reverse,
            signed=signed,
        )
        return PolygonResult(num, perimeter, area)

    def _close(
        self,
        perimeter: CompensatedSum,
        area: CompensatedSum,
        crossings: int,
        lat: float,
        lon: float,
        *,
        reverse: bool,
        signed: bool,
    ) -> tuple[float, float]:
        # Consumes the two sums passed in; callers hand over copies or throwaway sums
        closing = self._engine.inverse(lat, lon, self._lat0, self._lon0)
        perimeter.add(closing.distance)
        area.add(closing.area)
        crossings += transit(lon, self._lon0)
        return perimeter.value(), self._reduce_area(area, crossings, reverse=reverse, signed=signed)

    def _reduce_area(self, area: CompensatedSum, crossings: int, *, reverse: bool, signed: bool) -> float:
        area0 = self._area0
        area.remainder(area0)
        # An odd number of crossings means the polygon encircles a pole
        if crossings & 1:
            area.add((1 if area.value() < 0 else -1) * area0 / 2)
        # The raw sum is clockwise positive
        if not reverse:
            area.negate()
        if signed:
            if area.value() > area0 / 2:
                area.add(-area0)
            elif area.value() <= -area0 / 2:
                area.add(area0)
        elif area.value() >= area0:
            area.add(-area0)
        elif area.value() < 0:
            area.add(area0)
        return 0.0 + area.value()
