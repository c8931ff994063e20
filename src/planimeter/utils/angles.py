from __future__ import annotations

import math


def two_sum(u: float, v: float) -> tuple[float, float]:
    """Error free transformation of a sum: returns ``(s, t)`` with ``s = fl(u + v)`` and ``s + t == u + v``."""
    s = u + v
    up = s - v
    vpp = s - up
    up -= u
    vpp -= v
    t = -(up + vpp)
    return s, t


def ang_normalize(x: float) -> float:
    """Reduce an angle in degrees to the range [-180, 180)."""
    y = math.fmod(x, 360.0)
    if y >= 180.0:
        y -= 360.0
    elif y < -180.0:
        y += 360.0
    return y


def ang_diff(x: float, y: float) -> float:
    """Difference ``y - x`` of two angles in degrees, reduced to (-180, 180]."""
    d, t = two_sum(ang_normalize(-x), ang_normalize(y))
    d = ang_normalize(d)
    if d - 180.0 + t > 0.0:
        d -= 360.0
    elif d + 180.0 + t <= 0.0:
        d += 360.0
    return d + t


def transit(lon1: float, lon2: float) -> int:
    """Signed prime meridian crossing of the shortest path from ``lon1`` to ``lon2``.

    Returns 1 for an eastward crossing, -1 for a westward crossing and 0 otherwise. ``lon12`` is computed
    the same way the geodesic inverse solver computes it, so the result agrees with the edge the engine
    actually measured.
    """
    lon1 = ang_normalize(lon1)
    lon2 = ang_normalize(lon2)
    lon12 = ang_diff(lon1, lon2)
    if lon1 < 0 <= lon2 and lon12 > 0:
        return 1
    if lon2 < 0 <= lon1 and lon12 < 0:
        return -1
    return 0
