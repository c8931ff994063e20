from __future__ import annotations

# Any name accepted by pyproj.Geod(ellps=...)
DEFAULT_ELLIPSOID = "WGS84"
