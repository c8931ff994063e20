from __future__ import annotations

from planimeter.consts import directories, ellipsoids, logging

__all__ = ["directories", "ellipsoids", "logging"]
