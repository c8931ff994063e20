from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

_SEPARATOR = re.compile(r"[\s,]+")


def _parse_pair(line: str, what: str) -> tuple[float, float]:
    fields = [f for f in _SEPARATOR.split(line.strip()) if f]
    if len(fields) != 2:  # noqa: PLR2004
        msg = f"Expected {what} as two numbers, got: {line.strip()!r}"
        raise ValueError(msg)
    try:
        first, second = float(fields[0]), float(fields[1])
    except ValueError as e:
        msg = f"Expected {what} as two numbers, got: {line.strip()!r}"
        raise ValueError(msg) from e
    return first, second


def parse_point(line: str) -> tuple[float, float]:
    return _parse_pair(line, "latitude and longitude")


def parse_edge(line: str) -> tuple[float, float]:
    return _parse_pair(line, "azimuth and distance")


def read_polygons(lines: Iterable[str]) -> Iterator[list[str]]:
    """Split a stream of lines into polygons.

    A blank line or a ``nan nan`` line ends the current polygon; lines starting with ``#`` are comments. Yields
    the raw lines of each non-empty polygon so callers can decide whether they hold points or edges.
    """
    current: list[str] = []
    for raw in lines:
        line = raw.strip()
        if line.startswith("#"):
            continue
        if not line or _is_terminator(line):
            if current:
                yield current
            current = []
            continue
        current.append(line)
    if current:
        yield current


def _is_terminator(line: str) -> bool:
    try:
        lat, lon = parse_point(line)
    except ValueError:
        return False
    return math.isnan(lat) and math.isnan(lon)
