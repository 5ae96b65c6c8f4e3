"""KML coordinate text parsing.

Coordinate text is a whitespace-separated list of ``lon,lat[,alt]``
tuples. A tuple with fewer than two fields, or any field that is not a
finite number, is dropped; the rest of the list is kept in order.
"""

from __future__ import annotations

import logging
import math

from kml_tracks.models.track import Point

logger = logging.getLogger("kml_tracks.parsing")


def parse_float(text: str) -> float | None:
    """Parse ``text`` as a finite float, returning ``None`` on failure.

    Digit-grouping underscores (``1_000``) are not valid ``xsd:double``.
    """
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_coordinate_tuple(token: str) -> Point | None:
    """Parse one ``lon,lat[,alt]`` tuple, or return ``None`` if it is invalid."""
    parts = token.split(",")
    if len(parts) < 2:
        return None

    lon = parse_float(parts[0])
    lat = parse_float(parts[1])
    alt = parse_float(parts[2]) if len(parts) > 2 else 0.0
    if lon is None or lat is None or alt is None:
        return None
    return Point(lat=lat, lon=lon, alt=alt)


def parse_coordinates_text(text: str) -> list[Point]:
    """Parse KML coordinate text (``lon,lat,alt lon,lat ...``) to points."""
    points: list[Point] = []
    for token in text.split():
        point = parse_coordinate_tuple(token)
        if point is None:
            logger.debug("Dropping malformed coordinate tuple %r", token)
            continue
        points.append(point)
    return points
