"""Track and icon extraction from a parsed KML document.

``extract`` walks every ``LineString`` and ``Point`` in document order,
wherever it sits in the tree, and returns a new ``ExtractionResult``.
Geometry with no usable coordinates is skipped; the positional index
still advances, so ``original_index`` and fallback names always refer to
the element's position among all elements of its kind.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from kml_tracks.core.constants import (
    DEFAULT_ICON_BASE_SIZE,
    ICON_NAME_TEMPLATE,
    TAG_COORDINATES,
    TAG_LINE_STRING,
    TAG_PLACEMARK,
    TAG_POINT,
    TRACK_NAME_TEMPLATE,
)
from kml_tracks.models.track import ExtractionResult, Icon, Track
from kml_tracks.parsing._coordinates import parse_coordinates_text
from kml_tracks.parsing._styles import extract_placemark_info, resolve_icon_style

if TYPE_CHECKING:
    from lxml.etree import _Element

    from kml_tracks.models.track import Point
    from kml_tracks.parsing._document import NavigableTree

logger = logging.getLogger("kml_tracks.parsing")


def extract(
    doc: NavigableTree, *, base_size: float = DEFAULT_ICON_BASE_SIZE
) -> ExtractionResult:
    """Extract tracks and icons from ``doc``.

    Args:
        doc: Parsed document.
        base_size: Unscaled icon size in pixels, multiplied by ``scale``.

    Returns:
        A new ``ExtractionResult``. Equal documents give equal results.
    """
    return ExtractionResult(
        tracks=tuple(_extract_tracks(doc)),
        icons=tuple(_extract_icons(doc, base_size)),
    )


def _extract_tracks(doc: NavigableTree) -> list[Track]:
    tracks: list[Track] = []
    for idx, line in enumerate(doc.find_all(TAG_LINE_STRING)):
        points = _geometry_points(doc, line)
        if not points:
            logger.debug("Skipping LineString %d: no usable coordinates", idx)
            continue

        info = extract_placemark_info(doc, doc.closest(line, TAG_PLACEMARK))
        tracks.append(
            Track(
                name=info.name or TRACK_NAME_TEMPLATE.format(n=idx + 1),
                description=info.description,
                points=tuple(points),
                original_index=idx,
                style_reference=info.style_reference,
            )
        )
    return tracks


def _extract_icons(doc: NavigableTree, base_size: float) -> list[Icon]:
    icons: list[Icon] = []
    for idx, point in enumerate(doc.find_all(TAG_POINT)):
        coords = _geometry_points(doc, point)
        if not coords:
            logger.debug("Skipping Point %d: no usable coordinates", idx)
            continue

        placemark = doc.closest(point, TAG_PLACEMARK)
        info = extract_placemark_info(doc, placemark)
        style = resolve_icon_style(doc, placemark, base_size=base_size)
        icons.append(
            Icon(
                name=info.name or ICON_NAME_TEMPLATE.format(n=idx + 1),
                description=info.description,
                position=coords[0],
                original_index=idx,
                style_reference=info.style_reference,
                icon_url=style.icon_url,
                icon_size=style.icon_size,
                icon_anchor=style.icon_anchor,
            )
        )
    return icons


def _geometry_points(doc: NavigableTree, geometry: _Element) -> list[Point]:
    """Parse the first ``coordinates`` child of a geometry element."""
    coordinates = doc.find_first(TAG_COORDINATES, geometry)
    if coordinates is None:
        return []
    text = doc.text(coordinates)
    if not text:
        return []
    return parse_coordinates_text(text)
