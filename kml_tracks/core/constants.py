"""Shared constants, the single source of truth for KML tag names and defaults."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Element names consumed by the extractor
# ---------------------------------------------------------------------------

TAG_PLACEMARK = "Placemark"
TAG_LINE_STRING = "LineString"
TAG_POINT = "Point"
TAG_COORDINATES = "coordinates"
TAG_NAME = "name"
TAG_DESCRIPTION = "description"
TAG_STYLE = "Style"
TAG_STYLE_URL = "styleUrl"
TAG_ICON_STYLE = "IconStyle"
TAG_ICON = "Icon"
TAG_HREF = "href"
TAG_SCALE = "scale"

# ---------------------------------------------------------------------------
# Naming and sizing
# ---------------------------------------------------------------------------

TRACK_NAME_TEMPLATE = "Track {n}"
"""Positional fallback name for a track without a Placemark name (1-based)."""

ICON_NAME_TEMPLATE = "Point {n}"
"""Positional fallback name for an icon without a Placemark name (1-based)."""

DEFAULT_ICON_BASE_SIZE: float = 32.0
"""Pixel size of an unscaled icon; KML ``scale`` multiplies this."""

MIN_DRAWABLE_TRACK_POINTS = 2

PARSE_ERROR_MESSAGE = "Invalid KML file format"
