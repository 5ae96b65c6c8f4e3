"""KML parsing: tracks and icons from a KML document.

The pipeline is split into focused stages:
- **_document**: lxml-backed ``KmlDocument`` (well-formedness check, tag/id lookups)
- **_coordinates**: ``lon,lat[,alt]`` text → ``Point`` list
- **_styles**: Placemark metadata and inline / referenced ``IconStyle``
- **_extractor**: ``LineString`` → ``Track``, ``Point`` → ``Icon``

Only a malformed document is an error. Placemarks with missing or bad
data are skipped or defaulted so that one bad element never costs the
rest of the file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from kml_tracks.core.constants import DEFAULT_ICON_BASE_SIZE
from kml_tracks.core.exceptions import KmlLoadError, KmlParseError
from kml_tracks.models.track import ExtractionResult
from kml_tracks.parsing._coordinates import (
    parse_coordinate_tuple,
    parse_coordinates_text,
    parse_float,
)
from kml_tracks.parsing._document import KmlDocument, NavigableTree
from kml_tracks.parsing._extractor import extract
from kml_tracks.parsing._styles import (
    IconStyleInfo,
    PlacemarkInfo,
    extract_placemark_info,
    resolve_icon_style,
)

logger = logging.getLogger("kml_tracks.parsing")

__all__ = [
    "IconStyleInfo",
    "KmlDocument",
    "KmlParseError",
    "NavigableTree",
    "PlacemarkInfo",
    "extract",
    "extract_placemark_info",
    "parse_coordinate_tuple",
    "parse_coordinates_text",
    "parse_float",
    "parse_kml_bytes",
    "parse_kml_file",
    "resolve_icon_style",
]


def parse_kml_bytes(
    content: bytes,
    *,
    source: str = "",
    base_size: float = DEFAULT_ICON_BASE_SIZE,
) -> ExtractionResult:
    """Parse KML bytes and extract tracks and icons.

    Args:
        content: Raw KML document.
        source: File name or URL, used in log messages and errors.
        base_size: Unscaled icon size in pixels.

    Raises:
        KmlParseError: If the content is not well-formed XML.
    """
    doc = KmlDocument.from_bytes(content, source=source)
    result = extract(doc, base_size=base_size)
    logger.info(
        "Parsed %d track(s) and %d icon(s) from %s",
        len(result.tracks),
        len(result.icons),
        source or "<document>",
    )
    return result


def parse_kml_file(
    kml_path: Path | str, *, base_size: float = DEFAULT_ICON_BASE_SIZE
) -> ExtractionResult:
    """Read and parse a KML file from disk.

    Raises:
        KmlLoadError: If the file cannot be read.
        KmlParseError: If the file is not well-formed XML.
    """
    kml_path = Path(kml_path)
    try:
        content = kml_path.read_bytes()
    except OSError as exc:
        msg = f"Cannot read KML file: {exc}"
        raise KmlLoadError(msg, reason=str(exc), source=str(kml_path)) from exc
    return parse_kml_bytes(content, source=kml_path.name, base_size=base_size)
