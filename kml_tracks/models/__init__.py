"""Data models.

- Point: A ``(lat, lon, alt)`` position
- Track: Polyline extracted from a ``LineString``
- Icon: Point placemark with resolved icon style
- ExtractionResult: Tracks and icons from one document
"""

from kml_tracks.models.track import Bounds, ExtractionResult, Icon, Point, Track

__all__ = [
    "Bounds",
    "ExtractionResult",
    "Icon",
    "Point",
    "Track",
]
