"""Data models for extracted KML geometry.

A ``Track`` is one ``LineString`` with its Placemark metadata, an
``Icon`` is one ``Point`` with resolved icon style. Both are collected
in an ``ExtractionResult``, which is built fresh by every parse and
handed to the rendering layer as-is or via ``to_dict()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from kml_tracks.core.constants import MIN_DRAWABLE_TRACK_POINTS

Bounds = tuple[float, float, float, float]
"""``(min_lat, min_lon, max_lat, max_lon)``."""


@dataclass(frozen=True, slots=True)
class Point:
    """A single geographic position. Latitude first, as map widgets expect."""

    lat: float
    lon: float
    alt: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lon": self.lon, "alt": self.alt}

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Point:
        return cls(
            lat=float(data["lat"]),  # type: ignore[arg-type]
            lon=float(data["lon"]),  # type: ignore[arg-type]
            alt=float(data.get("alt", 0.0)),  # type: ignore[arg-type]
        )


@dataclass(frozen=True, slots=True)
class Track:
    """A polyline extracted from a KML ``LineString``.

    Attributes:
        name: Placemark name, or ``"Track {n}"`` when the Placemark has none.
        description: Placemark description text, if any.
        points: Positions in document order. Never empty.
        original_index: Zero-based position among all ``LineString``
            elements in the document, including skipped ones.
        style_reference: Raw ``styleUrl`` text (e.g. ``"#track-red"``).
    """

    name: str
    points: tuple[Point, ...]
    original_index: int
    description: str | None = None
    style_reference: str | None = None

    @property
    def is_drawable(self) -> bool:
        """Whether the track has enough points to be drawn as a line."""
        return len(self.points) >= MIN_DRAWABLE_TRACK_POINTS

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "description": self.description,
            "points": [p.to_dict() for p in self.points],
            "original_index": self.original_index,
            "style_reference": self.style_reference,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Track:
        """Deserialise from a ``to_dict()`` payload.

        Raises:
            TypeError: If ``points`` is not a list.
        """
        points_raw = data.get("points", [])
        if not isinstance(points_raw, list):
            msg = f"points must be a list, got {type(points_raw).__name__}"
            raise TypeError(msg)
        return cls(
            name=str(data.get("name", "")),
            description=_optional_str(data.get("description")),
            points=tuple(Point.from_dict(p) for p in points_raw),
            original_index=int(data.get("original_index", 0)),  # type: ignore[arg-type]
            style_reference=_optional_str(data.get("style_reference")),
        )


@dataclass(frozen=True, slots=True)
class Icon:
    """A point placemark extracted from a KML ``Point``.

    Attributes:
        name: Placemark name, or ``"Point {n}"`` when the Placemark has none.
        description: Placemark description text, if any.
        position: First coordinate of the ``Point``.
        original_index: Zero-based position among all ``Point`` elements.
        style_reference: Raw ``styleUrl`` text.
        icon_url: Resolved ``IconStyle/Icon/href``.
        icon_size: ``(width, height)`` in pixels, derived from ``scale``.
        icon_anchor: ``(x, y)`` in pixels, half of ``icon_size``.
    """

    name: str
    position: Point
    original_index: int
    description: str | None = None
    style_reference: str | None = None
    icon_url: str | None = None
    icon_size: tuple[float, float] | None = None
    icon_anchor: tuple[float, float] | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "description": self.description,
            "position": self.position.to_dict(),
            "original_index": self.original_index,
            "style_reference": self.style_reference,
            "icon_url": self.icon_url,
            "icon_size": list(self.icon_size) if self.icon_size else None,
            "icon_anchor": list(self.icon_anchor) if self.icon_anchor else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Icon:
        position_raw = data.get("position")
        if not isinstance(position_raw, dict):
            msg = f"position must be a dict, got {type(position_raw).__name__}"
            raise TypeError(msg)
        return cls(
            name=str(data.get("name", "")),
            description=_optional_str(data.get("description")),
            position=Point.from_dict(position_raw),
            original_index=int(data.get("original_index", 0)),  # type: ignore[arg-type]
            style_reference=_optional_str(data.get("style_reference")),
            icon_url=_optional_str(data.get("icon_url")),
            icon_size=_optional_pair(data.get("icon_size")),
            icon_anchor=_optional_pair(data.get("icon_anchor")),
        )


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Tracks and icons extracted from one KML document."""

    tracks: tuple[Track, ...] = ()
    icons: tuple[Icon, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.tracks and not self.icons

    def get_track(self, index: int) -> Track | None:
        """Return the track at ``index`` in extraction order, or ``None``."""
        if 0 <= index < len(self.tracks):
            return self.tracks[index]
        return None

    def get_icon(self, index: int) -> Icon | None:
        """Return the icon at ``index`` in extraction order, or ``None``."""
        if 0 <= index < len(self.icons):
            return self.icons[index]
        return None

    def get_track_by_name(self, name: str) -> Track | None:
        return next((t for t in self.tracks if t.name == name), None)

    def get_icon_by_name(self, name: str) -> Icon | None:
        return next((i for i in self.icons if i.name == name), None)

    def bounds(self) -> Bounds | None:
        """Bounding box over everything a renderer would draw.

        Tracks with fewer than two points are not drawn and so do not
        contribute. Returns ``None`` when there is nothing to draw.
        """
        points = [p for t in self.tracks if t.is_drawable for p in t.points]
        points.extend(i.position for i in self.icons)
        if not points:
            return None
        lats = [p.lat for p in points]
        lons = [p.lon for p in points]
        return (min(lats), min(lons), max(lats), max(lons))

    def to_dict(self) -> dict[str, object]:
        """Serialise to a JSON-friendly dict for the rendering layer."""
        return {
            "tracks": [t.to_dict() for t in self.tracks],
            "icons": [i.to_dict() for i in self.icons],
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> ExtractionResult:
        """Deserialise from a ``to_dict()`` payload.

        Raises:
            TypeError: If ``tracks`` or ``icons`` is not a list.
        """
        tracks_raw = data.get("tracks", [])
        icons_raw = data.get("icons", [])
        if not isinstance(tracks_raw, list):
            msg = f"tracks must be a list, got {type(tracks_raw).__name__}"
            raise TypeError(msg)
        if not isinstance(icons_raw, list):
            msg = f"icons must be a list, got {type(icons_raw).__name__}"
            raise TypeError(msg)
        return cls(
            tracks=tuple(Track.from_dict(t) for t in tracks_raw),
            icons=tuple(Icon.from_dict(i) for i in icons_raw),
        )


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)


def _optional_pair(value: object) -> tuple[float, float] | None:
    if value is None:
        return None
    if not isinstance(value, list | tuple) or len(value) != 2:
        msg = f"expected a [x, y] pair, got {value!r}"
        raise TypeError(msg)
    return (float(value[0]), float(value[1]))
