"""Placemark metadata and icon style resolution.

An icon's image and size come from the Placemark's inline
``Style/IconStyle`` when it has one, otherwise from the shared ``Style``
its ``styleUrl`` points at. Inline values always win; the referenced
style only fills in what the inline block left out. Nothing here
raises: missing or unresolvable style data leaves the fields empty.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from kml_tracks.core.constants import (
    DEFAULT_ICON_BASE_SIZE,
    TAG_DESCRIPTION,
    TAG_HREF,
    TAG_ICON,
    TAG_ICON_STYLE,
    TAG_NAME,
    TAG_SCALE,
    TAG_STYLE,
    TAG_STYLE_URL,
)
from kml_tracks.parsing._coordinates import parse_float

if TYPE_CHECKING:
    from lxml.etree import _Element

    from kml_tracks.parsing._document import NavigableTree

logger = logging.getLogger("kml_tracks.parsing")


@dataclass(frozen=True, slots=True)
class PlacemarkInfo:
    """Optional metadata read from a Placemark."""

    name: str | None = None
    description: str | None = None
    style_reference: str | None = None


@dataclass(frozen=True, slots=True)
class IconStyleInfo:
    """Resolved icon presentation for a Placemark."""

    icon_url: str | None = None
    icon_size: tuple[float, float] | None = None
    icon_anchor: tuple[float, float] | None = None


def extract_placemark_info(doc: NavigableTree, placemark: _Element | None) -> PlacemarkInfo:
    """Read name, description and ``styleUrl`` from a Placemark.

    Each field is the trimmed text of the first matching descendant;
    ``placemark=None`` yields an all-empty ``PlacemarkInfo``.
    """
    if placemark is None:
        return PlacemarkInfo()
    return PlacemarkInfo(
        name=_first_text(doc, TAG_NAME, placemark),
        description=_first_text(doc, TAG_DESCRIPTION, placemark),
        style_reference=_first_text(doc, TAG_STYLE_URL, placemark),
    )


def resolve_icon_style(
    doc: NavigableTree,
    placemark: _Element | None,
    *,
    base_size: float = DEFAULT_ICON_BASE_SIZE,
) -> IconStyleInfo:
    """Resolve icon URL and size for a Placemark.

    Args:
        doc: Document the Placemark belongs to (used for ``id`` lookups).
        placemark: The Placemark element, or ``None``.
        base_size: Unscaled icon size in pixels.

    Returns:
        ``IconStyleInfo``; ``icon_size``/``icon_anchor`` are set only when
        a numeric ``scale`` was found.
    """
    if placemark is None:
        return IconStyleInfo()

    href: str | None = None
    scale: float | None = None

    inline_style = doc.find_first(TAG_STYLE, placemark)
    if inline_style is not None:
        inline_icon_style = doc.find_first(TAG_ICON_STYLE, inline_style)
        if inline_icon_style is not None:
            href, scale = _read_icon_style(doc, inline_icon_style)

    if not href:
        style_url = _first_text(doc, TAG_STYLE_URL, placemark)
        if style_url:
            ref_href, ref_scale = _lookup_referenced_style(doc, style_url)
            if ref_href is not None:
                href = ref_href
            if scale is None:
                scale = ref_scale

    if scale is None:
        return IconStyleInfo(icon_url=href)

    size = base_size * scale
    return IconStyleInfo(
        icon_url=href,
        icon_size=(size, size),
        icon_anchor=(size / 2, size / 2),
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _first_text(doc: NavigableTree, tag: str, scope: _Element) -> str | None:
    elem = doc.find_first(tag, scope)
    return doc.text(elem) if elem is not None else None


def _lookup_referenced_style(
    doc: NavigableTree, style_url: str
) -> tuple[str | None, float | None]:
    """Follow a ``#id`` style reference and read its ``IconStyle``."""
    style_id = style_url.removeprefix("#")
    target = doc.find_by_id(style_id)
    if target is None:
        logger.debug("Unresolved style reference %r", style_url)
        return (None, None)

    icon_style = doc.find_first(TAG_ICON_STYLE, target)
    if icon_style is None:
        return (None, None)
    return _read_icon_style(doc, icon_style)


def _read_icon_style(doc: NavigableTree, icon_style: _Element) -> tuple[str | None, float | None]:
    """Return ``(href, scale)`` from an ``IconStyle`` element."""
    href: str | None = None
    icon = doc.find_first(TAG_ICON, icon_style)
    if icon is not None:
        href = _first_text(doc, TAG_HREF, icon)

    scale: float | None = None
    scale_text = _first_text(doc, TAG_SCALE, icon_style)
    if scale_text is not None:
        scale = parse_float(scale_text)
        if scale is None:
            logger.debug("Ignoring non-numeric icon scale %r", scale_text)
    return (href, scale)
