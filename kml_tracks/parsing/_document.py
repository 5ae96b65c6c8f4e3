"""Navigable KML document backed by an lxml element tree.

The extractor only needs a few operations from a markup tree, captured by
the ``NavigableTree`` protocol:

- ``find_all``: descendants by tag name, in document order
- ``find_first``: first such descendant
- ``closest``: nearest enclosing element by tag name
- ``find_by_id``: whole-document lookup on the ``id`` attribute
- ``text``: trimmed text content

Tags are matched by local name, so KML with or without the 2.2 namespace
behaves the same.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from lxml import etree

from kml_tracks.core.constants import PARSE_ERROR_MESSAGE
from kml_tracks.core.exceptions import KmlParseError

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("kml_tracks.parsing")


class NavigableTree(Protocol):
    """Minimal tree interface consumed by the extractor."""

    def find_all(self, tag: str, scope: _Element | None = None) -> list[_Element]: ...

    def find_first(self, tag: str, scope: _Element | None = None) -> _Element | None: ...

    def closest(self, node: _Element, tag: str) -> _Element | None: ...

    def find_by_id(self, ident: str) -> _Element | None: ...

    def text(self, node: _Element) -> str: ...


def _any_ns(tag: str) -> str:
    """Return an lxml tag pattern matching ``tag`` in any or no namespace."""
    return f"{{*}}{tag}"


class KmlDocument:
    """A parsed KML document.

    Build one with ``from_bytes`` or ``from_string``; both raise
    ``KmlParseError`` when the input is not well-formed XML.
    """

    __slots__ = ("_root",)

    def __init__(self, root: _Element) -> None:
        self._root = root

    @classmethod
    def from_bytes(cls, content: bytes, *, source: str = "") -> KmlDocument:
        """Parse raw KML bytes, honouring the document's encoding declaration.

        Raises:
            KmlParseError: If the content is empty or not well-formed XML.
        """
        return cls._parse(content, source=source)

    @classmethod
    def from_string(cls, text: str, *, source: str = "") -> KmlDocument:
        """Parse KML text.

        The text is already decoded, so any ``encoding=`` declaration in it
        is ignored.
        """
        return cls._parse(text.encode("utf-8"), source=source, encoding="utf-8")

    @classmethod
    def _parse(cls, content: bytes, *, source: str, encoding: str | None = None) -> KmlDocument:
        parser = etree.XMLParser(
            resolve_entities=False, no_network=True, huge_tree=False, encoding=encoding
        )
        try:
            root = etree.fromstring(content, parser=parser)
        except etree.XMLSyntaxError as exc:
            logger.debug("XML syntax error in %s: %s", source or "<document>", exc)
            raise KmlParseError(PARSE_ERROR_MESSAGE, source=source) from exc
        if root is None:
            raise KmlParseError(PARSE_ERROR_MESSAGE, source=source)
        return cls(root)

    def find_all(self, tag: str, scope: _Element | None = None) -> list[_Element]:
        """Return descendants of ``scope`` (default: whole document) named ``tag``.

        ``scope`` itself is not included.
        """
        start = self._root if scope is None else scope
        pattern = _any_ns(tag)
        return [el for el in start.iter(pattern) if el is not start]

    def find_first(self, tag: str, scope: _Element | None = None) -> _Element | None:
        """Return the first descendant of ``scope`` named ``tag``, or ``None``."""
        matches = self.find_all(tag, scope)
        return matches[0] if matches else None

    def closest(self, node: _Element, tag: str) -> _Element | None:
        """Return ``node`` or its nearest ancestor named ``tag``."""
        if etree.QName(node).localname == tag:
            return node
        return next(node.iterancestors(_any_ns(tag)), None)

    def find_by_id(self, ident: str) -> _Element | None:
        """Return the first element in document order whose ``id`` is ``ident``."""
        if not ident:
            return None
        matches = self._root.xpath("//*[@id=$ident]", ident=ident)
        return matches[0] if matches else None

    def text(self, node: _Element) -> str:
        """Return the trimmed string value of ``node`` (all descendant text)."""
        return str(node.xpath("string()")).strip()
