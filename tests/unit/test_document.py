"""Tests for the lxml-backed KmlDocument tree interface."""

from __future__ import annotations

import pytest

from kml_tracks.core.exceptions import KmlParseError
from kml_tracks.parsing import KmlDocument

NAMESPACED = b"""<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <Style id="s1"><IconStyle><scale>2</scale></IconStyle></Style>
    <Placemark id="pm1">
      <name>  Start  </name>
      <Point><coordinates>17.63,47.69</coordinates></Point>
    </Placemark>
    <Point><coordinates>1,2</coordinates></Point>
  </Document>
</kml>
"""


@pytest.fixture()
def doc() -> KmlDocument:
    return KmlDocument.from_bytes(NAMESPACED)


class TestParsing:
    """Well-formedness checks."""

    def test_unclosed_tag_raises_parse_error(self) -> None:
        with pytest.raises(KmlParseError) as exc_info:
            KmlDocument.from_string("<kml><Placemark><name>x</Placemark></kml>")
        assert str(exc_info.value) == "Invalid KML file format"
        assert exc_info.value.code == "KML_PARSE_FAILED"

    def test_empty_content_raises_parse_error(self) -> None:
        with pytest.raises(KmlParseError):
            KmlDocument.from_bytes(b"")

    def test_source_recorded_on_error(self) -> None:
        with pytest.raises(KmlParseError) as exc_info:
            KmlDocument.from_bytes(b"not xml", source="stage.kml")
        assert exc_info.value.source == "stage.kml"

    @pytest.mark.parametrize("declared", ["ISO-8859-1", "UTF-16"])
    def test_from_string_ignores_encoding_declaration(self, declared: str) -> None:
        doc = KmlDocument.from_string(
            f'<?xml version="1.0" encoding="{declared}"?>'
            "<kml><Placemark><name>Győr</name></Placemark></kml>"
        )
        name = doc.find_first("name")
        assert name is not None
        assert doc.text(name) == "Győr"

    def test_from_bytes_honours_encoding_declaration(self) -> None:
        content = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>'
            "<kml><Placemark><name>Körmend</name></Placemark></kml>"
        ).encode("latin-1")
        doc = KmlDocument.from_bytes(content)
        name = doc.find_first("name")
        assert name is not None
        assert doc.text(name) == "Körmend"

    def test_external_entities_not_resolved(self) -> None:
        content = b"""<?xml version="1.0"?>
<!DOCTYPE kml [<!ENTITY xxe SYSTEM "file:///etc/passwd">]>
<kml><Placemark><name>&xxe;</name></Placemark></kml>
"""
        doc = KmlDocument.from_bytes(content)
        name = doc.find_first("name")
        assert name is not None
        assert "root:" not in doc.text(name)


class TestNavigation:
    """find_all / closest / find_by_id / text."""

    def test_find_all_ignores_namespace(self, doc: KmlDocument) -> None:
        assert len(doc.find_all("Point")) == 2

    def test_find_all_scoped_excludes_scope(self, doc: KmlDocument) -> None:
        placemark = doc.find_all("Placemark")[0]
        assert len(doc.find_all("Point", placemark)) == 1
        assert doc.find_all("Placemark", placemark) == []

    def test_find_first_in_document_order(self, doc: KmlDocument) -> None:
        first = doc.find_first("Point")
        assert first is doc.find_all("Point")[0]
        assert doc.find_first("LineString") is None

    def test_closest_finds_enclosing_placemark(self, doc: KmlDocument) -> None:
        point = doc.find_all("Point")[0]
        placemark = doc.closest(point, "Placemark")
        assert placemark is not None
        assert placemark.get("id") == "pm1"

    def test_closest_returns_none_without_ancestor(self, doc: KmlDocument) -> None:
        orphan = doc.find_all("Point")[1]
        assert doc.closest(orphan, "Placemark") is None

    def test_closest_includes_self(self, doc: KmlDocument) -> None:
        placemark = doc.find_all("Placemark")[0]
        assert doc.closest(placemark, "Placemark") is placemark

    def test_find_by_id(self, doc: KmlDocument) -> None:
        style = doc.find_by_id("s1")
        assert style is not None
        assert doc.find_first("scale", style) is not None

    def test_find_by_id_missing(self, doc: KmlDocument) -> None:
        assert doc.find_by_id("nope") is None
        assert doc.find_by_id("") is None

    def test_text_is_trimmed(self, doc: KmlDocument) -> None:
        name = doc.find_first("name")
        assert name is not None
        assert doc.text(name) == "Start"

    def test_text_includes_cdata(self) -> None:
        doc = KmlDocument.from_string(
            "<kml><description><![CDATA[ <b>Bold</b> stage ]]></description></kml>"
        )
        desc = doc.find_first("description")
        assert desc is not None
        assert doc.text(desc) == "<b>Bold</b> stage"
