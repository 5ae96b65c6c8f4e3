"""Tests for KML coordinate text parsing.

Covers:
- lon,lat,alt ordering and the altitude default
- Dropping malformed tuples without disturbing neighbours
- Non-finite values
"""

from __future__ import annotations

import pytest

from kml_tracks.models.track import Point
from kml_tracks.parsing import parse_coordinate_tuple, parse_coordinates_text, parse_float


class TestParseFloat:
    """Explicit fallible numeric parsing."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("17.63", 17.63), ("-0.5", -0.5), ("120", 120.0), ("1e2", 100.0)],
    )
    def test_valid_numbers(self, text: str, expected: float) -> None:
        assert parse_float(text) == expected

    @pytest.mark.parametrize(
        "text", ["", "abc", "17.6.3", "NaN", "inf", "-Infinity", "1_7.63", "4_7.70"]
    )
    def test_invalid_numbers_return_none(self, text: str) -> None:
        assert parse_float(text) is None


class TestParseCoordinateTuple:
    """Single lon,lat[,alt] tuples."""

    def test_lon_lat_alt(self) -> None:
        assert parse_coordinate_tuple("17.63,47.69,120") == Point(lat=47.69, lon=17.63, alt=120.0)

    def test_altitude_defaults_to_zero(self) -> None:
        assert parse_coordinate_tuple("17.64,47.70") == Point(lat=47.70, lon=17.64, alt=0.0)

    def test_single_field_rejected(self) -> None:
        assert parse_coordinate_tuple("17.65") is None

    def test_bad_altitude_rejects_whole_tuple(self) -> None:
        assert parse_coordinate_tuple("17.66,47.72,xyz") is None

    def test_empty_latitude_rejected(self) -> None:
        assert parse_coordinate_tuple("17.66,") is None


class TestParseCoordinatesText:
    """Whitespace-separated coordinate lists."""

    def test_two_points_example(self) -> None:
        points = parse_coordinates_text("17.63,47.69,120 17.64,47.70")
        assert points == [
            Point(lat=47.69, lon=17.63, alt=120.0),
            Point(lat=47.70, lon=17.64, alt=0.0),
        ]

    def test_mixed_whitespace_separators(self) -> None:
        text = "\n    17.63,47.69\t17.64,47.70\n\n  17.65,47.71  \n"
        assert len(parse_coordinates_text(text)) == 3

    def test_invalid_tuples_dropped_order_preserved(self) -> None:
        text = "1,2 abc,3 4,5 6,nan 7,8,9"
        points = parse_coordinates_text(text)
        assert [(p.lon, p.lat, p.alt) for p in points] == [
            (1.0, 2.0, 0.0),
            (4.0, 5.0, 0.0),
            (7.0, 8.0, 9.0),
        ]

    def test_underscore_grouped_fields_dropped(self) -> None:
        assert parse_coordinates_text("1_7.63,47.69 17.64,4_7.70") == []

    def test_duplicates_kept(self) -> None:
        points = parse_coordinates_text("1,2 1,2 1,2")
        assert len(points) == 3

    def test_empty_text(self) -> None:
        assert parse_coordinates_text("") == []
        assert parse_coordinates_text("   \n\t ") == []
