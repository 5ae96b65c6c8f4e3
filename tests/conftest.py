"""Shared pytest fixtures for the KML track test suite."""

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"
EDGE_CASES_DIR = DATA_DIR / "edge_cases"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def edge_cases_dir() -> Path:
    """Return the path to the edge-cases test data directory."""
    return EDGE_CASES_DIR


# ---------------------------------------------------------------------------
# Sample KML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def rally_kml(data_dir: Path) -> Path:
    """Path to a namespaced KML with 2 stage tracks and 3 control icons."""
    return data_dir / "01_rally_stages.kml"


@pytest.fixture()
def no_namespace_kml(data_dir: Path) -> Path:
    """Path to a KML without the 2.2 namespace declaration."""
    return data_dir / "02_no_namespace.kml"


# ---------------------------------------------------------------------------
# Edge-case KML file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def unclosed_tags_kml(edge_cases_dir: Path) -> Path:
    """Path to a KML with an unclosed <name> tag."""
    return edge_cases_dir / "11_malformed_unclosed_tags.kml"


@pytest.fixture()
def empty_coordinates_kml(edge_cases_dir: Path) -> Path:
    """Path to a KML whose 2nd of 3 LineStrings has blank coordinates."""
    return edge_cases_dir / "12_empty_coordinates.kml"


@pytest.fixture()
def malformed_tuples_kml(edge_cases_dir: Path) -> Path:
    """Path to a KML mixing valid and invalid coordinate tuples."""
    return edge_cases_dir / "13_malformed_tuples.kml"


@pytest.fixture()
def not_xml_kml(edge_cases_dir: Path) -> Path:
    """Path to a file that is not valid XML."""
    return edge_cases_dir / "14_not_xml.kml"
