"""Tests for classifying coordinates against a location."""

import pytest

from map_coverage.containment import contains
from map_coverage.models import LatLng, Location

SQUARE = {"type": "Polygon", "coordinates": [[[0, 0], [0, 1], [1, 1], [1, 0], [0, 0]]]}


@pytest.fixture
def square() -> dict:
    """Fixture for a location shaped as the unit square."""
    return {"geojson": SQUARE}


def test_inside_square(square: dict) -> None:
    """Test a coordinate in the middle of the square."""
    assert contains(square, {"lat": 0.5, "lng": 0.5})


def test_outside_square(square: dict) -> None:
    """Test a coordinate far away from the square."""
    assert not contains(square, {"lat": 5, "lng": 5})


def test_boundary_counts_as_inside(square: dict) -> None:
    """Test points on the edge are included."""
    assert contains(square, LatLng(lat=0.5, lng=0.0))


def test_point_location_uses_buffer() -> None:
    """Test point locations are widened into a 5 km disc."""
    location = Location(geojson={"type": "Point", "coordinates": [10, 20]})
    assert contains(location, LatLng(lat=20.02, lng=10))
    assert not contains(location, LatLng(lat=20.1, lng=10))
    assert contains(location, LatLng(lat=20.1, lng=10), buffer_radius_km=20)


def test_any_region_matches() -> None:
    """Test a multipolygon matches through any of its members."""
    location = {
        "geojson": {
            "type": "MultiPolygon",
            "coordinates": [
                SQUARE["coordinates"],
                [[[5, 5], [5, 6], [6, 6], [6, 5], [5, 5]]],
            ],
        }
    }
    assert contains(location, {"lat": 5.5, "lng": 5.5})
    assert not contains(location, {"lat": 3, "lng": 3})


def test_no_regions() -> None:
    """Test a geometry without coordinates contains nothing."""
    assert not contains({"geojson": {"type": "Polygon"}}, {"lat": 0, "lng": 0})


@pytest.mark.parametrize("coordinates", [[], [10]])
def test_incomplete_point_position(coordinates: list[float]) -> None:
    """Test a point location without a full position contains nothing."""
    location = {"geojson": {"type": "Point", "coordinates": coordinates}}
    assert not contains(location, {"lat": 0, "lng": 0})


def test_invalid_region_skipped() -> None:
    """Test a region with a broken ring is skipped rather than raising."""
    location = {
        "geojson": {
            "type": "MultiPolygon",
            "coordinates": [[[[0, 0], [1, 1], [0, 0]]], SQUARE["coordinates"]],
        }
    }
    assert contains(location, {"lat": 0.5, "lng": 0.5})
