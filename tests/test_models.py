"""Tests for the geometry and location models."""

import pytest
from pydantic import ValidationError

from map_coverage.exceptions import UnsupportedGeometryError
from map_coverage.models import (
    CoverageRegion,
    Feature,
    FeatureCollection,
    LatLng,
    Location,
    MultiPolygonGeometry,
    PointGeometry,
    PolygonGeometry,
    geometry_of,
    parse_geometry,
)


class TestParseGeometry:
    """Tests for dispatching raw GeoJSON onto the geometry models."""

    def test_known_tags(self) -> None:
        """Test every supported tag maps onto its model."""
        assert isinstance(parse_geometry({"type": "Point", "coordinates": [1, 2]}), PointGeometry)
        polygon = parse_geometry(
            {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [0, 1], [0, 0]]]}
        )
        assert isinstance(polygon, PolygonGeometry)
        multi = parse_geometry({"type": "MultiPolygon", "coordinates": []})
        assert isinstance(multi, MultiPolygonGeometry)
        feature = parse_geometry(
            {"type": "Feature", "geometry": {"type": "Point", "coordinates": [1, 2]}}
        )
        assert isinstance(feature, Feature)
        assert isinstance(feature.geometry, PointGeometry)
        assert isinstance(parse_geometry({"type": "FeatureCollection"}), FeatureCollection)

    def test_missing_coordinates(self) -> None:
        """Test that the coordinate payload is optional."""
        assert parse_geometry({"type": "Point"}).coordinates is None

    @pytest.mark.parametrize(
        "data",
        [
            {"type": "MultiLineString", "coordinates": []},
            {"coordinates": [1, 2]},
            {"type": "Feature", "geometry": {"type": "GeometryCollection"}},
            "Point",
        ],
    )
    def test_unknown_tags(self, data: object) -> None:
        """Test that unknown tags raise UnsupportedGeometryError."""
        with pytest.raises(UnsupportedGeometryError):
            parse_geometry(data)

    def test_bad_coordinates(self) -> None:
        """Test that coordinates must match the tag."""
        with pytest.raises(ValidationError):
            parse_geometry({"type": "Point", "coordinates": "somewhere"})

    @pytest.mark.parametrize("coordinates", [[], [10]])
    def test_incomplete_point_position(self, coordinates: list[float]) -> None:
        """Test that a point without both lon and lat carries no payload."""
        assert parse_geometry({"type": "Point", "coordinates": coordinates}).coordinates is None

    def test_incomplete_line_position(self) -> None:
        """Test that every position of a line needs lon and lat."""
        with pytest.raises(ValidationError):
            parse_geometry({"type": "LineString", "coordinates": [[0, 0], [1]]})

    def test_models_pass_through(self) -> None:
        """Test that validated models are returned unchanged."""
        point = PointGeometry(coordinates=[1, 2])
        assert parse_geometry(point) is point


class TestLocation:
    """Tests for the geocoder result model."""

    def test_nominatim_result(self) -> None:
        """Test validating a Nominatim style result with string numbers."""
        location = Location.model_validate(
            {
                "place_id": 1234,
                "osm_id": 175905,
                "osm_type": "relation",
                "lat": "40.71",
                "lon": "-74.00",
                "boundingbox": ["40.47", "40.91", "-74.25", "-73.70"],
                "display_name": "New York, United States",
                "geojson": {"type": "Point", "coordinates": [-74.0, 40.71]},
            }
        )
        assert location.lat == pytest.approx(40.71)
        assert location.boundingbox == [40.47, 40.91, -74.25, -73.70]
        assert isinstance(location.geojson, PointGeometry)
        assert location.model_extra == {"place_id": 1234}

    def test_unknown_geojson_tag(self) -> None:
        """Test that unknown tags surface as UnsupportedGeometryError."""
        with pytest.raises(UnsupportedGeometryError):
            Location.model_validate({"geojson": {"type": "Curve"}})

    def test_geometry_of(self) -> None:
        """Test extracting the geometry from the accepted location shapes."""
        raw = {"type": "Point", "coordinates": [1, 2]}
        location = Location(geojson=raw)
        assert geometry_of(location) is location.geojson
        assert geometry_of({"geojson": raw}).coordinates == [1, 2]
        assert geometry_of(raw).coordinates == [1, 2]


class TestValueModels:
    """Tests for the small value models."""

    def test_lat_lng_ranges(self) -> None:
        """Test that coordinates are range checked."""
        assert LatLng(lat=0.5, lng=0.5).lng == 0.5
        with pytest.raises(ValidationError):
            LatLng(lat=91, lng=0)

    def test_coverage_region_is_immutable(self) -> None:
        """Test regions are frozen and expose their polygon."""
        region = CoverageRegion.from_rings([[[0, 0], [1, 0], [0, 1], [0, 0]]])
        assert region.polygon.area == pytest.approx(0.5)
        assert region.exterior[0] == (0.0, 0.0)
        with pytest.raises(ValidationError):
            region.rings = ()
