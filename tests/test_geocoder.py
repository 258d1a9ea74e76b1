"""Tests for the Nominatim geolocation lookup."""

import logging
from unittest.mock import MagicMock

import pytest
import requests
from pydantic import ValidationError

from map_coverage.backend.geocoder import NominatimGeocoder
from map_coverage.config import GeocoderSettings
from map_coverage.exceptions import GeolocationLookupError
from map_coverage.models import PolygonGeometry

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

RESULT = {
    "place_id": 1,
    "osm_id": 435514,
    "osm_type": "relation",
    "display_name": "Prague, Czechia",
    "lat": "50.0874654",
    "lon": "14.4212535",
    "geojson": {
        "type": "Polygon",
        "coordinates": [[[14.2, 49.9], [14.7, 49.9], [14.7, 50.2], [14.2, 50.2], [14.2, 49.9]]],
    },
}


@pytest.fixture
def settings() -> GeocoderSettings:
    """Fixture for geocoder settings."""
    return GeocoderSettings()


@pytest.fixture
def session() -> MagicMock:
    """Fixture for a requests session returning one result."""
    session = MagicMock(spec=requests.Session)
    response = session.get.return_value
    response.content = b"[...]"
    response.json.return_value = [RESULT]
    return session


@pytest.fixture
def geocoder(settings: GeocoderSettings, session: MagicMock) -> NominatimGeocoder:
    """Fixture for a geocoder with a mocked session."""
    return NominatimGeocoder(settings, session=session)


class TestQuery:
    """Tests for building the lookup request."""

    def test_build_params(self, geocoder: NominatimGeocoder) -> None:
        """Test names are trimmed and joined with '+'."""
        params = geocoder.build_params("  New   York ", None, "United States")
        assert params == {
            "country": "United+States",
            "state": "",
            "city": "New+York",
            "format": "json",
            "polygon_geojson": 1,
            "limit": 1,
            "polygon_threshold": 0.005,
        }

    def test_request(self, geocoder: NominatimGeocoder, session: MagicMock) -> None:
        """Test a single request is sent with literal '+' separators."""
        geocoder.lookup(city="Hradec Kralove", country="Czech Republic")

        session.get.assert_called_once()
        call = session.get.call_args
        assert call.args[0] == "https://nominatim.openstreetmap.org/search"
        query = call.kwargs["params"]
        assert "city=Hradec+Kralove" in query
        assert "country=Czech+Republic" in query
        assert "polygon_threshold=0.005" in query
        assert "limit=1" in query
        assert call.kwargs["headers"]["Referer"] == "http://google.com"
        assert call.kwargs["timeout"] == 30


class TestLookup:
    """Tests for interpreting lookup responses."""

    def test_first_result(self, geocoder: NominatimGeocoder) -> None:
        """Test the first result is returned as a Location."""
        location = geocoder.lookup(city="Prague")
        assert location is not None
        assert location.display_name == "Prague, Czechia"
        assert isinstance(location.geojson, PolygonGeometry)

    def test_no_results(self, geocoder: NominatimGeocoder, session: MagicMock) -> None:
        """Test an empty result list gives None."""
        session.get.return_value.json.return_value = []
        assert geocoder.lookup(city="Nowhere") is None

    def test_empty_body(self, geocoder: NominatimGeocoder, session: MagicMock) -> None:
        """Test an empty body gives None without parsing."""
        session.get.return_value.content = b""
        assert geocoder.lookup(city="Nowhere") is None
        session.get.return_value.json.assert_not_called()

    def test_transport_error(self, geocoder: NominatimGeocoder, session: MagicMock) -> None:
        """Test connection failures propagate as GeolocationLookupError."""
        session.get.side_effect = requests.ConnectionError("unreachable")
        with pytest.raises(GeolocationLookupError) as excinfo:
            geocoder.lookup(city="Prague")
        assert isinstance(excinfo.value.__cause__, requests.ConnectionError)

    def test_http_error(self, geocoder: NominatimGeocoder, session: MagicMock) -> None:
        """Test error statuses propagate as GeolocationLookupError."""
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError("429")
        with pytest.raises(GeolocationLookupError):
            geocoder.lookup(city="Prague")

    def test_malformed_body(self, geocoder: NominatimGeocoder, session: MagicMock) -> None:
        """Test undecodable bodies propagate as GeolocationLookupError."""
        session.get.return_value.json.side_effect = ValueError("not json")
        with pytest.raises(GeolocationLookupError):
            geocoder.lookup(city="Prague")

    def test_object_body(self, geocoder: NominatimGeocoder, session: MagicMock) -> None:
        """Test a JSON object instead of a result list is reported as a lookup error."""
        session.get.return_value.json.return_value = {"error": "Unable to geocode"}
        with pytest.raises(GeolocationLookupError, match="dict"):
            geocoder.lookup(city="Prague")

    def test_invalid_result(self, geocoder: NominatimGeocoder, session: MagicMock) -> None:
        """Test a result without an outline is reported as a lookup error."""
        result = {key: value for key, value in RESULT.items() if key != "geojson"}
        session.get.return_value.json.return_value = [result]
        with pytest.raises(GeolocationLookupError) as excinfo:
            geocoder.lookup(city="Prague")
        assert isinstance(excinfo.value.__cause__, ValidationError)


@pytest.mark.live
def test_live_lookup_prague(settings: GeocoderSettings) -> None:
    """Test resolving Prague against the real service."""
    geocoder = NominatimGeocoder(settings)
    location = geocoder.lookup(city="Prague", country="Czechia")

    logger.info(f"Resolved: {location.display_name if location else None}")
    assert location is not None
    assert location.geojson.type in {"Polygon", "MultiPolygon"}
