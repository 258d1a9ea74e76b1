"""Place name lookup against the OpenStreetMap Nominatim API."""

import logging
from typing import Any
from urllib.parse import urlencode

import requests
from pydantic import ValidationError

from map_coverage.config import GeocoderSettings
from map_coverage.exceptions import GeolocationLookupError
from map_coverage.models import Location
from map_coverage.utils import normalize_query_part

logger = logging.getLogger(__name__)


class NominatimGeocoder:
    """Resolve a city/state/country triple to the outline of a place.

    Every lookup is a single request; nothing is retried or cached.

    Attributes:
        settings (GeocoderSettings): Endpoint and request configuration.
        session (requests.Session): HTTP session used for the lookups.
    """

    def __init__(
        self, settings: GeocoderSettings, session: requests.Session | None = None
    ) -> None:
        """Initialize the geocoder.

        Args:
            settings: Geocoder configuration.
            session: Optional session to send requests with.
        """
        self.settings = settings
        self.session = session or requests.Session()

    def build_params(
        self, city: str | None = None, state: str | None = None, country: str | None = None
    ) -> dict[str, Any]:
        """Build the query parameters for a lookup."""
        return {
            "country": normalize_query_part(country),
            "state": normalize_query_part(state),
            "city": normalize_query_part(city),
            "format": "json",
            "polygon_geojson": 1,
            "limit": self.settings.limit,
            "polygon_threshold": self.settings.polygon_threshold,
        }

    def lookup(
        self, city: str | None = None, state: str | None = None, country: str | None = None
    ) -> Location | None:
        """Look up a place and return its first match.

        Args:
            city: City name.
            state: State or region name.
            country: Country name.

        Returns:
            The first matching location, or None when nothing matched.

        Raises:
            GeolocationLookupError: If the request fails or the service
                answers with an error status, a malformed body or a result
                that is not a valid location.
        """
        params = self.build_params(city, state, country)
        # Keep the "+" word separators literal in the query string
        query = urlencode(params, safe="+")
        logger.info(
            f"Looking up city='{params['city']}' state='{params['state']}' "
            f"country='{params['country']}'"
        )

        try:
            response = self.session.get(
                self.settings.base_url,
                params=query,
                headers=self.settings.headers,
                timeout=self.settings.timeout,
            )
            response.raise_for_status()
            results = response.json() if response.content else []
        except (requests.RequestException, ValueError) as exception:
            raise GeolocationLookupError(f"Geolocation lookup failed: {exception}") from exception

        if not isinstance(results, list):
            raise GeolocationLookupError(
                f"Unexpected geocoder response of type {type(results).__name__}"
            )
        if not results:
            logger.warning("No location found for the query.")
            return None

        try:
            location = Location.model_validate(results[0])
        except ValidationError as exception:
            raise GeolocationLookupError(f"Invalid geocoder result: {exception}") from exception
        logger.info(f"Resolved location '{location.display_name}' ({location.geojson.type})")
        return location
