"""Module for the coverage service business logic.

This module provides `CoverageService`, which chains the geocoding lookup
with grid generation and containment checks.
"""

import logging
from typing import Any

from map_coverage.backend.geocoder import NominatimGeocoder
from map_coverage.config import Settings
from map_coverage.containment import contains
from map_coverage.grid import AdaptiveGridGenerator
from map_coverage.models import GridPoint, LatLng, Location

logger = logging.getLogger(__name__)


class CoverageService:
    """Resolve places and generate the search centers that cover them.

    Attributes:
        settings (Settings): Application configuration settings.
        geocoder (NominatimGeocoder): Place lookup collaborator.
        generator (AdaptiveGridGenerator): Grid generator.
    """

    def __init__(
        self, settings: Settings, geocoder: NominatimGeocoder | None = None
    ) -> None:
        """Initialize the service.

        Args:
            settings: Application configuration object.
            geocoder: Optional geocoder, built from the settings when omitted.
        """
        self.settings = settings
        self.geocoder = geocoder or NominatimGeocoder(settings.geocoder)
        self.generator = AdaptiveGridGenerator(settings.grid)

    def search_points(
        self,
        city: str | None = None,
        state: str | None = None,
        country: str | None = None,
        zoom: float = 14,
    ) -> tuple[Location | None, list[GridPoint]]:
        """Resolve a place and generate the points covering it.

        Args:
            city: City name.
            state: State or region name.
            country: Country name.
            zoom: Map zoom level the points will be queried at.

        Returns:
            A tuple containing:
                - Location | None: The resolved location, None if not found.
                - list[GridPoint]: The covering points, empty if not found.
        """
        location = self.geocoder.lookup(city=city, state=state, country=country)
        if location is None:
            return None, []
        return location, self.points_for_location(location, zoom)

    def points_for_location(self, location: Any, zoom: float) -> list[GridPoint]:
        """Generate the points covering an already resolved location."""
        points = self.generator.covering_points(location, zoom, [])
        logger.info(f"Generated {len(points)} search points at zoom {zoom}")
        return points

    def is_inside(self, location: Any, lat: float, lng: float) -> bool:
        """Check whether a coordinate falls inside the location."""
        return contains(location, LatLng(lat=lat, lng=lng), self.settings.grid.buffer_radius_km)
