"""Backend package for map_coverage."""

from .geocoder import NominatimGeocoder
from .service import CoverageService

__all__ = ["CoverageService", "NominatimGeocoder"]
