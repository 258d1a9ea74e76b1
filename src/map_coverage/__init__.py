"""Coverage grids of map search centers for arbitrary places."""

from .backend.geocoder import NominatimGeocoder
from .backend.service import CoverageService
from .config import GeocoderSettings, GridSettings, LoggingSettings, Settings, get_settings
from .containment import contains
from .exceptions import (
    EmptyInputError,
    GeolocationLookupError,
    GridConstructionError,
    GridTooLargeError,
    MapCoverageError,
    UnsupportedGeometryError,
)
from .grid import AdaptiveGridGenerator, SpacingSearch, covering_points
from .logger import configure_logging
from .models import (
    BoundingBox,
    CoverageRegion,
    Feature,
    FeatureCollection,
    GridPoint,
    LatLng,
    LineStringGeometry,
    Location,
    MultiPolygonGeometry,
    PointGeometry,
    PolygonGeometry,
    parse_geometry,
)
from .normalizer import regions_for
from .utils import points_to_feature_collection, points_to_frame
from .zoom import distance_per_pixel, viewport_span_km

__all__ = [
    "AdaptiveGridGenerator",
    "BoundingBox",
    "CoverageRegion",
    "CoverageService",
    "EmptyInputError",
    "Feature",
    "FeatureCollection",
    "GeocoderSettings",
    "GeolocationLookupError",
    "GridConstructionError",
    "GridPoint",
    "GridSettings",
    "GridTooLargeError",
    "LatLng",
    "LineStringGeometry",
    "Location",
    "LoggingSettings",
    "MapCoverageError",
    "MultiPolygonGeometry",
    "NominatimGeocoder",
    "PointGeometry",
    "PolygonGeometry",
    "Settings",
    "SpacingSearch",
    "UnsupportedGeometryError",
    "configure_logging",
    "contains",
    "covering_points",
    "distance_per_pixel",
    "get_settings",
    "parse_geometry",
    "points_to_feature_collection",
    "points_to_frame",
    "regions_for",
    "viewport_span_km",
]
