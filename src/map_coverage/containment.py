"""Classify a coordinate against the coverage regions of a location."""

import logging
from collections.abc import Mapping
from typing import Any

from shapely.errors import GEOSException

from map_coverage.exceptions import MapCoverageError
from map_coverage.geometry import covers
from map_coverage.models import LatLng, geometry_of
from map_coverage.normalizer import DEFAULT_BUFFER_RADIUS_KM, regions_for

logger = logging.getLogger(__name__)


def contains(
    location: Any,
    point: LatLng | Mapping[str, float],
    buffer_radius_km: float = DEFAULT_BUFFER_RADIUS_KM,
) -> bool:
    """Check whether a coordinate lies inside any coverage region of a location.

    Points on a region boundary count as inside. Regions whose polygon cannot
    be built are skipped.

    Args:
        location: A :class:`Location`, a mapping with a ``geojson`` member,
            or a bare geometry.
        point: The coordinate, as a :class:`LatLng` or a ``{"lat", "lng"}`` mapping.
        buffer_radius_km: Radius of the disc used for point geometries.

    Returns:
        True as soon as one region covers the coordinate, False otherwise.
    """
    point = LatLng.model_validate(point) if not isinstance(point, LatLng) else point

    for index, region in enumerate(regions_for(geometry_of(location), buffer_radius_km)):
        try:
            polygon = region.polygon
        except (MapCoverageError, GEOSException, ValueError) as exception:
            logger.warning(f"Skipping region {index} with invalid polygon: {exception}")
            continue
        if covers(polygon, point.lng, point.lat):
            return True
    return False
