"""Turn any supported geometry into polygonal coverage regions.

Polygons are used as they are. Points and lines have no area, so they are
replaced by a disc: a fixed-radius disc around a point, and for a line a disc
around the midpoint of its end points with a radius of the full path length.
"""

import logging
from typing import Any

from map_coverage.exceptions import UnsupportedGeometryError
from map_coverage.geometry import DEFAULT_CIRCLE_STEPS, circle_from, line_length, midpoint
from map_coverage.models import (
    CoverageRegion,
    Feature,
    LineStringGeometry,
    MultiPolygonGeometry,
    PointGeometry,
    PolygonGeometry,
    parse_geometry,
)

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_RADIUS_KM = 5.0


def regions_for(
    geometry: Any,
    buffer_radius_km: float = DEFAULT_BUFFER_RADIUS_KM,
    circle_steps: int = DEFAULT_CIRCLE_STEPS,
) -> list[CoverageRegion]:
    """Normalize a geometry into one or more coverage regions.

    Args:
        geometry: A geometry model or a raw GeoJSON mapping.
        buffer_radius_km: Radius of the disc built around a point.
        circle_steps: Number of vertices of every generated disc.

    Returns:
        Coverage regions in input order. Empty when the geometry carries no
        coordinates.

    Raises:
        UnsupportedGeometryError: For feature collections and unknown tags.
    """
    geometry = parse_geometry(geometry)

    if isinstance(geometry, Feature):
        if geometry.geometry is None:
            return []
        return regions_for(geometry.geometry, buffer_radius_km, circle_steps)

    if not isinstance(
        geometry, (PointGeometry, LineStringGeometry, PolygonGeometry, MultiPolygonGeometry)
    ):
        raise UnsupportedGeometryError(getattr(geometry, "type", type(geometry).__name__))

    coordinates = geometry.coordinates
    if coordinates is None:
        return []

    if isinstance(geometry, PolygonGeometry):
        return [CoverageRegion.from_rings(coordinates)]

    # A point (e.g. a city centre) has no area, use a disc around it
    if isinstance(geometry, PointGeometry):
        return [CoverageRegion.from_rings(circle_from(coordinates, buffer_radius_km, circle_steps))]

    # A line (road or street): disc around the midpoint spanning the whole path
    if isinstance(geometry, LineStringGeometry):
        if not coordinates:
            return []
        center = midpoint(coordinates[0], coordinates[-1])
        radius_km = line_length(coordinates)
        logger.debug(f"Line of {radius_km:.3f} km buffered around {center}")
        return [CoverageRegion.from_rings(circle_from(center, radius_km, circle_steps))]

    return [CoverageRegion.from_rings(rings) for rings in coordinates]
