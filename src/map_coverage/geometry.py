"""Computational-geometry primitives used by the coverage pipeline.

Everything the normalizer and the grid generator need from a geometry library
goes through this module: polygon and circle construction, bounding boxes,
masked point grids, path length and midpoints. Distances are measured on a
sphere with the mean earth radius and are expressed in kilometers.
"""

import math
from collections.abc import Sequence

import numpy as np
import shapely
from shapely.geometry import Polygon

from map_coverage.exceptions import EmptyInputError, GridConstructionError, GridTooLargeError

EARTH_RADIUS_KM = 6371.0088
DEFAULT_CIRCLE_STEPS = 64

Position = Sequence[float]
Bounds = tuple[float, float, float, float]


def distance(origin: Position, target: Position) -> float:
    """Great-circle distance between two lon/lat positions (haversine).

    Args:
        origin: ``[lon, lat]`` of the first position.
        target: ``[lon, lat]`` of the second position.

    Returns:
        The distance in kilometers.
    """
    lon1, lat1, lon2, lat2 = np.radians([origin[0], origin[1], target[0], target[1]])
    half_chord = (
        np.sin((lat2 - lat1) / 2) ** 2
        + np.cos(lat1) * np.cos(lat2) * np.sin((lon2 - lon1) / 2) ** 2
    )
    return float(2 * EARTH_RADIUS_KM * np.arctan2(np.sqrt(half_chord), np.sqrt(1 - half_chord)))


def bearing(origin: Position, target: Position) -> float:
    """Initial bearing in degrees from ``origin`` towards ``target``."""
    lon1, lat1, lon2, lat2 = np.radians([origin[0], origin[1], target[0], target[1]])
    y = np.sin(lon2 - lon1) * np.cos(lat2)
    x = np.cos(lat1) * np.sin(lat2) - np.sin(lat1) * np.cos(lat2) * np.cos(lon2 - lon1)
    return float(np.degrees(np.arctan2(y, x)))


def destination(
    origin: Position, distance_km: float, bearing_deg: float | np.ndarray
) -> np.ndarray:
    """Position reached travelling ``distance_km`` from ``origin`` along ``bearing_deg``.

    ``bearing_deg`` may be an array, in which case one destination per bearing
    is returned as rows of ``[lon, lat]``.
    """
    lon1, lat1 = np.radians(origin[0]), np.radians(origin[1])
    theta = np.radians(bearing_deg)
    delta = distance_km / EARTH_RADIUS_KM

    lat2 = np.arcsin(
        np.sin(lat1) * np.cos(delta) + np.cos(lat1) * np.sin(delta) * np.cos(theta)
    )
    lon2 = lon1 + np.arctan2(
        np.sin(theta) * np.sin(delta) * np.cos(lat1),
        np.cos(delta) - np.sin(lat1) * np.sin(lat2),
    )
    return np.column_stack([np.degrees(lon2), np.degrees(lat2)]).squeeze()


def midpoint(first: Position, last: Position) -> tuple[float, float]:
    """Point halfway along the great circle between two positions."""
    lon, lat = destination(first, distance(first, last) / 2, bearing(first, last))
    return float(lon), float(lat)


def line_length(coordinates: Sequence[Position]) -> float:
    """Total length in kilometers of a path through all ``coordinates``."""
    if len(coordinates) < 2:
        return 0.0
    return sum(distance(a, b) for a, b in zip(coordinates[:-1], coordinates[1:]))


def polygon_from(rings: Sequence[Sequence[Position]]) -> Polygon:
    """Build a polygon from GeoJSON-style rings (outer boundary first, holes after).

    Raises:
        EmptyInputError: If no ring is given.
        ValueError: If shapely rejects a ring (e.g. fewer than four positions).
    """
    if not rings:
        raise EmptyInputError("A polygon needs at least one ring")
    shell, *holes = ([tuple(position[:2]) for position in ring] for ring in rings)
    return Polygon(shell, holes)


def circle_from(
    center: Position, radius_km: float, steps: int = DEFAULT_CIRCLE_STEPS
) -> list[list[tuple[float, float]]]:
    """Rings of a circle approximated by ``steps`` destination points.

    Vertices are laid out counter-clockwise from due north and the ring is
    closed by repeating the first vertex.
    """
    bearings = np.arange(steps) * -360.0 / steps
    vertices = [(float(lon), float(lat)) for lon, lat in destination(center, radius_km, bearings)]
    vertices.append(vertices[0])
    return [vertices]


def bbox(polygon: Polygon) -> Bounds:
    """Return ``(west, south, east, north)`` of a polygon."""
    west, south, east, north = polygon.bounds
    return west, south, east, north


def point_grid(
    bounds: Bounds,
    spacing_km: float,
    mask: Polygon,
    max_points: int | None = None,
) -> list[tuple[float, float]]:
    """Raster of points ``spacing_km`` apart over ``bounds``, kept only inside ``mask``.

    The raster is centred in the box. Points are produced column by column
    from west to east, each column from south to north. A box without width
    or height produces no points.

    Args:
        bounds: ``(west, south, east, north)`` of the area to sample.
        spacing_km: Distance between neighbouring raster points.
        mask: Polygon the points must lie strictly inside.
        max_points: Optional upper bound on the size of the raw raster.

    Returns:
        ``(lon, lat)`` tuples in raster order.

    Raises:
        GridConstructionError: If the spacing is not positive or the raster
            cell size is not finite.
        GridTooLargeError: If the raster would exceed ``max_points``.
    """
    if not spacing_km > 0:
        raise GridConstructionError(f"Grid spacing must be positive, got {spacing_km}")

    west, south, east, north = bounds
    width_km = distance((west, south), (east, south))
    height_km = distance((west, south), (west, north))
    if width_km == 0 or height_km == 0:
        return []

    span_x = east - west
    span_y = north - south
    cell_width = spacing_km / width_km * span_x
    cell_height = spacing_km / height_km * span_y
    if not (math.isfinite(cell_width) and math.isfinite(cell_height)):
        raise GridConstructionError(f"Degenerate grid cell for bounds {bounds}")

    columns = math.floor(span_x / cell_width)
    rows = math.floor(span_y / cell_height)
    if max_points is not None and (columns + 1) * (rows + 1) > max_points:
        raise GridTooLargeError(
            f"Grid of {columns + 1}x{rows + 1} points exceeds the limit of {max_points}"
        )

    xs = west + (span_x - columns * cell_width) / 2 + cell_width * np.arange(columns + 1)
    ys = south + (span_y - rows * cell_height) / 2 + cell_height * np.arange(rows + 1)
    xs = xs[xs <= east]
    ys = ys[ys <= north]

    lons, lats = np.meshgrid(xs, ys, indexing="ij")
    lons, lats = lons.ravel(), lats.ravel()
    inside = shapely.contains_xy(mask, lons, lats)
    return [(float(lon), float(lat)) for lon, lat in zip(lons[inside], lats[inside])]


def covers(polygon: Polygon, lon: float, lat: float) -> bool:
    """Whether ``polygon`` contains the position, boundary included."""
    return bool(polygon.covers(shapely.Point(lon, lat)))
