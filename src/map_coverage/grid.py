"""Adaptive grid of search centers covering a location.

Every coverage region is sampled with a raster whose spacing matches the
ground footprint of a map viewport at the requested zoom, so that one map
query per generated point covers the region. Small regions can fall between
raster points; the spacing then shrinks step by step until the raster hits the
region or the spacing is used up.
"""

import logging
from dataclasses import dataclass
from typing import Any

from shapely.errors import GEOSException

from map_coverage.config import GridSettings
from map_coverage.exceptions import (
    GridTooLargeError,
    MapCoverageError,
    UnsupportedGeometryError,
)
from map_coverage.geometry import bbox, point_grid
from map_coverage.models import (
    BoundingBox,
    CoverageRegion,
    Feature,
    FeatureCollection,
    GridPoint,
    LineStringGeometry,
    PointGeometry,
    geometry_of,
)
from map_coverage.normalizer import regions_for
from map_coverage.zoom import viewport_span_km


# Errors that mean "this region cannot be rastered"; anything else propagates.
REGION_ERRORS = (MapCoverageError, GEOSException, ValueError, ArithmeticError)


@dataclass
class SpacingSearch:
    """State of the shrinking-spacing search for one region.

    Attributes:
        spacing_km: Current (unhalved) spacing.
        step_km: Amount removed from the spacing after an empty raster.
        halve: Whether each attempt uses half of the current spacing.
        attempts: Number of rasters requested so far.
    """

    spacing_km: float
    step_km: float = 1.0
    halve: bool = False
    attempts: int = 0

    @property
    def exhausted(self) -> bool:
        return self.spacing_km <= 0

    @property
    def attempt_spacing_km(self) -> float:
        return self.spacing_km / 2 if self.halve else self.spacing_km

    def shrink(self) -> None:
        self.spacing_km -= self.step_km


class AdaptiveGridGenerator:
    """Generate evenly spaced search centers covering a location.

    Attributes:
        settings (GridSettings): Viewport, buffer and spacing configuration.
        logger (logging.Logger): Receives per-attempt diagnostics and region failures.
    """

    def __init__(
        self,
        settings: GridSettings | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            settings: Grid settings. Defaults to ``GridSettings()``.
            logger: Logger for diagnostics. Defaults to this module's logger.
        """
        self.settings = settings or GridSettings()
        self.logger = logger or logging.getLogger(__name__)

    def covering_points(
        self,
        location: Any,
        zoom: float,
        points: list[GridPoint] | None = None,
    ) -> list[GridPoint]:
        """Append the search centers covering ``location`` to ``points``.

        A point location contributes its own coordinate first and a line its
        two end points, so these are present whatever the raster yields.
        Raster points follow region by region in raster order. Nothing is
        deduplicated.

        Args:
            location: A :class:`Location`, a mapping with a ``geojson`` member,
                or a bare geometry.
            zoom: Map zoom level the points will be queried at.
            points: Accumulator to append to. A new list is used when omitted.

        Returns:
            The accumulator.

        Raises:
            UnsupportedGeometryError: For feature collections and unknown tags.
            GridTooLargeError: If a region needs a larger raster than
                ``settings.max_grid_points`` allows.
        """
        if points is None:
            points = []

        geometry = geometry_of(location)
        if isinstance(geometry, FeatureCollection):
            raise UnsupportedGeometryError(geometry.type)
        if not isinstance(geometry, Feature) and geometry.coordinates is None:
            return points

        if isinstance(geometry, PointGeometry):
            lon, lat = geometry.coordinates[:2]
            points.append(GridPoint(lon=lon, lat=lat))

        if isinstance(geometry, LineStringGeometry) and geometry.coordinates:
            for lon, lat, *_ in (geometry.coordinates[0], geometry.coordinates[-1]):
                points.append(GridPoint(lon=lon, lat=lat))

        regions = regions_for(
            geometry, self.settings.buffer_radius_km, self.settings.circle_steps
        )
        halve = isinstance(geometry, PointGeometry)

        for index, region in enumerate(regions):
            try:
                grid = self.region_points(region, zoom, halve=halve)
            except GridTooLargeError:
                raise
            except REGION_ERRORS:
                self.logger.exception(f"Failed to create point grid for region {index}")
                continue
            points.extend(GridPoint(lon=lon, lat=lat) for lon, lat in grid)

        return points

    def region_points(
        self, region: CoverageRegion, zoom: float, halve: bool = False
    ) -> list[tuple[float, float]]:
        """Raster one region, shrinking the spacing until a point lands inside.

        Args:
            region: The region to sample.
            zoom: Map zoom level used to size the spacing.
            halve: Use half of the spacing on every attempt.

        Returns:
            ``(lon, lat)`` tuples; empty when the spacing ran out first.
        """
        polygon = region.polygon
        bounds = BoundingBox.from_bounds(bbox(polygon))
        search = SpacingSearch(
            spacing_km=viewport_span_km(bounds.north, zoom, self.settings.viewport_px),
            step_km=self.settings.spacing_step_km,
            halve=halve,
        )

        grid: list[tuple[float, float]] = []
        while not search.exhausted:
            self.logger.debug(
                f"Grid attempt {search.attempts + 1} at {search.attempt_spacing_km:.3f} km"
            )
            grid = point_grid(
                bounds.as_tuple(),
                search.attempt_spacing_km,
                polygon,
                max_points=self.settings.max_grid_points,
            )
            search.attempts += 1
            if grid:
                break
            search.shrink()

        if not grid:
            self.logger.debug(f"No grid point inside region after {search.attempts} attempts")
        return grid


def covering_points(
    location: Any,
    zoom: float,
    points: list[GridPoint] | None = None,
    settings: GridSettings | None = None,
) -> list[GridPoint]:
    """Append the search centers covering ``location`` to ``points``.

    Shortcut for ``AdaptiveGridGenerator(settings).covering_points(...)``.
    """
    return AdaptiveGridGenerator(settings).covering_points(location, zoom, points)
