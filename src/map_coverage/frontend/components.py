"""Visual helpers for inspecting generated coverage grids.

This module renders coverage regions and search points on a Folium map so a
grid can be checked by eye before it is used for querying.
"""

from collections.abc import Sequence
from pathlib import Path

import folium

from map_coverage.models import CoverageRegion, GridPoint


def create_coverage_map(
    regions: Sequence[CoverageRegion],
    points: Sequence[GridPoint],
    zoom_start: int = 12,
) -> folium.Map:
    """Create a Folium map showing coverage regions and search points.

    Args:
        regions: Regions to outline.
        points: Points to mark, one small circle each.
        zoom_start: Initial zoom level. Defaults to 12.

    Returns:
        The Folium map, centred on the first point (or region vertex).
    """
    if points:
        center = [points[0].lat, points[0].lon]
    elif regions and regions[0].exterior:
        lon, lat = regions[0].exterior[0][:2]
        center = [lat, lon]
    else:
        center = [0.0, 0.0]

    folium_map = folium.Map(location=center, zoom_start=zoom_start)

    for region in regions:
        # Folium expects (lat, lon) pairs
        folium.Polygon(
            locations=[[position[1], position[0]] for position in region.exterior],
            color="#3186cc",
            weight=2,
            fill=True,
            fill_opacity=0.1,
        ).add_to(folium_map)

    for index, point in enumerate(points):
        folium.CircleMarker(
            location=[point.lat, point.lon],
            radius=3,
            color="#d7301f",
            fill=True,
            tooltip=f"#{index} ({point.lat:.5f}, {point.lon:.5f})",
        ).add_to(folium_map)

    return folium_map


def save_coverage_map(
    path: str | Path,
    regions: Sequence[CoverageRegion],
    points: Sequence[GridPoint],
    zoom_start: int = 12,
) -> Path:
    """Render the coverage map to an HTML file and return its path."""
    path = Path(path)
    create_coverage_map(regions, points, zoom_start).save(str(path))
    return path
