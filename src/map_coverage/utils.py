"""Utility functions for the map_coverage package."""

import re
from collections.abc import Iterable
from typing import Any

import pandas as pd

from map_coverage.models import GridPoint

_WHITESPACE = re.compile(r"\s+")


def normalize_query_part(text: str | None) -> str:
    """Trim a free-text query part and join its words with ``+``.

    Args:
        text: City, state or country name. ``None`` is treated as empty.

    Returns:
        The normalized string, e.g. ``"New York"`` becomes ``"New+York"``.
    """
    return _WHITESPACE.sub("+", (text or "").strip())


def points_to_frame(points: Iterable[GridPoint]) -> pd.DataFrame:
    """Convert generated points into a DataFrame with ``lon`` and ``lat`` columns.

    Order is preserved and duplicates are kept.
    """
    return pd.DataFrame([point.model_dump() for point in points], columns=["lon", "lat"])


def points_to_feature_collection(points: Iterable[GridPoint]) -> dict[str, Any]:
    """Convert generated points into a GeoJSON FeatureCollection.

    Handy to inspect a grid in any GeoJSON viewer.
    """
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [point.lon, point.lat]},
                "properties": {"index": index},
            }
            for index, point in enumerate(points)
        ],
    }
