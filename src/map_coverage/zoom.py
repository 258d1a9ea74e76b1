"""Ground resolution of a Web-Mercator map viewport."""

import math

# Meters per pixel at the equator for zoom level 0 (256 px tiles).
EQUATOR_METERS_PER_PIXEL = 156543.03392
DEFAULT_VIEWPORT_PX = 800


def distance_per_pixel(latitude: float, zoom: float) -> float:
    """Calculate the ground distance covered by one pixel.

    Args:
        latitude: Latitude in degrees.
        zoom: Map zoom level (0 or more).

    Returns:
        Meters per pixel.
    """
    return EQUATOR_METERS_PER_PIXEL * math.cos(latitude * math.pi / 180) / math.pow(2, zoom)


def viewport_span_km(latitude: float, zoom: float, viewport_px: int = DEFAULT_VIEWPORT_PX) -> float:
    """Ground distance in kilometers spanned by a viewport edge of ``viewport_px`` pixels."""
    return distance_per_pixel(latitude, zoom) * viewport_px / 1000
