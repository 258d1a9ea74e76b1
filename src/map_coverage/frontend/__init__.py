"""Frontend package for map_coverage."""

from .components import create_coverage_map, save_coverage_map

__all__ = ["create_coverage_map", "save_coverage_map"]
