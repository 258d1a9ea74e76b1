"""Command line entry point for generating coverage grids."""

import argparse
import json
import logging
import sys
from pathlib import Path

from map_coverage.backend.service import CoverageService
from map_coverage.config import get_settings
from map_coverage.exceptions import MapCoverageError
from map_coverage.frontend.components import save_coverage_map
from map_coverage.logger import configure_logging
from map_coverage.models import geometry_of
from map_coverage.normalizer import regions_for
from map_coverage.utils import points_to_feature_collection, points_to_frame

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="map-coverage",
        description="Generate map search centers covering a place.",
    )
    parser.add_argument("--city", default="", help="City name")
    parser.add_argument("--state", default="", help="State or region name")
    parser.add_argument("--country", default="", help="Country name")
    parser.add_argument("--zoom", type=float, default=14, help="Map zoom level (default: 14)")
    parser.add_argument(
        "--output",
        type=Path,
        help="Write points to this file (.csv or .geojson); prints JSON when omitted",
    )
    parser.add_argument("--map", type=Path, help="Write an HTML preview map to this file")
    parser.add_argument("--log-level", help="Logging level (e.g. DEBUG)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line interface.

    Returns:
        Process exit code: 0 on success, 1 when the place cannot be resolved.
    """
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.logging, level=args.log_level)

    if not (args.city or args.state or args.country):
        logger.error("At least one of --city, --state or --country is required.")
        return 1

    service = CoverageService(settings)

    try:
        location, points = service.search_points(
            city=args.city, state=args.state, country=args.country, zoom=args.zoom
        )
    except MapCoverageError as exception:
        logger.error(f"Coverage generation failed: {exception}")
        return 1

    if location is None:
        logger.error("Location not found.")
        return 1

    if args.output is None:
        json.dump([point.model_dump() for point in points], sys.stdout)
        sys.stdout.write("\n")
    elif args.output.suffix.lower() == ".csv":
        points_to_frame(points).to_csv(args.output, index=False)
    else:
        args.output.write_text(json.dumps(points_to_feature_collection(points)))

    if args.map is not None:
        regions = regions_for(geometry_of(location), settings.grid.buffer_radius_km)
        save_coverage_map(args.map, regions, points, zoom_start=int(args.zoom))
        logger.info(f"Preview map written to {args.map}")

    return 0
