"""Exception hierarchy for the map_coverage package."""


class MapCoverageError(Exception):
    """Base class for all errors raised by map_coverage."""


class UnsupportedGeometryError(MapCoverageError):
    """Raised when a geometry tag cannot be turned into coverage regions."""

    def __init__(self, geometry_type: object) -> None:
        self.geometry_type = geometry_type
        super().__init__(f"Unsupported geometry type: {geometry_type!r}")


class EmptyInputError(MapCoverageError):
    """Raised when a geometry carries no coordinate payload.

    The grid generator treats an empty payload as an empty result, so this is
    only raised by helpers that cannot return one.
    """


class GridConstructionError(MapCoverageError):
    """Raised when a masked point grid cannot be built for a region."""


class GeolocationLookupError(MapCoverageError):
    """Raised when the geocoding service cannot be reached or answers with an error."""


class GridTooLargeError(GridConstructionError):
    """Raised when a raster would exceed the configured point limit.

    Unlike other grid failures this is not a property of one bad region, so
    it is reported to the caller instead of skipping the region.
    """
