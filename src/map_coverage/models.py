"""Pydantic models for the map_coverage package.

This module defines the GeoJSON geometry variants accepted by the coverage
pipeline, the geocoder result that wraps them, and the small value types the
pipeline produces. Geometry variants form a tagged union discriminated on the
GeoJSON ``type`` member.
"""

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from shapely.geometry import Polygon

from map_coverage.exceptions import UnsupportedGeometryError
from map_coverage.geometry import Bounds, polygon_from

Position = Annotated[list[float], Field(min_length=2)]
Ring = list[Position]


class PointGeometry(BaseModel):
    """A single ``[lon, lat]`` position.

    A position with fewer than two values carries no usable payload and is
    stored as ``None``.
    """

    type: Literal["Point"] = "Point"
    coordinates: list[float] | None = None

    @field_validator("coordinates")
    @classmethod
    def _drop_short_position(cls, value: list[float] | None) -> list[float] | None:
        if value is not None and len(value) < 2:
            return None
        return value


class LineStringGeometry(BaseModel):
    """An ordered path of two or more positions."""

    type: Literal["LineString"] = "LineString"
    coordinates: list[Position] | None = None


class PolygonGeometry(BaseModel):
    """Linear rings; the first is the outer boundary, the rest are holes."""

    type: Literal["Polygon"] = "Polygon"
    coordinates: list[Ring] | None = None


class MultiPolygonGeometry(BaseModel):
    """A list of polygon coordinate structures."""

    type: Literal["MultiPolygon"] = "MultiPolygon"
    coordinates: list[list[Ring]] | None = None


BareGeometry = Annotated[
    Union[PointGeometry, LineStringGeometry, PolygonGeometry, MultiPolygonGeometry],
    Field(discriminator="type"),
]


class Feature(BaseModel):
    """A geometry together with opaque properties."""

    type: Literal["Feature"] = "Feature"
    geometry: BareGeometry | None = None
    properties: dict[str, Any] | None = Field(default_factory=dict)


class FeatureCollection(BaseModel):
    """A container of features. Not accepted for grid generation."""

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[Feature] = Field(default_factory=list)


Geometry = Annotated[
    Union[
        PointGeometry,
        LineStringGeometry,
        PolygonGeometry,
        MultiPolygonGeometry,
        Feature,
        FeatureCollection,
    ],
    Field(discriminator="type"),
]

BARE_GEOMETRY_TYPES = frozenset({"Point", "LineString", "Polygon", "MultiPolygon"})
GEOMETRY_TYPES = BARE_GEOMETRY_TYPES | {"Feature", "FeatureCollection"}

_geometry_adapter: TypeAdapter[Any] = TypeAdapter(Geometry)


def _check_tags(data: Mapping[str, Any]) -> None:
    """Raise UnsupportedGeometryError for any tag the union does not know."""
    geometry_type = data.get("type")
    if geometry_type not in GEOMETRY_TYPES:
        raise UnsupportedGeometryError(geometry_type)
    if geometry_type == "Feature":
        inner = data.get("geometry")
        if isinstance(inner, Mapping) and inner.get("type") not in BARE_GEOMETRY_TYPES:
            raise UnsupportedGeometryError(inner.get("type"))
    elif geometry_type == "FeatureCollection":
        for feature in data.get("features") or []:
            if isinstance(feature, Mapping):
                _check_tags(feature)


def parse_geometry(data: Any) -> Any:
    """Validate a raw GeoJSON mapping into one of the geometry models.

    Model instances are returned unchanged.

    Args:
        data: A GeoJSON mapping or an already validated geometry model.

    Returns:
        The matching geometry model.

    Raises:
        UnsupportedGeometryError: If the ``type`` tag is missing or unknown.
        pydantic.ValidationError: If the coordinates do not fit the tag.
    """
    if isinstance(data, BaseModel):
        return data
    if not isinstance(data, Mapping):
        raise UnsupportedGeometryError(type(data).__name__)
    _check_tags(data)
    return _geometry_adapter.validate_python(data)


class Location(BaseModel):
    """A geocoding result carrying the GeoJSON outline of a place.

    Attributes:
        geojson: Geometry of the place.
        display_name: Human readable name returned by the geocoder.
        lat: Latitude of the representative point.
        lon: Longitude of the representative point.
        osm_id: OpenStreetMap identifier.
        osm_type: OpenStreetMap element type (node, way, relation).
        boundingbox: ``[south, north, west, east]`` as returned by Nominatim.
    """

    model_config = ConfigDict(extra="allow")

    geojson: Geometry
    display_name: str | None = None
    lat: float | None = None
    lon: float | None = None
    osm_id: int | None = None
    osm_type: str | None = None
    boundingbox: list[float] | None = None

    @field_validator("geojson", mode="before")
    @classmethod
    def _reject_unknown_tags(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            _check_tags(value)
        return value


class GridPoint(BaseModel):
    """A generated search center."""

    lon: float
    lat: float


class LatLng(BaseModel):
    """A coordinate to classify against a location."""

    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)


class BoundingBox(BaseModel):
    """Extent of a coverage region in degrees."""

    west: float
    south: float
    east: float
    north: float

    @classmethod
    def from_bounds(cls, bounds: Bounds) -> "BoundingBox":
        west, south, east, north = bounds
        return cls(west=west, south=south, east=east, north=north)

    def as_tuple(self) -> Bounds:
        return self.west, self.south, self.east, self.north


class CoverageRegion(BaseModel):
    """An immutable polygonal mask for grid generation.

    ``rings`` follows the GeoJSON polygon layout. The shapely polygon is built
    on access so that malformed rings fail where the region is used.
    """

    model_config = ConfigDict(frozen=True)

    rings: tuple[tuple[tuple[float, ...], ...], ...]

    @classmethod
    def from_rings(cls, rings: list[Ring] | list[list[tuple[float, float]]]) -> "CoverageRegion":
        return cls(rings=tuple(tuple(tuple(position) for position in ring) for ring in rings))

    @property
    def polygon(self) -> Polygon:
        return polygon_from(self.rings)

    @property
    def exterior(self) -> tuple[tuple[float, ...], ...]:
        return self.rings[0] if self.rings else ()


def geometry_of(location: Any) -> Any:
    """Return the geometry carried by a location.

    Accepts a :class:`Location`, a mapping with a ``geojson`` member (such as
    a raw geocoder result) or a bare geometry.
    """
    if isinstance(location, Location):
        return location.geojson
    if isinstance(location, Mapping) and "geojson" in location:
        return parse_geometry(location["geojson"])
    return parse_geometry(location)
