"""Configuration settings for the map_coverage package.

This module defines the configuration for grid generation, the geocoding
collaborator and logging. It uses Pydantic's BaseSettings for environment
variable management.
"""

from functools import lru_cache

from pydantic import BaseModel, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GridSettings(BaseModel):
    """Settings for coverage grid generation.

    Attributes:
        viewport_px: Edge length of the assumed map viewport in pixels.
        spacing_step_km: Amount the grid spacing shrinks on every empty attempt.
        buffer_radius_km: Radius of the disc built around point geometries.
        circle_steps: Number of vertices used to approximate a circle.
        max_grid_points: Optional limit on the raster of a single region. Exceeding
            it aborts the whole call. Unlimited by default.
    """

    viewport_px: int = Field(800, gt=0, description="Viewport edge in pixels")
    spacing_step_km: float = Field(1.0, gt=0, description="Spacing decrement per retry (km)")
    buffer_radius_km: float = Field(5.0, gt=0, description="Point buffer radius (km)")
    circle_steps: int = Field(64, ge=3, description="Vertices per circular region")
    max_grid_points: int | None = Field(
        None, gt=0, description="Optional limit on the raster of a single region"
    )


class GeocoderSettings(BaseModel):
    """Settings for the Nominatim geocoding lookup.

    Attributes:
        base_url: Search endpoint of the geocoding service.
        timeout: Request timeout in seconds.
        polygon_threshold: Simplification tolerance requested for returned polygons.
        limit: Maximum number of results requested.
        referer: Referer header sent with every request.
        user_agent: User-Agent string to use for requests.
    """

    base_url: str = Field(
        "https://nominatim.openstreetmap.org/search", description="Geocoding search endpoint"
    )
    timeout: int = Field(30, description="Request timeout in seconds")
    polygon_threshold: float = Field(0.005, description="Polygon simplification threshold")
    limit: int = Field(1, ge=1, description="Maximum number of results")
    referer: str = Field("http://google.com", description="Referer header")
    user_agent: str = Field("map-coverage/0.1", description="User-Agent string")

    @computed_field
    def headers(self) -> dict[str, str]:
        """Return the headers dictionary.

        Returns:
            A dictionary containing the HTTP headers sent to the geocoder.
        """
        return {
            "User-Agent": self.user_agent,
            "Referer": self.referer,
            "Accept": "application/json",
        }


class LoggingSettings(BaseModel):
    """Logging configuration settings.

    Attributes:
        level: The logging level (e.g., INFO, DEBUG).
        format: The log message format string.
    """

    level: str = Field("INFO", description="Logging level")
    format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )


class Settings(BaseSettings):
    """Global application settings.

    Values are read from ``MAP_COVERAGE_`` prefixed environment variables, with
    ``__`` separating nested sections (e.g. ``MAP_COVERAGE_GRID__VIEWPORT_PX``).

    Attributes:
        grid: Grid generation settings.
        geocoder: Geocoding lookup settings.
        logging: Logging configuration settings.
    """

    grid: GridSettings = Field(default_factory=GridSettings)
    geocoder: GeocoderSettings = Field(default_factory=GeocoderSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="MAP_COVERAGE_",
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of the settings.

    Returns:
        The global Settings instance.
    """
    return Settings()
