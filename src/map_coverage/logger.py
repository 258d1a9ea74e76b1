"""Logging setup for command line runs.

Library code only creates module loggers under the ``map_coverage``
namespace; handlers and levels are installed here by the process entry point.
"""

import logging
import sys

from .config import LoggingSettings

PACKAGE_LOGGER = "map_coverage"

# Third-party loggers kept at WARNING whatever level the package runs at
QUIET_LOGGERS = ("urllib3", "requests", "shapely")


def configure_logging(settings: LoggingSettings | None = None, level: str | None = None) -> None:
    """Route log records to stdout using the configured level and format.

    The level applies to the ``map_coverage`` loggers, so ``DEBUG`` shows every
    grid attempt without enabling debug output of the HTTP stack.

    Args:
        settings: Logging settings. Defaults to ``LoggingSettings()``.
        level: Optional level name overriding ``settings.level`` (e.g. from a
            command line flag).
    """
    settings = settings or LoggingSettings()
    level_name = (level or settings.level).upper()
    package_level = logging.getLevelName(level_name)
    if not isinstance(package_level, int):
        package_level = logging.INFO

    logging.basicConfig(
        level=max(package_level, logging.INFO),
        format=settings.format,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(f"Logging configured with level {level_name}")
