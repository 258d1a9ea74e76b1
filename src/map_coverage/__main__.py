"""Allow running the package with ``python -m map_coverage``."""

import sys

from map_coverage.cli import main

if __name__ == "__main__":
    sys.exit(main())
