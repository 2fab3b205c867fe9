"""rx: pick an npm script or make target from a filterable list and run it."""

from rx_launcher.config import VERSION

__version__ = VERSION
