"""samplepool - dual-pane browser for importing audio samples into a pool folder."""

from samplepool.config import APP_VERSION

__version__ = APP_VERSION
