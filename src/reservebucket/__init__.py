"""Monthly reserve schedule reader and consecutive-day bucket queries."""
from reservebucket.version import APP_VERSION as __version__

__all__ = ["__version__"]
