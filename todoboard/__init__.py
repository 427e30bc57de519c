"""todoboard: realtime todo tracking service."""

__version__ = "0.1.0"
