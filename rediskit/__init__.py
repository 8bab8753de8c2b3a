"""Building blocks for a Redis-compatible server."""

__version__ = "0.1.0"