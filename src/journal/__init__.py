"""Journal CMS backend: capability-based administration API."""

__version__ = "0.1.0"
