"""Back-office mock data service."""

__version__ = "0.1.0"
