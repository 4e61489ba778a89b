"""Turn-based hex-grid skirmish simulation."""

__version__ = "0.1.0"
