"""Local persistence for private contacts and groups."""

__version__ = "0.3.0"
