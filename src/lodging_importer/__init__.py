"""Batch importer that re-projects paginated lodging listings into catalog accommodations."""

__version__ = "0.1.0"
