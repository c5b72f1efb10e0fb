# Deskbar Services Package
"""
Backend services for the deskbar menu.

Services hold shared state and publish changes to the UI via signals.
"""

from .catalog import CatalogService, Snapshot, get_catalog_service

__all__ = ["CatalogService", "Snapshot", "get_catalog_service"]
