"""
Services layer for the Gold Catalog API.

Contains business logic extracted from routes for better testability.
"""

from gold_catalog.services.catalog_service import CatalogService, enrich_product
from gold_catalog.services.health_service import HealthService

__all__ = ["CatalogService", "HealthService", "enrich_product"]
