"""
Catalog module.

Static product list loading, product models and listing filters.
"""

from gold_catalog.catalog.catalog_loader import load_catalog, parse_catalog
from gold_catalog.catalog.filters import ProductFilters, parse_bound
from gold_catalog.catalog.models import CatalogListing, EnrichedProduct, Product

__all__ = [
    "load_catalog",
    "parse_catalog",
    "ProductFilters",
    "parse_bound",
    "Product",
    "EnrichedProduct",
    "CatalogListing",
]
