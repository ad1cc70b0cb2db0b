"""
FastAPI routes for the Gold Catalog API.

Handles:
- Product listing priced from the live gold price, with range filters
- Health checks
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request

from gold_catalog.catalog.filters import ProductFilters
from gold_catalog.services.catalog_service import CatalogService
from gold_catalog.services.health_service import HealthService, utc_timestamp
from gold_catalog.webapp.schemas import (
    ErrorResponse,
    HealthResponse,
    ProductListResponse,
    SimpleHealthResponse,
)


logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Dependency Injection
# ============================================================================

def get_catalog_service(request: Request) -> CatalogService:
    """Catalog service created at application start-up."""
    return request.app.state.catalog_service


def get_health_service(request: Request) -> HealthService:
    """Health service created at application start-up."""
    return request.app.state.health_service


# ============================================================================
# Products
# ============================================================================

# Bounds are read as strings so garbage values are ignored, not rejected
@router.get(
    "/products",
    response_model=ProductListResponse,
    responses={500: {"model": ErrorResponse}},
)
def list_products(
    price_min: Optional[str] = Query(None, description="Minimum priceUsd (inclusive)"),
    price_max: Optional[str] = Query(None, description="Maximum priceUsd (inclusive)"),
    pop_min: Optional[str] = Query(None, description="Minimum popularityOutOf5 (inclusive)"),
    pop_max: Optional[str] = Query(None, description="Maximum popularityOutOf5 (inclusive)"),
    service: CatalogService = Depends(get_catalog_service),
) -> Dict[str, Any]:
    """List catalog products with prices derived from the current gold price."""
    filters = ProductFilters.from_query(
        price_min=price_min,
        price_max=price_max,
        pop_min=pop_min,
        pop_max=pop_max,
    )
    listing = service.list_products(filters)
    return listing.to_dict()


# ============================================================================
# Health
# ============================================================================

@router.get("/health", response_model=HealthResponse)
def health_check(health_service: HealthService = Depends(get_health_service)) -> Dict[str, Any]:
    """Detailed health check endpoint for monitoring."""
    report = health_service.get_full_health()
    return report.to_dict()


@router.get("/health/simple", response_model=SimpleHealthResponse)
def simple_health_check() -> Dict[str, Any]:
    """Simple health check for load balancers."""
    return {
        "status": "ok",
        "timestamp": utc_timestamp(),
    }
