"""
Pydantic response models for the web application.

Field names mirror the JSON consumed by the carousel front end.
"""

from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field


class EnrichedProductSchema(BaseModel):
    """A catalog product with its derived price and rating."""

    id: Union[int, str]
    name: str
    weight: float = Field(..., description="Gold weight in grams")
    popularityScore: float = Field(..., ge=0.0, le=1.0)
    images: Dict[str, str] = Field(default_factory=dict, description="Colour variant to image URL")
    priceUsd: float = Field(..., description="(popularityScore + 1) * weight * goldPricePerGram")
    popularityOutOf5: float = Field(..., ge=0.0, le=5.0)


class ProductListResponse(BaseModel):
    """Response model for the product listing endpoint."""

    goldPricePerGram: float = Field(..., description="Gold price in USD per gram, 4 decimals")
    count: int
    products: List[EnrichedProductSchema]


class ErrorResponse(BaseModel):
    """Error body returned for failed requests."""

    error: str


class SimpleHealthResponse(BaseModel):
    """Response model for the load balancer health check."""

    status: str
    timestamp: str


class HealthResponse(BaseModel):
    """Response model for the detailed health check."""

    status: str
    timestamp: str
    version: str
    components: Dict[str, Dict[str, Any]]
