"""
FastAPI application entry point for the Gold Catalog API.

Run with:
    uvicorn gold_catalog.webapp.main:create_app --factory --port 4000

Open: http://127.0.0.1:4000/products
"""

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional, Sequence

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gold_catalog import __version__
from gold_catalog.catalog.catalog_loader import load_catalog
from gold_catalog.catalog.models import Product
from gold_catalog.exceptions import AppException
from gold_catalog.pricing.gold_price import GoldPriceAdapter, build_price_adapter
from gold_catalog.services.catalog_service import CatalogService
from gold_catalog.services.health_service import HealthService
from gold_catalog.utils.config_loader import AppConfig, load_config, load_env
from gold_catalog.utils.logging_config import setup_logging
from gold_catalog.webapp.routes import router

logger = logging.getLogger(__name__)


def init_app_state(
    app: FastAPI,
    config: AppConfig,
    products: Optional[Sequence[Product]] = None,
    price_adapter: Optional[GoldPriceAdapter] = None,
) -> None:
    """
    Build the long-lived components and attach them to ``app.state``.

    Raises:
        CatalogError: If the catalog file is missing or invalid.
    """
    if products is None:
        products = load_catalog(Path(config.catalog.path))
    if price_adapter is None:
        price_adapter = build_price_adapter(config)

    app.state.config = config
    app.state.products = tuple(products)
    app.state.price_adapter = price_adapter
    app.state.catalog_service = CatalogService(app.state.products, price_adapter)
    app.state.health_service = HealthService(app.state.products, price_adapter)


def create_app(
    config: Optional[AppConfig] = None,
    products: Optional[Sequence[Product]] = None,
    price_adapter: Optional[GoldPriceAdapter] = None,
    configure_logging: bool = True,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: Application config (loaded from config/config.yaml and env if None).
        products: Pre-loaded catalog (loaded from ``config.catalog.path`` if None).
        price_adapter: Pre-built gold price adapter (built from config if None).
        configure_logging: Whether start-up replaces the root logging handlers.

    Returns:
        FastAPI: Configured application. Components are created on start-up.
    """
    if config is None:
        load_env()
        config = load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown."""
        if configure_logging:
            setup_logging(
                level=config.logging.level,
                log_format=config.logging.format,
                log_file=Path(config.logging.file) if config.logging.file else None,
            )

        init_app_state(app, config, products, price_adapter)
        logger.info(
            f"Gold Catalog API starting (PROVIDER={app.state.price_adapter.provider.name}, "
            f"products={len(app.state.products)})"
        )
        yield
        logger.info("Gold Catalog API shutting down...")

    app = FastAPI(
        title="Gold Catalog API",
        description="Jewellery catalog priced from the live gold spot price",
        version=__version__,
        lifespan=lifespan,
    )

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Render application errors as {"error": message}."""
        logger.error(f"{exc.error_code} on {request.url.path}: {exc.message} {exc.details}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.middleware("http")
    async def error_handling_middleware(request: Request, call_next):
        """Global error handling middleware."""
        start_time = time.time()
        try:
            response = await call_next(request)
            process_time = time.time() - start_time
            response.headers["X-Process-Time"] = str(process_time)
            return response
        except Exception as e:
            process_time = time.time() - start_time
            logger.exception(f"Unhandled error processing {request.url.path}: {e}")
            return JSONResponse(
                status_code=500,
                content={"error": "internal error"},
                headers={"X-Process-Time": str(process_time)},
            )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("gold_catalog.webapp.main:create_app", factory=True, host="127.0.0.1", port=4000)
