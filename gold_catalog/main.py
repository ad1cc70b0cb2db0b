"""
CLI entry point for the Gold Catalog API.

Runs the HTTP server, or prints the current gold price or the priced catalog
from the command line.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from gold_catalog.catalog.catalog_loader import load_catalog
from gold_catalog.catalog.filters import ProductFilters
from gold_catalog.exceptions import AppException
from gold_catalog.pricing.gold_price import build_price_adapter
from gold_catalog.services.catalog_service import CatalogService
from gold_catalog.utils.config_loader import AppConfig, load_config, load_env
from gold_catalog.utils.logging_config import setup_logging


logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed command line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Gold Catalog API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m gold_catalog.main serve --port 4000
    python -m gold_catalog.main price
    python -m gold_catalog.main products --price-min 200 --pop-min 4
        """,
    )

    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=Path("config/config.yaml"),
        help="Path to configuration file",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", help="Bind address (default: from config)")
    serve.add_argument("--port", type=int, help="Listen port (default: from config)")

    subparsers.add_parser("price", help="Print the current gold price per gram")

    products = subparsers.add_parser("products", help="Print the priced catalog as JSON")
    products.add_argument("--price-min", help="Minimum priceUsd (inclusive)")
    products.add_argument("--price-max", help="Maximum priceUsd (inclusive)")
    products.add_argument("--pop-min", help="Minimum popularityOutOf5 (inclusive)")
    products.add_argument("--pop-max", help="Maximum popularityOutOf5 (inclusive)")

    return parser.parse_args(argv)


def run_server(config: AppConfig, host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    from gold_catalog.webapp.main import create_app

    app = create_app(config)
    uvicorn.run(app, host=host or config.server.host, port=port or config.server.port)


def print_price(config: AppConfig) -> None:
    """Print the current gold price and where it came from."""
    adapter = build_price_adapter(config)
    info = adapter.get_price_info()
    print(f"Gold price: {info['price_per_gram']:.4f} USD/gram")
    print(f"Provider:   {info['provider']} ({info['source']})")


def print_products(config: AppConfig, args: argparse.Namespace) -> None:
    """Print the enriched, filtered catalog as JSON."""
    products = load_catalog(Path(config.catalog.path))
    service = CatalogService(products, build_price_adapter(config))
    filters = ProductFilters.from_query(
        price_min=args.price_min,
        price_max=args.price_max,
        pop_min=args.pop_min,
        pop_max=args.pop_max,
    )
    listing = service.list_products(filters)
    print(json.dumps(listing.to_dict(), indent=2))


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for CLI execution.

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    args = parse_args(argv)

    load_env()
    config = load_config(args.config)
    if args.verbose:
        config.logging.level = "DEBUG"

    setup_logging(
        level=config.logging.level,
        log_format=config.logging.format,
        log_file=Path(config.logging.file) if config.logging.file else None,
    )

    try:
        if args.command == "serve":
            run_server(config, args.host, args.port)
        elif args.command == "price":
            print_price(config)
        elif args.command == "products":
            print_products(config, args)
    except AppException as e:
        logger.error(f"{e.error_code}: {e.message}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
