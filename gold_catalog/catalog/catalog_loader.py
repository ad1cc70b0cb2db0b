"""
Catalog loader module.

Reads the static product list from a JSON file once at start-up and
validates every entry.
"""

import json
import logging
import math
from pathlib import Path
from typing import Any

from gold_catalog.catalog.models import IMAGE_COLORS, Product
from gold_catalog.exceptions import CatalogError

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def validate_entry(entry: Any, index: int, path: str | None = None) -> None:
    """
    Validate a single catalog entry.

    Args:
        entry: Raw JSON value.
        index: Position in the catalog array (for error messages).
        path: Catalog file path (for error messages).

    Raises:
        CatalogError: If the entry does not match the catalog schema.
    """
    if not isinstance(entry, dict):
        raise CatalogError(f"Catalog entry {index} is not an object", path=path, index=index)

    name = entry.get("name")
    if not isinstance(name, str) or not name.strip():
        raise CatalogError(f"Catalog entry {index} has no name", path=path, index=index)

    weight = entry.get("weight")
    if not _is_number(weight) or weight <= 0:
        raise CatalogError(
            f"Catalog entry {index} ({name}) has invalid weight: {weight!r}", path=path, index=index
        )

    score = entry.get("popularityScore")
    if not _is_number(score) or not 0 <= score <= 1:
        raise CatalogError(
            f"Catalog entry {index} ({name}) has popularityScore outside [0, 1]: {score!r}",
            path=path,
            index=index,
        )

    images = entry.get("images", {})
    if not isinstance(images, dict):
        raise CatalogError(f"Catalog entry {index} ({name}) images must be an object", path=path, index=index)
    unknown = sorted(set(images) - set(IMAGE_COLORS))
    if unknown:
        raise CatalogError(
            f"Catalog entry {index} ({name}) has unknown image colours: {', '.join(unknown)}",
            path=path,
            index=index,
        )
    if not all(isinstance(url, str) for url in images.values()):
        raise CatalogError(f"Catalog entry {index} ({name}) image references must be strings", path=path, index=index)


def parse_catalog(raw: Any, path: str | None = None) -> list[Product]:
    """
    Parse and validate a decoded catalog document.

    Args:
        raw: Decoded JSON (expected to be an array of products).
        path: Source path for error messages.

    Returns:
        List of Product in catalog order.

    Raises:
        CatalogError: If the document or any entry is invalid.
    """
    if not isinstance(raw, list):
        raise CatalogError("Catalog must be a JSON array of products", path=path)

    products = []
    for index, entry in enumerate(raw):
        validate_entry(entry, index, path)
        products.append(Product.from_dict(entry, default_id=index + 1))
    return products


def load_catalog(path: Path | str) -> list[Product]:
    """
    Load the product catalog from a JSON file.

    Args:
        path: Path to the catalog JSON file.

    Returns:
        List of Product in file order.

    Raises:
        CatalogError: If the file is missing, unreadable or invalid.
    """
    path = Path(path)
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}", path=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog file is not valid JSON: {e}", path=str(path)) from e

    products = parse_catalog(raw, str(path))
    logger.info(f"Loaded {len(products)} products from {path}")
    return products
