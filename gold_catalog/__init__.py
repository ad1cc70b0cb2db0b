"""
Gold Catalog API.

Serves a static jewellery catalog priced from the live gold spot price.
"""

__version__ = "1.0.0"
