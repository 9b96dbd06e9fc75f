"""Mini README: Product catalog for the storefront.

Exposes the ``Product`` record, the id-indexed ``Catalog`` that owns the
stock counters, and the ``stock_level`` badge helper used by views.
"""

from .products import LOW_STOCK_THRESHOLD, Catalog, Product, StockLevel, stock_level

__all__ = ["LOW_STOCK_THRESHOLD", "Catalog", "Product", "StockLevel", "stock_level"]
