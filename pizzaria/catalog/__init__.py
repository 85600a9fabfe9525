"""
==============================================================================
Catalog Package - Product Storage
==============================================================================

Product models and the in-memory product store.

Classes:
--------
- Category: The two product categories
- Product: Pydantic model for products
- ProductFields: Incoming create/update payload
- CatalogStore: Per-category collections and id counters

==============================================================================
"""

from .models import Category, Product, ProductFields
from .store import CatalogStore, get_store, init_store

__all__ = [
    "Category",
    "Product",
    "ProductFields",
    "CatalogStore",
    "get_store",
    "init_store",
]
