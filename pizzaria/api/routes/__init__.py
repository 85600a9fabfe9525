"""
==============================================================================
API Endpoints
==============================================================================

Routers:
--------
- products: Product list/create/update/delete per category
- health: Health check endpoints

==============================================================================
"""

from . import health, products

__all__ = ["health", "products"]
