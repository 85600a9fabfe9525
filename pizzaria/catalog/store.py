"""
==============================================================================
Product Store Module
==============================================================================

Process-local storage for the product collections.

Features:
---------
- One ordered collection per category
- Independent, monotonically increasing id counter per category
- Per-category lock for read-modify-write sequences
- Seeded with two records per category on construction

Nothing is persisted: a restart brings the seed data back.

==============================================================================
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional

from .models import Category, Product


# Module logger
logger = logging.getLogger(__name__)


SEED_PRODUCTS: Dict[Category, List[Dict]] = {
    Category.PIZZA: [
        {
            "id": "1",
            "nome": "Calabresa Tradicional",
            "descricao": "Molho, mussarela, calabresa e cebola.",
            "preco": 30.00,
            "imagem": "/uploads/placeholder-pizza.png",
        },
        {
            "id": "2",
            "nome": "Marguerita Especial",
            "descricao": "Molho, mussarela, tomate e manjericão.",
            "preco": 28.00,
            "imagem": "/uploads/placeholder-pizza.png",
        },
    ],
    Category.BEBIDA: [
        {
            "id": "101",
            "nome": "Coca-Cola 2L",
            "descricao": "Refrigerante",
            "preco": 10.00,
            "imagem": "/uploads/placeholder-bebida.png",
        },
        {
            "id": "102",
            "nome": "Suco de Laranja 1L",
            "descricao": "Natural",
            "preco": 8.00,
            "imagem": "/uploads/placeholder-bebida.png",
        },
    ],
}

INITIAL_COUNTERS: Dict[Category, int] = {
    Category.PIZZA: 3,
    Category.BEBIDA: 103,
}


class CatalogStore:
    """
    In-memory product collections keyed by category.

    ``get`` hands out a copy of the collection; callers mutate the copy
    and swap it back in with ``replace`` while holding ``lock(category)``.

    Example:
        >>> store = CatalogStore()
        >>> [p.id for p in store.get(Category.PIZZA)]
        ['1', '2']
        >>> store.next_id(Category.PIZZA)
        '3'
    """

    def __init__(self, seed: bool = True) -> None:
        """
        Initialize the store.

        Args:
            seed: Load the initial records (False gives empty collections
                with the same starting counters)
        """
        self._collections: Dict[Category, List[Product]] = {
            category: [] for category in Category
        }
        self._counters: Dict[Category, int] = dict(INITIAL_COUNTERS)
        self._locks: Dict[Category, threading.RLock] = {
            category: threading.RLock() for category in Category
        }

        if seed:
            self._seed()

    def _seed(self) -> None:
        """Load the initial records."""
        for category, records in SEED_PRODUCTS.items():
            self._collections[category] = [Product(**record) for record in records]

        logger.debug(
            "Seeded store: "
            + ", ".join(f"{c.value}={len(p)}" for c, p in self._collections.items())
        )

    # =========================================================================
    # COLLECTION ACCESS
    # =========================================================================

    def get(self, category: Category) -> List[Product]:
        """Get the category's products in insertion order."""
        return list(self._collections[category])

    def replace(self, category: Category, products: List[Product]) -> None:
        """Swap in a whole new collection for the category."""
        self._collections[category] = list(products)

    def next_id(self, category: Category) -> str:
        """Read and advance the category's id counter."""
        with self._locks[category]:
            value = self._counters[category]
            self._counters[category] = value + 1
        return str(value)

    def lock(self, category: Category) -> threading.RLock:
        """Lock guarding read-modify-write on the category."""
        return self._locks[category]

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def images(self) -> List[str]:
        """All image references currently held, across categories."""
        return [
            product.imagem
            for products in self._collections.values()
            for product in products
        ]

    def stats(self) -> Dict[str, int]:
        """Record counts per category token."""
        return {
            category.token: len(products)
            for category, products in self._collections.items()
        }


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

_store_instance: Optional[CatalogStore] = None


def get_store() -> Optional[CatalogStore]:
    """Get the global store instance."""
    return _store_instance


def init_store(seed: bool = True) -> CatalogStore:
    """
    Initialize the global store instance.

    Args:
        seed: Load the initial records

    Returns:
        CatalogStore instance
    """
    global _store_instance
    _store_instance = CatalogStore(seed=seed)
    return _store_instance
