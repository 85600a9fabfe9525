"""
==============================================================================
Catalog Service Module
==============================================================================

Business logic for listing, creating, updating and deleting products.

This module implements:
- CatalogService: operations over one category's product collection
- Partial-update merge rules
- Image lifecycle (attach new, delete superseded, delete on removal)

Merge Rules (update):
--------------------
- nome:      replaced only when non-empty
- descricao: replaced whenever sent, an empty string clears it
- preco:     replaced only when non-empty and non-zero
- imagem:    a new upload wins, else an explicit reference, else unchanged

Image Lifecycle:
---------------
An uploaded image is removed from disk once no product in the store
references it anymore. Placeholder images are never removed.

==============================================================================
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional

from pizzaria.catalog.models import Category, Product, ProductFields
from pizzaria.catalog.store import CatalogStore
from pizzaria.config import get_settings
from pizzaria.core import exceptions
from pizzaria.services.upload_service import UploadSink


# Module logger
logger = logging.getLogger(__name__)


class CatalogService:
    """
    Product catalog operations.

    Every mutating operation runs under the category's store lock so a
    read-modify-write never interleaves with another one on the same
    collection.

    Attributes:
        _store: Product collections and id counters
        _uploads: Upload sink used to remove superseded images
        _default_image: Reference used when no image is given

    Example:
        >>> service = CatalogService(store, sink)
        >>> product = service.create_product(
        ...     Category.PIZZA,
        ...     ProductFields(nome="Frango", preco="25.0"),
        ...     image_reference="/uploads/1718000000123-frango.png",
        ... )
        >>> product.id
        '3'
    """

    def __init__(
        self,
        store: CatalogStore,
        uploads: UploadSink,
        default_image: Optional[str] = None
    ) -> None:
        """
        Initialize the catalog service.

        Args:
            store: Product store
            uploads: Upload sink for image cleanup
            default_image: Placeholder reference (uses settings if None)
        """
        self._store = store
        self._uploads = uploads
        self._default_image = default_image or get_settings().default_image

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def list_products(self, category: Category) -> List[Product]:
        """Get all products of a category in stored order."""
        return self._store.get(category)

    # =========================================================================
    # CREATE OPERATIONS
    # =========================================================================

    def create_product(
        self,
        category: Category,
        fields: ProductFields,
        image_reference: Optional[str] = None
    ) -> Product:
        """
        Create a product at the end of the category's collection.

        Args:
            category: Target category
            fields: Request fields (nome and preco required)
            image_reference: Reference of a freshly stored upload

        Returns:
            Created Product

        Raises:
            AppException: VALIDATION_ERROR on missing fields, missing
                image or an unparseable price
        """
        missing = [name for name in ("nome", "preco") if not getattr(fields, name)]
        if missing:
            raise exceptions.missing_fields(missing)

        if image_reference is None and not fields.provided("imagem"):
            raise exceptions.image_required()

        price = self.parse_price(fields.preco)
        image = image_reference or fields.imagem or self._default_image

        with self._store.lock(category):
            product = Product(
                id=self._store.next_id(category),
                nome=fields.nome,
                descricao=fields.descricao or "",
                preco=price,
                imagem=image,
            )
            products = self._store.get(category)
            products.append(product)
            self._store.replace(category, products)

        logger.info(f"✅ Created {category.value} {product.id}: {product.nome}")
        return product

    # =========================================================================
    # UPDATE OPERATIONS
    # =========================================================================

    def update_product(
        self,
        category: Category,
        product_id: str,
        fields: ProductFields,
        image_reference: Optional[str] = None
    ) -> Product:
        """
        Merge request fields into an existing product.

        Args:
            category: Category holding the product
            product_id: Product identifier
            fields: Request fields, all optional
            image_reference: Reference of a freshly stored upload

        Returns:
            Updated Product

        Raises:
            AppException: PRODUCT_NOT_FOUND if the id is unknown,
                VALIDATION_ERROR on an unparseable price
        """
        with self._store.lock(category):
            products = self._store.get(category)
            index = self._find_index(category, products, product_id)
            current = products[index]

            changes = {}
            if fields.nome:
                changes["nome"] = fields.nome
            if fields.provided("descricao"):
                changes["descricao"] = fields.descricao
            if fields.preco:
                price = self.parse_price(fields.preco)
                if price:
                    changes["preco"] = price

            if image_reference:
                changes["imagem"] = image_reference
            elif fields.imagem:
                changes["imagem"] = fields.imagem

            updated = current.model_copy(update=changes)
            products[index] = updated
            self._store.replace(category, products)

            if updated.imagem != current.imagem:
                self._release_image(current.imagem)

        logger.info(
            f"✏️ Updated {category.value} {product_id}: {', '.join(changes) or 'no changes'}"
        )
        return updated

    # =========================================================================
    # DELETE OPERATIONS
    # =========================================================================

    def delete_product(self, category: Category, product_id: str) -> None:
        """
        Remove a product and its uploaded image.

        Raises:
            AppException: PRODUCT_NOT_FOUND if the id is unknown
        """
        with self._store.lock(category):
            products = self._store.get(category)
            index = self._find_index(category, products, product_id)
            removed = products.pop(index)
            self._store.replace(category, products)
            self._release_image(removed.imagem)

        logger.info(f"🗑️ Deleted {category.value} {product_id}: {removed.nome}")

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def parse_price(value: str) -> float:
        """
        Parse a price sent as text.

        Raises:
            AppException: VALIDATION_ERROR if not a finite number >= 0
        """
        try:
            price = float(value.strip().replace(",", "."))
        except (AttributeError, ValueError):
            raise exceptions.invalid_price(value)

        if not math.isfinite(price) or price < 0:
            raise exceptions.invalid_price(value)

        return price

    def discard_upload(self, image_reference: Optional[str]) -> None:
        """Remove an upload stored for a request that then failed."""
        if image_reference:
            self._uploads.delete(image_reference)

    def _find_index(
        self,
        category: Category,
        products: List[Product],
        product_id: str
    ) -> int:
        for index, product in enumerate(products):
            if product.id == product_id:
                return index
        raise exceptions.product_not_found(category.token, product_id)

    def _release_image(self, reference: str) -> None:
        # Shared references stay until the last product using them goes.
        if reference in self._store.images():
            return
        self._uploads.delete(reference)
