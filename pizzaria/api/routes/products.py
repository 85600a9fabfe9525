"""
==============================================================================
Product Catalog Endpoints
==============================================================================

List, create, update and delete products of one category.

    GET    /api/{category}
    POST   /api/{category}
    PUT    /api/{category}/{product_id}
    DELETE /api/{category}/{product_id}

``{category}`` is the plural token (``pizzas`` or ``bebidas``). Bodies
carry ``nome``, ``descricao``, ``preco``, ``imagem`` and an optional
``imagemFile`` upload.

==============================================================================
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from pizzaria.catalog.models import Category, Product
from pizzaria.core import exceptions
from pizzaria.core.dependencies import (
    ProductForm,
    get_catalog_service,
    get_category,
    get_upload_sink,
    read_product_form,
)
from pizzaria.schemas.common import MessageResponse
from pizzaria.services.catalog_service import CatalogService
from pizzaria.services.upload_service import UploadSink


# Module logger
logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])


class ProductController:
    """Controller for product catalog operations."""

    def __init__(self, service: CatalogService, uploads: UploadSink):
        self._service = service
        self._uploads = uploads

    def list_products(self, category: Category) -> List[Product]:
        """List a category's products."""
        return self._service.list_products(category)

    async def create_product(self, category: Category, form: ProductForm) -> Product:
        """Store the upload, then create the product."""
        reference = await self._store_upload(form)
        try:
            return self._service.create_product(category, form.fields, reference)
        except exceptions.AppException:
            self._service.discard_upload(reference)
            raise

    async def update_product(
        self,
        category: Category,
        product_id: str,
        form: ProductForm
    ) -> Product:
        """Store the upload, then merge it into the product."""
        reference = await self._store_upload(form)
        try:
            return self._service.update_product(category, product_id, form.fields, reference)
        except exceptions.AppException:
            self._service.discard_upload(reference)
            raise

    def delete_product(self, category: Category, product_id: str) -> MessageResponse:
        """Delete a product."""
        self._service.delete_product(category, product_id)
        return MessageResponse(message="Product deleted successfully")

    async def _store_upload(self, form: ProductForm) -> Optional[str]:
        if form.upload is None:
            return None
        try:
            return await self._uploads.store(form.upload)
        finally:
            await form.upload.close()


@router.get("/{category}", response_model=List[Product])
async def list_products(
    category: Category = Depends(get_category),
    service: CatalogService = Depends(get_catalog_service),
    uploads: UploadSink = Depends(get_upload_sink)
):
    """List all products of a category in insertion order."""
    controller = ProductController(service, uploads)
    return controller.list_products(category)


@router.post("/{category}", response_model=Product, status_code=201)
async def create_product(
    category: Category = Depends(get_category),
    form: ProductForm = Depends(read_product_form),
    service: CatalogService = Depends(get_catalog_service),
    uploads: UploadSink = Depends(get_upload_sink)
):
    """Create a product; nome, preco and an image are required."""
    controller = ProductController(service, uploads)
    return await controller.create_product(category, form)


@router.put("/{category}/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    category: Category = Depends(get_category),
    form: ProductForm = Depends(read_product_form),
    service: CatalogService = Depends(get_catalog_service),
    uploads: UploadSink = Depends(get_upload_sink)
):
    """Update the fields sent in the request."""
    controller = ProductController(service, uploads)
    return await controller.update_product(category, product_id, form)


@router.delete("/{category}/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    category: Category = Depends(get_category),
    service: CatalogService = Depends(get_catalog_service),
    uploads: UploadSink = Depends(get_upload_sink)
):
    """Delete a product and its uploaded image."""
    controller = ProductController(service, uploads)
    return controller.delete_product(category, product_id)
