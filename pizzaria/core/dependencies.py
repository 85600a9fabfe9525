"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for the catalog endpoints.

This module implements:
- Category resolution from the path token
- Product body parsing (multipart, urlencoded or JSON)
- Store, upload sink and service wiring

Dependency Hierarchy:
--------------------
    ┌───────────────────┐   ┌───────────────────┐
    │ get_catalog_store │   │  get_upload_sink  │
    └─────────┬─────────┘   └─────────┬─────────┘
              └───────────┬───────────┘
                ┌─────────▼───────────┐
                │ get_catalog_service │
                └─────────────────────┘

Category resolution runs before anything reads the body or touches the
store, so an unknown category is rejected up front.

==============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import Depends, Request
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from pizzaria.catalog.models import Category, ProductFields
from pizzaria.catalog.store import CatalogStore, get_store
from pizzaria.core import exceptions
from pizzaria.services.catalog_service import CatalogService
from pizzaria.services.upload_service import UploadSink, create_upload_sink


# Module logger
logger = logging.getLogger(__name__)

# Multipart field carrying the image file
UPLOAD_FIELD = "imagemFile"

PRODUCT_FIELD_NAMES = ("nome", "descricao", "preco", "imagem")


# ============================================================================
# CATEGORY
# ============================================================================

async def get_category(category: str) -> Category:
    """
    Resolve the ``{category}`` path token.

    Raises:
        AppException: INVALID_CATEGORY for unknown tokens
    """
    resolved = Category.from_token(category)
    if resolved is None:
        logger.debug(f"Rejected category token: {category!r}")
        raise exceptions.invalid_category(category)
    return resolved


# ============================================================================
# REQUEST BODY
# ============================================================================

@dataclass
class ProductForm:
    """Parsed product request body."""

    fields: ProductFields
    upload: Optional[UploadFile] = None


async def read_product_form(request: Request) -> ProductForm:
    """
    Parse product fields and the optional image file from the body.

    Accepts ``multipart/form-data``, ``application/x-www-form-urlencoded``
    and JSON. An empty file part counts as no file.

    Raises:
        AppException: VALIDATION_ERROR for malformed bodies
    """
    content_type = request.headers.get("content-type", "").lower()
    values: Dict[str, Any] = {}
    upload: Optional[UploadFile] = None

    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            raise exceptions.malformed_body("invalid JSON")
        if not isinstance(payload, dict):
            raise exceptions.malformed_body("expected a JSON object")
        values = payload

    elif content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        form = await request.form()
        for key, value in form.items():
            if isinstance(value, str):
                values[key] = value

        candidate = form.get(UPLOAD_FIELD)
        if isinstance(candidate, UploadFile) and candidate.filename:
            upload = candidate

    try:
        fields = ProductFields.model_validate(
            {name: values[name] for name in PRODUCT_FIELD_NAMES if name in values}
        )
    except ValidationError as e:
        raise exceptions.malformed_body(
            ", ".join(str(error["loc"][0]) for error in e.errors())
        )

    return ProductForm(fields=fields, upload=upload)


# ============================================================================
# SERVICES
# ============================================================================

def get_catalog_store() -> CatalogStore:
    """
    Get the process-wide product store.

    Raises:
        AppException: STORE_NOT_INITIALIZED before application startup
    """
    store = get_store()
    if store is None:
        raise exceptions.store_not_initialized()
    return store


@lru_cache(maxsize=1)
def _default_upload_sink() -> UploadSink:
    return create_upload_sink()


def get_upload_sink() -> UploadSink:
    """Get the upload sink configured from settings."""
    return _default_upload_sink()


def get_catalog_service(
    store: CatalogStore = Depends(get_catalog_store),
    uploads: UploadSink = Depends(get_upload_sink)
) -> CatalogService:
    """Build the catalog service for a request."""
    return CatalogService(store, uploads)
