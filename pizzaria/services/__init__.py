"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

This package provides:
- CatalogService: product list/create/update/delete
- UploadSink: disk-backed image store

Architecture Pattern: Service Layer
----------------------------------

    ┌─────────────────┐
    │   API Router    │
    └────────┬────────┘
             │
    ┌────────▼────────┐      ┌─────────────────┐
    │ CatalogService  │─────▶│   UploadSink    │
    └────────┬────────┘      └─────────────────┘
             │
    ┌────────▼────────┐
    │  CatalogStore   │  ← In-memory collections
    └─────────────────┘

==============================================================================
"""

from .catalog_service import CatalogService
from .upload_service import UploadSink, create_upload_sink

__all__ = [
    "CatalogService",
    "UploadSink",
    "create_upload_sink",
]
