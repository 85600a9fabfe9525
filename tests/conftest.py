"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides a temporary uploads directory, a freshly seeded store per test,
the catalog service and an API client wired to that store.

==============================================================================
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Settings are cached on first import, so point uploads somewhere
# disposable before the application is imported.
UPLOADS_DIR = Path(tempfile.mkdtemp(prefix="pizzaria-uploads-"))
os.environ["UPLOADS_DIRECTORY"] = str(UPLOADS_DIR)
os.environ["DEBUG"] = "false"

from fastapi.testclient import TestClient  # noqa: E402

from pizzaria.main import app  # noqa: E402
from pizzaria.catalog.store import CatalogStore  # noqa: E402
from pizzaria.core.dependencies import get_catalog_store, get_upload_sink  # noqa: E402
from pizzaria.services.catalog_service import CatalogService  # noqa: E402
from pizzaria.services.upload_service import UploadSink  # noqa: E402


DEFAULT_IMAGE = "/uploads/placeholder-default.png"


# ============================================================================
# STORAGE FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def clean_uploads() -> Generator[None, None, None]:
    """Empty the uploads directory after each test."""
    yield
    for entry in UPLOADS_DIR.iterdir():
        if entry.is_dir():
            shutil.rmtree(entry)
        else:
            entry.unlink()


@pytest.fixture
def store() -> CatalogStore:
    """A store holding only the seed records."""
    return CatalogStore()


@pytest.fixture
def uploads() -> UploadSink:
    """The application's upload sink (temporary directory)."""
    return get_upload_sink()


@pytest.fixture
def service(store: CatalogStore, uploads: UploadSink) -> CatalogService:
    """Catalog service over the per-test store."""
    return CatalogService(store, uploads, default_image=DEFAULT_IMAGE)


@pytest.fixture
def stored_image(uploads: UploadSink):
    """Factory writing a file into the uploads directory, returning its reference."""
    def _make(filename: str, content: bytes = b"image-bytes") -> str:
        (uploads.directory / filename).write_bytes(content)
        return uploads.reference_for(filename)
    return _make


# ============================================================================
# CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def client(store: CatalogStore) -> Generator[TestClient, None, None]:
    """Test client bound to the per-test store."""
    app.dependency_overrides[get_catalog_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def upload_path():
    """Map an upload reference to its file on disk."""
    def _path(reference: str) -> Path:
        return UPLOADS_DIR / reference.rsplit("/", 1)[-1]
    return _path
