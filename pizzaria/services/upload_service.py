"""
==============================================================================
Upload Service Module
==============================================================================

Disk-backed store for uploaded product images.

This module implements:
- UploadSink: stores incoming files and removes superseded ones

File Naming:
-----------
<epoch-millis>-<original-name-with-whitespace-as-hyphens>

    "foto da pizza.png" uploaded at 1718000000123
    -> uploads/1718000000123-foto-da-pizza.png
    -> reference "/uploads/1718000000123-foto-da-pizza.png"

Deletion Rules:
--------------
Only references under the public uploads prefix are ever removed, and
never one containing the placeholder marker. Removal is best-effort:
failures are logged and swallowed.

==============================================================================
"""

from __future__ import annotations

import logging
import re
import time
from pathlib import Path, PurePosixPath
from typing import Optional

import aiofiles
from starlette.datastructures import UploadFile

from pizzaria.config import get_settings


# Module logger
logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


class UploadSink:
    """
    Directory-backed store for uploaded images.

    Attributes:
        _directory: Directory files are written to
        _url_prefix: Public path prefix (e.g. "/uploads")
        _placeholder_marker: Substring of references never deleted
        _chunk_size: Bytes read per chunk from the incoming stream

    Example:
        >>> sink = UploadSink(Path("uploads"))
        >>> reference = await sink.store(upload_file)
        >>> sink.delete(reference)
        True
    """

    def __init__(
        self,
        directory: Path,
        url_prefix: str = "/uploads",
        placeholder_marker: str = "placeholder",
        chunk_size: int = 1024 * 1024
    ) -> None:
        self._directory = Path(directory)
        self._url_prefix = "/" + url_prefix.strip("/")
        self._placeholder_marker = placeholder_marker
        self._chunk_size = chunk_size
        self._directory.mkdir(parents=True, exist_ok=True)

    @property
    def directory(self) -> Path:
        """Directory holding the uploads."""
        return self._directory

    # =========================================================================
    # NAMING
    # =========================================================================

    @staticmethod
    def build_filename(original_name: str, timestamp_ms: Optional[int] = None) -> str:
        """
        Derive the stored filename for an upload.

        Directory components sent by the client are dropped and every run
        of whitespace becomes a single hyphen.
        """
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        basename = PurePosixPath(original_name.replace("\\", "/")).name
        return f"{timestamp_ms}-{_WHITESPACE.sub('-', basename)}"

    def reference_for(self, filename: str) -> str:
        """Public reference for a stored filename."""
        return f"{self._url_prefix}/{filename}"

    # =========================================================================
    # STORE
    # =========================================================================

    async def store(self, upload: UploadFile) -> str:
        """
        Drain an uploaded file to disk.

        Args:
            upload: Incoming multipart file

        Returns:
            Public reference of the stored file
        """
        filename = self.build_filename(upload.filename or "upload")
        target = self._directory / filename

        size = 0
        async with aiofiles.open(target, "wb") as out:
            while True:
                chunk = await upload.read(self._chunk_size)
                if not chunk:
                    break
                size += len(chunk)
                await out.write(chunk)

        reference = self.reference_for(filename)
        logger.info(f"📥 Stored upload {reference} ({size} bytes)")
        return reference

    # =========================================================================
    # LOOKUP & DELETE
    # =========================================================================

    def is_deletable(self, reference: Optional[str]) -> bool:
        """True for non-placeholder references under the uploads prefix."""
        if not reference:
            return False
        if not reference.startswith(self._url_prefix + "/"):
            return False
        return self._placeholder_marker not in reference

    def resolve(self, reference: str) -> Optional[Path]:
        """
        Map a reference to its file inside the uploads directory.

        Returns None when the reference is not under the prefix or would
        escape the directory.
        """
        if not reference.startswith(self._url_prefix + "/"):
            return None

        relative = reference[len(self._url_prefix) + 1:]
        root = self._directory.resolve()
        path = (root / relative).resolve()

        if path == root or root not in path.parents:
            return None
        return path

    def exists(self, reference: str) -> bool:
        """Check whether a reference points at an existing upload."""
        path = self.resolve(reference)
        return path is not None and path.is_file()

    def delete(self, reference: Optional[str]) -> bool:
        """
        Best-effort removal of an uploaded file.

        Placeholders and references outside the uploads prefix are left
        alone. Filesystem errors are logged, never raised.

        Returns:
            True if a file was removed
        """
        if not self.is_deletable(reference):
            return False

        path = self.resolve(reference)
        if path is None:
            logger.warning(f"⚠️ Refusing to delete outside uploads directory: {reference}")
            return False

        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning(f"⚠️ Image already absent: {reference}")
            return False
        except OSError as e:
            logger.warning(f"⚠️ Could not delete image {reference}: {e}")
            return False

        logger.info(f"🗑️ Deleted image {reference}")
        return True


def create_upload_sink() -> UploadSink:
    """Build an UploadSink from application settings."""
    settings = get_settings()
    return UploadSink(
        directory=settings.uploads_path,
        url_prefix=settings.uploads_url_prefix,
        placeholder_marker=settings.placeholder_marker,
        chunk_size=settings.upload_chunk_size,
    )
