"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management using Pydantic Settings.

A single cached ``Settings`` instance is shared by the whole process.

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables (``PORT``, ``UPLOADS_DIRECTORY``, ...)
2. .env file
3. Default values

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Server port number (``PORT`` overrides it)
        uploads_directory: Directory holding uploaded images
        uploads_url_prefix: Public path under which uploads are served
        placeholder_marker: Substring marking images that are never deleted
        default_image: Image reference used when none is supplied
        upload_chunk_size: Bytes read per chunk while storing an upload
        cors_origins: Allowed CORS origins (JSON array string)

    Example:
        >>> settings = Settings()
        >>> settings.port
        3001
    """

    # =========================================================================
    # PYDANTIC SETTINGS CONFIGURATION
    # =========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Pizzaria Catalog API",
        description="Display name for the application"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

    port: int = Field(
        default=3001,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # UPLOAD SETTINGS
    # =========================================================================
    uploads_directory: str = Field(
        default="uploads",
        description="Directory holding uploaded product images"
    )

    uploads_url_prefix: str = Field(
        default="/uploads",
        description="Public path prefix for uploaded files"
    )

    placeholder_marker: str = Field(
        default="placeholder",
        min_length=1,
        description="Images whose reference contains this are never deleted"
    )

    default_image: str = Field(
        default="/uploads/placeholder-default.png",
        description="Image reference used when a product has none"
    )

    upload_chunk_size: int = Field(
        default=1024 * 1024,
        ge=1024,
        description="Bytes read per chunk while storing an upload"
    )

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """
        Validate and normalize application environment.

        Unknown values fall back to ``development``.
        """
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("uploads_url_prefix")
    @classmethod
    def validate_uploads_url_prefix(cls, value: str) -> str:
        """Normalize to a single leading slash and no trailing slash."""
        stripped = value.strip().strip("/")
        if not stripped:
            raise ValueError("uploads_url_prefix must not be empty")
        return f"/{stripped}"

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def uploads_path(self) -> Path:
        """
        Get uploads directory as Path object.

        Creates the directory (and parents) if it doesn't exist.
        """
        path = Path(self.uploads_directory)
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from JSON string to list."""
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
            return ["*"]
        except json.JSONDecodeError:
            logger.warning(
                f"Invalid CORS origins JSON: {self.cors_origins}, "
                "defaulting to ['*']"
            )
            return ["*"]

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================
    def ensure_directories(self) -> None:
        """Create the uploads directory if missing."""
        self.uploads_path.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Uploads directory ready: {self.uploads_path}")

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"port={self.port}, "
            f"uploads_directory={self.uploads_directory!r})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance.

    The uploads directory is created on first access so the static
    file mount and the upload sink can rely on it.

    Returns:
        Global Settings instance
    """
    settings = Settings()

    settings.ensure_directories()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
