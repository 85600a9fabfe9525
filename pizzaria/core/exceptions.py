"""
Application Exception Handling

Single AppException class for all application errors with FastAPI integration.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


# Module logger
logger = logging.getLogger(__name__)


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Provides consistent error response format across the entire API.

    Usage:
        raise AppException("Product not found", "PRODUCT_NOT_FOUND", 404)
        raise AppException("Invalid category", "INVALID_CATEGORY", 400, {"category": "tacos"})

    Error Codes:
        Catalog:
            - INVALID_CATEGORY (400)
            - VALIDATION_ERROR (400)
            - PRODUCT_NOT_FOUND (404)

        General:
            - STORE_NOT_INITIALIZED (500)
            - INTERNAL_ERROR (500)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "PRODUCT_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "message": self.message,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    FastAPI exception handler for AppException.

    Converts AppException to consistent JSON error response.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler so unexpected failures still answer with JSON."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error = internal_error()
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_dict()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def invalid_category(token: str) -> AppException:
    """Create invalid category exception."""
    return AppException(
        "Invalid product type",
        "INVALID_CATEGORY",
        400,
        {"category": token}
    )


def missing_fields(fields: Iterable[str]) -> AppException:
    """Create missing required fields exception."""
    names = list(fields)
    return AppException(
        f"Missing required fields: {', '.join(names)}",
        "VALIDATION_ERROR",
        400,
        {"fields": names}
    )


def image_required() -> AppException:
    """Create image required exception for new products."""
    return AppException(
        "An image is required for new products",
        "VALIDATION_ERROR",
        400,
        {"fields": ["imagemFile", "imagem"]}
    )


def invalid_price(value: str) -> AppException:
    """Create invalid price exception."""
    return AppException(
        f"Invalid price: {value!r}",
        "VALIDATION_ERROR",
        400,
        {"preco": value}
    )


def malformed_body(reason: str) -> AppException:
    """Create malformed request body exception."""
    return AppException(
        f"Malformed request body: {reason}",
        "VALIDATION_ERROR",
        400
    )


def product_not_found(category: str, product_id: str) -> AppException:
    """Create product not found exception."""
    return AppException(
        "Product not found",
        "PRODUCT_NOT_FOUND",
        404,
        {"category": category, "id": product_id}
    )


def store_not_initialized() -> AppException:
    """Create store not initialized exception."""
    return AppException(
        "Product store not initialized",
        "STORE_NOT_INITIALIZED",
        500
    )


def internal_error(message: str = "Internal server error") -> AppException:
    """Create internal server error exception."""
    return AppException(message, "INTERNAL_ERROR", 500)
