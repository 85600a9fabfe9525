"""
==============================================================================
Core Package
==============================================================================

Core utilities and infrastructure for the application.

Modules:
--------
- exceptions: AppException class and error factory functions
- dependencies: FastAPI dependencies for category resolution, request
  body parsing and service wiring (import it directly, it depends on the
  services layer)

Usage:
------
    from pizzaria.core import AppException

    # Or use exception factory functions via module
    from pizzaria.core import exceptions
    raise exceptions.invalid_category("tacos")

==============================================================================
"""

from .exceptions import (
    AppException,
    register_exception_handlers,
)

__all__ = [
    "AppException",
    "register_exception_handlers",
]
