"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Response schemas shared by the API endpoints.

==============================================================================
"""

from .common import MessageResponse

__all__ = [
    "MessageResponse",
]
