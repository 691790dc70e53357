"""
API route handlers, mounted under the configured API prefix.
"""

from .auth import router as auth_router
from .properties import router as properties_router
from .inquiries import router as inquiries_router

__all__ = ["auth_router", "properties_router", "inquiries_router"]
