"""
Service layer: authorization rules, catalog, inquiry routing, identity and error handling.
"""

from .identity import IdentityService
from .property import PropertyService
from .inquiry import InquiryService
from .error_handler import ErrorHandlerService

__all__ = [
    "IdentityService",
    "PropertyService",
    "InquiryService",
    "ErrorHandlerService"
]
