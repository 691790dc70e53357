"""
Pydantic schemas for request/response validation.
"""

from .auth import (
    AuthRequest,
    LogoutRequest,
    UserResponse,
    SessionResponse,
    RegisterResponse,
    LoginResponse,
    CurrentUserResponse
)

from .property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertySummary
)

from .inquiry import (
    InquiryCreate,
    InquiryResponse,
    InquiryDetailResponse,
    SenderSummary
)

__all__ = [
    "AuthRequest",
    "LogoutRequest",
    "UserResponse",
    "SessionResponse",
    "RegisterResponse",
    "LoginResponse",
    "CurrentUserResponse",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
    "PropertySummary",
    "InquiryCreate",
    "InquiryResponse",
    "InquiryDetailResponse",
    "SenderSummary"
]
