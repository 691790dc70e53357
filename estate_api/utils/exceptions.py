"""
Custom exception classes for the listings API.
Every failure a service can report maps to one of these, each with its HTTP status.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class InvalidInputError(APIException):
    """Missing or malformed required field."""

    def __init__(
        self,
        detail: str = "Missing required fields",
        field_errors: Optional[List[Dict[str, Any]]] = None
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="INVALID_INPUT"
        )
        self.field_errors = field_errors or []


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        detail = f"{resource} not found"
        if resource_id:
            detail += f" with ID: {resource_id}"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND"
        )


class UnauthorizedError(APIException):
    """No bearer token, or one that does not resolve to a user."""

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"}
        )


class ForbiddenError(APIException):
    """Authenticated, but not entitled to the resource."""

    def __init__(self, detail: str = "Forbidden"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="FORBIDDEN"
        )


class SelfInquiryError(APIException):
    """An owner tried to send an inquiry about their own property."""

    def __init__(self, detail: str = "You cannot send an inquiry to your own property"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="SELF_INQUIRY"
        )


class StoreError(APIException):
    """
    Failure reported by the record store, including constraint violations.
    The store's own message is passed through unchanged.
    """

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code="STORE_ERROR"
        )

    @classmethod
    def from_exception(cls, exc: Exception) -> "StoreError":
        """Build a StoreError carrying the driver-level message when there is one."""
        orig = getattr(exc, "orig", None)
        return cls(str(orig) if orig is not None else str(exc))


# Identity specific exceptions
class InvalidCredentialsError(APIException):
    """Login with an unknown email or a wrong password."""

    def __init__(self, detail: str = "Invalid login credentials"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="INVALID_CREDENTIALS"
        )


# Lookup specific exceptions
class PropertyNotFoundError(NotFoundError):
    """Property not found exception."""

    def __init__(self, property_id: str):
        super().__init__("Property", property_id)


class InquiryNotFoundError(NotFoundError):
    """Inquiry not found exception."""

    def __init__(self, inquiry_id: str):
        super().__init__("Inquiry", inquiry_id)
