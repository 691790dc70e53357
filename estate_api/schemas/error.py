"""
Error response schemas for API documentation.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(None, description="Field name that caused the error", examples=["price"])
    message: str = Field(..., description="Human-readable error message")
    type: Optional[str] = Field(None, description="Error type identifier")


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(..., description="Error code identifier", examples=["FORBIDDEN"])
    message: str = Field(..., description="Human-readable error message")
    timestamp: str = Field(..., description="Error timestamp in ISO format")
    request_id: Optional[str] = Field(None, description="Unique request identifier for tracking")
    details: Optional[List[ErrorDetail]] = None


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse


def _response(description: str, code: str, message: str) -> Dict[str, Any]:
    return {
        "description": description,
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": code,
                        "message": message,
                        "timestamp": "2024-01-01T00:00:00Z",
                        "request_id": "abc12345"
                    }
                }
            }
        }
    }


ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: _response("Invalid input", "INVALID_INPUT", "Missing required fields"),
    401: _response("Unauthorized", "UNAUTHORIZED", "Unauthorized"),
    403: _response("Forbidden", "FORBIDDEN", "Forbidden - You do not own this property"),
    404: _response("Not Found", "NOT_FOUND", "Property not found"),
    500: _response("Store error", "STORE_ERROR", "Record store failure"),
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """Pick documented error responses for a route."""
    return {code: ERROR_RESPONSES[code] for code in status_codes if code in ERROR_RESPONSES}
