"""
Pydantic schemas for inquiry requests and responses.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime
import uuid

from estate_api.schemas.property import PropertySummary


class InquiryCreate(BaseModel):
    """Schema for sending an inquiry about a property."""

    property: uuid.UUID = Field(..., description="ID of the property being asked about")
    message: str = Field(..., min_length=1, max_length=5000, description="Inquiry text")

    @field_validator("message")
    @classmethod
    def validate_message(cls, v):
        if not v or not v.strip():
            raise ValueError("Message cannot be empty")
        return v


class InquiryResponse(BaseModel):
    """Inquiry row as returned on creation."""

    id: str
    property: str
    sender: str
    message: str
    created_at: datetime


class SenderSummary(BaseModel):
    id: str
    email: str


class InquiryDetailResponse(BaseModel):
    """Inquiry with embedded property and sender, as returned by listings."""

    id: str
    message: str
    created_at: datetime
    property: Optional[PropertySummary] = None
    sender: Optional[SenderSummary] = None
