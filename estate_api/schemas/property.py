"""
Pydantic schemas for property requests and responses.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal

MAX_PRICE = Decimal("9999999999.99")


def _clean_text(v: Optional[str], field: str) -> Optional[str]:
    if v is None:
        return v
    if not v.strip():
        raise ValueError(f"{field} cannot be empty")
    return v.strip()


class PropertyCreate(BaseModel):
    """
    Schema for creating a new property.
    Unknown fields, including any owner supplied by the caller, are ignored.
    """

    title: str = Field(..., min_length=1, max_length=255, description="Property listing title")
    city: str = Field(..., min_length=1, max_length=120, description="City, e.g. Yerevan")
    price: Decimal = Field(..., ge=0, le=MAX_PRICE, description="Asking price, zero allowed")
    image_url: Optional[str] = Field(None, max_length=2048, description="Image URL")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _clean_text(v, "Title")

    @field_validator("city")
    @classmethod
    def validate_city(cls, v):
        return _clean_text(v, "City")

    @field_validator("image_url")
    @classmethod
    def blank_image_is_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "Villa",
                "city": "Yerevan",
                "price": 100000,
                "image_url": "https://images.pexels.com/photos/106399/pexels-photo-106399.jpeg"
            }
        }
    }


class PropertyUpdate(BaseModel):
    """Schema for a partial property update. Only supplied fields are applied."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=120)
    price: Optional[Decimal] = Field(None, ge=0, le=MAX_PRICE)
    image_url: Optional[str] = Field(None, max_length=2048)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        return _clean_text(v, "Title")

    @field_validator("city")
    @classmethod
    def validate_city(cls, v):
        return _clean_text(v, "City")

    @model_validator(mode="after")
    def required_fields_not_null(self):
        """title, city and price may be omitted but not cleared."""
        for field in ("title", "city", "price"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class PropertyResponse(BaseModel):
    """Property row as returned by the API."""

    id: str
    title: str
    city: str
    price: float
    image_url: Optional[str] = None
    owner: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class PropertySummary(BaseModel):
    """Property fields embedded in inquiry listings."""

    id: str
    title: str
    city: str
    price: float
    image_url: Optional[str] = None
