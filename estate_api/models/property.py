"""
Property model for listings.
Each listing belongs to exactly one owner, who alone may change or remove it.
"""

from sqlalchemy import String, Numeric, ForeignKey, DateTime, CheckConstraint, Index, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column
from estate_api.database import Base, utcnow
from datetime import datetime
from decimal import Decimal
from typing import Optional
import uuid

# Fields an owner may change after creation
UPDATABLE_FIELDS = ("title", "city", "price", "image_url")


class Property(Base):
    """
    Property listing.
    The owner column is set once on creation and never updated.
    """

    __tablename__ = "properties"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_properties_price_non_negative"),
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Property listing title"
    )

    city: Mapped[str] = mapped_column(
        String(120),
        nullable=False,
        index=True,
        comment="City the property is located in"
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        comment="Asking price, non-negative"
    )

    image_url: Mapped[Optional[str]] = mapped_column(
        String(2048),
        nullable=True,
        comment="Reference to an externally hosted image"
    )

    owner_id: Mapped[uuid.UUID] = mapped_column(
        "owner",
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the user who owns this listing"
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, title={self.title[:30]}, price={self.price})>"

    def is_owned_by(self, user_id: Optional[uuid.UUID]) -> bool:
        return user_id is not None and self.owner_id == user_id

    def to_dict(self) -> dict:
        """
        Convert property to dictionary.

        Returns:
            Row representation with the owner id under "owner"
        """
        return {
            "id": str(self.id),
            "title": self.title,
            "city": self.city,
            "price": float(self.price),
            "image_url": self.image_url,
            "owner": str(self.owner_id),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def to_summary(self) -> dict:
        """Property summary embedded in inquiry listings."""
        return {
            "id": str(self.id),
            "title": self.title,
            "city": self.city,
            "price": float(self.price),
            "image_url": self.image_url,
        }


# Composite index for an owner's dashboard, newest first
owner_created_index = Index(
    "idx_properties_owner_created",
    Property.owner_id,
    Property.created_at.desc()
)
