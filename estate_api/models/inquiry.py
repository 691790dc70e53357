"""
Inquiry model: a message from a prospective buyer or tenant to a property owner.
"""

from sqlalchemy import Text, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from estate_api.database import Base
from typing import Optional, TYPE_CHECKING
import uuid

if TYPE_CHECKING:
    from estate_api.models.property import Property
    from estate_api.models.user import User


class Inquiry(Base):
    """
    Inquiry addressed to the owner of a property.
    Inquiries are never mutated after creation; they are readable and
    removable by their sender and by the property owner.
    """

    __tablename__ = "inquiries"

    property_id: Mapped[uuid.UUID] = mapped_column(
        "property",
        Uuid(as_uuid=True),
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Property the inquiry is about"
    )

    sender_id: Mapped[uuid.UUID] = mapped_column(
        "sender",
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="User who sent the inquiry"
    )

    message: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Inquiry text"
    )

    # Relationships
    property_rel: Mapped["Property"] = relationship(
        "Property",
        lazy="selectin"
    )

    sender_rel: Mapped["User"] = relationship(
        "User",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Inquiry(id={self.id}, property={self.property_id}, sender={self.sender_id})>"

    @property
    def property_owner_id(self) -> Optional[uuid.UUID]:
        """Owner of the referenced property, if it is loaded."""
        return self.property_rel.owner_id if self.property_rel is not None else None

    def to_dict(self) -> dict:
        """Flat row representation returned on creation."""
        return {
            "id": str(self.id),
            "property": str(self.property_id),
            "sender": str(self.sender_id),
            "message": self.message,
            "created_at": self.created_at.isoformat(),
        }

    def to_detail_dict(self) -> dict:
        """Listing representation with embedded property and sender summaries."""
        return {
            "id": str(self.id),
            "message": self.message,
            "created_at": self.created_at.isoformat(),
            "property": self.property_rel.to_summary() if self.property_rel else None,
            "sender": self.sender_rel.to_summary() if self.sender_rel else None,
        }


# Composite index for a sender's inquiries, newest first
sender_created_index = Index(
    "idx_inquiries_sender_created",
    Inquiry.sender_id,
    Inquiry.created_at.desc()
)
