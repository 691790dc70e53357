"""
User model backing the identity service.
Accounts are created on registration and never mutated by the catalog.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from estate_api.database import Base
from passlib.context import CryptContext
from email_validator import validate_email, EmailNotValidError

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class User(Base):
    """
    User account. Owns properties and sends inquiries.
    Deleting a user cascades to both through the foreign keys.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User email address - must be unique and valid"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"

    @classmethod
    def validate_email_format(cls, email: str) -> str:
        """
        Validate email format using email-validator.

        Args:
            email: Email address to validate

        Returns:
            Normalized email address

        Raises:
            ValueError: If email format is invalid
        """
        try:
            valid_email = validate_email(email, check_deliverability=False)
            return valid_email.normalized.lower()
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email format: {str(e)}")

    @classmethod
    def hash_password(cls, password: str, min_length: int = 6) -> str:
        """
        Hash a password using bcrypt.

        Raises:
            ValueError: If the password is shorter than min_length
        """
        if not password or len(password) < min_length:
            raise ValueError(f"Password must be at least {min_length} characters long")

        return pwd_context.hash(password)

    def verify_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""
        return pwd_context.verify(password, self.hashed_password)

    def to_dict(self) -> dict:
        """Public representation, never includes the password hash."""
        return {
            "id": str(self.id),
            "email": self.email,
            "created_at": self.created_at.isoformat(),
        }

    def to_summary(self) -> dict:
        """Sender summary embedded in inquiry listings."""
        return {
            "id": str(self.id),
            "email": self.email,
        }
