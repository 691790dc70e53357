"""
User repository for the identity service.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from estate_api.repositories.base import BaseRepository
from estate_api.models.user import User
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for user accounts."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to search for, compared case-insensitively

        Returns:
            User instance if found, None otherwise
        """
        try:
            normalized_email = email.lower().strip()
            result = await self.db.execute(select(User).where(User.email == normalized_email))
            user = result.scalar_one_or_none()

            if not user:
                logger.debug(f"User with email {email} not found")

            return user
        except Exception as e:
            logger.error(f"Failed to get user by email {email}: {e}")
            raise

    async def check_email_availability(self, email: str) -> bool:
        """Return True when no account uses this email yet."""
        return await self.get_by_email(email) is None
