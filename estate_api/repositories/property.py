"""
Property repository for listing queries.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from estate_api.repositories.base import BaseRepository
from estate_api.models.property import Property
from typing import List
import uuid
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """Repository for property listings."""

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def get_recent(self, limit: int) -> List[Property]:
        """
        Get the most recently created properties.

        Args:
            limit: Hard cap on the number of rows returned

        Returns:
            Properties ordered by creation time, newest first
        """
        try:
            query = select(Property).order_by(Property.created_at.desc()).limit(limit)
            result = await self.db.execute(query)
            properties = list(result.scalars().all())
            logger.debug(f"Retrieved {len(properties)} recent properties")
            return properties
        except Exception as e:
            logger.error(f"Failed to get recent properties: {e}")
            raise

    async def get_by_owner(self, owner_id: uuid.UUID) -> List[Property]:
        """
        Get all properties owned by a user, newest first.
        """
        try:
            query = (
                select(Property)
                .where(Property.owner_id == owner_id)
                .order_by(Property.created_at.desc())
            )
            result = await self.db.execute(query)
            properties = list(result.scalars().all())
            logger.debug(f"Retrieved {len(properties)} properties for owner {owner_id}")
            return properties
        except Exception as e:
            logger.error(f"Failed to get properties for owner {owner_id}: {e}")
            raise

    async def get_owned_ids(self, owner_id: uuid.UUID) -> List[uuid.UUID]:
        """Get the ids of every property owned by a user."""
        try:
            result = await self.db.execute(
                select(Property.id).where(Property.owner_id == owner_id)
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed to get owned property ids for {owner_id}: {e}")
            raise
