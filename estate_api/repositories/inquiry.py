"""
Inquiry repository.
Listing queries always load the referenced property and sender.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from sqlalchemy.orm import selectinload
from estate_api.repositories.base import BaseRepository
from estate_api.models.inquiry import Inquiry
from typing import List, Optional, Sequence
import uuid
import logging

logger = logging.getLogger(__name__)


class InquiryRepository(BaseRepository[Inquiry]):
    """Repository for inquiries."""

    def __init__(self, db: AsyncSession):
        super().__init__(Inquiry, db)

    def _detail_query(self):
        return (
            select(Inquiry)
            .options(selectinload(Inquiry.property_rel), selectinload(Inquiry.sender_rel))
            .order_by(Inquiry.created_at.desc())
        )

    async def _fetch(self, query) -> List[Inquiry]:
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_with_property(self, inquiry_id: uuid.UUID) -> Optional[Inquiry]:
        """Get an inquiry together with its property, for ownership checks."""
        try:
            query = (
                select(Inquiry)
                .options(selectinload(Inquiry.property_rel))
                .where(Inquiry.id == inquiry_id)
            )
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Failed to get inquiry {inquiry_id}: {e}")
            raise

    async def get_for_property(self, property_id: uuid.UUID) -> List[Inquiry]:
        """Inquiries about one property, newest first."""
        try:
            return await self._fetch(self._detail_query().where(Inquiry.property_id == property_id))
        except Exception as e:
            logger.error(f"Failed to get inquiries for property {property_id}: {e}")
            raise

    async def get_sent_by(self, sender_id: uuid.UUID) -> List[Inquiry]:
        """Inquiries sent by one user, newest first."""
        try:
            return await self._fetch(self._detail_query().where(Inquiry.sender_id == sender_id))
        except Exception as e:
            logger.error(f"Failed to get inquiries sent by {sender_id}: {e}")
            raise

    async def get_sent_or_received(
        self,
        user_id: uuid.UUID,
        owned_property_ids: Sequence[uuid.UUID]
    ) -> List[Inquiry]:
        """
        Inquiries sent by a user or addressed to any of their properties.

        With no owned properties only the sender condition is applied, so an
        empty id set can never widen or break the filter.
        """
        if owned_property_ids:
            condition = or_(
                Inquiry.sender_id == user_id,
                Inquiry.property_id.in_(list(owned_property_ids))
            )
        else:
            condition = Inquiry.sender_id == user_id

        try:
            return await self._fetch(self._detail_query().where(condition))
        except Exception as e:
            logger.error(f"Failed to get inquiries related to {user_id}: {e}")
            raise
