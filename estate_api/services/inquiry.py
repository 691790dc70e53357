"""
Inquiry routing service.
Delivers inquiries to property owners and scopes every read and delete to
the two parties of an inquiry: its sender and the property owner.
"""

from typing import Optional, List, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as PydanticValidationError
from estate_api.repositories.inquiry import InquiryRepository
from estate_api.repositories.property import PropertyRepository
from estate_api.models.inquiry import Inquiry
from estate_api.schemas.inquiry import InquiryCreate
from estate_api.services.authorization import Action, InquiryScope, enforce, require_actor
from estate_api.services.property import invalid_input_from
from estate_api.utils.exceptions import (
    InquiryNotFoundError,
    PropertyNotFoundError,
    SelfInquiryError,
    StoreError
)
import uuid
import logging

logger = logging.getLogger(__name__)


class InquiryService:
    """
    Inquiry routing service.
    Handles sending, listing and deleting inquiries.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.inquiry_repo = InquiryRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def create_inquiry(
        self,
        actor: Optional[uuid.UUID],
        payload: Optional[Dict[str, Any]]
    ) -> Inquiry:
        """
        Send an inquiry about a property to its owner.

        Args:
            actor: Resolved user id of the sender
            payload: Raw request body with property and message

        Returns:
            Created inquiry

        Raises:
            UnauthorizedError: If the caller is anonymous
            InvalidInputError: If property or message is missing
            PropertyNotFoundError: If the property doesn't exist
            SelfInquiryError: If the caller owns the property
        """
        sender_id = require_actor(actor)

        try:
            inquiry_data = InquiryCreate.model_validate(payload or {})
        except PydanticValidationError as e:
            raise invalid_input_from(e)

        try:
            property_obj = await self.property_repo.get_by_id(inquiry_data.property)
        except SQLAlchemyError as e:
            raise StoreError.from_exception(e)

        if not property_obj:
            raise PropertyNotFoundError(str(inquiry_data.property))

        if property_obj.is_owned_by(sender_id):
            logger.info(f"Rejected self-inquiry by user {sender_id} on property {property_obj.id}")
            raise SelfInquiryError()

        try:
            inquiry = await self.inquiry_repo.create({
                "property_id": property_obj.id,
                "sender_id": sender_id,
                "message": inquiry_data.message,
            })
        except SQLAlchemyError as e:
            raise StoreError.from_exception(e)

        logger.info(f"Inquiry {inquiry.id} sent by user {sender_id} on property {property_obj.id}")
        return inquiry

    async def list_for_property(self, actor: Optional[uuid.UUID], property_id: uuid.UUID) -> List[Inquiry]:
        """
        Inquiries about one property. Only its owner may list them.

        Raises:
            UnauthorizedError: If the caller is anonymous
            ForbiddenError: If the caller doesn't own the property, or it doesn't exist
        """
        require_actor(actor)

        try:
            property_obj = await self.property_repo.get_by_id(property_id)
        except SQLAlchemyError as e:
            raise StoreError.from_exception(e)

        scope = InquiryScope(property_owner_id=property_obj.owner_id if property_obj else None)
        enforce(actor, Action.READ, scope, "Forbidden - You do not own this property")

        try:
            return await self.inquiry_repo.get_for_property(property_id)
        except SQLAlchemyError as e:
            raise StoreError.from_exception(e)

    async def list_for_user(self, actor: Optional[uuid.UUID], user_id: uuid.UUID) -> List[Inquiry]:
        """
        Inquiries sent by a user. Users can only list their own.

        Raises:
            UnauthorizedError: If the caller is anonymous
            ForbiddenError: If user_id is not the caller
        """
        require_actor(actor)
        enforce(actor, Action.READ, InquiryScope(sender_id=user_id),
                "Forbidden - You can only view your own inquiries")

        try:
            return await self.inquiry_repo.get_sent_by(user_id)
        except SQLAlchemyError as e:
            raise StoreError.from_exception(e)

    async def list_for_actor(self, actor: Optional[uuid.UUID]) -> List[Inquiry]:
        """
        Every inquiry the caller is party to: sent by them, or about a
        property they own. Newest first.

        Raises:
            UnauthorizedError: If the caller is anonymous
        """
        user_id = require_actor(actor)

        try:
            owned_ids = await self.property_repo.get_owned_ids(user_id)
            return await self.inquiry_repo.get_sent_or_received(user_id, owned_ids)
        except SQLAlchemyError as e:
            raise StoreError.from_exception(e)

    async def delete_inquiry(self, actor: Optional[uuid.UUID], inquiry_id: uuid.UUID) -> bool:
        """
        Delete an inquiry. Allowed for its sender and the property owner.

        Raises:
            UnauthorizedError: If the caller is anonymous
            InquiryNotFoundError: If the inquiry doesn't exist
            ForbiddenError: If the caller is neither sender nor owner
        """
        require_actor(actor)

        try:
            inquiry = await self.inquiry_repo.get_with_property(inquiry_id)
        except SQLAlchemyError as e:
            raise StoreError.from_exception(e)

        if not inquiry:
            raise InquiryNotFoundError(str(inquiry_id))

        enforce(actor, Action.WRITE, inquiry,
                "Forbidden - You are not authorized to delete this inquiry")

        try:
            deleted = await self.inquiry_repo.delete(inquiry_id)
        except SQLAlchemyError as e:
            raise StoreError.from_exception(e)

        if deleted:
            logger.info(f"Inquiry deleted by user {actor}: {inquiry_id}")

        return deleted
