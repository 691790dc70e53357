"""
Property catalog service.
Public reads and owner-only writes over property listings.
"""

from typing import Optional, List, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as PydanticValidationError
from estate_api.config import settings
from estate_api.repositories.property import PropertyRepository
from estate_api.models.property import Property, UPDATABLE_FIELDS
from estate_api.schemas.property import PropertyCreate, PropertyUpdate
from estate_api.services.authorization import Action, enforce, require_actor
from estate_api.utils.exceptions import (
    InvalidInputError,
    PropertyNotFoundError,
    StoreError
)
import uuid
import logging

logger = logging.getLogger(__name__)

OWNERSHIP_DENIED = "Forbidden - You do not own this property"


def invalid_input_from(exc: PydanticValidationError) -> InvalidInputError:
    """Turn a payload validation failure into an InvalidInputError with field details."""
    details = [
        {
            "field": " -> ".join(str(loc) for loc in error["loc"]) or None,
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    missing = any(error["type"] == "missing" for error in exc.errors())
    message = "Missing required fields" if missing else "Invalid field values"
    return InvalidInputError(message, field_errors=details)


class PropertyService:
    """
    Property catalog service.
    Every write is checked against the authorization rules before it reaches the store.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)

    async def list_properties(
        self,
        owner_id: Optional[uuid.UUID] = None,
        limit: Optional[int] = None
    ) -> List[Property]:
        """
        List properties, newest first.

        Args:
            owner_id: Restrict to one owner's listings (dashboard view)
            limit: Cap for the unfiltered feed, defaults to the configured feed size

        Returns:
            Properties ordered by creation time descending
        """
        try:
            if owner_id is not None:
                return await self.property_repo.get_by_owner(owner_id)
            return await self.property_repo.get_recent(settings.feed_limit if limit is None else limit)
        except SQLAlchemyError as e:
            raise StoreError.from_exception(e)

    async def get_property(self, property_id: uuid.UUID) -> Property:
        """
        Get a single property. Public.

        Raises:
            PropertyNotFoundError: If no property has this id
        """
        try:
            property_obj = await self.property_repo.get_by_id(property_id)
        except SQLAlchemyError as e:
            raise StoreError.from_exception(e)

        if not property_obj:
            raise PropertyNotFoundError(str(property_id))

        return property_obj

    async def create_property(
        self,
        actor: Optional[uuid.UUID],
        payload: Optional[Dict[str, Any]]
    ) -> Property:
        """
        Create a listing owned by the caller.

        Args:
            actor: Resolved user id of the caller
            payload: Raw request body with title, city, price and optional image_url

        Returns:
            Created property instance

        Raises:
            UnauthorizedError: If the caller is anonymous
            InvalidInputError: If title, city or price is missing or malformed
        """
        owner_id = require_actor(actor)

        try:
            property_data = PropertyCreate.model_validate(payload or {})
        except PydanticValidationError as e:
            raise invalid_input_from(e)

        # Owner always comes from the token, never from the payload
        create_data = property_data.model_dump()
        create_data["owner_id"] = owner_id

        try:
            property_obj = await self.property_repo.create(create_data)
        except SQLAlchemyError as e:
            raise StoreError.from_exception(e)

        logger.info(f"Property created by user {owner_id}: {property_obj.title} (ID: {property_obj.id})")
        return property_obj

    async def update_property(
        self,
        actor: Optional[uuid.UUID],
        property_id: uuid.UUID,
        payload: Optional[Dict[str, Any]]
    ) -> Property:
        """
        Apply a partial update to a listing the caller owns.

        Raises:
            UnauthorizedError: If the caller is anonymous
            PropertyNotFoundError: If the property doesn't exist
            ForbiddenError: If the caller is not the owner
            InvalidInputError: If a supplied field is invalid
        """
        require_actor(actor)
        existing = await self.get_property(property_id)
        enforce(actor, Action.WRITE, existing, OWNERSHIP_DENIED)

        try:
            update_schema = PropertyUpdate.model_validate(payload or {})
        except PydanticValidationError as e:
            raise invalid_input_from(e)

        update_data = {
            field: value
            for field, value in update_schema.model_dump(exclude_unset=True).items()
            if field in UPDATABLE_FIELDS
        }

        if not update_data:
            logger.debug(f"No updatable fields supplied for property {property_id}")
            return existing

        try:
            updated = await self.property_repo.update(existing, update_data)
        except SQLAlchemyError as e:
            raise StoreError.from_exception(e)

        logger.info(f"Property updated by user {actor}: {property_id} ({', '.join(update_data)})")
        return updated

    async def delete_property(self, actor: Optional[uuid.UUID], property_id: uuid.UUID) -> bool:
        """
        Delete a listing the caller owns. Its inquiries go with it.

        Raises:
            UnauthorizedError: If the caller is anonymous
            PropertyNotFoundError: If the property doesn't exist
            ForbiddenError: If the caller is not the owner
        """
        require_actor(actor)
        existing = await self.get_property(property_id)
        enforce(actor, Action.WRITE, existing, OWNERSHIP_DENIED)

        try:
            deleted = await self.property_repo.delete(property_id)
        except SQLAlchemyError as e:
            raise StoreError.from_exception(e)

        if deleted:
            logger.info(f"Property deleted by user {actor}: {property_id}")

        return deleted
