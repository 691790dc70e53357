"""
FastAPI dependency injection utilities for authentication and service construction.
"""

from typing import Optional
import uuid
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from estate_api.database import get_db
from estate_api.models.user import User
from estate_api.services.identity import IdentityService
from estate_api.services.property import PropertyService
from estate_api.services.inquiry import InquiryService


# HTTP Bearer token security scheme; anonymous requests are allowed through
security = HTTPBearer(auto_error=False)


async def get_identity_service(db: AsyncSession = Depends(get_db)) -> IdentityService:
    """Get identity service instance."""
    return IdentityService(db)


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    """Get property service instance."""
    return PropertyService(db)


async def get_inquiry_service(db: AsyncSession = Depends(get_db)) -> InquiryService:
    """Get inquiry service instance."""
    return InquiryService(db)


async def get_actor_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    identity_service: IdentityService = Depends(get_identity_service)
) -> Optional[uuid.UUID]:
    """
    Resolve the calling user from the bearer token.

    Returns None for anonymous callers and for tokens that do not resolve,
    so the services can decide between public access and Unauthorized.
    """
    if not credentials:
        return None
    return await identity_service.resolve_user(credentials.credentials)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    identity_service: IdentityService = Depends(get_identity_service)
) -> User:
    """
    Get current authenticated user from the bearer token.

    Raises:
        UnauthorizedError: If no token is provided or it does not resolve
    """
    token = credentials.credentials if credentials else None
    return await identity_service.current_user(token)
