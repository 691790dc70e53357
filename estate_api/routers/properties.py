"""
Property catalog endpoints.
Reads are public; creating, editing and deleting a listing require a bearer token.
"""

from fastapi import APIRouter, Body, Depends, Query, status
from typing import Any, Dict, List, Optional, Union
from uuid import UUID

from estate_api.services.property import PropertyService
from estate_api.schemas.property import PropertyResponse
from estate_api.schemas.error import get_error_responses
from estate_api.utils.dependencies import get_actor_id, get_property_service
from estate_api.utils.exceptions import InvalidInputError


router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get(
    "",
    response_model=Union[PropertyResponse, List[PropertyResponse]],
    summary="List or fetch properties",
    description="With `id`, return one property. With `ownerId`, return that owner's "
                "listings. Otherwise return the most recent listings.",
    responses=get_error_responses(400, 404, 500)
)
async def get_properties(
    property_id: Optional[UUID] = Query(None, alias="id", description="Property ID"),
    owner_id: Optional[UUID] = Query(None, alias="ownerId", description="Owner user ID"),
    property_service: PropertyService = Depends(get_property_service)
):
    """Public property reads, newest first."""
    if property_id is not None:
        property_obj = await property_service.get_property(property_id)
        return property_obj.to_dict()

    properties = await property_service.list_properties(owner_id=owner_id)
    return [p.to_dict() for p in properties]


@router.post(
    "",
    response_model=List[PropertyResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create property",
    description="Create a listing owned by the caller. Any owner in the body is ignored.",
    responses=get_error_responses(400, 401, 500)
)
async def create_property(
    payload: Optional[Dict[str, Any]] = Body(None, examples=[{
        "title": "Villa", "city": "Yerevan", "price": 100000, "image_url": None
    }]),
    actor: Optional[UUID] = Depends(get_actor_id),
    property_service: PropertyService = Depends(get_property_service)
):
    """
    Create a new property listing.

    Returns:
        One-element list holding the created row
    """
    property_obj = await property_service.create_property(actor, payload)
    return [property_obj.to_dict()]


@router.put(
    "",
    response_model=List[PropertyResponse],
    summary="Update property",
    description="Apply the supplied fields to a listing the caller owns.",
    responses=get_error_responses(400, 401, 403, 404, 500)
)
async def update_property(
    property_id: Optional[UUID] = Query(None, alias="id", description="Property ID"),
    payload: Optional[Dict[str, Any]] = Body(None),
    actor: Optional[UUID] = Depends(get_actor_id),
    property_service: PropertyService = Depends(get_property_service)
):
    if property_id is None:
        raise InvalidInputError("Missing property ID")

    property_obj = await property_service.update_property(actor, property_id, payload)
    return [property_obj.to_dict()]


@router.delete(
    "",
    summary="Delete property",
    description="Delete a listing the caller owns, together with its inquiries.",
    responses=get_error_responses(400, 401, 403, 404, 500)
)
async def delete_property(
    property_id: Optional[UUID] = Query(None, alias="id", description="Property ID"),
    actor: Optional[UUID] = Depends(get_actor_id),
    property_service: PropertyService = Depends(get_property_service)
) -> Dict[str, bool]:
    if property_id is None:
        raise InvalidInputError("Missing property ID")

    await property_service.delete_property(actor, property_id)
    return {"success": True}
