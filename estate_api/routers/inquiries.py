"""
Inquiry endpoints.
Every route requires a bearer token; results are limited to inquiries the caller sent or received.
"""

from fastapi import APIRouter, Body, Depends, Query, status
from typing import Any, Dict, List, Optional
from uuid import UUID

from estate_api.services.inquiry import InquiryService
from estate_api.schemas.inquiry import InquiryResponse, InquiryDetailResponse
from estate_api.schemas.error import get_error_responses
from estate_api.utils.dependencies import get_actor_id, get_inquiry_service
from estate_api.utils.exceptions import InvalidInputError


router = APIRouter(prefix="/inquiries", tags=["Inquiries"])


@router.get(
    "",
    response_model=List[InquiryDetailResponse],
    summary="List inquiries",
    description="With `propertyId`, the owner's inbox for that listing. With `userId`, "
                "the caller's sent inquiries. Otherwise everything the caller sent or received.",
    responses=get_error_responses(400, 401, 403, 500)
)
async def list_inquiries(
    property_id: Optional[UUID] = Query(None, alias="propertyId", description="Property ID"),
    user_id: Optional[UUID] = Query(None, alias="userId", description="Sender user ID"),
    actor: Optional[UUID] = Depends(get_actor_id),
    inquiry_service: InquiryService = Depends(get_inquiry_service)
):
    if property_id is not None:
        inquiries = await inquiry_service.list_for_property(actor, property_id)
    elif user_id is not None:
        inquiries = await inquiry_service.list_for_user(actor, user_id)
    else:
        inquiries = await inquiry_service.list_for_actor(actor)

    return [inquiry.to_detail_dict() for inquiry in inquiries]


@router.post(
    "",
    response_model=List[InquiryResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Send inquiry",
    description="Send a message to the owner of a property. Owners cannot message their own listings.",
    responses=get_error_responses(400, 401, 404, 500)
)
async def create_inquiry(
    payload: Optional[Dict[str, Any]] = Body(None, examples=[{
        "property": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
        "message": "Is the villa still available?"
    }]),
    actor: Optional[UUID] = Depends(get_actor_id),
    inquiry_service: InquiryService = Depends(get_inquiry_service)
):
    inquiry = await inquiry_service.create_inquiry(actor, payload)
    return [inquiry.to_dict()]


@router.delete(
    "",
    summary="Delete inquiry",
    description="Delete an inquiry. Allowed for its sender and for the property owner.",
    responses=get_error_responses(400, 401, 403, 404, 500)
)
async def delete_inquiry(
    inquiry_id: Optional[UUID] = Query(None, alias="id", description="Inquiry ID"),
    actor: Optional[UUID] = Depends(get_actor_id),
    inquiry_service: InquiryService = Depends(get_inquiry_service)
) -> Dict[str, bool]:
    if inquiry_id is None:
        raise InvalidInputError("Missing inquiry ID")

    await inquiry_service.delete_inquiry(actor, inquiry_id)
    return {"success": True}
