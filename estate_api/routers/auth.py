"""
Identity endpoints: registration, login, current user and sign-out.
"""

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from typing import Dict, Optional

from estate_api.models.user import User
from estate_api.services.identity import IdentityService
from estate_api.schemas.auth import (
    AuthRequest,
    LogoutRequest,
    LoginResponse,
    RegisterResponse,
    CurrentUserResponse
)
from estate_api.schemas.error import get_error_responses
from estate_api.utils.dependencies import get_identity_service, get_current_user
from estate_api.utils.exceptions import InvalidInputError


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "",
    summary="Register or log in",
    description="`action: register` creates an account (201). `action: login` "
                "returns the user and a bearer session (200).",
    responses={
        201: {"model": RegisterResponse, "description": "User registered"},
        200: {"model": LoginResponse, "description": "Logged in"},
        **get_error_responses(400, 500)
    }
)
async def authenticate(
    request_data: Optional[AuthRequest] = Body(None),
    identity_service: IdentityService = Depends(get_identity_service)
):
    """
    Dispatch on the requested action.

    Raises:
        InvalidInputError: On missing fields, an unknown action or a failed registration
        InvalidCredentialsError: On a failed login
    """
    if request_data is None or not request_data.action:
        raise InvalidInputError("Missing required fields")

    if request_data.action == "register":
        user = await identity_service.register(request_data.email, request_data.password)
        response = RegisterResponse.model_validate({"user": user.to_dict()})
        return JSONResponse(
            status_code=status.HTTP_201_CREATED,
            content=response.model_dump(mode="json")
        )

    if request_data.action == "login":
        user, session = await identity_service.login(request_data.email, request_data.password)
        return LoginResponse.model_validate({
            "user": user.to_dict(),
            "session": session.to_dict()
        })

    raise InvalidInputError("Invalid action")


@router.get(
    "",
    response_model=CurrentUserResponse,
    summary="Current user",
    responses=get_error_responses(401)
)
async def get_me(current_user: User = Depends(get_current_user)) -> CurrentUserResponse:
    return CurrentUserResponse.model_validate({"user": current_user.to_dict()})


@router.delete(
    "",
    summary="Sign out",
    description="Check the session token. Tokens are stateless; the client discards it.",
    responses=get_error_responses(400)
)
async def logout(
    request_data: Optional[LogoutRequest] = Body(None),
    identity_service: IdentityService = Depends(get_identity_service)
) -> Dict[str, bool]:
    await identity_service.logout(request_data.session_id if request_data else None)
    return {"success": True}
