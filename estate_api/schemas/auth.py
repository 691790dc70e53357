"""
Pydantic schemas for the identity endpoints.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class AuthRequest(BaseModel):
    """Registration or login request."""

    action: Optional[str] = Field(None, description="'register' or 'login'", examples=["login"])
    email: Optional[str] = Field(None, description="User's email address", examples=["buyer@example.com"])
    password: Optional[str] = Field(None, description="User's password", examples=["secret123"])


class LogoutRequest(BaseModel):
    """Sign-out request carrying the session's access token."""

    session_id: Optional[str] = Field(None, description="Access token of the session to end")


class UserResponse(BaseModel):
    """User response schema (excluding sensitive data)."""

    id: str
    email: str
    created_at: datetime


class SessionResponse(BaseModel):
    """Session issued on login."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    expires_at: datetime
    session_id: str


class RegisterResponse(BaseModel):
    user: UserResponse


class LoginResponse(BaseModel):
    user: UserResponse
    session: SessionResponse


class CurrentUserResponse(BaseModel):
    user: UserResponse
