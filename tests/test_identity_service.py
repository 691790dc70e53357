"""
Tests for registration, login and token resolution.
"""

import pytest
import uuid
from datetime import timedelta

from estate_api.models import User
from estate_api.services import IdentityService
from estate_api.utils.auth import create_access_token
from estate_api.utils.exceptions import (
    InvalidCredentialsError,
    InvalidInputError,
    UnauthorizedError
)
from tests.conftest import TEST_PASSWORD


class TestRegister:

    async def test_register_normalizes_email(self, identity_service: IdentityService):
        user = await identity_service.register("New.User@Example.com", "secret1")

        assert user.email == "new.user@example.com"
        assert user.hashed_password != "secret1"
        assert user.verify_password("secret1")

    async def test_duplicate_email(self, identity_service: IdentityService, buyer: User):
        with pytest.raises(InvalidInputError) as exc_info:
            await identity_service.register("buyer@example.com", "secret1")
        assert exc_info.value.detail == "User already registered"

    async def test_short_password(self, identity_service: IdentityService):
        with pytest.raises(InvalidInputError) as exc_info:
            await identity_service.register("short@example.com", "12345")
        assert "at least 6 characters" in exc_info.value.detail

    async def test_invalid_email(self, identity_service: IdentityService):
        with pytest.raises(InvalidInputError):
            await identity_service.register("not-an-email", "secret1")

    @pytest.mark.parametrize("email,password", [(None, "secret1"), ("a@example.com", None), ("", "")])
    async def test_missing_fields(self, identity_service: IdentityService, email, password):
        with pytest.raises(InvalidInputError) as exc_info:
            await identity_service.register(email, password)
        assert exc_info.value.detail == "Missing required fields"


class TestLogin:

    async def test_login_issues_session(self, identity_service: IdentityService, buyer: User):
        user, session = await identity_service.login("buyer@example.com", TEST_PASSWORD)

        assert user.id == buyer.id
        assert session.token_type == "bearer"
        assert session.expires_in == 3600
        assert await identity_service.resolve_user(session.access_token) == buyer.id

    async def test_wrong_password(self, identity_service: IdentityService, buyer: User):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await identity_service.login("buyer@example.com", "wrong-password")
        assert exc_info.value.status_code == 400

    async def test_unknown_email(self, identity_service: IdentityService):
        with pytest.raises(InvalidCredentialsError):
            await identity_service.login("nobody@example.com", TEST_PASSWORD)


class TestResolveUser:

    async def test_no_token(self, identity_service: IdentityService):
        assert await identity_service.resolve_user(None) is None

    async def test_garbage_token(self, identity_service: IdentityService):
        assert await identity_service.resolve_user("not-a-jwt") is None

    async def test_expired_token(self, identity_service: IdentityService, buyer: User):
        token = create_access_token(buyer.id, buyer.email, expires_delta=timedelta(seconds=-5))
        assert await identity_service.resolve_user(token) is None

    async def test_token_for_deleted_user(self, identity_service: IdentityService):
        token = create_access_token(uuid.uuid4(), "ghost@example.com")
        assert await identity_service.resolve_user(token) is None

    async def test_current_user(self, identity_service: IdentityService, buyer: User):
        token = create_access_token(buyer.id, buyer.email)
        assert (await identity_service.current_user(token)).id == buyer.id

        with pytest.raises(UnauthorizedError):
            await identity_service.current_user("bad")


class TestLogout:

    async def test_logout_valid_session(self, identity_service: IdentityService, buyer: User):
        token = create_access_token(buyer.id, buyer.email)
        assert await identity_service.logout(token) is None

    async def test_logout_missing_session(self, identity_service: IdentityService):
        with pytest.raises(InvalidInputError) as exc_info:
            await identity_service.logout(None)
        assert exc_info.value.detail == "Missing session ID"

    async def test_logout_invalid_session(self, identity_service: IdentityService):
        with pytest.raises(InvalidInputError):
            await identity_service.logout("bogus")
