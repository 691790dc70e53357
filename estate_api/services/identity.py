"""
Identity service: registration, login, and bearer token resolution.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from estate_api.config import settings
from estate_api.repositories.user import UserRepository
from estate_api.models.user import User
from estate_api.utils.auth import create_access_token, verify_token
from estate_api.utils.exceptions import (
    InvalidCredentialsError,
    InvalidInputError,
    StoreError,
    UnauthorizedError
)
from jose import JWTError
import uuid
import logging

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Login session handed back to the client."""

    access_token: str
    session_id: str
    expires_at: datetime
    token_type: str = "bearer"

    @property
    def expires_in(self) -> int:
        return settings.access_token_expire_minutes * 60

    def to_dict(self) -> dict:
        return {
            "access_token": self.access_token,
            "token_type": self.token_type,
            "expires_in": self.expires_in,
            "expires_at": self.expires_at.isoformat(),
            "session_id": self.session_id,
        }


class IdentityService:
    """
    Identity service for user registration, login and token resolution.
    Registration is auto-confirmed; tokens are stateless JWTs.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.user_repo = UserRepository(db_session)

    async def register(self, email: Optional[str], password: Optional[str]) -> User:
        """
        Register a new user.

        Raises:
            InvalidInputError: If the email is malformed or taken, or the password too short
        """
        if not email or not password:
            raise InvalidInputError("Missing required fields")

        try:
            normalized_email = User.validate_email_format(email)
            hashed_password = User.hash_password(password, settings.min_password_length)
        except ValueError as e:
            raise InvalidInputError(str(e))

        try:
            if not await self.user_repo.check_email_availability(normalized_email):
                raise InvalidInputError("User already registered")

            user = await self.user_repo.create({
                "email": normalized_email,
                "hashed_password": hashed_password,
            })
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            raise InvalidInputError("User already registered")
        except SQLAlchemyError as e:
            raise StoreError.from_exception(e)

        logger.info(f"User registered: {user.email} (ID: {user.id})")
        return user

    async def login(self, email: Optional[str], password: Optional[str]) -> Tuple[User, Session]:
        """
        Authenticate with email and password and open a session.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password wrong
        """
        if not email or not password:
            raise InvalidInputError("Missing required fields")

        try:
            user = await self.user_repo.get_by_email(email)
        except SQLAlchemyError as e:
            raise StoreError.from_exception(e)

        if not user or not user.verify_password(password):
            logger.warning(f"Failed login attempt for email: {email}")
            raise InvalidCredentialsError()

        session = self.create_session(user)
        logger.info(f"User logged in: {user.email}")
        return user, session

    def create_session(self, user: User) -> Session:
        """Issue an access token for a user."""
        session_id = str(uuid.uuid4())
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
        token = create_access_token(
            user_id=user.id,
            email=user.email,
            session_id=session_id,
            expires_delta=expires_delta
        )
        return Session(
            access_token=token,
            session_id=session_id,
            expires_at=datetime.now(timezone.utc) + expires_delta
        )

    async def resolve_user(self, token: Optional[str]) -> Optional[uuid.UUID]:
        """
        Resolve a bearer token to a user id.

        Never raises for a bad token: invalid, expired and orphaned tokens
        resolve to None, leaving the Unauthorized decision to the caller.
        """
        user = await self._user_for_token(token)
        return user.id if user else None

    async def current_user(self, token: Optional[str]) -> User:
        """
        Get the user behind a bearer token.

        Raises:
            UnauthorizedError: If the token does not resolve to a user
        """
        user = await self._user_for_token(token)
        if not user:
            raise UnauthorizedError()
        return user

    async def logout(self, session_token: Optional[str]) -> None:
        """
        End a session.
        Tokens are stateless, so this only checks that the session is one we issued.

        Raises:
            InvalidInputError: If the session token is missing or invalid
        """
        if not session_token:
            raise InvalidInputError("Missing session ID")

        try:
            payload = verify_token(session_token)
        except JWTError as e:
            raise InvalidInputError(f"Invalid session: {str(e)}")

        logger.info(f"Session {payload.session_id} ended for user {payload.user_id}")

    async def _user_for_token(self, token: Optional[str]) -> Optional[User]:
        if not token:
            return None

        try:
            payload = verify_token(token)
            user_id = uuid.UUID(payload.user_id)
        except (JWTError, ValueError) as e:
            logger.warning(f"Auth error: {e}")
            return None

        try:
            user = await self.user_repo.get_by_id(user_id)
        except SQLAlchemyError as e:
            raise StoreError.from_exception(e)

        if not user:
            logger.warning(f"Auth error: token subject {user_id} no longer exists")
        return user
