"""
Test configuration and fixtures for the listings API.
Provides an in-memory database, test data factories and an API client.
"""

import os

# Settings are read at import time; configure them before the app is imported
os.environ["STORE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["STORE_PUBLIC_KEY"] = "test-public-key"
os.environ["STORE_SERVICE_KEY"] = "test-service-key-that-is-long-enough-0123456789"
os.environ["ENVIRONMENT"] = "testing"

import pytest
import uuid
from decimal import Decimal
from typing import AsyncGenerator, Dict, Optional
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from estate_api.main import app
from estate_api.database import Base, get_db, enable_sqlite_foreign_keys
from estate_api.models import User, Property, Inquiry
from estate_api.repositories import UserRepository, PropertyRepository, InquiryRepository
from estate_api.services import IdentityService, PropertyService, InquiryService
from estate_api.utils.auth import create_access_token


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "testpassword123"


@pytest.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database session override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def inquiry_repository(db_session: AsyncSession) -> InquiryRepository:
    return InquiryRepository(db_session)


# Service fixtures
@pytest.fixture
def identity_service(db_session: AsyncSession) -> IdentityService:
    return IdentityService(db_session)


@pytest.fixture
def property_service(db_session: AsyncSession) -> PropertyService:
    return PropertyService(db_session)


@pytest.fixture
def inquiry_service(db_session: AsyncSession) -> InquiryService:
    return InquiryService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    async def create_user(
        user_repo: UserRepository,
        email: Optional[str] = None,
        password: str = TEST_PASSWORD
    ) -> User:
        """Create a test user in the database."""
        return await user_repo.create({
            "email": email or f"user{uuid.uuid4().hex[:8]}@example.com",
            "hashed_password": User.hash_password(password)
        })


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        title: str = "Villa",
        city: str = "Yerevan",
        price: Decimal = Decimal("100000"),
        image_url: Optional[str] = None
    ) -> dict:
        """Create a property request body."""
        return {
            "title": title,
            "city": city,
            "price": float(price),
            "image_url": image_url
        }

    @staticmethod
    async def create_property(
        property_repo: PropertyRepository,
        owner_id: uuid.UUID,
        title: str = "Villa",
        city: str = "Yerevan",
        price: Decimal = Decimal("100000"),
        image_url: Optional[str] = None
    ) -> Property:
        """Create a test property in the database."""
        return await property_repo.create({
            "title": title,
            "city": city,
            "price": price,
            "image_url": image_url,
            "owner_id": owner_id
        })


class InquiryFactory:
    """Factory for creating test inquiries."""

    @staticmethod
    async def create_inquiry(
        inquiry_repo: InquiryRepository,
        property_id: uuid.UUID,
        sender_id: uuid.UUID,
        message: str = "Is it still available?"
    ) -> Inquiry:
        """Create a test inquiry in the database, bypassing the routing checks."""
        return await inquiry_repo.create({
            "property_id": property_id,
            "sender_id": sender_id,
            "message": message
        })


def auth_headers(user: User) -> Dict[str, str]:
    """Bearer header for a user."""
    token = create_access_token(user_id=user.id, email=user.email)
    return {"Authorization": f"Bearer {token}"}


# Common test fixtures
@pytest.fixture
async def owner(user_repository: UserRepository) -> User:
    """User who owns the test property."""
    return await UserFactory.create_user(user_repository, email="owner@example.com")


@pytest.fixture
async def buyer(user_repository: UserRepository) -> User:
    """User who sends inquiries."""
    return await UserFactory.create_user(user_repository, email="buyer@example.com")


@pytest.fixture
async def stranger(user_repository: UserRepository) -> User:
    """User with no relation to the test records."""
    return await UserFactory.create_user(user_repository, email="stranger@example.com")


@pytest.fixture
async def villa(property_repository: PropertyRepository, owner: User) -> Property:
    """Villa in Yerevan for 100000, owned by the owner fixture."""
    return await PropertyFactory.create_property(property_repository, owner_id=owner.id)


@pytest.fixture
async def inquiry(inquiry_repository: InquiryRepository, villa: Property, buyer: User) -> Inquiry:
    """Inquiry from the buyer about the villa."""
    return await InquiryFactory.create_inquiry(
        inquiry_repository,
        property_id=villa.id,
        sender_id=buyer.id
    )
