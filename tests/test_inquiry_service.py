"""
Tests for the inquiry routing service.
"""

import pytest
import uuid

from estate_api.models import User, Property, Inquiry
from estate_api.repositories import PropertyRepository, InquiryRepository
from estate_api.services import InquiryService
from estate_api.utils.exceptions import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    SelfInquiryError,
    UnauthorizedError
)
from tests.conftest import PropertyFactory, InquiryFactory


class TestCreateInquiry:

    async def test_buyer_sends_inquiry(
        self,
        inquiry_service: InquiryService,
        villa: Property,
        buyer: User
    ):
        created = await inquiry_service.create_inquiry(
            buyer.id, {"property": str(villa.id), "message": "  Is it available?\n"}
        )

        assert created.sender_id == buyer.id
        assert created.property_id == villa.id
        assert created.message == "  Is it available?\n"

    async def test_owner_cannot_inquire_about_own_property(
        self,
        inquiry_service: InquiryService,
        inquiry_repository: InquiryRepository,
        villa: Property,
        owner: User
    ):
        with pytest.raises(SelfInquiryError) as exc_info:
            await inquiry_service.create_inquiry(owner.id, {"property": str(villa.id), "message": "Hi"})

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "You cannot send an inquiry to your own property"
        assert await inquiry_repository.get_for_property(villa.id) == []

    async def test_anonymous_rejected_before_validation(self, inquiry_service: InquiryService):
        with pytest.raises(UnauthorizedError):
            await inquiry_service.create_inquiry(None, None)

    @pytest.mark.parametrize("payload", [
        {"message": "Hi"},
        {"property": "3fa85f64-5717-4562-b3fc-2c963f66afa6"},
        {"property": "3fa85f64-5717-4562-b3fc-2c963f66afa6", "message": "   "},
        {"property": "not-a-uuid", "message": "Hi"},
    ])
    async def test_invalid_payload(self, inquiry_service: InquiryService, buyer: User, payload):
        with pytest.raises(InvalidInputError):
            await inquiry_service.create_inquiry(buyer.id, payload)

    async def test_unknown_property(self, inquiry_service: InquiryService, buyer: User):
        with pytest.raises(NotFoundError):
            await inquiry_service.create_inquiry(buyer.id, {"property": str(uuid.uuid4()), "message": "Hi"})


class TestListForProperty:

    async def test_owner_sees_inquiries_newest_first(
        self,
        inquiry_service: InquiryService,
        inquiry_repository: InquiryRepository,
        villa: Property,
        owner: User,
        buyer: User,
        stranger: User
    ):
        await InquiryFactory.create_inquiry(inquiry_repository, villa.id, buyer.id, "First")
        await InquiryFactory.create_inquiry(inquiry_repository, villa.id, stranger.id, "Second")

        inquiries = await inquiry_service.list_for_property(owner.id, villa.id)

        assert [i.message for i in inquiries] == ["Second", "First"]
        detail = inquiries[0].to_detail_dict()
        assert detail["property"]["title"] == "Villa"
        assert detail["sender"]["email"] == "stranger@example.com"

    async def test_non_owner_forbidden(
        self,
        inquiry_service: InquiryService,
        inquiry: Inquiry,
        villa: Property,
        buyer: User
    ):
        """Even the sender of an inquiry cannot list the whole property inbox."""
        with pytest.raises(ForbiddenError):
            await inquiry_service.list_for_property(buyer.id, villa.id)

    async def test_missing_property_forbidden(self, inquiry_service: InquiryService, owner: User):
        with pytest.raises(ForbiddenError):
            await inquiry_service.list_for_property(owner.id, uuid.uuid4())

    async def test_anonymous_unauthorized(self, inquiry_service: InquiryService, villa: Property):
        with pytest.raises(UnauthorizedError):
            await inquiry_service.list_for_property(None, villa.id)


class TestListForUser:

    async def test_sender_lists_own(
        self,
        inquiry_service: InquiryService,
        inquiry: Inquiry,
        buyer: User
    ):
        inquiries = await inquiry_service.list_for_user(buyer.id, buyer.id)
        assert [i.id for i in inquiries] == [inquiry.id]

    async def test_other_user_forbidden(
        self,
        inquiry_service: InquiryService,
        inquiry: Inquiry,
        buyer: User,
        owner: User
    ):
        with pytest.raises(ForbiddenError) as exc_info:
            await inquiry_service.list_for_user(owner.id, buyer.id)
        assert exc_info.value.detail == "Forbidden - You can only view your own inquiries"


class TestListForActor:

    async def test_sent_and_received(
        self,
        inquiry_service: InquiryService,
        property_repository: PropertyRepository,
        inquiry_repository: InquiryRepository,
        villa: Property,
        owner: User,
        buyer: User,
        stranger: User
    ):
        buyer_flat = await PropertyFactory.create_property(property_repository, buyer.id, title="Flat")
        received = await InquiryFactory.create_inquiry(inquiry_repository, buyer_flat.id, stranger.id)
        sent = await InquiryFactory.create_inquiry(inquiry_repository, villa.id, buyer.id)
        # Not addressed to or from the buyer
        await InquiryFactory.create_inquiry(inquiry_repository, villa.id, stranger.id)

        inquiries = await inquiry_service.list_for_actor(buyer.id)

        assert [i.id for i in inquiries] == [sent.id, received.id]

    async def test_user_without_properties(
        self,
        inquiry_service: InquiryService,
        inquiry: Inquiry,
        buyer: User,
        stranger: User
    ):
        assert [i.id for i in await inquiry_service.list_for_actor(buyer.id)] == [inquiry.id]
        assert await inquiry_service.list_for_actor(stranger.id) == []

    async def test_anonymous_unauthorized(self, inquiry_service: InquiryService):
        with pytest.raises(UnauthorizedError):
            await inquiry_service.list_for_actor(None)


class TestDeleteInquiry:

    async def test_sender_deletes(
        self,
        inquiry_service: InquiryService,
        inquiry_repository: InquiryRepository,
        inquiry: Inquiry,
        buyer: User
    ):
        assert await inquiry_service.delete_inquiry(buyer.id, inquiry.id) is True
        assert await inquiry_repository.get_with_property(inquiry.id) is None

    async def test_property_owner_deletes(
        self,
        inquiry_service: InquiryService,
        inquiry: Inquiry,
        owner: User
    ):
        assert await inquiry_service.delete_inquiry(owner.id, inquiry.id) is True

    async def test_third_party_forbidden(
        self,
        inquiry_service: InquiryService,
        inquiry_repository: InquiryRepository,
        inquiry: Inquiry,
        stranger: User
    ):
        with pytest.raises(ForbiddenError) as exc_info:
            await inquiry_service.delete_inquiry(stranger.id, inquiry.id)

        assert exc_info.value.detail == "Forbidden - You are not authorized to delete this inquiry"
        assert await inquiry_repository.get_with_property(inquiry.id) is not None

    async def test_missing_inquiry(self, inquiry_service: InquiryService, buyer: User):
        with pytest.raises(NotFoundError):
            await inquiry_service.delete_inquiry(buyer.id, uuid.uuid4())

    async def test_anonymous_unauthorized(self, inquiry_service: InquiryService, inquiry: Inquiry):
        with pytest.raises(UnauthorizedError):
            await inquiry_service.delete_inquiry(None, inquiry.id)
