"""
Tests for error response formatting and the application-level handlers.
"""

import pytest
import json
from unittest.mock import Mock
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from estate_api.services.error_handler import ErrorHandlerService
from estate_api.utils.exceptions import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    SelfInquiryError,
    StoreError,
    UnauthorizedError
)


class TestErrorHandlerService:
    """Test error handler service functionality."""

    def test_format_error_response(self):
        response = ErrorHandlerService.format_error_response(
            error_code="TEST_ERROR",
            message="Test error message",
            details=[{"field": "test", "message": "Test field error"}],
            request_id="test123"
        )

        assert response["error"]["code"] == "TEST_ERROR"
        assert response["error"]["message"] == "Test error message"
        assert response["error"]["request_id"] == "test123"
        assert response["error"]["details"][0]["field"] == "test"
        assert response["error"]["timestamp"].endswith("Z")

    @pytest.mark.parametrize("exception,status_code,code", [
        (InvalidInputError(), 400, "INVALID_INPUT"),
        (SelfInquiryError(), 400, "SELF_INQUIRY"),
        (UnauthorizedError(), 401, "UNAUTHORIZED"),
        (ForbiddenError(), 403, "FORBIDDEN"),
        (NotFoundError("Property"), 404, "NOT_FOUND"),
        (StoreError("connection refused"), 500, "STORE_ERROR"),
    ])
    def test_handle_api_exception(self, exception, status_code, code):
        response = ErrorHandlerService.handle_api_exception(exception)

        assert response.status_code == status_code
        response_data = json.loads(response.body)
        assert response_data["error"]["code"] == code
        assert response_data["error"]["message"] == exception.detail

    def test_handle_validation_error(self):
        mock_error = Mock()
        mock_error.errors.return_value = [
            {"loc": ("query", "id"), "msg": "Input should be a valid UUID", "type": "uuid_parsing"}
        ]

        response = ErrorHandlerService.handle_validation_error(mock_error)

        assert response.status_code == 400
        response_data = json.loads(response.body)
        assert response_data["error"]["code"] == "INVALID_INPUT"
        assert response_data["error"]["details"][0]["field"] == "query -> id"

    def test_handle_database_error_passes_message_through(self):
        error = IntegrityError("INSERT ...", {}, Exception("violates check constraint ck_properties_price"))

        response = ErrorHandlerService.handle_database_error(error)

        assert response.status_code == 500
        response_data = json.loads(response.body)
        assert response_data["error"]["code"] == "STORE_ERROR"
        assert response_data["error"]["message"] == "violates check constraint ck_properties_price"

    def test_handle_http_exception(self):
        response = ErrorHandlerService.handle_http_exception(StarletteHTTPException(404, "Not Found"))

        assert response.status_code == 404
        assert json.loads(response.body)["error"]["code"] == "HTTP_404"

    def test_handle_unexpected_error(self):
        response = ErrorHandlerService.handle_unexpected_error(Exception("boom"))

        assert response.status_code == 500
        response_data = json.loads(response.body)
        assert response_data["error"]["code"] == "INTERNAL_SERVER_ERROR"
        assert "boom" not in response_data["error"]["message"]


class TestStoreError:

    def test_from_exception_prefers_driver_message(self):
        error = IntegrityError("stmt", {}, Exception("duplicate key"))
        assert StoreError.from_exception(error).detail == "duplicate key"

    def test_from_plain_exception(self):
        assert StoreError.from_exception(RuntimeError("lost")).detail == "lost"


class TestApplicationHandlers:

    async def test_request_id_is_echoed(self, async_client: AsyncClient):
        response = await async_client.get("/api/properties", headers={"X-Request-ID": "req-42"})

        assert response.headers["x-request-id"] == "req-42"

    async def test_error_carries_request_id(self, async_client: AsyncClient):
        response = await async_client.get("/api/inquiries")

        assert response.status_code == 401
        assert response.json()["error"]["request_id"] == response.headers["x-request-id"]

    async def test_unknown_route(self, async_client: AsyncClient):
        response = await async_client.get("/api/nowhere")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "HTTP_404"

    async def test_malformed_json_body(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/properties",
            content="{not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_INPUT"
