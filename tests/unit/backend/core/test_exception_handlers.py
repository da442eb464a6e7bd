"""
Unit Tests for Exception Handlers.

Tests the exception handler functions in isolation.
"""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from codeboard.backend.core.exception_handlers import (
    EXCEPTION_STATUS_MAP,
    _get_request_id,
    application_error_handler,
    register_exception_handlers,
    unhandled_exception_handler,
    validation_error_handler,
)
from codeboard.backend.core.exceptions import (
    ApplicationError,
    ConflictError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)


def _body(response) -> dict:
    return json.loads(response.body.decode())


class TestExceptionStatusMapping:
    """Tests for exception to HTTP status code mapping."""

    def test_not_found_maps_to_404(self):
        assert EXCEPTION_STATUS_MAP[NotFoundError] == 404

    def test_validation_maps_to_400(self):
        assert EXCEPTION_STATUS_MAP[ValidationError] == 400

    def test_conflict_maps_to_409(self):
        assert EXCEPTION_STATUS_MAP[ConflictError] == 409

    def test_database_maps_to_503(self):
        assert EXCEPTION_STATUS_MAP[DatabaseError] == 503


class TestExceptionClasses:
    """Tests for error codes and details."""

    def test_not_found_message_and_details(self):
        exc = NotFoundError("Note", 999999)
        assert exc.code == "RES_NOT_FOUND"
        assert exc.message == "Note not found with id: 999999"
        assert exc.details == {"resource": "Note", "id": 999999}

    def test_validation_code(self):
        assert ValidationError("bad").code == "VAL_VALIDATION_ERROR"

    def test_conflict_code(self):
        assert ConflictError("dup").code == "RES_CONFLICT"

    def test_database_code(self):
        assert DatabaseError("down").code == "SYS_DATABASE_ERROR"


class TestGetRequestId:
    """Tests for request ID extraction."""

    def test_extracts_from_request_state(self):
        request = MagicMock(spec=Request)
        request.state.request_id = "state-123"
        request.headers = {}

        assert _get_request_id(request) == "state-123"

    def test_extracts_from_header(self):
        request = MagicMock(spec=Request)
        del request.state.request_id
        request.headers = {"x-request-id": "header-456"}

        assert _get_request_id(request) == "header-456"

    def test_returns_none_when_not_present(self):
        request = MagicMock(spec=Request)
        del request.state.request_id
        request.headers = {}

        assert _get_request_id(request) is None


@pytest.fixture
def mock_request():
    """Create a mock request with detailed errors disabled."""
    request = MagicMock(spec=Request)
    request.url.path = "/api/v1/codenotes"
    request.method = "GET"
    request.headers = {"x-request-id": "test-123"}
    request.app.state.detailed_errors = False
    del request.state.request_id
    return request


class TestApplicationErrorHandler:
    """Tests for application_error_handler."""

    @pytest.mark.asyncio
    async def test_not_found_returns_404_with_details(self, mock_request):
        response = await application_error_handler(mock_request, NotFoundError("Note", 7))

        assert response.status_code == 404
        body = _body(response)
        assert body["success"] is False
        assert body["error"]["code"] == "RES_NOT_FOUND"
        assert body["error"]["details"] == {"resource": "Note", "id": 7}
        assert body["metadata"]["request_id"] == "test-123"

    @pytest.mark.asyncio
    async def test_validation_returns_400_with_field(self, mock_request):
        exc = ValidationError(
            "title must not exceed 200 characters",
            details={"field": "title", "max_length": 200},
        )

        response = await application_error_handler(mock_request, exc)

        assert response.status_code == 400
        assert _body(response)["error"]["details"]["field"] == "title"

    @pytest.mark.asyncio
    async def test_server_error_hides_details_by_default(self, mock_request):
        exc = DatabaseError("Database operation failed", details={"operation": "x"})

        response = await application_error_handler(mock_request, exc)

        assert response.status_code == 503
        assert _body(response)["error"]["details"] is None

    @pytest.mark.asyncio
    async def test_server_error_details_when_enabled(self, mock_request):
        mock_request.app.state.detailed_errors = True
        exc = DatabaseError("Database operation failed", details={"operation": "x"})

        response = await application_error_handler(mock_request, exc)

        assert _body(response)["error"]["details"] == {"operation": "x"}

    @pytest.mark.asyncio
    async def test_base_application_error_returns_500(self, mock_request):
        response = await application_error_handler(mock_request, ApplicationError("boom"))

        assert response.status_code == 500
        assert _body(response)["error"]["code"] == "SYS_INTERNAL_ERROR"


class TestValidationErrorHandler:
    """Tests for request validation errors."""

    @pytest.mark.asyncio
    async def test_returns_422_with_field_paths(self, mock_request):
        exc = RequestValidationError(
            [{"loc": ("body", "title"), "msg": "Field required", "type": "missing"}]
        )

        response = await validation_error_handler(mock_request, exc)

        assert response.status_code == 422
        body = _body(response)
        assert body["error"]["code"] == "VAL_REQUEST_INVALID"
        assert body["error"]["details"]["validation_errors"] == [
            {"field": "body.title", "message": "Field required", "type": "missing"}
        ]


class TestUnhandledExceptionHandler:
    """Tests for the catch-all handler."""

    @pytest.mark.asyncio
    async def test_returns_generic_500(self, mock_request):
        response = await unhandled_exception_handler(mock_request, RuntimeError("secret"))

        assert response.status_code == 500
        body = _body(response)
        assert body["error"]["code"] == "SYS_INTERNAL_ERROR"
        assert "secret" not in response.body.decode()
        assert body["error"]["details"] is None

    @pytest.mark.asyncio
    async def test_exposes_type_when_detailed(self, mock_request):
        mock_request.app.state.detailed_errors = True

        response = await unhandled_exception_handler(mock_request, RuntimeError("secret"))

        assert _body(response)["error"]["details"] == {"exception_type": "RuntimeError"}


class TestRegisterExceptionHandlers:
    """Tests for handler registration."""

    def test_registers_every_handler(self):
        app = FastAPI()

        register_exception_handlers(app)

        assert app.exception_handlers[ApplicationError] is application_error_handler
        assert app.exception_handlers[RequestValidationError] is validation_error_handler
        assert app.exception_handlers[Exception] is unhandled_exception_handler
