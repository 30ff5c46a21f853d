"""Unit tests for API error handling.

Tests for custom exception classes and exception handlers. These tests verify
that errors are converted to consistent JSON responses.
"""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import status
from pydantic import BaseModel, ValidationError

from api.exceptions import (
    SessionLimitError,
    SessionNotFoundError,
    generic_exception_handler,
    runtime_error_handler,
    session_limit_handler,
    session_not_found_handler,
    validation_exception_handler,
    value_error_handler,
)


def body_of(response) -> dict:
    """Decode the JSON body of a handler response."""
    return json.loads(response.body.decode())


@pytest.fixture
def mock_request():
    """Provide a stand-in request with a URL path for log messages."""
    request = MagicMock()
    request.url.path = "/sessions"
    return request


# =============================================================================
# Exception Classes
# =============================================================================


class TestSessionNotFoundError:
    """Tests for SessionNotFoundError exception class."""

    def test_stores_session_id(self):
        exc = SessionNotFoundError("abc")
        assert exc.session_id == "abc"

    def test_message(self):
        assert str(SessionNotFoundError("abc")) == "Session 'abc' not found"

    def test_can_be_raised_and_caught(self):
        with pytest.raises(SessionNotFoundError) as exc_info:
            raise SessionNotFoundError("xyz")
        assert exc_info.value.session_id == "xyz"


class TestSessionLimitError:
    """Tests for SessionLimitError exception class."""

    def test_stores_limit(self):
        exc = SessionLimitError(3)
        assert exc.max_sessions == 3
        assert str(exc) == "Session limit of 3 reached"


# =============================================================================
# Exception Handlers
# =============================================================================


class TestSessionNotFoundHandler:
    """Tests for session_not_found_handler function."""

    async def test_returns_404(self, mock_request):
        response = await session_not_found_handler(mock_request, SessionNotFoundError("abc"))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.media_type == "application/json"
        assert body_of(response) == {
            "error": "Session Not Found",
            "detail": "The session 'abc' does not exist",
            "session_id": "abc",
        }


class TestSessionLimitHandler:
    """Tests for session_limit_handler function."""

    async def test_returns_429(self, mock_request):
        response = await session_limit_handler(mock_request, SessionLimitError(2))

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        body = body_of(response)
        assert body["error"] == "Session Limit Reached"
        assert body["detail"] == "Session limit of 2 reached"
        assert body["max_sessions"] == 2
        assert "DELETE" in body["suggestion"]


class TestValidationExceptionHandler:
    """Tests for validation_exception_handler function."""

    async def test_returns_422_with_errors(self, mock_request):
        class Sample(BaseModel):
            count: int

        with pytest.raises(ValidationError) as exc_info:
            Sample(count="many")

        response = await validation_exception_handler(mock_request, exc_info.value)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        body = body_of(response)
        assert body["error"] == "Validation Error"
        assert body["detail"] == "The request data failed validation"
        assert body["validation_errors"][0]["loc"] == ["count"]


class TestGeneralHandlers:
    """Tests for the ValueError, RuntimeError and catch-all handlers."""

    async def test_value_error(self, mock_request):
        response = await value_error_handler(mock_request, ValueError("bad seed"))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert body_of(response) == {
            "error": "Invalid Value",
            "detail": "bad seed",
            "type": "ValueError",
        }

    async def test_runtime_error(self, mock_request):
        response = await runtime_error_handler(mock_request, RuntimeError("not ready"))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        body = body_of(response)
        assert body["error"] == "Runtime Error"
        assert body["detail"] == "not ready"

    async def test_generic_error_hides_message(self, mock_request):
        response = await generic_exception_handler(mock_request, KeyError("secret"))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        body = body_of(response)
        assert body == {
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "type": "KeyError",
        }
        assert "secret" not in response.body.decode()
