"""Unit tests for the terminal client exception hierarchy.

This module tests the exception classes defined in client/exceptions.py:
- Inheritance relationships
- Stored attributes
- String formatting
"""

import pytest

from client import (
    APIError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TerminalClientError,
    TimeoutError,
    ValidationError,
)


class TestHierarchy:
    """Tests for the inheritance relationships."""

    @pytest.mark.parametrize("error_class", [ConnectionError, TimeoutError, APIError])
    def test_direct_subclasses_of_base(self, error_class) -> None:
        assert issubclass(error_class, TerminalClientError)

    @pytest.mark.parametrize("error_class", [ValidationError, NotFoundError, ServerError])
    def test_http_errors_are_api_errors(self, error_class) -> None:
        assert issubclass(error_class, APIError)

    def test_not_os_errors(self) -> None:
        """The client's ConnectionError and TimeoutError are not the builtins."""
        assert not issubclass(ConnectionError, OSError)
        assert not issubclass(TimeoutError, OSError)


class TestTerminalClientError:
    """Tests for the base exception."""

    def test_message(self) -> None:
        error = TerminalClientError("something failed")
        assert error.message == "something failed"
        assert str(error) == "something failed"


class TestConnectionError:
    """Tests for ConnectionError formatting."""

    def test_with_url(self) -> None:
        cause = OSError("refused")
        error = ConnectionError("Failed to connect", url="http://x/sessions", cause=cause)

        assert error.cause is cause
        assert str(error) == "Failed to connect (url: http://x/sessions)"

    def test_without_url(self) -> None:
        assert str(ConnectionError("Failed to connect")) == "Failed to connect"


class TestTimeoutError:
    """Tests for TimeoutError formatting."""

    def test_with_timeout_and_url(self) -> None:
        error = TimeoutError("Request timed out", timeout=5.0, url="http://x/health")
        assert str(error) == "Request timed out (timeout: 5.0s, url: http://x/health)"

    def test_with_timeout_only(self) -> None:
        assert str(TimeoutError("Slow", timeout=1.5)) == "Slow (timeout: 1.5s)"

    def test_bare(self) -> None:
        assert str(TimeoutError("Slow")) == "Slow"


class TestAPIErrors:
    """Tests for APIError and its subclasses."""

    def test_api_error_with_type(self) -> None:
        error = APIError("Session limit of 1 reached", 429, error_type="Session Limit Reached")
        assert str(error) == "[HTTP 429] [Session Limit Reached] Session limit of 1 reached"

    def test_api_error_without_type(self) -> None:
        assert str(APIError("Bad request", 400)) == "[HTTP 400] Bad request"

    def test_validation_error(self) -> None:
        error = ValidationError("command: too long", details={"errors": []})

        assert error.status_code == 422
        assert error.error_type == "validation_error"
        assert error.details == {"errors": []}

    def test_not_found_error(self) -> None:
        error = NotFoundError("gone", session_id="abc", response_body={"detail": "gone"})

        assert error.status_code == 404
        assert error.session_id == "abc"
        assert error.response_body == {"detail": "gone"}
        assert str(error) == "[HTTP 404] [not_found] gone"

    def test_server_error(self) -> None:
        assert ServerError("down").status_code == 500
        assert ServerError("down", status_code=503).status_code == 503

    def test_catchable_as_base(self) -> None:
        with pytest.raises(TerminalClientError):
            raise NotFoundError("gone")
