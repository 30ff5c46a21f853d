"""Unit tests for the SessionsClient and AsyncSessionsClient.

This module tests the session lifecycle sub-clients defined in
client/_sessions.py:

1. SessionsClient (Synchronous):
   - create(seed): Create a session
   - list(): List sessions
   - get(session_id): Get one session
   - delete(session_id): Delete a session

2. AsyncSessionsClient:
   - Same functionality as SessionsClient but async

Note: These tests use mock HTTP clients to avoid real network calls.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from client._sessions import (
    AsyncSessionsClient,
    CreatedSession,
    DeletedSession,
    SessionList,
    SessionsClient,
)


def session_payload(session_id: str = "abc", **overrides) -> dict:
    """Build a session summary as returned by the server."""
    payload = {
        "session_id": session_id,
        "prompt": "user@ai-terminal:~$",
        "current_directory": "/home/user",
        "history_length": 0,
        "created_at": "2025-03-05T14:07:30+00:00",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def mock_http():
    """Provide a mock synchronous HTTP client."""
    return MagicMock()


@pytest.fixture
def mock_async_http():
    """Provide a mock asynchronous HTTP client."""
    http = MagicMock()
    http.get = AsyncMock()
    http.post = AsyncMock()
    http.delete = AsyncMock()
    return http


# =============================================================================
# SessionsClient Tests
# =============================================================================


class TestSessionsClient:
    """Tests for the synchronous SessionsClient."""

    def test_create(self, mock_http) -> None:
        mock_http.post.return_value = {**session_payload(), "welcome_banner": "Welcome"}
        client = SessionsClient(mock_http)

        session = client.create()

        mock_http.post.assert_called_once_with("/sessions", json={"seed": None}, params=None)
        assert isinstance(session, CreatedSession)
        assert session.session_id == "abc"
        assert session.welcome_banner == "Welcome"
        assert session.created_at.year == 2025

    def test_create_with_seed(self, mock_http) -> None:
        mock_http.post.return_value = {**session_payload(), "welcome_banner": ""}

        SessionsClient(mock_http).create(seed=42)

        assert mock_http.post.call_args.kwargs["json"] == {"seed": 42}

    def test_list(self, mock_http) -> None:
        mock_http.get.return_value = {
            "sessions": [session_payload("a"), session_payload("b", history_length=3)],
            "count": 2,
        }

        result = SessionsClient(mock_http).list()

        mock_http.get.assert_called_once_with("/sessions", params=None)
        assert isinstance(result, SessionList)
        assert [s.session_id for s in result.sessions] == ["a", "b"]
        assert result.sessions[1].history_length == 3

    def test_get(self, mock_http) -> None:
        mock_http.get.return_value = session_payload(current_directory="/etc")

        session = SessionsClient(mock_http).get("abc")

        mock_http.get.assert_called_once_with("/sessions/abc", params=None)
        assert session.current_directory == "/etc"

    def test_delete(self, mock_http) -> None:
        mock_http.delete.return_value = {"session_id": "abc", "deleted": True}

        result = SessionsClient(mock_http).delete("abc")

        mock_http.delete.assert_called_once_with("/sessions/abc", params=None)
        assert result == DeletedSession(session_id="abc", deleted=True)


# =============================================================================
# AsyncSessionsClient Tests
# =============================================================================


class TestAsyncSessionsClient:
    """Tests for the asynchronous AsyncSessionsClient."""

    async def test_create(self, mock_async_http) -> None:
        mock_async_http.post.return_value = {**session_payload(), "welcome_banner": "Hi"}

        session = await AsyncSessionsClient(mock_async_http).create(seed=1)

        mock_async_http.post.assert_awaited_once_with("/sessions", json={"seed": 1}, params=None)
        assert session.welcome_banner == "Hi"

    async def test_list(self, mock_async_http) -> None:
        mock_async_http.get.return_value = {"sessions": [], "count": 0}

        result = await AsyncSessionsClient(mock_async_http).list()

        assert result.count == 0

    async def test_get(self, mock_async_http) -> None:
        mock_async_http.get.return_value = session_payload("xyz")

        session = await AsyncSessionsClient(mock_async_http).get("xyz")

        mock_async_http.get.assert_awaited_once_with("/sessions/xyz", params=None)
        assert session.session_id == "xyz"

    async def test_delete(self, mock_async_http) -> None:
        mock_async_http.delete.return_value = {"session_id": "xyz", "deleted": True}

        result = await AsyncSessionsClient(mock_async_http).delete("xyz")

        assert result.deleted is True
