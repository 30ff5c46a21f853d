"""Session lifecycle sub-client for the terminal simulator API.

This module provides SessionsClient and AsyncSessionsClient for the
/sessions endpoints.

This is an internal module. Import from `client` instead.
"""

from pydantic import BaseModel

from api.models import SessionInfo
from client._base import AsyncBaseClient, BaseClient


class CreatedSession(SessionInfo):
    """Response model for a newly created session.

    Attributes:
        welcome_banner: Text shown when the terminal opens.
    """

    welcome_banner: str


class SessionList(BaseModel):
    """Response model for the session listing.

    Attributes:
        sessions: Session summaries in creation order.
        count: Number of hosted sessions.
    """

    sessions: list[SessionInfo]
    count: int


class DeletedSession(BaseModel):
    """Response model confirming a deletion."""

    session_id: str
    deleted: bool


class SessionsClient(BaseClient):
    """Synchronous client for session lifecycle endpoints (/sessions).

    Example:
        with TerminalClient() as client:
            session = client.sessions.create(seed=42)
            print(session.welcome_banner)
            client.sessions.delete(session.session_id)
    """

    _BASE_PATH = "/sessions"

    def create(self, seed: int | None = None) -> CreatedSession:
        """Create a new terminal session.

        Args:
            seed: Optional random seed for reproducible randomized output.

        Returns:
            The new session's id, prompt, directory and welcome banner.

        Raises:
            APIError: If the server's session limit is reached (HTTP 429).
        """
        data = self._post(self._BASE_PATH, json={"seed": seed})
        return CreatedSession(**data)

    def list(self) -> SessionList:
        """List all hosted sessions."""
        data = self._get(self._BASE_PATH)
        return SessionList(**data)

    def get(self, session_id: str) -> SessionInfo:
        """Get the summary of one session.

        Raises:
            NotFoundError: If the session doesn't exist.
        """
        data = self._get(self._session_path(session_id))
        return SessionInfo(**data)

    def delete(self, session_id: str) -> DeletedSession:
        """Delete a session and all of its state.

        Raises:
            NotFoundError: If the session doesn't exist.
        """
        data = self._delete(self._session_path(session_id))
        return DeletedSession(**data)


class AsyncSessionsClient(AsyncBaseClient):
    """Asynchronous client for session lifecycle endpoints (/sessions)."""

    _BASE_PATH = "/sessions"

    async def create(self, seed: int | None = None) -> CreatedSession:
        """Create a new terminal session."""
        data = await self._post(self._BASE_PATH, json={"seed": seed})
        return CreatedSession(**data)

    async def list(self) -> SessionList:
        """List all hosted sessions."""
        data = await self._get(self._BASE_PATH)
        return SessionList(**data)

    async def get(self, session_id: str) -> SessionInfo:
        """Get the summary of one session."""
        data = await self._get(self._session_path(session_id))
        return SessionInfo(**data)

    async def delete(self, session_id: str) -> DeletedSession:
        """Delete a session and all of its state."""
        data = await self._delete(self._session_path(session_id))
        return DeletedSession(**data)
