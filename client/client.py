"""Main terminal simulator client classes.

This module provides the entry points for talking to the REST service:
- TerminalClient: Synchronous client
- AsyncTerminalClient: Asynchronous client

Both expose namespaced sub-clients: `sessions` for session lifecycle and
`terminal` for running commands and reading per-session state.

Example:
    Synchronous usage::

        from client import TerminalClient

        with TerminalClient(base_url="http://localhost:8000") as client:
            session = client.sessions.create()
            result = client.terminal.execute(session.session_id, "cat Documents/readme.txt")
            print(result.output)

    Asynchronous usage::

        from client import AsyncTerminalClient

        async with AsyncTerminalClient() as client:
            session = await client.sessions.create()
            await client.terminal.execute(session.session_id, "pwd")
"""

from typing import Any

from client._http import AsyncHTTPClient, HTTPClient
from client._sessions import AsyncSessionsClient, SessionsClient
from client._terminal import AsyncTerminalSessionClient, TerminalSessionClient
from client.models import HealthResponse, ServiceInfoResponse


class TerminalClient:
    """Synchronous client for the terminal simulator REST API.

    Args:
        base_url: The base URL of the server.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on connection errors, timeouts and
            HTTP 502/503/504, with exponential backoff.
        max_retries: Maximum number of retry attempts when retry is enabled.
        transport: Custom HTTP transport (e.g. httpx.MockTransport in tests).
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )
        self._sessions: SessionsClient | None = None
        self._terminal: TerminalSessionClient | None = None

    def __enter__(self) -> "TerminalClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def sessions(self) -> SessionsClient:
        """Access session lifecycle endpoints (/sessions)."""
        if self._sessions is None:
            self._sessions = SessionsClient(self._http)
        return self._sessions

    @property
    def terminal(self) -> TerminalSessionClient:
        """Access per-session terminal endpoints (/sessions/{session_id}/*)."""
        if self._terminal is None:
            self._terminal = TerminalSessionClient(self._http)
        return self._terminal

    def health(self) -> HealthResponse:
        """Check that the service is up."""
        return HealthResponse(**self._http.get("/health"))

    def info(self) -> ServiceInfoResponse:
        """Get the service name and version."""
        return ServiceInfoResponse(**self._http.get("/"))


class AsyncTerminalClient:
    """Asynchronous client for the terminal simulator REST API.

    Takes the same arguments as TerminalClient; transport must be an
    async transport.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        self._http = AsyncHTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )
        self._sessions: AsyncSessionsClient | None = None
        self._terminal: AsyncTerminalSessionClient | None = None

    async def __aenter__(self) -> "AsyncTerminalClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._http.close()

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def sessions(self) -> AsyncSessionsClient:
        """Access session lifecycle endpoints (/sessions)."""
        if self._sessions is None:
            self._sessions = AsyncSessionsClient(self._http)
        return self._sessions

    @property
    def terminal(self) -> AsyncTerminalSessionClient:
        """Access per-session terminal endpoints (/sessions/{session_id}/*)."""
        if self._terminal is None:
            self._terminal = AsyncTerminalSessionClient(self._http)
        return self._terminal

    async def health(self) -> HealthResponse:
        """Check that the service is up."""
        return HealthResponse(**(await self._http.get("/health")))

    async def info(self) -> ServiceInfoResponse:
        """Get the service name and version."""
        return ServiceInfoResponse(**(await self._http.get("/")))
