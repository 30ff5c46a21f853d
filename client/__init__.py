"""Terminal simulator API client library.

A typed Python client for the terminal simulator REST API, usable both
synchronously and asynchronously.

Example:
    Synchronous usage::

        from client import TerminalClient

        with TerminalClient(base_url="http://localhost:8000") as client:
            session = client.sessions.create()
            print(client.terminal.execute(session.session_id, "whoami").output)

    Asynchronous usage::

        from client import AsyncTerminalClient

        async with AsyncTerminalClient() as client:
            session = await client.sessions.create()
            await client.terminal.execute(session.session_id, "ls")

Exports:
    TerminalClient: Synchronous client.
    AsyncTerminalClient: Asynchronous client.

    Exceptions:
        TerminalClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        ValidationError: Request validation failed (HTTP 422).
        NotFoundError: Resource not found (HTTP 404).
        ServerError: Server-side error (HTTP 5xx).
"""

from client._sessions import (
    AsyncSessionsClient,
    CreatedSession,
    DeletedSession,
    SessionList,
    SessionsClient,
)
from client._terminal import (
    AsyncTerminalSessionClient,
    CommandResult,
    CommandSuggestion,
    FileContent,
    History,
    ProcessInfo,
    ProcessList,
    PromptState,
    Suggestions,
    TerminalSessionClient,
    Transcript,
    TranscriptLine,
)
from client.client import AsyncTerminalClient, TerminalClient
from client.exceptions import (
    APIError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TerminalClientError,
    TimeoutError,
    ValidationError,
)
from client.models import (
    ErrorResponse,
    FilesystemEntry,
    FilesystemNodeResponse,
    HealthResponse,
    ServiceInfoResponse,
    SessionInfo,
)

__all__ = [
    # Main clients
    "AsyncTerminalClient",
    "TerminalClient",
    # Sub-clients
    "AsyncSessionsClient",
    "AsyncTerminalSessionClient",
    "SessionsClient",
    "TerminalSessionClient",
    # Response models
    "CommandResult",
    "CommandSuggestion",
    "CreatedSession",
    "DeletedSession",
    "ErrorResponse",
    "FileContent",
    "FilesystemEntry",
    "FilesystemNodeResponse",
    "HealthResponse",
    "History",
    "ProcessInfo",
    "ProcessList",
    "PromptState",
    "ServiceInfoResponse",
    "SessionInfo",
    "SessionList",
    "Suggestions",
    "Transcript",
    "TranscriptLine",
    # Exceptions
    "APIError",
    "ConnectionError",
    "NotFoundError",
    "ServerError",
    "TerminalClientError",
    "TimeoutError",
    "ValidationError",
]
