"""Terminal interaction sub-client for the terminal simulator API.

This module provides TerminalSessionClient and AsyncTerminalSessionClient
for running commands in a hosted session and reading its state
(/sessions/{session_id}/*).

This is an internal module. Import from `client` instead.
"""

from typing import Literal

from pydantic import BaseModel

from api.models import FilesystemNodeResponse
from client._base import AsyncBaseClient, BaseClient


# Response models for terminal endpoints


class CommandResult(BaseModel):
    """Result of running one command line.

    Attributes:
        command: The trimmed command line.
        output: Text produced by the command.
        output_type: "error" for error-class output, else "output".
        clear: Whether the screen should be cleared.
        prompt: Prompt after execution.
        current_directory: Working directory after execution.
        explanation: Assistant explanation for a failed command, if any.
    """

    command: str
    output: str
    output_type: Literal["output", "error"]
    clear: bool
    prompt: str
    current_directory: str
    explanation: str | None = None

    @property
    def is_error(self) -> bool:
        return self.output_type == "error"


class PromptState(BaseModel):
    """Current prompt and working directory."""

    prompt: str
    current_directory: str


class History(BaseModel):
    """Recorded command lines, oldest first."""

    commands: list[str]
    count: int


class TranscriptLine(BaseModel):
    """One line of the visible transcript."""

    line_id: str
    kind: Literal["command", "output", "error"]
    content: str
    timestamp: str
    prompt: str | None = None


class Transcript(BaseModel):
    """Visible transcript since the last clear."""

    lines: list[TranscriptLine]
    count: int


class ProcessInfo(BaseModel):
    """One simulated process."""

    pid: int
    name: str
    cpu_percent: float
    mem_percent: float
    user: str
    status: str


class ProcessList(BaseModel):
    """Simulated process table."""

    processes: list[ProcessInfo]
    count: int


class CommandSuggestion(BaseModel):
    """A suggested command line with its ranking score."""

    command: str
    description: str
    confidence: float


class Suggestions(BaseModel):
    """Local command suggestions for a typed prefix."""

    prefix: str
    suggestions: list[CommandSuggestion]


class FileContent(BaseModel):
    """Content of a regular file."""

    path: str
    content: str
    size: int


# Synchronous client


class TerminalSessionClient(BaseClient):
    """Synchronous client for the per-session terminal endpoints.

    Every method takes the target session id first.

    Example:
        with TerminalClient() as client:
            session_id = client.sessions.create().session_id
            result = client.terminal.execute(session_id, "ls -la")
            print(result.output)
            print(client.terminal.history(session_id).commands)
    """

    def execute(self, session_id: str, command: str) -> CommandResult:
        """Run a command line in the session.

        Failing commands return normally; their error text is the output
        and output_type is "error".

        Args:
            session_id: Target session.
            command: The command line as typed.

        Returns:
            The command's output and the resulting prompt.

        Raises:
            NotFoundError: If the session doesn't exist.
            ValidationError: If the command line is too long.
        """
        data = self._post(self._session_path(session_id, "/execute"), json={"command": command})
        return CommandResult(**data)

    def prompt(self, session_id: str) -> PromptState:
        data = self._get(self._session_path(session_id, "/prompt"))
        return PromptState(**data)

    def history(self, session_id: str) -> History:
        data = self._get(self._session_path(session_id, "/history"))
        return History(**data)

    def transcript(self, session_id: str) -> Transcript:
        data = self._get(self._session_path(session_id, "/transcript"))
        return Transcript(**data)

    def environment(self, session_id: str) -> dict[str, str]:
        """Get the session's environment variables as a plain dict."""
        data = self._get(self._session_path(session_id, "/environment"))
        return data["variables"]

    def processes(self, session_id: str) -> ProcessList:
        data = self._get(self._session_path(session_id, "/processes"))
        return ProcessList(**data)

    def suggestions(self, session_id: str, prefix: str, limit: int | None = None) -> Suggestions:
        """Get local command suggestions for a typed prefix."""
        data = self._get(
            self._session_path(session_id, "/suggestions"),
            params={"prefix": prefix, "limit": limit},
        )
        return Suggestions(**data)

    def filesystem(self, session_id: str, path: str = ".") -> FilesystemNodeResponse:
        """Get metadata for a path, with children for directories.

        Raises:
            NotFoundError: If nothing exists at the path.
        """
        data = self._get(self._session_path(session_id, "/filesystem"), params={"path": path})
        return FilesystemNodeResponse(**data)

    def read_file(self, session_id: str, path: str) -> FileContent:
        """Read a regular file.

        Raises:
            NotFoundError: If nothing exists at the path.
            APIError: If the path is a directory (HTTP 400).
        """
        data = self._get(
            self._session_path(session_id, "/filesystem/content"), params={"path": path}
        )
        return FileContent(**data)


# Asynchronous client


class AsyncTerminalSessionClient(AsyncBaseClient):
    """Asynchronous client for the per-session terminal endpoints."""

    async def execute(self, session_id: str, command: str) -> CommandResult:
        """Run a command line in the session."""
        data = await self._post(
            self._session_path(session_id, "/execute"), json={"command": command}
        )
        return CommandResult(**data)

    async def prompt(self, session_id: str) -> PromptState:
        data = await self._get(self._session_path(session_id, "/prompt"))
        return PromptState(**data)

    async def history(self, session_id: str) -> History:
        data = await self._get(self._session_path(session_id, "/history"))
        return History(**data)

    async def transcript(self, session_id: str) -> Transcript:
        data = await self._get(self._session_path(session_id, "/transcript"))
        return Transcript(**data)

    async def environment(self, session_id: str) -> dict[str, str]:
        data = await self._get(self._session_path(session_id, "/environment"))
        return data["variables"]

    async def processes(self, session_id: str) -> ProcessList:
        data = await self._get(self._session_path(session_id, "/processes"))
        return ProcessList(**data)

    async def suggestions(
        self, session_id: str, prefix: str, limit: int | None = None
    ) -> Suggestions:
        data = await self._get(
            self._session_path(session_id, "/suggestions"),
            params={"prefix": prefix, "limit": limit},
        )
        return Suggestions(**data)

    async def filesystem(self, session_id: str, path: str = ".") -> FilesystemNodeResponse:
        data = await self._get(
            self._session_path(session_id, "/filesystem"), params={"path": path}
        )
        return FilesystemNodeResponse(**data)

    async def read_file(self, session_id: str, path: str) -> FileContent:
        data = await self._get(
            self._session_path(session_id, "/filesystem/content"), params={"path": path}
        )
        return FileContent(**data)
