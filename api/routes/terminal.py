"""Terminal interaction endpoints.

Runs command lines inside a hosted session and exposes the session's prompt,
history, transcript, environment, process table and command suggestions.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from api.dependencies import TerminalSessionDep
from assistant.suggestions import MAX_SUGGESTIONS, Suggestion, get_local_suggestions
from models.process import ProcessRecord

router = APIRouter(
    prefix="/sessions/{session_id}",
    tags=["terminal"],
)


# Request Models


class ExecuteRequest(BaseModel):
    """Request to run one command line.

    Args:
        command: The line as typed. Blank lines are accepted and ignored.
    """

    command: str = Field(max_length=4096, description="Command line to execute")


# Response Models


class ExecuteResponse(BaseModel):
    """Result of running one command line.

    Args:
        command: The trimmed command line.
        output: Text produced by the command.
        output_type: "error" for error-class output, else "output".
        clear: Whether the terminal should clear its screen.
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
    explanation: Optional[str] = None


class PromptResponse(BaseModel):
    """Current prompt and working directory."""

    prompt: str
    current_directory: str


class HistoryResponse(BaseModel):
    """Recorded command lines, oldest first."""

    commands: list[str]
    count: int


class TranscriptLineResponse(BaseModel):
    """One line of the visible transcript."""

    line_id: str
    kind: Literal["command", "output", "error"]
    content: str
    timestamp: str
    prompt: Optional[str] = None


class TranscriptResponse(BaseModel):
    """Visible transcript since the last clear."""

    lines: list[TranscriptLineResponse]
    count: int


class EnvironmentResponse(BaseModel):
    """Session environment variables."""

    variables: dict[str, str]


class ProcessListResponse(BaseModel):
    """Simulated process table."""

    processes: list[ProcessRecord]
    count: int


class SuggestionsResponse(BaseModel):
    """Local command suggestions for a typed prefix."""

    prefix: str
    suggestions: list[Suggestion]


# Route Handlers


@router.post("/execute", response_model=ExecuteResponse)
async def execute_command(request: ExecuteRequest, terminal: TerminalSessionDep):
    """Execute a command line in the session.

    Command failures are part of the output text, never HTTP errors.

    Returns:
        ExecuteResponse: Output, classification and resulting prompt.
    """
    result = terminal.execute(request.command)
    return ExecuteResponse(
        command=result.command,
        output=result.output,
        output_type=result.output_type.value,
        clear=result.cleared,
        prompt=result.prompt,
        current_directory=result.current_directory,
        explanation=result.explanation,
    )


@router.get("/prompt", response_model=PromptResponse)
async def get_prompt(terminal: TerminalSessionDep):
    """Get the current prompt and working directory."""
    return PromptResponse(
        prompt=terminal.prompt(),
        current_directory=terminal.get_current_directory(),
    )


@router.get("/history", response_model=HistoryResponse)
async def get_history(terminal: TerminalSessionDep):
    """Get the command history of the session."""
    commands = list(terminal.state.command_history)
    return HistoryResponse(commands=commands, count=len(commands))


@router.get("/transcript", response_model=TranscriptResponse)
async def get_transcript(terminal: TerminalSessionDep):
    """Get the transcript lines shown since the last clear."""
    lines = [TranscriptLineResponse(**line.to_dict()) for line in terminal.transcript]
    return TranscriptResponse(lines=lines, count=len(lines))


@router.get("/environment", response_model=EnvironmentResponse)
async def get_environment(terminal: TerminalSessionDep):
    """Get the session's environment variables."""
    return EnvironmentResponse(variables=dict(terminal.state.environment))


@router.get("/processes", response_model=ProcessListResponse)
async def get_processes(terminal: TerminalSessionDep):
    """Get the simulated process table."""
    processes = list(terminal.state.process_table)
    return ProcessListResponse(processes=processes, count=len(processes))


@router.get("/suggestions", response_model=SuggestionsResponse)
async def get_suggestions(
    terminal: TerminalSessionDep,
    prefix: str = Query(default="", description="Partially typed command line"),
    limit: int = Query(default=MAX_SUGGESTIONS, ge=1, le=10, description="Maximum suggestions"),
):
    """Suggest complete command lines for a typed prefix."""
    return SuggestionsResponse(
        prefix=prefix,
        suggestions=get_local_suggestions(prefix, limit=limit),
    )
