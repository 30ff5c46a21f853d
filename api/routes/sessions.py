"""Session lifecycle endpoints.

Creates, lists, inspects and deletes hosted terminal sessions. Each session
starts from the default demo filesystem and process table.
"""

from typing import Optional

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from api.dependencies import SessionRegistryDep, TerminalSessionDep
from api.models import SessionInfo
from api.utils import session_info

router = APIRouter(
    prefix="/sessions",
    tags=["sessions"],
)


# Request Models


class CreateSessionRequest(BaseModel):
    """Request to create a terminal session.

    Args:
        seed: Optional seed for the session's random source, making
            randomized outputs (ping times, uptime, ps columns) reproducible.
    """

    seed: Optional[int] = Field(default=None, description="Random seed for reproducible output")


# Response Models


class CreateSessionResponse(SessionInfo):
    """Response for a newly created session.

    Args:
        welcome_banner: Text shown when the terminal opens.
    """

    welcome_banner: str = Field(description="Banner shown when the terminal opens")


class SessionListResponse(BaseModel):
    """Response listing all hosted sessions.

    Args:
        sessions: Session summaries in creation order.
        count: Number of sessions.
    """

    sessions: list[SessionInfo] = Field(description="Hosted sessions")
    count: int = Field(description="Number of hosted sessions")


class DeleteSessionResponse(BaseModel):
    """Response confirming a session deletion."""

    session_id: str
    deleted: bool = True


# Route Handlers


@router.post("", response_model=CreateSessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(registry: SessionRegistryDep, request: Optional[CreateSessionRequest] = None):
    """Create a new terminal session.

    Returns:
        CreateSessionResponse: Id, prompt, working directory and welcome banner.
    """
    seed = request.seed if request is not None else None
    terminal = registry.create(seed=seed)
    return CreateSessionResponse(
        **session_info(terminal).model_dump(),
        welcome_banner=terminal.welcome_banner,
    )


@router.get("", response_model=SessionListResponse)
async def list_sessions(registry: SessionRegistryDep):
    """List all hosted sessions."""
    sessions = [session_info(terminal) for terminal in registry.list_sessions()]
    return SessionListResponse(sessions=sessions, count=len(sessions))


@router.get("/{session_id}", response_model=SessionInfo)
async def get_session(terminal: TerminalSessionDep):
    """Get the summary of one session."""
    return session_info(terminal)


@router.delete("/{session_id}", response_model=DeleteSessionResponse)
async def delete_session(session_id: str, registry: SessionRegistryDep):
    """Delete a session and all of its state.

    Raises:
        SessionNotFoundError: If the session doesn't exist (404).
    """
    registry.delete(session_id)
    return DeleteSessionResponse(session_id=session_id)
