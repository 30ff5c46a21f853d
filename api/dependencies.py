"""Dependency injection providers for the FastAPI application.

This module defines dependencies that can be injected into route handlers,
providing access to the shared SessionRegistry and to individual terminal
sessions looked up by their path parameter.
"""

import logging
import os
import random
import threading
from typing import Annotated, Callable, Optional

from fastapi import Depends

from api.exceptions import SessionLimitError, SessionNotFoundError
from assistant.explainer import ErrorExplainer, HTTPErrorExplainer
from models.session import SessionState
from models.terminal import TerminalSession

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 100


class SessionRegistry:
    """Thread-safe collection of hosted terminal sessions.

    Each session owns its own filesystem, environment, history and process
    table; the registry only guards its own dictionary.

    Args:
        max_sessions: Cap on concurrently hosted sessions.
        explainer: Explanation provider wired into every new session.
        state_factory: Builds the SessionState for a new session from an
            optional random seed. Defaults to SessionState.create.
    """

    def __init__(
        self,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        explainer: Optional[ErrorExplainer] = None,
        state_factory: Optional[Callable[[Optional[int]], SessionState]] = None,
    ):
        self.max_sessions = max_sessions
        self.explainer = explainer
        self.state_factory = state_factory or self._default_state
        self._sessions: dict[str, TerminalSession] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _default_state(seed: Optional[int]) -> SessionState:
        rng = random.Random(seed) if seed is not None else None
        return SessionState.create(rng=rng)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self, seed: Optional[int] = None) -> TerminalSession:
        """Create and register a new terminal session.

        Args:
            seed: Optional seed for the session's random source.

        Returns:
            The new TerminalSession.

        Raises:
            SessionLimitError: If max_sessions sessions are already hosted.
        """
        with self._lock:
            if len(self._sessions) >= self.max_sessions:
                raise SessionLimitError(self.max_sessions)
            session = TerminalSession(
                state=self.state_factory(seed),
                explainer=self.explainer,
            )
            self._sessions[session.session_id] = session

        logger.info(f"Created terminal session {session.session_id}")
        return session

    def get(self, session_id: str) -> TerminalSession:
        """Return a hosted session.

        Raises:
            SessionNotFoundError: If no session has this id.
        """
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def delete(self, session_id: str) -> None:
        """Remove a hosted session.

        Raises:
            SessionNotFoundError: If no session has this id.
        """
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFoundError(session_id)
        logger.info(f"Deleted terminal session {session_id}")

    def list_sessions(self) -> list[TerminalSession]:
        """Return the hosted sessions in creation order."""
        with self._lock:
            return list(self._sessions.values())

    def clear(self) -> None:
        with self._lock:
            count = len(self._sessions)
            self._sessions.clear()
        logger.info(f"Cleared {count} terminal sessions")


# Global state
# A single registry instance is created when the app starts
_session_registry: SessionRegistry | None = None


def get_session_registry() -> SessionRegistry:
    """Get the shared SessionRegistry instance.

    This function is a FastAPI dependency. Tests replace it through
    app.dependency_overrides to inject a registry with deterministic sessions.

    Returns:
        The shared SessionRegistry instance.

    Raises:
        RuntimeError: If the registry hasn't been initialized yet.

    Example:
        @router.get("/some-endpoint")
        async def my_handler(registry: SessionRegistryDep):
            return {"count": len(registry)}
    """
    if _session_registry is None:
        raise RuntimeError(
            "SessionRegistry not initialized. Call initialize_session_registry() first."
        )

    return _session_registry


def initialize_session_registry() -> SessionRegistry:
    """Initialize the shared SessionRegistry instance.

    Reads VTS_MAX_SESSIONS for the session cap and wires an HTTP error
    explainer when VTS_ASSISTANT_URL is set.

    Returns:
        The newly created SessionRegistry instance.

    Raises:
        ValueError: If VTS_MAX_SESSIONS is not a positive integer.
    """
    global _session_registry

    raw_limit = os.environ.get("VTS_MAX_SESSIONS", str(DEFAULT_MAX_SESSIONS))
    try:
        max_sessions = int(raw_limit)
    except ValueError:
        raise ValueError(f"VTS_MAX_SESSIONS must be an integer, got '{raw_limit}'")
    if max_sessions < 1:
        raise ValueError(f"VTS_MAX_SESSIONS must be positive, got {max_sessions}")

    explainer = HTTPErrorExplainer.from_environment()
    if explainer is None:
        logger.info("No assistant endpoint configured; error explanations disabled")

    _session_registry = SessionRegistry(max_sessions=max_sessions, explainer=explainer)
    return _session_registry


def shutdown_session_registry():
    """Drop all hosted sessions and the shared registry."""
    global _session_registry

    if _session_registry is not None:
        _session_registry.clear()

    _session_registry = None


# Type alias for dependency injection
SessionRegistryDep = Annotated[SessionRegistry, Depends(get_session_registry)]


def get_terminal_session(session_id: str, registry: SessionRegistryDep) -> TerminalSession:
    """Resolve the {session_id} path parameter to a hosted session.

    Raises:
        SessionNotFoundError: If no session has this id.
    """
    return registry.get(session_id)


TerminalSessionDep = Annotated[TerminalSession, Depends(get_terminal_session)]
