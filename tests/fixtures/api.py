"""Shared fixtures for API testing.

These fixtures provide a TestClient bound to an isolated SessionRegistry for
each test. The registry builds deterministic sessions, and the global
registry of the app is never touched.
"""

from typing import Optional

import pytest
from fastapi.testclient import TestClient

from api.dependencies import SessionRegistry, get_session_registry
from main import app
from tests.fixtures.sessions import DEFAULT_SEED, create_session_state


def create_session_registry(max_sessions: int = 5, explainer=None) -> SessionRegistry:
    """Create a registry whose sessions use a fixed clock and seeded rng."""

    def state_factory(seed: Optional[int]):
        return create_session_state(seed if seed is not None else DEFAULT_SEED)

    return SessionRegistry(
        max_sessions=max_sessions,
        explainer=explainer,
        state_factory=state_factory,
    )


@pytest.fixture
def session_registry() -> SessionRegistry:
    """Provide a fresh, empty SessionRegistry."""
    return create_session_registry()


@pytest.fixture
def api_client(session_registry):
    """Provide a TestClient with session_registry injected.

    Yields:
        A TestClient whose requests resolve the registry dependency to
        session_registry.

    Example:
        def test_something(api_client):
            response = api_client.post("/sessions")
            assert response.status_code == 201
    """
    app.dependency_overrides[get_session_registry] = lambda: session_registry
    client = TestClient(app)

    yield client

    app.dependency_overrides.clear()


@pytest.fixture
def session_id(api_client) -> str:
    """Create a session through the API and return its id."""
    response = api_client.post("/sessions")
    assert response.status_code == 201, response.text
    return response.json()["session_id"]
