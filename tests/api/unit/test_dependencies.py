"""Unit tests for API dependency injection.

This module tests the dependency providers in api/dependencies.py, including
the SessionRegistry, registry initialization from the environment, retrieval
and shutdown.

Test Organization:
- SessionRegistry tests - create, get, delete, list, limit
- get_session_registry tests - retrieval behavior and error handling
- initialize_session_registry tests - environment configuration
- shutdown_session_registry tests - cleanup behavior
"""

import pytest

from api.dependencies import (
    DEFAULT_MAX_SESSIONS,
    SessionRegistry,
    get_session_registry,
    get_terminal_session,
    initialize_session_registry,
    shutdown_session_registry,
)
from api.exceptions import SessionLimitError, SessionNotFoundError
from assistant.explainer import HTTPErrorExplainer
from models.terminal import TerminalSession
from tests.fixtures.api import create_session_registry
from tests.fixtures.sessions import create_session_state


# =============================================================================
# Test Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_global_registry(monkeypatch):
    """Reset the global registry and its environment before and after each test.

    This ensures tests are isolated and don't affect each other.
    """
    import api.dependencies as deps

    original_registry = deps._session_registry
    deps._session_registry = None
    monkeypatch.delenv("VTS_MAX_SESSIONS", raising=False)
    monkeypatch.delenv("VTS_ASSISTANT_URL", raising=False)

    yield

    deps._session_registry = original_registry


# =============================================================================
# SessionRegistry Tests
# =============================================================================


class TestSessionRegistry:
    """Tests for the SessionRegistry container."""

    def test_create_registers_session(self):
        registry = create_session_registry()

        session = registry.create()

        assert isinstance(session, TerminalSession)
        assert registry.get(session.session_id) is session
        assert len(registry) == 1

    def test_create_uses_factory_seed(self):
        seeds = []

        def state_factory(seed):
            seeds.append(seed)
            return create_session_state(seed)

        registry = SessionRegistry(state_factory=state_factory)

        registry.create(seed=7)
        registry.create()

        assert seeds == [7, None]

    def test_default_state_is_seeded(self):
        """Sessions created with the same seed draw the same random values."""
        registry = SessionRegistry()
        first = registry.create(seed=11).state
        second = registry.create(seed=11).state

        assert first.rng.random() == second.rng.random()

    def test_explainer_wired_into_sessions(self):
        explainer = object()
        registry = SessionRegistry(explainer=explainer)
        assert registry.create().explainer is explainer

    def test_limit(self):
        registry = create_session_registry(max_sessions=2)
        registry.create()
        registry.create()

        with pytest.raises(SessionLimitError) as exc_info:
            registry.create()

        assert exc_info.value.max_sessions == 2
        assert len(registry) == 2

    def test_delete_frees_slot(self):
        registry = create_session_registry(max_sessions=1)
        session = registry.create()

        registry.delete(session.session_id)

        assert len(registry) == 0
        registry.create()

    def test_get_unknown(self):
        with pytest.raises(SessionNotFoundError):
            create_session_registry().get("missing")

    def test_delete_unknown(self):
        with pytest.raises(SessionNotFoundError):
            create_session_registry().delete("missing")

    def test_list_in_creation_order(self):
        registry = create_session_registry()
        created = [registry.create() for _ in range(3)]
        assert registry.list_sessions() == created

    def test_clear(self):
        registry = create_session_registry()
        registry.create()
        registry.clear()
        assert registry.list_sessions() == []

    def test_get_terminal_session(self):
        registry = create_session_registry()
        session = registry.create()
        assert get_terminal_session(session.session_id, registry) is session


# =============================================================================
# get_session_registry Tests
# =============================================================================


class TestGetSessionRegistry:
    """Tests for get_session_registry dependency function."""

    def test_raises_runtime_error_when_not_initialized(self):
        with pytest.raises(RuntimeError) as exc_info:
            get_session_registry()

        assert "SessionRegistry not initialized" in str(exc_info.value)
        assert "initialize_session_registry()" in str(exc_info.value)

    def test_returns_same_instance_after_initialization(self):
        registry = initialize_session_registry()
        assert get_session_registry() is registry
        assert get_session_registry() is get_session_registry()


# =============================================================================
# initialize_session_registry Tests
# =============================================================================


class TestInitializeSessionRegistry:
    """Tests for initialize_session_registry function."""

    def test_defaults(self):
        registry = initialize_session_registry()

        assert registry.max_sessions == DEFAULT_MAX_SESSIONS
        assert registry.explainer is None
        assert len(registry) == 0

    def test_reads_max_sessions(self, monkeypatch):
        monkeypatch.setenv("VTS_MAX_SESSIONS", "3")
        assert initialize_session_registry().max_sessions == 3

    @pytest.mark.parametrize("value,message", [("many", "must be an integer"), ("0", "must be positive")])
    def test_invalid_max_sessions(self, monkeypatch, value, message):
        monkeypatch.setenv("VTS_MAX_SESSIONS", value)

        with pytest.raises(ValueError, match=message):
            initialize_session_registry()

    def test_configures_explainer_from_environment(self, monkeypatch):
        monkeypatch.setenv("VTS_ASSISTANT_URL", "http://assistant.local")

        registry = initialize_session_registry()

        assert isinstance(registry.explainer, HTTPErrorExplainer)
        assert registry.explainer.url == "http://assistant.local"


# =============================================================================
# shutdown_session_registry Tests
# =============================================================================


class TestShutdownSessionRegistry:
    """Tests for shutdown_session_registry function."""

    def test_drops_sessions_and_registry(self):
        registry = initialize_session_registry()
        registry.create()

        shutdown_session_registry()

        assert len(registry) == 0
        with pytest.raises(RuntimeError):
            get_session_registry()

    def test_safe_when_not_initialized(self):
        shutdown_session_registry()
        shutdown_session_registry()
