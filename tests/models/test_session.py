"""Unit tests for SessionState."""

import pytest
from pydantic import ValidationError

from models.filesystem import NotADirectoryFSError, PathNotFoundError
from models.seed import DEFAULT_ENVIRONMENT, create_default_filesystem
from models.session import SessionState
from tests.fixtures.sessions import FIXED_NOW, create_session_state


class TestSessionCreation:
    """Tests for SessionState.create() and validation."""

    def test_defaults(self, session_state) -> None:
        """A new session starts in the home directory with the demo environment."""
        assert session_state.current_directory == "/home/user"
        assert session_state.environment["PWD"] == "/home/user"
        assert session_state.environment["USER"] == "user"
        assert session_state.command_history == []
        assert session_state.hostname == "ai-terminal"

    def test_sessions_do_not_share_state(self) -> None:
        """Two sessions own independent filesystems and environments."""
        first = create_session_state()
        second = create_session_state()
        first.environment["FOO"] = "bar"
        first.filesystem.remove("/home/user", "Documents", recursive=True)

        assert "FOO" not in second.environment
        assert second.filesystem.exists("/home/user/Documents")
        assert "FOO" not in DEFAULT_ENVIRONMENT

    def test_clock_is_used(self, session_state) -> None:
        assert session_state.now() == FIXED_NOW
        assert session_state.filesystem.lookup("/etc/passwd").modified_at == FIXED_NOW

    def test_missing_current_directory_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SessionState(
                filesystem=create_default_filesystem(FIXED_NOW),
                current_directory="/nowhere",
            )

    def test_current_directory_canonicalized(self) -> None:
        state = SessionState(
            filesystem=create_default_filesystem(FIXED_NOW),
            current_directory="/home/user/Documents/",
        )
        assert state.current_directory == "/home/user/Documents"
        assert state.environment["PWD"] == "/home/user/Documents"


class TestPrompt:
    """Tests for SessionState.prompt()."""

    def test_home_shown_as_tilde(self, session_state) -> None:
        assert session_state.prompt() == "user@ai-terminal:~$"

    def test_below_home(self, session_state) -> None:
        session_state.change_directory("Documents")
        assert session_state.prompt() == "user@ai-terminal:~/Documents$"

    def test_outside_home(self, session_state) -> None:
        session_state.change_directory("/etc")
        assert session_state.prompt() == "user@ai-terminal:/etc$"

    def test_home_prefix_must_be_whole_segment(self, session_state) -> None:
        """/home/userdata is not under /home/user."""
        session_state.filesystem.root.children["home"].children["userdata"] = (
            session_state.filesystem.lookup("/home/user/Downloads").model_copy(
                update={"name": "userdata"}
            )
        )
        session_state.change_directory("/home/userdata")
        assert session_state.prompt() == "user@ai-terminal:/home/userdata$"


class TestChangeDirectory:
    """Tests for SessionState.change_directory()."""

    def test_updates_pwd_and_oldpwd(self, session_state) -> None:
        result = session_state.change_directory("../..")
        assert result == "/"
        assert session_state.get_current_directory() == "/"
        assert session_state.environment["PWD"] == "/"
        assert session_state.environment["OLDPWD"] == "/home/user"

    def test_missing_target(self, session_state) -> None:
        """A failed cd leaves the session untouched."""
        with pytest.raises(PathNotFoundError):
            session_state.change_directory("nowhere")
        assert session_state.current_directory == "/home/user"
        assert "OLDPWD" not in session_state.environment

    def test_file_target(self, session_state) -> None:
        with pytest.raises(NotADirectoryFSError):
            session_state.change_directory("/etc/passwd")

    def test_result_is_canonical(self, session_state) -> None:
        assert session_state.change_directory("/home//user/./Documents/") == "/home/user/Documents"


class TestSessionHelpers:
    """Tests for resolve(), lookup() and record_command()."""

    def test_resolve_relative(self, session_state) -> None:
        assert session_state.resolve("Documents") == "/home/user/Documents"

    def test_lookup(self, session_state) -> None:
        assert session_state.lookup("Documents/readme.txt").is_file
        assert session_state.lookup("nope") is None

    def test_record_command_keeps_raw_line(self, session_state) -> None:
        session_state.record_command("  ls   -la ")
        assert session_state.command_history == ["  ls   -la "]
