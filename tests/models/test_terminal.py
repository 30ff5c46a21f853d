"""Unit tests for the terminal host (TerminalSession).

This module tests:
- Transcript bookkeeping for commands, outputs and errors
- The clear sentinel
- Error classification and the optional explainer hook
"""

import threading

from models.terminal import WELCOME_BANNER, LineKind, TerminalSession, TranscriptLine
from tests.fixtures.sessions import (
    FIXED_NOW,
    RecordingExplainer,
    create_terminal_session,
    write_file,
)


# =============================================================================
# Transcript
# =============================================================================


class TestTranscript:
    """Tests for how execute() records the transcript."""

    def test_starts_with_banner(self, terminal) -> None:
        assert len(terminal.transcript) == 1
        assert terminal.transcript[0].content == WELCOME_BANNER
        assert terminal.welcome_banner == WELCOME_BANNER

    def test_command_and_output_lines(self, terminal) -> None:
        """A command appends its line with the prompt, then its output."""
        result = terminal.execute("pwd")

        assert result.output == "/home/user"
        assert result.output_type == LineKind.OUTPUT
        command_line, output_line = terminal.transcript[-2:]
        assert command_line.kind == LineKind.COMMAND
        assert command_line.content == "pwd"
        assert command_line.prompt == "user@ai-terminal:~$"
        assert output_line.kind == LineKind.OUTPUT
        assert output_line.content == "/home/user"
        assert output_line.timestamp == FIXED_NOW

    def test_silent_command_adds_no_output_line(self, terminal) -> None:
        result = terminal.execute("cd Documents")
        assert result.output == ""
        assert terminal.transcript[-1].kind == LineKind.COMMAND
        assert result.prompt == "user@ai-terminal:~/Documents$"
        assert result.current_directory == "/home/user/Documents"

    def test_command_is_trimmed(self, terminal) -> None:
        result = terminal.execute("   whoami  ")
        assert result.command == "whoami"
        assert terminal.state.command_history == ["whoami"]

    def test_blank_input_ignored(self, terminal) -> None:
        """Blank lines touch neither the transcript nor the history."""
        result = terminal.execute("   ")
        assert result.output == ""
        assert len(terminal.transcript) == 1
        assert terminal.state.command_history == []

    def test_transcript_line_to_dict(self) -> None:
        line = TranscriptLine(kind=LineKind.ERROR, content="boom", timestamp=FIXED_NOW)
        data = line.to_dict()
        assert data["kind"] == "error"
        assert data["timestamp"] == FIXED_NOW.isoformat()
        assert data["prompt"] is None
        assert data["line_id"]


class TestClear:
    """Tests for the clear sentinel."""

    def test_clear_empties_transcript(self, terminal) -> None:
        terminal.execute("ls")
        result = terminal.execute("clear")

        assert result.cleared is True
        assert result.output == ""
        assert terminal.transcript == []

    def test_clear_not_recorded_in_history(self, terminal) -> None:
        terminal.execute("ls")
        terminal.execute("clear")
        assert terminal.state.command_history == ["ls"]

    def test_clear_with_arguments_still_clears(self, terminal) -> None:
        terminal.execute("ls")
        assert terminal.execute("clear -x").cleared is True
        assert terminal.transcript == []

    def test_echo_of_sentinel_text_is_plain_output(self, terminal) -> None:
        """Output that happens to read CLEAR is shown, not treated as clear."""
        before = len(terminal.transcript)

        result = terminal.execute("echo CLEAR")

        assert result.cleared is False
        assert result.output == "CLEAR"
        assert len(terminal.transcript) == before + 2
        assert terminal.transcript[-1].content == "CLEAR"
        assert terminal.state.command_history == ["echo CLEAR"]

    def test_file_containing_sentinel_text_is_printed(self, terminal) -> None:
        write_file(terminal.state, "/home/user/marker.txt", "CLEAR")
        terminal.execute("ls")

        result = terminal.execute("cat marker.txt")

        assert result.cleared is False
        assert result.output == "CLEAR"
        assert [line.content for line in terminal.transcript[-2:]] == ["cat marker.txt", "CLEAR"]
        assert any(line.content == "ls" for line in terminal.transcript)


# =============================================================================
# Error handling
# =============================================================================


class TestErrorClassification:
    """Tests for error classification and explanations."""

    def test_unknown_command_is_error(self, terminal) -> None:
        result = terminal.execute("frobnicate")
        assert result.output == "bash: frobnicate: command not found"
        assert result.output_type == LineKind.ERROR
        assert terminal.transcript[-1].kind == LineKind.ERROR
        assert result.explanation is None

    def test_missing_file_is_error(self, terminal) -> None:
        result = terminal.execute("cat nope.txt")
        assert result.output_type == LineKind.ERROR

    def test_explainer_called_for_errors(self) -> None:
        """Error output is explained and the answer is appended as output."""
        explainer = RecordingExplainer(answer="Try 'ls' instead.")
        terminal = create_terminal_session(explainer=explainer)

        result = terminal.execute("sl")

        assert explainer.calls == [("sl", "bash: sl: command not found")]
        assert result.explanation == "Try 'ls' instead."
        assert terminal.transcript[-1].kind == LineKind.OUTPUT
        assert terminal.transcript[-1].content == "AI Assistant: Try 'ls' instead."

    def test_explainer_not_called_for_success(self) -> None:
        explainer = RecordingExplainer()
        terminal = create_terminal_session(explainer=explainer)
        terminal.execute("pwd")
        assert explainer.calls == []

    def test_empty_explanation_not_appended(self) -> None:
        terminal = create_terminal_session(explainer=RecordingExplainer(answer=None))
        result = terminal.execute("sl")
        assert result.explanation is None
        assert terminal.transcript[-1].kind == LineKind.ERROR

    def test_explainer_failure_is_ignored(self) -> None:
        """A failing explainer never breaks command execution."""
        explainer = RecordingExplainer(error=RuntimeError("assistant down"))
        terminal = create_terminal_session(explainer=explainer)

        result = terminal.execute("sl")

        assert result.output == "bash: sl: command not found"
        assert result.explanation is None
        assert terminal.transcript[-1].kind == LineKind.ERROR


# =============================================================================
# Session summary and concurrency
# =============================================================================


class TestSummary:
    """Tests for TerminalSession.summary()."""

    def test_summary(self, terminal) -> None:
        terminal.execute("cd /etc")
        summary = terminal.summary()
        assert summary == {
            "session_id": "test-session",
            "prompt": "user@ai-terminal:/etc$",
            "current_directory": "/etc",
            "history_length": 1,
            "created_at": FIXED_NOW.isoformat(),
        }

    def test_generated_session_id(self) -> None:
        assert TerminalSession().session_id != TerminalSession().session_id


class TestConcurrency:
    """Tests for serialized execution."""

    def test_parallel_commands_all_recorded(self, terminal) -> None:
        """Concurrent callers on one session never lose history entries."""
        threads = [
            threading.Thread(target=terminal.execute, args=(f"mkdir dir{i}",))
            for i in range(20)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(terminal.state.command_history) == 20
        home = terminal.state.filesystem.lookup("/home/user")
        assert all(f"dir{i}" in home.children for i in range(20))

    def test_explainer_runs_without_session_lock(self) -> None:
        """A slow explainer does not block other commands on the same session."""
        lock_states: list[bool] = []

        class LockCheckingExplainer(RecordingExplainer):
            def explain(self, command: str, error: str):
                lock_states.append(terminal._lock.locked())
                lock_states.append(terminal.execute("pwd").output == "/home/user")
                return super().explain(command, error)

        terminal = create_terminal_session(explainer=LockCheckingExplainer(answer="Typo."))

        result = terminal.execute("sl")

        assert lock_states == [False, True]
        assert result.explanation == "Typo."
        assert terminal.transcript[-1].content == "AI Assistant: Typo."
