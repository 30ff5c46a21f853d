"""Terminal host - one interactive terminal around a SessionState.

The host is what a front-end talks to: it feeds typed lines to the command
dispatcher, keeps the visible transcript, honours the clear sentinel,
classifies error outputs and, when an explainer is wired in, appends an
explanation for failed commands.
"""

import logging
import threading
import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from assistant.explainer import EXPLANATION_PREFIX, ErrorExplainer, is_error_output
from commands import CommandDispatcher, is_clear_command
from models.session import SessionState

logger = logging.getLogger(__name__)

WELCOME_BANNER = (
    "Welcome to AI-Powered Linux Terminal v1.0\n"
    'Type "help" for available commands or use the AI assistant for suggestions.'
)


class LineKind(str, Enum):
    """Kind of a transcript line."""

    COMMAND = "command"
    OUTPUT = "output"
    ERROR = "error"


class TranscriptLine(BaseModel):
    """One entry of the visible terminal transcript.

    Args:
        line_id: Unique identifier of the line.
        kind: Whether this is a typed command, normal output or error output.
        content: Text of the line (may span several physical lines).
        timestamp: When the line was added.
        prompt: Prompt shown before a command line.
    """

    line_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    kind: LineKind
    content: str
    timestamp: datetime
    prompt: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert transcript line to dictionary for API responses."""
        return {
            "line_id": self.line_id,
            "kind": self.kind.value,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
            "prompt": self.prompt,
        }


class ExecutionResult(BaseModel):
    """Outcome of running one line through the terminal host.

    Args:
        command: The trimmed command line.
        output: Text produced by the command ("" when cleared or silent).
        output_type: LineKind.ERROR for error-class output, else LineKind.OUTPUT.
        cleared: Whether the transcript was cleared.
        prompt: Prompt after execution.
        current_directory: Working directory after execution.
        explanation: Explanation from the explainer, if any.
    """

    command: str
    output: str
    output_type: LineKind = LineKind.OUTPUT
    cleared: bool = False
    prompt: str
    current_directory: str
    explanation: Optional[str] = None


class TerminalSession:
    """An interactive terminal: session state plus transcript.

    Commands against one TerminalSession are serialized with a lock so that
    concurrent callers never interleave mutations of the same state.

    Args:
        state: Session state to drive. A fresh default session if omitted.
        session_id: Identifier; a UUID is generated if omitted.
        explainer: Optional provider of explanations for failed commands.
        dispatcher: Command dispatcher; the default registry if omitted.
    """

    def __init__(
        self,
        state: Optional[SessionState] = None,
        session_id: Optional[str] = None,
        explainer: Optional[ErrorExplainer] = None,
        dispatcher: Optional[CommandDispatcher] = None,
    ):
        self.state = state if state is not None else SessionState.create()
        self.session_id = session_id or str(uuid.uuid4())
        self.explainer = explainer
        self.dispatcher = dispatcher or CommandDispatcher()
        self.created_at = self.state.now()
        self.transcript: list[TranscriptLine] = []
        self._lock = threading.Lock()
        self._append(LineKind.OUTPUT, WELCOME_BANNER)

    @property
    def welcome_banner(self) -> str:
        return WELCOME_BANNER

    def prompt(self) -> str:
        return self.state.prompt()

    def get_current_directory(self) -> str:
        return self.state.get_current_directory()

    def _append(self, kind: LineKind, content: str, prompt: Optional[str] = None) -> None:
        self.transcript.append(
            TranscriptLine(kind=kind, content=content, timestamp=self.state.now(), prompt=prompt)
        )

    def execute(self, raw_line: str) -> ExecutionResult:
        """Run one typed line.

        Blank input is ignored entirely (no transcript entry, no history).

        Args:
            raw_line: The line as typed.

        Returns:
            ExecutionResult describing the output and resulting prompt.
        """
        command = raw_line.strip()
        with self._lock:
            if not command:
                return self._result(command, "")

            self._append(LineKind.COMMAND, command, prompt=self.state.prompt())
            output = self.dispatcher.execute(command, self.state)

            if is_clear_command(command):
                self.transcript.clear()
                logger.debug(f"Session {self.session_id} transcript cleared")
                return self._result(command, "", cleared=True)

            is_error = is_error_output(output)
            output_type = LineKind.ERROR if is_error else LineKind.OUTPUT
            if output:
                self._append(output_type, output)
            result = self._result(command, output, output_type)

        if not is_error:
            return result

        # Explainer runs without the lock held; it may block on the network
        result.explanation = self._explain(command, output)
        if result.explanation:
            with self._lock:
                self._append(LineKind.OUTPUT, f"{EXPLANATION_PREFIX}{result.explanation}")
        return result

    def _explain(self, command: str, output: str) -> Optional[str]:
        """Ask the explainer about a failed command; failures are logged and ignored."""
        if self.explainer is None:
            return None
        try:
            return self.explainer.explain(command, output)
        except Exception as e:
            logger.warning(f"Error explanation failed for '{command}': {e}")
            return None

    def _result(
        self,
        command: str,
        output: str,
        output_type: LineKind = LineKind.OUTPUT,
        cleared: bool = False,
    ) -> ExecutionResult:
        return ExecutionResult(
            command=command,
            output=output,
            output_type=output_type,
            cleared=cleared,
            prompt=self.state.prompt(),
            current_directory=self.state.get_current_directory(),
        )

    def summary(self) -> dict:
        """Short description of the session for listings."""
        return {
            "session_id": self.session_id,
            "prompt": self.state.prompt(),
            "current_directory": self.state.get_current_directory(),
            "history_length": len(self.state.command_history),
            "created_at": self.created_at.isoformat(),
        }
