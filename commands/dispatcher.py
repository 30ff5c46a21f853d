"""Command dispatcher - turns a raw command line into handler output.

The dispatcher is the single entry point into the command engine. It
tokenizes the line, records it in the session history and hands the
arguments to the handler registered under the command name.
"""

import logging
from typing import Optional

from commands.registry import CommandRegistry, default_registry
from models.session import SessionState

logger = logging.getLogger(__name__)

# Returned instead of text when the caller should wipe its transcript
CLEAR_SENTINEL = "CLEAR"


def tokenize(raw_line: str) -> list[str]:
    """Split a command line on whitespace runs.

    There is no quoting, globbing, piping or redirection; every
    whitespace-separated word is one token.

    Example:
        >>> tokenize("  ls   -la /home ")
        ['ls', '-la', '/home']
    """
    return raw_line.split()


def is_clear_command(raw_line: str) -> bool:
    """Whether raw_line invokes clear, judged by the command name alone."""
    tokens = tokenize(raw_line)
    return bool(tokens) and tokens[0] == "clear"


class CommandDispatcher:
    """Executes command lines against a session using a command registry.

    Args:
        registry: Name-to-handler table. Defaults to the table populated by
            importing the commands package.
    """

    def __init__(self, registry: Optional[CommandRegistry] = None):
        self.registry = registry if registry is not None else default_registry

    def execute(self, raw_line: str, session: SessionState) -> str:
        """Execute one command line and return its output.

        Every line, including empty ones, is appended to the session history
        before dispatch. The only exception is "clear", which returns
        CLEAR_SENTINEL without being recorded.

        Args:
            raw_line: The line exactly as typed.
            session: Session to run the command against.

        Returns:
            Output text ("" for no output), CLEAR_SENTINEL for clear, or
            "<shell>: <cmd>: command not found" for unknown commands.
        """
        tokens = tokenize(raw_line)
        if is_clear_command(raw_line):
            logger.debug("clear requested")
            return CLEAR_SENTINEL

        session.record_command(raw_line)
        if not tokens:
            return ""

        name, args = tokens[0], tokens[1:]
        handler = self.registry.get(name)
        if handler is None:
            logger.debug(f"Unknown command '{name}'")
            return f"{session.shell_name}: {name}: command not found"

        logger.debug(f"Dispatching '{name}' with {len(args)} argument(s)")
        return handler(args, session)


_default_dispatcher: Optional[CommandDispatcher] = None


def get_dispatcher() -> CommandDispatcher:
    """Return the process-wide dispatcher over the default registry."""
    global _default_dispatcher
    if _default_dispatcher is None:
        _default_dispatcher = CommandDispatcher()
    return _default_dispatcher


def execute(raw_line: str, session: SessionState) -> str:
    """Execute raw_line against session with the default dispatcher."""
    return get_dispatcher().execute(raw_line, session)
