"""Command registry - the flat name-to-handler table.

Handlers are plain functions taking (args, session) and returning the text
to display. They are registered with the @command decorator when their
module is imported; commands/__init__.py imports every handler module so the
table is complete once the package is loaded.

Example:
    >>> from commands.registry import command
    >>> @command("pwd", group="file")
    ... def pwd(args, session):
    ...     return session.current_directory
"""

from typing import TYPE_CHECKING, Callable, Iterator, Optional

if TYPE_CHECKING:
    from models.session import SessionState

Handler = Callable[[list[str], "SessionState"], str]

# Display order used by help-style listings
GROUPS = (
    "file",
    "archive",
    "process",
    "system",
    "network",
    "editor",
    "package",
    "dev",
    "environment",
    "docs",
    "misc",
)

# Commands bash implements itself rather than as programs on PATH
SHELL_BUILTINS = frozenset(
    {
        "alias",
        "bg",
        "cd",
        "echo",
        "exit",
        "export",
        "fg",
        "help",
        "history",
        "jobs",
        "kill",
        "logout",
        "pwd",
        "source",
        ".",
        "type",
        "unalias",
        "unset",
    }
)


class CommandRegistry:
    """Mapping of command names to handlers.

    Dispatch is flat: one name maps to exactly one handler. Several names may
    share a handler (vi/vim, python/python3).
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}
        self._groups: dict[str, str] = {}

    def register(self, name: str, handler: Handler, group: str = "misc") -> None:
        """Register handler under name.

        Args:
            name: Command name as typed by the user.
            handler: Function implementing the command.
            group: Domain group the command belongs to.

        Raises:
            ValueError: If name is already registered or group is unknown.
        """
        if name in self._handlers:
            raise ValueError(f"Command '{name}' is already registered")
        if group not in GROUPS:
            raise ValueError(f"Unknown command group '{group}'")
        self._handlers[name] = handler
        self._groups[name] = group

    def command(self, *names: str, group: str = "misc") -> Callable[[Handler], Handler]:
        """Decorator registering a handler under one or more names."""

        def decorator(handler: Handler) -> Handler:
            for name in names:
                self.register(name, handler, group=group)
            return handler

        return decorator

    def get(self, name: str) -> Optional[Handler]:
        return self._handlers.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def group_of(self, name: str) -> Optional[str]:
        return self._groups.get(name)

    def names_in_group(self, group: str) -> list[str]:
        return sorted(name for name, g in self._groups.items() if g == group)

    def is_builtin(self, name: str) -> bool:
        """Whether name is a registered shell builtin (as opposed to a program)."""
        return name in self._handlers and name in SHELL_BUILTINS

    def is_program(self, name: str) -> bool:
        """Whether name is a registered command that lives on PATH."""
        return name in self._handlers and name not in SHELL_BUILTINS


# The process-wide table, filled in at import time
default_registry = CommandRegistry()
command = default_registry.command
