"""Session state model - everything one terminal instance owns."""

import random
from datetime import datetime, timezone
from typing import Callable, Optional

from pydantic import BaseModel, Field, model_validator

from models.filesystem import (
    FileSystem,
    FilesystemNode,
    NotADirectoryFSError,
    PathNotFoundError,
    canonical_path,
    resolve_path,
)
from models.process import ProcessTable
from models.seed import (
    DEFAULT_ENVIRONMENT,
    DEFAULT_HOSTNAME,
    DEFAULT_SHELL_NAME,
    HOME_DIRECTORY,
    create_default_filesystem,
    create_default_processes,
)


def utc_now() -> datetime:
    """Default session clock."""
    return datetime.now(timezone.utc)


class SessionState(BaseModel):
    """Complete mutable state of one terminal session.

    The session bundles the filesystem, environment variables, command
    history, process table and current directory. Command handlers read and
    mutate it; nothing in here is shared with other sessions.

    Randomized command output (ping latencies, ps memory figures...) must be
    drawn from rng, and timestamps from clock, so tests can substitute
    deterministic sources.

    Args:
        filesystem: The session's node store.
        current_directory: Canonical absolute path of the working directory.
        environment: Environment variables (PWD kept in sync with the cwd).
        command_history: Raw command lines in entry order.
        process_table: Simulated processes.
        hostname: Host name shown in the prompt.
        shell_name: Shell name used in "command not found" messages.
        rng: Random source for randomized output.
        clock: Zero-argument callable returning the current time.
    """

    filesystem: FileSystem
    current_directory: str = HOME_DIRECTORY
    environment: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_ENVIRONMENT))
    command_history: list[str] = Field(default_factory=list)
    process_table: ProcessTable = Field(default_factory=create_default_processes)
    hostname: str = DEFAULT_HOSTNAME
    shell_name: str = DEFAULT_SHELL_NAME
    rng: random.Random = Field(default_factory=random.Random)
    clock: Callable[[], datetime] = utc_now

    class Config:
        arbitrary_types_allowed = True

    @model_validator(mode="after")
    def validate_current_directory(self) -> "SessionState":
        """Ensure the working directory exists and PWD matches it.

        Raises:
            ValueError: If current_directory is not an existing directory.
        """
        node = self.filesystem.lookup(self.current_directory)
        if node is None or not node.is_directory:
            raise ValueError(
                f"Current directory '{self.current_directory}' is not an existing directory"
            )
        self.current_directory = canonical_path(self.current_directory)
        self.environment["PWD"] = self.current_directory
        return self

    @classmethod
    def create(
        cls,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> "SessionState":
        """Create a session seeded with the default demo state.

        Args:
            rng: Random source (a fresh unseeded one by default).
            clock: Time source (UTC wall clock by default).

        Returns:
            A new SessionState.
        """
        return cls(
            filesystem=create_default_filesystem(clock()),
            process_table=create_default_processes(),
            rng=rng or random.Random(),
            clock=clock,
        )

    # ===== Accessors =====

    @property
    def user(self) -> str:
        return self.environment.get("USER", "user")

    @property
    def home(self) -> str:
        return self.environment.get("HOME", HOME_DIRECTORY)

    def now(self) -> datetime:
        return self.clock()

    def get_current_directory(self) -> str:
        """Return the current working directory for display."""
        return self.current_directory

    def prompt(self) -> str:
        """Return the shell prompt, e.g. "user@ai-terminal:~/Documents$".

        The home directory prefix of the cwd is shown as "~".
        """
        home = self.home
        path = self.current_directory
        if path == home:
            short_path = "~"
        elif home != "/" and path.startswith(home + "/"):
            short_path = "~" + path[len(home):]
        else:
            short_path = path
        return f"{self.user}@{self.hostname}:{short_path}$"

    # ===== Paths =====

    def resolve(self, path: str) -> str:
        """Resolve path against the current directory."""
        return resolve_path(path, self.current_directory)

    def lookup(self, path: str) -> Optional[FilesystemNode]:
        """Resolve path and return the node there, if any."""
        return self.filesystem.lookup(self.resolve(path))

    # ===== Mutations =====

    def change_directory(self, path: str) -> str:
        """Make path the current directory.

        Updates PWD and OLDPWD the way bash does.

        Args:
            path: Relative or absolute target path.

        Returns:
            The new canonical current directory.

        Raises:
            PathNotFoundError: If the target does not exist.
            NotADirectoryFSError: If the target is a file.
        """
        target = canonical_path(self.resolve(path))
        node = self.filesystem.lookup(target)
        if node is None:
            raise PathNotFoundError(target)
        if not node.is_directory:
            raise NotADirectoryFSError(target)

        self.environment["OLDPWD"] = self.current_directory
        self.current_directory = target
        self.environment["PWD"] = target
        return target

    def record_command(self, raw_line: str) -> None:
        """Append a raw command line to the history."""
        self.command_history.append(raw_line)
