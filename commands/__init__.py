"""Command engine package.

Importing this package registers every command handler with the default
registry, so commands.execute() can run any supported command line.
"""

from commands.registry import CommandRegistry, command, default_registry
from commands.dispatcher import (
    CLEAR_SENTINEL,
    CommandDispatcher,
    execute,
    is_clear_command,
    tokenize,
)

# Handler modules register themselves on import
from commands import (  # noqa: F401
    archive,
    devtools,
    docs,
    editors,
    environment,
    files,
    misc,
    network,
    packages,
    process,
    system,
    text,
)

__all__ = [
    "CLEAR_SENTINEL",
    "CommandDispatcher",
    "CommandRegistry",
    "command",
    "default_registry",
    "execute",
    "is_clear_command",
    "tokenize",
]
