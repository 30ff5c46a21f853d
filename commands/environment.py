"""Environment, history and command lookup commands.

which, whereis and type answer from the command registry itself, so they
agree with what the dispatcher will actually run.
"""

import re
from typing import Optional

from commands.registry import command, default_registry
from models.session import SessionState

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Programs that exist on the simulated PATH outside the command table
_SHELL_BINARIES = {"bash": "/bin/bash", "sh": "/bin/sh"}

DEFAULT_ALIASES = (
    "alias ll='ls -alF'\n"
    "alias la='ls -A'\n"
    "alias l='ls -CF'\n"
    "alias grep='grep --color=auto'"
)


def program_path(name: str) -> Optional[str]:
    """Return where a command lives on the simulated PATH, if it is a program."""
    if name in _SHELL_BINARIES:
        return _SHELL_BINARIES[name]
    if default_registry.is_program(name):
        return f"/usr/bin/{name}"
    return None


# ===== History =====


@command("history", group="environment")
def history(args: list[str], session: SessionState) -> str:
    """List the command history 1-indexed; "history N" shows the last N, -c clears."""
    entries = list(enumerate(session.command_history, 1))
    if args:
        if args[0] == "-c":
            session.command_history.clear()
            return ""
        if not args[0].isdigit():
            return f"{session.shell_name}: history: {args[0]}: numeric argument required"
        count = int(args[0])
        entries = entries[-count:] if count else []
    return "\n".join(f"{number:>4} {line}" for number, line in entries)


# ===== Variables =====


@command("env", "printenv", group="environment")
def env(args: list[str], session: SessionState) -> str:
    if args:
        return "\n".join(
            session.environment[name] for name in args if name in session.environment
        )
    return "\n".join(f"{key}={value}" for key, value in session.environment.items())


@command("export", group="environment")
def export(args: list[str], session: SessionState) -> str:
    """Set environment variables: export NAME=VALUE... (VALUE may contain "=")."""
    if not args:
        return env([], session)

    errors = []
    for arg in args:
        name, has_value, value = arg.partition("=")
        if not _IDENTIFIER.match(name):
            errors.append(f"{session.shell_name}: export: `{arg}': not a valid identifier")
            continue
        if has_value:
            session.environment[name] = value
    return "\n".join(errors)


@command("unset", group="environment")
def unset(args: list[str], session: SessionState) -> str:
    errors = []
    for name in args:
        if not _IDENTIFIER.match(name):
            errors.append(f"{session.shell_name}: unset: `{name}': not a valid identifier")
            continue
        session.environment.pop(name, None)
    return "\n".join(errors)


# ===== Command lookup =====


@command("which", group="environment")
def which(args: list[str], session: SessionState) -> str:
    if not args:
        return "which: missing argument"

    lines = []
    for name in args:
        path = program_path(name)
        if path is None:
            lines.append(f"which: no {name} in ({session.environment.get('PATH', '')})")
        else:
            lines.append(path)
    return "\n".join(lines)


@command("whereis", group="environment")
def whereis(args: list[str], session: SessionState) -> str:
    if not args:
        return "whereis: usage: whereis [-bmsu] [-BMS directory... -f] filename..."

    lines = []
    for name in args:
        path = program_path(name)
        if path is None:
            lines.append(f"{name}:")
        else:
            lines.append(f"{name}: {path} /usr/share/man/man1/{name}.1.gz")
    return "\n".join(lines)


@command("type", group="environment")
def type_(args: list[str], session: SessionState) -> str:
    if not args:
        return "type: usage: type [-afptP] name [name ...]"

    lines = []
    for name in args:
        if default_registry.is_builtin(name):
            lines.append(f"{name} is a shell builtin")
            continue
        path = program_path(name)
        if path is None:
            lines.append(f"{session.shell_name}: type: {name}: not found")
        else:
            lines.append(f"{name} is {path}")
    return "\n".join(lines)


# ===== Aliases and scripts =====


@command("alias", group="environment")
def alias(args: list[str], session: SessionState) -> str:
    if not args:
        return DEFAULT_ALIASES
    return f"alias: simulated - would create alias: {' '.join(args)}"


@command("unalias", group="environment")
def unalias(args: list[str], session: SessionState) -> str:
    if not args:
        return "unalias: usage: unalias [-a] name [name ...]"
    return f"unalias: simulated - would remove alias: {args[0]}"


@command("source", ".", group="environment")
def source(args: list[str], session: SessionState) -> str:
    if not args:
        return "source: usage: source filename [arguments]"
    return f"source: simulated - would execute {args[0]}"
