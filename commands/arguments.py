"""Argument parsing helpers shared by command handlers.

Command lines are split on whitespace only, so handlers receive raw tokens.
These helpers pick out short-flag clusters ("-la"), options taking a value
("-n 5", "-n5", "-d,"), and operands, the way getopt would.
"""

from typing import TYPE_CHECKING, Iterable, Optional

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from models.session import SessionState


class ParsedArgs(BaseModel):
    """Result of splitting raw arguments into flags, option values and operands.

    Args:
        flags: Single-character flags that were present (e.g. {"l", "a"}).
        long_flags: Long options without their leading dashes (e.g. {"all"}).
        values: Values of options declared as taking an argument.
        operands: Remaining positional arguments, in order.
        missing_value: Option that expected a value but had none.
    """

    flags: set[str] = Field(default_factory=set)
    long_flags: set[str] = Field(default_factory=set)
    values: dict[str, str] = Field(default_factory=dict)
    operands: list[str] = Field(default_factory=list)
    missing_value: Optional[str] = None

    def has(self, *flags: str) -> bool:
        """Whether any of the given short flags was given."""
        return any(flag in self.flags for flag in flags)


def parse_args(args: list[str], value_options: Iterable[str] = ()) -> ParsedArgs:
    """Split raw arguments getopt-style.

    Args:
        args: Raw argument tokens.
        value_options: Short option letters that take a value.

    Returns:
        ParsedArgs describing the command line.

    Example:
        >>> parsed = parse_args(["-la", "-n", "5", "file"], value_options="n")
        >>> sorted(parsed.flags), parsed.values, parsed.operands
        (['a', 'l'], {'n': '5'}, ['file'])
    """
    value_options = set(value_options)
    parsed = ParsedArgs()
    tokens = iter(args)

    for token in tokens:
        if token == "--":
            parsed.operands.extend(tokens)
            break
        if token.startswith("--") and len(token) > 2:
            parsed.long_flags.add(token[2:])
            continue
        if not token.startswith("-") or token == "-":
            parsed.operands.append(token)
            continue

        cluster = token[1:]
        for index, letter in enumerate(cluster):
            if letter in value_options:
                rest = cluster[index + 1:]
                if rest:
                    parsed.values[letter] = rest
                else:
                    value = next(tokens, None)
                    if value is None:
                        parsed.missing_value = letter
                    else:
                        parsed.values[letter] = value
                break
            parsed.flags.add(letter)

    return parsed


def parse_int(value: Optional[str], default: Optional[int] = None) -> Optional[int]:
    """Parse an integer, returning default when value is missing or invalid."""
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def expand_home(path: str, session: "SessionState") -> str:
    """Expand a leading "~" to the session's HOME directory."""
    if path == "~":
        return session.home
    if path.startswith("~/"):
        return session.home.rstrip("/") + path[1:]
    return path


def resolve_arg(path: str, session: "SessionState") -> str:
    """Resolve a user-typed path (with ~ expansion) to an absolute path."""
    return session.resolve(expand_home(path, session))
