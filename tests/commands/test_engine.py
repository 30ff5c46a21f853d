"""Unit tests for the command engine core.

This module tests:
- CommandRegistry registration and lookups
- tokenize() and CommandDispatcher history/dispatch rules
- parse_args() and the path argument helpers
- Output formatting helpers
"""

from datetime import datetime

import pytest

from commands import CLEAR_SENTINEL, CommandDispatcher, CommandRegistry, default_registry, tokenize
from commands.arguments import expand_home, parse_args, parse_int, resolve_arg
from commands.formatting import (
    format_date,
    format_size,
    format_table,
    is_octal_mode,
    octal_to_permissions,
    permissions_to_octal,
)


# =============================================================================
# Registry
# =============================================================================


class TestCommandRegistry:
    """Tests for CommandRegistry."""

    def test_register_and_get(self) -> None:
        registry = CommandRegistry()

        @registry.command("hello", "hi", group="misc")
        def hello(args, session):
            return "hello"

        assert registry.get("hello") is hello
        assert registry.get("hi") is hello
        assert "hello" in registry
        assert len(registry) == 2
        assert registry.group_of("hi") == "misc"

    def test_duplicate_name_rejected(self) -> None:
        registry = CommandRegistry()
        registry.register("x", lambda args, session: "")
        with pytest.raises(ValueError, match="already registered"):
            registry.register("x", lambda args, session: "")

    def test_unknown_group_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown command group"):
            CommandRegistry().register("x", lambda args, session: "", group="games")

    def test_default_registry_is_populated(self) -> None:
        """Importing the package registers commands from every group."""
        for name in ("ls", "tar", "ps", "uname", "ping", "vim", "apt", "git", "export", "man", "cowsay"):
            assert name in default_registry
        assert "ls" in default_registry.names_in_group("file")

    def test_builtin_versus_program(self) -> None:
        assert default_registry.is_builtin("cd")
        assert not default_registry.is_program("cd")
        assert default_registry.is_program("ls")
        assert not default_registry.is_builtin("nonexistent")


# =============================================================================
# Dispatcher
# =============================================================================


class TestTokenize:
    """Tests for tokenize()."""

    def test_splits_on_whitespace_runs(self) -> None:
        assert tokenize("  ls   -la /home ") == ["ls", "-la", "/home"]

    def test_no_quote_handling(self) -> None:
        assert tokenize('echo "a b"') == ["echo", '"a', 'b"']

    def test_empty(self) -> None:
        assert tokenize("   ") == []


class TestCommandDispatcher:
    """Tests for CommandDispatcher.execute()."""

    def test_records_raw_line(self, run, session_state) -> None:
        run("  pwd  ")
        assert session_state.command_history == ["  pwd  "]

    def test_empty_line_recorded_without_output(self, run, session_state) -> None:
        assert run("") == ""
        assert session_state.command_history == [""]

    def test_clear_returns_sentinel_and_is_not_recorded(self, run, session_state) -> None:
        assert run("clear") == CLEAR_SENTINEL
        assert run("clear now") == CLEAR_SENTINEL
        assert session_state.command_history == []

    def test_unknown_command(self, run, session_state) -> None:
        assert run("frobnicate --now") == "bash: frobnicate: command not found"
        assert session_state.command_history == ["frobnicate --now"]

    def test_custom_registry(self, session_state) -> None:
        """A dispatcher only knows the handlers of its own registry."""
        registry = CommandRegistry()
        registry.register("echoargs", lambda args, session: "|".join(args))
        dispatcher = CommandDispatcher(registry)

        assert dispatcher.execute("echoargs a  b", session_state) == "a|b"
        assert dispatcher.execute("ls", session_state) == "bash: ls: command not found"


# =============================================================================
# Argument helpers
# =============================================================================


class TestParseArgs:
    """Tests for parse_args()."""

    def test_flag_cluster_with_value(self) -> None:
        parsed = parse_args(["-la", "-n", "5", "file"], value_options="n")
        assert parsed.flags == {"l", "a"}
        assert parsed.values == {"n": "5"}
        assert parsed.operands == ["file"]

    def test_attached_value(self) -> None:
        parsed = parse_args(["-n5", "-d,"], value_options="nd")
        assert parsed.values == {"n": "5", "d": ","}

    def test_missing_value(self) -> None:
        parsed = parse_args(["-n"], value_options="n")
        assert parsed.missing_value == "n"

    def test_double_dash_ends_options(self) -> None:
        parsed = parse_args(["-a", "--", "-b", "c"])
        assert parsed.flags == {"a"}
        assert parsed.operands == ["-b", "c"]

    def test_long_flags_and_lone_dash(self) -> None:
        parsed = parse_args(["--all", "-"])
        assert parsed.long_flags == {"all"}
        assert parsed.operands == ["-"]

    def test_has(self) -> None:
        assert parse_args(["-rf"]).has("r", "R")
        assert not parse_args(["x"]).has("r")


class TestArgumentHelpers:
    """Tests for parse_int(), expand_home() and resolve_arg()."""

    def test_parse_int(self) -> None:
        assert parse_int("12") == 12
        assert parse_int("x", default=3) == 3
        assert parse_int(None) is None

    def test_expand_home(self, session_state) -> None:
        assert expand_home("~", session_state) == "/home/user"
        assert expand_home("~/Documents", session_state) == "/home/user/Documents"
        assert expand_home("a~b", session_state) == "a~b"

    def test_resolve_arg(self, session_state) -> None:
        session_state.change_directory("/etc")
        assert resolve_arg("~/Downloads", session_state) == "/home/user/Downloads"
        assert resolve_arg("passwd", session_state) == "/etc/passwd"


# =============================================================================
# Formatting helpers
# =============================================================================


class TestFormatting:
    """Tests for the formatting helpers."""

    def test_format_size(self) -> None:
        assert format_size(512) == "512"
        assert format_size(2048) == "2K"
        assert format_size(5 * 1024 * 1024) == "5M"
        assert format_size(3 * 1024**3) == "3G"

    def test_format_size_promotes_when_rounding_reaches_next_unit(self) -> None:
        assert format_size(1023) == "1023"
        assert format_size(1048575) == "1M"
        assert format_size(1024**3 - 1) == "1G"
        assert format_size(1024**2 - 600) == "1023K"

    def test_format_date_pads_day(self) -> None:
        assert format_date(datetime(2025, 3, 5, 14, 7)) == "Mar  5 14:07"
        assert format_date(datetime(2025, 12, 25, 9, 3)) == "Dec 25 09:03"

    def test_octal_to_permissions(self) -> None:
        assert octal_to_permissions("755", True) == "drwxr-xr-x"
        assert octal_to_permissions("644") == "-rw-r--r--"
        assert octal_to_permissions("0600") == "-rw-------"

    def test_octal_to_permissions_invalid(self) -> None:
        assert not is_octal_mode("789")
        with pytest.raises(ValueError):
            octal_to_permissions("789")

    def test_permissions_to_octal(self) -> None:
        assert permissions_to_octal("-rw-r--r--") == "0644"
        assert permissions_to_octal("drwxr-xr-x") == "0755"

    def test_format_table(self) -> None:
        """Columns are padded except the last, numbers can be right-aligned."""
        lines = format_table([["a", "1", "x"], ["bbb", "22", "yy"]], right_align=[1])
        assert lines == ["a    1 x", "bbb 22 yy"]

    def test_format_table_empty(self) -> None:
        assert format_table([]) == []
