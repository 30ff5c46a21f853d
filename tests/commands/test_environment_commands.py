"""Tests for history, environment variables and command lookup."""

from commands.environment import program_path


class TestHistory:
    """Tests for history."""

    def test_lists_history_including_itself(self, run) -> None:
        run("pwd")
        run("ls")
        assert run("history") == "   1 pwd\n   2 ls\n   3 history"

    def test_last_n(self, run) -> None:
        run("pwd")
        run("ls")
        assert run("history 2") == "   2 ls\n   3 history 2"

    def test_zero(self, run) -> None:
        run("pwd")
        assert run("history 0") == ""

    def test_clear(self, run, session_state) -> None:
        run("pwd")
        assert run("history -c") == ""
        assert session_state.command_history == []

    def test_numeric_argument_required(self, run) -> None:
        assert run("history x") == "bash: history: x: numeric argument required"

    def test_clear_command_not_listed(self, run) -> None:
        run("pwd")
        run("clear")
        assert run("history") == "   1 pwd\n   2 history"


class TestVariables:
    """Tests for env, printenv, export and unset."""

    def test_env_lists_variables(self, run) -> None:
        lines = run("env").split("\n")
        assert "USER=user" in lines
        assert "PWD=/home/user" in lines

    def test_printenv_named(self, run) -> None:
        assert run("printenv HOME SHELL MISSING") == "/home/user\n/bin/bash"

    def test_export_and_echo(self, run) -> None:
        assert run("export EDITOR=vim GREETING=a=b") == ""
        assert run("echo $EDITOR $GREETING") == "vim a=b"

    def test_export_without_value_is_ignored(self, run, session_state) -> None:
        run("export NOTHING")
        assert "NOTHING" not in session_state.environment

    def test_export_invalid_identifier(self, run, session_state) -> None:
        assert run("export 1x=2") == "bash: export: `1x=2': not a valid identifier"
        assert "1x" not in session_state.environment

    def test_export_without_args_lists(self, run) -> None:
        assert "HOME=/home/user" in run("export")

    def test_unset(self, run, session_state) -> None:
        run("export FOO=bar")
        assert run("unset FOO") == ""
        assert "FOO" not in session_state.environment
        assert run("unset 9") == "bash: unset: `9': not a valid identifier"


class TestCommandLookup:
    """Tests for which, whereis and type."""

    def test_which(self, run) -> None:
        assert run("which ls") == "/usr/bin/ls"
        assert run("which bash") == "/bin/bash"
        assert run("which foo") == (
            "which: no foo in (/usr/local/bin:/usr/bin:/bin:/usr/sbin:/sbin)"
        )
        assert run("which") == "which: missing argument"

    def test_which_ignores_builtins(self, run) -> None:
        assert run("which cd").startswith("which: no cd in")

    def test_whereis(self, run) -> None:
        assert run("whereis grep") == "grep: /usr/bin/grep /usr/share/man/man1/grep.1.gz"
        assert run("whereis nothing") == "nothing:"

    def test_type(self, run) -> None:
        assert run("type cd") == "cd is a shell builtin"
        assert run("type ls") == "ls is /usr/bin/ls"
        assert run("type nothing") == "bash: type: nothing: not found"

    def test_program_path(self) -> None:
        assert program_path("sh") == "/bin/sh"
        assert program_path("history") is None
        assert program_path("missing") is None


class TestAliasesAndSource:
    """Tests for alias, unalias and source."""

    def test_alias(self, run) -> None:
        assert "alias ll='ls -alF'" in run("alias")
        assert run("alias x=y") == "alias: simulated - would create alias: x=y"
        assert run("unalias ll") == "unalias: simulated - would remove alias: ll"

    def test_source(self, run) -> None:
        assert run("source .bashrc") == "source: simulated - would execute .bashrc"
        assert run(". .bashrc") == "source: simulated - would execute .bashrc"
