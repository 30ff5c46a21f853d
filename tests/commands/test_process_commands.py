"""Tests for the process commands (ps, top, kill, killall, job control)."""

from commands import execute
from commands.process import parse_signal
from tests.fixtures.sessions import create_session_state


class TestPs:
    """Tests for ps."""

    def test_own_processes(self, run) -> None:
        lines = run("ps").split("\n")
        assert lines[0] == "PID TTY   TIME     CMD"
        assert lines[1] == "123 pts/0 00:00:00 bash"
        assert [line.split()[-1] for line in lines[1:]] == ["bash", "ai-terminal", "chrome"]

    def test_aux_lists_every_process(self, run) -> None:
        lines = run("ps aux").split("\n")
        assert lines[0].split() == [
            "USER", "PID", "%CPU", "%MEM", "VSZ", "RSS", "TTY", "STAT", "START", "TIME", "COMMAND",
        ]
        assert len(lines) == 7
        assert lines[5].split()[0] == "www-data"
        assert lines[5].split()[-1] == "nginx"

    def test_aux_is_deterministic_for_a_seed(self) -> None:
        """Randomized columns come from the session's random source."""
        first = execute("ps aux", create_session_state(seed=7))
        second = execute("ps aux", create_session_state(seed=7))
        assert first == second

    def test_full_format(self, run) -> None:
        lines = run("ps -ef").split("\n")
        assert lines[0].split() == ["UID", "PID", "PPID", "C", "STIME", "TTY", "TIME", "CMD"]
        systemd = lines[1].split()
        assert systemd[:3] == ["root", "1", "0"]


class TestTop:
    """Tests for top and htop."""

    def test_task_summary(self, run) -> None:
        lines = run("top").split("\n")
        assert lines[0].startswith("top - ")
        assert lines[1] == "Tasks: 6 total, 1 running, 5 sleeping, 0 stopped, 0 zombie"
        assert lines[6].split()[0] == "PID"

    def test_summary_tracks_state(self, run) -> None:
        run("kill -STOP 789")
        assert "1 running, 4 sleeping, 1 stopped" in run("top")

    def test_htop(self, run) -> None:
        assert run("htop").endswith("(htop simulation - interactive process viewer)")


class TestKill:
    """Tests for kill and signal parsing."""

    def test_default_term_removes_process(self, run, session_state) -> None:
        assert run("kill 789") == ""
        assert session_state.process_table.find(789) is None

    def test_kill_nine(self, run, session_state) -> None:
        assert run("kill -9 123") == ""
        assert session_state.process_table.find(123) is None

    def test_stop_and_continue(self, run, session_state) -> None:
        run("kill -s STOP 789")
        assert session_state.process_table.find(789).status == "T"
        run("kill -CONT 789")
        assert session_state.process_table.find(789).status == "S"

    def test_signal_zero_only_checks(self, run, session_state) -> None:
        assert run("kill -0 789") == ""
        assert session_state.process_table.find(789) is not None

    def test_root_processes_can_be_signalled(self, run, session_state) -> None:
        run("kill -TSTP 1")
        assert session_state.process_table.find(1).status == "T"

    def test_errors(self, run, session_state) -> None:
        assert run("kill 999") == "kill: (999) - No such process"
        assert run("kill 654") == "kill: (654) - Operation not permitted"
        assert run("kill abc") == "kill: abc: arguments must be process or job IDs"
        assert run("kill -FOO 789") == "kill: FOO: invalid signal specification"
        assert run("kill -s") == "kill: -s: option requires an argument"
        assert run("kill").startswith("kill: usage:")
        assert session_state.process_table.find(654) is not None

    def test_errors_do_not_stop_other_operands(self, run, session_state) -> None:
        assert run("kill 999 789") == "kill: (999) - No such process"
        assert session_state.process_table.find(789) is None

    def test_list_signals(self, run) -> None:
        listing = run("kill -l")
        assert listing.lstrip().startswith("1) SIGHUP")
        assert " 9) SIGKILL" in listing
        assert run("kill -l 9") == "KILL"
        assert run("kill -l KILL") == "9"
        assert run("kill -l BOGUS") == "kill: BOGUS: invalid signal specification"

    def test_parse_signal(self) -> None:
        assert parse_signal("9") == 9
        assert parse_signal("sigterm") == 15
        assert parse_signal("0") == 0
        assert parse_signal("16") is None
        assert parse_signal("NOPE") is None


class TestKillall:
    """Tests for killall."""

    def test_kills_by_name(self, run, session_state) -> None:
        assert run("killall chrome") == "killall: killed 1 process(es)"
        assert session_state.process_table.find_by_name("chrome") == []

    def test_no_match(self, run) -> None:
        assert run("killall firefox") == "killall: firefox: no process found"

    def test_usage(self, run) -> None:
        assert run("killall").startswith("killall: usage:")


class TestJobControl:
    """Tests for jobs, bg, fg, nohup, screen and tmux."""

    def test_jobs(self, run) -> None:
        assert run("jobs") == "[1]+  Running                 background-job &"
        assert run("bg") == "[1]+ background-job &"
        assert run("fg %2") == "[%2]+ background-job"

    def test_nohup_spawns_process_and_file(self, run, session_state) -> None:
        assert run("nohup sleep 100") == "nohup: appending output to 'nohup.out'"
        spawned = session_state.process_table.find(1000)
        assert (spawned.name, spawned.user) == ("sleep", "user")
        assert session_state.filesystem.exists("/home/user/nohup.out")

    def test_nohup_usage(self, run) -> None:
        assert run("nohup") == "nohup: usage: nohup COMMAND [ARG]..."

    def test_multiplexers(self, run) -> None:
        assert run("screen") == "screen: simulated - terminal multiplexer"
        assert run("tmux new") == "tmux: simulated - would start tmux session"
