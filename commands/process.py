"""Process commands: ps, top, htop, kill, killall, jobs, nohup...

These operate on the session's simulated ProcessTable. Memory and timing
figures that real tools would measure are drawn from session.rng.
"""

from typing import Optional

from commands.files import touch
from commands.formatting import format_table
from commands.registry import command
from models.process import ProcessRecord
from models.session import SessionState

# Signal numbers and names as listed by "kill -l"
SIGNALS = {
    1: "HUP",
    2: "INT",
    3: "QUIT",
    4: "ILL",
    5: "TRAP",
    6: "ABRT",
    7: "BUS",
    8: "FPE",
    9: "KILL",
    10: "USR1",
    11: "SEGV",
    12: "USR2",
    13: "PIPE",
    14: "ALRM",
    15: "TERM",
    17: "CHLD",
    18: "CONT",
    19: "STOP",
    20: "TSTP",
}
_SIGNAL_NUMBERS = {name: number for number, name in SIGNALS.items()}

KILL_USAGE = (
    "kill: usage: kill [-s sigspec | -n signum | -sigspec] pid | jobspec ... "
    "or kill -l [sigspec]"
)


def parse_signal(spec: str) -> Optional[int]:
    """Turn "9", "KILL" or "SIGKILL" into a signal number (None if unknown)."""
    if spec.isdigit():
        number = int(spec)
        return number if number == 0 or number in SIGNALS else None
    name = spec.upper()
    if name.startswith("SIG"):
        name = name[3:]
    return _SIGNAL_NUMBERS.get(name)


def _vsz(session: SessionState) -> int:
    return session.rng.randint(10000, 109999)


# ===== Listing =====


@command("ps", group="process")
def ps(args: list[str], session: SessionState) -> str:
    """Report processes: "ps" (own), "ps aux" / "ps -aux" (BSD), "ps -ef" (full)."""
    if "aux" in args or "-aux" in args:
        rows = [("USER", "PID", "%CPU", "%MEM", "VSZ", "RSS", "TTY", "STAT", "START", "TIME", "COMMAND")]
        for process in session.process_table:
            vsz = _vsz(session)
            rows.append(
                (
                    process.user,
                    process.pid,
                    f"{process.cpu_percent:.1f}",
                    f"{process.mem_percent:.1f}",
                    vsz,
                    int(vsz * process.mem_percent / 100),
                    "pts/0",
                    process.status,
                    "12:00",
                    "0:00",
                    process.name,
                )
            )
        return "\n".join(format_table(rows, right_align=(1, 2, 3, 4, 5)))

    if "-ef" in args or "-e" in args:
        rows = [("UID", "PID", "PPID", "C", "STIME", "TTY", "TIME", "CMD")]
        for process in session.process_table:
            parent = 0 if process.pid <= 2 else 1
            rows.append(
                (process.user, process.pid, parent, 0, "12:00", "pts/0", "00:00:00", process.name)
            )
        return "\n".join(format_table(rows, right_align=(1, 2, 3)))

    rows = [("PID", "TTY", "TIME", "CMD")]
    for process in session.process_table.owned_by(session.user):
        rows.append((process.pid, "pts/0", "00:00:00", process.name))
    return "\n".join(format_table(rows, right_align=(0,)))


def _top_report(session: SessionState) -> str:
    table = session.process_table
    total = len(table)
    lines = [
        "top - 12:34:56 up 2 days, 3:45, 1 user, load average: 0.15, 0.25, 0.30",
        f"Tasks: {total} total, {table.count_by_status('R')} running, "
        f"{table.count_by_status('S')} sleeping, {table.count_by_status('T')} stopped, "
        f"{table.count_by_status('Z')} zombie",
        "Cpu(s): 2.3%us, 1.2%sy, 0.0%ni, 96.1%id, 0.4%wa, 0.0%hi, 0.0%si, 0.0%st",
        "Mem: 8192000k total, 4096000k used, 4096000k free, 256000k buffers",
        "Swap: 2048000k total, 0k used, 2048000k free, 1024000k cached",
        "",
    ]

    rows = [("PID", "USER", "PR", "NI", "VIRT", "RES", "SHR", "S", "%CPU", "%MEM", "TIME+", "COMMAND")]
    for process in table:
        virt = _vsz(session)
        res = int(virt * process.mem_percent / 100)
        rows.append(
            (
                process.pid,
                process.user,
                20,
                0,
                virt,
                res,
                int(res * 0.3),
                process.status,
                f"{process.cpu_percent:.1f}",
                f"{process.mem_percent:.1f}",
                f"0:00.{session.rng.randint(0, 99):02d}",
                process.name,
            )
        )
    lines.extend(format_table(rows, right_align=(0, 2, 3, 4, 5, 6, 8, 9, 10)))
    return "\n".join(lines)


@command("top", group="process")
def top(args: list[str], session: SessionState) -> str:
    return _top_report(session)


@command("htop", group="process")
def htop(args: list[str], session: SessionState) -> str:
    return _top_report(session) + "\n\n(htop simulation - interactive process viewer)"


# ===== Signals =====


def _signal_listing() -> str:
    entries = [f"{number:2d}) SIG{name}" for number, name in SIGNALS.items()]
    lines = ["\t".join(entries[start:start + 5]) for start in range(0, len(entries), 5)]
    return "\n".join(" " + line for line in lines)


@command("kill", group="process")
def kill(args: list[str], session: SessionState) -> str:
    """Send a signal to processes.

    STOP/TSTP mark the process stopped, CONT resumes it, signal 0 only checks
    that the process exists; every other signal removes it from the table.
    Processes owned by anyone other than the session user or root cannot be
    signalled.
    """
    if not args:
        return KILL_USAGE

    if args[0] == "-l":
        if len(args) == 1:
            return _signal_listing()
        number = parse_signal(args[1])
        if number is None or number == 0:
            return f"kill: {args[1]}: invalid signal specification"
        return str(number) if not args[1].isdigit() else SIGNALS[number]

    signal = _SIGNAL_NUMBERS["TERM"]
    operands = list(args)
    if operands[0] in ("-s", "-n"):
        if len(operands) < 2:
            return f"kill: {operands[0]}: option requires an argument"
        spec, operands = operands[1], operands[2:]
        parsed = parse_signal(spec)
        if parsed is None:
            return f"kill: {spec}: invalid signal specification"
        signal = parsed
    elif operands[0].startswith("-") and len(operands[0]) > 1:
        spec, operands = operands[0][1:], operands[1:]
        parsed = parse_signal(spec)
        if parsed is None:
            return f"kill: {spec}: invalid signal specification"
        signal = parsed

    if not operands:
        return KILL_USAGE

    errors = []
    for operand in operands:
        if not operand.lstrip("-").isdigit():
            errors.append(f"kill: {operand}: arguments must be process or job IDs")
            continue
        pid = int(operand)
        process = session.process_table.find(pid)
        if process is None:
            errors.append(f"kill: ({pid}) - No such process")
            continue
        if process.user not in (session.user, "root"):
            errors.append(f"kill: ({pid}) - Operation not permitted")
            continue
        _deliver(session, process, signal)
    return "\n".join(errors)


def _deliver(session: SessionState, process: ProcessRecord, signal: int) -> None:
    name = SIGNALS.get(signal)
    if signal == 0:
        return
    if name in ("STOP", "TSTP"):
        process.status = "T"
    elif name == "CONT":
        process.status = "S"
    else:
        session.process_table.remove(process.pid)


@command("killall", group="process")
def killall(args: list[str], session: SessionState) -> str:
    names = [arg for arg in args if not arg.startswith("-")]
    if not names:
        return (
            "killall: usage: killall [-Z CONTEXT] [-u USER] [ -eIgiqrvw ] [ -SIGNAL ] NAME..."
        )

    name = names[0]
    killed = session.process_table.remove_by_name(name)
    if not killed:
        return f"killall: {name}: no process found"
    return f"killall: killed {len(killed)} process(es)"


# ===== Job control =====


@command("jobs", group="process")
def jobs(args: list[str], session: SessionState) -> str:
    return "[1]+  Running                 background-job &"


@command("bg", group="process")
def bg(args: list[str], session: SessionState) -> str:
    job = args[0] if args else "1"
    return f"[{job}]+ background-job &"


@command("fg", group="process")
def fg(args: list[str], session: SessionState) -> str:
    job = args[0] if args else "1"
    return f"[{job}]+ background-job"


@command("nohup", group="process")
def nohup(args: list[str], session: SessionState) -> str:
    """Start COMMAND detached: adds a process record and creates nohup.out."""
    if not args:
        return "nohup: usage: nohup COMMAND [ARG]..."

    session.process_table.spawn(args[0], session.user)
    touch(["nohup.out"], session)
    return "nohup: appending output to 'nohup.out'"


@command("screen", group="process")
def screen(args: list[str], session: SessionState) -> str:
    if not args:
        return "screen: simulated - terminal multiplexer"
    return "screen: simulated - would start screen session"


@command("tmux", group="process")
def tmux(args: list[str], session: SessionState) -> str:
    if not args:
        return "tmux: simulated - terminal multiplexer"
    return "tmux: simulated - would start tmux session"
