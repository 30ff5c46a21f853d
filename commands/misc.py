"""Miscellaneous commands: session control, sequences, calendars and toys."""

import calendar
from math import gcd
from typing import Optional

from commands.dispatcher import CLEAR_SENTINEL
from commands.registry import command
from models.session import SessionState

FORTUNES = (
    "The best way to predict the future is to invent it.",
    "Life is what happens to you while you're busy making other plans.",
    "The only way to do great work is to love what you do.",
    "Innovation distinguishes between a leader and a follower.",
    "Stay hungry, stay foolish.",
    "The future belongs to those who believe in the beauty of their dreams.",
)

HELLO_FIGLET = r""" _   _      _ _
| | | |    | | |
| |_| | ___| | | ___
|  _  |/ _ \ | |/ _ \
| | | |  __/ | | (_) |
\_| |_/\___|_|_|\___/"""

# seq stops after this many lines
MAX_SEQ_LINES = 100_000

# factor refuses numbers wider than 64 bits
MAX_FACTOR = 2**64 - 1

# ===== Session control =====


@command("clear", group="misc")
def clear(args: list[str], session: SessionState) -> str:
    return CLEAR_SENTINEL


@command("exit", group="misc")
def exit_(args: list[str], session: SessionState) -> str:
    return "exit: simulated - would exit terminal"


@command("logout", group="misc")
def logout(args: list[str], session: SessionState) -> str:
    return "logout: simulated - would logout user"


@command("su", group="misc")
def su(args: list[str], session: SessionState) -> str:
    user = args[0] if args else "root"
    return f"su: simulated - would switch to user {user}"


@command("sudo", group="misc")
def sudo(args: list[str], session: SessionState) -> str:
    if not args:
        return "sudo: usage: sudo -h | -K | -k | -V"
    return f"sudo: simulated - would execute as root: {' '.join(args)}"


@command("passwd", group="misc")
def passwd(args: list[str], session: SessionState) -> str:
    user = args[0] if args else session.user
    return f"passwd: simulated - would change password for {user}"


@command("sleep", group="misc")
def sleep(args: list[str], session: SessionState) -> str:
    seconds = args[0] if args else "1"
    return f"sleep: simulated - would sleep for {seconds} seconds"


@command("watch", group="misc")
def watch(args: list[str], session: SessionState) -> str:
    if not args:
        return (
            "watch: usage: watch [-dhvt] [-n <seconds>] [--differences[=cumulative]] "
            "[--help] [--interval=<seconds>] [--no-title] [--version] <command>"
        )
    return f"watch: simulated - would watch command: {' '.join(args)}"


@command("yes", group="misc")
def yes(args: list[str], session: SessionState) -> str:
    text = " ".join(args) or "y"
    return f"{text}\n{text}\n{text}\n... (infinite output simulated)"


# ===== Numbers =====


@command("seq", group="misc")
def seq(args: list[str], session: SessionState) -> str:
    """Print numbers: seq LAST, seq FIRST LAST, or seq FIRST STEP LAST."""
    if not args:
        return "seq: missing operand"
    if len(args) > 3:
        return f"seq: extra operand '{args[3]}'"

    values = []
    for arg in args:
        try:
            values.append(int(arg))
        except ValueError:
            return f"seq: invalid floating point argument: '{arg}'"

    first, step, last = 1, 1, values[-1]
    if len(values) >= 2:
        first = values[0]
    if len(values) == 3:
        step = values[1]
    if step == 0:
        return f"seq: invalid Zero increment value: '{args[1]}'"

    numbers = range(first, last + (1 if step > 0 else -1), step)
    return "\n".join(str(number) for number in numbers[:MAX_SEQ_LINES])


def _is_probable_prime(n: int) -> bool:
    if n < 2:
        return False
    small_primes = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)
    for prime in small_primes:
        if n % prime == 0:
            return n == prime
    d, r = n - 1, 0
    while d % 2 == 0:
        d //= 2
        r += 1
    for base in small_primes:
        x = pow(base, d, n)
        if x in (1, n - 1):
            continue
        for _ in range(r - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def _pollard_rho(n: int) -> int:
    if n % 2 == 0:
        return 2
    for constant in range(1, n):
        x = y = 2
        divisor = 1
        while divisor == 1:
            x = (x * x + constant) % n
            y = (y * y + constant) % n
            y = (y * y + constant) % n
            divisor = gcd(abs(x - y), n)
        if divisor != n:
            return divisor
    return n


def prime_factors(n: int) -> list[int]:
    """Return the prime factors of n (n >= 1) in ascending order."""
    factors: list[int] = []
    for prime in (2, 3, 5):
        while n % prime == 0:
            factors.append(prime)
            n //= prime

    pending = [n] if n > 1 else []
    while pending:
        value = pending.pop()
        if _is_probable_prime(value):
            factors.append(value)
            continue
        divisor = _pollard_rho(value)
        pending.extend((divisor, value // divisor))
    return sorted(factors)


@command("factor", group="misc")
def factor(args: list[str], session: SessionState) -> str:
    if not args:
        return "factor: usage: factor [NUMBER]..."

    lines = []
    for arg in args:
        if not arg.isdigit():
            lines.append(f"factor: '{arg}' is not a valid positive integer")
            continue
        number = int(arg)
        if number > MAX_FACTOR:
            lines.append(f"factor: '{arg}' is too large")
            continue
        factors = prime_factors(number) if number > 1 else []
        lines.append(f"{number}:" + "".join(f" {value}" for value in factors))
    return "\n".join(lines)


@command("bc", group="misc")
def bc(args: list[str], session: SessionState) -> str:
    if not args:
        return (
            "bc 1.07.1\n"
            "Copyright 1991-1994, 1997, 1998, 2000, 2004, 2006, 2008, 2012-2017 "
            "Free Software Foundation, Inc.\n"
            "This is free software with ABSOLUTELY NO WARRANTY.\n"
            "For details type `warranty'.\n"
            "(calculator mode simulated)"
        )
    return "bc: simulated - arbitrary precision calculator"


def _parse_bounded(value: str, low: int, high: int) -> Optional[int]:
    if not value.isdigit():
        return None
    number = int(value)
    return number if low <= number <= high else None


@command("cal", group="misc")
def cal(args: list[str], session: SessionState) -> str:
    """Print a month calendar: cal [MONTH [YEAR]], weeks starting on Sunday."""
    now = session.now()
    month, year = now.month, now.year
    if args:
        month = _parse_bounded(args[0], 1, 12)
        if month is None:
            return "cal: illegal month value: use 1-12"
    if len(args) > 1:
        year = _parse_bounded(args[1], 1, 9999)
        if year is None:
            return "cal: illegal year value: use 1-9999"

    text = calendar.TextCalendar(firstweekday=calendar.SUNDAY).formatmonth(year, month)
    return "\n".join(line.rstrip() for line in text.rstrip("\n").split("\n"))


# ===== Toys =====


@command("fortune", group="misc")
def fortune(args: list[str], session: SessionState) -> str:
    return session.rng.choice(FORTUNES)


@command("cowsay", group="misc")
def cowsay(args: list[str], session: SessionState) -> str:
    message = " ".join(args) or "Hello, World!"
    border = "-" * (len(message) + 2)
    return (
        f" {border}\n"
        f"< {message} >\n"
        f" {border}\n"
        "        \\   ^__^\n"
        "         \\  (oo)\\_______\n"
        "            (__)\\       )\\/\\\n"
        "                ||----w |\n"
        "                ||     ||"
    )


@command("figlet", group="misc")
def figlet(args: list[str], session: SessionState) -> str:
    text = " ".join(args) or "Hello"
    if text.lower() == "hello":
        return HELLO_FIGLET
    return f'figlet: simulated - would create ASCII art for "{text}"'


@command("banner", group="misc")
def banner(args: list[str], session: SessionState) -> str:
    text = " ".join(args) or "BANNER"
    return f'banner: simulated - would create large banner text for "{text}"'
