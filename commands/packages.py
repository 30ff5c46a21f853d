"""Package manager commands (simulated)."""

from commands.registry import command
from models.session import SessionState

_APT_ACTIONS = {
    "update": "update package lists",
    "upgrade": "upgrade installed packages",
    "list": "list packages",
}
_APT_PACKAGE_ACTIONS = ("install", "remove", "search")

# tool -> (usage, description used in the simulated message)
_GENERIC_MANAGERS = {
    "yum": ("yum: usage: yum [options] COMMAND", "Red Hat package manager"),
    "dnf": ("dnf: usage: dnf [options] COMMAND", "Fedora package manager"),
    "pacman": ("pacman: usage: pacman <operation> [...]", "Arch Linux package manager"),
    "snap": ("snap: usage: snap <command> [<options>...]", "Ubuntu snap package manager"),
    "flatpak": ("flatpak: usage: flatpak [OPTION…] COMMAND", "universal package manager"),
}


def _apt(tool: str, args: list[str]) -> str:
    if not args:
        return f"{tool}: usage: {tool} [options] command"

    action = args[0]
    if action in _APT_ACTIONS:
        return f"{tool}: simulated - would {_APT_ACTIONS[action]}"
    if action in _APT_PACKAGE_ACTIONS:
        package = args[1] if len(args) > 1 else "package"
        verb = "search for" if action == "search" else action
        return f"{tool}: simulated - would {verb} {package}"
    return f"{tool}: unknown command '{action}'"


@command("apt", group="package")
def apt(args: list[str], session: SessionState) -> str:
    return _apt("apt", args)


@command("apt-get", group="package")
def apt_get(args: list[str], session: SessionState) -> str:
    return _apt("apt-get", args)


def _generic(tool: str, args: list[str]) -> str:
    usage, description = _GENERIC_MANAGERS[tool]
    if not args:
        return usage
    return f"{tool}: simulated - {description} command: {' '.join(args)}"


@command("yum", group="package")
def yum(args: list[str], session: SessionState) -> str:
    return _generic("yum", args)


@command("dnf", group="package")
def dnf(args: list[str], session: SessionState) -> str:
    return _generic("dnf", args)


@command("pacman", group="package")
def pacman(args: list[str], session: SessionState) -> str:
    return _generic("pacman", args)


@command("snap", group="package")
def snap(args: list[str], session: SessionState) -> str:
    return _generic("snap", args)


@command("flatpak", group="package")
def flatpak(args: list[str], session: SessionState) -> str:
    return _generic("flatpak", args)
