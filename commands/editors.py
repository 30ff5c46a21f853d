"""Text editors (simulated). No editing happens; the user is told what would open."""

from commands.registry import command
from models.session import SessionState

_EDITORS = {
    "vim": ("Vim", "(Use :q to quit, :w to save, :wq to save and quit)"),
    "nano": ("nano", "(Use Ctrl+X to exit, Ctrl+O to save)"),
    "emacs": ("Emacs", "(Use Ctrl+X Ctrl+C to quit, Ctrl+X Ctrl+S to save)"),
}


def _open_message(tool: str, args: list[str]) -> str:
    label, keys = _EDITORS[tool]
    target = args[0] if args else "new file"
    return f"{tool}: simulated - would open {target} in {label} editor\n{keys}"


@command("vi", "vim", group="editor")
def vim(args: list[str], session: SessionState) -> str:
    return _open_message("vim", args)


@command("nano", group="editor")
def nano(args: list[str], session: SessionState) -> str:
    return _open_message("nano", args)


@command("emacs", group="editor")
def emacs(args: list[str], session: SessionState) -> str:
    return _open_message("emacs", args)
