"""Archive commands (simulated): tar, gzip, gunzip, zip, unzip."""

from typing import Optional

from commands.arguments import expand_home
from commands.registry import command
from models.session import SessionState

DEFAULT_ARCHIVE = "archive.tar"


def parse_tar_options(args: list[str]) -> tuple[set[str], Optional[str], list[str]]:
    """Parse tar's option syntax.

    The first argument may be a dashless cluster ("czf"), any argument may be
    a dashed cluster ("-xvf"), and "f" consumes the next argument as the
    archive name.

    Returns:
        (option letters, archive name or None, member operands).
    """
    letters: set[str] = set()
    archive: Optional[str] = None
    members: list[str] = []
    pending_archive = False

    for index, arg in enumerate(args):
        if pending_archive:
            archive = arg
            pending_archive = False
            continue
        if arg.startswith("--"):
            continue
        if arg.startswith("-") or index == 0:
            cluster = arg.lstrip("-")
            for position, letter in enumerate(cluster):
                if letter == "f":
                    rest = cluster[position + 1:]
                    if rest:
                        archive = rest
                    else:
                        pending_archive = True
                    break
                letters.add(letter)
            continue
        members.append(arg)

    return letters, archive, members


@command("tar", group="archive")
def tar(args: list[str], session: SessionState) -> str:
    if not args:
        return "tar: usage: tar [OPTION...] [FILE]..."

    letters, archive, _ = parse_tar_options(args)
    target = archive or DEFAULT_ARCHIVE
    if "c" in letters:
        return f"tar: simulated - would create archive {target}"
    if "x" in letters:
        return f"tar: simulated - would extract archive {target}"
    if "t" in letters:
        return f"tar: simulated - would list contents of {target}"
    return "tar: You must specify one of the '-Acdtrux', '--delete' or '--test-label' options"


def _compress(tool: str, verb: str, args: list[str], session: SessionState) -> str:
    files = [arg for arg in args if not arg.startswith("-")]
    if not files:
        return f"{tool}: usage: {tool} [OPTION]... [FILE]..."

    errors = []
    for operand in files:
        node = session.lookup(expand_home(operand, session))
        if node is None:
            errors.append(f"{tool}: {operand}: No such file or directory")
        elif node.is_directory:
            errors.append(f"{tool}: {operand} is a directory -- ignored")
    if errors:
        return "\n".join(errors)
    return f"{tool}: simulated - would {verb} {', '.join(files)}"


@command("gzip", group="archive")
def gzip(args: list[str], session: SessionState) -> str:
    return _compress("gzip", "compress", args, session)


@command("gunzip", group="archive")
def gunzip(args: list[str], session: SessionState) -> str:
    return _compress("gunzip", "decompress", args, session)


@command("zip", group="archive")
def zip_archive(args: list[str], session: SessionState) -> str:
    if not args:
        return "zip: usage: zip [options] zipfile list"
    return "zip: simulated - would create zip archive"


@command("unzip", group="archive")
def unzip(args: list[str], session: SessionState) -> str:
    if not args:
        return "unzip: usage: unzip [options] zipfile"
    return "unzip: simulated - would extract zip archive"
