"""File and directory commands: ls, cd, cp, mv, rm, find, stat, chmod...

Handlers resolve paths against the session, operate on the session's
FileSystem and word their failures like GNU coreutils. Operands are processed
in order; a failing operand produces an error line and processing continues
with the next one.
"""

import math
import zlib
from datetime import datetime
from fnmatch import fnmatchcase
from typing import Optional

from commands.arguments import expand_home, parse_args, resolve_arg
from commands.formatting import (
    format_date,
    format_size,
    format_table,
    is_octal_mode,
    octal_to_permissions,
    permissions_to_octal,
)
from commands.registry import command
from models.filesystem import (
    FileSystemError,
    FilesystemNode,
    NotADirectoryFSError,
    PathNotFoundError,
    canonical_path,
    join_path,
)
from models.seed import KNOWN_IDS
from models.session import SessionState

# ===== Helpers =====


def _long_listing(entries: list[FilesystemNode], human: bool = False) -> list[str]:
    rows = [
        (
            entry.permissions,
            _link_count(entry),
            entry.owner,
            entry.group,
            format_size(entry.size) if human else entry.size,
            format_date(entry.modified_at),
            entry.name,
        )
        for entry in entries
    ]
    return format_table(rows, right_align=(1, 4))


def _link_count(node: FilesystemNode) -> int:
    if not node.is_directory:
        return 1
    return 2 + sum(1 for child in node.children.values() if child.is_directory)


def _blocks_1k(size: int) -> int:
    return math.ceil(size / 1024)


def _basename(path: str) -> str:
    return canonical_path(path).rsplit("/", 1)[-1]


# ===== Navigation =====


@command("pwd", group="file")
def pwd(args: list[str], session: SessionState) -> str:
    return session.get_current_directory()


@command("cd", group="file")
def cd(args: list[str], session: SessionState) -> str:
    """Change directory. Supports "~", "cd -" and no argument (HOME)."""
    if len(args) > 1:
        return "cd: too many arguments"

    target = args[0] if args else "~"
    if target == "-":
        previous = session.environment.get("OLDPWD")
        if previous is None:
            return "cd: OLDPWD not set"
        try:
            return session.change_directory(previous)
        except FileSystemError as e:
            return f"cd: {previous}: {e.strerror}"

    try:
        session.change_directory(expand_home(target, session))
    except FileSystemError as e:
        return f"cd: {target}: {e.strerror}"
    return ""


@command("ls", group="file")
def ls(args: list[str], session: SessionState) -> str:
    """List directory contents.

    Flags may be clustered (-la, -lah). -a and -A both include dot-files;
    "." and ".." are never listed. Several operands are listed one after
    another with "name:" headers.
    """
    parsed = parse_args(args)
    show_all = parsed.has("a", "A") or "all" in parsed.long_flags
    long_format = parsed.has("l")
    human = parsed.has("h")
    operands = parsed.operands or ["."]

    def render(entries: list[FilesystemNode], with_total: bool) -> list[str]:
        if not long_format:
            return ["  ".join(entry.name for entry in entries)] if entries else []
        lines = _long_listing(entries, human)
        if with_total:
            total = sum(_blocks_1k(entry.size) for entry in entries)
            lines.insert(0, f"total {total}")
        return lines

    errors: list[str] = []
    files: list[FilesystemNode] = []
    directories: list[tuple[str, FilesystemNode]] = []
    for operand in operands:
        node = session.lookup(expand_home(operand, session))
        if node is None:
            errors.append(f"ls: cannot access '{operand}': No such file or directory")
        elif node.is_directory:
            directories.append((operand, node))
        else:
            files.append(node.model_copy(update={"name": operand}))

    blocks: list[str] = []
    if files:
        blocks.append("\n".join(render(files, with_total=False)))
    for operand, node in directories:
        lines = render(node.sorted_children(include_hidden=show_all), with_total=True)
        if len(operands) > 1:
            lines.insert(0, f"{operand}:")
        blocks.append("\n".join(lines))

    output = "\n\n".join(block for block in blocks if block)
    return "\n".join(errors + ([output] if output else []))


# ===== Reading =====


@command("cat", group="file")
def cat(args: list[str], session: SessionState) -> str:
    if not args:
        return "cat: missing file operand"

    results = []
    for operand in args:
        node = session.lookup(expand_home(operand, session))
        if node is None:
            results.append(f"cat: {operand}: No such file or directory")
        elif node.is_directory:
            results.append(f"cat: {operand}: Is a directory")
        else:
            results.append(node.content)
    return "\n".join(results)


@command("file", group="file")
def file_type(args: list[str], session: SessionState) -> str:
    """Guess file types from the name and content."""
    if not args:
        return "file: missing file operand"

    results = []
    for operand in args:
        node = session.lookup(expand_home(operand, session))
        if node is None:
            results.append(f"{operand}: cannot open `{operand}' (No such file or directory)")
        elif node.is_directory:
            results.append(f"{operand}: directory")
        else:
            results.append(f"{operand}: {_describe_file(node)}")
    return "\n".join(results)


_EXTENSION_TYPES = {
    "jpg": "JPEG image data",
    "jpeg": "JPEG image data",
    "png": "PNG image data",
    "gif": "GIF image data",
    "pdf": "PDF document",
    "zip": "Zip archive data",
    "gz": "gzip compressed data",
    "tgz": "gzip compressed data",
    "tar": "POSIX tar archive",
    "json": "JSON data",
    "html": "HTML document, ASCII text",
    "sh": "Bourne-Again shell script, ASCII text executable",
    "py": "Python script, ASCII text executable",
}


def _describe_file(node: FilesystemNode) -> str:
    extension = node.name.rsplit(".", 1)[-1].lower() if "." in node.name.lstrip(".") else ""
    if extension in _EXTENSION_TYPES:
        return _EXTENSION_TYPES[extension]
    if not node.content:
        return "empty"
    if node.content.isascii():
        return "ASCII text"
    return "UTF-8 Unicode text"


@command("stat", group="file")
def stat(args: list[str], session: SessionState) -> str:
    """Show GNU stat style metadata for each operand."""
    if not args:
        return "stat: missing operand"

    results = []
    for operand in args:
        path = canonical_path(resolve_arg(operand, session))
        node = session.filesystem.lookup(path)
        if node is None:
            results.append(f"stat: cannot stat '{operand}': No such file or directory")
            continue

        if node.is_directory:
            kind = "directory"
        elif node.size == 0:
            kind = "regular empty file"
        else:
            kind = "regular file"
        blocks = math.ceil(node.size / 4096) * 8
        inode = zlib.crc32(path.encode("utf-8")) % 10_000_000
        uid = KNOWN_IDS.get(node.owner, 1000)
        gid = KNOWN_IDS.get(node.group, 1000)
        timestamp = _stat_timestamp(node.modified_at)
        results.append(
            f"  File: {operand}\n"
            f"  Size: {node.size:<10}\tBlocks: {blocks:<10} IO Block: 4096   {kind}\n"
            f"Device: 801h/2049d\tInode: {inode:<11} Links: {_link_count(node)}\n"
            f"Access: ({permissions_to_octal(node.permissions)}/{node.permissions})  "
            f"Uid: ({uid:>5}/{node.owner:>8})   Gid: ({gid:>5}/{node.group:>8})\n"
            f"Access: {timestamp}\n"
            f"Modify: {timestamp}\n"
            f"Change: {timestamp}\n"
            f" Birth: -"
        )
    return "\n".join(results)


def _stat_timestamp(value: datetime) -> str:
    offset = value.strftime("%z") or "+0000"
    return value.strftime("%Y-%m-%d %H:%M:%S.") + f"{value.microsecond:06d}000 {offset}"


@command("du", group="file")
def du(args: list[str], session: SessionState) -> str:
    """Estimate disk usage.

    Every directory beneath the operand is listed after its children, the
    way GNU du walks; -s prints only the operand's total.
    """
    parsed = parse_args(args)
    human = parsed.has("h")
    summarize = parsed.has("s")

    def render(size: int) -> str:
        return format_size(size) if human else str(_blocks_1k(size))

    results = []
    for operand in parsed.operands or ["."]:
        node = session.lookup(expand_home(operand, session))
        if node is None:
            results.append(f"du: cannot access '{operand}': No such file or directory")
            continue

        if summarize or not node.is_directory:
            results.append(f"{render(node.total_size())}\t{operand}")
            continue

        lines: list[str] = []

        def visit(display: str, directory: FilesystemNode) -> None:
            for child in directory.sorted_children():
                if child.is_directory:
                    visit(join_path(display, child.name), child)
            lines.append(f"{render(directory.total_size())}\t{display}")

        visit(operand, node)
        results.extend(lines)
    return "\n".join(results)


@command("find", group="file")
def find(args: list[str], session: SessionState) -> str:
    """Search for files: find [path...] [-name GLOB] [-type f|d]."""
    paths = []
    index = 0
    while index < len(args) and not args[index].startswith("-"):
        paths.append(args[index])
        index += 1

    name_pattern: Optional[str] = None
    type_filter: Optional[str] = None
    ignore_case = False
    while index < len(args):
        predicate = args[index]
        if predicate not in ("-name", "-iname", "-type"):
            return f"find: unknown predicate '{predicate}'"
        if index + 1 >= len(args):
            return f"find: missing argument to `{predicate}'"
        value = args[index + 1]
        if predicate == "-type":
            if value not in ("f", "d"):
                return f"find: Unknown argument to -type: {value}"
            type_filter = value
        else:
            ignore_case = predicate == "-iname"
            name_pattern = value.lower() if ignore_case else value
        index += 2

    def matches(node: FilesystemNode) -> bool:
        if type_filter == "f" and not node.is_file:
            return False
        if type_filter == "d" and not node.is_directory:
            return False
        if name_pattern is not None:
            name = node.name.lower() if ignore_case else node.name
            return fnmatchcase(name, name_pattern)
        return True

    results = []
    for operand in paths or ["."]:
        root = canonical_path(resolve_arg(operand, session))
        if not session.filesystem.exists(root):
            results.append(f"find: '{operand}': No such file or directory")
            continue
        for path, node in session.filesystem.walk(root):
            if not matches(node):
                continue
            suffix = path[len(root):].lstrip("/")
            results.append(join_path(operand, suffix) if suffix else operand)
    return "\n".join(results)


# ===== Creating and removing =====


@command("mkdir", group="file")
def mkdir(args: list[str], session: SessionState) -> str:
    """Create directories; -p creates missing parents and tolerates existing ones."""
    parsed = parse_args(args)
    if not parsed.operands:
        return "mkdir: missing operand"
    make_parents = parsed.has("p")

    errors = []
    for operand in parsed.operands:
        path = canonical_path(resolve_arg(operand, session))
        try:
            if make_parents:
                _make_directories(session, path)
            else:
                parent, name = session.filesystem.parent_and_name(path)
                session.filesystem.insert(
                    parent, name, FilesystemNode.new_directory(name, session.now())
                )
        except FileSystemError as e:
            errors.append(f"mkdir: cannot create directory '{operand}': {e.strerror}")
    return "\n".join(errors)


def _make_directories(session: SessionState, path: str) -> None:
    current = "/"
    for part in path.strip("/").split("/"):
        if not part:
            continue
        child_path = join_path(current, part)
        node = session.filesystem.lookup(child_path)
        if node is None:
            session.filesystem.insert(
                current, part, FilesystemNode.new_directory(part, session.now())
            )
        elif not node.is_directory:
            raise NotADirectoryFSError(child_path)
        current = child_path


@command("rmdir", group="file")
def rmdir(args: list[str], session: SessionState) -> str:
    if not args:
        return "rmdir: missing operand"

    errors = []
    for operand in args:
        path = canonical_path(resolve_arg(operand, session))
        node = session.filesystem.lookup(path)
        if node is None:
            errors.append(f"rmdir: failed to remove '{operand}': No such file or directory")
        elif not node.is_directory:
            errors.append(f"rmdir: failed to remove '{operand}': Not a directory")
        elif node.children:
            errors.append(f"rmdir: failed to remove '{operand}': Directory not empty")
        elif path == "/" or path == session.current_directory:
            errors.append(f"rmdir: failed to remove '{operand}': Device or resource busy")
        else:
            parent, name = session.filesystem.parent_and_name(path)
            session.filesystem.remove(parent, name)
    return "\n".join(errors)


@command("touch", group="file")
def touch(args: list[str], session: SessionState) -> str:
    """Create empty files, or bump modified_at of existing nodes."""
    if not args:
        return "touch: missing file operand"

    errors = []
    for operand in args:
        path = canonical_path(resolve_arg(operand, session))
        node = session.filesystem.lookup(path)
        if node is not None:
            node.modified_at = session.now()
            continue
        parent, name = session.filesystem.parent_and_name(path)
        try:
            session.filesystem.insert(parent, name, FilesystemNode.new_file(name, session.now()))
        except FileSystemError as e:
            errors.append(f"touch: cannot touch '{operand}': {e.strerror}")
    return "\n".join(errors)


@command("rm", group="file")
def rm(args: list[str], session: SessionState) -> str:
    """Remove files; -r/-R for directories, -f to ignore missing operands."""
    parsed = parse_args(args)
    recursive = parsed.has("r", "R") or "recursive" in parsed.long_flags
    force = parsed.has("f") or "force" in parsed.long_flags
    if not parsed.operands:
        return "" if force else "rm: missing operand"

    errors = []
    for operand in parsed.operands:
        path = canonical_path(resolve_arg(operand, session))
        node = session.filesystem.lookup(path)
        if node is None:
            if not force:
                errors.append(f"rm: cannot remove '{operand}': No such file or directory")
            continue
        if node.is_directory and not recursive:
            errors.append(f"rm: cannot remove '{operand}': Is a directory")
            continue
        if path == "/":
            errors.append("rm: it is dangerous to operate recursively on '/'")
            errors.append("rm: use --no-preserve-root to override this failsafe")
            continue
        parent, name = session.filesystem.parent_and_name(path)
        session.filesystem.remove(parent, name, recursive=True)
        if session.filesystem.lookup(session.current_directory) is None:
            # cwd was inside the removed subtree
            session.change_directory(_nearest_existing(session, session.current_directory))
    return "\n".join(errors)


def _nearest_existing(session: SessionState, path: str) -> str:
    while not session.filesystem.exists(path):
        path, _ = session.filesystem.parent_and_name(path)
    return path


# ===== Copy and move =====


def _copy_target(
    session: SessionState, operands: list[str], verb: str
) -> tuple[list[str], str, str, Optional[str]]:
    """Split operands into sources and destination.

    Returns:
        (sources, destination operand, destination path, error message).
    """
    *sources, destination = operands
    dest_path = canonical_path(resolve_arg(destination, session))
    dest_node = session.filesystem.lookup(dest_path)
    if len(sources) > 1 and (dest_node is None or not dest_node.is_directory):
        return sources, destination, dest_path, f"{verb}: target '{destination}' is not a directory"
    return sources, destination, dest_path, None


def _final_destination(session: SessionState, source_path: str, dest_path: str) -> str:
    dest_node = session.filesystem.lookup(dest_path)
    if dest_node is not None and dest_node.is_directory:
        return join_path(dest_path, _basename(source_path))
    return dest_path


@command("cp", group="file")
def cp(args: list[str], session: SessionState) -> str:
    """Copy files; -r/-R copies directories. Copies are deep and never shared."""
    parsed = parse_args(args)
    recursive = parsed.has("r", "R", "a") or "recursive" in parsed.long_flags
    if not parsed.operands:
        return "cp: missing file operand"
    if len(parsed.operands) < 2:
        return "cp: missing destination file operand"

    sources, destination, dest_path, error = _copy_target(session, parsed.operands, "cp")
    if error:
        return error

    errors = []
    for source in sources:
        source_path = canonical_path(resolve_arg(source, session))
        node = session.filesystem.lookup(source_path)
        if node is None:
            errors.append(f"cp: cannot stat '{source}': No such file or directory")
            continue
        if node.is_directory and not recursive:
            errors.append(f"cp: -r not specified; omitting directory '{source}'")
            continue

        target_path = _final_destination(session, source_path, dest_path)
        if target_path == source_path:
            errors.append(f"cp: '{source}' and '{destination}' are the same file")
            continue
        if node.is_directory and target_path.startswith(source_path + "/"):
            errors.append(
                f"cp: cannot copy a directory, '{source}', into itself, '{destination}'"
            )
            continue

        existing = session.filesystem.lookup(target_path)
        if existing is not None and existing.is_directory and not node.is_directory:
            errors.append(
                f"cp: cannot overwrite directory '{destination}' with non-directory"
            )
            continue
        if existing is not None and not existing.is_directory and node.is_directory:
            errors.append(
                f"cp: cannot overwrite non-directory '{destination}' with directory '{source}'"
            )
            continue

        copy = node.model_copy(deep=True)
        copy.modified_at = session.now()
        parent, name = session.filesystem.parent_and_name(target_path)
        try:
            session.filesystem.insert(parent, name, copy, overwrite=True)
        except FileSystemError as e:
            kind = "directory" if node.is_directory else "regular file"
            errors.append(f"cp: cannot create {kind} '{destination}': {e.strerror}")
    return "\n".join(errors)


@command("mv", group="file")
def mv(args: list[str], session: SessionState) -> str:
    """Move or rename; a directory destination receives the source inside it."""
    parsed = parse_args(args)
    if not parsed.operands:
        return "mv: missing file operand"
    if len(parsed.operands) < 2:
        return "mv: missing destination file operand"

    sources, destination, dest_path, error = _copy_target(session, parsed.operands, "mv")
    if error:
        return error

    errors = []
    for source in sources:
        source_path = canonical_path(resolve_arg(source, session))
        node = session.filesystem.lookup(source_path)
        if node is None:
            errors.append(f"mv: cannot stat '{source}': No such file or directory")
            continue

        target_path = _final_destination(session, source_path, dest_path)
        if target_path == source_path:
            errors.append(f"mv: '{source}' and '{destination}' are the same file")
            continue
        if node.is_directory and (
            target_path.startswith(source_path + "/") or source_path == "/"
        ):
            errors.append(
                f"mv: cannot move '{source}' to a subdirectory of itself, '{destination}'"
            )
            continue
        existing = session.filesystem.lookup(target_path)
        if existing is not None and not existing.is_directory and node.is_directory:
            errors.append(
                f"mv: cannot overwrite non-directory '{destination}' with directory '{source}'"
            )
            continue

        try:
            session.filesystem.move(source_path, target_path, session.now())
        except FileSystemError as e:
            errors.append(f"mv: cannot move '{source}' to '{destination}': {e.strerror}")
            continue
        if session.filesystem.lookup(session.current_directory) is None:
            session.change_directory(_nearest_existing(session, session.current_directory))
    return "\n".join(errors)


@command("ln", group="file")
def ln(args: list[str], session: SessionState) -> str:
    parsed = parse_args(args)
    if len(parsed.operands) < 2:
        return "ln: missing destination file operand"

    source, dest = parsed.operands[-2], parsed.operands[-1]
    if parsed.has("s"):
        return f"ln: symbolic links simulated - would create symlink {dest} -> {source}"
    return f"ln: hard links simulated - would create hard link {dest} -> {source}"


# ===== Ownership and permissions =====


def _targets(session: SessionState, path: str, recursive: bool) -> list[FilesystemNode]:
    node = session.filesystem.require(path)
    if not recursive:
        return [node]
    return [node for _, node in session.filesystem.walk(path)]


@command("chmod", group="file")
def chmod(args: list[str], session: SessionState) -> str:
    """Change permission bits: octal ("755") or symbolic ("u+x,go-w") modes, -R."""
    recursive = "-R" in args
    operands = [arg for arg in args if arg != "-R"]
    if not operands:
        return "chmod: missing operand"
    if len(operands) < 2:
        return f"chmod: missing operand after '{operands[0]}'"

    mode, files = operands[0], operands[1:]
    if not is_octal_mode(mode) and apply_symbolic_mode("-rw-r--r--", mode) is None:
        return f"chmod: invalid mode: '{mode}'"

    errors = []
    for operand in files:
        path = canonical_path(resolve_arg(operand, session))
        try:
            nodes = _targets(session, path, recursive)
        except PathNotFoundError:
            errors.append(f"chmod: cannot access '{operand}': No such file or directory")
            continue
        for node in nodes:
            if is_octal_mode(mode):
                node.permissions = octal_to_permissions(mode, node.is_directory)
            else:
                node.permissions = apply_symbolic_mode(
                    node.permissions, mode, node.is_directory
                )
    return "\n".join(errors)


def apply_symbolic_mode(
    permissions: str, mode: str, is_directory: bool = False
) -> Optional[str]:
    """Apply a symbolic chmod mode such as "u+x,go-w" to a permission string.

    Args:
        permissions: Current 10-character permission string.
        mode: Comma-separated clauses of [ugoa]*[+-=][rwxX]*.
        is_directory: Whether "X" should grant execute.

    Returns:
        The new permission string, or None if mode is invalid.
    """
    bits = list(permissions)
    offsets = {"u": 1, "g": 4, "o": 7}
    for clause in mode.split(","):
        who_end = 0
        while who_end < len(clause) and clause[who_end] in "ugoa":
            who_end += 1
        who = clause[:who_end] or "a"
        if "a" in who:
            who = "ugo"
        rest = clause[who_end:]
        if not rest or rest[0] not in "+-=":
            return None
        operator, letters = rest[0], rest[1:]
        if any(letter not in "rwxX" for letter in letters):
            return None

        any_execute = any(bits[offset + 2] == "x" for offset in offsets.values())
        for class_letter in who:
            base = offsets[class_letter]
            if operator == "=":
                bits[base:base + 3] = ["-", "-", "-"]
            for letter in letters:
                if letter == "X":
                    if not (is_directory or any_execute):
                        continue
                    letter = "x"
                position = base + "rwx".index(letter)
                bits[position] = "-" if operator == "-" else letter
    return "".join(bits)


@command("chown", group="file")
def chown(args: list[str], session: SessionState) -> str:
    """Change owner and/or group: chown [-R] user[:group] FILE..."""
    recursive = "-R" in args
    operands = [arg for arg in args if arg != "-R"]
    if not operands:
        return "chown: missing operand"
    if len(operands) < 2:
        return f"chown: missing operand after '{operands[0]}'"

    spec, files = operands[0], operands[1:]
    user, _, group = spec.partition(":")

    errors = []
    for operand in files:
        path = canonical_path(resolve_arg(operand, session))
        try:
            nodes = _targets(session, path, recursive)
        except PathNotFoundError:
            errors.append(f"chown: cannot access '{operand}': No such file or directory")
            continue
        for node in nodes:
            if user:
                node.owner = user
            if group:
                node.group = group
    return "\n".join(errors)
