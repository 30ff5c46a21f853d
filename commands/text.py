"""Text processing commands: echo, grep, head, tail, wc, sort, uniq, cut, diff.

File content is split on "\\n" only; a trailing newline does not produce an
extra empty line.
"""

import difflib
import re
from typing import Optional

from commands.arguments import expand_home, parse_args, parse_int
from commands.registry import command
from models.session import SessionState

_VARIABLE_PATTERN = re.compile(r"\$\{(\w+)\}|\$(\w+)")


def split_lines(content: str) -> list[str]:
    """Split file content into lines, ignoring one trailing newline."""
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _read(
    operand: str,
    session: SessionState,
    missing: str,
    directory: str,
) -> tuple[Optional[str], Optional[str]]:
    """Read a file operand.

    Args:
        operand: Path as typed.
        session: Session to read from.
        missing: Error template for a missing path ({} is the operand).
        directory: Error template for a directory operand.

    Returns:
        (content, None) on success or (None, error message).
    """
    node = session.lookup(expand_home(operand, session))
    if node is None:
        return None, missing.format(operand)
    if node.is_directory:
        return None, directory.format(operand)
    return node.content, None


@command("echo", group="file")
def echo(args: list[str], session: SessionState) -> str:
    """Print arguments, expanding $VAR and ${VAR} from the environment."""
    if args and args[0] == "-n":
        args = args[1:]

    def substitute(match: re.Match) -> str:
        name = match.group(1) or match.group(2)
        return session.environment.get(name, "")

    return " ".join(_VARIABLE_PATTERN.sub(substitute, arg) for arg in args)


def _line_count_option(
    args: list[str],
) -> tuple[list[str], Optional[int], bool, Optional[str]]:
    """Pull -n N / -nN / -N out of args for head and tail.

    The third value is True when the count was written as +N, which tail
    reads as "starting at line N".
    """
    remaining = []
    count: Optional[int] = 10
    from_start = False
    error = None
    index = 0
    while index < len(args):
        arg = args[index]
        if arg == "-n":
            if index + 1 >= len(args):
                error = "option requires an argument -- 'n'"
                break
            value = args[index + 1]
            index += 1
        elif arg.startswith("-n") and len(arg) > 2:
            value = arg[2:]
        elif arg.startswith("-") and arg[1:].isdigit():
            value = arg[1:]
        else:
            remaining.append(arg)
            index += 1
            continue
        from_start = value.startswith("+")
        count = parse_int(value.lstrip("+"))
        if count is None:
            error = f"invalid number of lines: '{value}'"
            break
        index += 1
    return remaining, count, from_start, error


def _head_or_tail(tool: str, args: list[str], session: SessionState) -> str:
    files, count, from_start, error = _line_count_option(args)
    if error:
        return f"{tool}: {error}"
    if not files:
        return f"{tool}: missing file operand"

    blocks = []
    for operand in files:
        content, error = _read(
            operand,
            session,
            tool + ": cannot open '{}' for reading: No such file or directory",
            tool + ": error reading '{}': Is a directory",
        )
        if error:
            blocks.append(error)
            continue
        lines = split_lines(content)
        if tool == "head":
            selected = lines[:count]
        elif from_start:
            selected = lines[max(count - 1, 0):]
        else:
            selected = lines[-count:] if count else []
        text = "\n".join(selected)
        if len(files) > 1:
            text = f"==> {operand} <==\n{text}"
        blocks.append(text)
    return "\n\n".join(blocks) if len(files) > 1 else "\n".join(blocks)


@command("head", group="file")
def head(args: list[str], session: SessionState) -> str:
    """Print the first lines of files (-n N or -N, default 10)."""
    return _head_or_tail("head", args, session)


@command("tail", group="file")
def tail(args: list[str], session: SessionState) -> str:
    """Print the last lines of files (-n N or -N, default 10; -n +N starts at line N)."""
    return _head_or_tail("tail", args, session)


@command("wc", group="file")
def wc(args: list[str], session: SessionState) -> str:
    """Count newlines, words and bytes.

    Columns are right-aligned to the width of the largest number printed.
    """
    parsed = parse_args(args)
    if not parsed.operands:
        return "wc: missing file operand"
    show_lines = parsed.has("l")
    show_words = parsed.has("w")
    show_bytes = parsed.has("c")
    if not (show_lines or show_words or show_bytes):
        show_lines = show_words = show_bytes = True

    errors = []
    rows: list[tuple[list[int], str]] = []
    for operand in parsed.operands:
        content, error = _read(
            operand, session, "wc: {}: No such file or directory", "wc: {}: Is a directory"
        )
        if error:
            errors.append(error)
            continue
        counts = []
        if show_lines:
            counts.append(content.count("\n"))
        if show_words:
            counts.append(len(content.split()))
        if show_bytes:
            counts.append(len(content.encode("utf-8")))
        rows.append((counts, operand))

    if len(rows) > 1:
        totals = [sum(column) for column in zip(*(counts for counts, _ in rows))]
        rows.append((totals, "total"))

    numbers = [number for counts, _ in rows for number in counts]
    width = len(str(max(numbers))) if numbers else 1
    lines = [
        " ".join(str(number).rjust(width) for number in counts) + f" {name}"
        for counts, name in rows
    ]
    return "\n".join(errors + lines)


@command("sort", group="file")
def sort(args: list[str], session: SessionState) -> str:
    """Sort lines of files; -r reverse, -n numeric, -u unique."""
    parsed = parse_args(args)
    if not parsed.operands:
        return "sort: missing file operand"

    lines: list[str] = []
    for operand in parsed.operands:
        content, error = _read(
            operand,
            session,
            "sort: cannot read: {}: No such file or directory",
            "sort: read failed: {}: Is a directory",
        )
        if error:
            return error
        lines.extend(split_lines(content))

    if parsed.has("n"):
        lines.sort(key=lambda line: (_leading_number(line), line))
    else:
        lines.sort()
    if parsed.has("u"):
        lines = list(dict.fromkeys(lines))
    if parsed.has("r"):
        lines.reverse()
    return "\n".join(lines)


def _leading_number(line: str) -> float:
    match = re.match(r"\s*(-?\d+(?:\.\d+)?)", line)
    return float(match.group(1)) if match else 0.0


@command("uniq", group="file")
def uniq(args: list[str], session: SessionState) -> str:
    """Collapse adjacent duplicate lines; -c counts, -d duplicates only, -u uniques only."""
    parsed = parse_args(args)
    if not parsed.operands:
        return "uniq: missing file operand"

    operand = parsed.operands[0]
    content, error = _read(
        operand, session, "uniq: {}: No such file or directory", "uniq: {}: Is a directory"
    )
    if error:
        return error

    runs: list[list] = []
    for line in split_lines(content):
        if runs and runs[-1][0] == line:
            runs[-1][1] += 1
        else:
            runs.append([line, 1])

    if parsed.has("d"):
        runs = [run for run in runs if run[1] > 1]
    if parsed.has("u"):
        runs = [run for run in runs if run[1] == 1]
    if parsed.has("c"):
        return "\n".join(f"{count:7d} {line}" for line, count in runs)
    return "\n".join(line for line, _ in runs)


def parse_field_list(spec: str) -> Optional[list[tuple[int, Optional[int]]]]:
    """Parse a cut LIST ("1,3", "2-4", "-2", "3-") into 1-based inclusive ranges.

    Returns:
        List of (start, end) pairs with end None for open ranges, or None
        if the list is invalid.
    """
    ranges = []
    for part in spec.split(","):
        if not part:
            return None
        start_text, dash, end_text = part.partition("-")
        start = parse_int(start_text) if start_text else 1
        end = (parse_int(end_text) if end_text else None) if dash else start
        if start is None or start < 1 or (dash and end_text and end is None):
            return None
        if end is not None and end < start:
            return None
        ranges.append((start, end))
    return ranges


def _selected(index: int, ranges: list[tuple[int, Optional[int]]]) -> bool:
    return any(start <= index and (end is None or index <= end) for start, end in ranges)


@command("cut", group="file")
def cut(args: list[str], session: SessionState) -> str:
    """Select fields (-f with -d, default TAB) or characters (-c) from each line."""
    parsed = parse_args(args, value_options="dfc")
    if parsed.missing_value:
        return f"cut: option requires an argument -- '{parsed.missing_value}'"

    delimiter = parsed.values.get("d", "\t")
    if len(delimiter) != 1:
        return "cut: the delimiter must be a single character"
    list_spec = parsed.values.get("f") or parsed.values.get("c")
    if list_spec is None:
        return "cut: you must specify a list of bytes, characters, or fields"
    ranges = parse_field_list(list_spec)
    if ranges is None:
        return f"cut: invalid field value '{list_spec}'"
    if not parsed.operands:
        return "cut: missing file operand"

    by_character = "c" in parsed.values
    output = []
    for operand in parsed.operands:
        content, error = _read(
            operand, session, "cut: {}: No such file or directory", "cut: {}: Is a directory"
        )
        if error:
            output.append(error)
            continue
        for line in split_lines(content):
            if by_character:
                output.append(
                    "".join(char for i, char in enumerate(line, 1) if _selected(i, ranges))
                )
            elif delimiter not in line:
                output.append(line)
            else:
                fields = line.split(delimiter)
                output.append(
                    delimiter.join(
                        field for i, field in enumerate(fields, 1) if _selected(i, ranges)
                    )
                )
    return "\n".join(output)


@command("grep", group="file")
def grep(args: list[str], session: SessionState) -> str:
    """Print lines containing a literal pattern.

    Flags: -i ignore case, -n line numbers, -v invert, -c count. With several
    files each result is prefixed with "file:".
    """
    parsed = parse_args(args)
    if len(parsed.operands) < 2:
        return "grep: missing pattern or file"

    pattern, files = parsed.operands[0], parsed.operands[1:]
    ignore_case = parsed.has("i")
    needle = pattern.lower() if ignore_case else pattern

    def matches(line: str) -> bool:
        found = needle in (line.lower() if ignore_case else line)
        return not found if parsed.has("v") else found

    output = []
    for operand in files:
        content, error = _read(
            operand, session, "grep: {}: No such file or directory", "grep: {}: Is a directory"
        )
        if error:
            output.append(error)
            continue
        prefix = f"{operand}:" if len(files) > 1 else ""
        hits = [
            (number, line)
            for number, line in enumerate(split_lines(content), 1)
            if matches(line)
        ]
        if parsed.has("c"):
            output.append(f"{prefix}{len(hits)}")
        elif parsed.has("n"):
            output.extend(f"{prefix}{number}:{line}" for number, line in hits)
        else:
            output.extend(f"{prefix}{line}" for _, line in hits)
    return "\n".join(output)


def _diff_range(start: int, end: int) -> str:
    if end - start == 1:
        return str(start + 1)
    return f"{start + 1},{end}"


def normal_diff(left: list[str], right: list[str]) -> list[str]:
    """Produce diff's default ("normal") output for two line lists."""
    output = []
    matcher = difflib.SequenceMatcher(a=left, b=right, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            continue
        if tag == "replace":
            output.append(f"{_diff_range(i1, i2)}c{_diff_range(j1, j2)}")
            output.extend(f"< {line}" for line in left[i1:i2])
            output.append("---")
            output.extend(f"> {line}" for line in right[j1:j2])
        elif tag == "delete":
            output.append(f"{_diff_range(i1, i2)}d{j1}")
            output.extend(f"< {line}" for line in left[i1:i2])
        elif tag == "insert":
            output.append(f"{i1}a{_diff_range(j1, j2)}")
            output.extend(f"> {line}" for line in right[j1:j2])
    return output


@command("diff", group="file")
def diff(args: list[str], session: SessionState) -> str:
    """Compare two files line by line; -q only reports whether they differ."""
    parsed = parse_args(args)
    if not parsed.operands:
        return "diff: missing operand after 'diff'"
    if len(parsed.operands) < 2:
        return f"diff: missing operand after '{parsed.operands[0]}'"

    first, second = parsed.operands[:2]
    contents = []
    for operand in (first, second):
        content, error = _read(
            operand, session, "diff: {}: No such file or directory", "diff: {}: Is a directory"
        )
        if error:
            return error
        contents.append(content)

    if contents[0] == contents[1]:
        return ""
    if parsed.has("q"):
        return f"Files {first} and {second} differ"
    return "\n".join(normal_diff(split_lines(contents[0]), split_lines(contents[1])))


@command("awk", group="file")
def awk(args: list[str], session: SessionState) -> str:
    if not args:
        return "awk: usage: awk program [file ...]"
    return "awk: simulated - pattern scanning and processing language"


@command("sed", group="file")
def sed(args: list[str], session: SessionState) -> str:
    if not args:
        return "sed: usage: sed [OPTION]... {script-only-if-no-other-script} [input-file]..."
    return "sed: simulated - stream editor for filtering and transforming text"


@command("tr", group="file")
def tr(args: list[str], session: SessionState) -> str:
    if len(args) < 2:
        return "tr: usage: tr [OPTION]... SET1 [SET2]"
    return "tr: simulated - translate or delete characters"
