"""Formatting helpers for command output (sizes, dates, permissions, tables)."""

from datetime import datetime
from typing import Iterable, Sequence

MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_PERMISSION_TRIPLETS = ("---", "--x", "-w-", "-wx", "r--", "r-x", "rw-", "rwx")


def format_size(size: int) -> str:
    """Format a byte count the way ls -h does, rounded to whole units.

    A value that rounds up to 1024 of one unit is shown in the next unit.

    Example:
        >>> format_size(512), format_size(2048), format_size(1048575)
        ('512', '2K', '1M')
    """
    if size < 1024:
        return str(size)
    for exponent, suffix in ((1, "K"), (2, "M")):
        scaled = round(size / 1024**exponent)
        if scaled < 1024:
            return f"{scaled}{suffix}"
    return f"{round(size / 1024**3)}G"


def format_date(value: datetime) -> str:
    """Format a timestamp as ls -l shows it, e.g. "Mar  5 14:07"."""
    month = MONTH_ABBREVIATIONS[value.month - 1]
    return f"{month} {value.day:>2} {value.hour:02d}:{value.minute:02d}"


def is_octal_mode(mode: str) -> bool:
    """Whether mode is a 3 or 4 digit octal permission string."""
    return len(mode) in (3, 4) and all(char in "01234567" for char in mode)


def octal_to_permissions(mode: str, is_directory: bool = False) -> str:
    """Convert an octal mode like "755" to a permission string.

    A leading fourth digit (setuid/setgid/sticky) is accepted and ignored.

    Args:
        mode: Three or four octal digits.
        is_directory: Whether to prefix "d" instead of "-".

    Returns:
        A 10-character permission string such as "drwxr-xr-x".

    Raises:
        ValueError: If mode is not a valid octal mode.
    """
    if not is_octal_mode(mode):
        raise ValueError(f"Invalid octal mode: {mode!r}")
    digits = mode[-3:]
    prefix = "d" if is_directory else "-"
    return prefix + "".join(_PERMISSION_TRIPLETS[int(digit)] for digit in digits)


def permissions_to_octal(permissions: str) -> str:
    """Convert a permission string like "-rw-r--r--" to "0644"."""
    value = 0
    for index, char in enumerate(permissions[1:10]):
        if char != "-":
            value |= 1 << (8 - index)
    return f"{value:04o}"


def format_table(
    rows: Iterable[Sequence[object]],
    right_align: Iterable[int] = (),
    separator: str = " ",
) -> list[str]:
    """Align rows into columns.

    The last column is never padded so lines carry no trailing spaces.

    Args:
        rows: Rows of cell values (converted with str()).
        right_align: Indexes of columns to right-align (numbers).
        separator: Text placed between columns.

    Returns:
        One formatted line per row.
    """
    table = [[str(cell) for cell in row] for row in rows]
    if not table:
        return []

    right = set(right_align)
    column_count = max(len(row) for row in table)
    widths = [0] * column_count
    for row in table:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))

    lines = []
    for row in table:
        cells = []
        for index, cell in enumerate(row):
            if index == len(row) - 1 and index not in right:
                cells.append(cell)
            elif index in right:
                cells.append(cell.rjust(widths[index]))
            else:
                cells.append(cell.ljust(widths[index]))
        lines.append(separator.join(cells))
    return lines
