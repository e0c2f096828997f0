"""Sorting entries and laying them out as columns or long listings."""

from __future__ import annotations

import dataclasses
import datetime
import stat
from collections.abc import Iterable, Sequence

from .config import Configuration
from .entries import DirEntry

MIN_COLUMN_WIDTH = 3
PADDING = 0

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_PERMISSION_BITS = (
    (stat.S_IRUSR, "r"),
    (stat.S_IWUSR, "w"),
    (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"),
    (stat.S_IWGRP, "w"),
    (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"),
    (stat.S_IWOTH, "w"),
    (stat.S_IXOTH, "x"),
)

# (special bit, position in the permission string, letter when executable, letter otherwise)
_SPECIAL_BITS = (
    (stat.S_ISUID, 2, "s", "S"),
    (stat.S_ISGID, 5, "s", "S"),
    (stat.S_ISVTX, 8, "t", "T"),
)


@dataclasses.dataclass
class _ColumnLayout:
    valid: bool
    line_len: int
    widths: list[int]


def sort_key(entry: DirEntry) -> tuple[bool, str]:
    """Key that puts directories first, then orders names case-insensitively.

    A leading dot is ignored; the rest of such a name keeps its case.
    """
    lowered = entry.name.lower()
    name = entry.name[1:] if lowered.startswith(".") else lowered
    return (not entry.is_dir, name)


def sort_entries(entries: Iterable[DirEntry]) -> list[DirEntry]:
    """Return the entries in listing order."""
    return sorted(entries, key=sort_key)


def max_columns(width: int) -> int:
    """Return the most columns of minimal width that fit in ``width`` characters."""
    return width // MIN_COLUMN_WIDTH


def columns_layout(
    entries: Sequence[DirEntry], width: int, by_column: bool = True
) -> tuple[int, list[int]]:
    """Choose how many columns to use and the width of each.

    Returns the column count and the list of column widths for that count.
    """
    tty_max = max_columns(width)
    if tty_max < 0:
        return 1, [MIN_COLUMN_WIDTH]

    count = len(entries)
    max_cols = tty_max if 0 < tty_max < count else 1

    layouts = [
        _ColumnLayout(True, (n + 1) * MIN_COLUMN_WIDTH, [MIN_COLUMN_WIDTH] * (n + 1))
        for n in range(max_cols)
    ]

    for index, entry in enumerate(entries):
        name_len = entry.display_len + PADDING
        for col_index, layout in enumerate(layouts):
            if not layout.valid:
                continue
            if by_column:
                rows = (count + col_index) // (col_index + 1)
                column = index // rows
            else:
                column = index % (col_index + 1)
            real_len = name_len if column == col_index else name_len + 2
            if layout.widths[column] < real_len:
                layout.line_len += real_len - layout.widths[column]
                layout.widths[column] = real_len
                layout.valid = layout.line_len < width

    cols = max_cols
    while cols > 1 and not layouts[cols - 1].valid:
        cols -= 1
    return cols, layouts[cols - 1].widths


def format_columns(entries: Sequence[DirEntry], width: int) -> str:
    """Lay the entries out down the columns, one text line per row."""
    cols, widths = columns_layout(entries, width, True)
    cols = max(cols, 1)
    count = len(entries)
    rows = -(-count // cols)

    lines = []
    for row in range(rows):
        parts = []
        index = row
        for column_width in widths:
            entry = entries[index]
            parts.append(entry.display_name)
            parts.append(" " * max(column_width - entry.display_len, 0))
            if count - rows <= index:
                break
            index += rows
        lines.append("".join(parts) + "\n")
    return "".join(lines)


def long_permissions(mode: int) -> str:
    """Return the nine permission characters with setuid, setgid and sticky marks."""
    chars = [char if mode & bit else "-" for bit, char in _PERMISSION_BITS]
    for bit, position, if_exec, otherwise in _SPECIAL_BITS:
        if mode & bit:
            chars[position] = if_exec if chars[position] == "x" else otherwise
    return "".join(chars)


def _format_time(timestamp: float) -> str:
    moment = datetime.datetime.fromtimestamp(timestamp)
    return f"{_MONTHS[moment.month - 1]} {moment.day:02d} {moment.hour:02d}:{moment.minute:02d}"


def format_long(entries: Iterable[DirEntry]) -> str:
    """Return one line per entry: type, mode, links, owner, group, size, time and name."""
    return "".join(
        f"{entry.kind}{long_permissions(entry.mode)}  {entry.hard_links:2d}  "
        f"{entry.user_name:>10} {entry.group_name:>10} {entry.size:9d}\t"
        f"{_format_time(entry.mtime)}\t{entry.name}\n"
        for entry in entries
    )


def render(entries: Iterable[DirEntry], config: Configuration) -> str:
    """Sort the entries and return the text to print for the configured format."""
    ordered = sort_entries(entries)
    if config.format == "long":
        return format_long(ordered)
    return format_columns(ordered, config.tty_columns) + "\n"