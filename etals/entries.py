"""Directory entries: collecting, classifying and naming what gets listed."""

from __future__ import annotations

import dataclasses
import os
import pprint
import stat
from collections.abc import Iterable, Mapping

from .config import (
    INDICATOR_DIR,
    INDICATOR_EXE,
    INDICATOR_LINK,
    INDICATOR_PIPE,
    INDICATOR_SOCK,
    Configuration,
)

try:
    import grp
    import pwd
except ImportError:  # pragma: no cover - platforms without a user database
    grp = None
    pwd = None

# Characters that make a name be shown in single quotes.
SPECIAL_CHARACTERS = frozenset(" ")

# Entry kind -> key of the colour map used to paint its name.
_COLOR_KEYS = {
    "d": "dir",
    "l": "link",
    "p": "pipe",
    "s": "socket",
    "c": "char_device",
}

# Entry kind -> indicator appended with -F; other kinds get "*" when executable.
_INDICATORS = {
    "d": INDICATOR_DIR,
    "l": INDICATOR_LINK,
    "p": INDICATOR_PIPE,
    "s": INDICATOR_SOCK,
}

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

_EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


@dataclasses.dataclass
class DirEntry:
    """One listed file with everything needed to print it."""

    name: str
    kind: str
    mode: int
    display_name: str = ""
    display_len: int = 0
    hard_links: int = 1
    size: int = 0
    mtime: float = 0.0
    inode: int = 0
    user_name: str = ""
    group_name: str = ""

    @property
    def is_dir(self) -> bool:
        return self.kind == "d"

    def permissions(self) -> str:
        """Return the nine ``rwxrwxrwx`` permission characters of the entry."""
        return _permission_string(self.mode)


def _permission_string(mode: int) -> str:
    return "".join(char if mode & bit else "-" for bit, char in _PERMISSION_BITS)


def entry_type(mode: int) -> str:
    """Return the one-letter kind of a file from its ``st_mode``."""
    if stat.S_ISLNK(mode):
        return "l"
    if stat.S_ISDIR(mode):
        return "d"
    if stat.S_ISCHR(mode):
        return "c"
    if stat.S_ISBLK(mode):
        return "b"
    if stat.S_ISFIFO(mode):
        return "p"
    if stat.S_ISSOCK(mode):
        return "s"
    return "-"


def needs_quoting(name: str) -> bool:
    """Tell whether ``name`` holds a character that calls for quoting."""
    return any(char in SPECIAL_CHARACTERS for char in name)


def display_name(
    name: str,
    kind: str,
    mode: int,
    config: Configuration,
    colors: Mapping[str, str],
) -> tuple[str, int]:
    """Return the name as printed and its visible width.

    The name is quoted when needed, painted when colours are enabled and
    followed by a type indicator when indicators are on. Colour escape
    sequences do not count towards the width.
    """
    text = f"'{name}'" if needs_quoting(name) else name
    width = len(text)

    if config.colors_enable:
        key = _COLOR_KEYS.get(kind)
        if key is not None:
            text = colors.get(key, "") + text + colors.get("reset", "")

    if config.indicator:
        suffix = _INDICATORS.get(kind)
        if suffix is None:
            suffix = INDICATOR_EXE if mode & _EXECUTE_BITS else ""
        text += suffix
        width += len(suffix)

    return text, width


def _user_name(uid: int) -> str:
    if pwd is not None:
        try:
            return pwd.getpwuid(uid).pw_name
        except KeyError:
            pass
    return str(uid)


def _group_name(gid: int) -> str:
    if grp is not None:
        try:
            return grp.getgrgid(gid).gr_name
        except KeyError:
            pass
    return str(gid)


def build_entry(
    name: str,
    stat_result: os.stat_result,
    base: str,
    config: Configuration,
    colors: Mapping[str, str],
) -> DirEntry:
    """Make an entry for ``name`` found under ``base`` with the given (l)stat result.

    In long format a symbolic link's name gets ``-> target`` appended and the
    owner and group names are resolved.
    """
    mode = stat_result.st_mode
    kind = entry_type(mode)
    long_format = config.format == "long"

    if kind == "l" and long_format:
        link_path = os.path.abspath(base + "/" + name)
        try:
            name += " -> " + os.readlink(link_path)
        except OSError as exc:
            name += " -> " + str(exc)

    entry = DirEntry(
        name=name,
        kind=kind,
        mode=mode,
        hard_links=stat_result.st_nlink,
        size=stat_result.st_size,
        mtime=stat_result.st_mtime,
        inode=stat_result.st_ino,
    )

    if long_format:
        entry.user_name = _user_name(stat_result.st_uid)
        entry.group_name = _group_name(stat_result.st_gid)

    entry.display_name, entry.display_len = display_name(
        entry.name, kind, mode, config, colors
    )
    return entry


def _base_name(path: str) -> str:
    stripped = path.rstrip("/")
    if not stripped:
        return "/" if path else "."
    return os.path.basename(stripped) or stripped


def list_entries(
    paths: Iterable[str],
    config: Configuration,
    colors: Mapping[str, str],
) -> list[DirEntry]:
    """Collect the entries of every path: a directory's contents, or the file itself.

    With no paths the working directory is listed. Paths that cannot be read
    are reported on standard output and skipped.
    """
    paths = list(paths) or [config.cwd]

    if config.debug:
        print("listDir: ")
        pprint.pprint(paths)

    entries: list[DirEntry] = []
    for path in paths:
        try:
            with os.scandir(path) as iterator:
                found = sorted(iterator, key=lambda item: item.name)
        except OSError:
            try:
                info = os.lstat(path)
            except OSError as exc:
                print(exc)
                continue
            entries.append(build_entry(_base_name(path), info, path, config, colors))
            continue

        if config.dot_file and not config.dot_dir:
            for dot in (".", ".."):
                try:
                    info = os.lstat(dot)
                except OSError as exc:
                    print(exc)
                    continue
                entries.append(build_entry(dot, info, path, config, colors))

        for item in found:
            try:
                info = item.stat(follow_symlinks=False)
            except OSError as exc:
                print(exc)
                continue
            entries.append(build_entry(item.name, info, path, config, colors))

    if config.debug:
        print("==========")
        pprint.pprint(entries)
        print("==========")

    return entries