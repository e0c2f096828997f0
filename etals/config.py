"""Runtime configuration: terminal detection and command-line options."""

from __future__ import annotations

import argparse
import dataclasses
import enum
import os
import stat
import sys
from collections.abc import Mapping, Sequence
from typing import IO, NoReturn

VERSION = "0.0.1"

COLORS_AUTO = "auto"
COLORS_ALWAYS = "always"
COLORS_NEVER = "never"
COLORS_NONE = "none"

INDICATOR_EXE = "*"
INDICATOR_DIR = "/"
INDICATOR_LINK = "@"
INDICATOR_PIPE = "|"
INDICATOR_SOCK = "="


class StreamType(str, enum.Enum):
    """What a standard stream is connected to."""

    DEFAULT = "default"
    FILE = "file"
    PIPE = "pipe"
    CHAR_DEVICE = "charDevice"


@dataclasses.dataclass
class Configuration:
    """Settings that drive listing and printing."""

    prog_name: str = ""
    prog_version: str = VERSION
    os: str = ""
    stdout_type: StreamType = StreamType.DEFAULT
    stdin_type: StreamType = StreamType.DEFAULT
    stderr_type: StreamType = StreamType.DEFAULT
    tty_colors: bool = False
    tty_columns: int = 0
    dot_file: bool = False
    dot_dir: bool = False
    colors_when: str = ""
    colors_enable: bool = False
    inode: bool = False
    format: str = "short"
    sort_reverse: bool = False
    one_per_line: bool = False
    dir_only: bool = False
    dir_first: bool = True
    indicator: bool = False
    sort_key: str = "time"
    cwd: str = ""
    debug: bool = False

    def dump(self) -> None:
        """Print every setting to standard output."""
        lines = ["===================", "Configuration", "-------------"]
        for name, value in dataclasses.asdict(self).items():
            lines.append(f"{name}: {value!r}")
        lines.append("===================")
        sys.stdout.write("\n".join(lines) + "\n")


def stream_type(stream: IO) -> StreamType:
    """Tell whether ``stream`` is a character device, a pipe, a regular file or none of these."""
    try:
        mode = os.fstat(stream.fileno()).st_mode
    except (AttributeError, OSError, ValueError):
        return StreamType.DEFAULT
    if stat.S_ISCHR(mode):
        return StreamType.CHAR_DEVICE
    if stat.S_ISFIFO(mode):
        return StreamType.PIPE
    if stat.S_ISREG(mode):
        return StreamType.FILE
    return StreamType.DEFAULT


def _terminal_columns(stream: IO) -> int:
    try:
        return os.get_terminal_size(stream.fileno()).columns
    except (AttributeError, OSError, ValueError):
        return 0


def _terminal_or_pipe(stream: IO) -> StreamType:
    kind = stream_type(stream)
    return kind if kind is StreamType.CHAR_DEVICE else StreamType.PIPE


def detect_configuration(environ: Mapping[str, str] | None = None) -> Configuration:
    """Build the default configuration from the process and its standard streams."""
    if environ is None:
        environ = os.environ

    try:
        cwd = os.getcwd()
    except OSError as exc:
        print(exc)
        cwd = "Cannot get working directory."

    config = Configuration(
        prog_name=sys.argv[0] if sys.argv else "",
        os=sys.platform,
        cwd=cwd,
    )

    config.stdout_type = stream_type(sys.stdout)
    if config.stdout_type is StreamType.CHAR_DEVICE:
        config.tty_columns = _terminal_columns(sys.stdout)

    config.stdin_type = _terminal_or_pipe(sys.stdin)
    config.stderr_type = _terminal_or_pipe(sys.stderr)

    config.debug = environ.get("DEBUG") == "true"
    return config


# (dest, short, long, help) in the order the help text lists them.
_HELP_ORDER = (
    ("all", "a", "all", "List all files (include hidden)"),
    ("almost_all", "A", "ALL", "Do not list . .."),
    ("color", "c", "color", "[auto|never|always] when to enable colors (default: auto)"),
    ("inode", "i", "inode", "Print inode"),
    ("one", "1", "one", "list onen entry per line"),
    ("dir_only", "d", "dir", "list directories not their contents"),
    ("indicator", "F", None, "append indicator (one of */=>@|) to entries"),
    ("dir_first", "g", "group-directories-first", "group directories first"),
    ("reverse", "r", "reverse", "Reverse sort"),
    ("sort_key", "k", "sort-key", "key field for sorting"),
    ("help", "h", "help", "Print this help"),
)

_LONG_HELP = "long format: mod|user|group|size|date last modifications|name"


def format_help(prog: str, version: str = VERSION) -> str:
    """Return the usage text listing the options."""
    parts = [f"\n{prog} ({version}) help :\n\n"]
    for _dest, short, long, usage in _HELP_ORDER:
        parts.append(f"  -{short:<10}{usage}\n")
        if long is not None:
            parts.append(f"  --{long:<10}\n\n")
    return "".join(parts)


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        sys.stderr.write(f"{message}\n")
        sys.stdout.write(format_help(self.prog, VERSION))
        raise SystemExit(2)


def build_parser(prog: str) -> argparse.ArgumentParser:
    """Return the parser for the command-line options and paths."""
    parser = _Parser(prog=prog, add_help=False, allow_abbrev=False)
    defaults = Configuration()

    parser.add_argument("-a", "--all", dest="all", action="store_true", default=defaults.dot_file)
    parser.add_argument(
        "-A", "--ALL", dest="almost_all", action="store_true", default=defaults.dot_dir
    )
    parser.add_argument("-c", "--color", dest="color", default=defaults.colors_when)
    parser.add_argument("-i", "--inode", dest="inode", action="store_true", default=defaults.inode)
    parser.add_argument("-l", "--long", dest="long", action="store_true", default=False,
                        help=_LONG_HELP)
    parser.add_argument("-1", "--one", dest="one", action="store_true",
                        default=defaults.one_per_line)
    parser.add_argument("-d", "--dir", dest="dir_only", action="store_true",
                        default=defaults.dir_only)
    parser.add_argument("-g", "--group-directories-first", dest="dir_first",
                        action="store_true", default=defaults.dir_first)
    parser.add_argument("-F", dest="indicator", action="store_true", default=defaults.indicator)
    parser.add_argument("-k", "--sort-key", dest="sort_key", default=defaults.sort_key)
    parser.add_argument("-r", "--reverse", dest="reverse", action="store_true",
                        default=defaults.sort_reverse)
    parser.add_argument("-h", "--help", dest="help", action="store_true", default=False)
    parser.add_argument("paths", nargs="*")
    return parser


def parse_arguments(argv: Sequence[str] | None = None, prog: str | None = None) -> argparse.Namespace:
    """Parse ``argv`` (the process arguments by default) into options and ``paths``.

    An unknown option prints the usage text and exits with status 2.
    """
    if argv is None:
        argv = sys.argv[1:]
    if prog is None:
        prog = sys.argv[0] if sys.argv else "eta"
    return build_parser(prog).parse_args(list(argv))


def apply_options(config: Configuration, options: argparse.Namespace) -> Configuration:
    """Return a copy of ``config`` updated from parsed command-line options."""
    colors_enable = (
        options.color == COLORS_AUTO and config.stdout_type is StreamType.CHAR_DEVICE
    ) or options.color == COLORS_ALWAYS

    fmt = config.format
    if options.long:
        fmt = "long"
    if options.one:
        fmt = "one"

    return dataclasses.replace(
        config,
        dot_file=options.all,
        dot_dir=options.almost_all,
        colors_enable=colors_enable,
        sort_reverse=options.reverse,
        inode=options.inode,
        one_per_line=options.one,
        dir_only=options.dir_only,
        dir_first=options.dir_first,
        sort_key=options.sort_key,
        indicator=options.indicator,
        format=fmt,
    )