"""Terminal colour escape codes and LS_COLORS parsing."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Mapping

CC = "\033["
CE = "m"

BOLD = "1"
DIMFAINT = "2"
ITALIC = "3"
UNDERLINE = "4"
BLINK = "5"
INVERSE = "7"
HIDDEN = "8"
STRIKE = "9"

RESET = CC + "0" + CE

RESET_BOLD = "22"
RESET_DIMFAINT = "22"
RESET_ITALIC = "23"
RESET_UNDERLINE = "24"
RESET_BLINK = "25"
RESET_INVERSE = "27"
RESET_HIDDEN = "28"
RESET_STRIKE = "29"

FG_BLACK = "30"
FG_RED = "31"
FG_GREEN = "32"
FG_YELLOW = "33"
FG_BLUE = "34"
FG_MAGENTA = "35"
FG_CYAN = "36"
FG_WHITE = "37"
FG_BRIGHT_BLACK = "90"
FG_BRIGHT_RED = "91"
FG_BRIGHT_GREEN = "92"
FG_BRIGHT_YELLOW = "93"
FG_BRIGHT_BLUE = "94"
FG_BRIGHT_MAGENTA = "95"
FG_BRIGHT_CYAN = "96"
FG_BRIGHT_WHITE = "97"
BG_BLACK = "40"
BG_RED = "41"
BG_GREEN = "42"
BG_YELLOW = "43"
BG_BLUE = "44"
BG_MAGENTA = "45"
BG_CYAN = "46"
BG_WHITE = "47"
BG_BRIGHT_BLACK = "100"
BG_BRIGHT_RED = "101"
BG_BRIGHT_GREEN = "102"
BG_BRIGHT_YELLOW = "103"
BG_BRIGHT_BLUE = "104"
BG_BRIGHT_MAGENTA = "105"
BG_BRIGHT_CYAN = "106"
BG_BRIGHT_WHITE = "107"

# LS_COLORS keys that are understood, and the name each is stored under.
LS_COLORS_KEYS = {
    "no": "normal",
    "fi": "default",
    "di": "dir",
    "ln": "link",
    "pi": "pipe",
    "so": "socket",
    "bd": "block",
    "cd": "char_device",
}

_COLOR_CODE = re.compile(r"\d?\d(;\d?\d)*")

# (first foreground, first background) for each block of the chart.
_CHART_BLOCKS = ((30, 40), (30, 100), (90, 40), (90, 100))


def color_chart() -> str:
    """Return a chart of every foreground/background pair, one row per foreground."""
    lines = []
    for fg_base, bg_base in _CHART_BLOCKS:
        for fg in range(fg_base, fg_base + 8):
            cells = "".join(
                f"{CC}{fg};{bg}{CE}0{RESET}" for bg in range(bg_base, bg_base + 8)
            )
            lines.append(cells + "\n")
    return "".join(lines)


def print_colors() -> None:
    """Print the colour chart to standard output."""
    sys.stdout.write(color_chart())


def parse_ls_colors(value: str) -> dict[str, str]:
    """Parse an LS_COLORS value into a map of entry kind to escape sequence.

    The result always holds ``"reset"``. Entries that are empty, have no
    ``=``, carry an invalid code or an unknown key are ignored.
    """
    colors = {"reset": RESET}
    for item in value.split(":"):
        if not item or "=" not in item:
            continue
        parts = item.split("=")
        key, code = parts[0], parts[1]
        if not _COLOR_CODE.match(code):
            continue
        name = LS_COLORS_KEYS.get(key)
        if name is None:
            continue
        colors[name] = CC + code + CE
    return colors


def load_colors(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Build the colour map from LS_COLORS in ``environ`` (the process environment by default)."""
    if environ is None:
        environ = os.environ
    value = environ.get("LS_COLORS")
    if value is None:
        sys.stdout.write("Do our own...")
        return {"reset": RESET}
    return parse_ls_colors(value)