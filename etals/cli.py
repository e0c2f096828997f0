"""Command entry point: parse options, list the paths and print them."""

from __future__ import annotations

import os
import pprint
import sys
from collections.abc import Sequence

from .colors import load_colors
from .config import apply_options, detect_configuration, parse_arguments
from .entries import list_entries
from .printing import render


def main(argv: Sequence[str] | None = None) -> int:
    """List the given paths (the working directory by default) and return the exit status."""
    config = detect_configuration(os.environ)
    options = parse_arguments(argv, config.prog_name or "eta")
    config = apply_options(config, options)

    colors = load_colors(os.environ)
    if config.debug:
        pprint.pprint(colors)

    entries = list_entries(options.paths, config, colors)
    if entries:
        sys.stdout.write(render(entries, config))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())