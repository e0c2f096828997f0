# etals

`etals` lists directory contents: names laid out in columns sized to the
terminal, an optional long format, colours taken from `LS_COLORS`, and type
indicators.

## Installation

```
pip install .
```

## Usage

```
etals [options] [path ...]
```

With no path, the current working directory is listed. For each path that
is a directory, its entries are listed (hidden ones included); a path that
is not a directory is shown as a single entry. A path that cannot be read is
reported and skipped.

Options that change the output:

| Short | Long       | Effect                                                            |
|-------|------------|-------------------------------------------------------------------|
| `-a`  | `--all`    | also list the `.` and `..` entries                                 |
| `-A`  | `--ALL`    | do not add `.` and `..` (overrides `-a`)                          |
| `-c`  | `--color`  | `always` colours names; `auto` colours them when stdout is a terminal; anything else, or no value, leaves them plain |
| `-l`  | `--long`   | long format: type and mode, links, user, group, size, modification time (`Jan 02 15:04`), name; symbolic links show `-> target` |
| `-F`  |            | append an indicator: `/` directory, `@` link, `|` pipe, `=` socket, `*` executable |

Options that are accepted and recorded in the configuration but do not
change the output: `-i/--inode`, `-1/--one`, `-d/--dir`,
`-g/--group-directories-first`, `-k/--sort-key`, `-r/--reverse` and
`-h/--help`. An unknown option prints the usage text and exits with
status 2.

Entries are always sorted with directories first, then by name compared
case-insensitively; a leading dot is ignored. In column mode, entries run
down the columns and as many columns are used as fit the terminal width;
when stdout is not a terminal, one entry is printed per line.

Colours come from the `di`, `ln`, `pi`, `so` and `cd` keys of `LS_COLORS`
(the `no`, `fi` and `bd` keys are read but not used for painting). When
`LS_COLORS` is not set, no colours are used. Setting `DEBUG=true` in the
environment prints the colour map, the paths and the collected entries.

## Library use

```python
from etals.colors import parse_ls_colors
from etals.config import detect_configuration
from etals.entries import list_entries
from etals.printing import render

colors = parse_ls_colors("di=01;34:ln=01;36")
config = detect_configuration()
print(render(list_entries(["."], config, colors), config), end="")
```

Modules:

- `etals.colors` — escape-code constants, `parse_ls_colors`, `load_colors`,
  and `color_chart` / `print_colors` for a chart of foreground/background pairs.
- `etals.config` — `Configuration`, `StreamType`, `detect_configuration`,
  `parse_arguments`, `build_parser`, `format_help` and `apply_options`.
- `etals.entries` — `DirEntry`, `entry_type`, `needs_quoting`,
  `display_name`, `build_entry` and `list_entries`.
- `etals.printing` — `sort_entries`, `columns_layout`, `format_columns`,
  `long_permissions`, `format_long` and `render`.
- `etals.cli` — `main`, the `etals` command.

## What it does not do

There is no choice of sort order: the sort key and reverse options are
ignored. It does not print inode numbers, does not list directories as
entries in place of their contents, does not recurse, and `-h` does not
print help.