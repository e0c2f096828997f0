import os
import stat

import pytest

from etals.colors import RESET
from etals.config import Configuration
from etals.entries import (
    DirEntry,
    build_entry,
    display_name,
    entry_type,
    list_entries,
    needs_quoting,
)

DIR_COLOR = "\033[01;34m"
LINK_COLOR = "\033[01;36m"
COLORS = {"reset": RESET, "dir": DIR_COLOR, "link": LINK_COLOR}


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "plain.txt").write_text("hello")
    script = tmp_path / "run.sh"
    script.write_text("#!/bin/sh\n")
    script.chmod(0o755)
    (tmp_path / "with space").write_text("x")
    os.symlink("plain.txt", tmp_path / "link")
    return tmp_path


@pytest.mark.parametrize(
    "mode, kind",
    [
        (stat.S_IFDIR | 0o755, "d"),
        (stat.S_IFLNK | 0o777, "l"),
        (stat.S_IFCHR | 0o620, "c"),
        (stat.S_IFBLK | 0o660, "b"),
        (stat.S_IFIFO | 0o644, "p"),
        (stat.S_IFSOCK | 0o755, "s"),
        (stat.S_IFREG | 0o644, "-"),
    ],
)
def test_entry_type(mode, kind):
    assert entry_type(mode) == kind


@pytest.mark.parametrize(
    "name, expected",
    [("a b", True), ("plain", False), (" ", True), ("x.y-z", False)],
)
def test_needs_quoting(name, expected):
    assert needs_quoting(name) is expected


@pytest.mark.parametrize("perm", [0o754, 0o644, 0o000, 0o777, 0o421])
def test_permissions_match_filemode(perm):
    entry = DirEntry(name="f", kind="-", mode=stat.S_IFREG | perm)
    assert entry.permissions() == stat.filemode(stat.S_IFREG | perm)[1:]


def test_permissions_ignore_setuid():
    entry = DirEntry(name="f", kind="-", mode=stat.S_IFREG | stat.S_ISUID | 0o755)
    assert entry.permissions() == stat.filemode(stat.S_IFREG | 0o755)[1:]


def test_display_name_plain():
    text, width = display_name("file", "-", 0o644, Configuration(), COLORS)
    assert (text, width) == ("file", 4)


def test_display_name_quotes_spaces():
    text, width = display_name("a b", "-", 0o644, Configuration(), COLORS)
    assert text == "'a b'"
    assert width == len(text)


def test_display_name_colors_do_not_count():
    config = Configuration(colors_enable=True)
    text, width = display_name("src", "d", 0o755, config, COLORS)
    assert text == DIR_COLOR + "src" + RESET
    assert width == len("src")


def test_display_name_regular_file_is_not_painted():
    config = Configuration(colors_enable=True)
    text, width = display_name("src", "-", 0o644, config, COLORS)
    assert (text, width) == ("src", 3)


@pytest.mark.parametrize(
    "kind, mode, suffix",
    [
        ("d", 0o755, "/"),
        ("l", 0o777, "@"),
        ("p", 0o644, "|"),
        ("s", 0o755, "="),
        ("-", 0o755, "*"),
        ("-", 0o010, "*"),
        ("-", 0o644, ""),
    ],
)
def test_display_name_indicator(kind, mode, suffix):
    config = Configuration(indicator=True)
    text, width = display_name("n", kind, mode, config, COLORS)
    assert text == "n" + suffix
    assert width == 1 + len(suffix)


def test_indicator_follows_color_reset():
    config = Configuration(indicator=True, colors_enable=True)
    text, width = display_name("d", "d", 0o755, config, COLORS)
    assert text == DIR_COLOR + "d" + RESET + "/"
    assert width == 2


def test_build_entry_regular_file(tree):
    info = os.lstat(tree / "plain.txt")
    entry = build_entry("plain.txt", info, str(tree), Configuration(), COLORS)
    assert entry.name == "plain.txt"
    assert entry.kind == "-"
    assert entry.size == info.st_size
    assert entry.hard_links == info.st_nlink
    assert entry.display_name == "plain.txt"
    assert entry.user_name == ""


def test_build_entry_long_link_shows_target(tree):
    info = os.lstat(tree / "link")
    config = Configuration(format="long")
    entry = build_entry("link", info, str(tree), config, COLORS)
    assert entry.kind == "l"
    assert entry.name == "link -> plain.txt"


def test_build_entry_short_link_keeps_name(tree):
    info = os.lstat(tree / "link")
    entry = build_entry("link", info, str(tree), Configuration(), COLORS)
    assert entry.name == "link"


def test_build_entry_long_resolves_owner(tree):
    import grp
    import pwd

    info = os.lstat(tree / "plain.txt")
    entry = build_entry("plain.txt", info, str(tree), Configuration(format="long"), COLORS)
    assert entry.user_name == pwd.getpwuid(info.st_uid).pw_name
    assert entry.group_name == grp.getgrgid(info.st_gid).gr_name


def test_list_entries_directory(tree):
    entries = list_entries([str(tree)], Configuration(), COLORS)
    names = [entry.name for entry in entries]
    assert sorted(names) == sorted(["sub", "plain.txt", "run.sh", "with space", "link"])
    kinds = {entry.name: entry.kind for entry in entries}
    assert kinds["sub"] == "d"
    assert kinds["link"] == "l"


def test_list_entries_defaults_to_cwd(tree):
    config = Configuration(cwd=str(tree))
    entries = list_entries([], config, COLORS)
    assert {entry.name for entry in entries} == {
        "sub", "plain.txt", "run.sh", "with space", "link"
    }


def test_list_entries_file_argument(tree):
    entries = list_entries([str(tree / "plain.txt")], Configuration(), COLORS)
    assert [entry.name for entry in entries] == ["plain.txt"]


def test_list_entries_missing_path_is_reported(tmp_path, capsys):
    entries = list_entries([str(tmp_path / "missing")], Configuration(), COLORS)
    assert entries == []
    assert "missing" in capsys.readouterr().out


def test_list_entries_dot_entries(tree):
    config = Configuration(dot_file=True)
    names = [entry.name for entry in list_entries([str(tree)], config, COLORS)]
    assert names[:2] == [".", ".."]


def test_list_entries_almost_all_hides_dots(tree):
    config = Configuration(dot_file=True, dot_dir=True)
    names = [entry.name for entry in list_entries([str(tree)], config, COLORS)]
    assert "." not in names and ".." not in names
    assert len(names) == 5


def test_list_entries_indicator(tree):
    config = Configuration(indicator=True)
    shown = {e.name: e.display_name for e in list_entries([str(tree)], config, COLORS)}
    assert shown["sub"] == "sub/"
    assert shown["run.sh"] == "run.sh*"
    assert shown["link"] == "link@"
    assert shown["with space"] == "'with space'"