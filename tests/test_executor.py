import io

import pytest

from fatshell.executor import (
    CLEAR_SCREEN,
    NO_FAT_MESSAGE,
    clear_screen,
    execute_command,
    parse_repeated_string,
)
from fatshell.filepath import FilePath
from fatshell.output import man_page
from fatshell.state import SystemState


@pytest.fixture
def state(tmp_path):
    return SystemState(image_path=tmp_path / "fs.dat")


def run(line, state):
    out = io.StringIO()
    execute_command(line, state, out)
    return out.getvalue()


@pytest.fixture
def ready(state):
    run("init", state)
    return state


def test_parse_repeated_string_with_count():
    assert parse_repeated_string('"abc"[5]') == ("abc", 5)


def test_parse_repeated_string_default_count():
    assert parse_repeated_string('"abc"') == ("abc", 1)


def test_parse_repeated_string_empty_brackets_means_zero():
    assert parse_repeated_string('"a b"[]') == ("a b", 0)


@pytest.mark.parametrize("arg", ['abc', '"', '"abc', '"abc"[5', '"abc"[x]', '"abc"[1a]'])
def test_parse_repeated_string_rejects(arg):
    with pytest.raises(ValueError):
        parse_repeated_string(arg)


def test_clear_screen():
    out = io.StringIO()
    clear_screen(out)
    assert out.getvalue() == CLEAR_SCREEN


def test_empty_line_does_nothing(state):
    assert run("   ", state) == ""
    assert state.has_fat() is False


def test_commands_need_a_fat(state):
    assert run("ls", state) == NO_FAT_MESSAGE


def test_exit_sets_has_ended(state):
    run("exit", state)
    assert state.has_ended is True


def test_man_prints_manual(state):
    assert run("man", state) == man_page()


def test_clear_writes_escape(state):
    assert run("clear", state) == CLEAR_SCREEN


def test_unknown_command(ready):
    assert run("foo", ready) == "command not found: foo\n"


def test_init_gives_empty_root(ready):
    assert ready.has_fat() is True
    assert run("ls", ready) == "root is empty.\n"


def test_mkdir_and_ls(ready):
    assert run("mkdir docs", ready) == ""
    listing = run("ls", ready)
    assert "docs" in listing
    assert "Directory" in listing
    assert run("ls docs", ready) == "docs is empty.\n"


def test_write_then_read(ready):
    run("create notes", ready)
    run('write "hi"[3] notes', ready)
    assert run("read notes", ready) == "hihihi\n"


def test_write_replaces_and_append_extends(ready):
    run("create notes", ready)
    run('write "abc" notes', ready)
    run('write "xy" notes', ready)
    run('append "z"[2] notes', ready)
    assert run("read notes", ready) == "xyzz\n"


def test_quoted_string_with_space(ready):
    run("create notes", ready)
    run('write "hello world" notes', ready)
    assert run("read notes", ready) == "hello world\n"


def test_cd_changes_path_and_back_to_root(ready):
    run("mkdir docs", ready)
    run("cd docs", ready)
    assert ready.current_path == FilePath.parse("docs")
    run("create inner", ready)
    assert "inner" in run("ls", ready)
    run("cd", ready)
    assert ready.current_path == FilePath()
    assert "inner" in run("ls docs", ready)


def test_cd_missing_directory(ready):
    assert run("cd nope", ready) == "error: nope directory not found!\n"
    assert ready.current_path == FilePath()


def test_unlink_file(ready):
    run("create notes", ready)
    run("unlink notes", ready)
    assert run("ls", ready) == "root is empty.\n"


def test_unlink_non_empty_directory_is_refused(ready):
    run("mkdir docs", ready)
    run("create docs/a", ready)
    assert "not empty" in run("unlink docs", ready)
    assert "docs" in run("ls", ready)


def test_duplicate_name_reports_error(ready):
    run("mkdir docs", ready)
    assert run("mkdir docs", ready).startswith("Error: ")


def test_read_missing_file_reports_error(ready):
    assert run("read ghost", ready).startswith("Error: ")


@pytest.mark.parametrize("line", ["mkdir", "create", "read", "unlink", 'append "a"', 'write "a"'])
def test_usage_messages(ready, line):
    assert run(line, ready).startswith(f"usage: {line.split()[0]}")


def test_bad_repeated_string_shows_usage(ready):
    run("create notes", ready)
    assert run("append abc notes", ready).startswith("usage: append")


def test_load_reads_saved_fat(ready, tmp_path):
    run("mkdir docs", ready)
    fresh = SystemState(image_path=ready.image_path)
    assert run("load", fresh) == "FAT loaded from disk.\n"
    assert "docs" in run("ls", fresh)


def test_load_without_image_reports_error(tmp_path):
    fresh = SystemState(image_path=tmp_path / "missing.dat")
    assert run("load", fresh).startswith("Error: ")