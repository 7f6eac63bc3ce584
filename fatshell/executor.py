"""Running one command line against the shell state."""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import TextIO

from .commands import CommandName
from .disk import Disk, FatError
from .filepath import FilePath
from .filesystem import FileSystem
from .lexer import tokenize
from .output import man_page, render_listing
from .state import SystemState

CLEAR_SCREEN = "\033[1;1H\033[2J"
NO_FAT_MESSAGE = 'Please, first initialize or load a FAT using either "init" or "load"\n'

_USAGE = {
    CommandName.MKDIR: "usage: mkdir [/path/directory]\n",
    CommandName.CREATE: "usage: create [/path/file]\n",
    CommandName.READ: "usage: read [path/file]\n",
    CommandName.UNLINK: "usage: unlink [path/directory]\n",
    CommandName.APPEND: 'usage: append "string"[rep] [/path/file]\n',
    CommandName.WRITE: 'usage: write "string"[rep] [/path/file]\n',
}


class _UsageError(Exception):
    """The arguments do not fit the command."""


def parse_repeated_string(arg: str) -> tuple[str, int]:
    """Parse ``"text"[count]``; the count is optional and defaults to 1."""
    if len(arg) < 2 or arg[0] != '"':
        raise ValueError(f"expected a quoted string, got {arg!r}")
    closing = arg.find('"', 1)
    if closing == -1:
        raise ValueError(f"missing closing quote in {arg!r}")
    text = arg[1:closing]
    repetitions = 1
    if arg[closing + 1:closing + 2] == "[":
        end = arg.find("]", closing + 2)
        if end == -1:
            raise ValueError(f"missing closing bracket in {arg!r}")
        digits = arg[closing + 2:end]
        if any(ch not in "0123456789" for ch in digits):
            raise ValueError(f"repetition count must be digits, got {digits!r}")
        repetitions = int(digits) if digits else 0
    return text, repetitions


def clear_screen(out: TextIO) -> None:
    """Move the cursor home and clear the terminal."""
    out.write(CLEAR_SCREEN)


def _target(state: SystemState, arg: str) -> tuple[FilePath, str]:
    try:
        return state.current_path.join(arg).split()
    except ValueError as exc:
        raise _UsageError from exc


def _argument(args: list[str], index: int) -> str:
    if len(args) <= index:
        raise _UsageError
    return args[index]


def _repeated(arg: str) -> tuple[str, int]:
    try:
        return parse_repeated_string(arg)
    except ValueError as exc:
        raise _UsageError from exc


def _ls(state: SystemState, fs: FileSystem, args: list[str], out: TextIO) -> None:
    path = state.current_path.join(args[0]) if args else state.current_path
    out.write(render_listing(path, fs.list_directory(path)))


def _mkdir(state: SystemState, fs: FileSystem, args: list[str], out: TextIO) -> None:
    fs.create_directory(*_target(state, _argument(args, 0)))


def _create(state: SystemState, fs: FileSystem, args: list[str], out: TextIO) -> None:
    fs.create_file(*_target(state, _argument(args, 0)))


def _cd(state: SystemState, fs: FileSystem, args: list[str], out: TextIO) -> None:
    if not args:
        state.current_path = FilePath()
        return
    path = state.current_path.join(args[0])
    if fs.directory_exists(path):
        state.current_path = path
    else:
        out.write(f"error: {args[0]} directory not found!\n")


def _read(state: SystemState, fs: FileSystem, args: list[str], out: TextIO) -> None:
    content = fs.read_file(*_target(state, _argument(args, 0)))
    out.write(content.decode("utf-8", errors="replace") + "\n")


def _unlink(state: SystemState, fs: FileSystem, args: list[str], out: TextIO) -> None:
    fs.unlink(*_target(state, _argument(args, 0)))


def _append(state: SystemState, fs: FileSystem, args: list[str], out: TextIO) -> None:
    path_arg = _argument(args, 1)
    text, repetitions = _repeated(args[0])
    parent, name = _target(state, path_arg)
    fs.append_file(parent, name, text, repetitions)


def _write(state: SystemState, fs: FileSystem, args: list[str], out: TextIO) -> None:
    path_arg = _argument(args, 1)
    text, repetitions = _repeated(args[0])
    parent, name = _target(state, path_arg)
    fs.overwrite_file(parent, name, text, repetitions)


_Handler = Callable[[SystemState, FileSystem, list, TextIO], None]

_FAT_COMMANDS: dict[str, _Handler] = {
    CommandName.LS: _ls,
    CommandName.MKDIR: _mkdir,
    CommandName.CREATE: _create,
    CommandName.CD: _cd,
    CommandName.READ: _read,
    CommandName.UNLINK: _unlink,
    CommandName.APPEND: _append,
    CommandName.WRITE: _write,
}


def _init(state: SystemState, out: TextIO) -> None:
    disk = Disk(state.image_path)
    try:
        disk.format()
    except FatError as exc:
        out.write(f"Error: {exc}.\n")
    state.filesystem = FileSystem(disk)
    state.current_path = FilePath()


def _load(state: SystemState, out: TextIO) -> None:
    disk = Disk(state.image_path)
    try:
        disk.load_fat()
    except FatError as exc:
        out.write(f"Error: {exc}.\n")
    else:
        out.write("FAT loaded from disk.\n")
    state.filesystem = FileSystem(disk)


def execute_command(line: str, state: SystemState, out: TextIO | None = None) -> None:
    """Run one command line, writing what it shows to ``out`` (stdout by default)."""
    out = sys.stdout if out is None else out
    tokens = tokenize(line)
    if not tokens:
        return
    name, args = tokens[0], tokens[1:]

    if name == CommandName.INIT:
        _init(state, out)
        return
    if name == CommandName.LOAD:
        _load(state, out)
        return
    if name == CommandName.EXIT:
        state.has_ended = True
        return
    if name == CommandName.CLEAR:
        clear_screen(out)
        return
    if name == CommandName.MAN:
        out.write(man_page())
        return
    if state.filesystem is None:
        out.write(NO_FAT_MESSAGE)
        return

    handler = _FAT_COMMANDS.get(name)
    if handler is None:
        out.write(f"command not found: {name}\n")
        return
    try:
        handler(state, state.filesystem, args, out)
    except _UsageError:
        out.write(_USAGE[CommandName(name)])
    except FatError as exc:
        out.write(f"Error: {exc}.\n")