"""Shell command names and command-name completion."""

from __future__ import annotations

from enum import Enum


class CommandName(str, Enum):
    """Commands understood by the shell, in completion order."""

    LS = "ls"
    CD = "cd"
    MAN = "man"
    INIT = "init"
    LOAD = "load"
    EXIT = "exit"
    READ = "read"
    CLEAR = "clear"
    MKDIR = "mkdir"
    WRITE = "write"
    CREATE = "create"
    UNLINK = "unlink"
    APPEND = "append"


def autocomplete_command(prefix: str) -> str | None:
    """Return the first command name beginning with ``prefix``, or None."""
    for command in CommandName:
        if command.value.startswith(prefix):
            return command.value
    return None