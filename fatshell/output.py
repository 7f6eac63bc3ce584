"""Text the shell shows: the manual, the prompt, listings and the edited line."""

from __future__ import annotations

from collections.abc import Iterable

from .colors import Color
from .commands import autocomplete_command
from .disk import DirEntry, EntryKind
from .filepath import FilePath
from .filesystem import FatError
from .state import SystemState

USER_AND_MACHINE = "user@darkstar"
CLEAR_LINE = "\r\033[K"
_RULE = "-" * 65
_LISTING_COLOR = "\033[36m"
_DIRECTORY_COLOR = "\033[32m"
_FILE_COLOR = "\033[33m"
_PLAIN = "\033[0m"


def man_line(
    command: str,
    arg1: str | None,
    arg2: str | None,
    description: str,
    example: str,
    swap_colors: bool,
) -> str:
    """Render one manual entry; ``swap_colors`` swaps the colours of the two arguments."""
    first_color = Color.HIGH_INTENSITY_MAGENTA if swap_colors else Color.HIGH_INTENSITY_YELLOW
    second_color = Color.HIGH_INTENSITY_YELLOW if swap_colors else Color.HIGH_INTENSITY_MAGENTA
    parts = [f"{Color.BRIGHT_CYAN} - {Color.GREEN}{command}"]
    if arg1 is not None:
        parts.append(f"{first_color} {arg1}")
    if arg2 is not None:
        parts.append(f"{second_color} {arg2}")
    parts.append(f"{Color.HIGH_INTENSITY_BLUE}\n   What it does: {Color.RESET}{description}\n")
    parts.append(f"{Color.ITALIC_BRIGHT_WHITE}   Example: {Color.RESET}{example}\n{Color.RESET}")
    return "".join(parts)


_DEFAULT_COMMANDS = (
    ("init", None, None, "Formats the FAT, restarting it to it's default start (empty).", "init", False),
    ("load", None, None, "Uses the FAT that is on Disk.", "load", False),
    ("ls", "[/path/directory]", None, "List all the directories in the given path.", "ls /users/user", False),
    ("mkdir", "[/path/directory]", None, "Creates an empty directory in the given path.",
     "mkdir Desktop/PUCRS/5SEM", False),
    ("create", "[/path/file]", None, "Creates an empty file in the given path.",
     "create Desktop/PUCRS/5SEM/main.c", False),
    ("unlink", "[/path/file]", None, "Deletes a file or an empty directory with the given path.",
     "unlink Desktop/PUCRS/5SEM/main.c", False),
    ("write", '"string"[rep]', "[/path/file]",
     "Writes data into a file \033[3mrep\033[0m times. (overwriting data, flushing file initially)",
     'write "abc"[5] Desktop/PUCRS/5SEM/main.c', True),
    ("append", '"string"[rep]', "[/path/file]", "Appends data into a file \033[3mrep\033[0m times.",
     'append "abc"[5] Desktop/PUCRS/5SEM/main.c', True),
    ("read", "[/path/file]", None, "Reads the content of a file.", "read Desktop/PUCRS/5SEM/main.c", False),
)

_EXTRA_COMMANDS = (
    ("cd", "[/path/directory]", None,
     "Enters the directory in the given path. When inside directories, all paths will be \n"
     "   built on top of the path of the directory you are inside. For creating a path from the root,\n"
     '   start it with "/". If no path is specified to cd, it goes back to the root directory.',
     "cd Desktop/PUCRS/5SEM", False),
    ("clear", None, None, "Clears the screen.", "clear", False),
    ("exit", None, None, "Exits the program", "exit", False),
    ("man", None, None, "Prints this manual!", "man", False),
)


def man_page() -> str:
    """Render the whole manual."""
    default = "".join(man_line(*entry) for entry in _DEFAULT_COMMANDS)
    extra = "".join(man_line(*entry) for entry in _EXTRA_COMMANDS)
    return f"{Color.WHITE}Default Commands:\n{default}{Color.WHITE}\nExtra Commands:\n{extra}"


def _current_path(state: SystemState) -> str:
    if not state.has_fat():
        return ""
    tokens = state.current_path.tokens
    parts = [f"{Color.CYAN}/"]
    for position, token in enumerate(tokens):
        parts.append(f"{Color.BLUE}{token}")
        if position != len(tokens) - 1:
            parts.append(f"{Color.CYAN}/{Color.BLUE}")
    parts.append(str(Color.RESET))
    return "".join(parts)


def prompt(state: SystemState) -> str:
    """Render the start of the input line: user, path and dollar sign."""
    return (
        f"{Color.BRIGHT_GREEN}{USER_AND_MACHINE}{Color.RESET}"
        f"{Color.WHITE}:{Color.RESET}"
        f"{_current_path(state)}"
        f"{Color.WHITE}$ {Color.RESET}"
    )


def render_listing(path: FilePath, entries: Iterable[DirEntry]) -> str:
    """Render the table that ``ls`` shows for the directory at ``path``."""
    used = [entry for entry in entries if not entry.is_empty]
    if not used:
        name = path.tokens[-1] if path.tokens else "root"
        return f"{name} is empty.\n"
    lines = [
        f"{_LISTING_COLOR}{'Name':<25} {'Type':<10} {'First Block':<15} {'Size (bytes)':<10}{_PLAIN}\n",
        f"{_LISTING_COLOR}{_RULE}{_PLAIN}\n",
    ]
    for entry in used:
        is_dir = entry.kind == EntryKind.DIRECTORY
        color = _DIRECTORY_COLOR if is_dir else _FILE_COLOR
        kind = "Directory" if is_dir else "Archive"
        lines.append(
            f"{entry.name:<25} {color}{kind:<10}{_PLAIN} {entry.first_block:<15} {entry.size:<10}\n"
        )
    lines.append(f"{_LISTING_COLOR}{_RULE}{_PLAIN}\n")
    return "".join(lines)


def _cursor_left(amount: int) -> str:
    return f"\033[{amount}D" if amount > 0 else ""


def _path_completion(state: SystemState, token: str) -> str | None:
    if state.filesystem is None:
        return None
    try:
        return state.filesystem.autocomplete_path(state.current_path, token)
    except (FatError, ValueError):
        return None


def render_line(state: SystemState, text: str, cursor: int) -> str:
    """Redraw the input line, hinting a completion for the last word."""
    tokens = [token for token in text.split(" ") if token]
    last = len(tokens) - 1
    parts = [CLEAR_LINE, prompt(state)]
    for position, token in enumerate(tokens):
        if position:
            parts.append(" ")
        completion = None
        if position == 0:
            completion = autocomplete_command(token)
        elif position == last:
            completion = _path_completion(state, token)
        if completion is not None and position == last:
            parts.append(f"{Color.HIGH_INTENSITY_WHITE}{token}")
            parts.append(f"{Color.WHITE}{completion[len(token):]}")
            parts.append(_cursor_left(len(completion) - len(token)))
        else:
            parts.append(f"{Color.BRIGHT_WHITE}{token}")
    parts.append(" " * (len(text) - len(text.rstrip(" "))))
    if len(text) > cursor:
        parts.append(_cursor_left(len(text) - cursor))
    parts.append(str(Color.RESET))
    return "".join(parts)