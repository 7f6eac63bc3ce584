"""ANSI colour escape sequences used by the shell."""

from __future__ import annotations

from enum import Enum


class Color(Enum):
    """Terminal colour and style escape sequences."""

    HIGH_INTENSITY_BLACK = "\033[0;90m"
    HIGH_INTENSITY_RED = "\033[0;91m"
    HIGH_INTENSITY_GREEN = "\033[0;92m"
    HIGH_INTENSITY_YELLOW = "\033[0;93m"
    HIGH_INTENSITY_BLUE = "\033[0;94m"
    HIGH_INTENSITY_MAGENTA = "\033[0;95m"
    HIGH_INTENSITY_CYAN = "\033[0;96m"
    HIGH_INTENSITY_WHITE = "\033[0;97m"

    BOLD_HIGH_INTENSITY_BLACK = "\033[1;90m"
    BOLD_HIGH_INTENSITY_RED = "\033[1;91m"
    BOLD_HIGH_INTENSITY_GREEN = "\033[1;92m"
    BOLD_HIGH_INTENSITY_YELLOW = "\033[1;93m"
    BOLD_HIGH_INTENSITY_BLUE = "\033[1;94m"
    BOLD_HIGH_INTENSITY_MAGENTA = "\033[1;95m"
    BOLD_HIGH_INTENSITY_CYAN = "\033[1;96m"
    BOLD_HIGH_INTENSITY_WHITE = "\033[1;97m"

    BLACK = "\033[0;30m"
    RED = "\033[0;31m"
    GREEN = "\033[0;32m"
    YELLOW = "\033[0;33m"
    BLUE = "\033[0;34m"
    MAGENTA = "\033[0;35m"
    CYAN = "\033[0;36m"
    WHITE = "\033[0;37m"

    BRIGHT_BLACK = "\033[1;30m"
    BRIGHT_RED = "\033[1;31m"
    BRIGHT_GREEN = "\033[1;32m"
    BRIGHT_YELLOW = "\033[1;33m"
    BRIGHT_BLUE = "\033[1;34m"
    BRIGHT_MAGENTA = "\033[1;35m"
    BRIGHT_CYAN = "\033[1;36m"
    BRIGHT_WHITE = "\033[1;37m"

    ITALIC_HIGH_INTENSITY_BLACK = "\033[3;90m"
    ITALIC_HIGH_INTENSITY_RED = "\033[3;91m"
    ITALIC_HIGH_INTENSITY_GREEN = "\033[3;92m"
    ITALIC_HIGH_INTENSITY_YELLOW = "\033[3;93m"
    ITALIC_HIGH_INTENSITY_BLUE = "\033[3;94m"
    ITALIC_HIGH_INTENSITY_MAGENTA = "\033[3;95m"
    ITALIC_HIGH_INTENSITY_CYAN = "\033[3;96m"
    ITALIC_HIGH_INTENSITY_WHITE = "\033[3;97m"

    ITALIC_BOLD_HIGH_INTENSITY_BLACK = "\033[3;1;90m"
    ITALIC_BOLD_HIGH_INTENSITY_RED = "\033[3;1;91m"
    ITALIC_BOLD_HIGH_INTENSITY_GREEN = "\033[3;1;92m"
    ITALIC_BOLD_HIGH_INTENSITY_YELLOW = "\033[3;1;93m"
    ITALIC_BOLD_HIGH_INTENSITY_BLUE = "\033[3;1;94m"
    ITALIC_BOLD_HIGH_INTENSITY_MAGENTA = "\033[3;1;95m"
    ITALIC_BOLD_HIGH_INTENSITY_CYAN = "\033[3;1;96m"
    ITALIC_BOLD_HIGH_INTENSITY_WHITE = "\033[3;1;97m"

    ITALIC_BLACK = "\033[3;30m"
    ITALIC_RED = "\033[3;31m"
    ITALIC_GREEN = "\033[3;32m"
    ITALIC_YELLOW = "\033[3;33m"
    ITALIC_BLUE = "\033[3;34m"
    ITALIC_MAGENTA = "\033[3;35m"
    ITALIC_CYAN = "\033[3;36m"
    ITALIC_WHITE = "\033[3;37m"

    ITALIC_BRIGHT_BLACK = "\033[3;1;30m"
    ITALIC_BRIGHT_RED = "\033[3;1;31m"
    ITALIC_BRIGHT_GREEN = "\033[3;1;32m"
    ITALIC_BRIGHT_YELLOW = "\033[3;1;33m"
    ITALIC_BRIGHT_BLUE = "\033[3;1;34m"
    ITALIC_BRIGHT_MAGENTA = "\033[3;1;35m"
    ITALIC_BRIGHT_CYAN = "\033[3;1;36m"
    ITALIC_BRIGHT_WHITE = "\033[3;1;37m"

    RESET = "\033[0m"

    def __str__(self) -> str:
        return self.value


def colorize(text: str, color: Color) -> str:
    """Wrap ``text`` in the escape for ``color`` followed by a reset."""
    return f"{color.value}{text}{Color.RESET.value}"