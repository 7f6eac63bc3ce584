"""The interactive line editor and the shell's main loop."""

from __future__ import annotations

import argparse
import codecs
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from .commands import autocomplete_command
from .disk import DEFAULT_IMAGE, FatError
from .executor import execute_command
from .lexer import tokenize
from .output import render_line
from .state import SystemState

try:
    import termios
except ImportError:  # not a POSIX terminal
    termios = None

KEY_UP = "<up>"
KEY_DOWN = "<down>"
KEY_LEFT = "<left>"
KEY_RIGHT = "<right>"
KEY_TAB = "<tab>"
KEY_BACKSPACE = "<backspace>"
KEY_ENTER = "<enter>"

_ARROWS = {"A": KEY_UP, "B": KEY_DOWN, "C": KEY_RIGHT, "D": KEY_LEFT}
_CONTROL = {
    "\x7f": KEY_BACKSPACE,
    "\x08": KEY_BACKSPACE,
    "\t": KEY_TAB,
    "\n": KEY_ENTER,
    "\r": KEY_ENTER,
}


class LineEditor:
    """Edits one command line, key by key, with history and completion."""

    def __init__(self, state: SystemState) -> None:
        self.state = state
        self.cursor = 0
        self._text = ""
        state.history.reset()

    def text(self) -> str:
        """Return the line as typed so far."""
        return self._text

    def _replace(self, text: str | None) -> None:
        if text is None:
            return
        self._text = text
        self.cursor = len(text)

    def feed(self, key: str) -> bool:
        """Apply one key; return True when the line is finished."""
        if key == KEY_ENTER:
            return True
        if key == KEY_BACKSPACE:
            if self.cursor > 0:
                self._text = self._text[:-1]
                self.cursor -= 1
        elif key == KEY_RIGHT:
            if self.cursor < len(self._text):
                self.cursor += 1
        elif key == KEY_LEFT:
            if self.cursor > 0:
                self.cursor -= 1
        elif key == KEY_UP:
            self._replace(self.state.history.previous())
        elif key == KEY_DOWN:
            self._replace(self.state.history.next())
        elif key == KEY_TAB:
            self.complete()
        elif key:
            self._text += key
            self.cursor += 1
        return False

    def complete(self) -> None:
        """Complete the command name, or the path in the last word."""
        tokens = tokenize(self._text)
        if len(tokens) <= 1:
            self._replace(autocomplete_command(self._text))
            return
        filesystem = self.state.filesystem
        if filesystem is None:
            return
        try:
            completion = filesystem.autocomplete_path(self.state.current_path, tokens[-1])
        except (FatError, ValueError):
            return
        if completion is None:
            return
        stripped = self._text.rstrip(" ")
        start = stripped.rfind(" ") + 1
        self._replace(self._text[:start] + completion)


@contextmanager
def _raw_terminal(fd: int) -> Iterator[None]:
    if termios is None or not os.isatty(fd):
        yield
        return
    old = termios.tcgetattr(fd)
    new = termios.tcgetattr(fd)
    new[3] &= ~(termios.ICANON | termios.ECHO)
    termios.tcsetattr(fd, termios.TCSANOW, new)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSANOW, old)


def _read_char(fd: int) -> str:
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    while True:
        byte = os.read(fd, 1)
        if not byte:
            raise EOFError("end of input")
        char = decoder.decode(byte)
        if char:
            return char


def read_key() -> str:
    """Read one key press from the terminal without echo."""
    fd = sys.stdin.fileno()
    with _raw_terminal(fd):
        char = _read_char(fd)
        if char == "\x1b":
            if _read_char(fd) != "[":
                return ""
            return _ARROWS.get(_read_char(fd), "")
    return _CONTROL.get(char, char)


def read_command(state: SystemState) -> str:
    """Edit a line on the terminal until Enter and return it."""
    editor = LineEditor(state)
    out = sys.stdout
    out.write(render_line(state, editor.text(), editor.cursor))
    out.flush()
    while True:
        finished = editor.feed(read_key())
        out.write(render_line(state, editor.text(), editor.cursor))
        if finished:
            out.write("\n")
            out.flush()
            return editor.text()
        out.flush()


def main(argv: list[str] | None = None) -> int:
    """Run the interactive shell until ``exit`` or end of input."""
    parser = argparse.ArgumentParser(prog="fatshell", description="A shell over a FAT disk image.")
    parser.add_argument("--image", default=DEFAULT_IMAGE, help="path of the disk image")
    args = parser.parse_args(argv)

    state = SystemState(image_path=Path(args.image))
    try:
        while not state.has_ended:
            line = read_command(state)
            state.history.add(line)
            execute_command(line, state, sys.stdout)
    except (EOFError, KeyboardInterrupt):
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())