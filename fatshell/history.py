"""History of entered commands with up/down navigation."""

from __future__ import annotations


class CommandHistory:
    """Entered commands, oldest first, with a browsing cursor."""

    def __init__(self) -> None:
        self._commands: list[str] = []
        self._cursor = -1

    def add(self, command: str) -> None:
        """Record a command; empty commands are not kept."""
        if command:
            self._commands.append(command)

    def __len__(self) -> int:
        return len(self._commands)

    def __getitem__(self, index: int) -> str:
        if not 0 <= index < len(self._commands):
            raise IndexError(f"history index {index} out of range")
        return self._commands[index]

    def previous(self) -> str | None:
        """Step back to an older command.

        Returns None when there is no history; stepping back past the
        oldest command leaves browsing and returns an empty line.
        """
        if not self._commands:
            return None
        if self._cursor == 0:
            self._cursor = -1
            return ""
        if self._cursor == -1:
            self._cursor = len(self._commands) - 1
        else:
            self._cursor -= 1
        return self._commands[self._cursor]

    def next(self) -> str | None:
        """Step forward to a newer command.

        Returns None when not browsing; stepping past the newest command
        leaves browsing and returns an empty line.
        """
        if not self._commands or self._cursor == -1:
            return None
        if self._cursor == len(self._commands) - 1:
            self._cursor = -1
            return ""
        self._cursor += 1
        return self._commands[self._cursor]

    def reset(self) -> None:
        """Stop browsing, so the next step back starts at the newest command."""
        self._cursor = -1