"""State shared by the shell loop and the command executor."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .disk import DEFAULT_IMAGE
from .filepath import FilePath
from .filesystem import FileSystem
from .history import CommandHistory


@dataclass
class SystemState:
    """Where the user is, whether a FAT is in use, and what was typed before."""

    current_path: FilePath = field(default_factory=FilePath)
    has_ended: bool = False
    history: CommandHistory = field(default_factory=CommandHistory)
    image_path: Path = Path(DEFAULT_IMAGE)
    filesystem: FileSystem | None = None

    def has_fat(self) -> bool:
        """Tell whether a FAT has been initialised or loaded."""
        return self.filesystem is not None