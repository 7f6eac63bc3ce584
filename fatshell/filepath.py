"""Paths inside the FAT image, held as a sequence of name components."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FilePath:
    """An absolute path in the image; an empty path is the root directory."""

    tokens: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> FilePath:
        """Build a path from slash-separated text, ignoring empty components."""
        return cls(tuple(part for part in text.split("/") if part))

    def join(self, other: str) -> FilePath:
        """Resolve ``other`` against this path; a leading slash makes it absolute."""
        if other.startswith("/"):
            return FilePath.parse(other)
        return FilePath(self.tokens + FilePath.parse(other).tokens)

    def split(self) -> tuple[FilePath, str]:
        """Return the parent path and the last component."""
        if not self.tokens:
            raise ValueError("the root path has no last component")
        return FilePath(self.tokens[:-1]), self.tokens[-1]

    def __str__(self) -> str:
        return "/" + "/".join(self.tokens)