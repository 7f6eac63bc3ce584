"""The disk image: block I/O, the allocation table and directory entries."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

NUM_BLOCKS = 2048
BLOCK_SIZE = 1024
BLOCKS = 2048
FAT_SIZE = BLOCKS * 2
FAT_BLOCKS = FAT_SIZE // BLOCK_SIZE
ROOT_BLOCK = FAT_BLOCKS
DIR_ENTRY_SIZE = 32
DIR_ENTRIES = BLOCK_SIZE // DIR_ENTRY_SIZE
NAME_SIZE = 25

FREE = 0x0000
RESERVED = 0x7FFE
END_OF_CHAIN = 0x7FFF

DEFAULT_IMAGE = "filesystem.dat"

_ENTRY_FORMAT = struct.Struct("<25sBHI")
_FAT_FORMAT = struct.Struct(f"<{NUM_BLOCKS}H")


class FatError(Exception):
    """Raised when the image or the allocation table cannot do what was asked."""


class EntryKind(IntEnum):
    """The attribute byte of a directory entry."""

    EMPTY = 0x00
    FILE = 0x01
    DIRECTORY = 0x02


@dataclass
class DirEntry:
    """One 32-byte slot of a directory block."""

    name: str = ""
    kind: EntryKind = EntryKind.EMPTY
    first_block: int = 0
    size: int = 0

    def pack(self) -> bytes:
        """Encode the entry; names longer than 25 bytes are cut short."""
        raw_name = self.name.encode("utf-8")[:NAME_SIZE]
        return _ENTRY_FORMAT.pack(raw_name, int(self.kind), self.first_block, self.size)

    @classmethod
    def unpack(cls, data: bytes) -> DirEntry:
        """Decode a 32-byte slot."""
        if len(data) != DIR_ENTRY_SIZE:
            raise ValueError(f"a directory entry is {DIR_ENTRY_SIZE} bytes, got {len(data)}")
        raw_name, attributes, first_block, size = _ENTRY_FORMAT.unpack(data)
        try:
            kind = EntryKind(attributes)
        except ValueError as exc:
            raise FatError(f"unknown entry attribute 0x{attributes:02x}") from exc
        name = raw_name.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        return cls(name, kind, first_block, size)

    @property
    def is_empty(self) -> bool:
        return self.kind == EntryKind.EMPTY


class Disk:
    """A FAT image file together with the in-memory allocation table."""

    def __init__(self, path: str | Path = DEFAULT_IMAGE) -> None:
        self.path = Path(path)
        self.fat: list[int] = [FREE] * NUM_BLOCKS

    @staticmethod
    def _check_block(block: int) -> None:
        if not 0 <= block < BLOCKS:
            raise ValueError(f"block {block} out of range")

    def _open(self, mode: str):
        try:
            return open(self.path, mode)
        except OSError as exc:
            raise FatError(f"could not open {self.path}: {exc.strerror}") from exc

    def read_block(self, block: int) -> bytes:
        """Read one block; a block past the end of the image reads as zeros."""
        self._check_block(block)
        with self._open("rb") as image:
            image.seek(block * BLOCK_SIZE)
            data = image.read(BLOCK_SIZE)
        return data.ljust(BLOCK_SIZE, b"\0")

    def write_block(self, block: int, data: bytes) -> None:
        """Write one block, padding short data with zeros."""
        self._check_block(block)
        if len(data) > BLOCK_SIZE:
            raise ValueError(f"a block holds {BLOCK_SIZE} bytes, got {len(data)}")
        self.write_at(block * BLOCK_SIZE, bytes(data).ljust(BLOCK_SIZE, b"\0"))

    def write_at(self, offset: int, data: bytes) -> None:
        """Write raw bytes at a byte offset of the image."""
        if offset < 0:
            raise ValueError("offset must not be negative")
        with self._open("r+b") as image:
            image.seek(offset)
            image.write(data)

    def read_dir_entry(self, block: int, index: int) -> DirEntry:
        """Read slot ``index`` of directory block ``block``."""
        if not 0 <= index < DIR_ENTRIES:
            raise ValueError(f"entry index {index} out of range")
        start = index * DIR_ENTRY_SIZE
        return DirEntry.unpack(self.read_block(block)[start:start + DIR_ENTRY_SIZE])

    def write_dir_entry(self, block: int, index: int, entry: DirEntry) -> None:
        """Write slot ``index`` of directory block ``block``."""
        if not 0 <= index < DIR_ENTRIES:
            raise ValueError(f"entry index {index} out of range")
        data = bytearray(self.read_block(block))
        start = index * DIR_ENTRY_SIZE
        data[start:start + DIR_ENTRY_SIZE] = entry.pack()
        self.write_block(block, bytes(data))

    def save_fat(self) -> None:
        """Write the allocation table to the start of the image, creating it if needed."""
        payload = _FAT_FORMAT.pack(*self.fat)
        try:
            image = open(self.path, "r+b")
        except FileNotFoundError:
            image = self._open("w+b")
        except OSError as exc:
            raise FatError(f"could not open or create {self.path}") from exc
        with image:
            image.seek(0)
            image.write(payload)

    def load_fat(self) -> None:
        """Read the allocation table from the start of the image."""
        with self._open("rb") as image:
            data = image.read(FAT_SIZE)
        count = len(data) // 2
        self.fat[:count] = struct.unpack(f"<{count}H", data[:count * 2])

    def format(self) -> None:
        """Reset the table and write an empty root directory and empty data blocks."""
        self.fat = [RESERVED] * FAT_BLOCKS + [END_OF_CHAIN] + [FREE] * (NUM_BLOCKS - ROOT_BLOCK - 1)
        self.save_fat()
        self.write_at(ROOT_BLOCK * BLOCK_SIZE, bytes((BLOCKS - ROOT_BLOCK) * BLOCK_SIZE))

    def find_free_block(self) -> int | None:
        """Return the first free block after the table, or None."""
        for block in range(FAT_BLOCKS, NUM_BLOCKS):
            if self.fat[block] == FREE:
                return block
        return None

    def allocate_block(self) -> int:
        """Claim the first free data block, marking it as the end of a chain."""
        for block in range(ROOT_BLOCK + 1, NUM_BLOCKS):
            if self.fat[block] == FREE:
                self.fat[block] = END_OF_CHAIN
                return block
        raise FatError("there are no free blocks")

    def free_blocks(self, first_block: int) -> None:
        """Release every block of the chain that starts at ``first_block``."""
        block = first_block
        for _ in range(NUM_BLOCKS):
            if block == END_OF_CHAIN:
                return
            if not 0 <= block < NUM_BLOCKS:
                raise FatError(f"chain points to invalid block {block}")
            block, self.fat[block] = self.fat[block], FREE
        raise FatError("block chain does not end")