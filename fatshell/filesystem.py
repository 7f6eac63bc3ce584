"""Files and directories stored on a FAT disk image."""

from __future__ import annotations

from collections.abc import Iterator

from .disk import (
    BLOCK_SIZE,
    DIR_ENTRIES,
    DIR_ENTRY_SIZE,
    END_OF_CHAIN,
    FREE,
    NAME_SIZE,
    NUM_BLOCKS,
    ROOT_BLOCK,
    DirEntry,
    Disk,
    EntryKind,
    FatError,
)
from .filepath import FilePath


def _same_name(stored: str, wanted: str) -> bool:
    """Compare names the way the image stores them: at most 25 bytes."""
    return stored.encode("utf-8")[:NAME_SIZE] == wanted.encode("utf-8")[:NAME_SIZE]


def _as_bytes(data: bytes | str) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


class FileSystem:
    """Directory and file operations on top of a :class:`Disk`."""

    def __init__(self, disk: Disk) -> None:
        self.disk = disk

    # -- directory slots -------------------------------------------------

    def _entries(self, block: int) -> Iterator[tuple[int, DirEntry]]:
        data = self.disk.read_block(block)
        for index in range(DIR_ENTRIES):
            start = index * DIR_ENTRY_SIZE
            yield index, DirEntry.unpack(data[start:start + DIR_ENTRY_SIZE])

    def _chain(self, first_block: int) -> Iterator[int]:
        block = first_block
        for _ in range(NUM_BLOCKS):
            if block == END_OF_CHAIN:
                return
            if not 0 <= block < NUM_BLOCKS:
                raise FatError(f"chain points to invalid block {block}")
            yield block
            block = self.disk.fat[block]
        raise FatError("block chain does not end")

    def _free_slot(self, block: int) -> int:
        for index, entry in self._entries(block):
            if entry.is_empty:
                return index
        raise FatError("destination directory is full")

    def _check_duplicate(self, block: int, name: str) -> None:
        for _, entry in self._entries(block):
            if not entry.is_empty and _same_name(entry.name, name):
                raise FatError(f"a file or directory with the name '{name}' already exists")

    def _find_file(self, block: int, name: str) -> tuple[int, DirEntry]:
        for index, entry in self._entries(block):
            if entry.kind == EntryKind.FILE and _same_name(entry.name, name):
                return index, entry
        raise FatError(f"file '{name}' not found")

    def _find_any(self, block: int, name: str) -> tuple[int, DirEntry]:
        for index, entry in self._entries(block):
            if not entry.is_empty and _same_name(entry.name, name):
                return index, entry
        raise FatError(f"file or directory '{name}' not found")

    def _directory_block(self, path: FilePath) -> int:
        return self.find_directory(path).first_block

    # -- public operations -----------------------------------------------

    def find_directory(self, path: FilePath) -> DirEntry:
        """Return the entry of the directory at ``path``; the root has a synthetic entry."""
        entry = DirEntry("", EntryKind.DIRECTORY, ROOT_BLOCK, 0)
        for token in path.tokens:
            for _, candidate in self._entries(entry.first_block):
                if candidate.kind == EntryKind.DIRECTORY and _same_name(candidate.name, token):
                    entry = candidate
                    break
            else:
                raise FatError(f"directory '{token}' not found")
        return entry

    def directory_exists(self, path: FilePath) -> bool:
        """Tell whether ``path`` names a directory."""
        try:
            self.find_directory(path)
        except FatError:
            return False
        return True

    def create_file(self, parent: FilePath, name: str, data: bytes | str = b"") -> int:
        """Create a file in ``parent`` holding ``data``; return its first block."""
        payload = _as_bytes(data)
        block = self._directory_block(parent)
        self._check_duplicate(block, name)
        slot = self._free_slot(block)

        first_block = self.disk.allocate_block()
        current = first_block
        try:
            for offset in range(0, len(payload), BLOCK_SIZE):
                if offset:
                    following = self.disk.allocate_block()
                    self.disk.fat[current] = following
                    current = following
                self.disk.write_at(current * BLOCK_SIZE, payload[offset:offset + BLOCK_SIZE])
        except FatError as exc:
            self.disk.free_blocks(first_block)
            raise FatError("there is no space to continue writing the file") from exc
        self.disk.fat[current] = END_OF_CHAIN
        self.disk.save_fat()

        entry = DirEntry(name, EntryKind.FILE, first_block, len(payload))
        self.disk.write_dir_entry(block, slot, entry)
        return first_block

    def create_directory(self, parent: FilePath, name: str) -> int:
        """Create an empty directory in ``parent``; return its block."""
        block = self._directory_block(parent)
        self._check_duplicate(block, name)
        slot = self._free_slot(block)

        new_block = self.disk.allocate_block()
        self.disk.save_fat()
        self.disk.write_block(new_block, bytes(BLOCK_SIZE))
        self.disk.write_dir_entry(block, slot, DirEntry(name, EntryKind.DIRECTORY, new_block, 0))
        return new_block

    def list_directory(self, path: FilePath) -> list[DirEntry]:
        """Return the used entries of the directory at ``path``, in slot order."""
        block = self._directory_block(path)
        return [entry for _, entry in self._entries(block) if not entry.is_empty]

    def entry_names(self, path: FilePath) -> list[str]:
        """Return the names in the directory at ``path``, in slot order."""
        return [entry.name for entry in self.list_directory(path)]

    def append_file(
        self, parent: FilePath, name: str, data: bytes | str, repetitions: int = 1
    ) -> None:
        """Append ``data`` to a file ``repetitions`` times."""
        if data is None:
            raise FatError("trying to append nothing")
        payload = _as_bytes(data)
        block = self._directory_block(parent)
        for _ in range(repetitions):
            index, entry = self._find_file(block, name)
            self._append_once(block, index, entry, payload)

    def _append_once(self, dir_block: int, index: int, entry: DirEntry, payload: bytes) -> None:
        last_block = list(self._chain(entry.first_block))[-1]
        original_last = last_block

        used = entry.size % BLOCK_SIZE
        free = 0 if used == 0 and entry.size > 0 else BLOCK_SIZE - used

        head = payload[:free]
        if head:
            self.disk.write_at(last_block * BLOCK_SIZE + used, head)

        new_blocks: list[int] = []
        try:
            for offset in range(len(head), len(payload), BLOCK_SIZE):
                new_block = self.disk.allocate_block()
                new_blocks.append(new_block)
                self.disk.fat[last_block] = new_block
                last_block = new_block
                self.disk.write_at(new_block * BLOCK_SIZE, payload[offset:offset + BLOCK_SIZE])
        except FatError as exc:
            self.disk.fat[original_last] = END_OF_CHAIN
            for new_block in new_blocks:
                self.disk.fat[new_block] = FREE
            raise FatError("no space left to continue appending to the file") from exc

        self.disk.fat[last_block] = END_OF_CHAIN
        self.disk.save_fat()
        entry.size += len(payload)
        self.disk.write_dir_entry(dir_block, index, entry)

    def overwrite_file(
        self, parent: FilePath, name: str, data: bytes | str, repetitions: int = 1
    ) -> None:
        """Empty a file, then write ``data`` into it ``repetitions`` times."""
        if data is None:
            raise FatError("no data provided for overwriting")
        if repetitions <= 0:
            raise FatError("repetitions must be greater than 0")
        block = self._directory_block(parent)
        index, entry = self._find_file(block, name)

        first, *rest = self._chain(entry.first_block)
        for spare in rest:
            self.disk.write_block(spare, bytes(BLOCK_SIZE))
            self.disk.fat[spare] = FREE
        self.disk.fat[first] = END_OF_CHAIN
        self.disk.save_fat()
        self.disk.write_block(first, bytes(BLOCK_SIZE))

        entry.size = 0
        self.disk.write_dir_entry(block, index, entry)
        self.append_file(parent, name, data, repetitions)

    def read_file(self, parent: FilePath, name: str) -> bytes:
        """Return the contents of a file."""
        block = self._directory_block(parent)
        _, entry = self._find_file(block, name)

        remaining = entry.size
        chunks: list[bytes] = []
        for current in self._chain(entry.first_block):
            if remaining <= 0:
                break
            take = min(remaining, BLOCK_SIZE)
            chunks.append(self.disk.read_block(current)[:take])
            remaining -= take
        if remaining > 0:
            raise FatError(f"file '{name}' is incomplete or corrupted")
        return b"".join(chunks)

    def unlink(self, parent: FilePath, name: str) -> None:
        """Delete a file or an empty directory."""
        block = self._directory_block(parent)
        index, entry = self._find_any(block, name)

        if entry.kind == EntryKind.DIRECTORY:
            if any(not child.is_empty for _, child in self._entries(entry.first_block)):
                raise FatError(f"'{name}' directory is not empty")
            self.disk.write_block(entry.first_block, bytes(BLOCK_SIZE))
            self.disk.fat[entry.first_block] = FREE
        else:
            for current in list(self._chain(entry.first_block)):
                self.disk.write_block(current, bytes(BLOCK_SIZE))
                self.disk.fat[current] = FREE

        self.disk.save_fat()
        self.disk.write_dir_entry(block, index, DirEntry())

    def autocomplete_path(self, current: FilePath, prefix: str) -> str | None:
        """Complete the last component of ``prefix`` against names on the image."""
        if not prefix or prefix.endswith("/"):
            return None
        target = current.join(prefix)
        if not target.tokens:
            return None
        parent, partial = target.split()
        try:
            names = self.entry_names(parent)
        except FatError:
            return None
        base = prefix[:prefix.rfind("/") + 1]
        for name in names:
            if name.startswith(partial):
                return base + name
        return None