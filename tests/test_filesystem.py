import pytest

from fatshell.disk import (
    BLOCK_SIZE,
    DIR_ENTRIES,
    END_OF_CHAIN,
    FREE,
    NAME_SIZE,
    ROOT_BLOCK,
    Disk,
    EntryKind,
    FatError,
)
from fatshell.filepath import FilePath
from fatshell.filesystem import FileSystem

ROOT = FilePath()


@pytest.fixture
def image(tmp_path):
    return tmp_path / "filesystem.dat"


@pytest.fixture
def fs(image):
    disk = Disk(image)
    disk.format()
    return FileSystem(disk)


def test_fresh_root_is_empty(fs):
    assert fs.list_directory(ROOT) == []
    assert fs.find_directory(ROOT).first_block == ROOT_BLOCK


def test_create_directory_and_find_it(fs):
    block = fs.create_directory(ROOT, "docs")
    assert fs.directory_exists(FilePath.parse("docs"))
    found = fs.find_directory(FilePath.parse("/docs"))
    assert found.first_block == block
    assert found.kind == EntryKind.DIRECTORY
    assert fs.disk.fat[block] == END_OF_CHAIN


def test_nested_directories(fs):
    fs.create_directory(ROOT, "a")
    fs.create_directory(FilePath.parse("a"), "b")
    assert fs.directory_exists(FilePath.parse("a/b"))
    assert not fs.directory_exists(FilePath.parse("b"))
    assert fs.entry_names(FilePath.parse("a")) == ["b"]


def test_missing_directory_raises(fs):
    with pytest.raises(FatError):
        fs.find_directory(FilePath.parse("nowhere"))
    with pytest.raises(FatError):
        fs.create_file(FilePath.parse("nowhere"), "x.txt")


def test_duplicate_name_rejected(fs):
    fs.create_directory(ROOT, "docs")
    with pytest.raises(FatError):
        fs.create_file(ROOT, "docs")
    with pytest.raises(FatError):
        fs.create_directory(ROOT, "docs")


def test_create_file_with_data_round_trip(fs):
    data = bytes(range(256)) * 6
    fs.create_file(ROOT, "blob", data)
    assert fs.read_file(ROOT, "blob") == data
    entry = fs.list_directory(ROOT)[0]
    assert entry.size == len(data)
    assert entry.kind == EntryKind.FILE


def test_empty_file_reads_empty(fs):
    first = fs.create_file(ROOT, "empty.txt")
    assert fs.read_file(ROOT, "empty.txt") == b""
    assert fs.disk.fat[first] == END_OF_CHAIN


def test_append_round_trip_with_repetitions(fs):
    fs.create_file(ROOT, "main.c")
    fs.append_file(ROOT, "main.c", "abc", 5)
    assert fs.read_file(ROOT, "main.c") == b"abc" * 5
    fs.append_file(ROOT, "main.c", b"xyz")
    assert fs.read_file(ROOT, "main.c") == b"abc" * 5 + b"xyz"


def test_append_crosses_block_boundary(fs):
    first = fs.create_file(ROOT, "big")
    chunk = b"q" * (BLOCK_SIZE - 10)
    fs.append_file(ROOT, "big", chunk, 3)
    assert fs.read_file(ROOT, "big") == chunk * 3
    assert fs.disk.fat[first] != END_OF_CHAIN


def test_append_to_missing_file_raises(fs):
    with pytest.raises(FatError):
        fs.append_file(ROOT, "ghost", "abc", 1)


def test_overwrite_replaces_and_frees_extra_blocks(fs):
    first = fs.create_file(ROOT, "f")
    fs.append_file(ROOT, "f", b"z" * (BLOCK_SIZE * 2))
    second = fs.disk.fat[first]
    fs.overwrite_file(ROOT, "f", "new", 2)
    assert fs.read_file(ROOT, "f") == b"newnew"
    assert fs.disk.fat[first] == END_OF_CHAIN
    assert fs.disk.fat[second] == FREE


def test_overwrite_rejects_zero_repetitions(fs):
    fs.create_file(ROOT, "f")
    with pytest.raises(FatError):
        fs.overwrite_file(ROOT, "f", "abc", 0)


def test_reading_a_directory_as_file_fails(fs):
    fs.create_directory(ROOT, "docs")
    with pytest.raises(FatError):
        fs.read_file(ROOT, "docs")


def test_unlink_file_frees_its_blocks(fs):
    first = fs.create_file(ROOT, "f", b"x" * (BLOCK_SIZE + 1))
    second = fs.disk.fat[first]
    fs.unlink(ROOT, "f")
    assert fs.list_directory(ROOT) == []
    assert fs.disk.fat[first] == FREE
    assert fs.disk.fat[second] == FREE


def test_unlink_directory_only_when_empty(fs):
    block = fs.create_directory(ROOT, "d")
    fs.create_file(FilePath.parse("d"), "inner")
    with pytest.raises(FatError):
        fs.unlink(ROOT, "d")
    fs.unlink(FilePath.parse("d"), "inner")
    fs.unlink(ROOT, "d")
    assert not fs.directory_exists(FilePath.parse("d"))
    assert fs.disk.fat[block] == FREE


def test_unlink_missing_raises(fs):
    with pytest.raises(FatError):
        fs.unlink(ROOT, "ghost")


def test_names_are_cut_to_slot_size(fs):
    long_name = "n" * (NAME_SIZE + 5)
    fs.create_file(ROOT, long_name)
    assert fs.entry_names(ROOT) == [long_name[:NAME_SIZE]]
    assert fs.read_file(ROOT, long_name) == b""


def test_directory_full(fs):
    for number in range(DIR_ENTRIES):
        fs.create_file(ROOT, f"f{number}")
    with pytest.raises(FatError):
        fs.create_file(ROOT, "overflow")
    assert len(fs.list_directory(ROOT)) == DIR_ENTRIES


def test_entry_names_keep_slot_order(fs):
    for name in ("c", "a", "b"):
        fs.create_file(ROOT, name)
    fs.unlink(ROOT, "a")
    fs.create_file(ROOT, "d")
    assert fs.entry_names(ROOT) == ["c", "d", "b"]


def test_state_survives_reload(fs, image):
    fs.create_directory(ROOT, "docs")
    fs.create_file(FilePath.parse("docs"), "note", b"hello")
    disk = Disk(image)
    disk.load_fat()
    reopened = FileSystem(disk)
    assert reopened.read_file(FilePath.parse("docs"), "note") == b"hello"
    assert reopened.disk.fat == fs.disk.fat


def test_autocomplete_path(fs):
    fs.create_directory(ROOT, "Desktop")
    fs.create_directory(FilePath.parse("Desktop"), "PUCRS")
    assert fs.autocomplete_path(ROOT, "Des") == "Desktop"
    assert fs.autocomplete_path(ROOT, "Desktop/PU") == "Desktop/PUCRS"
    assert fs.autocomplete_path(FilePath.parse("Desktop"), "P") == "PUCRS"
    assert fs.autocomplete_path(FilePath.parse("Desktop"), "/De") == "/Desktop"


def test_autocomplete_path_without_match(fs):
    fs.create_directory(ROOT, "Desktop")
    assert fs.autocomplete_path(ROOT, "Desktop/") is None
    assert fs.autocomplete_path(ROOT, "zz") is None
    assert fs.autocomplete_path(ROOT, "missing/x") is None
    assert fs.autocomplete_path(ROOT, "") is None