# fatshell

`fatshell` is an interactive shell for a small FAT-style file system. The whole
file system lives in a single disk image, which is `filesystem.dat` in the
working directory unless you name another one. The image has 2048 blocks of
1024 bytes each:

- Blocks 0–3 hold the allocation table, with one little-endian 16-bit entry
  per block.
- Block 4 holds the root directory.
- The remaining blocks hold data.

Each directory fills exactly one block, so it holds at most 32 entries of 32
bytes each. Names are stored in at most 25 bytes. Files are chains of blocks
linked through the allocation table.

## Installing

```
pip install .
```

To install with the test dependencies and run the tests:

```
pip install .[test]
pytest
```

## Running

```
fatshell
fatshell --image other.dat
```

`--image` picks the disk image file. It defaults to `filesystem.dat`.

The prompt looks like `user@darkstar:/docs$ `. The path only appears once a
file system has been initialised or loaded.

The shell reads keys straight from the terminal, without echo. On a
non-terminal input it reads characters as they come. These keys work:

- Left and right arrows move the cursor. Typed characters are always added at
  the end of the line, and backspace removes the last character.
- Up and down arrows step through earlier commands. Stepping past either end
  gives an empty line.
- Tab completes the command name when the line has one word. With more than
  one word, it completes the last word as a path, using the names stored in
  the image.
- Enter runs the line.

As you type, a suggested completion for the last word is shown after the
cursor. The shell ends on `exit`, at end of input, or on Ctrl-C.

## Commands

| Command | What it does |
| --- | --- |
| `init` | Formats a new, empty file system in the image file, creating the file if needed, and goes to the root directory. |
| `load` | Reads the allocation table from the existing image file. |
| `ls [path]` | Lists a directory: name, type (Directory or Archive), first block and size. An empty directory prints `<name> is empty.` |
| `mkdir path` | Creates an empty directory. |
| `create path` | Creates an empty file. |
| `unlink path` | Deletes a file, or a directory only if it is empty. |
| `write "text"[n] path` | Empties a file, then writes `text` into it `n` times. |
| `append "text"[n] path` | Appends `text` to a file `n` times. |
| `read path` | Prints the file's contents. |
| `cd [path]` | Changes the current directory. With no path, it goes back to the root. |
| `clear` | Clears the screen. |
| `man` | Prints the manual. |
| `exit` | Leaves the shell. |

Only `init`, `load`, `clear`, `man` and `exit` work before a file system has
been initialised or loaded. Any other command prints a reminder to run `init`
or `load` first.

Paths that start with `/` are absolute. Any other path is relative to the
current directory.

The `[n]` repetition count is optional and defaults to 1. A quoted argument
stays one word even if it contains spaces, as in `write "a b c" notes.txt`.

Errors are printed as `Error: ...` and the shell carries on. Errors include:

- a missing directory or file;
- a duplicate name;
- a full directory;
- no free blocks;
- a non-empty directory given to `unlink`.

Missing arguments print the command's usage line.

### Example session

```
init
mkdir docs
create docs/notes.txt
write "hello "[3] docs/notes.txt
append "world" docs/notes.txt
read docs/notes.txt
cd docs
ls
```

## Using it from Python

The file system can also be used without the shell:

```python
from fatshell.disk import Disk
from fatshell.filepath import FilePath
from fatshell.filesystem import FileSystem

disk = Disk("demo.dat")
disk.format()
fs = FileSystem(disk)

fs.create_directory(FilePath(), "docs")
docs = FilePath.parse("docs")
fs.create_file(docs, "notes.txt", b"hello")
fs.append_file(docs, "notes.txt", " world", 2)
print(fs.read_file(docs, "notes.txt"))   # b'hello world world'
print(fs.entry_names(docs))              # ['notes.txt']
```

`FileSystem` operations raise `fatshell.disk.FatError` when they cannot do
what was asked.

To run shell commands and capture their output, pass a `SystemState` to
`fatshell.executor.execute_command`:

```python
import io
from pathlib import Path

from fatshell.executor import execute_command
from fatshell.state import SystemState

state = SystemState(image_path=Path("demo.dat"))
out = io.StringIO()
for line in ["init", "mkdir docs", "ls"]:
    execute_command(line, state, out)
print(out.getvalue())
```

## What it does not do

- `..` and `.` are not special. `cd ..` looks for a directory actually named
  `..` and fails.
- There is no rename, move or copy. Files and directories carry no
  timestamps or permissions.
- A directory never grows beyond its single block of 32 entries.
- If `load` cannot open the image file, it prints an error. The shell still
  counts a file system as loaded, with an empty allocation table.
- Raw key input relies on a POSIX terminal.