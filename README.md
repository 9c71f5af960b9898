# kivos

kivos holds the building blocks of a small simulated operating system that
lives inside one Python process: an in-memory file system with drives,
folders and text files, bounded character pipes, input and output streams,
and a set of command programs that run as threads.

## Installation

```
pip install .
```

## Modules

| Module | Contents |
|--------|----------|
| `kivos.utils` | `KivosError` (an error carrying a numeric `code`) and `split(text, separator)`, which drops empty pieces. |
| `kivos.filesystem` | `FileAttribute`, `File` and `FileSystem`. |
| `kivos.pipe` | `Pipe`, a bounded blocking character queue. |
| `kivos.streams` | `InputStream`, `OutputStream` and their kinds: `StandardInput`, `StandardOutput`, `FileInput`, `FileOutput`, `PipeInput`, `PipeOutput`, `MemoryInput`, `MemoryOutput`. |
| `kivos.process` | `Process`, the base of every program, and `split_parameters`. |
| `kivos.commands` | The programs `Echo`, `Freq`, `Rand`, `Remove`, `Type` and `WordCount`. |
| `kivos.sort` | The `Sort` program, `FirstLineFromFile` and `line_key`. |

Failures are raised as `KivosError`; its `code` is the number the
operation failed with.

## File system

```python
from kivos.filesystem import FileAttribute, FileSystem
from kivos.streams import FileInput, FileOutput

fs = FileSystem()
drive = fs.create_file("c", FileAttribute.FOLDER, None)      # a drive
docs = fs.create_file("docs", FileAttribute.FOLDER, drive)
note = fs.create_file("note.txt", FileAttribute.FILE, docs)

with FileOutput(note, None) as out:
    out.write_line("hello")

found = fs.get_file("c:/docs/note.txt", None)
print(found.absolute_path())          # c:/docs/note.txt
with FileInput(found, None) as stream:
    print(list(stream))               # ['hello']
```

Paths use `/`. A path that starts with a drive, such as `c:/docs`, is
absolute; any other path is resolved from the `source` folder given to
`get_file`. `.` is the current folder and `..` its parent.

File names must not be empty, must not end with a dot, must not hold two
dots in a row, and must not contain any of `/ \ : * ? " < > ; , |` or a
space. `FileSystem.remove_file` removes a file or an empty folder that no
stream has open; drives cannot be removed. A `FileOutput` clears the file
when it is opened.

## Pipes

```python
from kivos.pipe import Pipe

pipe = Pipe(16)
pipe.push_char("a")
pipe.close_exit()
pipe.pop_char()   # 'a'
pipe.pop_char()   # None: the pipe is exhausted
```

`push_char` blocks while the buffer is full and returns `False` once the
entry has been closed; `pop_char` blocks until a character arrives or the
exit is closed.

## Programs

A program is a `Process`. It is given its streams and a parameter string in
which every value is in single quotes (`"'-w' 'a.txt'"`), checks its
parameters with `has_valid_parameters`, and does its work in `run_process`,
which returns an exit code. `run` starts it in a thread and raises
`KivosError` when the parameters are invalid; `join` waits and returns the
exit code.

```python
from kivos.commands import Freq
from kivos.streams import MemoryInput, MemoryOutput

out = MemoryOutput()
freq = Freq(2, 1, None)
freq.init(MemoryInput("aab\n"), out, MemoryOutput(), "")
freq.run()
freq.join()
print(out.text)   # 0x61 : 2\n0x62 : 1\n
```

| Program | What it does |
|---------|--------------|
| `Echo` | Prints its one message, or with `ON`/`OFF` or no parameter sets or shows the parent's echo setting. |
| `Freq` | Prints how often each byte occurs in the input. |
| `Rand` | Prints a random number between -1 and 1 every `interval` seconds until the input ends. |
| `Remove` | Removes a file or empty folder; with `/S` a whole folder tree. |
| `Type` | Prints files given by path (a `*` in the last part matches several), or the input. |
| `WordCount` | With `-c`, `-w` or `-l` counts bytes, words or lines of the input or of a file. |
| `Sort` | Writes the input lines longest first, lines of equal length in reverse character order. |

Every program accepts `--help`.

### The kernel object

Programs and some streams call methods on the `kernel` they are given.
The package does not include one; the caller supplies an object with the
methods that are used:

- `StandardInput`: `read_keyboard_char()`, `read_keyboard_line()`;
  `StandardOutput`: `write_monitor(text)`, `write_line_monitor(text)`.
- `PipeInput` and `PipeOutput`: `read_pipe_char(pipe_id)`,
  `write_pipe_char(pipe_id, char)`, `close_pipe_input(pipe_id)`,
  `close_pipe_output(pipe_id)`.
- `Echo` status: `check_echo_status(pid)`, `set_echo_status(pid, status)`.
- File access in `Remove`, `Type`, `WordCount` and `Sort`:
  `get_file(path, source)`, `create_file(name, attribute, parent)`,
  `remove_file(target)`, `check_process_path(pid, folder)`,
  `split_path(path, part)`, `query_low_memory()`. `Sort` keeps its runs in
  files on a `_system` drive.

Programs that only read their input stream and write their output stream
(`Freq`, `Rand`, `Echo` with a message, `Type` and `WordCount` on the
input) need no kernel.

## What the package does not do

There is no interactive shell, no command-line parser, no kernel that
creates processes, pipes and streams, and no command to start the system.
There are no programs for changing, listing or creating folders. Nothing
is installed as a console command; the package is used from Python.

## Running the tests

```
pip install .[test]
pytest
```