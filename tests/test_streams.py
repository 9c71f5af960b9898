import io

import pytest

from kivos.filesystem import FileAttribute, FileSystem
from kivos.pipe import Pipe
from kivos.streams import (
    FileInput,
    FileOutput,
    PipeInput,
    PipeOutput,
    StandardInput,
    StandardOutput,
)


class ConsoleKernel:
    def __init__(self, text=""):
        self.stdin = io.StringIO(text)
        self.written = []

    def read_keyboard_char(self):
        return self.stdin.read(1) or None

    def read_keyboard_line(self):
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\n")

    def write_monitor(self, text):
        self.written.append(text)

    def write_line_monitor(self, text):
        self.written.append(text + "\n")


class PipeKernel:
    def __init__(self):
        self.pipes = {1: Pipe()}

    def read_pipe_char(self, pipe_id):
        return self.pipes[pipe_id].pop_char()

    def write_pipe_char(self, pipe_id, char):
        return self.pipes[pipe_id].push_char(char)

    def close_pipe_output(self, pipe_id):
        self.pipes[pipe_id].close_exit()

    def close_pipe_input(self, pipe_id):
        self.pipes[pipe_id].close_entry()


@pytest.fixture
def text_file():
    fs = FileSystem()
    drive = fs.create_file("c", FileAttribute.FOLDER, None)
    return fs.create_file("notes.txt", FileAttribute.FILE, drive)


def fill(file, text):
    out = FileOutput(file, None)
    out.write(text)
    out.close()


def test_file_output_writes_and_lines(text_file):
    with FileOutput(text_file, None) as out:
        out.write("ab")
        out.write_line("cd")
    reader = FileInput(text_file, None)
    assert reader.read_line() == "abcd"
    assert text_file.size() == len("abcd\n")


def test_file_output_replaces_existing_content(text_file):
    fill(text_file, "old content\n")
    fill(text_file, "new")
    reader = FileInput(text_file, None)
    assert list(reader) == ["new"]


def test_file_input_lines_and_partial_last_line(text_file):
    fill(text_file, "first\nsecond\nthird")
    reader = FileInput(text_file, None)
    assert reader.read_line() == "first"
    assert reader.read_line() == "second"
    assert reader.has_next()
    assert reader.read_line() == "third"
    assert not reader.has_next()
    assert reader.read_line() is None


def test_file_input_end_without_remainder(text_file):
    fill(text_file, "only\n")
    reader = FileInput(text_file, None)
    assert reader.read_line() == "only"
    assert reader.has_next()
    assert reader.read_line() is None
    assert not reader.has_next()


def test_file_input_read_chars(text_file):
    fill(text_file, "xy")
    reader = FileInput(text_file, None)
    assert reader.read() == "x"
    assert reader.read() == "y"
    assert reader.read() is None
    assert not reader.has_next()


def test_closing_unregisters_from_file(text_file):
    reader = FileInput(text_file, None)
    writer = FileOutput(text_file, None)
    assert text_file.is_processed()
    reader.close()
    writer.close()
    assert not text_file.is_processed()
    assert text_file.is_deletable()


def test_iterating_file_input(text_file):
    fill(text_file, "a\nb\nc\n")
    assert list(FileInput(text_file, None)) == ["a", "b", "c"]


def test_pipe_round_trip():
    kernel = PipeKernel()
    out = PipeOutput(1, kernel)
    out.write_line("hello")
    out.write("world")
    out.close()
    reader = PipeInput(1, kernel)
    assert reader.read_line() == "hello"
    assert reader.read_line() == "world"
    assert not reader.has_next()


def test_pipe_read_char_until_end():
    kernel = PipeKernel()
    out = PipeOutput(1, kernel)
    out.write("q")
    out.close()
    reader = PipeInput(1, kernel)
    assert reader.read() == "q"
    assert reader.read() is None
    assert not reader.has_next()


def test_closing_pipe_input_discards_writes():
    kernel = PipeKernel()
    reader = PipeInput(1, kernel)
    reader.close()
    assert kernel.pipes[1].push_char("z") is False
    assert not reader.has_next()


def test_standard_input_lines():
    kernel = ConsoleKernel("dir\ncd x\n")
    stdin = StandardInput(kernel)
    assert stdin.read_line() == "dir"
    assert stdin.read_line() == "cd x"
    assert stdin.read_line() is None
    assert not stdin.has_next()


def test_standard_input_chars():
    stdin = StandardInput(ConsoleKernel("k"))
    assert stdin.read() == "k"
    assert stdin.read() is None
    assert not stdin.has_next()


def test_standard_output_goes_to_monitor():
    kernel = ConsoleKernel()
    stdout = StandardOutput(kernel)
    stdout.write("c:/>")
    stdout.write_line("done")
    assert kernel.written == ["c:/>", "done\n"]