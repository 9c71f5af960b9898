import pytest

from kivos.filesystem import FileAttribute, FileSystem
from kivos.sort import FirstLineFromFile, Sort, line_key
from kivos.streams import FileOutput, MemoryInput, MemoryOutput
from kivos.utils import KivosError


class FakeKernel(FileSystem):
    def __init__(self, low_memory=False):
        super().__init__()
        self.system = self.create_file("_system", FileAttribute.FOLDER, None)
        self.drive = self.create_file("c", FileAttribute.FOLDER, None)
        self.low_memory = low_memory

    def query_low_memory(self):
        return self.low_memory


def make_sort(params, lines, kernel):
    proc = Sort(2, 1, kernel)
    out = MemoryOutput()
    text = "".join(line + "\n" for line in lines)
    proc.init(MemoryInput(text), out, MemoryOutput(), " ".join(f"'{p}'" for p in params))
    proc.path_file = kernel.drive
    return proc, out


def run_sort(lines, kernel=None, params=()):
    proc, out = make_sort(list(params), lines, kernel or FakeKernel())
    assert proc.has_valid_parameters()
    return proc.run_process(), out.text


def write_file(kernel, name, text):
    file = kernel.create_file(name, FileAttribute.FILE, kernel.drive)
    with FileOutput(file, kernel) as out:
        out.write(text)
    return file


def test_line_key_orders_by_length_then_text():
    assert line_key("a") < line_key("ab") < line_key("bb")
    assert sorted(["bb", "a", "ab"], key=line_key) == ["a", "ab", "bb"]


def test_line_key_equal_for_equal_lines():
    assert line_key("abc") == line_key("abc")
    assert line_key("b") > line_key("a")


@pytest.mark.parametrize(
    "params, valid", [([], True), (["--help"], True), (["x"], False)]
)
def test_sort_parameters(params, valid):
    proc, _ = make_sort(params, [], FakeKernel())
    assert proc.has_valid_parameters() is valid


def test_sort_writes_longest_first():
    code, text = run_sort(["ccc", "a", "bb", "ab"])
    assert code == 0
    assert text.splitlines() == ["ccc", "bb", "ab", "a"]


def test_sort_keeps_every_line_and_orders_keys():
    lines = ["delta", "a", "", "zz", "a", "beta", "gamma"]
    _, text = run_sort(lines)
    result = text.split("\n")[:-1]
    assert sorted(result) == sorted(lines)
    keys = [line_key(line) for line in result]
    assert all(a >= b for a, b in zip(keys, keys[1:]))


@pytest.mark.parametrize("low_memory", [False, True])
def test_sort_removes_temporary_files(low_memory):
    kernel = FakeKernel(low_memory=low_memory)
    assert run_sort(["x", "yy"], kernel)[0] == 0
    assert kernel.system.children() == []


def test_sort_with_many_runs_matches_single_run():
    lines = ["pear", "fig", "apple", "kiwi", "banana", "fig"]
    _, single = run_sort(lines)
    code, many = run_sort(lines, FakeKernel(low_memory=True))
    assert code == 0
    assert many == single


@pytest.mark.parametrize(
    "params, expected", [((), ""), (("--help",), "Sorts input and writes it to output.\n")]
)
def test_sort_without_lines(params, expected):
    code, text = run_sort([], params=params)
    assert code == 0
    assert text == expected


def test_first_line_from_file_walks_lines():
    kernel = FakeKernel()
    file = write_file(kernel, "f.txt", "x\ny\n")
    run = FirstLineFromFile(0, "c:/f.txt", kernel, 1, None)
    assert run.line == "x"
    assert run.next_line() == "x"
    assert run.has_next() is True
    assert run.next_line() == "y"
    assert run.has_next() is False
    assert file.is_processed() is False


def test_first_line_from_file_relative_to_source():
    kernel = FakeKernel()
    write_file(kernel, "g.txt", "only\n")
    run = FirstLineFromFile(3, "g.txt", kernel, 1, kernel.drive)
    assert run.index == 3
    assert run.next_line() == "only"
    assert run.has_next() is False


def test_first_line_from_file_rejects_folder():
    kernel = FakeKernel()
    kernel.create_file("d", FileAttribute.FOLDER, kernel.drive)
    with pytest.raises(KivosError) as info:
        FirstLineFromFile(0, "c:/d", kernel, 1, None)
    assert info.value.code == -10