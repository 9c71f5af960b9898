"""sort: order the input lines, spilling runs to temporary files."""

from __future__ import annotations

from typing import Any

from kivos.filesystem import FILE_SEPARATOR, File, FileAttribute
from kivos.process import Process
from kivos.streams import FileInput, FileOutput
from kivos.utils import KivosError

TEMP_DRIVE = "_system"
ERROR_FILE_IS_FOLDER = -10


def line_key(line: str) -> tuple[int, str]:
    """Lines compare by length first, then character by character."""
    return len(line), line


class FirstLineFromFile:
    """A sorted run kept in a file, with its current first line at hand."""

    def __init__(
        self, index: int, path: str, kernel: Any, parent_pid: int, source_file: File | None
    ) -> None:
        self.index = index
        self.path = path
        self.kernel = kernel
        self.parent_pid = parent_pid
        file = kernel.get_file(path, source_file)
        if file.is_folder():
            raise KivosError(ERROR_FILE_IS_FOLDER, f"{path} is a folder")
        self._input = FileInput(file, kernel)
        self.line: str | None = self._input.read_line()

    def next_line(self) -> str | None:
        """Return the current line and move on to the following one."""
        line = self.line
        self.line = self._input.read_line()
        if self.line is None:
            self._input.close()
        return line

    def has_next(self) -> bool:
        return self.line is not None


class Sort(Process):
    """sort: write the input lines longest first, ties in reverse text order."""

    _show_help = False

    def help_content(self) -> str:
        return "Sorts input and writes it to output."

    def has_valid_parameters(self) -> bool:
        params = self.parameters
        if not params:
            self._show_help = False
            return True
        if params == ["--help"]:
            self._show_help = True
            return True
        return False

    def run_process(self) -> int:
        try:
            if self._show_help:
                self.output.write_line(self.help_content())
                return 0
            runs: list[FirstLineFromFile] = []
            lines: list[str] = []
            for line in self.input:
                lines.append(line)
                if self.kernel.query_low_memory():
                    runs.append(self._spill(lines, len(runs)))
                    lines = []
            if lines:
                runs.append(self._spill(lines, len(runs)))
            while runs:
                run = max(runs, key=lambda r: line_key(r.line))
                self.output.write_line(run.next_line())
                if not run.has_next():
                    runs.remove(run)
                    self.kernel.remove_file(run.path)
            return 0
        except KivosError as error:
            return error.code
        finally:
            self.close()

    def _temp_file(self, path: str) -> File:
        try:
            return self.kernel.get_file(path, None)
        except KivosError:
            drive = self.kernel.get_file(TEMP_DRIVE + ":", None)
            name = path.rpartition(FILE_SEPARATOR)[2]
            return self.kernel.create_file(name, FileAttribute.FILE, drive)

    def _spill(self, lines: list[str], index: int) -> FirstLineFromFile:
        """Write ``lines`` as one run, largest first, and open it for merging."""
        lines.sort(key=line_key)
        path = f"{TEMP_DRIVE}:{FILE_SEPARATOR}tempSort_{index + 1}.txt"
        with FileOutput(self._temp_file(path), self.kernel) as out:
            for line in reversed(lines):
                out.write_line(line)
        return FirstLineFromFile(index, path, self.kernel, self.pid, self.path_file)