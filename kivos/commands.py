"""Small utility programs: echo, freq, rand, rd, type and wc."""

from __future__ import annotations

import enum
import random
import re
import threading
from collections import Counter

from kivos.filesystem import ERROR_NOT_DELETABLE, FILE_SEPARATOR, File
from kivos.process import Process
from kivos.streams import FileInput, InputStream
from kivos.utils import KivosError

ERROR_ECHO = -1
ERROR_FILE_IS_FOLDER = -10
_MAX_BYTE = 255


def _open_file_input(process: Process, path: str) -> FileInput:
    """Open a file of the simulated file system for reading."""
    file = process.kernel.get_file(path, process.path_file)
    if file.is_folder():
        raise KivosError(ERROR_FILE_IS_FOLDER, f"{path} is a folder")
    return FileInput(file, process.kernel)


class Echo(Process):
    """echo: print a message, or show or change the shell's echo setting."""

    _show_help = False
    _show_status = False
    _new_status: bool | None = None

    def help_content(self) -> str:
        return (
            "Displays messages, or turns command-echoing on or off.\n\n"
            "ECHO [ON | OFF]\nECHO[message]\n\n"
            "Type ECHO without parameters to display the current echo setting."
        )

    def has_valid_parameters(self) -> bool:
        self._show_help = False
        self._show_status = False
        self._new_status = None
        params = self.parameters
        if not params:
            self._show_status = True
            return True
        if len(params) != 1:
            return False
        word = params[0]
        if word == "--help":
            self._show_help = True
        elif word == "OFF":
            self._new_status = False
        elif word == "ON":
            self._new_status = True
        return True

    def run_process(self) -> int:
        try:
            if self._show_help:
                self.output.write_line(self.help_content())
            elif self._show_status:
                try:
                    status = self.kernel.check_echo_status(self.parent_pid)
                except KivosError:
                    return ERROR_ECHO
                self.output.write_line("ECHO is " + ("ON" if status else "OFF"))
            elif self._new_status is not None:
                try:
                    changed = self.kernel.set_echo_status(self.parent_pid, self._new_status)
                except KivosError:
                    return ERROR_ECHO
                if changed is False:
                    return ERROR_ECHO
            else:
                self.output.write_line(self.parameters[0])
            return 0
        finally:
            self.close()


class Freq(Process):
    """freq: a histogram of the bytes read from the input."""

    _show_help = False

    def help_content(self) -> str:
        return "Displays histogram of bytes from given input which have count more then zero"

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
            counts: Counter[int] = Counter()
            for line in self.input:
                counts.update(line.encode())
            for byte in sorted(counts):
                if byte < _MAX_BYTE:
                    self.output.write_line(f"0x{byte:x} : {counts[byte]}")
            return 0
        finally:
            self.close()


class Rand(Process):
    """rand: print random numbers in [-1, 1] until the input ends."""

    interval = 1.0
    seed = 5489
    _show_help = False

    def help_content(self) -> str:
        return "Program is printing random float numbers to STDOUT until CTRL+Z is given as input"

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
            stop = threading.Event()
            worker = threading.Thread(target=self._generate, args=(stop,), daemon=True)
            worker.start()
            while self.input.has_next():
                self.input.read()
            stop.set()
            worker.join()
            return 0
        finally:
            self.close()

    def _generate(self, stop: threading.Event) -> None:
        generator = random.Random(self.seed)
        while not stop.is_set():
            self.output.write_line(f"{generator.uniform(-1.0, 1.0):.6g}")
            stop.wait(self.interval)


class Remove(Process):
    """rd: remove a file or folder, with /S a whole folder tree."""

    _show_help = False
    _force = False
    _path_index = 0

    def help_content(self) -> str:
        return (
            "Syntax\n"
            "RD pathname\n"
            "RD /S pathname\n\n"
            "Key\n"
            "   /S  : Delete all files and subfolders\n"
            "         in addition to the folder itself.\n"
            "         Use this to remove an entire folder tree."
        )

    def has_valid_parameters(self) -> bool:
        self._show_help = False
        self._force = False
        self._path_index = 0
        params = self.parameters
        if not params or params == ["--help"]:
            self._show_help = True
            return True
        if len(params) == 1:
            return True
        if len(params) == 2 and params[0] == "/S":
            self._force = True
            self._path_index = 1
            return True
        return False

    def run_process(self) -> int:
        try:
            if self._show_help:
                self.output.write_line(self.help_content())
                return 0
            try:
                target = self.kernel.get_file(
                    self.parameters[self._path_index], self.path_file
                )
            except KivosError as error:
                return error.code
            return 0 if self._remove(target) else ERROR_NOT_DELETABLE
        finally:
            self.close()

    def _remove(self, file: File) -> bool:
        if self.kernel.check_process_path(self.parent_pid, file):
            return False
        if not file.is_deletable() and file.is_folder() and self._force:
            if not all(self._remove(child) for child in file.children()):
                return False
        if not file.is_deletable():
            return False
        try:
            self.kernel.remove_file(file)
        except KivosError:
            return False
        return True


class Type(Process):
    """type: print the content of files, given by name or by a '*' pattern."""

    _show_help = False
    _from_file = False

    def help_content(self) -> str:
        return (
            "Display the contents of one or more text files.\n\n"
            "\t\tSyntax\n\t\tTYPE[drive:]pathname(s)"
        )

    def has_valid_parameters(self) -> bool:
        params = self.parameters
        self._show_help = not params or params == ["--help"]
        self._from_file = not self._show_help
        return True

    def run_process(self) -> int:
        try:
            if self._show_help:
                self.output.write_line(self.help_content())
                return 0
            if not self._from_file:
                self._print(self.input)
                return 0
            code = 0
            for path in self.parameters:
                code = self._type_pattern(path) if "*" in path else self._type_file(path)
            return code
        finally:
            self.close()

    def _print(self, stream: InputStream) -> None:
        for line in stream:
            self.output.write_line(line)

    def _type_file(self, path: str) -> int:
        basename = self.kernel.split_path(path, "basename")
        try:
            stream = _open_file_input(self, path)
        except KivosError as error:
            return error.code
        self.output.write_line("\n" + basename + "\n")
        with stream:
            self._print(stream)
        return 0

    def _type_pattern(self, path: str) -> int:
        directory, separator, name_pattern = path.rpartition(FILE_SEPARATOR)
        if not separator:
            directory = "."
        regex = re.compile(".*".join(re.escape(part) for part in name_pattern.split("*")))
        try:
            folder = self.kernel.get_file(directory, self.path_file)
        except KivosError as error:
            return error.code
        for child in folder.children():
            if regex.fullmatch(child.name):
                code = self._type_file(directory + FILE_SEPARATOR + child.name)
                if code != 0:
                    return code
        return 0


class _Count(enum.Enum):
    BYTES = "Bytes"
    WORDS = "Words"
    LINES = "Lines"


class WordCount(Process):
    """wc: count bytes, words or lines of the input or of a file."""

    _show_help = False
    _from_file = False
    _mode: _Count | None = None

    def help_content(self) -> str:
        return (
            "Syntax:\n"
            "wc [options]...[file]...\n\n"
            "Options:\n"
            "- c\tPrint only the byte counts.\n\n"
            "- w\tPrint only the word counts.\n\n"
            "- l\tPrint only the newline counts."
        )

    def has_valid_parameters(self) -> bool:
        self._show_help = False
        self._from_file = False
        self._mode = None
        params = self.parameters
        if not params or params == ["--help"]:
            self._show_help = True
            return True
        first = params[0]
        if first == "-c" and len(params) < 3:
            self._mode = _Count.BYTES
        elif first == "-w":
            self._mode = _Count.WORDS
        elif first == "-l":
            self._mode = _Count.LINES
        else:
            return False
        self._from_file = len(params) == 2
        return True

    def run_process(self) -> int:
        try:
            if self._show_help:
                self.output.write_line(self.help_content())
                return 0
            if self._from_file:
                try:
                    file = self.kernel.get_file(self.parameters[1], self.path_file)
                except KivosError as error:
                    return error.code
                with FileInput(file, self.kernel) as stream:
                    self._count(stream)
            else:
                self._count(self.input)
            return 0
        finally:
            self.close()

    def _count(self, stream: InputStream) -> None:
        count = 0
        for line in stream:
            if self._mode is _Count.BYTES:
                count += len(line.encode()) + 1
            elif self._mode is _Count.WORDS:
                count += len(line.split())
            else:
                count += 1
        self.output.write_line(f"{self._mode.value} count is :{count}")