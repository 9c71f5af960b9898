"""Input and output endpoints that a process reads from and writes to."""

from __future__ import annotations

import abc
from collections import deque
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from kivos.filesystem import File

_T = TypeVar("_T")


def _collect_line(read_char: Callable[[], str | None]) -> tuple[str, bool]:
    """Read characters up to a newline.

    Returns the line without its newline and whether a newline ended it.
    """
    chars: list[str] = []
    while (char := read_char()) is not None:
        if char == "\n":
            return "".join(chars), True
        chars.append(char)
    return "".join(chars), False


class InputStream(abc.ABC):
    """Where a process takes its input from."""

    def __init__(self, kernel: Any) -> None:
        self.kernel = kernel
        self.closed = False

    def close(self) -> None:
        self.closed = True

    def has_next(self) -> bool:
        """True until the end of the input has been seen or the stream closed."""
        return not self.closed

    def _closing(self, value: _T | None) -> _T | None:
        """Close the stream when a read came back empty, and pass the value on."""
        if value is None:
            self.close()
        return value

    @abc.abstractmethod
    def read(self) -> str | None:
        """Return the next character, or None (and close) at the end."""

    @abc.abstractmethod
    def read_line(self) -> str | None:
        """Return the next line without its newline.

        At the end of input the stream closes; an unterminated remainder is
        still returned, and None is returned when nothing was left.
        """

    def __iter__(self) -> Iterator[str]:
        while self.has_next():
            line = self.read_line()
            if line is not None:
                yield line

    def __enter__(self) -> InputStream:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class _CharInput(InputStream):
    """An input that yields one character at a time."""

    @abc.abstractmethod
    def _next_char(self) -> str | None:
        """Return the next character, or None at the end."""

    def read(self) -> str | None:
        return self._closing(self._next_char())

    def read_line(self) -> str | None:
        line, complete = _collect_line(self._next_char)
        if complete:
            return line
        self.close()
        return line or None


class OutputStream(abc.ABC):
    """Where a process sends its output."""

    def __init__(self, kernel: Any) -> None:
        self.kernel = kernel
        self.closed = False

    def close(self) -> None:
        self.closed = True

    @abc.abstractmethod
    def write(self, text: str) -> None:
        """Write text as it is."""

    def write_line(self, text: str) -> None:
        """Write text followed by a newline."""
        self.write(text + "\n")

    def __enter__(self) -> OutputStream:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class StandardInput(InputStream):
    """The keyboard, read through the kernel."""

    def read(self) -> str | None:
        return self._closing(self.kernel.read_keyboard_char())

    def read_line(self) -> str | None:
        return self._closing(self.kernel.read_keyboard_line())


class StandardOutput(OutputStream):
    """The monitor, written through the kernel."""

    def write(self, text: str) -> None:
        self.kernel.write_monitor(text)

    def write_line(self, text: str) -> None:
        self.kernel.write_line_monitor(text)


class MemoryInput(_CharInput):
    """Text held in memory, read as if it came from a file."""

    def __init__(self, text: str = "", kernel: Any = None) -> None:
        super().__init__(kernel)
        self._chars = deque(text)

    def _next_char(self) -> str | None:
        return self._chars.popleft() if self._chars else None


class MemoryOutput(OutputStream):
    """Collects everything written to it in memory."""

    def __init__(self, kernel: Any = None) -> None:
        super().__init__(kernel)
        self.text = ""

    def write(self, text: str) -> None:
        self.text += text

    @property
    def lines(self) -> list[str]:
        return self.text.splitlines()


class FileInput(_CharInput):
    """Reads a file of the simulated file system from its start."""

    def __init__(self, file: File, kernel: Any) -> None:
        super().__init__(kernel)
        self.file = file
        file.open_reader(self)

    def close(self) -> None:
        self.file.close_reader(self)
        super().close()

    def _next_char(self) -> str | None:
        return self.file.read_char(self)


class FileOutput(OutputStream):
    """Writes a file of the simulated file system, replacing its content."""

    def __init__(self, file: File, kernel: Any) -> None:
        super().__init__(kernel)
        self.file = file
        file.open_writer(self)
        file.remove_content(self)

    def write(self, text: str) -> None:
        self.file.write(self, text)

    def close(self) -> None:
        self.file.close_writer(self)
        super().close()


class PipeInput(_CharInput):
    """The reading end of a kernel pipe."""

    def __init__(self, pipe_id: int, kernel: Any) -> None:
        super().__init__(kernel)
        self.pipe_id = pipe_id

    def close(self) -> None:
        if not self.closed:
            self.kernel.close_pipe_input(self.pipe_id)
        super().close()

    def _next_char(self) -> str | None:
        return self.kernel.read_pipe_char(self.pipe_id)


class PipeOutput(OutputStream):
    """The writing end of a kernel pipe."""

    def __init__(self, pipe_id: int, kernel: Any) -> None:
        super().__init__(kernel)
        self.pipe_id = pipe_id

    def write(self, text: str) -> None:
        for char in text:
            self.kernel.write_pipe_char(self.pipe_id, char)

    def close(self) -> None:
        self.kernel.close_pipe_output(self.pipe_id)
        super().close()