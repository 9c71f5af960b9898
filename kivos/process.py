"""The base of every program the simulated system can run."""

from __future__ import annotations

import abc
import threading
from typing import Any

from kivos.utils import KivosError

SHELLS_PID = 1
ERROR_INVALID_PARAMETERS = -10
ERROR_NOT_SHELL = -1
NO_HELP_CONTENT = "This program or command has no help content."


def split_parameters(text: str) -> list[str]:
    """Split a parameter string such as ``'a' 'b c'`` into its values.

    Tokens are separated by whitespace outside single quotes; the first and
    last character of each token (its quotes) are dropped.
    """
    tokens: list[str] = []
    current: list[str] = []
    quoted = False
    for char in text:
        if char == "'":
            quoted = not quoted
            current.append(char)
        elif char.isspace() and not quoted:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)
    if current:
        tokens.append("".join(current))
    return [token[1:-1] for token in tokens]


class Process(abc.ABC):
    """A program with its streams, parameters and working folder."""

    def __init__(self, pid: int, parent_pid: int, kernel: Any) -> None:
        self.pid = pid
        self.parent_pid = parent_pid
        self.kernel = kernel
        self.input: Any = None
        self.output: Any = None
        self.error_output: Any = None
        self.parameters: list[str] = []
        self.path_file: Any = None
        self.pipe_id_last = -1
        self.echo_status = True
        self.exit_code: int | None = None
        self._thread: threading.Thread | None = None

    def init(self, input: Any, output: Any, error_output: Any, parameters: str) -> None:
        """Attach the streams and parse the quoted parameter string."""
        self.input = input
        self.output = output
        self.error_output = error_output
        self.parameters = split_parameters(parameters)
        self.echo_status = True

    def close(self) -> None:
        for stream in (self.input, self.error_output, self.output):
            if stream is not None:
                stream.close()

    def help_content(self) -> str:
        return NO_HELP_CONTENT

    @abc.abstractmethod
    def has_valid_parameters(self) -> bool:
        """Check the parameters and remember what the run should do."""

    @abc.abstractmethod
    def run_process(self) -> int:
        """Do the program's work and return its exit code."""

    def run(self) -> None:
        """Start the program in its own thread."""
        if not self.has_valid_parameters():
            raise KivosError(ERROR_INVALID_PARAMETERS, "invalid parameters")
        self._thread = threading.Thread(
            target=self._main, name=f"process-{self.pid}", daemon=True
        )
        self._thread.start()

    def _main(self) -> None:
        try:
            self.exit_code = self.run_process()
        except KivosError as error:
            self.exit_code = error.code
            self.close()

    def write_help(self) -> None:
        self.output.write_line(self.help_content())

    def join(self) -> int | None:
        """Wait for the program's thread and return its exit code."""
        if self._thread is not None:
            self._thread.join()
        return self.exit_code

    def get_echo_status(self) -> bool:
        """The echo setting; only the shell has one."""
        if self.pid != SHELLS_PID:
            raise KivosError(ERROR_NOT_SHELL, "only the shell has an echo setting")
        return self.echo_status

    def set_echo_status(self, status: bool) -> None:
        if self.pid != SHELLS_PID:
            raise KivosError(ERROR_NOT_SHELL, "only the shell has an echo setting")
        self.echo_status = status