"""A bounded, blocking character pipe between two processes."""

from __future__ import annotations

import threading
from collections import deque

DEFAULT_BUFFER_SIZE = 64 * 1024


class Pipe:
    """A character queue with a writer end (entry) and a reader end (exit).

    Closing the entry means nobody will read any more: pending and future
    writes are discarded. Closing the exit means nothing more will be
    written: readers drain what is buffered and then see the end.
    """

    def __init__(self, size: int = DEFAULT_BUFFER_SIZE) -> None:
        if size < 1:
            raise ValueError("pipe buffer size must be positive")
        self._size = size
        self._buffer: deque[str] = deque()
        self._entry_closed = False
        self._exit_closed = False
        self._cond = threading.Condition()

    def push_char(self, char: str) -> bool:
        """Append a character, blocking while the buffer is full.

        Returns False when the reading side has gone away.
        """
        with self._cond:
            self._cond.wait_for(
                lambda: len(self._buffer) < self._size or self._entry_closed
            )
            if self._entry_closed:
                self._buffer.clear()
                return False
            self._buffer.append(char)
            self._cond.notify_all()
            return True

    def pop_char(self) -> str | None:
        """Take the next character, blocking while none is available.

        Returns None once the pipe is exhausted.
        """
        with self._cond:
            self._cond.wait_for(lambda: self._buffer or self._exit_closed)
            if not self._buffer:
                self._exit_closed = True
                value = None
            else:
                value = self._buffer.popleft()
                if not self._buffer and self._entry_closed:
                    self._exit_closed = True
            self._cond.notify_all()
            return value

    def close_entry(self) -> None:
        """Mark that no one will read from this pipe any more."""
        with self._cond:
            self._entry_closed = True
            self._cond.notify_all()

    def close_exit(self) -> None:
        """Mark that nothing more will be written to this pipe."""
        with self._cond:
            self._exit_closed = True
            self._cond.notify_all()