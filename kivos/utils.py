"""Shared helpers: the error type and path splitting."""

from __future__ import annotations

ERROR_UNKNOWN_COMMAND = -100
ERROR_INVALID_FILE_ATTRIBUTES = -1
ERROR_INVALID_HANDLE_VALUE = -4


class KivosError(Exception):
    """An operation of the simulated system failed with a numeric code."""

    def __init__(self, code: int, message: str = "") -> None:
        super().__init__(message or f"error {code}")
        self.code = code
        self.message = message

    def __str__(self) -> str:
        if self.message:
            return f"{self.message} (code {self.code})"
        return f"error {self.code}"


def split(text: str, separator: str) -> list[str]:
    """Split ``text`` on ``separator``, dropping empty pieces."""
    return [piece for piece in text.split(separator) if piece]