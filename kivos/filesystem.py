"""The in-memory file system: drives, folders and files."""

from __future__ import annotations

import enum
import threading
import time

from kivos.utils import KivosError, split

FILE_SEPARATOR = "/"
CURRENT_FOLDER = "."
PARENT_FOLDER = ".."
DRIVE_SUFFIX = ":"
DOT_CHAR = "."
INVALID_CHARACTERS = frozenset('/\\:*?"<>;,| ')

ERROR_EMPTY_DRIVE_NAME = 1
ERROR_NOT_A_WRITER = 1
ERROR_NO_PARENT_FOLDER = 2
ERROR_NOT_A_FOLDER = 3
ERROR_ALREADY_EXISTS = 4
ERROR_DRIVE_EXISTS = 5
ERROR_DRIVE_NOT_FOUND = 8
ERROR_CHILD_NOT_FOUND = 11
ERROR_NOT_DELETABLE = 21
ERROR_FILE_NOT_FOUND = 27
ERROR_DRIVE_REMOVAL = 29
ERROR_INVALID_FILE_NAME = 30
ERROR_DRIVE_NOT_FOLDER = 31


class FileAttribute(enum.Enum):
    FOLDER = "folder"
    FILE = "file"


class File:
    """A node of the file system: a drive, a folder or a text file."""

    def __init__(self, name: str, attribute: FileAttribute, parent: File | None) -> None:
        self.name = name
        self.attribute = attribute
        self.parent = parent
        self.creation_time = time.time()
        self._content = ""
        self._children: list[File] = []
        self._readers: dict[object, int] = {}
        self._writers: list[object] = []
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"File({self.absolute_path()!r})"

    def open_reader(self, reader: object) -> None:
        """Register a reader positioned at the start of the content."""
        with self._lock:
            self._readers[reader] = 0

    def open_writer(self, writer: object) -> None:
        with self._lock:
            if writer not in self._writers:
                self._writers.append(writer)

    def close_reader(self, reader: object) -> None:
        with self._lock:
            self._readers.pop(reader, None)

    def close_writer(self, writer: object) -> None:
        with self._lock:
            self._writers = [w for w in self._writers if w is not writer]

    def write(self, writer: object, text: str) -> None:
        """Append text to the content."""
        with self._lock:
            self._content += text

    def read_char(self, reader: object) -> str | None:
        """Return the reader's next character, or None at the end or if unknown."""
        with self._lock:
            offset = self._readers.get(reader)
            if offset is None or offset >= len(self._content):
                return None
            self._readers[reader] = offset + 1
            return self._content[offset]

    def remove_content(self, writer: object) -> None:
        """Clear the content and rewind every reader; only a registered writer may."""
        with self._lock:
            if writer not in self._writers:
                raise KivosError(ERROR_NOT_A_WRITER, "writer is not open on this file")
            self._content = ""
            for reader in self._readers:
                self._readers[reader] = 0

    def is_root(self) -> bool:
        return self.parent is None

    def is_folder(self) -> bool:
        return self.attribute is FileAttribute.FOLDER

    def absolute_path(self) -> str:
        if self.parent is None:
            return self.name + DRIVE_SUFFIX + FILE_SEPARATOR
        suffix = FILE_SEPARATOR if self.is_folder() else ""
        return self.parent.absolute_path() + self.name + suffix

    def add_child(self, child: File) -> None:
        if not self.is_folder():
            raise KivosError(ERROR_NOT_A_FOLDER, f"{self.name} is not a folder")
        with self._lock:
            if any(existing.name == child.name for existing in self._children):
                raise KivosError(ERROR_ALREADY_EXISTS, f"{child.name} already exists")
            self._children.append(child)

    def remove_child(self, child: File) -> None:
        with self._lock:
            for existing in self._children:
                if existing.name == child.name:
                    self._children.remove(existing)
                    return
        raise KivosError(ERROR_CHILD_NOT_FOUND, f"{child.name} not found")

    def children(self) -> list[File]:
        """A snapshot of the children, in creation order."""
        with self._lock:
            return list(self._children)

    def is_processed(self) -> bool:
        return bool(self._readers) or bool(self._writers)

    def size(self) -> int:
        return len(self._content)

    def is_deletable(self) -> bool:
        return not self._children and not self.is_processed()


class FileSystem:
    """The set of drives and the operations that resolve and change paths."""

    def __init__(self) -> None:
        self.drives: list[File] = []

    def create_file_at(self, name: str, attribute: FileAttribute, caller_path: str) -> File:
        """Create ``name`` inside the folder at ``caller_path``; an empty path makes a drive."""
        parent = self.get_file(caller_path, None) if caller_path else None
        return self.create_file(name, attribute, parent)

    def create_file(self, name: str, attribute: FileAttribute, parent: File | None) -> File:
        """Create a file or folder under ``parent``, or a drive when it is None."""
        if parent is None:
            if attribute is not FileAttribute.FOLDER:
                raise KivosError(ERROR_DRIVE_NOT_FOLDER, "a drive must be a folder")
            if any(drive.name == name for drive in self.drives):
                raise KivosError(ERROR_DRIVE_EXISTS, f"drive {name} already exists")
            drive = File(name, attribute, None)
            self.drives.append(drive)
            return drive
        if not self.validate_file_name(name):
            raise KivosError(ERROR_INVALID_FILE_NAME, f"invalid file name {name!r}")
        created = File(name, attribute, parent)
        parent.add_child(created)
        return created

    def _find_drive(self, name: str) -> File:
        for drive in self.drives:
            if drive.name == name:
                return drive
        raise KivosError(ERROR_DRIVE_NOT_FOUND, f"drive {name} not found")

    def get_file(self, path: str, source: File | None) -> File:
        """Resolve ``path``, absolute (``c:/...``) or relative to ``source``."""
        elements = split(path, FILE_SEPARATOR)
        if not elements:
            raise KivosError(ERROR_FILE_NOT_FOUND, "empty path")
        current = source
        first = elements[0]
        if first.endswith(DRIVE_SUFFIX):
            drive_name = first[:-1]
            if not drive_name:
                raise KivosError(ERROR_EMPTY_DRIVE_NAME, "empty drive name")
            current = self._find_drive(drive_name)
            elements = elements[1:]
        elif current is None:
            raise KivosError(ERROR_FILE_NOT_FOUND, "relative path without a folder")

        last = len(elements) - 1
        for position, element in enumerate(elements):
            if element == CURRENT_FOLDER:
                continue
            if element == PARENT_FOLDER:
                if current.is_root():
                    raise KivosError(ERROR_NO_PARENT_FOLDER, "no parent folder above drive")
                current = current.parent
                continue
            found = next((c for c in current.children() if c.name == element), None)
            if found is None:
                raise KivosError(ERROR_FILE_NOT_FOUND, f"{element} not found")
            if not found.is_folder() and position != last:
                raise KivosError(ERROR_NOT_A_FOLDER, f"{element} is not a folder")
            current = found
        return current

    def remove_file(self, target: str | File) -> None:
        """Remove a file or an empty, unused folder, given by path or object."""
        file = self.get_file(target, None) if isinstance(target, str) else target
        if not file.is_deletable():
            raise KivosError(ERROR_NOT_DELETABLE, f"{file.name} cannot be deleted")
        if file.parent is None:
            raise KivosError(ERROR_DRIVE_REMOVAL, "drives cannot be deleted")
        file.parent.remove_child(file)

    def validate_file_name(self, name: str) -> bool:
        """Names are non-empty, hold no '..', do not end in '.', and avoid reserved characters."""
        if not name or name.endswith(DOT_CHAR) or DOT_CHAR * 2 in name:
            return False
        return not any(ch in INVALID_CHARACTERS for ch in name)