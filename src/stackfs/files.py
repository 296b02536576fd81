"""Concrete File implementations and the rename helper."""

import io
import os
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime, timezone
from typing import IO, Any

from stackfs.exceptions import FileClosedError, PathError
from stackfs.protocols.file import File, FileInfo

# Mode reported by files that only exist in memory
MEMORY_FILE_MODE = 0o400


class BaseFile(ABC):
    """Context manager support shared by the concrete files."""

    @abstractmethod
    def close(self) -> None:
        """Release the underlying data or handle."""
        ...

    def __enter__(self) -> Any:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class MemoryFile(BaseFile):
    """A file held entirely in memory.

    Used for small materialized uploads and by the null backend.
    """

    def __init__(
        self,
        name: str,
        data: bytes = b"",
        mod_time: datetime | None = None,
    ) -> None:
        """Initialize memory file.

        Args:
            name: Name the file reports
            data: File contents
            mod_time: Modification time, defaults to now
        """
        self._name = name
        self._data = bytes(data)
        self._offset = 0
        self._closed = False
        self.mod_time = mod_time or datetime.now(timezone.utc)

    @property
    def name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self, op: str) -> None:
        if self._closed:
            raise PathError(op, self._name, FileClosedError())

    def read(self, size: int | None = -1) -> bytes:
        self._check_open("read")

        if self._offset >= len(self._data):
            return b""

        if size is None or size < 0:
            end = len(self._data)
        else:
            end = self._offset + size

        chunk = self._data[self._offset:end]
        self._offset += len(chunk)
        return chunk

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        self._check_open("seek")

        if whence == io.SEEK_SET:
            position = offset
        elif whence == io.SEEK_CUR:
            position = self._offset + offset
        elif whence == io.SEEK_END:
            position = len(self._data) + offset
        else:
            raise PathError("seek", self._name, ValueError(f"invalid whence {whence}"))

        if position < 0:
            raise PathError("seek", self._name, ValueError("negative seek position"))

        self._offset = position
        return position

    def tell(self) -> int:
        return self._offset

    def stat(self) -> FileInfo:
        return FileInfo(
            name=self._name,
            size=len(self._data),
            mode=MEMORY_FILE_MODE,
            mod_time=self.mod_time,
        )

    def close(self) -> None:
        self._closed = True

    def __repr__(self) -> str:
        return f"MemoryFile(name={self._name!r}, size={len(self._data)})"


class LocalFile(BaseFile):
    """An open handle on a file in the local filesystem."""

    def __init__(self, handle: IO[bytes], path: str) -> None:
        """Initialize local file.

        Args:
            handle: Binary file object opened on path
            path: Full path of the file on disk
        """
        self.handle = handle
        self.path = path

    @classmethod
    def open(cls, path: str, mode: str = "rb") -> "LocalFile":
        """Open path with the given binary mode."""
        return cls(open(path, mode), path)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    @property
    def closed(self) -> bool:
        return self.handle.closed

    def read(self, size: int | None = -1) -> bytes:
        return self.handle.read(-1 if size is None else size)

    def write(self, data: bytes) -> int:
        return self.handle.write(data)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return self.handle.seek(offset, whence)

    def tell(self) -> int:
        return self.handle.tell()

    def stat(self) -> FileInfo:
        return FileInfo.from_stat_result(self.name, os.fstat(self.handle.fileno()))

    def close(self) -> None:
        self.handle.close()

    def __repr__(self) -> str:
        return f"LocalFile(path={self.path!r})"


class RenamedFile(BaseFile):
    """A File that reports a different name from the one it wraps.

    Content and read position are shared with the wrapped file.
    """

    def __init__(self, file: File, name: str) -> None:
        self.file = file
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def read(self, size: int | None = -1) -> bytes:
        return self.file.read(-1 if size is None else size)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return self.file.seek(offset, whence)

    def stat(self) -> FileInfo:
        return replace(self.file.stat(), name=self._name)

    def close(self) -> None:
        self.file.close()

    def __repr__(self) -> str:
        return f"RenamedFile(name={self._name!r}, file={self.file!r})"


def rename(file: File, name: str) -> File:
    """Return a File reporting the given name without copying any bytes.

    Useful when something that already implements File has to be stored
    under another name.
    """
    if isinstance(file, RenamedFile):
        file = file.file
    return RenamedFile(file, name)


def unwrap(file: File) -> File:
    """Return the file underneath any renames."""
    while isinstance(file, RenamedFile):
        file = file.file
    return file
