"""Store that keeps nothing."""

from typing import Any

from stackfs.files import MemoryFile
from stackfs.protocols.file import File, FileInfo


class NullStore:
    """Store that discards everything put in it and fabricates empty files.

    Suitable for testing policy layers without real I/O.
    """

    def __init__(self, **kwargs: Any) -> None:
        """Initialize null store.

        Args:
            **kwargs: Ignored (for compatibility with other backends)
        """
        pass

    def open(self, name: str) -> File:
        return MemoryFile(name)

    def sub(self, dir: str) -> "NullStore":
        return self

    def stat(self, name: str) -> FileInfo:
        return MemoryFile(name).stat()

    def put(self, file: File) -> File:
        info = file.stat()
        return MemoryFile(info.name, mod_time=info.mod_time)

    def remove(self, name: str) -> None:
        pass

    def __repr__(self) -> str:
        return "NullStore()"
