"""Store protocol implemented by every backend and policy layer."""

from typing import Protocol, runtime_checkable

from stackfs.protocols.file import File, FileInfo


@runtime_checkable
class Store(Protocol):
    """Protocol for put-a-file, get-a-file-back storage.

    Every method raises stackfs.exceptions.PathError on failure, with op set
    to the method name and path set to the name it was called with.
    """

    def open(self, name: str) -> File:
        """Open the named file for reading."""
        ...

    def sub(self, dir: str) -> "Store":
        """Return a store scoped to the child directory, creating it if needed."""
        ...

    def stat(self, name: str) -> FileInfo:
        """Return the FileInfo for the named file."""
        ...

    def put(self, file: File) -> File:
        """Store the file under the name from its own stat().

        Returns the file as stored, positioned at the start. The file passed
        in should be treated as consumed.
        """
        ...

    def remove(self, name: str) -> None:
        """Remove the named file."""
        ...
