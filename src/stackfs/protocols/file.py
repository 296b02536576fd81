"""File protocol and file metadata."""

import stat as statmod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class FileInfo:
    """Snapshot of a file's metadata, taken when stat() was called."""

    name: str
    size: int
    mode: int
    mod_time: datetime
    is_dir: bool = False

    @classmethod
    def from_stat_result(cls, name: str, st: Any) -> "FileInfo":
        """Build from an os.stat_result or anything with the same fields.

        paramiko's SFTPAttributes qualifies, except that any field may be None.
        """
        mode = st.st_mode or 0
        return cls(
            name=name,
            size=st.st_size or 0,
            mode=statmod.S_IMODE(mode),
            mod_time=datetime.fromtimestamp(st.st_mtime or 0, tz=timezone.utc),
            is_dir=statmod.S_ISDIR(mode),
        )


@runtime_checkable
class File(Protocol):
    """A single stored object that can be read, seeked and stat'ed."""

    @property
    def name(self) -> str:
        """Name the file reports, as in stat().name."""
        ...

    def read(self, size: int = -1) -> bytes:
        """Read up to size bytes, or everything left if size is negative."""
        ...

    def seek(self, offset: int, whence: int = 0) -> int:
        """Move the read position and return the new absolute position."""
        ...

    def stat(self) -> FileInfo:
        """Return the file's metadata."""
        ...

    def close(self) -> None:
        """Release any underlying handle."""
        ...
