"""Protocol interfaces for files and stores."""

from stackfs.protocols.file import File, FileInfo
from stackfs.protocols.store import Store

__all__ = [
    "File",
    "FileInfo",
    "Store",
]
