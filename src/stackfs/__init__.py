"""stackfs - Composable put-a-file, get-a-file-back storage."""

from stackfs.backends import LocalStore, NullStore, SFTPStore
from stackfs.config import StoreConfig
from stackfs.exceptions import (
    ErrorKind,
    FileClosedError,
    PathError,
    SizeError,
    StackFSError,
    error_kind,
)
from stackfs.factory import build_store
from stackfs.files import LocalFile, MemoryFile, rename
from stackfs.materialize import (
    DEFAULT_MAX_MEMORY,
    cleanup,
    is_temp_path,
    read_file,
    read_file_max,
)
from stackfs.observability import LogLevel, configure_logging, get_logger
from stackfs.policies import (
    HashStore,
    LimitStore,
    ReadOnlyStore,
    UniqueStore,
    WriteOnlyStore,
)
from stackfs.protocols import File, FileInfo, Store

__version__ = "0.1.0"
__all__ = [
    # Core
    "File",
    "FileInfo",
    "Store",
    "StoreConfig",
    "build_store",
    # Files
    "DEFAULT_MAX_MEMORY",
    "LocalFile",
    "MemoryFile",
    "cleanup",
    "is_temp_path",
    "read_file",
    "read_file_max",
    "rename",
    # Backends
    "LocalStore",
    "NullStore",
    "SFTPStore",
    # Policies
    "HashStore",
    "LimitStore",
    "ReadOnlyStore",
    "UniqueStore",
    "WriteOnlyStore",
    # Errors
    "ErrorKind",
    "FileClosedError",
    "PathError",
    "SizeError",
    "StackFSError",
    "error_kind",
    # Observability
    "LogLevel",
    "configure_logging",
    "get_logger",
]
