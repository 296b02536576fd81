"""Reading arbitrary byte streams into Files.

Small streams are kept in memory. Anything larger than the ceiling spills to
a fresh directory under the system temp root named fs-file-<random>, which
cleanup() knows how to remove again.
"""

import functools
import io
import os
import re
import shutil
import tempfile
from typing import IO, Any

from stackfs.files import LocalFile, MemoryFile, rename, unwrap
from stackfs.observability import get_logger
from stackfs.protocols.file import File

logger = get_logger(__name__)

DEFAULT_MAX_MEMORY = 32 << 20

TEMP_DIR_PREFIX = "fs-file-"

# Basename of the spilled file inside its temp directory
SPILL_FILE_NAME = "data"

# Chunk size used while buffering the in-memory prefix
READ_CHUNK_SIZE = 64 * 1024


@functools.lru_cache(maxsize=None)
def _temp_dir_pattern(temp_root: str) -> re.Pattern[str]:
    return re.compile(re.escape(os.path.join(temp_root, TEMP_DIR_PREFIX)) + r"[^/\\]+$")


def is_temp_path(path: str, temp_root: str | None = None) -> bool:
    """Check whether path is a directory created by read_file_max.

    Args:
        path: Directory path to check
        temp_root: Temp root to compare against, defaults to the system's
    """
    root = temp_root or tempfile.gettempdir()
    return _temp_dir_pattern(root).match(path) is not None


def _read_at_most(reader: Any, n: int) -> bytes:
    """Read until n bytes are buffered or the reader is exhausted."""
    buf = bytearray()
    while len(buf) < n:
        chunk = reader.read(min(READ_CHUNK_SIZE, n - len(buf)))
        if not chunk:
            break
        buf += chunk
    return bytes(buf)


def _as_local_file(reader: Any) -> LocalFile | None:
    """Return reader as a LocalFile if it is already backed by a file on disk."""
    reader = unwrap(reader)
    if isinstance(reader, LocalFile):
        return reader
    if isinstance(reader, (io.BufferedReader, io.BufferedRandom, io.FileIO)):
        path = getattr(reader, "name", None)
        if isinstance(path, (str, os.PathLike)) and os.path.isfile(path):
            return LocalFile(reader, os.fspath(path))
    return None


def read_file_max(name: str, reader: IO[bytes] | File, max_memory: int) -> File:
    """Read reader into a File with the given name.

    At most max_memory bytes are held in memory. If the reader holds more
    than that, the contents go to a temporary file on disk instead, and the
    caller must pass the result to cleanup() once done with it.

    A reader that already is a file on disk is renamed rather than copied.

    Args:
        name: Name the returned File reports
        reader: Anything with a read(size) method returning bytes
        max_memory: Largest number of bytes kept in memory

    Returns:
        A MemoryFile, or a LocalFile positioned at the start and renamed
        to name

    Raises:
        OSError: If reading the source or writing the temporary file fails
    """
    local = _as_local_file(reader)
    if local is not None:
        return rename(local, name)

    buf = _read_at_most(reader, max_memory + 1)

    if len(buf) <= max_memory:
        return MemoryFile(name, buf)

    dir = tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX)
    # name only labels the result and never becomes part of the path
    path = os.path.join(dir, SPILL_FILE_NAME)

    try:
        f = LocalFile.open(path, "w+b")
        try:
            f.write(buf)
            shutil.copyfileobj(reader, f.handle)
            f.seek(0)
        except BaseException:
            f.close()
            raise
    except BaseException as e:
        logger.warning("Failed to spill file", context={"name": name, "dir": dir}, error=e)
        shutil.rmtree(dir, ignore_errors=True)
        raise

    logger.debug(
        "Spilled file to disk",
        context={"name": name, "path": path, "max_memory": max_memory},
    )
    return rename(f, name)


def read_file(name: str, reader: IO[bytes] | File) -> File:
    """Same as read_file_max with a ceiling of DEFAULT_MAX_MEMORY."""
    return read_file_max(name, reader, DEFAULT_MAX_MEMORY)


def cleanup(file: File) -> None:
    """Delete the file if it was spilled to disk by read_file_max.

    Files anywhere else, including ones that live in a store, are left
    alone. Typically called in a finally block after read_file().
    """
    local = unwrap(file)
    if not isinstance(local, LocalFile):
        return

    dir = os.path.dirname(local.path)
    if not is_temp_path(dir):
        return

    local.close()
    shutil.rmtree(dir)
    logger.debug("Removed temporary file", context={"path": local.path})
