"""Local filesystem store."""

import os
import shutil
from typing import Any

from stackfs.exceptions import wrap_errors
from stackfs.files import LocalFile
from stackfs.observability import Timer, get_logger, operation
from stackfs.protocols.file import File, FileInfo
from stackfs.utils.validation import validate_name

logger = get_logger(__name__)

# Mode for directories created by sub(), before the umask
DIR_MODE = 0o750


class LocalStore:
    """Store backed by a directory on the local filesystem.

    Suitable for development and single-server deployments.
    """

    def __init__(self, path: str | os.PathLike[str], **kwargs: Any) -> None:
        """Initialize local store.

        Args:
            path: Root directory, created if it does not exist
            **kwargs: Ignored (for compatibility with other backends)
        """
        self.dir = os.fspath(path)
        os.makedirs(self.dir, DIR_MODE, exist_ok=True)

    def _path(self, name: str) -> str:
        return os.path.join(self.dir, validate_name(name))

    def open(self, name: str) -> File:
        with wrap_errors("open", name):
            return LocalFile.open(self._path(name))

    def sub(self, dir: str) -> "LocalStore":
        with wrap_errors("sub", dir):
            subdir = self._path(dir)
            os.makedirs(subdir, DIR_MODE, exist_ok=True)
        return LocalStore(subdir)

    def stat(self, name: str) -> FileInfo:
        with wrap_errors("stat", name):
            st = os.stat(self._path(name))
        return FileInfo.from_stat_result(os.path.basename(name), st)

    def put(self, file: File) -> File:
        info = file.stat()
        name = info.name

        with operation("put", name), wrap_errors("put", name), Timer() as timer:
            dst = LocalFile.open(self._path(name), "w+b")
            try:
                shutil.copyfileobj(file, dst.handle)
                dst.handle.flush()
                dst.seek(0)
            except BaseException:
                dst.close()
                raise

        logger.debug(
            "Stored file",
            context={"name": name, "size": info.size, "dir": self.dir},
            duration_ms=timer.duration_ms,
        )
        return dst

    def remove(self, name: str) -> None:
        with wrap_errors("remove", name):
            os.remove(self._path(name))

    def __repr__(self) -> str:
        return f"LocalStore({self.dir!r})"
