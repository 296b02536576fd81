"""SFTP store built on paramiko."""

import io
import posixpath
import shutil
import stat as statmod
from typing import Any

import paramiko

from stackfs.exceptions import wrap_errors
from stackfs.files import BaseFile
from stackfs.observability import Timer, get_logger, operation
from stackfs.protocols.file import File, FileInfo
from stackfs.utils.validation import validate_name

logger = get_logger(__name__)

DIR_MODE = 0o750

# Everything paramiko raises for a failed request or a dropped session
SFTP_ERRORS = (OSError, ValueError, EOFError, paramiko.SSHException)


class SFTPFile(BaseFile):
    """An open handle on a remote file."""

    def __init__(self, handle: Any, path: str) -> None:
        """Initialize remote file.

        Args:
            handle: paramiko.SFTPFile (or compatible) opened on path
            path: Full remote path
        """
        self.handle = handle
        self.path = path

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)

    def read(self, size: int | None = -1) -> bytes:
        return self.handle.read(None if size is None or size < 0 else size)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        # paramiko's seek returns None
        self.handle.seek(offset, whence)
        return self.handle.tell()

    def stat(self) -> FileInfo:
        return FileInfo.from_stat_result(self.name, self.handle.stat())

    def close(self) -> None:
        self.handle.close()

    def __repr__(self) -> str:
        return f"SFTPFile(path={self.path!r})"


class SFTPStore:
    """Store that keeps files on a remote host over SFTP.

    There is no reconnection logic; a dropped session surfaces as a
    PathError from whichever operation noticed it.
    """

    def __init__(self, client: paramiko.SFTPClient, path: str = ".", **kwargs: Any) -> None:
        """Initialize SFTP store.

        Args:
            client: Connected SFTP client
            path: Remote root directory
            **kwargs: Ignored (for compatibility with other backends)
        """
        self.client = client
        self.dir = path
        self._ssh: paramiko.SSHClient | None = None

    @classmethod
    def connect(
        cls,
        host: str,
        port: int = 22,
        username: str | None = None,
        password: str | None = None,
        key_filename: str | None = None,
        path: str = ".",
    ) -> "SFTPStore":
        """Open an SSH connection and return a store on it.

        The host key must already be known to the system; unknown hosts are
        rejected. Call close() to drop the connection.
        """
        ssh = paramiko.SSHClient()
        ssh.load_system_host_keys()
        ssh.set_missing_host_key_policy(paramiko.RejectPolicy())
        ssh.connect(
            host,
            port=port,
            username=username,
            password=password,
            key_filename=key_filename,
        )

        store = cls(ssh.open_sftp(), path)
        store._ssh = ssh
        logger.info("Connected SFTP store", context={"host": host, "port": port, "dir": path})
        return store

    def close(self) -> None:
        """Close the connection if this store opened it."""
        if self._ssh is not None:
            self.client.close()
            self._ssh.close()
            self._ssh = None

    def _path(self, name: str) -> str:
        return posixpath.join(self.dir, validate_name(name))

    def _mkdir_all(self, path: str) -> None:
        try:
            attrs = self.client.stat(path)
        except FileNotFoundError:
            pass
        else:
            if not statmod.S_ISDIR(attrs.st_mode or 0):
                raise NotADirectoryError(path)
            return

        parent = posixpath.dirname(path)
        if parent and parent != path:
            self._mkdir_all(parent)

        try:
            self.client.mkdir(path, DIR_MODE)
        except OSError:
            # Lost a race with another client creating the same directory
            attrs = self.client.stat(path)
            if not statmod.S_ISDIR(attrs.st_mode or 0):
                raise

    def open(self, name: str) -> File:
        with wrap_errors("open", name, SFTP_ERRORS):
            path = self._path(name)
            return SFTPFile(self.client.open(path, "rb"), path)

    def sub(self, dir: str) -> "SFTPStore":
        with wrap_errors("sub", dir, SFTP_ERRORS):
            subdir = self._path(dir)
            self._mkdir_all(subdir)
        return SFTPStore(self.client, subdir)

    def stat(self, name: str) -> FileInfo:
        with wrap_errors("stat", name, SFTP_ERRORS):
            attrs = self.client.stat(self._path(name))
        return FileInfo.from_stat_result(posixpath.basename(name), attrs)

    def put(self, file: File) -> File:
        info = file.stat()
        name = info.name

        with operation("put", name), wrap_errors("put", name, SFTP_ERRORS), Timer() as timer:
            path = self._path(name)
            dst = SFTPFile(self.client.open(path, "w+b"), path)
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
        with wrap_errors("remove", name, SFTP_ERRORS):
            self.client.remove(self._path(name))

    def __repr__(self) -> str:
        return f"SFTPStore({self.dir!r})"
