"""Fixtures for backend tests."""

import os

import pytest

from stackfs.backends import SFTPStore


class FakeSFTPHandle:
    """Local file posing as a paramiko.SFTPFile."""

    def __init__(self, path, mode):
        self._file = open(path, mode)

    def read(self, size=None):
        return self._file.read(size)

    def write(self, data):
        self._file.write(data)

    def flush(self):
        self._file.flush()

    def seek(self, offset, whence=0):
        # paramiko returns None here
        self._file.seek(offset, whence)

    def tell(self):
        return self._file.tell()

    def stat(self):
        return os.fstat(self._file.fileno())

    def close(self):
        self._file.close()


class FakeSFTPClient:
    """In-process stand-in for paramiko.SFTPClient over local paths.

    Set fail_with to an exception to simulate a dropped session.
    """

    def __init__(self):
        self.fail_with = None
        self.mkdirs = []

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    def open(self, path, mode="r"):
        self._check()
        return FakeSFTPHandle(path, mode)

    def stat(self, path):
        self._check()
        return os.stat(path)

    def mkdir(self, path, mode=0o777):
        self._check()
        self.mkdirs.append(path)
        os.mkdir(path, mode)

    def remove(self, path):
        self._check()
        os.remove(path)


@pytest.fixture
def sftp_client():
    """A fake SFTP client."""
    return FakeSFTPClient()


@pytest.fixture
def sftp_store(sftp_client, tmp_path):
    """An SFTP store on the fake client, rooted in a temporary directory."""
    root = tmp_path / "remote"
    root.mkdir()
    return SFTPStore(sftp_client, str(root))
