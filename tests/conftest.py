"""Pytest configuration and fixtures."""

import glob
import os
import tempfile

import pytest

from stackfs.backends import LocalStore, NullStore
from stackfs.materialize import TEMP_DIR_PREFIX


class SpyStore:
    """Delegates to a wrapped store and records every call made on it."""

    def __init__(self, store, calls=None):
        self.store = store
        self.calls = [] if calls is None else calls

    def open(self, name):
        self.calls.append(("open", name))
        return self.store.open(name)

    def sub(self, dir):
        self.calls.append(("sub", dir))
        return SpyStore(self.store.sub(dir), self.calls)

    def stat(self, name):
        self.calls.append(("stat", name))
        return self.store.stat(name)

    def put(self, file):
        self.calls.append(("put", file.stat().name))
        return self.store.put(file)

    def remove(self, name):
        self.calls.append(("remove", name))
        self.store.remove(name)

    def ops(self):
        """Names of the operations called, in order."""
        return [op for op, _ in self.calls]


def temp_dirs():
    """Directories currently present in the materialize temp namespace."""
    return set(glob.glob(os.path.join(tempfile.gettempdir(), TEMP_DIR_PREFIX + "*")))


@pytest.fixture
def local_store(tmp_path):
    """Create a store rooted in a temporary directory."""
    return LocalStore(tmp_path / "store")


@pytest.fixture
def null_spy():
    """A spy around a null store."""
    return SpyStore(NullStore())


@pytest.fixture
def local_spy(local_store):
    """A spy around a local store."""
    return SpyStore(local_store)


@pytest.fixture
def sample_config_dict(tmp_path):
    """Sample configuration dictionary for testing."""
    return {
        "backend": {"type": "local", "path": str(tmp_path / "files")},
        "policies": {"hash": "sha256", "limit": "1MB", "unique": True},
        "logging": {"level": "DEBUG", "format": "text"},
        "max_memory": "64KB",
    }


@pytest.fixture
def list_temp_dirs():
    """Callable listing the materialize temp directories that exist now."""
    return temp_dirs
