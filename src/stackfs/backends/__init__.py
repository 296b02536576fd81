"""Leaf store implementations."""

from stackfs.backends.local import LocalStore
from stackfs.backends.null import NullStore
from stackfs.backends.sftp import SFTPStore

__all__ = ["LocalStore", "NullStore", "SFTPStore"]
