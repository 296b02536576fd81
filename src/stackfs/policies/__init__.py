"""Policy layers that wrap any store."""

from stackfs.policies.access import ReadOnlyStore, WriteOnlyStore
from stackfs.policies.base import StoreWrapper
from stackfs.policies.hash import HashStore
from stackfs.policies.limit import LimitStore
from stackfs.policies.unique import UniqueStore

__all__ = [
    "HashStore",
    "LimitStore",
    "ReadOnlyStore",
    "StoreWrapper",
    "UniqueStore",
    "WriteOnlyStore",
]
