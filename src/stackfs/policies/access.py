"""Read-only and write-only capability restriction."""

from stackfs.exceptions import PathError, permission_denied
from stackfs.observability import get_logger
from stackfs.policies.base import StoreWrapper
from stackfs.protocols.file import File, FileInfo
from stackfs.protocols.store import Store

logger = get_logger(__name__)


def _deny(op: str, name: str) -> PathError:
    logger.info("Denied operation", context={"op": op, "name": name})
    return PathError(op, name, permission_denied())


class WriteOnlyStore(StoreWrapper):
    """Store that files can only be put into.

    open(), stat() and remove() always fail with a permission error.
    """

    def _wrap(self, store: Store) -> Store:
        return WriteOnlyStore(store)

    def open(self, name: str) -> File:
        raise _deny("open", name)

    def stat(self, name: str) -> FileInfo:
        raise _deny("stat", name)

    def remove(self, name: str) -> None:
        raise _deny("remove", name)


class ReadOnlyStore(StoreWrapper):
    """Store that files can only be read from.

    put() and remove() always fail with a permission error.
    """

    def _wrap(self, store: Store) -> Store:
        return ReadOnlyStore(store)

    def put(self, file: File) -> File:
        raise _deny("put", file.stat().name)

    def remove(self, name: str) -> None:
        raise _deny("remove", name)
