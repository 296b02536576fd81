"""Base class for stores that wrap another store."""

from abc import ABC, abstractmethod

from stackfs.protocols.file import File, FileInfo
from stackfs.protocols.store import Store


class StoreWrapper(ABC):
    """Delegates every operation to the wrapped store.

    Subclasses override the operations their policy intercepts and _wrap(),
    which sub() uses so a child namespace keeps the same policy.
    """

    def __init__(self, store: Store) -> None:
        self.store = store

    @abstractmethod
    def _wrap(self, store: Store) -> Store:
        """Wrap a child of the inner store in the same policy."""
        ...

    def open(self, name: str) -> File:
        return self.store.open(name)

    def sub(self, dir: str) -> Store:
        return self._wrap(self.store.sub(dir))

    def stat(self, name: str) -> FileInfo:
        return self.store.stat(name)

    def put(self, file: File) -> File:
        return self.store.put(file)

    def remove(self, name: str) -> None:
        self.store.remove(name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.store!r})"
