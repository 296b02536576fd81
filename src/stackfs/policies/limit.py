"""Size limiting."""

from stackfs.exceptions import PathError, SizeError
from stackfs.observability import get_logger
from stackfs.policies.base import StoreWrapper
from stackfs.protocols.file import File
from stackfs.protocols.store import Store
from stackfs.utils.units import human_size

logger = get_logger(__name__)


class LimitStore(StoreWrapper):
    """Rejects files larger than a fixed number of bytes.

    The check uses the size the file reports, so an oversized file is
    rejected before the wrapped store sees it.
    """

    def __init__(self, store: Store, limit: int) -> None:
        super().__init__(store)
        self.limit = limit

    def _wrap(self, store: Store) -> Store:
        return LimitStore(store, self.limit)

    def put(self, file: File) -> File:
        info = file.stat()

        if info.size > self.limit:
            logger.info(
                "Rejected oversized file",
                context={"name": info.name, "size": info.size, "limit": human_size(self.limit)},
            )
            raise PathError("put", info.name, SizeError(self.limit))
        return self.store.put(file)

    def __repr__(self) -> str:
        return f"LimitStore({self.store!r}, {self.limit})"
