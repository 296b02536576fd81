"""Name uniqueness."""

from stackfs.exceptions import ErrorKind, PathError, already_exists
from stackfs.observability import get_logger
from stackfs.policies.base import StoreWrapper
from stackfs.protocols.file import File
from stackfs.protocols.store import Store

logger = get_logger(__name__)


class UniqueStore(StoreWrapper):
    """Refuses to put a file whose name is already taken.

    The existence check and the put are two separate calls on the wrapped
    store. Two concurrent puts of the same name can both pass the check.
    """

    def _wrap(self, store: Store) -> Store:
        return UniqueStore(store)

    def put(self, file: File) -> File:
        name = file.stat().name

        try:
            self.store.stat(name)
        except PathError as e:
            if e.kind is ErrorKind.NOT_EXIST:
                return self.store.put(file)
            raise

        logger.info("Rejected duplicate file", context={"name": name})
        raise PathError("put", name, already_exists())
