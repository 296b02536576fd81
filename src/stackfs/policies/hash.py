"""Content-addressed naming."""

import hashlib
from typing import Any, Callable

from stackfs.exceptions import PathError
from stackfs.files import rename
from stackfs.materialize import DEFAULT_MAX_MEMORY, cleanup, read_file_max
from stackfs.observability import get_logger
from stackfs.policies.base import StoreWrapper
from stackfs.protocols.file import File
from stackfs.protocols.store import Store

logger = get_logger(__name__)

HashFactory = Callable[[], Any]


class _HashingReader:
    """Feeds everything read from a file through a hash."""

    def __init__(self, file: File, digest: Any) -> None:
        self.file = file
        self.digest = digest

    def read(self, size: int = -1) -> bytes:
        chunk = self.file.read(size)
        self.digest.update(chunk)
        return chunk


class HashStore(StoreWrapper):
    """Stores every file under the hex digest of its contents.

    The name the caller gave the file is discarded, so the file returned by
    put() reports the digest as its name.
    """

    def __init__(
        self,
        store: Store,
        mech: HashFactory = hashlib.sha256,
        max_memory: int = DEFAULT_MAX_MEMORY,
    ) -> None:
        """Initialize hash store.

        Args:
            store: Store to put the renamed files in
            mech: Zero-argument constructor of a hashlib-style object
            max_memory: Largest file buffered in memory while hashing
        """
        super().__init__(store)
        self.mech = mech
        self.max_memory = max_memory

    def _wrap(self, store: Store) -> Store:
        return HashStore(store, self.mech, self.max_memory)

    def put(self, file: File) -> File:
        name = file.stat().name
        digest = self.mech()

        try:
            tmp = read_file_max("hash.put", _HashingReader(file, digest), self.max_memory)
        except PathError as e:
            raise PathError("put", name, e.cause) from e
        except OSError as e:
            raise PathError("put", name, e) from e

        try:
            hexdigest = digest.hexdigest()
            logger.debug("Hashed file", context={"name": name, "digest": hexdigest})
            return self.store.put(rename(tmp, hexdigest))
        finally:
            cleanup(tmp)

    def __repr__(self) -> str:
        return f"HashStore({self.store!r}, {getattr(self.mech, '__name__', self.mech)})"
