"""stackfs exceptions."""

import errno
from contextlib import contextmanager
from enum import Enum
from typing import Iterator

from stackfs.utils.units import human_size


class StackFSError(Exception):
    """Base exception for stackfs."""

    pass


class ErrorKind(str, Enum):
    """Backend-agnostic classification of a failure cause."""

    NOT_EXIST = "not_exist"
    EXIST = "exist"
    PERMISSION = "permission"
    INVALID = "invalid"
    CLOSED = "closed"
    SIZE_EXCEEDED = "size_exceeded"
    UNKNOWN = "unknown"


_ERRNO_KINDS = {
    errno.ENOENT: ErrorKind.NOT_EXIST,
    errno.EEXIST: ErrorKind.EXIST,
    errno.EACCES: ErrorKind.PERMISSION,
    errno.EPERM: ErrorKind.PERMISSION,
    errno.EINVAL: ErrorKind.INVALID,
    errno.ENAMETOOLONG: ErrorKind.INVALID,
    errno.EBADF: ErrorKind.CLOSED,
}


class PathError(StackFSError):
    """A failed store operation on a path.

    Every store operation reports failures as a PathError so callers can
    branch on the operation and on the kind of the underlying cause without
    knowing which backend produced it.

    Attributes:
        op: Operation that failed ("open", "sub", "stat", "put", "remove",
            or "read" for in-memory files)
        path: Name the operation was called with
        cause: The underlying exception
    """

    def __init__(self, op: str, path: str, cause: BaseException) -> None:
        self.op = op
        self.path = path
        self.cause = cause
        super().__init__(f"{op} {path}: {cause}")

    @property
    def kind(self) -> ErrorKind:
        """Classify the underlying cause."""
        return error_kind(self.cause)


class SizeError(StackFSError):
    """A file exceeded the configured size limit."""

    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(f"file too large, cannot exceed {human_size(size)}")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SizeError) and other.size == self.size

    def __hash__(self) -> int:
        return hash((SizeError, self.size))


class FileClosedError(StackFSError):
    """Read or seek on a file that has already been closed."""

    def __init__(self, message: str = "file already closed") -> None:
        super().__init__(message)


class ConfigError(StackFSError):
    """Configuration error."""

    pass


class BackendNotFoundError(ConfigError):
    """No backend is registered under the requested name."""

    pass


def permission_denied() -> PermissionError:
    """Cause used when a store refuses an operation outright."""
    return PermissionError(errno.EACCES, "permission denied")


def already_exists() -> FileExistsError:
    """Cause used when a name is already taken."""
    return FileExistsError(errno.EEXIST, "file already exists")


def error_kind(exc: BaseException | None) -> ErrorKind:
    """Classify an exception into an ErrorKind.

    PathErrors are classified by their cause, and chained exceptions are
    followed through __cause__ until something recognisable turns up.
    """
    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))

        if isinstance(exc, PathError):
            exc = exc.cause
            continue
        if isinstance(exc, SizeError):
            return ErrorKind.SIZE_EXCEEDED
        if isinstance(exc, FileClosedError):
            return ErrorKind.CLOSED
        if isinstance(exc, FileNotFoundError):
            return ErrorKind.NOT_EXIST
        if isinstance(exc, FileExistsError):
            return ErrorKind.EXIST
        if isinstance(exc, PermissionError):
            return ErrorKind.PERMISSION
        if isinstance(exc, OSError) and exc.errno in _ERRNO_KINDS:
            return _ERRNO_KINDS[exc.errno]
        if isinstance(exc, ValueError):
            return ErrorKind.INVALID

        exc = exc.__cause__
    return ErrorKind.UNKNOWN


@contextmanager
def wrap_errors(
    op: str,
    path: str,
    errors: tuple[type[BaseException], ...] = (OSError, ValueError),
) -> Iterator[None]:
    """Re-raise backend errors inside the block as PathError(op, path, cause).

    A PathError raised inside the block, such as a failed read of the file
    being put, is re-tagged with op and path and keeps its original cause.
    """
    try:
        yield
    except PathError as e:
        raise PathError(op, path, e.cause) from e
    except errors as e:
        raise PathError(op, path, e) from e
