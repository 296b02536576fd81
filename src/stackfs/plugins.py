"""Backend discovery via Python entry points."""

from importlib.metadata import entry_points
from typing import Any

from stackfs.backends import LocalStore, NullStore, SFTPStore
from stackfs.exceptions import BackendNotFoundError
from stackfs.protocols import Store

BACKEND_GROUP = "stackfs.backends"

BUILTIN_BACKENDS: dict[str, Any] = {
    "local": LocalStore,
    "null": NullStore,
    "sftp": SFTPStore,
}


def discover_backends() -> dict[str, Any]:
    """Discover all available backends.

    Built-in backends come first; entry points registered under
    BACKEND_GROUP add to them but never replace a built-in name.

    Returns:
        Dictionary mapping backend names to their classes
    """
    backends = dict(BUILTIN_BACKENDS)
    for ep in entry_points(group=BACKEND_GROUP):
        if ep.name not in backends:
            backends[ep.name] = ep.load()
    return backends


def get_backend(name: str) -> Any:
    """Get a backend class by name.

    Args:
        name: The backend name (e.g., "local", "sftp")

    Returns:
        The backend class

    Raises:
        BackendNotFoundError: If the backend is not found
    """
    if name in BUILTIN_BACKENDS:
        return BUILTIN_BACKENDS[name]

    backends = discover_backends()
    if name not in backends:
        available = ", ".join(sorted(backends.keys())) or "(none)"
        raise BackendNotFoundError(
            f"Backend '{name}' not found. Available: {available}"
        )
    return backends[name]


def create_store(backend: str, **kwargs: Any) -> Store:
    """Create a Store instance.

    Args:
        backend: The backend name (e.g., "local", "null")
        **kwargs: Backend-specific configuration

    Returns:
        A Store implementation
    """
    cls = get_backend(backend)
    return cls(**kwargs)
