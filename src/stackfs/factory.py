"""Building store chains from configuration."""

import functools
import hashlib
from typing import Any

from stackfs.backends.sftp import SFTPStore
from stackfs.config import StoreConfig
from stackfs.exceptions import ConfigError
from stackfs.observability import Timer, configure_logging, get_logger
from stackfs.plugins import create_store
from stackfs.policies import (
    HashStore,
    LimitStore,
    ReadOnlyStore,
    UniqueStore,
    WriteOnlyStore,
)
from stackfs.protocols import Store

logger = get_logger(__name__)


def create_backend(config: StoreConfig, **kwargs: Any) -> Store:
    """Create the innermost store described by config.backend.

    Args:
        config: Store configuration
        **kwargs: Passed to the backend, overriding configured values. An
            sftp backend given a ready "client" does not open its own
            connection.

    Raises:
        ConfigError: If an sftp backend has neither a client nor settings
    """
    backend = config.backend

    if backend.type == "sftp" and "client" not in kwargs:
        if backend.sftp is None:
            raise ConfigError("sftp backend requires an 'sftp' section or a client")
        return SFTPStore.connect(path=backend.path or ".", **backend.sftp.model_dump())

    options: dict[str, Any] = {}
    if backend.path is not None:
        options["path"] = backend.path
    options.update(kwargs)
    return create_store(backend.type, **options)


def apply_policies(store: Store, config: StoreConfig) -> Store:
    """Wrap store in the policy layers enabled in config.policies.

    Innermost first: unique, hash, limit, then read-only or write-only.
    Uniqueness is therefore checked against the digest name, and oversized
    files are rejected before they are hashed.
    """
    policies = config.policies

    if policies.unique:
        store = UniqueStore(store)
    if policies.hash:
        mech = functools.partial(hashlib.new, policies.hash)
        store = HashStore(store, mech, config.max_memory)
    if policies.limit is not None:
        store = LimitStore(store, policies.limit)
    if policies.read_only:
        store = ReadOnlyStore(store)
    elif policies.write_only:
        store = WriteOnlyStore(store)
    return store


def build_store(
    config: StoreConfig,
    setup_logging: bool = False,
    **backend_kwargs: Any,
) -> Store:
    """Build a complete store chain from configuration.

    Args:
        config: Store configuration
        setup_logging: Also apply config.logging via configure_logging()
        **backend_kwargs: Passed to create_backend()

    Returns:
        The outermost store of the chain
    """
    if setup_logging:
        configure_logging(config.logging.level, config.logging.format)

    with Timer() as timer:
        store = apply_policies(create_backend(config, **backend_kwargs), config)

    logger.info(
        "Built store",
        context={"backend": config.backend.type, "store": repr(store)},
        duration_ms=timer.duration_ms,
    )
    return store
