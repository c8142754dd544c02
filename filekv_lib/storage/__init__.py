"""Physical storage package for filekv."""
from typing import Mapping, Optional

from .base import Entry, PhysicalBackend
from .errors import (
    CleanupError,
    ConfigError,
    InvalidEntryError,
    MultiError,
    SerializationError,
    StorageError,
)
from .file_backend import FileBackend
from .memory_backend import InmemBackend

BACKENDS = {
    "file": FileBackend,
    "inmem": InmemBackend,
}


def create_backend(kind: str = "file", conf: Optional[Mapping[str, str]] = None) -> PhysicalBackend:
    """Construct the backend registered under `kind` with options `conf`."""
    try:
        factory = BACKENDS[kind]
    except KeyError:
        raise ConfigError(f"unknown storage backend {kind!r}") from None
    return factory(conf or {})


__all__ = [
    "Entry",
    "PhysicalBackend",
    "FileBackend",
    "InmemBackend",
    "create_backend",
    "StorageError",
    "ConfigError",
    "InvalidEntryError",
    "SerializationError",
    "CleanupError",
    "MultiError",
]
