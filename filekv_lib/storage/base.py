"""Physical backend interface definitions.

Defines the `Entry` record and the `PhysicalBackend` abstract class every
storage medium implements. Keys are `/`-separated strings; values are opaque
bytes. Higher layers are responsible for turning their objects into entries.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class Entry(BaseModel):
    """A single stored key/value pair. Immutable; replace it with `put`."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: bytes = b""


class PhysicalBackend(ABC):
    """Abstract physical storage backend.

    Implementations must be safe to call from several threads at once.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Entry]:
        """Return the entry stored under `key`, or None if there is none."""

    @abstractmethod
    def put(self, entry: Entry) -> None:
        """Store `entry`, replacing whatever was stored under its key."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove `key`. Deleting a missing key is not an error."""

    @abstractmethod
    def list(self, prefix: str) -> List[str]:
        """Return the direct children of `prefix`.

        Leaves are returned by name; containers carry a trailing ``/``.
        """
