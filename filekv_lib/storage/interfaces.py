from typing import List, Optional, Protocol, runtime_checkable

from .base import Entry


@runtime_checkable
class BackendProtocol(Protocol):
    """Backend protocol mirroring `filekv_lib.storage.PhysicalBackend`.

    Implementations should follow the semantics documented on the abstract
    base class in `filekv_lib.storage.base` (None for missing keys,
    idempotent delete, thread-safety, etc.).
    """

    def get(self, key: str) -> Optional[Entry]: ...

    def put(self, entry: Entry) -> None: ...

    def delete(self, key: str) -> None: ...

    def list(self, prefix: str) -> List[str]: ...
