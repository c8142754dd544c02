"""Simple memory-backed physical storage.

Entries are kept in a dict keyed by normalised key. Nothing survives the
process; useful for development servers and tests.
"""
from threading import RLock
from typing import Dict, List, Mapping, Optional

from .base import Entry, PhysicalBackend
from .errors import InvalidEntryError
from .paths import SEPARATOR, normalize_key


class InmemBackend(PhysicalBackend):
    def __init__(self, conf: Optional[Mapping[str, str]] = None):
        self._lock = RLock()
        self._store: Dict[str, Entry] = {}

    def get(self, key: str) -> Optional[Entry]:
        with self._lock:
            return self._store.get(normalize_key(key))

    def put(self, entry: Entry) -> None:
        if entry is None:
            raise InvalidEntryError("nil entry")
        key = normalize_key(entry.key)
        if not key:
            raise InvalidEntryError(f"entry key {entry.key!r} is empty")
        with self._lock:
            self._store[key] = entry

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(normalize_key(key), None)

    def list(self, prefix: str) -> List[str]:
        norm = normalize_key(prefix)
        if norm:
            norm += SEPARATOR
        with self._lock:
            seen: Dict[str, None] = {}
            for key in self._store:
                if not key.startswith(norm):
                    continue
                rest = key[len(norm):]
                head, sep, _ = rest.partition(SEPARATOR)
                seen[head + sep] = None
            return list(seen)
