"""File-backed physical storage.

Stores each entry as one JSON record under ``<path>/<dirs...>/_<leaf>``,
where the directories mirror the key hierarchy and the leaf name is encoded
by `filekv_lib.storage.paths`. Records written with the older unencoded leaf
name are still read, deleted and migrated on the next `put`.

Every operation holds a per-instance lock for its full duration, so calls on
one backend never interleave. Nothing coordinates with other processes
touching the same tree; this backend suits single-server, low-volume use.
"""
from __future__ import annotations
import logging
import os
import threading
from typing import List, Mapping, Optional

from .base import Entry, PhysicalBackend
from .errors import CleanupError, ConfigError, InvalidEntryError, raise_for_errors
from .paths import PathMapper, normalize_key, split_key
from .serializer import JSONEntrySerializer, Serializer

logger = logging.getLogger(__name__)

DIR_MODE = 0o755
FILE_MODE = 0o600


class FileBackend(PhysicalBackend):
    def __init__(self, conf: Mapping[str, str], serializer: Optional[Serializer] = None) -> None:
        path = conf.get("path")
        if not path:
            raise ConfigError("'path' must be set")
        self.path = str(path)
        self._mapper = PathMapper(self.path)
        self._serializer = serializer or JSONEntrySerializer()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Entry]:
        if not normalize_key(key):
            return None
        paths = self._mapper.paths_for(key)

        with self._lock:
            for candidate in paths.candidates:
                try:
                    with open(candidate, "rb") as f:
                        data = f.read()
                except (FileNotFoundError, IsADirectoryError):
                    # a directory here belongs to another key, not a record
                    continue
                logger.debug("FileBackend loaded %s (%d bytes)", candidate, len(data))
                return self._serializer.load(data)
        return None

    def put(self, entry: Entry) -> None:
        if entry is None:
            raise InvalidEntryError("nil entry")
        if not isinstance(entry, Entry):
            raise InvalidEntryError(f"expected Entry, got {type(entry).__name__}")
        if not normalize_key(entry.key):
            raise InvalidEntryError(f"entry key {entry.key!r} is empty")

        paths = self._mapper.paths_for(entry.key)
        if paths.encoded_path is None:
            raise InvalidEntryError(f"entry key {entry.key!r} cannot be encoded as a file name")
        errors: List[BaseException] = []

        with self._lock:
            # Records under an older leaf name are superseded by this write
            # and removed afterwards, whether or not the write succeeds.
            superseded = [p for p in paths.legacy_paths if os.path.isfile(p)]
            try:
                data = self._serializer.dump(entry)
                os.makedirs(paths.base_path, mode=DIR_MODE, exist_ok=True)
                fd = os.open(paths.encoded_path, os.O_CREAT | os.O_TRUNC | os.O_WRONLY, FILE_MODE)
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                logger.debug("FileBackend wrote %s (%d bytes)", paths.encoded_path, len(data))
            except Exception as e:
                errors.append(e)
            finally:
                for old in superseded:
                    errors.extend(self._remove_superseded(old, entry.key))

        raise_for_errors(errors)

    def _remove_superseded(self, old_path: str, key: str) -> List[BaseException]:
        logger.debug("FileBackend migrating %r: removing old record %s", key, old_path)
        try:
            os.remove(old_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            err = CleanupError(f"failed to remove old entry: {e}")
            err.__cause__ = e
            return [err]
        try:
            self._cleanup_logical_path(key)
        except OSError as e:
            err = CleanupError(f"failed to cleanup after removing old entry: {e}")
            err.__cause__ = e
            return [err]
        return []

    def delete(self, key: str) -> None:
        if not normalize_key(key):
            return
        paths = self._mapper.paths_for(key)

        with self._lock:
            for candidate in paths.candidates:
                if not os.path.isfile(candidate):
                    continue
                try:
                    os.remove(candidate)
                except FileNotFoundError:
                    continue
                logger.debug("FileBackend removed %s", candidate)
                break
            try:
                self._cleanup_logical_path(key)
            except OSError as e:
                raise CleanupError(f"failed to cleanup after removing {key!r}: {e}") from e

    def _cleanup_logical_path(self, key: str) -> None:
        """Remove empty directories above `key`, deepest first.

        Stops at the first directory that is missing or still has entries.
        The root itself is never considered.
        """
        segments = split_key(key)
        for depth in range(len(segments) - 1, 0, -1):
            dir_path = self._mapper.dir_path(segments[:depth])
            try:
                with os.scandir(dir_path) as it:
                    has_entries = next(it, None) is not None
            except FileNotFoundError:
                return
            if has_entries:
                return
            os.rmdir(dir_path)
            logger.debug("FileBackend reclaimed empty directory %s", dir_path)

    def list(self, prefix: str) -> List[str]:
        segments = split_key(prefix)
        dir_path = self._mapper.dir_path(segments)

        with self._lock:
            try:
                names = os.listdir(dir_path)
            except FileNotFoundError:
                return []
            return [self._mapper.decode_name(name) for name in names]
