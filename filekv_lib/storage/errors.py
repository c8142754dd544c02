"""Error types raised by the storage backends.

Filesystem failures are not wrapped: they propagate as `OSError` so callers
can inspect `errno`. The types below cover the conditions that are not plain
I/O failures, plus `MultiError` for operations that can fail more than once.
"""
from __future__ import annotations
from typing import Iterable, List


class StorageError(Exception):
    """Base class for storage backend errors."""


class ConfigError(StorageError):
    """Backend options are missing or invalid."""


class InvalidEntryError(StorageError, ValueError):
    """An entry handed to `put` cannot be stored."""


class SerializationError(StorageError):
    """A stored record could not be decoded."""


class CleanupError(StorageError):
    """Removing a superseded record or an empty directory failed.

    The primary operation already completed when this is raised; the
    underlying error is available as `__cause__`.
    """


class MultiError(StorageError):
    """Several independent failures from one logical operation."""

    def __init__(self, errors: Iterable[BaseException]) -> None:
        self.errors: List[BaseException] = list(errors)
        super().__init__(self._format())

    def _format(self) -> str:
        if len(self.errors) == 1:
            return f"1 error occurred: {self.errors[0]}"
        lines = "\n".join(f"  * {e}" for e in self.errors)
        return f"{len(self.errors)} errors occurred:\n{lines}"

    def __len__(self) -> int:
        return len(self.errors)

    @classmethod
    def append(cls, err: BaseException | None, *more: BaseException) -> "MultiError":
        """Return a MultiError holding `err` followed by `more`.

        Nested MultiErrors are flattened so the result is always one level deep.
        """
        collected: List[BaseException] = []
        for e in (err, *more):
            if e is None:
                continue
            if isinstance(e, MultiError):
                collected.extend(e.errors)
            else:
                collected.append(e)
        return cls(collected)


def raise_for_errors(errors: List[BaseException]) -> None:
    """Raise the accumulated errors, if any.

    A single error is raised unchanged; two or more are combined.
    """
    if not errors:
        return
    if len(errors) == 1:
        raise errors[0]
    raise MultiError.append(None, *errors)
