"""Single-assignment memo cell.

The value is computed at most once and never replaced.  Reads after the
first successful write take no lock; concurrent first reads serialise on
a lock so the factory runs once.  A factory that raises leaves the cell
empty, so the next read retries.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

_UNSET = object()


class WriteOnce(Generic[T]):
    """Write-once, read-many cell."""

    def __init__(self) -> None:
        self._value: object = _UNSET
        self._lock = threading.Lock()

    @property
    def is_set(self) -> bool:
        return self._value is not _UNSET

    def get_or_compute(self, factory: Callable[[], T]) -> T:
        """Return the stored value, computing it with ``factory`` on first use."""
        value = self._value
        if value is not _UNSET:
            return value  # type: ignore[return-value]
        with self._lock:
            if self._value is _UNSET:
                self._value = factory()
            return self._value  # type: ignore[return-value]
