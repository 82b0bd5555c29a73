"""A mutual-exclusion lock that owns the value it protects."""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

T = TypeVar("T")


class MutexGuard(Generic[T]):
    """Access to a locked :class:`Mutex`'s value until the guard is released."""

    __slots__ = ("_mutex", "_held")

    def __init__(self, mutex: Mutex[T]) -> None:
        self._mutex = mutex
        self._held = True

    def _check(self) -> None:
        if not self._held:
            raise RuntimeError("mutex guard used after release")

    @property
    def value(self) -> T:
        """The protected value."""
        self._check()
        return self._mutex._value

    @value.setter
    def value(self, new_value: T) -> None:
        self._check()
        self._mutex._value = new_value

    def release(self) -> None:
        """Unlock the mutex; releasing twice has no further effect."""
        if self._held:
            self._held = False
            self._mutex._lock.release()

    def __enter__(self) -> MutexGuard[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


class Mutex(Generic[T]):
    """Holds a value that can only be reached while the lock is held."""

    __slots__ = ("_value", "_lock")

    def __init__(self, value: T) -> None:
        self._value = value
        self._lock = threading.Lock()

    def lock(self) -> MutexGuard[T]:
        """Wait for the lock, take it and return a guard for the value."""
        self._lock.acquire()
        return MutexGuard(self)

    def locked(self) -> bool:
        """Return whether the lock is currently held."""
        return self._lock.locked()

    def __repr__(self) -> str:
        state = "locked" if self.locked() else "unlocked"
        return f"Mutex({state})"