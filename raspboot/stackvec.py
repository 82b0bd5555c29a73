"""A bounded vector whose elements live in caller-supplied storage."""

from __future__ import annotations

from itertools import islice
from typing import Generic, Iterator, MutableSequence, TypeVar

T = TypeVar("T")


class StackVecFullError(Exception):
    """Raised when a value is pushed onto a full :class:`StackVec`."""


class StackVec(Generic[T]):
    """A vector backed by a fixed-size, caller-supplied mutable sequence.

    Pushing writes into the backing storage; the capacity is the length of
    that storage, so ``push`` fails once it is exhausted.
    """

    __slots__ = ("_storage", "_len")

    def __init__(self, storage: MutableSequence[T]) -> None:
        self._storage = storage
        self._len = 0

    @classmethod
    def with_len(cls, storage: MutableSequence[T], length: int) -> StackVec[T]:
        """Treat the first ``length`` items of ``storage`` as already pushed."""
        if not 0 <= length <= len(storage):
            raise ValueError(
                f"length {length} exceeds storage capacity {len(storage)}"
            )
        vec = cls(storage)
        vec._len = length
        return vec

    def capacity(self) -> int:
        """Return how many elements the vector can hold."""
        return len(self._storage)

    def truncate(self, length: int) -> None:
        """Keep only the first ``length`` elements; longer lengths do nothing."""
        if length < 0:
            raise ValueError("length must not be negative")
        if length < self._len:
            self._len = length

    def as_slice(self) -> list[T]:
        """Return the elements currently in the vector as a list."""
        return list(islice(self._storage, self._len))

    def is_empty(self) -> bool:
        return self._len == 0

    def is_full(self) -> bool:
        return self._len == len(self._storage)

    def push(self, value: T) -> None:
        """Append ``value``, raising :class:`StackVecFullError` when full."""
        if self.is_full():
            raise StackVecFullError(f"capacity of {self.capacity()} exhausted")
        self._storage[self._len] = value
        self._len += 1

    def pop(self) -> T | None:
        """Remove and return the last element, or ``None`` when empty."""
        if not self._len:
            return None
        self._len -= 1
        return self._storage[self._len]

    def _position(self, index: int) -> int:
        return range(self._len)[index]

    def __len__(self) -> int:
        return self._len

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self.as_slice()[index]
        return self._storage[self._position(index)]

    def __setitem__(self, index: int, value: T) -> None:
        self._storage[self._position(index)] = value

    def __iter__(self) -> Iterator[T]:
        return islice(self._storage, self._len)

    def __repr__(self) -> str:
        return f"StackVec({self.as_slice()!r}, capacity={self.capacity()})"