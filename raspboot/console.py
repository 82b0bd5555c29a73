"""A console over a lazily created serial device, and kernel printing helpers."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator, Union

from raspboot.mutex import Mutex


class Console:
    """Read/write access to a device that is created on first use.

    ``factory`` builds the device, typically a :class:`~raspboot.uart.MiniUart`.
    """

    __slots__ = ("_factory", "_inner")

    def __init__(self, factory: Callable[[], Any]) -> None:
        self._factory = factory
        self._inner: Any = None

    def _device(self) -> Any:
        if self._inner is None:
            self._inner = self._factory()
        return self._inner

    def read_byte(self) -> int:
        """Read one byte, blocking until one is available."""
        return self._device().read_byte()

    def write_byte(self, byte: int) -> None:
        """Write one byte."""
        self._device().write_byte(byte)

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes."""
        return self._device().read(size)

    def write(self, data: bytes) -> int:
        """Write ``data`` and return how many bytes were written."""
        return self._device().write(data)

    def flush(self) -> None:
        """Nothing is buffered here, so there is nothing to flush."""
        return None

    def write_str(self, text: str) -> None:
        """Write ``text`` to the device."""
        self._device().write_str(text)


ConsoleLike = Union[Console, Mutex]


@contextmanager
def _held(console: ConsoleLike) -> Iterator[Console]:
    if isinstance(console, Mutex):
        with console.lock() as guard:
            yield guard.value
    else:
        yield console


def kprint(console: ConsoleLike, text: str) -> None:
    """Write ``text`` to ``console``, locking it first if it is a :class:`Mutex`."""
    with _held(console) as target:
        target.write_str(text)


def kprintln(console: ConsoleLike, text: str = "") -> None:
    """Like :func:`kprint`, followed by a newline."""
    kprint(console, text + "\n")