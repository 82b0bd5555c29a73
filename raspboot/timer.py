"""The ARM system timer, a free-running microsecond counter."""

from __future__ import annotations

from raspboot.gpio import IO_BASE
from raspboot.volatile import Memory, ReadVolatile, Volatile

TIMER_REG_BASE = IO_BASE + 0x3000
"""The base address of the system timer registers."""

TIMER_REGISTERS_SIZE = 0x1C
"""The size in bytes of the system timer register block."""


class Timer:
    """The Raspberry Pi ARM system timer."""

    __slots__ = ("_cs", "_clo", "_chi", "_compare")

    def __init__(self, memory: Memory) -> None:
        self._cs = Volatile(memory, TIMER_REG_BASE, 4)
        self._clo = ReadVolatile(memory, TIMER_REG_BASE + 0x4, 4)
        self._chi = ReadVolatile(memory, TIMER_REG_BASE + 0x8, 4)
        self._compare = [Volatile(memory, TIMER_REG_BASE + 0xC + 4 * i, 4) for i in range(4)]

    def read(self) -> int:
        """Return the 64-bit counter: microseconds elapsed."""
        lo = self._clo.read()
        hi = self._chi.read()
        return (hi << 32) | lo


def current_time(memory: Memory) -> int:
    """Return the current time in microseconds."""
    return Timer(memory).read()


def spin_sleep_us(memory: Memory, us: int) -> None:
    """Spin until ``us`` microseconds have passed."""
    start = current_time(memory)
    while start + us > current_time(memory):
        pass


def spin_sleep_ms(memory: Memory, ms: int) -> None:
    """Spin until ``ms`` milliseconds have passed."""
    spin_sleep_us(memory, ms * 1000)