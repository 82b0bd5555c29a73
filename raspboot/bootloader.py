"""A bootloader that receives a kernel image over XMODEM into memory."""

from __future__ import annotations

from typing import Any

from raspboot.volatile import Memory
from raspboot.xmodem import XmodemError, receive

BINARY_START_ADDR = 0x80000
"""Where the loaded binary expects to be placed, and where it is entered."""

BOOTLOADER_START_ADDR = 0x4000000
"""Where the bootloader itself lives."""

MAX_BINARY_SIZE = BOOTLOADER_START_ADDR - BINARY_START_ADDR
"""Free space between the binary's start address and the bootloader."""

READ_TIMEOUT_MS = 750
"""The read timeout set on the channel before loading."""


class _MemoryWriter:
    """Writes bytes into memory from the binary's start address onward."""

    def __init__(self, memory: Memory) -> None:
        if not memory.base <= BINARY_START_ADDR < memory.base + memory.size:
            raise ValueError(
                f"memory {memory.base:#x}..{memory.base + memory.size:#x} "
                f"does not contain {BINARY_START_ADDR:#x}"
            )
        self._memory = memory
        self._address = BINARY_START_ADDR
        self._end = min(BINARY_START_ADDR + MAX_BINARY_SIZE, memory.base + memory.size)

    def write(self, data: bytes) -> int:
        count = min(len(data), self._end - self._address)
        for offset, byte in enumerate(data[:count]):
            self._memory.write(self._address + offset, byte, 1)
        self._address += count
        return count


def load_binary(channel: Any, memory: Memory) -> int:
    """Receive a binary over ``channel`` into ``memory``, retrying until it succeeds.

    Returns the byte count reported by the transfer that succeeded.
    """
    set_timeout = getattr(channel, "set_read_timeout", None)
    if set_timeout is not None:
        set_timeout(READ_TIMEOUT_MS)
    writer = _MemoryWriter(memory)
    while True:
        try:
            return receive(channel, writer)
        except (XmodemError, OSError):
            continue


def boot(channel: Any, memory: Memory) -> int:
    """Load a binary and return the address to branch to."""
    load_binary(channel, memory)
    return BINARY_START_ADDR