"""The Raspberry Pi's mini UART, driven through simulated registers."""

from __future__ import annotations

from enum import IntEnum

from raspboot.gpio import IO_BASE, Function, Gpio
from raspboot.timer import current_time
from raspboot.volatile import Memory, ReadVolatile, Volatile

MU_REG_BASE = IO_BASE + 0x215040
"""The base address of the mini UART registers."""

AUX_ENABLES = IO_BASE + 0x215004
"""The AUXENB register."""

BAUD_DIVIDER = 270
"""The baud divider giving roughly 115200 baud."""

_IO = 0x00
_LCR = 0x0C
_LSR = 0x14
_CNTL = 0x20
_BAUD = 0x28


class LsrStatus(IntEnum):
    """Bit fields of the line status register."""

    DATA_READY = 1
    TX_AVAILABLE = 1 << 5


class MiniUart:
    """The mini UART: 8-bit data, ~115200 baud, on GPIO pins 14 and 15.

    Reads never time out until :meth:`set_read_timeout` is called.
    """

    def __init__(self, memory: Memory) -> None:
        Volatile(memory, AUX_ENABLES, 1).or_mask(1)
        self._memory = memory
        self._io = Volatile(memory, MU_REG_BASE + _IO, 1)
        self._lcr = Volatile(memory, MU_REG_BASE + _LCR, 1)
        self._lsr = ReadVolatile(memory, MU_REG_BASE + _LSR, 1)
        self._cntl = Volatile(memory, MU_REG_BASE + _CNTL, 1)
        self._baud = Volatile(memory, MU_REG_BASE + _BAUD, 2)
        self._timeout: int | None = None

        Gpio(memory, 14).into_alt(Function.ALT5)
        Gpio(memory, 15).into_alt(Function.ALT5)
        self._baud.write(BAUD_DIVIDER)
        self._cntl.or_mask(0b11)
        self._lcr.or_mask(0b11)

    @property
    def timeout(self) -> int | None:
        """The read timeout in milliseconds, or ``None`` for none."""
        return self._timeout

    def set_read_timeout(self, milliseconds: int) -> None:
        """Make reads wait at most ``milliseconds`` for the first byte."""
        if milliseconds < 0:
            raise ValueError("timeout must not be negative")
        self._timeout = milliseconds

    def write_byte(self, byte: int) -> None:
        """Write ``byte``, blocking until the transmit FIFO has space."""
        while not self._lsr.has_mask(LsrStatus.TX_AVAILABLE):
            pass
        self._io.write(byte)

    def has_byte(self) -> bool:
        """Return whether a byte is ready to be read; never blocks."""
        return self._lsr.has_mask(LsrStatus.DATA_READY)

    def wait_for_byte(self) -> None:
        """Block until a byte is ready, raising :class:`TimeoutError` on timeout."""
        if self._timeout is None:
            while not self.has_byte():
                pass
            return
        start = current_time(self._memory)
        limit = self._timeout * 1000
        while not self.has_byte():
            if current_time(self._memory) - start > limit:
                raise TimeoutError("read timed out")

    def read_byte(self) -> int:
        """Read a byte, blocking indefinitely until one is ready."""
        while not self.has_byte():
            pass
        return self._io.read()

    def write_str(self, text: str) -> None:
        """Write ``text`` as UTF-8, sending CR before every LF."""
        self.write(text.encode("utf-8").replace(b"\n", b"\r\n"))

    def read(self, size: int) -> bytes:
        """Wait for a first byte, then read up to ``size`` bytes already available."""
        self.wait_for_byte()
        data = bytearray()
        while self.has_byte() and len(data) < size:
            data.append(self.read_byte())
        return bytes(data)

    def write(self, data: bytes) -> int:
        """Write every byte of ``data`` and return how many were written."""
        for byte in data:
            self.write_byte(byte)
        return len(data)

    def flush(self) -> None:
        """Nothing is buffered, so there is nothing to flush."""
        return None