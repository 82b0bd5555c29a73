"""A simulated memory-mapped I/O region and typed register views onto it."""

from __future__ import annotations

from typing import Callable

ReadHook = Callable[[], int]
WriteHook = Callable[[int], None]

_WIDTHS = (1, 2, 4, 8)


def _check_width(width: int) -> None:
    if width not in _WIDTHS:
        raise ValueError(f"width must be one of {_WIDTHS}, not {width}")


def _fit(value: int, width: int) -> int:
    if not 0 <= value < 1 << (8 * width):
        raise ValueError(f"value {value:#x} does not fit in {width} byte(s)")
    return value


class Memory:
    """A little-endian byte-addressed region starting at ``base``.

    Hooks let a device model take part in accesses: a read hook supplies the
    value read at its address, and a write hook is called with each value
    written there after it is stored.
    """

    def __init__(self, base: int, size: int) -> None:
        if base < 0 or size <= 0:
            raise ValueError("base must be non-negative and size positive")
        self.base = base
        self.size = size
        self._data = bytearray(size)
        self._read_hooks: dict[int, ReadHook] = {}
        self._write_hooks: dict[int, WriteHook] = {}

    def _offset(self, address: int, width: int) -> int:
        _check_width(width)
        offset = address - self.base
        if offset < 0 or offset + width > self.size:
            raise IndexError(
                f"access of {width} byte(s) at {address:#x} is outside "
                f"{self.base:#x}..{self.base + self.size:#x}"
            )
        return offset

    def read(self, address: int, width: int) -> int:
        """Read an unsigned ``width``-byte value at ``address``."""
        offset = self._offset(address, width)
        hook = self._read_hooks.get(address)
        if hook is not None:
            return _fit(hook(), width)
        return int.from_bytes(self._data[offset : offset + width], "little")

    def write(self, address: int, value: int, width: int) -> None:
        """Write an unsigned ``width``-byte value at ``address``."""
        offset = self._offset(address, width)
        value = _fit(value, width)
        self._data[offset : offset + width] = value.to_bytes(width, "little")
        hook = self._write_hooks.get(address)
        if hook is not None:
            hook(value)

    def add_read_hook(self, address: int, hook: ReadHook) -> None:
        """Install ``hook`` to supply the value of reads at ``address``."""
        self._offset(address, 1)
        self._read_hooks[address] = hook

    def add_write_hook(self, address: int, hook: WriteHook) -> None:
        """Install ``hook`` to observe writes at ``address``."""
        self._offset(address, 1)
        self._write_hooks[address] = hook


class _Register:
    __slots__ = ("memory", "address", "width")

    def _bind(self, memory: Memory, address: int, width: int) -> None:
        memory._offset(address, width)
        self.memory = memory
        self.address = address
        self.width = width

    def __repr__(self) -> str:
        return f"{type(self).__name__}(address={self.address:#x}, width={self.width})"


def _read(register: _Register) -> int:
    return register.memory.read(register.address, register.width)


def _has_mask(register: _Register, mask: int) -> bool:
    _fit(mask, register.width)
    return _read(register) & mask == mask


def _write(register: _Register, value: int) -> None:
    register.memory.write(register.address, value, register.width)


class ReadVolatile(_Register):
    """A read-only view of a register."""

    __slots__ = ()

    def __init__(self, memory: Memory, address: int, width: int = 4) -> None:
        self._bind(memory, address, width)

    def read(self) -> int:
        """Read the register's current value."""
        return _read(self)

    def has_mask(self, mask: int) -> bool:
        """Return whether every bit of ``mask`` is set in the register."""
        return _has_mask(self, mask)


class WriteVolatile(_Register):
    """A write-only view of a register."""

    __slots__ = ()

    def __init__(self, memory: Memory, address: int, width: int = 4) -> None:
        self._bind(memory, address, width)

    def write(self, value: int) -> None:
        """Write ``value`` to the register."""
        _write(self, value)


class Volatile(_Register):
    """A read/write view of a register."""

    __slots__ = ()

    def __init__(self, memory: Memory, address: int, width: int = 4) -> None:
        self._bind(memory, address, width)

    def read(self) -> int:
        """Read the register's current value."""
        return _read(self)

    def has_mask(self, mask: int) -> bool:
        """Return whether every bit of ``mask`` is set in the register."""
        return _has_mask(self, mask)

    def write(self, value: int) -> None:
        """Write ``value`` to the register."""
        _write(self, value)

    def and_mask(self, mask: int) -> None:
        """Write back the register's value ANDed with ``mask``."""
        self.write(self.read() & _fit(mask, self.width))

    def or_mask(self, mask: int) -> None:
        """Write back the register's value ORed with ``mask``."""
        self.write(self.read() | _fit(mask, self.width))


class UniqueVolatile(Volatile):
    """A read/write register view meant to be the only one for its address."""

    __slots__ = ()