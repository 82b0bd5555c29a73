"""GPIO pins of the BCM2837, driven through simulated memory-mapped registers."""

from __future__ import annotations

from enum import Enum, IntEnum

from raspboot.volatile import Memory, ReadVolatile, Volatile, WriteVolatile

IO_BASE = 0x3F000000
"""The address where I/O peripherals are mapped."""

GPIO_BASE = IO_BASE + 0x200000
"""The base address of the GPIO registers."""

GPIO_REGISTERS_SIZE = 0xA0
"""The size in bytes of the GPIO register block."""

MAX_PIN = 53

_FSEL = 0x00
_SET = 0x1C
_CLR = 0x28
_LEV = 0x34
_WORD = 4


class Function(IntEnum):
    """An alternative GPIO function and its three-bit FSEL code."""

    INPUT = 0b000
    OUTPUT = 0b001
    ALT0 = 0b100
    ALT1 = 0b101
    ALT2 = 0b110
    ALT3 = 0b111
    ALT4 = 0b011
    ALT5 = 0b010


class PinState(Enum):
    """The configuration state a :class:`Gpio` pin is in."""

    UNINITIALIZED = "uninitialized"
    INPUT = "input"
    OUTPUT = "output"
    ALT = "alt"


class GpioStateError(Exception):
    """Raised when a pin is used in a way its current state does not allow."""


class Gpio:
    """A GPIO pin that starts uninitialized and is configured exactly once.

    Use :meth:`into_input`, :meth:`into_output` or :meth:`into_alt` before
    reading or driving the pin.
    """

    __slots__ = ("_pin", "_state", "_fsel", "_set", "_clr", "_lev")

    def __init__(self, memory: Memory, pin: int) -> None:
        if not 0 <= pin <= MAX_PIN:
            raise ValueError(f"Gpio: pin {pin} exceeds maximum of {MAX_PIN}")
        self._pin = pin
        self._state = PinState.UNINITIALIZED
        self._fsel = [Volatile(memory, GPIO_BASE + _FSEL + _WORD * i, _WORD) for i in range(6)]
        self._set = [WriteVolatile(memory, GPIO_BASE + _SET + _WORD * i, _WORD) for i in range(2)]
        self._clr = [WriteVolatile(memory, GPIO_BASE + _CLR + _WORD * i, _WORD) for i in range(2)]
        self._lev = [ReadVolatile(memory, GPIO_BASE + _LEV + _WORD * i, _WORD) for i in range(2)]

    @property
    def pin(self) -> int:
        return self._pin

    @property
    def state(self) -> PinState:
        return self._state

    def _require(self, state: PinState, action: str) -> None:
        if self._state is not state:
            raise GpioStateError(
                f"cannot {action} pin {self._pin} in state {self._state.value}"
            )

    def into_alt(self, function: Function) -> Gpio:
        """Select ``function`` for the pin; the pin is then in the ALT state."""
        self._require(PinState.UNINITIALIZED, "configure")
        function = Function(function)
        self._fsel[self._pin // 10].or_mask(int(function) << (3 * (self._pin % 10)))
        self._state = PinState.ALT
        return self

    def into_output(self) -> Gpio:
        """Make the pin an output pin."""
        self.into_alt(Function.OUTPUT)
        self._state = PinState.OUTPUT
        return self

    def into_input(self) -> Gpio:
        """Make the pin an input pin."""
        self.into_alt(Function.INPUT)
        self._state = PinState.INPUT
        return self

    def _bit(self) -> int:
        return 1 << (self._pin % 32)

    def set(self) -> None:
        """Turn the output pin on."""
        self._require(PinState.OUTPUT, "set")
        self._set[self._pin // 32].write(self._bit())

    def clear(self) -> None:
        """Turn the output pin off."""
        self._require(PinState.OUTPUT, "clear")
        self._clr[self._pin // 32].write(self._bit())

    def level(self) -> bool:
        """Return ``True`` when the input pin's level is high."""
        self._require(PinState.INPUT, "read")
        return self._lev[self._pin // 32].has_mask(self._bit())

    def __repr__(self) -> str:
        return f"Gpio(pin={self._pin}, state={self._state.value})"