"""Small value types: a string/number builder, durations and ``maximum``."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Builder:
    """Builds a string from an optional text and an optional number."""

    text: str | None = None
    count: int | None = None

    def string(self, value: str) -> Builder:
        """Return a builder with its text set to ``value``."""
        return replace(self, text=str(value))

    def number(self, value: int) -> Builder:
        """Return a builder with its number set to ``value``."""
        if value < 0:
            raise ValueError("number must not be negative")
        return replace(self, count=value)

    def __str__(self) -> str:
        return " ".join(str(part) for part in (self.text, self.count) if part is not None)


class _Unit(Enum):
    MILLISECONDS = ("MilliSeconds", 1, 64)
    SECONDS = ("Seconds", 1_000, 32)
    MINUTES = ("Minutes", 60_000, 16)

    def __init__(self, label: str, factor: int, bits: int) -> None:
        self.label = label
        self.factor = factor
        self.bits = bits


class Duration:
    """A span of time in one unit; spans compare equal by total length.

    Build one with :meth:`milliseconds`, :meth:`seconds` or :meth:`minutes`.
    """

    __slots__ = ("_unit", "_amount")

    def __init__(self, unit: _Unit, amount: int) -> None:
        if not 0 <= amount < 1 << unit.bits:
            raise ValueError(f"{unit.label} must fit in {unit.bits} unsigned bits")
        self._unit = unit
        self._amount = amount

    @classmethod
    def milliseconds(cls, value: int) -> Duration:
        return cls(_Unit.MILLISECONDS, value)

    @classmethod
    def seconds(cls, value: int) -> Duration:
        return cls(_Unit.SECONDS, value)

    @classmethod
    def minutes(cls, value: int) -> Duration:
        return cls(_Unit.MINUTES, value)

    @property
    def total_milliseconds(self) -> int:
        """The span's length in milliseconds."""
        return self._amount * self._unit.factor

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.total_milliseconds == other.total_milliseconds

    def __hash__(self) -> int:
        return hash(self.total_milliseconds)

    def __repr__(self) -> str:
        return f"{self._unit.label}({self._amount})"


def maximum(first: T, second: T) -> T:
    """Return the larger of two values, preferring ``second`` on ties."""
    return first if first > second else second