"""Progress reports for XMODEM transfers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable


class ProgressKind(Enum):
    """The stage of a transfer that a :class:`Progress` reports."""

    WAITING = "Waiting"
    STARTED = "Started"
    PACKET = "Packet"


@dataclass(frozen=True)
class Progress:
    """How far a transfer has got; ``number`` is set only for packets."""

    kind: ProgressKind
    number: int | None = None

    def __post_init__(self) -> None:
        if self.kind is ProgressKind.PACKET:
            if not isinstance(self.number, int) or not 0 <= self.number <= 0xFF:
                raise ValueError("packet number must be in 0..=255")
        elif self.number is not None:
            raise ValueError(f"{self.kind.value} carries no packet number")

    @classmethod
    def waiting(cls) -> Progress:
        """Waiting for the receiver to send NAK."""
        return cls(ProgressKind.WAITING)

    @classmethod
    def started(cls) -> Progress:
        """The download or upload has started."""
        return cls(ProgressKind.STARTED)

    @classmethod
    def packet_sent(cls, number: int) -> Progress:
        """Packet ``number`` was transmitted or received."""
        return cls(ProgressKind.PACKET, number)

    def __str__(self) -> str:
        if self.kind is ProgressKind.PACKET:
            return f"Packet({self.number})"
        return self.kind.value


ProgressFn = Callable[[Progress], None]


def noop(progress: Progress) -> None:
    """A progress callback that accepts any report and ignores it."""
    if not isinstance(progress, Progress):
        raise TypeError(f"expected a Progress, not {type(progress).__name__}")