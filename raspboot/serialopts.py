"""Parsers for serial-port settings given on the command line."""

from __future__ import annotations

import re
from enum import Enum

import serial

_WIDTHS = {
    "5": serial.FIVEBITS,
    "6": serial.SIXBITS,
    "7": serial.SEVENBITS,
    "8": serial.EIGHTBITS,
}

_STOP_BITS = {
    "1": serial.STOPBITS_ONE,
    "2": serial.STOPBITS_TWO,
}

_UNSIGNED = re.compile(r"\+?[0-9]+")


class FlowControl(Enum):
    """Serial flow-control modes."""

    NONE = "none"
    SOFTWARE = "software"
    HARDWARE = "hardware"

    @property
    def xonxoff(self) -> bool:
        """Whether XON/XOFF software flow control is on."""
        return self is FlowControl.SOFTWARE

    @property
    def rtscts(self) -> bool:
        """Whether RTS/CTS hardware flow control is on."""
        return self is FlowControl.HARDWARE


def parse_width(text: str) -> int:
    """Parse a character width of 5 to 8 bits."""
    try:
        return _WIDTHS[text]
    except KeyError:
        raise ValueError("value must be >= 5 and <= 8") from None


def parse_stop_bits(text: str) -> float:
    """Parse a stop-bit count of 1 or 2."""
    try:
        return _STOP_BITS[text]
    except KeyError:
        raise ValueError("value must '1' or '2'") from None


def parse_flow_control(text: str) -> FlowControl:
    """Parse 'none', 'software' or 'hardware'."""
    try:
        return FlowControl(text)
    except ValueError:
        raise ValueError(
            "value must be 'none', 'software' (xon/xoff), or 'hardware' (rts/cts)"
        ) from None


def parse_baud_rate(text: str) -> int:
    """Parse a baud rate as an unsigned decimal integer."""
    if not _UNSIGNED.fullmatch(text):
        raise ValueError(f"invalid baud rate: {text!r}")
    rate = int(text)
    if rate >= 1 << 64:
        raise ValueError(f"baud rate too large: {text!r}")
    return rate