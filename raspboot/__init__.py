"""XMODEM serial transfer, and a simulated Raspberry Pi UART, GPIO, timer, bootloader and shell."""

__version__ = "0.1.0"