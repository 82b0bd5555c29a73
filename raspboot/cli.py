"""Command-line tool that writes a file to a TTY, by XMODEM unless told otherwise."""

from __future__ import annotations

import argparse
import shutil
import sys
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import BinaryIO, Callable, Iterator, Sequence

import serial

from raspboot.progress import Progress
from raspboot.serialopts import (
    parse_baud_rate,
    parse_flow_control,
    parse_stop_bits,
    parse_width,
)
from raspboot.xmodem import XmodemError, transmit


def _argument(parse: Callable[[str], object]) -> Callable[[str], object]:
    def convert(text: str) -> object:
        try:
            return parse(text)
        except ValueError as error:
            raise argparse.ArgumentTypeError(str(error)) from None

    convert.__name__ = parse.__name__
    return convert


def _seconds(text: str) -> int:
    if not text.isdigit():
        raise ValueError(f"invalid number of seconds: {text!r}")
    return int(text)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the command."""
    parser = argparse.ArgumentParser(
        description="Write to TTY using the XMODEM protocol by default."
    )
    parser.add_argument(
        "-i", dest="input", type=Path, default=None,
        help="Input file (defaults to stdin if not set)",
    )
    parser.add_argument(
        "-b", "--baud", dest="baud_rate", type=_argument(parse_baud_rate),
        default="115200", help="Set baud rate",
    )
    parser.add_argument(
        "-t", "--timeout", dest="timeout", type=_argument(_seconds),
        default="10", help="Set timeout in seconds",
    )
    parser.add_argument(
        "-w", "--width", dest="char_width", type=_argument(parse_width),
        default="8", help="Set data character width in bits",
    )
    parser.add_argument("tty_path", type=Path, help="Path to TTY device")
    parser.add_argument(
        "-f", "--flow-control", dest="flow_control", type=_argument(parse_flow_control),
        default="none", help="Enable flow control ('hardware' or 'software')",
    )
    parser.add_argument(
        "-s", "--stop-bits", dest="stop_bits", type=_argument(parse_stop_bits),
        default="1", help="Set number of stop bits",
    )
    parser.add_argument("-r", "--raw", action="store_true", help="Disable XMODEM")
    return parser


def print_progress(progress: Progress) -> None:
    """Print a transfer progress report."""
    print(f"Progress: {progress}")


@contextmanager
def _open_input(path: Path | None) -> Iterator[BinaryIO]:
    if path is None:
        with nullcontext(sys.stdin.buffer) as stream:
            yield stream
        return
    try:
        stream = open(path, "rb")
    except OSError as error:
        raise SystemExit(f"failed to open file: {error}") from None
    with stream:
        yield stream


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; return the exit status."""
    args = build_parser().parse_args(argv)
    try:
        port = serial.Serial(
            port=str(args.tty_path),
            baudrate=args.baud_rate,
            bytesize=args.char_width,
            stopbits=args.stop_bits,
            xonxoff=args.flow_control.xonxoff,
            rtscts=args.flow_control.rtscts,
            timeout=args.timeout,
        )
    except (serial.SerialException, ValueError) as error:
        raise SystemExit(f"path points to invalid TTY: {error}") from None

    with port, _open_input(args.input) as source:
        if args.raw:
            try:
                shutil.copyfileobj(source, port)
            except OSError as error:
                raise SystemExit(f"failed to copy input to tty: {error}") from None
        else:
            try:
                transmit(source, port, print_progress)
            except XmodemError as error:
                raise SystemExit(
                    f"error occurred during transmission: {error!r}"
                ) from None
    return 0


if __name__ == "__main__":
    sys.exit(main())