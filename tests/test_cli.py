import io
import sys
from pathlib import Path
from unittest import mock

import pytest
import serial

from raspboot.cli import build_parser, main, print_progress
from raspboot.progress import Progress
from raspboot.serialopts import FlowControl
from raspboot.xmodem import ACK, EOT, NAK, SOH


class FakePort:
    def __init__(self, responses=b""):
        self._responses = io.BytesIO(responses)
        self.written = bytearray()
        self.closed = False

    def read(self, size=1):
        return self._responses.read(size)

    def write(self, data):
        self.written += data
        return len(data)

    def flush(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True


def test_parser_defaults():
    args = build_parser().parse_args(["/dev/ttyUSB0"])
    assert args.tty_path == Path("/dev/ttyUSB0")
    assert args.input is None
    assert args.baud_rate == 115200
    assert args.timeout == 10
    assert args.char_width == serial.EIGHTBITS
    assert args.flow_control is FlowControl.NONE
    assert args.stop_bits == serial.STOPBITS_ONE
    assert args.raw is False


def test_parser_options():
    args = build_parser().parse_args(
        ["-f", "hardware", "-s", "2", "-w", "7", "-r", "-i", "kernel.bin", "tty"]
    )
    assert args.flow_control is FlowControl.HARDWARE
    assert args.stop_bits == serial.STOPBITS_TWO
    assert args.char_width == serial.SEVENBITS
    assert args.raw is True
    assert args.input == Path("kernel.bin")


def test_bad_width_reports_parser_message(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["-w", "9", "tty"])
    assert excinfo.value.code == 2
    assert "value must be >= 5 and <= 8" in capsys.readouterr().err


def test_print_progress(capsys):
    print_progress(Progress.packet_sent(3))
    print_progress(Progress.waiting())
    assert capsys.readouterr().out == "Progress: Packet(3)\nProgress: Waiting\n"


def test_raw_mode_copies_file(tmp_path):
    path = tmp_path / "kernel.bin"
    content = bytes(range(200))
    path.write_bytes(content)
    port = FakePort()
    with mock.patch("raspboot.cli.serial.Serial", return_value=port) as opener:
        assert main(["-r", "-i", str(path), "/dev/ttyUSB0"]) == 0
    assert bytes(port.written) == content
    assert port.closed
    kwargs = opener.call_args.kwargs
    assert kwargs["port"] == "/dev/ttyUSB0"
    assert kwargs["baudrate"] == 115200
    assert kwargs["timeout"] == 10
    assert kwargs["xonxoff"] is False and kwargs["rtscts"] is False


def test_raw_mode_reads_stdin(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"from stdin")))
    port = FakePort()
    with mock.patch("raspboot.cli.serial.Serial", return_value=port):
        assert main(["-r", "tty"]) == 0
    assert bytes(port.written) == b"from stdin"


def test_xmodem_mode_sends_packet(tmp_path, capsys):
    path = tmp_path / "kernel.bin"
    path.write_bytes(b"hello")
    port = FakePort(bytes([NAK, ACK, NAK, ACK]))
    with mock.patch("raspboot.cli.serial.Serial", return_value=port):
        assert main(["-i", str(path), "-f", "software", "tty"]) == 0
    written = bytes(port.written)
    assert written[:3] == bytes([SOH, 1, 255 - 1])
    assert written[3:8] == b"hello"
    assert written[-2:] == bytes([EOT, EOT])
    out = capsys.readouterr().out
    assert "Progress: Waiting" in out
    assert "Progress: Packet(1)" in out


def test_xmodem_failure_exits_with_message(tmp_path):
    path = tmp_path / "kernel.bin"
    path.write_bytes(b"data")
    with mock.patch("raspboot.cli.serial.Serial", return_value=FakePort()):
        with pytest.raises(SystemExit) as excinfo:
            main(["-i", str(path), "tty"])
    assert str(excinfo.value.code).startswith("error occurred during transmission")


def test_invalid_tty_exits_with_message():
    failure = serial.SerialException("no such device")
    with mock.patch("raspboot.cli.serial.Serial", side_effect=failure):
        with pytest.raises(SystemExit) as excinfo:
            main(["/dev/missing"])
    assert str(excinfo.value.code).startswith("path points to invalid TTY")


def test_missing_input_file_exits(tmp_path):
    with mock.patch("raspboot.cli.serial.Serial", return_value=FakePort()):
        with pytest.raises(SystemExit) as excinfo:
            main(["-i", str(tmp_path / "absent.bin"), "tty"])
    assert str(excinfo.value.code).startswith("failed to open file")