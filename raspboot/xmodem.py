"""The XMODEM file-transfer protocol over a byte stream."""

from __future__ import annotations

from typing import BinaryIO, Protocol

from raspboot.progress import Progress, ProgressFn, noop

SOH = 0x01
EOT = 0x04
ACK = 0x06
NAK = 0x15
CAN = 0x18

PACKET_SIZE = 128
_RETRIES = 10


class _Stream(Protocol):
    def read(self, size: int) -> bytes: ...

    def write(self, data: bytes) -> int | None: ...


class XmodemError(Exception):
    """A failed XMODEM exchange; ``kind`` says what went wrong."""

    UNEXPECTED_EOF = "unexpected_eof"
    CONNECTION_ABORTED = "connection_aborted"
    INVALID_DATA = "invalid_data"
    INTERRUPTED = "interrupted"
    BROKEN_PIPE = "broken_pipe"
    WRITE_ZERO = "write_zero"

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"XmodemError({self.kind!r}, {self.message!r})"


def read_max(stream: BinaryIO, size: int) -> bytes:
    """Read up to ``size`` bytes, stopping early only at end of stream."""
    chunks = bytearray()
    while len(chunks) < size:
        try:
            chunk = stream.read(size - len(chunks))
        except InterruptedError:
            continue
        if not chunk:
            break
        chunks += chunk
    return bytes(chunks)


def _write_all(stream: _Stream, data: bytes) -> None:
    view = memoryview(data)
    while view:
        try:
            written = stream.write(bytes(view))
        except InterruptedError:
            continue
        if written is None:
            return
        if written == 0:
            raise XmodemError(XmodemError.WRITE_ZERO, "failed to write whole buffer")
        view = view[written:]


class Xmodem:
    """One end of an XMODEM transfer over ``inner``, usable to send or receive."""

    def __init__(self, inner: _Stream, progress: ProgressFn = noop) -> None:
        self._inner = inner
        self._progress = progress
        self._packet = 1
        self._started = False

    def read_byte(self, abort_on_can: bool = False) -> int:
        """Read one byte; with ``abort_on_can``, a CAN byte aborts the transfer."""
        while True:
            try:
                data = self._inner.read(1)
            except InterruptedError:
                continue
            break
        if not data:
            raise XmodemError(XmodemError.UNEXPECTED_EOF, "failed to fill whole buffer")
        byte = data[0]
        if abort_on_can and byte == CAN:
            raise XmodemError(XmodemError.CONNECTION_ABORTED, "received CAN")
        return byte

    def write_byte(self, byte: int) -> None:
        """Write one byte to the inner stream."""
        _write_all(self._inner, bytes([byte]))

    def expect_byte(self, byte: int, message: str) -> int:
        """Read a byte that must equal ``byte``; CAN aborts, others are invalid."""
        in_byte = self.read_byte(False)
        if in_byte == byte:
            return in_byte
        if in_byte == CAN:
            raise XmodemError(XmodemError.CONNECTION_ABORTED, "CAN received")
        raise XmodemError(XmodemError.INVALID_DATA, message)

    def expect_byte_or_cancel(self, byte: int, message: str) -> int:
        """Like :meth:`expect_byte`, but send CAN to the peer on a mismatch."""
        in_byte = self.read_byte(False)
        if in_byte == byte:
            return in_byte
        self.write_byte(CAN)
        if in_byte == CAN:
            raise XmodemError(XmodemError.CONNECTION_ABORTED, "CAN received")
        raise XmodemError(XmodemError.INVALID_DATA, message)

    def read_packet(self, size: int = PACKET_SIZE) -> bytes:
        """Receive one packet of ``size`` bytes; return ``b""`` at end of transmission.

        A failed checksum raises an ``interrupted`` error after NAKing the packet,
        so the caller may simply try again.
        """
        if size < PACKET_SIZE:
            raise XmodemError(XmodemError.UNEXPECTED_EOF, "buffer too small")

        if not self._started:
            self.write_byte(NAK)
            self._started = True
            self._progress(Progress.started())

        in_byte = self.read_byte(True)
        if in_byte == SOH:
            self.expect_byte_or_cancel(self._packet, "unexpected packet number")
            self.expect_byte_or_cancel(0xFF - self._packet, "packet number failed validation")
            payload = bytes(self.read_byte(False) for _ in range(size))
            checksum = sum(payload) & 0xFF
            if self.read_byte(False) == checksum:
                self.write_byte(ACK)
                self._progress(Progress.packet_sent(self._packet))
                self._packet = (self._packet + 1) & 0xFF
                return payload
            self.write_byte(NAK)
            raise XmodemError(XmodemError.INTERRUPTED, "checksum failed validation")
        if in_byte == EOT:
            self.write_byte(NAK)
            self.expect_byte(EOT, "expected EOT")
            self.write_byte(ACK)
            self._started = False
            return b""
        raise XmodemError(XmodemError.INVALID_DATA, "received packet that isn't EOT or SOH")

    def write_packet(self, data: bytes) -> int:
        """Send one packet, or end of transmission when ``data`` is empty.

        Returns the number of bytes sent. A NAK from the receiver raises an
        ``interrupted`` error so the caller may resend.
        """
        data = bytes(data)
        length = len(data)
        if 0 < length < PACKET_SIZE:
            raise XmodemError(XmodemError.UNEXPECTED_EOF, "buffer too small")

        if not self._started:
            self._progress(Progress.waiting())
            self.expect_byte(NAK, "expected NAK")
            self._started = True
            self._progress(Progress.started())

        if length == 0:
            self.write_byte(EOT)
            self.expect_byte(NAK, "expected NAK")
            self.write_byte(EOT)
            self.expect_byte(ACK, "expected ACK")
            self._started = False
            return 0

        self.write_byte(SOH)
        self.write_byte(self._packet)
        self.write_byte(0xFF - self._packet)
        for byte in data:
            self.write_byte(byte)
        self.write_byte(sum(data) & 0xFF)

        in_byte = self.read_byte(True)
        if in_byte == ACK:
            self._progress(Progress.packet_sent(self._packet))
            self._packet = (self._packet + 1) & 0xFF
            return length
        if in_byte == NAK:
            raise XmodemError(XmodemError.INTERRUPTED, "checksum failed validation")
        raise XmodemError(XmodemError.INVALID_DATA, "received packet that isn't ACK or NAK")

    def flush(self) -> None:
        """Flush the inner stream, if it can be flushed."""
        flush = getattr(self._inner, "flush", None)
        if flush is not None:
            flush()


def transmit(data, to: _Stream, progress: ProgressFn = noop) -> int:
    """Send ``data`` (bytes or a binary stream) to ``to``, zero-padding the last packet.

    Returns the number of bytes sent, not counting padding.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        chunks = bytes(data)
        offsets = iter(range(0, len(chunks), PACKET_SIZE))

        def next_chunk() -> bytes:
            start = next(offsets, None)
            return b"" if start is None else chunks[start : start + PACKET_SIZE]

    else:

        def next_chunk() -> bytes:
            return read_max(data, PACKET_SIZE)

    transmitter = Xmodem(to, progress)
    written = 0
    while True:
        chunk = next_chunk()
        if not chunk:
            transmitter.write_packet(b"")
            return written
        packet = chunk.ljust(PACKET_SIZE, b"\x00")
        for _ in range(_RETRIES):
            try:
                transmitter.write_packet(packet)
            except XmodemError as error:
                if error.kind == XmodemError.INTERRUPTED:
                    continue
                raise
            written += len(chunk)
            break
        else:
            raise XmodemError(XmodemError.BROKEN_PIPE, "bad transmit")


def receive(source: _Stream, into: BinaryIO, progress: ProgressFn = noop) -> int:
    """Receive a transfer from ``source`` and write it to ``into``.

    Returns the number of bytes received, a multiple of 128.
    """
    receiver = Xmodem(source, progress)
    received = 0
    while True:
        for _ in range(_RETRIES):
            try:
                packet = receiver.read_packet(PACKET_SIZE)
            except XmodemError as error:
                if error.kind == XmodemError.INTERRUPTED:
                    continue
                raise
            break
        else:
            raise XmodemError(XmodemError.BROKEN_PIPE, "bad receive")
        if not packet:
            return received
        received += len(packet)
        _write_all(into, packet)