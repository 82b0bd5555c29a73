# raspboot

Send programs to a Raspberry Pi over a serial line with XMODEM, and work
with a pure-Python model of the small firmware pieces on the other end:
a mini UART, GPIO pins, the system timer, a bootloader and a kernel shell,
all running against simulated memory-mapped registers.

## Installing

```
pip install .
```

## Sending a file to a device

The `ttywrite` command writes a file, or standard input, to a TTY
device. It uses XMODEM unless `-r`/`--raw` is given, in which case the
bytes are copied to the port as they are.

```
ttywrite -i kernel.bin /dev/ttyUSB0
ttywrite --baud 115200 --timeout 10 --width 8 --stop-bits 1 --flow-control none /dev/ttyUSB0 < kernel.bin
ttywrite --raw -i notes.txt /dev/ttyUSB0
```

Options:

| Option | Default | Meaning |
| --- | --- | --- |
| `tty_path` | (required) | Path to the TTY device |
| `-i FILE` | stdin | Input file |
| `-b`, `--baud` | `115200` | Baud rate (unsigned decimal) |
| `-t`, `--timeout` | `10` | Serial timeout in seconds |
| `-w`, `--width` | `8` | Character width in bits, 5 to 8 |
| `-s`, `--stop-bits` | `1` | Stop bits, `1` or `2` |
| `-f`, `--flow-control` | `none` | `none`, `software` (XON/XOFF) or `hardware` (RTS/CTS) |
| `-r`, `--raw` | off | Disable XMODEM |

During an XMODEM transfer each progress event is printed as a line such
as `Progress: Started` or `Progress: Packet(3)`. A failed transfer ends
the command with the error.

## Using the library

```python
import io
from raspboot.xmodem import transmit, receive

# `port` is any object with read(size) and write(data), such as serial.Serial
sent = transmit(io.BytesIO(b"hello"), port)   # bytes sent, without padding
got = receive(port, io.BytesIO())             # bytes received, a multiple of 128
```

### Modules

- `raspboot.xmodem`: the XMODEM protocol with 128-byte packets and an
  8-bit checksum. `transmit(data, to, progress)` accepts bytes or a
  binary stream and zero-pads the last packet; `receive(source, into,
  progress)` writes each packet to `into`. Both retry a packet up to ten
  times on a checksum failure. The `Xmodem` class works one packet at a
  time (`read_packet`, `write_packet`). Failures raise `XmodemError`,
  whose `kind` says what went wrong. `read_max(stream, size)` reads until
  `size` bytes or end of stream.
- `raspboot.progress`: `Progress` events (`Progress.waiting()`,
  `Progress.started()`, `Progress.packet_sent(n)`), `ProgressKind`, and
  the `noop` callback.
- `raspboot.serialopts`: `parse_width`, `parse_stop_bits`,
  `parse_flow_control` and `parse_baud_rate`, which raise `ValueError`
  on bad input, and the `FlowControl` enum.
- `raspboot.stackvec`: `StackVec`, a vector of fixed capacity over
  storage you supply. Pushing onto a full vector raises
  `StackVecFullError`; `pop` on an empty one returns `None`.
- `raspboot.volatile`: `Memory`, a simulated little-endian register
  space with read and write hooks, and the register views
  `ReadVolatile`, `WriteVolatile`, `Volatile` and `UniqueVolatile`.
- `raspboot.gpio`: `Gpio` pins that are configured once with
  `into_input`, `into_output` or `into_alt`; using a pin in the wrong
  state raises `GpioStateError`.
- `raspboot.timer`: `Timer`, `current_time`, `spin_sleep_us` and
  `spin_sleep_ms`, reading the simulated counter registers.
- `raspboot.uart`: `MiniUart`, with `read`/`write`, byte access,
  `write_str` (CR before every LF) and an optional read timeout that
  raises `TimeoutError`.
- `raspboot.mutex`: `Mutex`, a lock that owns its value; `lock()`
  returns a guard usable as a context manager.
- `raspboot.console`: `Console`, which creates its device on first use,
  and `kprint`/`kprintln`, which lock the console first when given a
  `Mutex`.
- `raspboot.shell`: `Command.parse` splits a line on spaces (at most 64
  arguments), and `Shell` echoes input, handles backspace and delete,
  and runs each line. The only command is `echo`; anything else prints
  `unknown command: <name>`. `kmain(console)` runs the shell forever.
- `raspboot.bootloader`: `load_binary(channel, memory)` receives a
  binary over XMODEM into memory at `0x80000`, retrying until a transfer
  succeeds; `boot(channel, memory)` does the same and returns that
  address.
- `raspboot.memops`: `memcpy`, `memmove`, `memset` and `memcmp` over
  byte buffers.
- `raspboot.ferris`: small value types, `Builder`, `Duration` and
  `maximum`.

## What it does not do

- The GPIO, timer, UART, console, shell and bootloader act on a
  simulated `Memory`, not on real hardware; to use them, install hooks
  on the memory to play the part of the device.
- `boot` does not run the loaded binary; it only returns the address at
  which it would be entered.
- `ttywrite` only sends. There is no command for receiving a file.

## Running the tests

```
pip install .[test]
pytest
```