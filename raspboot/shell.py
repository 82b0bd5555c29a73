"""A line-editing command shell that runs over the kernel console."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn

from raspboot.console import ConsoleLike, kprint, kprintln
from raspboot.mutex import Mutex
from raspboot.stackvec import StackVec, StackVecFullError

INPUT_CAPACITY = 512
"""The longest line the shell accepts, in bytes."""

MAX_ARGS = 64
"""The most arguments a command may have."""

PROMPT = "> "

_BACKSPACE = 0x08
_DELETE = 0x7F
_CR = 0x0D
_LF = 0x0A


class CommandError(Exception):
    """A line could not be parsed as a command."""


class EmptyCommandError(CommandError):
    """The line holds no arguments."""


class TooManyArgsError(CommandError):
    """The line holds more arguments than allowed."""


@dataclass(frozen=True)
class Command:
    """A parsed command line: the path followed by its arguments."""

    args: tuple[str, ...]

    @classmethod
    def parse(cls, line: str, max_args: int = MAX_ARGS) -> Command:
        """Split ``line`` on spaces into at most ``max_args`` arguments."""
        if max_args < 0:
            raise ValueError("max_args must not be negative")
        args: StackVec[str] = StackVec([""] * max_args)
        try:
            for arg in filter(None, line.split(" ")):
                args.push(arg)
        except StackVecFullError:
            raise TooManyArgsError(f"more than {max_args} arguments") from None
        if args.is_empty():
            raise EmptyCommandError("empty command")
        return cls(tuple(args))

    def path(self) -> str:
        """Return the command's path, its first argument."""
        return self.args[0]


class Shell:
    """Reads bytes from the console, echoes them and runs each completed line."""

    def __init__(self, console: ConsoleLike, prefix: str = PROMPT) -> None:
        self._console = console
        self.prefix = prefix
        self._reset()

    def _reset(self) -> None:
        self._input: StackVec[int] = StackVec(bytearray(INPUT_CAPACITY))

    def _print(self, text: str) -> None:
        kprint(self._console, text)

    def _println(self, text: str = "") -> None:
        kprintln(self._console, text)

    def _read_byte(self) -> int:
        if isinstance(self._console, Mutex):
            with self._console.lock() as guard:
                return guard.value.read_byte()
        return self._console.read_byte()

    def feed(self, byte: int) -> bool:
        """Handle one input byte; return ``True`` once a line has been run."""
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"not a byte: {byte}")
        self._print(chr(byte))
        if byte in (_BACKSPACE, _DELETE):
            if not self._input.is_empty():
                self._input.pop()
                self._print("\b \b")
            return False
        if byte in (_CR, _LF):
            self._println()
            line = bytes(self._input).decode("ascii")
            self._reset()
            self._execute(line)
            return True
        if byte < 0x80:
            try:
                self._input.push(byte)
            except StackVecFullError:
                self._println("error: input too long")
            return False
        self._print(str(7))
        return False

    def _execute(self, line: str) -> None:
        try:
            command = Command.parse(line)
        except EmptyCommandError:
            return
        except TooManyArgsError:
            self._println("error: too many arguments")
            return
        if command.path() == "echo":
            for arg in command.args[1:]:
                self._print(f"{arg} ")
            self._println()
        else:
            self._println(f"unknown command: {command.path()}")

    def run(self) -> NoReturn:
        """Prompt and run lines forever; only errors from the console end it."""
        while True:
            self._print(self.prefix)
            while not self.feed(self._read_byte()):
                pass


def kmain(console: ConsoleLike) -> NoReturn:
    """Start the kernel shell on ``console``."""
    Shell(console, PROMPT).run()