"""Byte-buffer copy, move, fill and compare operations."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence


def _check_range(buffer: Sequence[int], start: int, n: int, name: str) -> None:
    if n < 0:
        raise ValueError(f"byte count must be non-negative, not {n}")
    if start < 0 or start + n > len(buffer):
        raise IndexError(
            f"{name}: range {start}..{start + n} is outside a buffer of {len(buffer)} byte(s)"
        )


def memcpy(dest: MutableSequence[int], src: Sequence[int], n: int) -> MutableSequence[int]:
    """Copy the first ``n`` bytes of ``src`` into ``dest`` and return ``dest``."""
    _check_range(dest, 0, n, "dest")
    _check_range(src, 0, n, "src")
    dest[:n] = src[:n]
    return dest


def memmove(buffer: MutableSequence[int], dest: int, src: int, n: int) -> MutableSequence[int]:
    """Move ``n`` bytes inside ``buffer`` from offset ``src`` to ``dest``.

    The regions may overlap; the result is as if the source bytes were
    copied out first. Returns ``buffer``.
    """
    _check_range(buffer, dest, n, "dest")
    _check_range(buffer, src, n, "src")
    buffer[dest : dest + n] = list(buffer[src : src + n])
    return buffer


def memset(buffer: MutableSequence[int], value: int, n: int) -> MutableSequence[int]:
    """Fill the first ``n`` bytes of ``buffer`` with the low byte of ``value``."""
    _check_range(buffer, 0, n, "buffer")
    buffer[:n] = [value & 0xFF] * n
    return buffer


def memcmp(first: Sequence[int], second: Sequence[int], n: int) -> int:
    """Compare the first ``n`` bytes of two buffers.

    Returns the difference of the first pair of bytes that differ, or 0.
    """
    _check_range(first, 0, n, "first")
    _check_range(second, 0, n, "second")
    for a, b in zip(first[:n], second[:n]):
        if a != b:
            return a - b
    return 0