import pytest

from raspboot.memops import memcmp, memcpy, memmove, memset


def test_memcpy_copies_prefix():
    dest = bytearray(5)
    result = memcpy(dest, b"hello", 3)
    assert result is dest
    assert dest == bytearray(b"hel\x00\x00")


def test_memcpy_zero_length_leaves_dest():
    dest = bytearray(b"abc")
    memcpy(dest, b"xyz", 0)
    assert dest == bytearray(b"abc")


def test_memcpy_too_long():
    with pytest.raises(IndexError):
        memcpy(bytearray(2), b"abc", 3)


def test_memmove_forward_overlap():
    buffer = bytearray(b"abcdefgh")
    original = bytes(buffer)
    result = memmove(buffer, 4, 2, 4)
    assert result is buffer
    assert buffer[4:8] == original[2:6]
    assert buffer[:4] == original[:4]


def test_memmove_backward_overlap():
    buffer = bytearray(b"abcdefgh")
    original = bytes(buffer)
    memmove(buffer, 0, 2, 4)
    assert buffer[0:4] == original[2:6]
    assert buffer[4:] == original[4:]


def test_memmove_out_of_range():
    with pytest.raises(IndexError):
        memmove(bytearray(4), 2, 0, 3)


def test_memset_fills_prefix():
    buffer = bytearray(4)
    result = memset(buffer, 0x7F, 3)
    assert result is buffer
    assert buffer == bytearray([0x7F, 0x7F, 0x7F, 0])


def test_memset_truncates_to_byte():
    buffer = bytearray(2)
    memset(buffer, 0x1FF, 2)
    assert buffer == bytearray([0xFF, 0xFF])


def test_memcmp_equal():
    assert memcmp(b"same", b"same", 4) == 0


def test_memcmp_sign():
    assert memcmp(b"abc", b"abd", 3) < 0
    assert memcmp(b"abd", b"abc", 3) > 0


def test_memcmp_antisymmetric():
    first, second = b"\x10\x20\x30", b"\x10\x05\x30"
    assert memcmp(first, second, 3) == -memcmp(second, first, 3)


def test_memcmp_only_first_n():
    assert memcmp(b"abX", b"abY", 2) == 0


def test_memcmp_too_long():
    with pytest.raises(IndexError):
        memcmp(b"ab", b"abc", 3)


def test_negative_length():
    with pytest.raises(ValueError):
        memset(bytearray(2), 0, -1)