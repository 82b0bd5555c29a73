import pytest

from raspboot.serialopts import (
    FlowControl,
    parse_baud_rate,
    parse_flow_control,
    parse_stop_bits,
    parse_width,
)


@pytest.mark.parametrize("text", ["5", "6", "7", "8"])
def test_parse_width_valid(text):
    assert parse_width(text) == int(text)


@pytest.mark.parametrize("text", ["4", "9", "", "eight"])
def test_parse_width_invalid(text):
    with pytest.raises(ValueError, match="value must be >= 5 and <= 8"):
        parse_width(text)


@pytest.mark.parametrize("text", ["1", "2"])
def test_parse_stop_bits_valid(text):
    assert parse_stop_bits(text) == int(text)


def test_parse_stop_bits_invalid():
    with pytest.raises(ValueError, match="'1' or '2'"):
        parse_stop_bits("3")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("none", FlowControl.NONE),
        ("software", FlowControl.SOFTWARE),
        ("hardware", FlowControl.HARDWARE),
    ],
)
def test_parse_flow_control_valid(text, expected):
    assert parse_flow_control(text) is expected


def test_parse_flow_control_invalid():
    with pytest.raises(ValueError, match="'none', 'software'"):
        parse_flow_control("HARDWARE")


@pytest.mark.parametrize(
    "text, flags",
    [
        ("none", (False, False)),
        ("software", (True, False)),
        ("hardware", (False, True)),
    ],
)
def test_flow_control_flags(text, flags):
    parsed = parse_flow_control(text)
    assert (parsed.xonxoff, parsed.rtscts) == flags


def test_parse_baud_rate_default():
    assert parse_baud_rate("115200") == 115200


def test_parse_baud_rate_leading_plus():
    assert parse_baud_rate("+9600") == 9600


@pytest.mark.parametrize("text", ["", "-1", "abc", "96 00", "1.5"])
def test_parse_baud_rate_invalid(text):
    with pytest.raises(ValueError):
        parse_baud_rate(text)