from dataclasses import dataclass

import pytest

from raspboot.ferris import Builder, Duration, maximum


def test_builder_empty():
    assert str(Builder()) == ""


def test_builder_just_string():
    assert str(Builder().string("hi")) == "hi"


def test_builder_just_number():
    assert str(Builder().number(254)) == "254"


def test_builder_both():
    built = Builder().string("hello, world!").number(200)
    assert str(built) == "hello, world! 200"


def test_builder_last_string_wins():
    built = Builder().string("hello, world!").number(200).string("bye now!")
    assert str(built) == "bye now! 200"


def test_builder_owned_string():
    assert str(Builder().string("".join(["heap", "!"]))) == "heap!"


def test_builder_is_immutable():
    base = Builder()
    base.string("ignored")
    assert str(base) == ""


def test_builder_rejects_negative_number():
    with pytest.raises(ValueError):
        Builder().number(-1)


def test_duration_equalities():
    assert Duration.seconds(120) == Duration.minutes(2)
    assert Duration.seconds(420) == Duration.minutes(7)
    assert Duration.milliseconds(420000) == Duration.minutes(7)
    assert Duration.milliseconds(43000) == Duration.seconds(43)


def test_duration_inequality():
    assert Duration.seconds(121) != Duration.minutes(2)


def test_duration_hash_consistent_with_eq():
    assert hash(Duration.seconds(120)) == hash(Duration.minutes(2))
    assert len({Duration.seconds(60), Duration.minutes(1)}) == 1


def test_duration_not_equal_to_int():
    assert (Duration.seconds(1) == 1000) is False


def test_duration_repr():
    assert repr(Duration.milliseconds(1200)) == "MilliSeconds(1200)"
    assert repr(Duration.minutes(10)) == "Minutes(10)"


@pytest.mark.parametrize(
    "factory, value",
    [(Duration.minutes, 1 << 16), (Duration.seconds, 1 << 32), (Duration.milliseconds, -1)],
)
def test_duration_out_of_range(factory, value):
    with pytest.raises(ValueError):
        factory(value)


@dataclass(order=True, frozen=True)
class IntWrapper:
    value: int


def test_maximum():
    assert maximum(1, 3) == 3
    assert maximum(3, 1) == 3
    assert maximum(IntWrapper(120), IntWrapper(248)) == IntWrapper(248)


def test_maximum_prefers_second_on_tie():
    first, second = [1.0], [1.0]
    assert maximum(first, second) is second