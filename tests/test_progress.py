import pytest

from raspboot.progress import Progress, ProgressKind, noop


def test_waiting_and_started_kinds():
    assert Progress.waiting().kind is ProgressKind.WAITING
    assert Progress.started().kind is ProgressKind.STARTED
    assert Progress.waiting().number is None


def test_packet_carries_number():
    progress = Progress.packet_sent(3)
    assert progress.kind is ProgressKind.PACKET
    assert progress.number == 3


def test_str_matches_variant_names():
    assert str(Progress.waiting()) == "Waiting"
    assert str(Progress.started()) == "Started"
    assert str(Progress.packet_sent(7)) == "Packet(7)"


def test_equality_by_value():
    assert Progress.packet_sent(5) == Progress.packet_sent(5)
    assert Progress.packet_sent(5) != Progress.packet_sent(6)
    assert Progress.started() == Progress(ProgressKind.STARTED)


@pytest.mark.parametrize("number", [-1, 256])
def test_packet_number_out_of_range(number):
    with pytest.raises(ValueError):
        Progress.packet_sent(number)


def test_non_packet_rejects_number():
    with pytest.raises(ValueError):
        Progress(ProgressKind.WAITING, 1)


def test_noop_accepts_every_kind():
    reports = [Progress.waiting(), Progress.started(), Progress.packet_sent(1)]
    assert [noop(report) for report in reports] == [None, None, None]