import pytest

from twitch_bridge.irc.heartbeat import KeepaliveTimer


def test_fires_only_when_strictly_over_interval():
    timer = KeepaliveTimer(10.0)
    assert timer.advance(4.0) is False
    assert timer.advance(6.0) is False
    assert timer.elapsed_total == 10.0
    assert timer.advance(0.5) is True
    assert timer.elapsed_total == 0.0


def test_overshoot_is_discarded():
    timer = KeepaliveTimer(10.0)
    assert timer.advance(25.0) is True
    # One PING per crossing, remainder not carried
    assert timer.elapsed_total == 0.0
    assert timer.advance(5.0) is False


def test_reset():
    timer = KeepaliveTimer(10.0)
    timer.advance(9.0)
    timer.reset()
    assert timer.elapsed_total == 0.0
    assert timer.advance(9.0) is False


def test_default_interval_is_sixty_seconds():
    assert KeepaliveTimer().interval == 60.0


@pytest.mark.parametrize("interval", [0, -1.0])
def test_rejects_non_positive_interval(interval):
    with pytest.raises(ValueError):
        KeepaliveTimer(interval)
