"""Tests for TimerConfig."""
import dataclasses

import pytest

from tick_timer import (
    DEFAULT_CHECK_INTERVAL,
    DEFAULT_RESOLUTION,
    UNBOUNDED,
    SimulatedScheduler,
    Timer,
    TimerConfig,
)


def test_config_defaults():
    """Test defaults are 1000ms resolution, unbounded, 50ms polling."""
    config = TimerConfig()
    assert config.resolution == DEFAULT_RESOLUTION == 1000
    assert config.duration == UNBOUNDED == -1
    assert config.check_interval == DEFAULT_CHECK_INTERVAL == 50
    assert config.unbounded


def test_config_bounded():
    """Test a positive duration is not unbounded."""
    config = TimerConfig(resolution=100, duration=250)
    assert not config.unbounded


def test_config_is_frozen():
    """Test TimerConfig fields cannot be reassigned."""
    config = TimerConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.resolution = 5  # type: ignore[misc]


@pytest.mark.parametrize("check_interval", [0, -50])
def test_config_rejects_non_positive_check_interval(check_interval):
    """Test check_interval of 0 or less raises ValueError."""
    with pytest.raises(ValueError, match="check_interval must be positive"):
        TimerConfig(check_interval=check_interval)


def test_config_does_not_validate_resolution_or_duration():
    """Test odd resolution and duration values are accepted as given."""
    config = TimerConfig(resolution=0, duration=-300)
    assert config.resolution == 0
    assert config.duration == -300


def test_timer_from_config():
    """Test Timer.from_config carries all three settings into the timer."""
    sched = SimulatedScheduler()
    calls = []
    config = TimerConfig(resolution=100, duration=250, check_interval=25)
    timer = Timer.from_config(calls.append, config, scheduler=sched, clock=sched.clock)

    assert timer.resolution == 100
    assert timer.duration == 250
    assert timer.check_interval == 25

    timer.start()
    sched.advance(1000)
    # Wake-ups every 25ms: ticks at 100 and 200, expiry at the 300 wake-up.
    assert calls == [100, 200]
    assert not timer.running
