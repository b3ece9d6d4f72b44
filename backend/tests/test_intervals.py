import pytest

from timeledger.services.intervals import TimeInterval, crosses_midnight, duration, to_minutes


def test_to_minutes_ignores_seconds():
    assert to_minutes("09:30") == 570
    assert to_minutes("09:30:45") == 570
    assert to_minutes("00:00") == 0


@pytest.mark.parametrize(
    "start,end,expected",
    [
        ("23:00", "05:00", 360),
        ("09:00", "10:30", 90),
        ("22:00", "00:00", 120),
        ("10:00", "10:00", 0),
    ],
)
def test_duration_wraps_past_midnight(start, end, expected):
    assert duration(start, end) == expected


def test_crosses_midnight_only_when_end_precedes_start():
    assert crosses_midnight("23:00", "01:00")
    assert not crosses_midnight("01:00", "23:00")
    assert not crosses_midnight("10:00", "10:00")


def test_time_interval_properties():
    overnight = TimeInterval.from_times("22:30", "06:30")
    assert overnight.crosses_midnight
    assert overnight.minutes == 480
    assert not overnight.is_degenerate
    assert TimeInterval.from_times("08:00", "08:00").is_degenerate
