from types import SimpleNamespace

import pytest

from timeledger.services.overlap import find_overlap, has_overlap, spills_into, times_overlap


def _block(start, end, **extra):
    return SimpleNamespace(start_time=start, end_time=end, **extra)


@pytest.mark.parametrize(
    "first,second",
    [
        (("09:00", "10:00"), ("09:30", "11:00")),
        (("09:00", "12:00"), ("10:00", "11:00")),
        (("09:00", "10:00"), ("10:00", "11:00")),
        (("13:00", "14:00"), ("09:00", "10:00")),
    ],
)
def test_non_crossing_overlap_is_symmetric(first, second):
    assert times_overlap(*first, *second) == times_overlap(*second, *first)


def test_touching_blocks_do_not_overlap():
    assert not times_overlap("09:00", "10:00", "10:00", "11:00")
    assert not times_overlap("10:00", "11:00", "09:00", "10:00")


def test_partial_overlap_detected():
    assert times_overlap("09:00", "10:00", "09:59", "10:30")


def test_two_crossing_blocks_always_overlap():
    assert times_overlap("23:50", "00:10", "23:00", "00:05")
    assert times_overlap("22:00", "00:00", "23:59", "06:00")


def test_one_crossing_block():
    sleep = ("22:00", "06:00")
    assert times_overlap(*sleep, "23:00", "23:30")
    assert times_overlap(*sleep, "05:00", "05:30")
    # Straddling the wake-up time is not caught by the wrap rule
    assert not times_overlap(*sleep, "05:00", "07:00")
    assert not times_overlap(*sleep, "07:00", "21:00")
    assert not times_overlap("07:00", "21:00", *sleep)


def test_find_overlap_returns_first_conflict():
    existing = [
        _block("08:00", "09:00", id=1),
        _block("09:30", "10:30", id=2),
        _block("10:00", "11:00", id=3),
    ]
    conflict = find_overlap(_block("10:15", "10:45"), existing)
    assert conflict.id == 2
    assert not has_overlap(_block("11:00", "12:00"), existing)


def test_spills_into_next_day():
    previous = _block("23:00", "02:00")
    assert spills_into(_block("01:00", "03:00"), previous)
    assert not spills_into(_block("02:00", "03:00"), previous)
    assert not spills_into(_block("01:00", "03:00"), _block("20:00", "22:00"))
