"""Conflict detection between planned blocks on the same day."""

from __future__ import annotations

from typing import Iterable, Protocol, TypeVar

from timeledger.services.intervals import TimeInterval, to_minutes


class HasTimes(Protocol):
    start_time: str
    end_time: str


BlockT = TypeVar("BlockT", bound=HasTimes)


def intervals_overlap(first: TimeInterval, second: TimeInterval) -> bool:
    """Overlap test for two same-day intervals that may wrap past midnight.

    Two wrapping intervals always conflict. This over-approximates on purpose:
    block rejection depends on it, so it is kept rather than replaced by an
    exact segment comparison.
    """
    crosses1 = first.crosses_midnight
    crosses2 = second.crosses_midnight

    if crosses1 and crosses2:
        return True

    # The wrapping side covers [start, 1440) and [0, end)
    if crosses1:
        return (
            second.start_minute >= first.start_minute
            or second.end_minute <= first.end_minute
        )
    if crosses2:
        return (
            first.start_minute >= second.start_minute
            or first.end_minute <= second.end_minute
        )

    return (
        first.start_minute < second.end_minute
        and first.end_minute > second.start_minute
    )


def times_overlap(start1: str, end1: str, start2: str, end2: str) -> bool:
    return intervals_overlap(
        TimeInterval.from_times(start1, end1),
        TimeInterval.from_times(start2, end2),
    )


def find_overlap(candidate: HasTimes, existing: Iterable[BlockT]) -> BlockT | None:
    """Return the first existing block that conflicts with ``candidate``."""
    for block in existing:
        if times_overlap(
            candidate.start_time, candidate.end_time, block.start_time, block.end_time
        ):
            return block
    return None


def has_overlap(candidate: HasTimes, existing: Iterable[HasTimes]) -> bool:
    return find_overlap(candidate, existing) is not None


def spills_into(candidate: HasTimes, previous_day_block: HasTimes) -> bool:
    """Whether a wrapping block from the previous date runs into ``candidate``.

    Such a block occupies ``[00:00, end)`` of the following date.
    """
    previous = TimeInterval.from_times(
        previous_day_block.start_time, previous_day_block.end_time
    )
    if not previous.crosses_midnight:
        return False
    return to_minutes(candidate.start_time) < previous.end_minute
