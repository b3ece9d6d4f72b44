"""Minute-of-day interval arithmetic.

Wall-clock times are ``HH:MM`` strings (``HH:MM:SS`` is accepted, seconds are
ignored). An interval whose end is earlier than its start wraps past midnight.
"""

from __future__ import annotations

from dataclasses import dataclass

MINUTES_PER_DAY = 24 * 60


def to_minutes(value: str) -> int:
    parts = value.split(":")
    return int(parts[0]) * 60 + int(parts[1])


def crosses_midnight(start: str, end: str) -> bool:
    return to_minutes(end) < to_minutes(start)


def duration(start: str, end: str) -> int:
    """Length in minutes, wrapping past midnight when ``end < start``.

    A same-day interval with ``end == start`` yields 0; callers reject it.
    """
    start_minute = to_minutes(start)
    end_minute = to_minutes(end)
    if end_minute < start_minute:
        return (MINUTES_PER_DAY - start_minute) + end_minute
    return end_minute - start_minute


@dataclass(frozen=True)
class TimeInterval:
    start_minute: int
    end_minute: int

    @classmethod
    def from_times(cls, start: str, end: str) -> TimeInterval:
        return cls(to_minutes(start), to_minutes(end))

    @property
    def crosses_midnight(self) -> bool:
        return self.end_minute < self.start_minute

    @property
    def is_degenerate(self) -> bool:
        return self.start_minute == self.end_minute

    @property
    def minutes(self) -> int:
        if self.crosses_midnight:
            return (MINUTES_PER_DAY - self.start_minute) + self.end_minute
        return self.end_minute - self.start_minute
