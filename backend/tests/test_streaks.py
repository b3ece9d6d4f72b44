from datetime import date

from timeledger.models.streak import UserStreak
from timeledger.services import streaks as streaks_service

from conftest import OWNER


def test_new_owner_has_empty_streak(db):
    streak = streaks_service.get_streak(db, OWNER)
    assert (streak.current_streak, streak.longest_streak, streak.last_activity_date) == (0, 0, None)


def test_consecutive_days_extend_streak(db):
    first = streaks_service.update_streak(db, OWNER, today=date(2024, 3, 4))
    second = streaks_service.update_streak(db, OWNER, today=date(2024, 3, 5))

    assert (first.current_streak, first.streak_increased) == (1, True)
    assert (second.current_streak, second.longest_streak, second.streak_increased) == (2, 2, True)


def test_same_day_update_is_a_no_op(db):
    streaks_service.update_streak(db, OWNER, today=date(2024, 3, 4))
    again = streaks_service.update_streak(db, OWNER, today=date(2024, 3, 4))

    assert (again.current_streak, again.streak_increased) == (1, False)
    assert db.query(UserStreak).count() == 1


def test_gap_resets_current_but_keeps_longest(db):
    for day in (4, 5, 6):
        streaks_service.update_streak(db, OWNER, today=date(2024, 3, day))

    restarted = streaks_service.update_streak(db, OWNER, today=date(2024, 3, 9))

    assert (restarted.current_streak, restarted.longest_streak) == (1, 3)
    stored = streaks_service.get_streak(db, OWNER)
    assert stored.last_activity_date == date(2024, 3, 9)


def test_streaks_are_per_owner(db):
    streaks_service.update_streak(db, OWNER, today=date(2024, 3, 4))
    assert streaks_service.get_streak(db, "someone-else").current_streak == 0
