from datetime import date, datetime

import pytest

from timeledger.core.errors import InvalidPeriodError
from timeledger.models.goal import GoalType
from timeledger.schemas.goal import MonthlyGoalCreate
from timeledger.schemas.time_entry import TimeEntryCreate
from timeledger.services import dashboard as dashboard_service
from timeledger.services import goals as goals_service
from timeledger.services import time_entries as time_entries_service

from conftest import OWNER, make_category


def _log(db, category, day, start_hour, minutes):
    start = datetime(2024, 3, day, start_hour, 0)
    end = datetime(2024, 3, day, start_hour + minutes // 60, minutes % 60)
    time_entries_service.create_time_entry(
        db,
        OWNER,
        TimeEntryCreate(category_id=category.id, start_time=start, end_time=end, date=date(2024, 3, day)),
    )


def test_monthly_stats(db, work, leisure):
    pets = make_category(db, "Pets")
    goals_service.upsert_monthly_goal(
        db, OWNER, MonthlyGoalCreate(category_id=work.id, year=2024, month=3, target_hours=10)
    )
    goals_service.upsert_monthly_goal(
        db,
        OWNER,
        MonthlyGoalCreate(
            category_id=leisure.id, year=2024, month=3, target_hours=5, goal_type=GoalType.MAXIMUM
        ),
    )
    _log(db, work, 5, 9, 90)
    _log(db, work, 4, 9, 60)
    _log(db, leisure, 5, 20, 20)

    stats = dashboard_service.monthly_stats(db, OWNER, "2024-03")

    assert stats.total_hours == 2.83
    assert stats.categories_used == 2
    breakdown = {item.category_id: item for item in stats.category_breakdown}
    assert breakdown[work.id].total_minutes == 150
    assert breakdown[work.id].goal_hours == 10
    assert breakdown[work.id].progress_percent == 25
    assert breakdown[leisure.id].goal_hours is None
    assert breakdown[leisure.id].limit_hours == 5
    assert breakdown[leisure.id].progress_percent == 0
    assert breakdown[pets.id].total_minutes == 0
    assert [(d.date.day, d.minutes) for d in stats.daily_totals] == [(4, 60), (5, 110)]


def test_monthly_stats_for_empty_month(db, work):
    stats = dashboard_service.monthly_stats(db, OWNER, "2024-02")
    assert stats.total_hours == 0
    assert stats.categories_used == 0
    assert stats.daily_totals == []
    assert [item.name for item in stats.category_breakdown] == ["Work"]


def test_monthly_stats_rejects_bad_month(db):
    with pytest.raises(InvalidPeriodError):
        dashboard_service.monthly_stats(db, OWNER, "2024-13")
