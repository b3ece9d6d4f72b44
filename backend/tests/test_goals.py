from datetime import date

import pytest

from timeledger.core.errors import InvalidPeriodError, NotFoundError
from timeledger.models.goal import GoalType, MonthlyGoal, WeeklyGoal
from timeledger.schemas.block import BlockCreate
from timeledger.schemas.goal import MonthlyGoalCreate, WeeklyGoalCreate
from timeledger.schemas.validation import ValidationReport
from timeledger.services import blocks as blocks_service
from timeledger.services import goals as goals_service
from timeledger.services import validation as validation_service

from conftest import OWNER


def _monthly(target, goal_type="minimum", year=2024, month=3):
    return MonthlyGoal(
        id=1, category_id=1, year=year, month=month, target_hours=target, goal_type=goal_type
    )


def test_minimum_goal_at_eighty_percent_is_on_track():
    result = goals_service.progress(_monthly(20), 16, today=date(2024, 3, 11))

    assert result.percentage == 80
    assert result.status == "on_track"
    assert result.remaining_hours == 4
    assert result.days_remaining == 20
    assert result.daily_required_hours == 0.2


def test_maximum_goal_at_eighty_percent_is_approaching():
    result = goals_service.progress(_monthly(20, "maximum"), 16, today=date(2024, 3, 11))
    assert result.status == "approaching"


@pytest.mark.parametrize(
    "goal_type,percentage,expected",
    [
        ("minimum", 100, "achieved"),
        ("minimum", 79, "at_risk"),
        ("minimum", 50, "at_risk"),
        ("minimum", 49, "behind"),
        ("maximum", 120, "exceeded"),
        ("maximum", 79, "within_limit"),
    ],
)
def test_classify(goal_type, percentage, expected):
    assert goals_service.classify(goal_type, percentage) == expected


def test_zero_target_reports_zero_percent():
    result = goals_service.progress(_monthly(0), 3, today=date(2024, 3, 1))
    assert result.percentage == 0
    assert result.remaining_hours == 0


def test_percentage_rounds_half_up():
    assert goals_service.progress(_monthly(8), 1, today=date(2024, 3, 1)).percentage == 13
    assert goals_service.round_half_up(2.5) == 3


def test_days_remaining_outside_goal_month():
    result = goals_service.progress(_monthly(10), 4, today=date(2024, 5, 2))
    assert result.days_remaining == 0
    assert result.daily_required_hours == 6


def test_weekly_goal_has_no_daily_breakdown():
    goal = WeeklyGoal(id=2, category_id=1, year=2024, week_number=10, target_hours=5, goal_type="minimum")
    result = goals_service.progress(goal, 5)
    assert result.status == "achieved"
    assert result.days_remaining is None
    assert result.daily_required_hours is None


def test_category_without_goal_is_reported_as_no_goal():
    results = goals_service.combine([], {7: 5.0})

    assert len(results) == 1
    assert results[0].status == "no_goal"
    assert results[0].target_hours is None
    assert results[0].percentage is None
    assert results[0].achieved_hours == 5.0


def _validated_block(db, category, on_date, start, end, report):
    block = blocks_service.create_block(
        db,
        OWNER,
        BlockCreate(category_id=category.id, date=on_date, start_time=start, end_time=end),
    )
    if report is not None:
        validation_service.validate_block(db, OWNER, block.id, report)
    return block


def test_monthly_progress_from_validations(db, work, leisure):
    goals_service.upsert_monthly_goal(
        db, OWNER, MonthlyGoalCreate(category_id=work.id, year=2024, month=3, target_hours=10)
    )
    # actual duration wins
    _validated_block(
        db, work, date(2024, 3, 4), "09:00", "11:00",
        ValidationReport(status="completed", actual_start_time="09:00", actual_end_time="10:30"),
    )
    # planned 2h at 50%
    _validated_block(db, work, date(2024, 3, 5), "09:00", "11:00", ValidationReport(status="partial"))
    # omitted and pending blocks earn nothing
    _validated_block(db, work, date(2024, 3, 6), "09:00", "11:00", ValidationReport(status="omitted"))
    _validated_block(db, work, date(2024, 3, 7), "09:00", "11:00", None)
    # outside the month
    _validated_block(db, work, date(2024, 4, 1), "09:00", "11:00", ValidationReport(status="completed"))
    _validated_block(db, leisure, date(2024, 3, 8), "20:00", "22:00", ValidationReport(status="completed"))

    results = goals_service.monthly_progress(db, OWNER, 2024, 3, today=date(2024, 3, 15))
    by_category = {item.category_id: item for item in results}

    assert by_category[work.id].achieved_hours == 2.5
    assert by_category[work.id].percentage == 25
    assert by_category[work.id].status == "behind"
    assert by_category[work.id].days_remaining == 16
    assert by_category[leisure.id].status == "no_goal"
    assert by_category[leisure.id].achieved_hours == 2.0


def test_credited_minutes_midnight_block(db, work):
    block = _validated_block(
        db, work, date(2024, 3, 4), "23:00", "01:00", ValidationReport(status="completed")
    )
    db.refresh(block)
    assert goals_service.credited_minutes(block.validation, block) == 120


def test_weekly_progress_uses_iso_week(db, work):
    goals_service.upsert_weekly_goal(
        db, OWNER, WeeklyGoalCreate(category_id=work.id, year=2024, week_number=10, target_hours=2)
    )
    _validated_block(db, work, date(2024, 3, 10), "09:00", "11:00", ValidationReport(status="completed"))
    _validated_block(db, work, date(2024, 3, 11), "09:00", "11:00", ValidationReport(status="completed"))

    [result] = goals_service.weekly_progress(db, OWNER, 2024, 10)
    assert result.achieved_hours == 2.0
    assert result.status == "achieved"


def test_goal_upsert_overwrites_target(db, work):
    payload = MonthlyGoalCreate(category_id=work.id, year=2024, month=3, target_hours=10)
    first = goals_service.upsert_monthly_goal(db, OWNER, payload)
    second = goals_service.upsert_monthly_goal(
        db, OWNER, payload.copy(update={"target_hours": 12, "goal_type": GoalType.MAXIMUM})
    )

    assert first.id == second.id
    assert second.target_hours == 12
    assert second.goal_type == "maximum"
    assert len(goals_service.list_monthly_goals(db, OWNER, 2024, 3)) == 1


def test_week_53_only_exists_in_long_iso_years(db, work):
    with pytest.raises(InvalidPeriodError):
        goals_service.weekly_progress(db, OWNER, 2025, 53)
    with pytest.raises(InvalidPeriodError):
        goals_service.upsert_weekly_goal(
            db, OWNER, WeeklyGoalCreate(category_id=work.id, year=2025, week_number=53, target_hours=1)
        )

    assert goals_service.iso_week_bounds(2026, 53) == (date(2026, 12, 28), date(2027, 1, 3))
    assert goals_service.weekly_progress(db, OWNER, 2026, 53) == []


@pytest.mark.parametrize("value", ["2025-13", "2025-00", "march", "2025"])
def test_parse_month_rejects_impossible_months(value):
    with pytest.raises(InvalidPeriodError):
        goals_service.parse_month(value)


def test_parse_month():
    assert goals_service.parse_month("2024-02") == (2024, 2)


def test_goal_requires_owned_category(db):
    with pytest.raises(NotFoundError):
        goals_service.upsert_monthly_goal(
            db, "someone-else", MonthlyGoalCreate(category_id=1, year=2024, month=3, target_hours=1)
        )
