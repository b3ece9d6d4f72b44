"""Goal storage and progress computation.

Achieved hours come from validated blocks: the reported actual duration when
one exists, otherwise the planned duration scaled by the self-reported
completion percentage.
"""

from __future__ import annotations

import calendar
import logging
import math
from collections import defaultdict
from datetime import date, timedelta
from typing import Union

from sqlalchemy.orm import Session

from timeledger.core.errors import InvalidPeriodError, NotFoundError
from timeledger.models.block_validation import BlockValidation, ValidationStatus
from timeledger.models.goal import GoalType, MonthlyGoal, WeeklyGoal
from timeledger.models.scheduled_block import ScheduledBlock
from timeledger.schemas.goal import GoalProgress, MonthlyGoalCreate, WeeklyGoalCreate
from timeledger.services.categories import get_category
from timeledger.services.intervals import duration

logger = logging.getLogger(__name__)

Goal = Union[MonthlyGoal, WeeklyGoal]

NO_GOAL = "no_goal"
CREDITED_STATUSES = (ValidationStatus.COMPLETED.value, ValidationStatus.PARTIAL.value)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _round_hours(value: float) -> float:
    return round_half_up(value * 100) / 100


def classify(goal_type: GoalType | str, percentage: int) -> str:
    if GoalType(goal_type) == GoalType.MINIMUM:
        if percentage >= 100:
            return "achieved"
        if percentage >= 80:
            return "on_track"
        if percentage >= 50:
            return "at_risk"
        return "behind"
    # maximum: the target is a ceiling
    if percentage >= 100:
        return "exceeded"
    if percentage >= 80:
        return "approaching"
    return "within_limit"


def month_bounds(year: int, month: int) -> tuple[date, date]:
    if not 1 <= month <= 12:
        raise InvalidPeriodError(f"Invalid month: {month}")
    days_in_month = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, days_in_month)


def parse_month(value: str) -> tuple[int, int]:
    """Split a ``YYYY-MM`` key into year and month, rejecting impossible months."""
    try:
        year, month = (int(part) for part in value.split("-"))
    except ValueError as exc:
        raise InvalidPeriodError(f"Invalid month: {value}. Must be YYYY-MM") from exc
    month_bounds(year, month)
    return year, month


def iso_week_bounds(year: int, week_number: int) -> tuple[date, date]:
    try:
        week_start = date.fromisocalendar(year, week_number, 1)
    except ValueError as exc:
        raise InvalidPeriodError(f"{year} has no ISO week {week_number}") from exc
    return week_start, week_start + timedelta(days=6)


def days_remaining_in_month(year: int, month: int, today: date) -> int:
    days_in_month = calendar.monthrange(year, month)[1]
    if today.year == year and today.month == month:
        current_day = today.day
    else:
        current_day = days_in_month
    return days_in_month - current_day


def progress(goal: Goal, achieved_hours: float, today: date | None = None) -> GoalProgress:
    target = goal.target_hours
    percentage = round_half_up(achieved_hours / target * 100) if target > 0 else 0
    remaining = max(0.0, target - achieved_hours)

    result = GoalProgress(
        goal_id=goal.id,
        category_id=goal.category_id,
        target_hours=target,
        goal_type=GoalType(goal.goal_type),
        achieved_hours=_round_hours(achieved_hours),
        remaining_hours=_round_hours(remaining),
        percentage=percentage,
        status=classify(goal.goal_type, percentage),
    )

    if isinstance(goal, MonthlyGoal):
        days_remaining = days_remaining_in_month(goal.year, goal.month, today or date.today())
        daily_required = remaining / days_remaining if days_remaining > 0 else remaining
        result.days_remaining = days_remaining
        result.daily_required_hours = _round_hours(daily_required)
    return result


def untracked_progress(category_id: int, achieved_hours: float) -> GoalProgress:
    return GoalProgress(
        category_id=category_id,
        target_hours=None,
        goal_type=None,
        achieved_hours=_round_hours(achieved_hours),
        percentage=None,
        status=NO_GOAL,
    )


def credited_minutes(validation: BlockValidation, block: ScheduledBlock) -> float:
    minutes = validation.actual_duration_minutes
    # Negative values come from reports spanning midnight; use the planned length
    if minutes is not None and minutes > 0:
        return minutes
    completion = validation.completion_percentage
    if completion is None:
        completion = 100
    return duration(block.start_time, block.end_time) * (completion / 100)


def achieved_hours_by_category(
    db: Session, owner_id: str, start_date: date, end_date: date
) -> dict[int, float]:
    rows = (
        db.query(BlockValidation, ScheduledBlock)
        .join(ScheduledBlock, BlockValidation.scheduled_block_id == ScheduledBlock.id)
        .filter(
            BlockValidation.user_id == owner_id,
            BlockValidation.status.in_(CREDITED_STATUSES),
            ScheduledBlock.date >= start_date,
            ScheduledBlock.date <= end_date,
        )
        .all()
    )
    hours: dict[int, float] = defaultdict(float)
    for validation, block in rows:
        hours[block.category_id] += credited_minutes(validation, block) / 60
    return dict(hours)


def combine(
    goals: list[Goal], hours_by_category: dict[int, float], today: date | None = None
) -> list[GoalProgress]:
    """Progress for every goal, then every category that has hours but no goal."""
    results = [
        progress(goal, hours_by_category.get(goal.category_id, 0.0), today) for goal in goals
    ]
    tracked = {goal.category_id for goal in goals}
    for category_id, hours in hours_by_category.items():
        if category_id not in tracked:
            results.append(untracked_progress(category_id, hours))
    return results


def monthly_progress(
    db: Session, owner_id: str, year: int, month: int, today: date | None = None
) -> list[GoalProgress]:
    start_date, end_date = month_bounds(year, month)
    goals = list_monthly_goals(db, owner_id, year, month)
    hours = achieved_hours_by_category(db, owner_id, start_date, end_date)
    logger.debug(
        f"Monthly progress {year}-{month:02d}: {len(goals)} goals, {len(hours)} categories with hours"
    )
    return combine(goals, hours, today)


def weekly_progress(
    db: Session, owner_id: str, year: int, week_number: int, today: date | None = None
) -> list[GoalProgress]:
    start_date, end_date = iso_week_bounds(year, week_number)
    goals = list_weekly_goals(db, owner_id, year, week_number)
    hours = achieved_hours_by_category(db, owner_id, start_date, end_date)
    return combine(goals, hours, today)


def list_monthly_goals(db: Session, owner_id: str, year: int, month: int) -> list[MonthlyGoal]:
    return (
        db.query(MonthlyGoal)
        .filter(
            MonthlyGoal.user_id == owner_id,
            MonthlyGoal.year == year,
            MonthlyGoal.month == month,
        )
        .order_by(MonthlyGoal.id.asc())
        .all()
    )


def upsert_monthly_goal(db: Session, owner_id: str, payload: MonthlyGoalCreate) -> MonthlyGoal:
    get_category(db, owner_id, payload.category_id)
    goal = (
        db.query(MonthlyGoal)
        .filter(
            MonthlyGoal.user_id == owner_id,
            MonthlyGoal.category_id == payload.category_id,
            MonthlyGoal.year == payload.year,
            MonthlyGoal.month == payload.month,
        )
        .first()
    )
    if goal:
        goal.target_hours = payload.target_hours
        goal.goal_type = payload.goal_type.value
    else:
        goal = MonthlyGoal(
            user_id=owner_id,
            category_id=payload.category_id,
            year=payload.year,
            month=payload.month,
            target_hours=payload.target_hours,
            goal_type=payload.goal_type.value,
        )
    db.add(goal)
    db.commit()
    db.refresh(goal)
    return goal


def delete_monthly_goal(db: Session, owner_id: str, goal_id: int) -> None:
    goal = (
        db.query(MonthlyGoal)
        .filter(MonthlyGoal.id == goal_id, MonthlyGoal.user_id == owner_id)
        .first()
    )
    if not goal:
        raise NotFoundError("Goal")
    db.delete(goal)
    db.commit()


def list_weekly_goals(db: Session, owner_id: str, year: int, week_number: int) -> list[WeeklyGoal]:
    return (
        db.query(WeeklyGoal)
        .filter(
            WeeklyGoal.user_id == owner_id,
            WeeklyGoal.year == year,
            WeeklyGoal.week_number == week_number,
        )
        .order_by(WeeklyGoal.id.asc())
        .all()
    )


def upsert_weekly_goal(db: Session, owner_id: str, payload: WeeklyGoalCreate) -> WeeklyGoal:
    iso_week_bounds(payload.year, payload.week_number)
    get_category(db, owner_id, payload.category_id)
    goal = (
        db.query(WeeklyGoal)
        .filter(
            WeeklyGoal.user_id == owner_id,
            WeeklyGoal.category_id == payload.category_id,
            WeeklyGoal.year == payload.year,
            WeeklyGoal.week_number == payload.week_number,
        )
        .first()
    )
    if goal:
        goal.target_hours = payload.target_hours
        goal.goal_type = payload.goal_type.value
    else:
        goal = WeeklyGoal(
            user_id=owner_id,
            category_id=payload.category_id,
            year=payload.year,
            week_number=payload.week_number,
            target_hours=payload.target_hours,
            goal_type=payload.goal_type.value,
        )
    db.add(goal)
    db.commit()
    db.refresh(goal)
    return goal


def delete_weekly_goal(db: Session, owner_id: str, goal_id: int) -> None:
    goal = (
        db.query(WeeklyGoal)
        .filter(WeeklyGoal.id == goal_id, WeeklyGoal.user_id == owner_id)
        .first()
    )
    if not goal:
        raise NotFoundError("Goal")
    db.delete(goal)
    db.commit()
