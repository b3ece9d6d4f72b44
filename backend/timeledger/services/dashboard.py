"""Monthly dashboard aggregates over logged time entries."""

from __future__ import annotations

from collections import defaultdict
from datetime import date

from sqlalchemy.orm import Session

from timeledger.models.goal import GoalType, MonthlyGoal
from timeledger.models.time_entry import TimeEntry
from timeledger.schemas.dashboard import CategoryBreakdown, DailyTotal, MonthlyStats
from timeledger.services.categories import list_categories
from timeledger.services.goals import month_bounds, parse_month, round_half_up


def monthly_stats(db: Session, owner_id: str, month: str) -> MonthlyStats:
    """Totals for a ``YYYY-MM`` month.

    Every category of the owner appears in the breakdown, used or not. The
    month's minimum goal supplies ``goal_hours``; a maximum goal supplies
    ``limit_hours``.
    """
    year, month_number = parse_month(month)
    start_date, end_date = month_bounds(year, month_number)

    entries = (
        db.query(TimeEntry)
        .filter(
            TimeEntry.user_id == owner_id,
            TimeEntry.date >= start_date,
            TimeEntry.date <= end_date,
        )
        .all()
    )
    goals = {
        goal.category_id: goal
        for goal in db.query(MonthlyGoal).filter(
            MonthlyGoal.user_id == owner_id,
            MonthlyGoal.year == year,
            MonthlyGoal.month == month_number,
        )
    }

    by_category: dict[int, int] = defaultdict(int)
    by_day: dict[date, int] = defaultdict(int)
    for entry in entries:
        minutes = entry.duration_minutes or 0
        by_category[entry.category_id] += minutes
        by_day[entry.date] += minutes
    total_minutes = sum(by_category.values())

    breakdown = []
    for category in list_categories(db, owner_id):
        minutes = by_category.get(category.id, 0)
        goal = goals.get(category.id)
        goal_hours = limit_hours = None
        if goal is not None and GoalType(goal.goal_type) == GoalType.MINIMUM:
            goal_hours = goal.target_hours
        elif goal is not None:
            limit_hours = goal.target_hours
        progress_percent = (
            round_half_up(minutes / 60 / goal_hours * 100) if goal_hours else 0
        )
        breakdown.append(
            CategoryBreakdown(
                category_id=category.id,
                name=category.name,
                color=category.color,
                icon=category.icon,
                total_minutes=minutes,
                goal_hours=goal_hours,
                limit_hours=limit_hours,
                progress_percent=progress_percent,
            )
        )

    return MonthlyStats(
        total_hours=round_half_up(total_minutes / 60 * 100) / 100,
        categories_used=len(by_category),
        category_breakdown=breakdown,
        daily_totals=[
            DailyTotal(date=day, minutes=minutes) for day, minutes in sorted(by_day.items())
        ],
    )
