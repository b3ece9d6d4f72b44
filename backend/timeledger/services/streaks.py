"""Daily logging streaks.

A streak counts consecutive calendar days with at least one update. Logging
twice on the same day changes nothing; missing a day restarts it at 1.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from sqlalchemy.orm import Session

from timeledger.models.streak import UserStreak
from timeledger.schemas.streak import StreakPublic, StreakUpdate

logger = logging.getLogger(__name__)


def _get_row(db: Session, owner_id: str) -> UserStreak | None:
    return db.query(UserStreak).filter(UserStreak.user_id == owner_id).first()


def get_streak(db: Session, owner_id: str) -> StreakPublic:
    row = _get_row(db, owner_id)
    if row is None:
        return StreakPublic()
    return StreakPublic.from_orm(row)


def update_streak(db: Session, owner_id: str, today: date | None = None) -> StreakUpdate:
    today = today or date.today()
    yesterday = today - timedelta(days=1)

    row = _get_row(db, owner_id)
    if row is None:
        row = UserStreak(user_id=owner_id, current_streak=0, longest_streak=0)

    if row.last_activity_date == today:
        return StreakUpdate(
            current_streak=row.current_streak,
            longest_streak=row.longest_streak,
            streak_increased=False,
        )

    increased = False
    if row.last_activity_date == yesterday:
        row.current_streak += 1
        increased = True
    elif row.last_activity_date is None or row.last_activity_date < yesterday:
        row.current_streak = 1
        increased = True

    row.longest_streak = max(row.longest_streak, row.current_streak)
    row.last_activity_date = today
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.debug(f"Streak for {owner_id}: {row.current_streak} (longest {row.longest_streak})")

    return StreakUpdate(
        current_streak=row.current_streak,
        longest_streak=row.longest_streak,
        streak_increased=increased,
    )
