from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from timeledger.core.errors import InvalidTimeRangeError, NotFoundError
from timeledger.models.time_entry import TimeEntry
from timeledger.schemas.time_entry import TimeEntryCreate, TimeEntryUpdate
from timeledger.services.categories import get_category
from timeledger.services.goals import month_bounds, parse_month


def duration_minutes(start_time: datetime, end_time: datetime) -> int:
    return round((end_time - start_time).total_seconds() / 60)


def _checked_duration(start_time: datetime, end_time: datetime) -> int:
    minutes = duration_minutes(start_time, end_time)
    if minutes <= 0:
        raise InvalidTimeRangeError("End time must be after start time")
    return minutes


def list_time_entries(
    db: Session,
    owner_id: str,
    month: str | None = None,
    category_id: int | None = None,
    limit: int | None = None,
) -> list[TimeEntry]:
    query = db.query(TimeEntry).filter(TimeEntry.user_id == owner_id)
    if month:
        start_date, end_date = month_bounds(*parse_month(month))
        query = query.filter(TimeEntry.date >= start_date, TimeEntry.date <= end_date)
    if category_id is not None:
        query = query.filter(TimeEntry.category_id == category_id)
    query = query.order_by(TimeEntry.start_time.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def _get_entry(db: Session, owner_id: str, entry_id: int) -> TimeEntry:
    entry = (
        db.query(TimeEntry)
        .filter(TimeEntry.id == entry_id, TimeEntry.user_id == owner_id)
        .first()
    )
    if not entry:
        raise NotFoundError("Time entry")
    return entry


def create_time_entry(db: Session, owner_id: str, payload: TimeEntryCreate) -> TimeEntry:
    get_category(db, owner_id, payload.category_id)
    minutes = _checked_duration(payload.start_time, payload.end_time)
    entry = TimeEntry(user_id=owner_id, duration_minutes=minutes, **payload.dict())
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def update_time_entry(
    db: Session, owner_id: str, entry_id: int, payload: TimeEntryUpdate
) -> TimeEntry:
    entry = _get_entry(db, owner_id, entry_id)
    data = payload.dict(exclude_unset=True)
    if data.get("category_id") is not None:
        get_category(db, owner_id, data["category_id"])
    if "start_time" in data or "end_time" in data:
        entry.duration_minutes = _checked_duration(
            data.get("start_time") or entry.start_time,
            data.get("end_time") or entry.end_time,
        )
    for key, value in data.items():
        setattr(entry, key, value)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def delete_time_entry(db: Session, owner_id: str, entry_id: int) -> None:
    entry = _get_entry(db, owner_id, entry_id)
    db.delete(entry)
    db.commit()
