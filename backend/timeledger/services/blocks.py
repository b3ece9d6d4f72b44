"""Scheduled block persistence guarded by the overlap check."""

from __future__ import annotations

import logging
from datetime import date, timedelta

from sqlalchemy.orm import Session

from timeledger.core.errors import BlockOverlapError, InvalidTimeRangeError, NotFoundError
from timeledger.models.block_validation import BlockValidation, ValidationStatus
from timeledger.models.scheduled_block import PRIORITY_VALUE, BlockPriority, ScheduledBlock
from timeledger.schemas.block import BlockCreate, BlockUpdate
from timeledger.services.categories import get_category
from timeledger.services.intervals import TimeInterval
from timeledger.services.overlap import find_overlap, spills_into

logger = logging.getLogger(__name__)

# Changing any of these re-runs the overlap check
RECHECK_FIELDS = {"start_time", "end_time", "date", "category_id", "title"}


def priority_value(priority: BlockPriority | str | int | None) -> int:
    if priority is None:
        return PRIORITY_VALUE[BlockPriority.MEDIUM]
    if isinstance(priority, BlockPriority):
        return PRIORITY_VALUE[priority]
    if isinstance(priority, int):
        return priority
    try:
        return PRIORITY_VALUE[BlockPriority(priority.lower())]
    except ValueError:
        return PRIORITY_VALUE[BlockPriority.MEDIUM]


def _describe(block: ScheduledBlock) -> str:
    return f'"{block.title or "Untitled"}" ({block.start_time}-{block.end_time})'


def ensure_valid_interval(start_time: str, end_time: str) -> TimeInterval:
    interval = TimeInterval.from_times(start_time, end_time)
    if interval.is_degenerate:
        raise InvalidTimeRangeError("Start and end time must differ")
    return interval


def list_blocks_for_date(db: Session, owner_id: str, on_date: date) -> list[ScheduledBlock]:
    return (
        db.query(ScheduledBlock)
        .filter(ScheduledBlock.user_id == owner_id, ScheduledBlock.date == on_date)
        .order_by(ScheduledBlock.start_time.asc())
        .all()
    )


def list_blocks_in_range(
    db: Session, owner_id: str, start_date: date, end_date: date
) -> list[ScheduledBlock]:
    return (
        db.query(ScheduledBlock)
        .filter(
            ScheduledBlock.user_id == owner_id,
            ScheduledBlock.date >= start_date,
            ScheduledBlock.date <= end_date,
        )
        .order_by(ScheduledBlock.date.asc(), ScheduledBlock.start_time.asc())
        .all()
    )


def get_block(db: Session, owner_id: str, block_id: int) -> ScheduledBlock:
    block = (
        db.query(ScheduledBlock)
        .filter(ScheduledBlock.id == block_id, ScheduledBlock.user_id == owner_id)
        .first()
    )
    if not block:
        raise NotFoundError("Block")
    return block


def check_conflicts(
    db: Session,
    owner_id: str,
    block: BlockCreate | ScheduledBlock,
    exclude_id: int | None = None,
    include_previous_day: bool = True,
) -> None:
    """Raise ``BlockOverlapError`` when ``block`` conflicts with a stored one."""
    same_day = [
        existing
        for existing in list_blocks_for_date(db, owner_id, block.date)
        if existing.id != exclude_id
    ]
    conflict = find_overlap(block, same_day)
    if conflict:
        logger.warning(
            f"Overlap detected: new block {block.start_time}-{block.end_time} "
            f"overlaps with existing {_describe(conflict)} on {block.date}"
        )
        raise BlockOverlapError(f"Block overlaps with existing block {_describe(conflict)}")

    if not include_previous_day:
        return

    previous_date = block.date - timedelta(days=1)
    for previous in list_blocks_for_date(db, owner_id, previous_date):
        if previous.id != exclude_id and spills_into(block, previous):
            logger.warning(
                f"Overlap with previous day's midnight-crossing block: new "
                f"{block.start_time}-{block.end_time} overlaps with {_describe(previous)} "
                f"from {previous_date}"
            )
            raise BlockOverlapError(
                f"Block overlaps with {_describe(previous)} from previous day"
            )


def create_block(db: Session, owner_id: str, payload: BlockCreate) -> ScheduledBlock:
    """Insert a block together with its pending validation."""
    interval = ensure_valid_interval(payload.start_time, payload.end_time)
    get_category(db, owner_id, payload.category_id)
    check_conflicts(db, owner_id, payload)

    data = payload.dict(exclude={"priority"})
    block = ScheduledBlock(
        user_id=owner_id,
        priority=priority_value(payload.priority),
        crosses_midnight=interval.crosses_midnight,
        **data,
    )
    block.validation = BlockValidation(
        user_id=owner_id, status=ValidationStatus.PENDING.value
    )
    db.add(block)
    db.commit()
    db.refresh(block)
    logger.info(f"Block created: {block.id} on {block.date} {block.start_time}-{block.end_time}")
    return block


def update_block(
    db: Session, owner_id: str, block_id: int, payload: BlockUpdate
) -> ScheduledBlock:
    block = get_block(db, owner_id, block_id)
    data = payload.dict(exclude_unset=True)

    if "category_id" in data and data["category_id"] is not None:
        get_category(db, owner_id, data["category_id"])

    if RECHECK_FIELDS & data.keys():
        merged = BlockCreate(
            category_id=data.get("category_id") or block.category_id,
            date=data.get("date") or block.date,
            start_time=data.get("start_time") or block.start_time,
            end_time=data.get("end_time") or block.end_time,
            title=data.get("title", block.title),
        )
        ensure_valid_interval(merged.start_time, merged.end_time)
        check_conflicts(db, owner_id, merged, exclude_id=block.id, include_previous_day=False)

    if "priority" in data:
        data["priority"] = priority_value(data["priority"])
    for key, value in data.items():
        if value is None and key in {"category_id", "date", "start_time", "end_time"}:
            continue
        setattr(block, key, value)
    block.crosses_midnight = TimeInterval.from_times(
        block.start_time, block.end_time
    ).crosses_midnight

    db.add(block)
    db.commit()
    db.refresh(block)
    return block


def delete_block(db: Session, owner_id: str, block_id: int) -> None:
    block = get_block(db, owner_id, block_id)
    db.delete(block)
    db.commit()
