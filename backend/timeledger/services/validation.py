"""Validation lifecycle of scheduled blocks.

A block starts ``pending`` and is moved to ``completed``, ``partial`` or
``omitted`` by a validation report. Re-submitting a report replaces the
stored validation, it never adds a second one.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime

from sqlalchemy.orm import Session

from timeledger.models.block_validation import (
    DEFAULT_COMPLETION,
    BlockValidation,
    OmissionReason,
    ValidationStatus,
)
from timeledger.models.scheduled_block import ScheduledBlock
from timeledger.schemas.validation import (
    PendingValidation,
    StatusCounts,
    ValidationReport,
    ValidationStats,
)
from timeledger.services import compliance
from timeledger.services.blocks import get_block
from timeledger.services.goals import round_half_up
from timeledger.services.intervals import to_minutes

logger = logging.getLogger(__name__)

STALE_COMPLETION = 50
STATUS_VALUES = {status.value for status in ValidationStatus}


def actual_duration_minutes(report: ValidationReport) -> int | None:
    # Plain difference: a report spanning midnight comes out negative
    if report.actual_start_time and report.actual_end_time:
        return to_minutes(report.actual_end_time) - to_minutes(report.actual_start_time)
    return None


def default_completion(status: ValidationStatus | str) -> int:
    return DEFAULT_COMPLETION[ValidationStatus(status)]


def validate_block(
    db: Session,
    owner_id: str,
    block_id: int,
    report: ValidationReport,
    now: datetime | None = None,
) -> BlockValidation:
    block = get_block(db, owner_id, block_id)
    now = now or datetime.utcnow()

    completion = report.completion_percentage
    if completion is None:
        completion = default_completion(report.status)

    validation = block.validation
    if validation is None:
        validation = BlockValidation(user_id=owner_id, scheduled_block_id=block.id)
        block.validation = validation

    validation.status = ValidationStatus(report.status).value
    validation.actual_start_time = report.actual_start_time
    validation.actual_end_time = report.actual_end_time
    validation.actual_duration_minutes = actual_duration_minutes(report)
    validation.completion_percentage = completion
    validation.omission_reason_id = report.omission_reason_id
    validation.omission_notes = report.omission_notes
    validation.validated_at = now

    db.add(validation)
    db.commit()
    db.refresh(validation)
    logger.info(f"Block {block.id} validated as {validation.status} ({completion}%)")

    if validation.status == ValidationStatus.COMPLETED.value:
        compliance.check_rest_after_completion(db, owner_id, block)
    return validation


def _pending_query(db: Session, owner_id: str):
    return (
        db.query(BlockValidation, ScheduledBlock)
        .join(ScheduledBlock, BlockValidation.scheduled_block_id == ScheduledBlock.id)
        .filter(
            BlockValidation.user_id == owner_id,
            BlockValidation.status == ValidationStatus.PENDING.value,
        )
    )


def pending_validations(
    db: Session, owner_id: str, on_date: date, today: date | None = None
) -> list[PendingValidation]:
    today = today or date.today()
    rows = (
        _pending_query(db, owner_id)
        .filter(ScheduledBlock.date == on_date)
        .order_by(ScheduledBlock.start_time.asc())
        .all()
    )
    return [
        PendingValidation(
            validation_id=validation.id,
            block_id=block.id,
            category_id=block.category_id,
            date=block.date,
            start_time=block.start_time,
            end_time=block.end_time,
            title=block.title,
            priority=block.priority,
            days_ago=(today - block.date).days,
        )
        for validation, block in rows
    ]


def expire_stale_pending(db: Session, owner_id: str, today: date | None = None) -> int:
    """Close pending validations of past days as partial at 50%."""
    today = today or date.today()
    rows = _pending_query(db, owner_id).filter(ScheduledBlock.date < today).all()
    if not rows:
        return 0

    now = datetime.utcnow()
    for validation, _ in rows:
        validation.status = ValidationStatus.PARTIAL.value
        validation.completion_percentage = STALE_COMPLETION
        validation.validated_at = now
        db.add(validation)
    db.commit()
    logger.info(f"Auto-completed {len(rows)} pending blocks from previous days as partial")
    return len(rows)


def _tally(counts: StatusCounts, status: str) -> None:
    if status in STATUS_VALUES:
        setattr(counts, status, getattr(counts, status) + 1)
    counts.total += 1


def validation_stats(
    db: Session, owner_id: str, start_date: date, end_date: date
) -> ValidationStats:
    rows = (
        db.query(BlockValidation.status, BlockValidation.completion_percentage, ScheduledBlock.category_id)
        .join(ScheduledBlock, BlockValidation.scheduled_block_id == ScheduledBlock.id)
        .filter(
            BlockValidation.user_id == owner_id,
            ScheduledBlock.date >= start_date,
            ScheduledBlock.date <= end_date,
        )
        .all()
    )

    stats = ValidationStats()
    completion_sum = 0
    category_sums: dict[int, int] = defaultdict(int)
    for status, completion, category_id in rows:
        _tally(stats, status)
        completion_sum += completion or 0
        if category_id is not None:
            bucket = stats.by_category.setdefault(category_id, StatusCounts())
            _tally(bucket, status)
            category_sums[category_id] += completion or 0

    if stats.total:
        stats.average_completion = round_half_up(completion_sum / stats.total)
    for category_id, bucket in stats.by_category.items():
        bucket.average_completion = round_half_up(category_sums[category_id] / bucket.total)
    return stats


def list_omission_reasons(db: Session) -> list[OmissionReason]:
    return (
        db.query(OmissionReason)
        .filter(OmissionReason.is_system_default.is_(True))
        .order_by(OmissionReason.category.asc(), OmissionReason.id.asc())
        .all()
    )
