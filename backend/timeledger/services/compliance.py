"""Rest rule and usage limit evaluation.

Two entry points share one violation vocabulary:

* ``check_candidate`` runs before a block is committed. It is advisory and
  only persists its findings when asked to.
* ``check_rest_after_completion`` runs when a block is validated as completed
  and records a ``rest_skipped`` violation when no rest follows a long session.

Violations are append-only. Acknowledging one stamps it, nothing deletes it.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Sequence

from sqlalchemy.orm import Session

from timeledger.core.config import get_settings
from timeledger.core.errors import NotFoundError
from timeledger.models.rules import RestRule, UsageLimit
from timeledger.models.scheduled_block import ScheduledBlock
from timeledger.models.violation import RoutineViolation, Severity, ViolationType
from timeledger.schemas.rules import Violation
from timeledger.services import rules as rules_service
from timeledger.services.blocks import ensure_valid_interval
from timeledger.services.categories import get_category
from timeledger.services.intervals import duration, to_minutes

logger = logging.getLogger(__name__)

WEEKLY_EXCEEDED = "weekly_exceeded"


def _hours(blocks: Sequence[ScheduledBlock]) -> float:
    return sum(duration(block.start_time, block.end_time) for block in blocks) / 60


def daily_accumulated_hours(
    db: Session,
    owner_id: str,
    on_date: date,
    category_id: int,
    exclude_block_id: int | None = None,
) -> float:
    blocks = (
        db.query(ScheduledBlock)
        .filter(
            ScheduledBlock.user_id == owner_id,
            ScheduledBlock.date == on_date,
            ScheduledBlock.category_id == category_id,
        )
        .all()
    )
    return _hours([block for block in blocks if block.id != exclude_block_id])


def weekly_accumulated_hours(
    db: Session,
    owner_id: str,
    on_date: date,
    category_id: int,
    exclude_block_id: int | None = None,
) -> float:
    week_start = on_date - timedelta(days=on_date.weekday())
    blocks = (
        db.query(ScheduledBlock)
        .filter(
            ScheduledBlock.user_id == owner_id,
            ScheduledBlock.date >= week_start,
            ScheduledBlock.date <= week_start + timedelta(days=6),
            ScheduledBlock.category_id == category_id,
        )
        .all()
    )
    return _hours([block for block in blocks if block.id != exclude_block_id])


def evaluate_usage_limit(
    limit: UsageLimit,
    block_minutes: int,
    daily_hours: float,
    weekly_hours: float | None = None,
) -> list[Violation]:
    violations: list[Violation] = []
    block_hours = block_minutes / 60

    if limit.max_continuous_minutes and block_minutes > limit.max_continuous_minutes:
        violations.append(
            Violation(
                type=ViolationType.CONTINUOUS_EXCEEDED.value,
                message=(
                    f"Block exceeds maximum continuous time of "
                    f"{limit.max_continuous_minutes} minutes"
                ),
                severity=Severity.WARNING.value,
            )
        )

    if limit.max_daily_hours is not None and daily_hours + block_hours > limit.max_daily_hours:
        violations.append(
            Violation(
                type=ViolationType.DAILY_EXCEEDED.value,
                message=(
                    f"Adding this block would exceed daily limit of "
                    f"{limit.max_daily_hours:g} hours"
                ),
                severity=Severity.WARNING.value,
            )
        )

    if (
        limit.max_weekly_hours is not None
        and weekly_hours is not None
        and weekly_hours + block_hours > limit.max_weekly_hours
    ):
        violations.append(
            Violation(
                type=WEEKLY_EXCEEDED,
                message=(
                    f"Adding this block would exceed weekly limit of "
                    f"{limit.max_weekly_hours:g} hours"
                ),
                severity=Severity.WARNING.value,
            )
        )
    return violations


def select_rest_rule(
    rules: Sequence[RestRule], category_id: int, block_minutes: int
) -> RestRule | None:
    """First active rule that applies to the category and is triggered.

    Rules are taken in the order given, not ranked by strictness.
    """
    for rule in rules:
        if not rule.is_active:
            continue
        if rule.category_id is not None and rule.category_id != category_id:
            continue
        if rule.trigger_duration_minutes <= block_minutes:
            return rule
    return None


def rest_suggestion(rule: RestRule, block_minutes: int) -> Violation:
    return Violation(
        type=ViolationType.REST_SUGGESTED.value,
        message=(
            f"A {rule.rest_duration_minutes} minute rest break is recommended "
            f"after this {block_minutes} minute block"
        ),
        severity=Severity.CRITICAL.value if rule.is_mandatory else Severity.INFO.value,
    )


def check_candidate(
    db: Session,
    owner_id: str,
    on_date: date,
    category_id: int,
    start_time: str,
    end_time: str,
    record: bool = False,
    exclude_block_id: int | None = None,
) -> list[Violation]:
    """Evaluate usage limits and rest rules for a block that is not saved yet."""
    ensure_valid_interval(start_time, end_time)
    get_category(db, owner_id, category_id)
    block_minutes = duration(start_time, end_time)
    violations: list[Violation] = []

    limit = rules_service.active_usage_limit(db, owner_id, category_id)
    if limit:
        daily = daily_accumulated_hours(db, owner_id, on_date, category_id, exclude_block_id)
        weekly = None
        if limit.max_weekly_hours is not None:
            weekly = weekly_accumulated_hours(
                db, owner_id, on_date, category_id, exclude_block_id
            )
        violations.extend(evaluate_usage_limit(limit, block_minutes, daily, weekly))

    rule = select_rest_rule(
        rules_service.list_rest_rules(db, owner_id), category_id, block_minutes
    )
    if rule:
        violations.append(rest_suggestion(rule, block_minutes))

    if record and violations:
        for violation in violations:
            record_violation(
                db,
                owner_id,
                violation.type,
                violation.message,
                violation.severity,
                category_id=category_id,
                block_id=exclude_block_id,
                commit=False,
            )
        db.commit()
    return violations


def next_block_after(db: Session, owner_id: str, block: ScheduledBlock) -> ScheduledBlock | None:
    """Earliest block on the same date starting strictly after ``block`` ends."""
    end_minute = to_minutes(block.end_time)
    candidates = [
        other
        for other in (
            db.query(ScheduledBlock)
            .filter(
                ScheduledBlock.user_id == owner_id,
                ScheduledBlock.date == block.date,
                ScheduledBlock.id != block.id,
            )
            .all()
        )
        if to_minutes(other.start_time) > end_minute
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda other: to_minutes(other.start_time))


def check_rest_after_completion(
    db: Session, owner_id: str, block: ScheduledBlock
) -> RoutineViolation | None:
    category = block.category
    if category is None or not category.requires_rest_after:
        return None

    block_minutes = duration(block.start_time, block.end_time)
    if block_minutes < get_settings().rest_check_threshold_minutes:
        return None

    following = next_block_after(db, owner_id, block)
    if following is not None and following.category and following.category.is_rest_category:
        return None

    return record_violation(
        db,
        owner_id,
        ViolationType.REST_SKIPPED.value,
        f"No rest block scheduled after {block_minutes} minute {category.name} session",
        Severity.WARNING.value,
        category_id=block.category_id,
        block_id=block.id,
    )


def record_violation(
    db: Session,
    owner_id: str,
    violation_type: ViolationType | str,
    description: str,
    severity: Severity | str,
    category_id: int | None = None,
    block_id: int | None = None,
    commit: bool = True,
) -> RoutineViolation:
    violation = RoutineViolation(
        user_id=owner_id,
        scheduled_block_id=block_id,
        violation_type=str(getattr(violation_type, "value", violation_type)),
        category_id=category_id,
        description=description,
        severity=Severity(getattr(severity, "value", severity)).value,
    )
    db.add(violation)
    if commit:
        db.commit()
        db.refresh(violation)
    logger.info(
        f"Violation recorded: {violation.violation_type} ({violation.severity}) "
        f"owner={owner_id} block={block_id}"
    )
    return violation


def list_violations(
    db: Session,
    owner_id: str,
    acknowledged: bool | None = None,
    limit: int | None = None,
) -> list[RoutineViolation]:
    query = (
        db.query(RoutineViolation)
        .filter(RoutineViolation.user_id == owner_id)
        .order_by(RoutineViolation.created_at.desc(), RoutineViolation.id.desc())
    )
    if acknowledged is not None:
        query = query.filter(RoutineViolation.acknowledged.is_(acknowledged))
    return query.limit(limit or get_settings().violation_list_limit).all()


def acknowledge_violation(db: Session, owner_id: str, violation_id: int) -> RoutineViolation:
    violation = (
        db.query(RoutineViolation)
        .filter(RoutineViolation.id == violation_id, RoutineViolation.user_id == owner_id)
        .first()
    )
    if not violation:
        raise NotFoundError("Violation")
    violation.acknowledged = True
    violation.acknowledged_at = datetime.utcnow()
    db.add(violation)
    db.commit()
    db.refresh(violation)
    return violation


def acknowledge_all(db: Session, owner_id: str) -> int:
    count = (
        db.query(RoutineViolation)
        .filter(
            RoutineViolation.user_id == owner_id,
            RoutineViolation.acknowledged.is_(False),
        )
        .update(
            {
                RoutineViolation.acknowledged: True,
                RoutineViolation.acknowledged_at: datetime.utcnow(),
            },
            synchronize_session=False,
        )
    )
    db.commit()
    return count
