"""Weekly templates and their application to a concrete week."""

from __future__ import annotations

import logging
from datetime import date, timedelta

from sqlalchemy.orm import Session

from timeledger.core.errors import (
    BlockOverlapError,
    InvalidTimeRangeError,
    NotFoundError,
    TemplateEmptyError,
)
from timeledger.models.template import AppliedTemplate, TemplateBlock, WeeklyTemplate
from timeledger.schemas.block import BlockCreate
from timeledger.schemas.template import (
    TemplateApplyResult,
    TemplateBlockCreate,
    TemplateBlockUpdate,
    TemplateCreate,
    TemplateUpdate,
)
from timeledger.services import blocks as blocks_service
from timeledger.services.overlap import find_overlap

logger = logging.getLogger(__name__)


def list_templates(db: Session, owner_id: str) -> list[WeeklyTemplate]:
    return (
        db.query(WeeklyTemplate)
        .filter(WeeklyTemplate.user_id == owner_id)
        .order_by(WeeklyTemplate.created_at.desc(), WeeklyTemplate.id.desc())
        .all()
    )


def get_template(db: Session, owner_id: str, template_id: int) -> WeeklyTemplate:
    template = (
        db.query(WeeklyTemplate)
        .filter(WeeklyTemplate.id == template_id, WeeklyTemplate.user_id == owner_id)
        .first()
    )
    if not template:
        raise NotFoundError("Template")
    return template


def _clear_default(db: Session, owner_id: str) -> None:
    (
        db.query(WeeklyTemplate)
        .filter(WeeklyTemplate.user_id == owner_id)
        .update({WeeklyTemplate.is_default: False}, synchronize_session=False)
    )


def create_template(db: Session, owner_id: str, payload: TemplateCreate) -> WeeklyTemplate:
    if payload.is_default:
        _clear_default(db, owner_id)
    template = WeeklyTemplate(user_id=owner_id, **payload.dict())
    db.add(template)
    db.commit()
    db.refresh(template)
    return template


def update_template(
    db: Session, owner_id: str, template_id: int, payload: TemplateUpdate
) -> WeeklyTemplate:
    template = get_template(db, owner_id, template_id)
    data = payload.dict(exclude_unset=True)
    if data.get("is_default"):
        _clear_default(db, owner_id)
    for key, value in data.items():
        setattr(template, key, value)
    db.add(template)
    db.commit()
    db.refresh(template)
    return template


def delete_template(db: Session, owner_id: str, template_id: int) -> None:
    template = get_template(db, owner_id, template_id)
    db.delete(template)
    db.commit()


def _check_day_overlap(
    template: WeeklyTemplate,
    candidate: TemplateBlockCreate,
    exclude_id: int | None = None,
) -> None:
    same_day = [
        block
        for block in template.blocks
        if block.day_of_week == candidate.day_of_week and block.id != exclude_id
    ]
    blocks_service.ensure_valid_interval(candidate.start_time, candidate.end_time)
    if find_overlap(candidate, same_day):
        raise BlockOverlapError("Block overlaps with existing block on this day")


def add_template_block(
    db: Session, owner_id: str, template_id: int, payload: TemplateBlockCreate
) -> TemplateBlock:
    template = get_template(db, owner_id, template_id)
    _check_day_overlap(template, payload)
    block = TemplateBlock(template_id=template.id, **payload.dict())
    db.add(block)
    db.commit()
    db.refresh(block)
    return block


def _get_template_block(db: Session, owner_id: str, block_id: int) -> TemplateBlock:
    block = (
        db.query(TemplateBlock)
        .join(WeeklyTemplate, TemplateBlock.template_id == WeeklyTemplate.id)
        .filter(TemplateBlock.id == block_id, WeeklyTemplate.user_id == owner_id)
        .first()
    )
    if not block:
        raise NotFoundError("Template block")
    return block


def update_template_block(
    db: Session, owner_id: str, block_id: int, payload: TemplateBlockUpdate
) -> TemplateBlock:
    block = _get_template_block(db, owner_id, block_id)
    data = payload.dict(exclude_unset=True)
    if {"day_of_week", "start_time", "end_time"} & data.keys():
        merged = TemplateBlockCreate(
            category_id=data.get("category_id") or block.category_id,
            day_of_week=data.get("day_of_week", block.day_of_week),
            start_time=data.get("start_time") or block.start_time,
            end_time=data.get("end_time") or block.end_time,
        )
        _check_day_overlap(block.template, merged, exclude_id=block.id)
    for key, value in data.items():
        setattr(block, key, value)
    db.add(block)
    db.commit()
    db.refresh(block)
    return block


def delete_template_block(db: Session, owner_id: str, block_id: int) -> None:
    block = _get_template_block(db, owner_id, block_id)
    db.delete(block)
    db.commit()


def duplicate_template(
    db: Session, owner_id: str, template_id: int, new_name: str
) -> WeeklyTemplate:
    original = get_template(db, owner_id, template_id)
    copy = WeeklyTemplate(
        user_id=owner_id,
        name=new_name,
        description=original.description,
        is_default=False,
    )
    copy.blocks = [
        TemplateBlock(
            category_id=block.category_id,
            day_of_week=block.day_of_week,
            start_time=block.start_time,
            end_time=block.end_time,
            title=block.title,
            notes=block.notes,
            is_flexible=block.is_flexible,
            priority=block.priority,
        )
        for block in original.blocks
    ]
    db.add(copy)
    db.commit()
    db.refresh(copy)
    return copy


def apply_template(
    db: Session, owner_id: str, template_id: int, week_start_date: date
) -> TemplateApplyResult:
    """Create the template's blocks for the week starting at ``week_start_date``.

    Blocks that conflict with the existing schedule are skipped, not forced.
    """
    template = get_template(db, owner_id, template_id)
    if not template.blocks:
        raise TemplateEmptyError("Template has no blocks")

    planned = [
        BlockCreate(
            category_id=block.category_id,
            date=week_start_date + timedelta(days=block.day_of_week),
            start_time=block.start_time,
            end_time=block.end_time,
            title=block.title,
            notes=block.notes,
            is_flexible=block.is_flexible,
            priority=block.priority,
        )
        for block in template.blocks
    ]

    created = 0
    for payload in planned:
        try:
            blocks_service.create_block(db, owner_id, payload)
            created += 1
        except (BlockOverlapError, InvalidTimeRangeError, NotFoundError) as exc:
            logger.warning(
                f"Skipped block due to {exc.detail}: {payload.date} {payload.start_time}"
            )

    iso_year, iso_week, _ = week_start_date.isocalendar()
    applied = (
        db.query(AppliedTemplate)
        .filter(
            AppliedTemplate.user_id == owner_id,
            AppliedTemplate.template_id == template.id,
            AppliedTemplate.year == iso_year,
            AppliedTemplate.week_number == iso_week,
        )
        .first()
    )
    if applied is None:
        db.add(
            AppliedTemplate(
                user_id=owner_id,
                template_id=template.id,
                year=iso_year,
                week_number=iso_week,
            )
        )
        db.commit()

    return TemplateApplyResult(created=created, skipped=len(planned) - created)
