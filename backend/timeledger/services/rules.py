"""Rest rule and usage limit storage."""

from __future__ import annotations

from sqlalchemy.orm import Session

from timeledger.core.errors import NotFoundError
from timeledger.models.rules import RestRule, UsageLimit
from timeledger.schemas.rules import (
    RestRuleCreate,
    RestRuleUpdate,
    UsageLimitCreate,
    UsageLimitUpdate,
)
from timeledger.services.categories import get_category


def list_rest_rules(db: Session, owner_id: str) -> list[RestRule]:
    # Rule selection is first-match, so the order here is part of the contract
    return (
        db.query(RestRule)
        .filter(RestRule.user_id == owner_id, RestRule.is_active.is_(True))
        .order_by(RestRule.id.asc())
        .all()
    )


def _get_rest_rule(db: Session, owner_id: str, rule_id: int) -> RestRule:
    rule = (
        db.query(RestRule)
        .filter(RestRule.id == rule_id, RestRule.user_id == owner_id)
        .first()
    )
    if not rule:
        raise NotFoundError("Rest rule")
    return rule


def _ensure_owned_categories(db: Session, owner_id: str, data: dict) -> None:
    for key in ("category_id", "rest_category_id"):
        if data.get(key) is not None:
            get_category(db, owner_id, data[key])


def create_rest_rule(db: Session, owner_id: str, payload: RestRuleCreate) -> RestRule:
    _ensure_owned_categories(db, owner_id, payload.dict())
    rule = RestRule(user_id=owner_id, **payload.dict())
    db.add(rule)
    db.commit()
    db.refresh(rule)
    return rule


def update_rest_rule(
    db: Session, owner_id: str, rule_id: int, payload: RestRuleUpdate
) -> RestRule:
    rule = _get_rest_rule(db, owner_id, rule_id)
    data = payload.dict(exclude_unset=True)
    _ensure_owned_categories(db, owner_id, data)
    for key, value in data.items():
        setattr(rule, key, value)
    db.add(rule)
    db.commit()
    db.refresh(rule)
    return rule


def delete_rest_rule(db: Session, owner_id: str, rule_id: int) -> None:
    rule = _get_rest_rule(db, owner_id, rule_id)
    db.delete(rule)
    db.commit()


def list_usage_limits(db: Session, owner_id: str) -> list[UsageLimit]:
    return (
        db.query(UsageLimit)
        .filter(UsageLimit.user_id == owner_id, UsageLimit.is_active.is_(True))
        .order_by(UsageLimit.id.asc())
        .all()
    )


def active_usage_limit(db: Session, owner_id: str, category_id: int) -> UsageLimit | None:
    return (
        db.query(UsageLimit)
        .filter(
            UsageLimit.user_id == owner_id,
            UsageLimit.category_id == category_id,
            UsageLimit.is_active.is_(True),
        )
        .first()
    )


def _get_usage_limit(db: Session, owner_id: str, limit_id: int) -> UsageLimit:
    limit = (
        db.query(UsageLimit)
        .filter(UsageLimit.id == limit_id, UsageLimit.user_id == owner_id)
        .first()
    )
    if not limit:
        raise NotFoundError("Usage limit")
    return limit


def upsert_usage_limit(db: Session, owner_id: str, payload: UsageLimitCreate) -> UsageLimit:
    """One limit per (owner, category): an existing row is overwritten."""
    get_category(db, owner_id, payload.category_id)
    limit = (
        db.query(UsageLimit)
        .filter(
            UsageLimit.user_id == owner_id,
            UsageLimit.category_id == payload.category_id,
        )
        .first()
    )
    if limit:
        limit.max_continuous_minutes = payload.max_continuous_minutes
        limit.max_daily_hours = payload.max_daily_hours
        limit.max_weekly_hours = payload.max_weekly_hours
        limit.is_active = True
    else:
        limit = UsageLimit(user_id=owner_id, **payload.dict())
    db.add(limit)
    db.commit()
    db.refresh(limit)
    return limit


def update_usage_limit(
    db: Session, owner_id: str, limit_id: int, payload: UsageLimitUpdate
) -> UsageLimit:
    limit = _get_usage_limit(db, owner_id, limit_id)
    for key, value in payload.dict(exclude_unset=True).items():
        setattr(limit, key, value)
    db.add(limit)
    db.commit()
    db.refresh(limit)
    return limit


def delete_usage_limit(db: Session, owner_id: str, limit_id: int) -> None:
    limit = _get_usage_limit(db, owner_id, limit_id)
    db.delete(limit)
    db.commit()
