from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from timeledger.api import deps
from timeledger.db.session import get_db
from timeledger.schemas.rules import (
    CandidateCheck,
    RestRuleCreate,
    RestRulePublic,
    RestRuleUpdate,
    RoutineViolationPublic,
    UsageLimitCreate,
    UsageLimitPublic,
    UsageLimitUpdate,
    Violation,
)
from timeledger.services import compliance
from timeledger.services import rules as rules_service

router = APIRouter()


@router.get("/rest", response_model=list[RestRulePublic])
def list_rest_rules(
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> list[RestRulePublic]:
    return rules_service.list_rest_rules(db, owner_id)


@router.post("/rest", response_model=RestRulePublic, status_code=status.HTTP_201_CREATED)
def create_rest_rule(
    payload: RestRuleCreate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> RestRulePublic:
    return rules_service.create_rest_rule(db, owner_id, payload)


@router.patch("/rest/{rule_id}", response_model=RestRulePublic)
def update_rest_rule(
    rule_id: int,
    payload: RestRuleUpdate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> RestRulePublic:
    return rules_service.update_rest_rule(db, owner_id, rule_id, payload)


@router.delete("/rest/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_rest_rule(
    rule_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> None:
    rules_service.delete_rest_rule(db, owner_id, rule_id)


@router.get("/limits", response_model=list[UsageLimitPublic])
def list_usage_limits(
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> list[UsageLimitPublic]:
    return rules_service.list_usage_limits(db, owner_id)


@router.post("/limits", response_model=UsageLimitPublic)
def upsert_usage_limit(
    payload: UsageLimitCreate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> UsageLimitPublic:
    return rules_service.upsert_usage_limit(db, owner_id, payload)


@router.patch("/limits/{limit_id}", response_model=UsageLimitPublic)
def update_usage_limit(
    limit_id: int,
    payload: UsageLimitUpdate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> UsageLimitPublic:
    return rules_service.update_usage_limit(db, owner_id, limit_id, payload)


@router.delete("/limits/{limit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_usage_limit(
    limit_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> None:
    rules_service.delete_usage_limit(db, owner_id, limit_id)


@router.post("/check", response_model=list[Violation])
def check_candidate(
    payload: CandidateCheck,
    record: bool = Query(default=False, description="Persist the findings as violations"),
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> list[Violation]:
    return compliance.check_candidate(
        db,
        owner_id,
        payload.date,
        payload.category_id,
        payload.start_time,
        payload.end_time,
        record=record,
    )


@router.get("/violations", response_model=list[RoutineViolationPublic])
def list_violations(
    acknowledged: bool | None = Query(default=None),
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> list[RoutineViolationPublic]:
    return compliance.list_violations(db, owner_id, acknowledged=acknowledged)


@router.post("/violations/acknowledge-all")
def acknowledge_all_violations(
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> dict[str, int]:
    return {"acknowledged": compliance.acknowledge_all(db, owner_id)}


@router.post("/violations/{violation_id}/acknowledge", response_model=RoutineViolationPublic)
def acknowledge_violation(
    violation_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> RoutineViolationPublic:
    return compliance.acknowledge_violation(db, owner_id, violation_id)
