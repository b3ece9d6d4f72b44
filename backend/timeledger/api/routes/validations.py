from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from timeledger.api import deps
from timeledger.core.config import get_settings
from timeledger.db.session import get_db
from timeledger.schemas.validation import (
    BlockValidationPublic,
    OmissionReasonPublic,
    PendingValidation,
    ValidationReport,
    ValidationStats,
)
from timeledger.services import validation as validation_service

router = APIRouter()


@router.post("/blocks/{block_id}", response_model=BlockValidationPublic)
def validate_block(
    block_id: int,
    payload: ValidationReport,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> BlockValidationPublic:
    return validation_service.validate_block(db, owner_id, block_id, payload)


@router.get("/pending", response_model=list[PendingValidation])
def list_pending(
    on_date: date | None = Query(default=None, alias="date"),
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> list[PendingValidation]:
    today = date.today()
    if get_settings().auto_complete_stale_pending:
        validation_service.expire_stale_pending(db, owner_id, today)
    return validation_service.pending_validations(db, owner_id, on_date or today, today)


@router.get("/stats", response_model=ValidationStats)
def get_stats(
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> ValidationStats:
    return validation_service.validation_stats(db, owner_id, start_date, end_date)


@router.get("/omission-reasons", response_model=list[OmissionReasonPublic])
def list_omission_reasons(
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> list[OmissionReasonPublic]:
    return validation_service.list_omission_reasons(db)
