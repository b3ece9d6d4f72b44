from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from timeledger.api import deps
from timeledger.db.session import get_db
from timeledger.schemas.common import MONTH_PATTERN
from timeledger.schemas.dashboard import MonthlyStats
from timeledger.services import dashboard as dashboard_service

router = APIRouter()


@router.get("/monthly", response_model=MonthlyStats)
def get_monthly_stats(
    month: str = Query(..., pattern=MONTH_PATTERN, description="Month as YYYY-MM"),
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> MonthlyStats:
    return dashboard_service.monthly_stats(db, owner_id, month)
