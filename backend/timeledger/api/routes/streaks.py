from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from timeledger.api import deps
from timeledger.db.session import get_db
from timeledger.schemas.streak import StreakPublic, StreakUpdate
from timeledger.services import streaks as streaks_service

router = APIRouter()


@router.get("/", response_model=StreakPublic)
def get_streak(
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> StreakPublic:
    return streaks_service.get_streak(db, owner_id)


@router.post("/update", response_model=StreakUpdate)
def update_streak(
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> StreakUpdate:
    """Record activity for today after time has been logged."""
    return streaks_service.update_streak(db, owner_id)
