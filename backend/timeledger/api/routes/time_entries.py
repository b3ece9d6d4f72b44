from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from timeledger.api import deps
from timeledger.db.session import get_db
from timeledger.schemas.common import MONTH_PATTERN
from timeledger.schemas.time_entry import TimeEntryCreate, TimeEntryPublic, TimeEntryUpdate
from timeledger.services import time_entries as time_entries_service

router = APIRouter()


@router.get("/", response_model=list[TimeEntryPublic])
def list_time_entries(
    month: str | None = Query(default=None, pattern=MONTH_PATTERN),
    category_id: int | None = None,
    limit: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> list[TimeEntryPublic]:
    return time_entries_service.list_time_entries(
        db, owner_id, month=month, category_id=category_id, limit=limit
    )


@router.post("/", response_model=TimeEntryPublic, status_code=status.HTTP_201_CREATED)
def create_time_entry(
    payload: TimeEntryCreate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> TimeEntryPublic:
    return time_entries_service.create_time_entry(db, owner_id, payload)


@router.patch("/{entry_id}", response_model=TimeEntryPublic)
def update_time_entry(
    entry_id: int,
    payload: TimeEntryUpdate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> TimeEntryPublic:
    return time_entries_service.update_time_entry(db, owner_id, entry_id, payload)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_time_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> None:
    time_entries_service.delete_time_entry(db, owner_id, entry_id)
