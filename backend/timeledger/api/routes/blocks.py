from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from timeledger.api import deps
from timeledger.db.session import get_db
from timeledger.schemas.block import BlockCreate, BlockPublic, BlockUpdate
from timeledger.services import blocks as blocks_service

router = APIRouter()


@router.get("/", response_model=list[BlockPublic])
def list_blocks(
    on_date: date | None = Query(default=None, alias="date"),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> list[BlockPublic]:
    """List blocks for one date, or for an inclusive date range."""
    if start_date and end_date:
        return blocks_service.list_blocks_in_range(db, owner_id, start_date, end_date)
    return blocks_service.list_blocks_for_date(db, owner_id, on_date or date.today())


@router.get("/{block_id}", response_model=BlockPublic)
def get_block(
    block_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> BlockPublic:
    return blocks_service.get_block(db, owner_id, block_id)


@router.post("/", response_model=BlockPublic, status_code=status.HTTP_201_CREATED)
def create_block(
    payload: BlockCreate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> BlockPublic:
    return blocks_service.create_block(db, owner_id, payload)


@router.patch("/{block_id}", response_model=BlockPublic)
def update_block(
    block_id: int,
    payload: BlockUpdate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> BlockPublic:
    return blocks_service.update_block(db, owner_id, block_id, payload)


@router.delete("/{block_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_block(
    block_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> None:
    blocks_service.delete_block(db, owner_id, block_id)
