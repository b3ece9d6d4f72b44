from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from timeledger.api import deps
from timeledger.db.session import get_db
from timeledger.schemas.category import CategoryCreate, CategoryPublic, CategoryUpdate
from timeledger.services import categories as categories_service

router = APIRouter()


@router.get("/", response_model=list[CategoryPublic])
def list_categories(
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> list[CategoryPublic]:
    return categories_service.list_categories(db, owner_id)


@router.post("/defaults", response_model=list[CategoryPublic])
def create_default_categories(
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> list[CategoryPublic]:
    return categories_service.ensure_default_categories(db, owner_id)


@router.post("/", response_model=CategoryPublic, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> CategoryPublic:
    return categories_service.create_category(db, owner_id, payload)


@router.patch("/{category_id}", response_model=CategoryPublic)
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> CategoryPublic:
    return categories_service.update_category(db, owner_id, category_id, payload)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    owner_id: str = Depends(deps.get_current_owner),
) -> None:
    categories_service.delete_category(db, owner_id, category_id)
