from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from timeledger.core.errors import NotFoundError
from timeledger.models.category import DEFAULT_CATEGORIES, Category
from timeledger.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)


def list_categories(db: Session, owner_id: str) -> list[Category]:
    return (
        db.query(Category)
        .filter(Category.user_id == owner_id)
        .order_by(Category.created_at.asc(), Category.id.asc())
        .all()
    )


def get_category(db: Session, owner_id: str, category_id: int) -> Category:
    category = (
        db.query(Category)
        .filter(Category.id == category_id, Category.user_id == owner_id)
        .first()
    )
    if not category:
        raise NotFoundError("Category")
    return category


def create_category(db: Session, owner_id: str, payload: CategoryCreate) -> Category:
    category = Category(user_id=owner_id, is_default=False, **payload.dict())
    db.add(category)
    db.commit()
    db.refresh(category)
    logger.info(f"Category created: {category.id} | {category.name}")
    return category


def update_category(
    db: Session, owner_id: str, category_id: int, payload: CategoryUpdate
) -> Category:
    category = get_category(db, owner_id, category_id)
    for key, value in payload.dict(exclude_unset=True).items():
        setattr(category, key, value)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def delete_category(db: Session, owner_id: str, category_id: int) -> None:
    category = get_category(db, owner_id, category_id)
    db.delete(category)
    db.commit()


def ensure_default_categories(db: Session, owner_id: str) -> list[Category]:
    """Provision the default categories for an owner that has none."""
    existing = list_categories(db, owner_id)
    if existing:
        return existing
    db.add_all(
        Category(user_id=owner_id, is_default=True, **defaults)
        for defaults in DEFAULT_CATEGORIES
    )
    db.commit()
    logger.info(f"Default categories created for {owner_id}")
    return list_categories(db, owner_id)
