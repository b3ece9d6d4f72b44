from datetime import datetime

from pydantic import BaseModel


class CategoryBase(BaseModel):
    name: str
    icon: str | None = None
    color: str = "#4B5563"
    requires_rest_after: bool = False
    is_rest_category: bool = False


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: str | None = None
    icon: str | None = None
    color: str | None = None
    requires_rest_after: bool | None = None
    is_rest_category: bool | None = None


class CategoryPublic(CategoryBase):
    id: int
    user_id: str
    is_default: bool
    created_at: datetime

    class Config:
        from_attributes = True
