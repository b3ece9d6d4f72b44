from datetime import date

from pydantic import BaseModel, Field, validator

from timeledger.schemas.common import validate_time_format


class TemplateCreate(BaseModel):
    name: str
    description: str | None = None
    is_default: bool = False


class TemplateUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    is_default: bool | None = None


class TemplateBlockBase(BaseModel):
    category_id: int
    day_of_week: int = Field(..., ge=0, le=6)
    start_time: str
    end_time: str
    title: str | None = None
    notes: str | None = None
    is_flexible: bool = False
    priority: int = Field(default=5, ge=1, le=10)

    @validator("start_time", "end_time")
    def check_time_format(cls, v):
        return validate_time_format(v)


class TemplateBlockCreate(TemplateBlockBase):
    pass


class TemplateBlockUpdate(BaseModel):
    category_id: int | None = None
    day_of_week: int | None = Field(default=None, ge=0, le=6)
    start_time: str | None = None
    end_time: str | None = None
    title: str | None = None
    notes: str | None = None
    is_flexible: bool | None = None
    priority: int | None = Field(default=None, ge=1, le=10)

    @validator("start_time", "end_time")
    def check_time_format(cls, v):
        return validate_time_format(v)


class TemplateBlockPublic(TemplateBlockBase):
    id: int
    template_id: int

    class Config:
        from_attributes = True


class TemplatePublic(BaseModel):
    id: int
    user_id: str
    name: str
    description: str | None
    is_default: bool
    blocks: list[TemplateBlockPublic] = []

    class Config:
        from_attributes = True


class TemplateApply(BaseModel):
    week_start_date: date


class TemplateDuplicate(BaseModel):
    name: str


class TemplateApplyResult(BaseModel):
    created: int
    skipped: int
