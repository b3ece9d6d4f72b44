import datetime as dt

from pydantic import BaseModel, validator

from timeledger.models.scheduled_block import BlockPriority
from timeledger.schemas.common import validate_priority, validate_time_format


class BlockBase(BaseModel):
    category_id: int
    date: dt.date
    start_time: str
    end_time: str
    title: str | None = None
    notes: str | None = None
    is_flexible: bool = False

    @validator("start_time", "end_time")
    def check_time_format(cls, v):
        return validate_time_format(v)


class BlockCreate(BlockBase):
    # Either a label or an explicit 1-10 value
    priority: BlockPriority | int = BlockPriority.MEDIUM

    @validator("priority")
    def check_priority_range(cls, v):
        return validate_priority(v)


class BlockUpdate(BaseModel):
    category_id: int | None = None
    date: dt.date | None = None
    start_time: str | None = None
    end_time: str | None = None
    title: str | None = None
    notes: str | None = None
    is_flexible: bool | None = None
    priority: BlockPriority | int | None = None

    @validator("start_time", "end_time")
    def check_time_format(cls, v):
        return validate_time_format(v)

    @validator("priority")
    def check_priority_range(cls, v):
        return validate_priority(v)


class BlockValidationSummary(BaseModel):
    id: int
    status: str
    completion_percentage: int | None
    actual_duration_minutes: int | None

    class Config:
        from_attributes = True


class BlockPublic(BlockBase):
    id: int
    user_id: str
    priority: int
    crosses_midnight: bool
    created_at: dt.datetime
    updated_at: dt.datetime
    validation: BlockValidationSummary | None = None

    class Config:
        from_attributes = True
