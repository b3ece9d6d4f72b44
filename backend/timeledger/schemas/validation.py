import datetime as dt
from typing import Literal

from pydantic import BaseModel, Field, validator

from timeledger.schemas.common import validate_time_format


class ValidationReport(BaseModel):
    status: Literal["completed", "partial", "omitted"]
    actual_start_time: str | None = None
    actual_end_time: str | None = None
    completion_percentage: int | None = Field(default=None, ge=0, le=100)
    omission_reason_id: int | None = None
    omission_notes: str | None = None

    @validator("actual_start_time", "actual_end_time")
    def check_time_format(cls, v):
        return validate_time_format(v)


class BlockValidationPublic(BaseModel):
    id: int
    user_id: str
    scheduled_block_id: int
    status: str
    actual_start_time: str | None
    actual_end_time: str | None
    actual_duration_minutes: int | None
    completion_percentage: int | None
    omission_reason_id: int | None
    omission_notes: str | None
    validated_at: dt.datetime | None

    class Config:
        from_attributes = True


class PendingValidation(BaseModel):
    validation_id: int
    block_id: int
    category_id: int
    date: dt.date
    start_time: str
    end_time: str
    title: str | None
    priority: int
    days_ago: int


class StatusCounts(BaseModel):
    total: int = 0
    completed: int = 0
    partial: int = 0
    omitted: int = 0
    pending: int = 0
    average_completion: int = 0


class ValidationStats(StatusCounts):
    by_category: dict[int, StatusCounts] = Field(default_factory=dict)


class OmissionReasonPublic(BaseModel):
    id: int
    label: str
    category: str

    class Config:
        from_attributes = True
