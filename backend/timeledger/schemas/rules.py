import datetime as dt

from pydantic import BaseModel, Field, validator

from timeledger.schemas.common import validate_time_format


class RestRuleBase(BaseModel):
    category_id: int | None = None
    trigger_duration_minutes: int = Field(..., ge=1)
    rest_duration_minutes: int = Field(default=15, ge=1)
    rest_category_id: int | None = None
    is_mandatory: bool = False


class RestRuleCreate(RestRuleBase):
    pass


class RestRuleUpdate(BaseModel):
    category_id: int | None = None
    trigger_duration_minutes: int | None = Field(default=None, ge=1)
    rest_duration_minutes: int | None = Field(default=None, ge=1)
    rest_category_id: int | None = None
    is_mandatory: bool | None = None
    is_active: bool | None = None


class RestRulePublic(RestRuleBase):
    id: int
    user_id: str
    is_active: bool

    class Config:
        from_attributes = True


class UsageLimitBase(BaseModel):
    category_id: int
    max_continuous_minutes: int = Field(..., ge=1)
    max_daily_hours: float | None = Field(default=None, ge=0)
    max_weekly_hours: float | None = Field(default=None, ge=0)


class UsageLimitCreate(UsageLimitBase):
    pass


class UsageLimitUpdate(BaseModel):
    max_continuous_minutes: int | None = Field(default=None, ge=1)
    max_daily_hours: float | None = Field(default=None, ge=0)
    max_weekly_hours: float | None = Field(default=None, ge=0)
    is_active: bool | None = None


class UsageLimitPublic(UsageLimitBase):
    id: int
    user_id: str
    is_active: bool

    class Config:
        from_attributes = True


class CandidateCheck(BaseModel):
    date: dt.date
    category_id: int
    start_time: str
    end_time: str

    @validator("start_time", "end_time")
    def check_time_format(cls, v):
        return validate_time_format(v)


class Violation(BaseModel):
    """A rule finding that has not necessarily been persisted."""

    type: str
    message: str
    severity: str


class RoutineViolationPublic(BaseModel):
    id: int
    user_id: str
    scheduled_block_id: int | None
    violation_type: str
    category_id: int | None
    description: str
    severity: str
    acknowledged: bool
    acknowledged_at: dt.datetime | None
    created_at: dt.datetime

    class Config:
        from_attributes = True
