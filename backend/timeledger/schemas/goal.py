from pydantic import BaseModel, Field

from timeledger.models.goal import GoalType


class MonthlyGoalCreate(BaseModel):
    category_id: int
    year: int
    month: int = Field(..., ge=1, le=12)
    target_hours: float = Field(..., ge=0)
    goal_type: GoalType = GoalType.MINIMUM


class WeeklyGoalCreate(BaseModel):
    category_id: int
    year: int
    week_number: int = Field(..., ge=1, le=53)
    target_hours: float = Field(..., ge=0)
    goal_type: GoalType = GoalType.MINIMUM


class MonthlyGoalPublic(MonthlyGoalCreate):
    id: int
    user_id: str

    class Config:
        from_attributes = True


class WeeklyGoalPublic(WeeklyGoalCreate):
    id: int
    user_id: str

    class Config:
        from_attributes = True


class GoalProgress(BaseModel):
    goal_id: int | None = None
    category_id: int
    target_hours: float | None
    goal_type: GoalType | None
    achieved_hours: float
    remaining_hours: float | None = None
    percentage: int | None
    status: str
    days_remaining: int | None = None
    daily_required_hours: float | None = None
