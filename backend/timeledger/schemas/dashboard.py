import datetime as dt

from pydantic import BaseModel


class CategoryBreakdown(BaseModel):
    category_id: int
    name: str
    color: str
    icon: str | None
    total_minutes: int
    goal_hours: float | None
    limit_hours: float | None
    progress_percent: int


class DailyTotal(BaseModel):
    date: dt.date
    minutes: int


class MonthlyStats(BaseModel):
    total_hours: float
    categories_used: int
    category_breakdown: list[CategoryBreakdown]
    daily_totals: list[DailyTotal]
