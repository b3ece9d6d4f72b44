import datetime as dt

from pydantic import BaseModel


class StreakPublic(BaseModel):
    current_streak: int = 0
    longest_streak: int = 0
    last_activity_date: dt.date | None = None

    class Config:
        from_attributes = True


class StreakUpdate(BaseModel):
    current_streak: int
    longest_streak: int
    streak_increased: bool
