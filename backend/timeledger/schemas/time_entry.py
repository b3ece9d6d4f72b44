import datetime as dt

from pydantic import BaseModel


class TimeEntryCreate(BaseModel):
    category_id: int
    start_time: dt.datetime
    end_time: dt.datetime
    date: dt.date
    notes: str | None = None


class TimeEntryUpdate(BaseModel):
    category_id: int | None = None
    start_time: dt.datetime | None = None
    end_time: dt.datetime | None = None
    date: dt.date | None = None
    notes: str | None = None


class TimeEntryPublic(BaseModel):
    id: int
    category_id: int
    start_time: dt.datetime
    end_time: dt.datetime
    duration_minutes: int
    date: dt.date
    notes: str | None

    class Config:
        from_attributes = True
