from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from timeledger.db.base import Base


class GoalType(str, PyEnum):
    MINIMUM = "minimum"
    MAXIMUM = "maximum"


class MonthlyGoal(Base):
    __tablename__ = "monthly_goals"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "category_id", "year", "month", name="uq_monthly_goals_period"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    category_id = Column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False
    )
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    target_hours = Column(Float, nullable=False)
    goal_type = Column(String(16), nullable=False, default=GoalType.MINIMUM.value)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    category = relationship("Category")


class WeeklyGoal(Base):
    __tablename__ = "weekly_goals"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "category_id", "year", "week_number", name="uq_weekly_goals_period"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    category_id = Column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False
    )
    year = Column(Integer, nullable=False)
    week_number = Column(Integer, nullable=False)  # ISO week
    target_hours = Column(Float, nullable=False)
    goal_type = Column(String(16), nullable=False, default=GoalType.MINIMUM.value)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    category = relationship("Category")
