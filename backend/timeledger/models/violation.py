from __future__ import annotations

from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from timeledger.db.base import Base


class ViolationType(str, PyEnum):
    CONTINUOUS_EXCEEDED = "continuous_exceeded"
    DAILY_EXCEEDED = "daily_exceeded"
    REST_SUGGESTED = "rest_suggested"
    REST_SKIPPED = "rest_skipped"

    @classmethod
    def parse(cls, value: str) -> ViolationType | str:
        """Return the canonical member, or the raw string for any other type."""
        try:
            return cls(value)
        except ValueError:
            return value


class Severity(str, PyEnum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class RoutineViolation(Base):
    __tablename__ = "routine_violations"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    scheduled_block_id = Column(
        Integer, ForeignKey("scheduled_blocks.id", ondelete="SET NULL"), nullable=True
    )
    violation_type = Column(String(64), nullable=False)
    category_id = Column(
        Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True
    )
    description = Column(Text, nullable=False)
    severity = Column(String(16), nullable=False, default=Severity.WARNING.value)
    acknowledged = Column(Boolean, nullable=False, default=False)
    acknowledged_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    block = relationship("ScheduledBlock", back_populates="violations")
    category = relationship("Category")

    @property
    def kind(self) -> ViolationType | str:
        return ViolationType.parse(self.violation_type)
