from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from timeledger.db.base import Base


class BlockPriority(str, PyEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


PRIORITY_VALUE = {
    BlockPriority.LOW: 3,
    BlockPriority.MEDIUM: 5,
    BlockPriority.HIGH: 7,
    BlockPriority.CRITICAL: 10,
}


class ScheduledBlock(Base):
    __tablename__ = "scheduled_blocks"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    category_id = Column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False
    )
    date = Column(Date, nullable=False, index=True)
    start_time = Column(String(8), nullable=False)  # HH:MM
    end_time = Column(String(8), nullable=False)  # HH:MM
    title = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    is_flexible = Column(Boolean, nullable=False, default=False)
    priority = Column(Integer, nullable=False, default=5)  # 1-10
    # Display cache only; overlap and rule checks re-derive from start/end
    crosses_midnight = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    category = relationship("Category", back_populates="blocks")
    validation = relationship(
        "BlockValidation",
        back_populates="block",
        uselist=False,
        cascade="all, delete-orphan",
    )
    violations = relationship("RoutineViolation", back_populates="block")
