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
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from timeledger.db.base import Base


class ValidationStatus(str, PyEnum):
    PENDING = "pending"
    COMPLETED = "completed"
    PARTIAL = "partial"
    OMITTED = "omitted"


DEFAULT_COMPLETION = {
    ValidationStatus.COMPLETED: 100,
    ValidationStatus.PARTIAL: 50,
    ValidationStatus.OMITTED: 0,
}


class BlockValidation(Base):
    __tablename__ = "block_validations"
    __table_args__ = (
        UniqueConstraint("scheduled_block_id", name="uq_block_validations_block"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    scheduled_block_id = Column(
        Integer, ForeignKey("scheduled_blocks.id", ondelete="CASCADE"), nullable=False
    )
    # Stored as the lowercase value so downstream consumers can branch on it
    status = Column(String(16), nullable=False, default=ValidationStatus.PENDING.value)
    actual_start_time = Column(String(8), nullable=True)
    actual_end_time = Column(String(8), nullable=True)
    actual_duration_minutes = Column(Integer, nullable=True)
    completion_percentage = Column(Integer, nullable=True)
    omission_reason_id = Column(
        Integer, ForeignKey("omission_reasons.id", ondelete="SET NULL"), nullable=True
    )
    omission_notes = Column(Text, nullable=True)
    validated_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    block = relationship("ScheduledBlock", back_populates="validation")
    omission_reason = relationship("OmissionReason")


class OmissionReason(Base):
    __tablename__ = "omission_reasons"

    id = Column(Integer, primary_key=True, index=True)
    label = Column(String(255), nullable=False)
    category = Column(String(64), nullable=False)  # personal, external, health...
    is_system_default = Column(Boolean, nullable=False, default=True)
