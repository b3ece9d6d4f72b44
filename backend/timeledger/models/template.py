from datetime import datetime

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


class WeeklyTemplate(Base):
    __tablename__ = "weekly_templates"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    blocks = relationship(
        "TemplateBlock",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by=lambda: (TemplateBlock.day_of_week, TemplateBlock.start_time),
    )


class TemplateBlock(Base):
    __tablename__ = "template_blocks"

    id = Column(Integer, primary_key=True, index=True)
    template_id = Column(
        Integer, ForeignKey("weekly_templates.id", ondelete="CASCADE"), nullable=False
    )
    category_id = Column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False
    )
    day_of_week = Column(Integer, nullable=False)  # days after the week start
    start_time = Column(String(8), nullable=False)
    end_time = Column(String(8), nullable=False)
    title = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    is_flexible = Column(Boolean, nullable=False, default=False)
    priority = Column(Integer, nullable=False, default=5)

    template = relationship("WeeklyTemplate", back_populates="blocks")
    category = relationship("Category")


class AppliedTemplate(Base):
    __tablename__ = "applied_templates"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "template_id", "year", "week_number", name="uq_applied_templates_week"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    template_id = Column(
        Integer, ForeignKey("weekly_templates.id", ondelete="CASCADE"), nullable=False
    )
    year = Column(Integer, nullable=False)
    week_number = Column(Integer, nullable=False)
    applied_at = Column(DateTime, nullable=False, default=datetime.utcnow)
