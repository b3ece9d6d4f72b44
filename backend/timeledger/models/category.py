from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from timeledger.db.base import Base

DEFAULT_CATEGORIES = [
    {"name": "Sleep", "icon": "moon", "color": "#6366F1", "is_rest_category": True},
    {"name": "Sport", "icon": "fitness", "color": "#10B981"},
    {"name": "Work", "icon": "briefcase", "color": "#F59E0B", "requires_rest_after": True},
    {"name": "Leisure", "icon": "game-controller", "color": "#EC4899", "is_rest_category": True},
    {"name": "Pets", "icon": "paw", "color": "#8B5CF6"},
    {"name": "Finance", "icon": "cash", "color": "#14B8A6"},
]


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    icon = Column(String(64), nullable=True)
    color = Column(String(32), nullable=False, default="#4B5563")
    requires_rest_after = Column(Boolean, nullable=False, default=False)
    is_rest_category = Column(Boolean, nullable=False, default=False)
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    blocks = relationship(
        "ScheduledBlock", back_populates="category", cascade="all, delete-orphan"
    )
