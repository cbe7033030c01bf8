from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, Column, Date, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base


class WeeklyPlanItem(Base):
    """Recurring weekly slot. Whether it is done in a given week is never stored here."""

    __tablename__ = "weekly_plan_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    area = Column(String(16), nullable=False)
    # 0 = Monday .. 6 = Sunday
    day_of_week = Column(Integer, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    title = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)
    duration_minutes = Column(Integer, nullable=False, default=45)
    intensity = Column(String(16), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    category = relationship("Category", lazy="joined")

    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_weekly_plan_items_day_of_week"),
        Index("ix_weekly_plan_items_user_area_active", "user_id", "area", "is_active"),
    )

    def __repr__(self):
        return "<WeeklyPlanItem(id=%s, area=%s, day=%s, title='%s')>" % (
            self.id,
            self.area,
            self.day_of_week,
            self.title,
        )


class PlanItem(Base):
    """One-off plan for a specific date, with a stored status."""

    __tablename__ = "plan_items"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    date = Column(Date, nullable=False)
    area = Column(String(16), nullable=False)
    title = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    duration_minutes = Column(Integer, nullable=False, default=45)
    intensity = Column(String(16), nullable=True)
    status = Column(String(16), nullable=False, default="planned")

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    category = relationship("Category", lazy="joined")

    __table_args__ = (Index("ix_plan_items_user_date", "user_id", "date"),)
