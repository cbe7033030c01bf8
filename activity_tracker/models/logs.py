from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from ..database import Base


class LogEntry(Base):
    __tablename__ = "log_entries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    area = Column(String(16), nullable=False)
    date_time = Column(DateTime, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)

    weekly_plan_item_id = Column(
        Integer, ForeignKey("weekly_plan_items.id", ondelete="SET NULL"), nullable=True, index=True
    )
    plan_item_id = Column(Integer, ForeignKey("plan_items.id", ondelete="SET NULL"), nullable=True, index=True)
    # Monday of date_time for template-linked logs; only a uniqueness key, reads use date_time.
    completion_week_start = Column(Date, nullable=True)

    title = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)
    duration_minutes = Column(Integer, nullable=False)
    intensity = Column(String(16), nullable=True)
    points = Column(Integer, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    category = relationship("Category", lazy="joined")

    __table_args__ = (
        UniqueConstraint(
            "weekly_plan_item_id",
            "completion_week_start",
            name="uq_log_entries_weekly_item_week",
        ),
        Index("ix_log_entries_user_date_time", "user_id", "date_time"),
        Index("ix_log_entries_user_area_date_time", "user_id", "area", "date_time"),
    )

    def __repr__(self):
        return "<LogEntry(id=%s, area=%s, date_time=%s, weekly_plan_item_id=%s, plan_item_id=%s)>" % (
            self.id,
            self.area,
            self.date_time,
            self.weekly_plan_item_id,
            self.plan_item_id,
        )
