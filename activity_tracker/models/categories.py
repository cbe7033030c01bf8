from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, UniqueConstraint

from ..database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    area = Column(String(16), nullable=False)
    name = Column(String(128), nullable=False)
    color = Column(String(32), nullable=False)
    # Football only: technical, physical, tactical, ...
    type = Column(String(64), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "area", "name", name="uq_categories_user_area_name"),
        Index("ix_categories_user_area_active", "user_id", "area", "is_active"),
    )

    def __repr__(self):
        return "<Category(id=%s, area=%s, name='%s', active=%s)>" % (self.id, self.area, self.name, self.is_active)
