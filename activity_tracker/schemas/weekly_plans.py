from __future__ import annotations

from datetime import date, datetime

from pydantic import Field

from .common import ApiModel, Area, Intensity


class WeeklyPlanItemCreate(ApiModel):
    area: Area
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Monday .. 6 = Sunday")
    category_id: int
    title: str = Field(..., min_length=1, max_length=255)
    duration_minutes: int = Field(45, gt=0)
    intensity: Intensity | None = None
    notes: str | None = None


class WeeklyPlanItemUpdate(ApiModel):
    day_of_week: int | None = Field(None, ge=0, le=6)
    category_id: int | None = None
    title: str | None = Field(None, min_length=1, max_length=255)
    duration_minutes: int | None = Field(None, gt=0)
    intensity: Intensity | None = None
    notes: str | None = None


class WeeklyPlanItemResponse(ApiModel):
    id: int
    area: Area
    day_of_week: int
    category_id: int
    category_name: str | None = None
    category_color: str | None = None
    title: str
    notes: str | None = None
    duration_minutes: int
    intensity: Intensity | None = None
    created_at: datetime
    updated_at: datetime


class WeekStatusItem(ApiModel):
    id: int
    area: Area
    day_of_week: int
    category_id: int
    category_name: str | None = None
    category_color: str | None = None
    title: str
    notes: str | None = None
    duration_minutes: int
    intensity: Intensity | None = None
    is_completed: bool
    completed_log_id: int | None = None
    completed_at: datetime | None = None


class WeekStatusResponse(ApiModel):
    week_start: date
    week_end: date
    items: list[WeekStatusItem]
