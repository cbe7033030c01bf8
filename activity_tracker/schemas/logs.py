from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .common import ApiModel, Area, Intensity


class LogEntryCreate(ApiModel):
    area: Area
    date_time: datetime
    category_id: int
    title: str = Field(..., min_length=1, max_length=255)
    duration_minutes: int = Field(..., gt=0)
    notes: str | None = None
    intensity: Intensity | None = None
    points: int | None = None


class LogEntryUpdate(ApiModel):
    date_time: datetime | None = None
    category_id: int | None = None
    title: str | None = Field(None, min_length=1, max_length=255)
    duration_minutes: int | None = Field(None, gt=0)
    notes: str | None = None
    intensity: Intensity | None = None
    points: int | None = None


class LogEntryResponse(ApiModel):
    id: int
    area: Area
    date_time: datetime
    category_id: int
    category_name: str | None = None
    category_color: str | None = None
    weekly_plan_item_id: int | None = None
    plan_item_id: int | None = None
    title: str
    notes: str | None = None
    duration_minutes: int
    intensity: Intensity | None = None
    points: int | None = None
    created_at: datetime


class LogEntryListResponse(ApiModel):
    entries: list[LogEntryResponse]
    total: int
