from __future__ import annotations

import datetime as dt

from pydantic import Field

from .common import ApiModel, Area, Intensity, PlanStatus


class PlanItemCreate(ApiModel):
    date: dt.date
    area: Area
    title: str = Field(..., min_length=1, max_length=255)
    category_id: int
    duration_minutes: int = Field(45, gt=0)
    intensity: Intensity | None = None
    notes: str | None = None


class PlanItemUpdate(ApiModel):
    date: dt.date | None = None
    title: str | None = Field(None, min_length=1, max_length=255)
    category_id: int | None = None
    duration_minutes: int | None = Field(None, gt=0)
    intensity: Intensity | None = None
    notes: str | None = None
    status: PlanStatus | None = None


class PlanItemCompleteRequest(ApiModel):
    duration_minutes: int | None = Field(None, gt=0, description="Override the planned duration")
    notes: str | None = Field(None, description="Override the planned notes")


class PlanItemResponse(ApiModel):
    id: int
    date: dt.date
    area: Area
    title: str
    notes: str | None = None
    category_id: int
    category_name: str | None = None
    category_color: str | None = None
    duration_minutes: int
    intensity: Intensity | None = None
    status: PlanStatus
    created_at: dt.datetime
    updated_at: dt.datetime
