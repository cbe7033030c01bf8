from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .common import ApiModel, Area


class CategoryCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=128)
    color: str | None = Field(None, max_length=32)
    type: str | None = Field(None, max_length=64, description="Sub-type, football categories only")


class CategoryUpdate(ApiModel):
    name: str | None = Field(None, min_length=1, max_length=128)
    color: str | None = Field(None, max_length=32)
    type: str | None = Field(None, max_length=64)
    is_active: bool | None = None


class CategoryResponse(ApiModel):
    id: int
    area: Area
    name: str
    color: str
    type: str | None = None
    is_active: bool
    created_at: datetime


class CategoryDeleteResponse(ApiModel):
    id: int
    deleted: bool
    deactivated: bool
