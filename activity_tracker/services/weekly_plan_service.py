from __future__ import annotations

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..exceptions import WeeklyPlanItemNotFoundException
from ..metrics import WEEKLY_PLAN_ITEMS_CREATED_TOTAL
from ..models import WeeklyPlanItem
from ..schemas.common import Area
from ..schemas.weekly_plans import WeeklyPlanItemCreate, WeeklyPlanItemResponse, WeeklyPlanItemUpdate
from .category_service import CategoryService

logger = structlog.get_logger(__name__)


def build_weekly_item_response(item: WeeklyPlanItem) -> WeeklyPlanItemResponse:
    category = item.category
    return WeeklyPlanItemResponse(
        id=item.id,
        area=item.area,
        day_of_week=item.day_of_week,
        category_id=item.category_id,
        category_name=category.name if category else None,
        category_color=category.color if category else None,
        title=item.title,
        notes=item.notes,
        duration_minutes=item.duration_minutes,
        intensity=item.intensity,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


class WeeklyPlanService:
    """CRUD for recurring weekly templates. Completion lives in CompletionService."""

    def __init__(self, db: Session, user_id: str):
        self.db = db
        self.user_id = user_id
        self.categories = CategoryService(db, user_id)

    def get_owned(self, item_id: int, *, active_only: bool = True) -> WeeklyPlanItem:
        stmt = select(WeeklyPlanItem).where(WeeklyPlanItem.id == item_id, WeeklyPlanItem.user_id == self.user_id)
        if active_only:
            stmt = stmt.where(WeeklyPlanItem.is_active.is_(True))
        item = self.db.execute(stmt).scalars().first()
        if not item:
            raise WeeklyPlanItemNotFoundException(item_id)
        return item

    def list_items(self, area: Area | None = None) -> list[WeeklyPlanItemResponse]:
        stmt = select(WeeklyPlanItem).where(
            WeeklyPlanItem.user_id == self.user_id,
            WeeklyPlanItem.is_active.is_(True),
        )
        if area is not None:
            stmt = stmt.where(WeeklyPlanItem.area == area.value)
        stmt = stmt.order_by(WeeklyPlanItem.day_of_week.asc(), WeeklyPlanItem.created_at.asc(), WeeklyPlanItem.id.asc())
        return [build_weekly_item_response(i) for i in self.db.execute(stmt).scalars().all()]

    def create_item(self, payload: WeeklyPlanItemCreate) -> WeeklyPlanItemResponse:
        self.categories.require_category(payload.category_id, payload.area)

        item = WeeklyPlanItem(
            user_id=self.user_id,
            area=payload.area.value,
            day_of_week=payload.day_of_week,
            category_id=payload.category_id,
            title=payload.title,
            notes=payload.notes,
            duration_minutes=payload.duration_minutes,
            intensity=payload.intensity.value if payload.intensity else None,
            is_active=True,
        )
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)

        WEEKLY_PLAN_ITEMS_CREATED_TOTAL.labels(area=item.area).inc()
        logger.info(
            "weekly_plan_item_created",
            user_id=self.user_id,
            item_id=item.id,
            area=item.area,
            day_of_week=item.day_of_week,
        )
        return build_weekly_item_response(item)

    def update_item(self, item_id: int, payload: WeeklyPlanItemUpdate) -> WeeklyPlanItemResponse:
        item = self.get_owned(item_id)
        data = payload.model_dump(exclude_unset=True)

        if data.get("category_id") is not None:
            self.categories.require_category(data["category_id"], Area(item.area))
            item.category_id = data["category_id"]
        if data.get("day_of_week") is not None:
            item.day_of_week = data["day_of_week"]
        if data.get("title") is not None:
            item.title = data["title"]
        if data.get("duration_minutes") is not None:
            item.duration_minutes = data["duration_minutes"]
        if "notes" in data:
            item.notes = data["notes"]
        if "intensity" in data:
            item.intensity = data["intensity"].value if data["intensity"] else None

        self.db.commit()
        self.db.refresh(item)
        logger.info("weekly_plan_item_updated", user_id=self.user_id, item_id=item.id, fields=sorted(data))
        return build_weekly_item_response(item)

    def delete_item(self, item_id: int) -> None:
        """Soft delete; logs that completed the template keep pointing at it."""
        item = self.get_owned(item_id)
        item.is_active = False
        self.db.commit()
        logger.info("weekly_plan_item_deactivated", user_id=self.user_id, item_id=item_id)
