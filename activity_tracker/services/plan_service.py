from __future__ import annotations

from datetime import date, datetime

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..exceptions import ConflictException, PlanItemNotFoundException, ValidationException
from ..metrics import LOG_ENTRIES_CREATED_TOTAL
from ..models import LogEntry, PlanItem
from ..schemas.common import Area, PlanStatus
from ..schemas.logs import LogEntryResponse
from ..schemas.plans import PlanItemCompleteRequest, PlanItemCreate, PlanItemResponse, PlanItemUpdate
from ..weeks import get_week_end, is_week_start
from .category_service import CategoryService
from .log_service import build_log_response

logger = structlog.get_logger(__name__)


def build_plan_response(item: PlanItem) -> PlanItemResponse:
    category = item.category
    return PlanItemResponse(
        id=item.id,
        date=item.date,
        area=item.area,
        title=item.title,
        notes=item.notes,
        category_id=item.category_id,
        category_name=category.name if category else None,
        category_color=category.color if category else None,
        duration_minutes=item.duration_minutes,
        intensity=item.intensity,
        status=item.status,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


class PlanService:
    def __init__(self, db: Session, user_id: str):
        self.db = db
        self.user_id = user_id
        self.categories = CategoryService(db, user_id)

    def _get_or_404(self, item_id: int) -> PlanItem:
        stmt = select(PlanItem).where(PlanItem.id == item_id, PlanItem.user_id == self.user_id)
        item = self.db.execute(stmt).scalars().first()
        if not item:
            raise PlanItemNotFoundException(item_id)
        return item

    def list_items(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        area: Area | None = None,
    ) -> list[PlanItemResponse]:
        stmt = select(PlanItem).where(PlanItem.user_id == self.user_id)
        if start_date is not None:
            stmt = stmt.where(PlanItem.date >= start_date)
        if end_date is not None:
            stmt = stmt.where(PlanItem.date <= end_date)
        if area is not None:
            stmt = stmt.where(PlanItem.area == area.value)
        stmt = stmt.order_by(PlanItem.date.asc(), PlanItem.created_at.asc(), PlanItem.id.asc())
        return [build_plan_response(i) for i in self.db.execute(stmt).scalars().all()]

    def list_week(self, week_start: date, area: Area | None = None) -> list[PlanItemResponse]:
        if not is_week_start(week_start):
            raise ValidationException(f"weekStart {week_start.isoformat()} is not a Monday")
        return self.list_items(week_start, get_week_end(week_start), area)

    def create_item(self, payload: PlanItemCreate) -> PlanItemResponse:
        self.categories.require_category(payload.category_id, payload.area)

        item = PlanItem(
            user_id=self.user_id,
            date=payload.date,
            area=payload.area.value,
            title=payload.title,
            notes=payload.notes,
            category_id=payload.category_id,
            duration_minutes=payload.duration_minutes,
            intensity=payload.intensity.value if payload.intensity else None,
            status=PlanStatus.planned.value,
        )
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        logger.info("plan_item_created", user_id=self.user_id, plan_item_id=item.id, date=item.date.isoformat())
        return build_plan_response(item)

    def update_item(self, item_id: int, payload: PlanItemUpdate) -> PlanItemResponse:
        item = self._get_or_404(item_id)
        data = payload.model_dump(exclude_unset=True)

        if data.get("category_id") is not None:
            self.categories.require_category(data["category_id"], Area(item.area))
            item.category_id = data["category_id"]
        if data.get("date") is not None:
            item.date = data["date"]
        if data.get("title") is not None:
            item.title = data["title"]
        if data.get("duration_minutes") is not None:
            item.duration_minutes = data["duration_minutes"]
        if data.get("status") is not None:
            item.status = data["status"].value
        if "notes" in data:
            item.notes = data["notes"]
        if "intensity" in data:
            item.intensity = data["intensity"].value if data["intensity"] else None

        self.db.commit()
        self.db.refresh(item)
        logger.info("plan_item_updated", user_id=self.user_id, plan_item_id=item.id, status=item.status)
        return build_plan_response(item)

    def complete_item(self, item_id: int, payload: PlanItemCompleteRequest, now: datetime) -> LogEntryResponse:
        item = self._get_or_404(item_id)
        if item.status == PlanStatus.completed.value:
            raise ConflictException(f"Plan item {item_id} already completed")

        entry = LogEntry(
            user_id=self.user_id,
            area=item.area,
            date_time=now,
            category_id=item.category_id,
            plan_item_id=item.id,
            title=item.title,
            notes=payload.notes if payload.notes is not None else item.notes,
            duration_minutes=payload.duration_minutes or item.duration_minutes,
            intensity=item.intensity,
        )
        item.status = PlanStatus.completed.value
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)

        LOG_ENTRIES_CREATED_TOTAL.labels(source="plan_item").inc()
        logger.info("plan_item_completed", user_id=self.user_id, plan_item_id=item.id, log_id=entry.id)
        return build_log_response(entry)

    def skip_item(self, item_id: int) -> PlanItemResponse:
        item = self._get_or_404(item_id)
        item.status = PlanStatus.skipped.value
        self.db.commit()
        self.db.refresh(item)
        logger.info("plan_item_skipped", user_id=self.user_id, plan_item_id=item.id)
        return build_plan_response(item)

    def delete_item(self, item_id: int) -> None:
        item = self._get_or_404(item_id)
        self.db.delete(item)
        self.db.commit()
        logger.info("plan_item_deleted", user_id=self.user_id, plan_item_id=item_id)
