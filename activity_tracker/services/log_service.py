from __future__ import annotations

from datetime import date

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import ConflictException, LogEntryNotFoundException
from ..metrics import LOG_ENTRIES_CREATED_TOTAL, LOG_ENTRIES_DELETED_TOTAL
from ..models import LogEntry, PlanItem
from ..schemas.common import Area, PlanStatus
from ..schemas.logs import LogEntryCreate, LogEntryListResponse, LogEntryResponse, LogEntryUpdate
from ..weeks import date_bounds, get_week_start, to_naive_utc
from .category_service import CategoryService

logger = structlog.get_logger(__name__)


def build_log_response(entry: LogEntry) -> LogEntryResponse:
    category = entry.category
    return LogEntryResponse(
        id=entry.id,
        area=entry.area,
        date_time=entry.date_time,
        category_id=entry.category_id,
        category_name=category.name if category else None,
        category_color=category.color if category else None,
        weekly_plan_item_id=entry.weekly_plan_item_id,
        plan_item_id=entry.plan_item_id,
        title=entry.title,
        notes=entry.notes,
        duration_minutes=entry.duration_minutes,
        intensity=entry.intensity,
        points=entry.points,
        created_at=entry.created_at,
    )


class LogService:
    def __init__(self, db: Session, user_id: str):
        self.db = db
        self.user_id = user_id
        self.categories = CategoryService(db, user_id)

    def _get_or_404(self, log_id: int) -> LogEntry:
        stmt = select(LogEntry).where(LogEntry.id == log_id, LogEntry.user_id == self.user_id)
        entry = self.db.execute(stmt).scalars().first()
        if not entry:
            raise LogEntryNotFoundException(log_id)
        return entry

    def _filters(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        area: Area | None = None,
        category_id: int | None = None,
    ) -> list:
        filters = [LogEntry.user_id == self.user_id]
        if start_date is not None:
            filters.append(LogEntry.date_time >= date_bounds(start_date, start_date)[0])
        if end_date is not None:
            filters.append(LogEntry.date_time < date_bounds(end_date, end_date)[1])
        if area is not None:
            filters.append(LogEntry.area == area.value)
        if category_id is not None:
            filters.append(LogEntry.category_id == category_id)
        return filters

    def list_entries(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        area: Area | None = None,
        category_id: int | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> LogEntryListResponse:
        filters = self._filters(start_date, end_date, area, category_id)

        stmt = select(LogEntry).where(*filters).order_by(LogEntry.date_time.desc(), LogEntry.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit).offset(offset)
        entries = self.db.execute(stmt).scalars().all()

        total = self.db.execute(select(func.count(LogEntry.id)).where(*filters)).scalar_one()
        return LogEntryListResponse(entries=[build_log_response(e) for e in entries], total=total)

    def list_today(self, today: date, area: Area | None = None) -> list[LogEntryResponse]:
        filters = self._filters(today, today, area)
        stmt = select(LogEntry).where(*filters).order_by(LogEntry.date_time.desc(), LogEntry.id.desc())
        return [build_log_response(e) for e in self.db.execute(stmt).scalars().all()]

    def create_entry(self, payload: LogEntryCreate) -> LogEntryResponse:
        self.categories.require_category(payload.category_id, payload.area)

        entry = LogEntry(
            user_id=self.user_id,
            area=payload.area.value,
            date_time=to_naive_utc(payload.date_time),
            category_id=payload.category_id,
            title=payload.title,
            notes=payload.notes,
            duration_minutes=payload.duration_minutes,
            intensity=payload.intensity.value if payload.intensity else None,
            points=payload.points,
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)

        LOG_ENTRIES_CREATED_TOTAL.labels(source="manual").inc()
        logger.info("log_entry_created", user_id=self.user_id, log_id=entry.id, area=entry.area)
        return build_log_response(entry)

    def update_entry(self, log_id: int, payload: LogEntryUpdate) -> LogEntryResponse:
        entry = self._get_or_404(log_id)
        data = payload.model_dump(exclude_unset=True)

        if data.get("category_id") is not None:
            # Retired categories stay valid so history can still be corrected.
            self.categories.require_category(data["category_id"], Area(entry.area), active_only=False)
            entry.category_id = data["category_id"]
        if data.get("title") is not None:
            entry.title = data["title"]
        if data.get("duration_minutes") is not None:
            entry.duration_minutes = data["duration_minutes"]
        if "notes" in data:
            entry.notes = data["notes"]
        if "intensity" in data:
            entry.intensity = data["intensity"].value if data["intensity"] else None
        if "points" in data:
            entry.points = data["points"]

        if data.get("date_time") is not None:
            entry.date_time = to_naive_utc(data["date_time"])
            if entry.weekly_plan_item_id is not None:
                week_start = get_week_start(entry.date_time)
                self._ensure_week_free(entry, week_start)
                entry.completion_week_start = week_start

        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictException("Weekly plan item already completed in that week") from exc
        self.db.refresh(entry)
        logger.info("log_entry_updated", user_id=self.user_id, log_id=entry.id)
        return build_log_response(entry)

    def _ensure_week_free(self, entry: LogEntry, week_start: date) -> None:
        stmt = select(LogEntry.id).where(
            LogEntry.weekly_plan_item_id == entry.weekly_plan_item_id,
            LogEntry.completion_week_start == week_start,
            LogEntry.id != entry.id,
        )
        if self.db.execute(stmt).first() is not None:
            raise ConflictException(
                f"Weekly plan item {entry.weekly_plan_item_id} already completed in week {week_start.isoformat()}"
            )

    def delete_entry(self, log_id: int) -> None:
        entry = self._get_or_404(log_id)

        if entry.plan_item_id is not None:
            plan_item = self.db.execute(
                select(PlanItem).where(PlanItem.id == entry.plan_item_id, PlanItem.user_id == self.user_id)
            ).scalars().first()
            if plan_item is not None:
                plan_item.status = PlanStatus.planned.value

        self.db.delete(entry)
        self.db.commit()

        LOG_ENTRIES_DELETED_TOTAL.inc()
        logger.info(
            "log_entry_deleted",
            user_id=self.user_id,
            log_id=log_id,
            plan_item_id=entry.plan_item_id,
            weekly_plan_item_id=entry.weekly_plan_item_id,
        )
