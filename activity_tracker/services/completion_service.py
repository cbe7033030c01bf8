from __future__ import annotations

from datetime import date, datetime

import structlog
from sqlalchemy import and_, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import AlreadyCompletedException, NotCompletedException, ValidationException
from ..metrics import (
    COMPLETION_CONFLICTS_TOTAL,
    LOG_ENTRIES_CREATED_TOTAL,
    WEEKLY_PLAN_COMPLETIONS_TOTAL,
    WEEKLY_PLAN_UNCOMPLETIONS_TOTAL,
)
from ..models import LogEntry, WeeklyPlanItem
from ..schemas.common import Area
from ..schemas.logs import LogEntryResponse
from ..schemas.weekly_plans import WeekStatusItem, WeekStatusResponse
from ..weeks import get_week_end, get_week_start, is_week_start, week_bounds
from .log_service import build_log_response
from .weekly_plan_service import WeeklyPlanService

logger = structlog.get_logger(__name__)


class CompletionService:
    """Derives per-week completion of weekly templates from log entries and toggles it.

    A template is completed in a week when a log entry pointing back at it is
    dated inside that Monday..Sunday range. Nothing on the template itself
    records completion, so the status never goes stale when a week rolls over.
    """

    def __init__(self, db: Session, user_id: str):
        self.db = db
        self.user_id = user_id
        self.templates = WeeklyPlanService(db, user_id)

    def _first_completions(self, week_start: date):
        start, end = week_bounds(week_start)
        rank = (
            func.row_number()
            .over(
                partition_by=LogEntry.weekly_plan_item_id,
                order_by=(LogEntry.date_time.asc(), LogEntry.id.asc()),
            )
            .label("rn")
        )
        return (
            select(
                LogEntry.id.label("log_id"),
                LogEntry.weekly_plan_item_id.label("item_id"),
                LogEntry.date_time.label("completed_at"),
                rank,
            )
            .where(
                LogEntry.user_id == self.user_id,
                LogEntry.weekly_plan_item_id.is_not(None),
                LogEntry.date_time >= start,
                LogEntry.date_time < end,
            )
            .subquery()
        )

    def get_week_status(self, week_start: date, area: Area | None = None) -> WeekStatusResponse:
        if not is_week_start(week_start):
            raise ValidationException(f"weekStart {week_start.isoformat()} is not a Monday")

        completions = self._first_completions(week_start)
        stmt = (
            select(WeeklyPlanItem, completions.c.log_id, completions.c.completed_at)
            .outerjoin(
                completions,
                and_(completions.c.item_id == WeeklyPlanItem.id, completions.c.rn == 1),
            )
            .where(WeeklyPlanItem.user_id == self.user_id, WeeklyPlanItem.is_active.is_(True))
        )
        if area is not None:
            stmt = stmt.where(WeeklyPlanItem.area == area.value)
        stmt = stmt.order_by(WeeklyPlanItem.day_of_week.asc(), WeeklyPlanItem.created_at.asc(), WeeklyPlanItem.id.asc())

        items = []
        for item, log_id, completed_at in self.db.execute(stmt).all():
            category = item.category
            items.append(
                WeekStatusItem(
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
                    is_completed=log_id is not None,
                    completed_log_id=log_id,
                    completed_at=completed_at,
                )
            )
        return WeekStatusResponse(week_start=week_start, week_end=get_week_end(week_start), items=items)

    def _find_completion(self, item_id: int, week_start: date) -> LogEntry | None:
        start, end = week_bounds(week_start)
        stmt = (
            select(LogEntry)
            .where(
                LogEntry.user_id == self.user_id,
                LogEntry.weekly_plan_item_id == item_id,
                LogEntry.date_time >= start,
                LogEntry.date_time < end,
            )
            .order_by(LogEntry.date_time.asc(), LogEntry.id.asc())
            .limit(1)
        )
        return self.db.execute(stmt).scalars().first()

    def complete(self, item_id: int, now: datetime) -> LogEntryResponse:
        item = self.templates.get_owned(item_id)
        week_start = get_week_start(now)

        if self._find_completion(item.id, week_start) is not None:
            COMPLETION_CONFLICTS_TOTAL.labels(action="complete").inc()
            raise AlreadyCompletedException(item.id, week_start)

        entry = LogEntry(
            user_id=self.user_id,
            area=item.area,
            date_time=now,
            category_id=item.category_id,
            weekly_plan_item_id=item.id,
            completion_week_start=week_start,
            title=item.title,
            notes=item.notes,
            duration_minutes=item.duration_minutes,
            intensity=item.intensity,
        )
        self.db.add(entry)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            COMPLETION_CONFLICTS_TOTAL.labels(action="complete").inc()
            raise AlreadyCompletedException(item_id, week_start) from exc
        self.db.refresh(entry)

        WEEKLY_PLAN_COMPLETIONS_TOTAL.inc()
        LOG_ENTRIES_CREATED_TOTAL.labels(source="weekly_plan").inc()
        logger.info(
            "weekly_plan_completed",
            user_id=self.user_id,
            item_id=item.id,
            log_id=entry.id,
            week_start=week_start.isoformat(),
        )
        return build_log_response(entry)

    def uncomplete(self, item_id: int, now: datetime) -> None:
        item = self.templates.get_owned(item_id, active_only=False)
        week_start = get_week_start(now)

        entry = self._find_completion(item.id, week_start)
        if entry is None:
            COMPLETION_CONFLICTS_TOTAL.labels(action="uncomplete").inc()
            raise NotCompletedException(item.id, week_start)

        log_id = entry.id
        self.db.delete(entry)
        self.db.commit()

        WEEKLY_PLAN_UNCOMPLETIONS_TOTAL.inc()
        logger.info(
            "weekly_plan_uncompleted",
            user_id=self.user_id,
            item_id=item.id,
            log_id=log_id,
            week_start=week_start.isoformat(),
        )
