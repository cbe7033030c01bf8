from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime

import structlog
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .. import football_scoring
from ..exceptions import ValidationException
from ..models import Category, LogEntry, PlanItem
from ..schemas.analytics import (
    AreaSummary,
    CategoryBreakdown,
    DailyPoint,
    DashboardResponse,
    DashboardToday,
    DashboardWeek,
    FootballScoreResponse,
    MonthlyStatsResponse,
    PeriodTotals,
    ScoreWarning,
    WeeklyPoint,
    WeeklyStatsResponse,
)
from ..schemas.common import Area, PlanStatus
from ..weeks import date_bounds, get_week_end, get_week_start, is_week_start, month_range
from .completion_service import CompletionService
from .log_service import build_log_response

logger = structlog.get_logger(__name__)

RECENT_LOGS_LIMIT = 5


def _as_date(value) -> date:
    # SQLite hands back date() results as ISO strings.
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


class AnalyticsService:
    """Read-only aggregation over the caller's log entries."""

    def __init__(self, db: Session, user_id: str):
        self.db = db
        self.user_id = user_id

    def _range_filters(self, start: date, end: date) -> list:
        lower, upper = date_bounds(start, end)
        return [
            LogEntry.user_id == self.user_id,
            LogEntry.date_time >= lower,
            LogEntry.date_time < upper,
        ]

    def _area_totals(self, start: date, end: date) -> dict[str, tuple[int, int]]:
        stmt = (
            select(
                LogEntry.area,
                func.coalesce(func.sum(LogEntry.duration_minutes), 0),
                func.count(LogEntry.id),
            )
            .where(*self._range_filters(start, end))
            .group_by(LogEntry.area)
        )
        return {area: (int(minutes), int(sessions)) for area, minutes, sessions in self.db.execute(stmt).all()}

    def _breakdown(self, area: Area, start: date, end: date) -> list[CategoryBreakdown]:
        minutes = func.coalesce(func.sum(LogEntry.duration_minutes), 0)
        stmt = (
            select(
                LogEntry.category_id,
                Category.name,
                Category.color,
                Category.type,
                minutes.label("total_minutes"),
                func.count(LogEntry.id).label("sessions"),
            )
            .join(Category, Category.id == LogEntry.category_id)
            .where(*self._range_filters(start, end), LogEntry.area == area.value)
            .group_by(LogEntry.category_id, Category.name, Category.color, Category.type)
            .order_by(minutes.desc(), Category.name.asc())
        )
        return [
            CategoryBreakdown(
                category_id=row.category_id,
                category_name=row.name,
                category_color=row.color,
                category_type=row.type,
                total_minutes=int(row.total_minutes),
                sessions=int(row.sessions),
            )
            for row in self.db.execute(stmt).all()
        ]

    def _summary(self, area: Area, totals: dict[str, tuple[int, int]], start: date, end: date) -> AreaSummary:
        minutes, sessions = totals.get(area.value, (0, 0))
        return AreaSummary(
            total_minutes=minutes,
            total_sessions=sessions,
            breakdown=self._breakdown(area, start, end),
        )

    def _daily(self, start: date, end: date) -> list[DailyPoint]:
        day = func.date(LogEntry.date_time).label("day")
        stmt = (
            select(
                day,
                LogEntry.area,
                func.coalesce(func.sum(LogEntry.duration_minutes), 0),
                func.count(LogEntry.id),
            )
            .where(*self._range_filters(start, end))
            .group_by(day, LogEntry.area)
            .order_by(day.asc(), LogEntry.area.asc())
        )
        return [
            DailyPoint(date=_as_date(d), area=area, total_minutes=int(minutes), sessions=int(sessions))
            for d, area, minutes, sessions in self.db.execute(stmt).all()
        ]

    def weekly_stats(self, week_start: date) -> WeeklyStatsResponse:
        if not is_week_start(week_start):
            raise ValidationException(f"weekStart {week_start.isoformat()} is not a Monday")
        week_end = get_week_end(week_start)
        totals = self._area_totals(week_start, week_end)
        return WeeklyStatsResponse(
            week_start=week_start,
            week_end=week_end,
            study=self._summary(Area.study, totals, week_start, week_end),
            football=self._summary(Area.football, totals, week_start, week_end),
            daily=self._daily(week_start, week_end),
        )

    def monthly_stats(self, year: int, month: int) -> MonthlyStatsResponse:
        start, end = month_range(year, month)
        totals = self._area_totals(start, end)

        buckets: dict[tuple[date, str], list[int]] = defaultdict(lambda: [0, 0])
        for point in self._daily(start, end):
            bucket = buckets[(get_week_start(point.date), point.area.value)]
            bucket[0] += point.total_minutes
            bucket[1] += point.sessions
        weekly = [
            WeeklyPoint(week_start=week_start, area=area, total_minutes=minutes, sessions=sessions)
            for (week_start, area), (minutes, sessions) in sorted(buckets.items())
        ]

        return MonthlyStatsResponse(
            year=year,
            month=month,
            start_date=start,
            end_date=end,
            study=self._summary(Area.study, totals, start, end),
            football=self._summary(Area.football, totals, start, end),
            weekly=weekly,
        )

    @staticmethod
    def _period(totals: dict[str, tuple[int, int]], area: Area) -> PeriodTotals:
        minutes, sessions = totals.get(area.value, (0, 0))
        return PeriodTotals(minutes=minutes, sessions=sessions)

    def dashboard(self, now: datetime) -> DashboardResponse:
        today = now.date()
        week_start = get_week_start(today)
        week_end = get_week_end(week_start)
        today_totals = self._area_totals(today, today)
        week_totals = self._area_totals(week_start, week_end)

        pending = self.db.execute(
            select(func.count(PlanItem.id)).where(
                PlanItem.user_id == self.user_id,
                PlanItem.date == today,
                PlanItem.status == PlanStatus.planned.value,
            )
        ).scalar_one()

        recent = self.db.execute(
            select(LogEntry)
            .where(LogEntry.user_id == self.user_id)
            .order_by(LogEntry.date_time.desc(), LogEntry.id.desc())
            .limit(RECENT_LOGS_LIMIT)
        ).scalars().all()

        return DashboardResponse(
            today=DashboardToday(
                date=today,
                study=self._period(today_totals, Area.study),
                football=self._period(today_totals, Area.football),
                pending_plans=pending,
            ),
            week=DashboardWeek(
                start_date=week_start,
                end_date=week_end,
                study=self._period(week_totals, Area.study),
                football=self._period(week_totals, Area.football),
            ),
            recent_logs=[build_log_response(e) for e in recent],
        )

    def football_score(self, week_start: date) -> FootballScoreResponse:
        status = CompletionService(self.db, self.user_id).get_week_status(week_start, Area.football)
        completed = [item.category_name or "" for item in status.items if item.is_completed]

        totals = football_scoring.calculate_totals(completed)
        session_counts = football_scoring.count_sessions(completed)
        warnings = football_scoring.get_warnings(totals)
        logger.debug("football_score_calculated", user_id=self.user_id, week_start=week_start.isoformat(), totals=totals)

        return FootballScoreResponse(
            week_start=week_start,
            totals=totals,
            targets=dict(football_scoring.WEEKLY_TARGETS),
            session_counts=session_counts,
            team_training_and_match=football_scoring.count_team_sessions(session_counts),
            warnings=[ScoreWarning(**w) for w in warnings],
        )
