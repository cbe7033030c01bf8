from __future__ import annotations

import datetime as dt

from .common import ApiModel, Area
from .logs import LogEntryResponse


class CategoryBreakdown(ApiModel):
    category_id: int
    category_name: str | None = None
    category_color: str | None = None
    category_type: str | None = None
    total_minutes: int
    sessions: int


class AreaSummary(ApiModel):
    total_minutes: int = 0
    total_sessions: int = 0
    breakdown: list[CategoryBreakdown] = []


class DailyPoint(ApiModel):
    date: dt.date
    area: Area
    total_minutes: int
    sessions: int


class WeeklyPoint(ApiModel):
    week_start: dt.date
    area: Area
    total_minutes: int
    sessions: int


class WeeklyStatsResponse(ApiModel):
    week_start: dt.date
    week_end: dt.date
    study: AreaSummary
    football: AreaSummary
    daily: list[DailyPoint]


class MonthlyStatsResponse(ApiModel):
    year: int
    month: int
    start_date: dt.date
    end_date: dt.date
    study: AreaSummary
    football: AreaSummary
    weekly: list[WeeklyPoint]


class PeriodTotals(ApiModel):
    minutes: int = 0
    sessions: int = 0


class DashboardToday(ApiModel):
    date: dt.date
    study: PeriodTotals
    football: PeriodTotals
    pending_plans: int


class DashboardWeek(ApiModel):
    start_date: dt.date
    end_date: dt.date
    study: PeriodTotals
    football: PeriodTotals


class DashboardResponse(ApiModel):
    today: DashboardToday
    week: DashboardWeek
    recent_logs: list[LogEntryResponse]


class ScoreWarning(ApiModel):
    attribute: str
    current: int
    target: int
    shortfall: int
    suggestion: str


class FootballScoreResponse(ApiModel):
    week_start: dt.date
    totals: dict[str, int]
    targets: dict[str, int]
    session_counts: dict[str, int]
    team_training_and_match: int
    warnings: list[ScoreWarning]
