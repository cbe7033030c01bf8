from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_user_id, get_utcnow
from ..schemas.analytics import (
    DashboardResponse,
    FootballScoreResponse,
    MonthlyStatsResponse,
    WeeklyStatsResponse,
)
from ..services.analytics_service import AnalyticsService
from ..weeks import get_week_start

router = APIRouter(prefix="/analytics", tags=["analytics"])


def get_analytics_service(
    db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)
) -> AnalyticsService:
    return AnalyticsService(db, user_id=user_id)


@router.get("/weekly", response_model=WeeklyStatsResponse)
def get_weekly_stats(
    week_start: Optional[date] = Query(None, alias="weekStart"),
    now: datetime = Depends(get_utcnow),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return service.weekly_stats(week_start or get_week_start(now))


@router.get("/monthly", response_model=MonthlyStatsResponse)
def get_monthly_stats(
    year: Optional[int] = Query(None, ge=1970, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    now: datetime = Depends(get_utcnow),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return service.monthly_stats(year or now.year, month or now.month)


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    now: datetime = Depends(get_utcnow),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return service.dashboard(now)


@router.get("/football-score", response_model=FootballScoreResponse)
def get_football_score(
    week_start: Optional[date] = Query(None, alias="weekStart"),
    now: datetime = Depends(get_utcnow),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return service.football_score(week_start or get_week_start(now))
