from datetime import date, datetime
from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_user_id, get_utcnow
from ..schemas.common import Area
from ..schemas.logs import LogEntryResponse
from ..schemas.weekly_plans import (
    WeeklyPlanItemCreate,
    WeeklyPlanItemResponse,
    WeeklyPlanItemUpdate,
    WeekStatusResponse,
)
from ..services.completion_service import CompletionService
from ..services.weekly_plan_service import WeeklyPlanService
from ..weeks import get_week_start

router = APIRouter(prefix="/weekly-plans", tags=["weekly-plans"])

logger = structlog.get_logger(__name__)


def get_weekly_plan_service(
    db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)
) -> WeeklyPlanService:
    return WeeklyPlanService(db, user_id=user_id)


def get_completion_service(
    db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)
) -> CompletionService:
    return CompletionService(db, user_id=user_id)


@router.get("", response_model=List[WeeklyPlanItemResponse])
def list_weekly_plan_items(
    area: Optional[Area] = Query(None),
    service: WeeklyPlanService = Depends(get_weekly_plan_service),
):
    return service.list_items(area)


@router.post("", response_model=WeeklyPlanItemResponse, status_code=status.HTTP_201_CREATED)
def create_weekly_plan_item(
    payload: WeeklyPlanItemCreate,
    service: WeeklyPlanService = Depends(get_weekly_plan_service),
):
    return service.create_item(payload)


@router.get("/week-status", response_model=WeekStatusResponse)
def get_week_status(
    week_start: Optional[date] = Query(None, alias="weekStart", description="Monday of the week; defaults to now"),
    area: Optional[Area] = Query(None),
    now: datetime = Depends(get_utcnow),
    service: CompletionService = Depends(get_completion_service),
):
    return service.get_week_status(week_start or get_week_start(now), area)


@router.put("/{item_id}", response_model=WeeklyPlanItemResponse)
def update_weekly_plan_item(
    item_id: int,
    payload: WeeklyPlanItemUpdate,
    service: WeeklyPlanService = Depends(get_weekly_plan_service),
):
    return service.update_item(item_id, payload)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_weekly_plan_item(
    item_id: int,
    service: WeeklyPlanService = Depends(get_weekly_plan_service),
) -> None:
    service.delete_item(item_id)


@router.post("/{item_id}/complete", response_model=LogEntryResponse, status_code=status.HTTP_201_CREATED)
def complete_weekly_plan_item(
    item_id: int,
    now: datetime = Depends(get_utcnow),
    service: CompletionService = Depends(get_completion_service),
):
    logger.info("weekly_plan_complete_requested", user_id=service.user_id, item_id=item_id)
    return service.complete(item_id, now)


@router.post("/{item_id}/uncomplete", status_code=status.HTTP_204_NO_CONTENT)
def uncomplete_weekly_plan_item(
    item_id: int,
    now: datetime = Depends(get_utcnow),
    service: CompletionService = Depends(get_completion_service),
) -> None:
    logger.info("weekly_plan_uncomplete_requested", user_id=service.user_id, item_id=item_id)
    service.uncomplete(item_id, now)
