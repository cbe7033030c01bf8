from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_user_id, get_utcnow
from ..schemas.common import Area
from ..schemas.logs import LogEntryResponse
from ..schemas.plans import PlanItemCompleteRequest, PlanItemCreate, PlanItemResponse, PlanItemUpdate
from ..services.plan_service import PlanService
from ..weeks import get_week_start

router = APIRouter(prefix="/plans", tags=["plans"])


def get_plan_service(db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)) -> PlanService:
    return PlanService(db, user_id=user_id)


@router.get("", response_model=List[PlanItemResponse])
def list_plan_items(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    area: Optional[Area] = Query(None),
    service: PlanService = Depends(get_plan_service),
):
    return service.list_items(start_date, end_date, area)


@router.get("/week", response_model=List[PlanItemResponse])
def list_week_plan_items(
    week_start: Optional[date] = Query(None, alias="weekStart"),
    area: Optional[Area] = Query(None),
    now: datetime = Depends(get_utcnow),
    service: PlanService = Depends(get_plan_service),
):
    return service.list_week(week_start or get_week_start(now), area)


@router.post("", response_model=PlanItemResponse, status_code=status.HTTP_201_CREATED)
def create_plan_item(payload: PlanItemCreate, service: PlanService = Depends(get_plan_service)):
    return service.create_item(payload)


@router.put("/{item_id}", response_model=PlanItemResponse)
def update_plan_item(item_id: int, payload: PlanItemUpdate, service: PlanService = Depends(get_plan_service)):
    return service.update_item(item_id, payload)


@router.post("/{item_id}/complete", response_model=LogEntryResponse, status_code=status.HTTP_201_CREATED)
def complete_plan_item(
    item_id: int,
    payload: PlanItemCompleteRequest | None = None,
    now: datetime = Depends(get_utcnow),
    service: PlanService = Depends(get_plan_service),
):
    return service.complete_item(item_id, payload or PlanItemCompleteRequest(), now)


@router.post("/{item_id}/skip", response_model=PlanItemResponse)
def skip_plan_item(item_id: int, service: PlanService = Depends(get_plan_service)):
    return service.skip_item(item_id)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_plan_item(item_id: int, service: PlanService = Depends(get_plan_service)) -> None:
    service.delete_item(item_id)
