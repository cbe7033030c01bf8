from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_user_id, get_utcnow
from ..schemas.common import Area
from ..schemas.logs import LogEntryCreate, LogEntryListResponse, LogEntryResponse, LogEntryUpdate
from ..services.log_service import LogService

router = APIRouter(prefix="/logs", tags=["logs"])


def get_log_service(db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)) -> LogService:
    return LogService(db, user_id=user_id)


@router.get("", response_model=LogEntryListResponse)
def list_log_entries(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    area: Optional[Area] = Query(None),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
    service: LogService = Depends(get_log_service),
):
    return service.list_entries(
        start_date=start_date,
        end_date=end_date,
        area=area,
        category_id=category_id,
        limit=limit,
        offset=offset,
    )


@router.get("/today", response_model=List[LogEntryResponse])
def list_today_log_entries(
    area: Optional[Area] = Query(None),
    now: datetime = Depends(get_utcnow),
    service: LogService = Depends(get_log_service),
):
    return service.list_today(now.date(), area)


@router.post("", response_model=LogEntryResponse, status_code=status.HTTP_201_CREATED)
def create_log_entry(payload: LogEntryCreate, service: LogService = Depends(get_log_service)):
    return service.create_entry(payload)


@router.put("/{log_id}", response_model=LogEntryResponse)
def update_log_entry(log_id: int, payload: LogEntryUpdate, service: LogService = Depends(get_log_service)):
    return service.update_entry(log_id, payload)


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_log_entry(log_id: int, service: LogService = Depends(get_log_service)) -> None:
    service.delete_entry(log_id)
