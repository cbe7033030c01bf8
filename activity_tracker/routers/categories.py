from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_current_user_id
from ..schemas.categories import CategoryCreate, CategoryDeleteResponse, CategoryResponse, CategoryUpdate
from ..schemas.common import Area
from ..services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


def get_category_service(
    db: Session = Depends(get_db), user_id: str = Depends(get_current_user_id)
) -> CategoryService:
    return CategoryService(db, user_id=user_id)


@router.get("/{area}", response_model=List[CategoryResponse])
def list_categories(
    area: Area,
    active_only: bool = Query(False, alias="activeOnly"),
    service: CategoryService = Depends(get_category_service),
):
    return service.list_categories(area, active_only=active_only)


@router.post("/{area}", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    area: Area,
    payload: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
):
    return service.create_category(area, payload)


@router.put("/{area}/{category_id}", response_model=CategoryResponse)
def update_category(
    area: Area,
    category_id: int,
    payload: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
):
    return service.update_category(area, category_id, payload)


@router.delete("/{area}/{category_id}", response_model=CategoryDeleteResponse)
def delete_category(
    area: Area,
    category_id: int,
    service: CategoryService = Depends(get_category_service),
):
    return service.delete_category(area, category_id)
