from __future__ import annotations

import structlog
from sqlalchemy import exists, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import CategoryNotFoundException, ConflictException, ValidationException
from ..metrics import CATEGORIES_CREATED_TOTAL
from ..models import Category, LogEntry, PlanItem, WeeklyPlanItem
from ..schemas.categories import CategoryCreate, CategoryDeleteResponse, CategoryResponse, CategoryUpdate
from ..schemas.common import Area

logger = structlog.get_logger(__name__)

DEFAULT_COLORS = {
    Area.study: "#6366f1",
    Area.football: "#10b981",
}


class CategoryService:
    def __init__(self, db: Session, user_id: str):
        self.db = db
        self.user_id = user_id

    def _get_owned(self, category_id: int, area: Area) -> Category | None:
        stmt = select(Category).where(
            Category.id == category_id,
            Category.user_id == self.user_id,
            Category.area == area.value,
        )
        return self.db.execute(stmt).scalars().first()

    def _get_or_404(self, category_id: int, area: Area) -> Category:
        category = self._get_owned(category_id, area)
        if not category:
            raise CategoryNotFoundException(category_id)
        return category

    def require_category(self, category_id: int, area: Area, *, active_only: bool = True) -> Category:
        """Resolve a category the caller may attach a plan or log to."""
        category = self._get_owned(category_id, area)
        if category is None:
            raise ValidationException(f"Category {category_id} is not a {area.value} category of this user")
        if active_only and not category.is_active:
            raise ValidationException(f"Category {category_id} is inactive")
        return category

    def _name_taken(self, area: Area, name: str, exclude_id: int | None = None) -> bool:
        stmt = select(Category.id).where(
            Category.user_id == self.user_id,
            Category.area == area.value,
            Category.name == name,
        )
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)
        return self.db.execute(stmt).first() is not None

    def list_categories(self, area: Area, active_only: bool = False) -> list[CategoryResponse]:
        stmt = select(Category).where(Category.user_id == self.user_id, Category.area == area.value)
        if active_only:
            stmt = stmt.where(Category.is_active.is_(True))
        stmt = stmt.order_by(Category.name.asc())
        return [CategoryResponse.model_validate(c) for c in self.db.execute(stmt).scalars().all()]

    def create_category(self, area: Area, payload: CategoryCreate) -> CategoryResponse:
        name = payload.name
        if payload.type and area is not Area.football:
            raise ValidationException("Only football categories have a type")
        if self._name_taken(area, name):
            raise ConflictException(f"Category '{name}' already exists")

        category = Category(
            user_id=self.user_id,
            area=area.value,
            name=name,
            color=payload.color or DEFAULT_COLORS[area],
            type=payload.type,
            is_active=True,
        )
        self.db.add(category)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictException(f"Category '{name}' already exists") from exc
        self.db.refresh(category)

        CATEGORIES_CREATED_TOTAL.labels(area=area.value).inc()
        logger.info("category_created", user_id=self.user_id, category_id=category.id, area=area.value)
        return CategoryResponse.model_validate(category)

    def update_category(self, area: Area, category_id: int, payload: CategoryUpdate) -> CategoryResponse:
        category = self._get_or_404(category_id, area)

        if payload.name is not None:
            name = payload.name
            if self._name_taken(area, name, exclude_id=category.id):
                raise ConflictException(f"Category '{name}' already exists")
            category.name = name
        if payload.color is not None:
            category.color = payload.color
        if payload.type is not None:
            if area is not Area.football:
                raise ValidationException("Only football categories have a type")
            category.type = payload.type
        if payload.is_active is not None:
            category.is_active = payload.is_active

        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictException(f"Category '{category.name}' already exists") from exc
        self.db.refresh(category)
        logger.info("category_updated", user_id=self.user_id, category_id=category.id, is_active=category.is_active)
        return CategoryResponse.model_validate(category)

    def _is_referenced(self, category_id: int) -> bool:
        stmt = select(
            or_(
                exists().where(LogEntry.category_id == category_id),
                exists().where(WeeklyPlanItem.category_id == category_id),
                exists().where(PlanItem.category_id == category_id),
            )
        )
        return bool(self.db.execute(stmt).scalar())

    def delete_category(self, area: Area, category_id: int) -> CategoryDeleteResponse:
        """Hard-delete an unused category; retire it instead once history points at it."""
        category = self._get_or_404(category_id, area)

        if self._is_referenced(category.id):
            category.is_active = False
            self.db.commit()
            logger.info("category_deactivated", user_id=self.user_id, category_id=category.id)
            return CategoryDeleteResponse(id=category.id, deleted=False, deactivated=True)

        self.db.delete(category)
        self.db.commit()
        logger.info("category_deleted", user_id=self.user_id, category_id=category_id)
        return CategoryDeleteResponse(id=category_id, deleted=True, deactivated=False)
