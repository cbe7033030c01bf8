from .analytics import (
    DashboardResponse,
    FootballScoreResponse,
    MonthlyStatsResponse,
    WeeklyStatsResponse,
)
from .categories import CategoryCreate, CategoryDeleteResponse, CategoryResponse, CategoryUpdate
from .common import ApiModel, Area, Intensity, PlanStatus
from .logs import LogEntryCreate, LogEntryListResponse, LogEntryResponse, LogEntryUpdate
from .plans import PlanItemCompleteRequest, PlanItemCreate, PlanItemResponse, PlanItemUpdate
from .weekly_plans import (
    WeeklyPlanItemCreate,
    WeeklyPlanItemResponse,
    WeeklyPlanItemUpdate,
    WeekStatusItem,
    WeekStatusResponse,
)
