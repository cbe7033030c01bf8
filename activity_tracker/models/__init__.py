from .categories import Category
from .logs import LogEntry
from .planning import PlanItem, WeeklyPlanItem

__all__ = [
    "Category",
    "WeeklyPlanItem",
    "PlanItem",
    "LogEntry",
]
