from prometheus_client import Counter

LOG_ENTRIES_CREATED_TOTAL = Counter(
    "tracker_log_entries_created_total",
    "Number of log entries created",
    ["source"],  # manual | weekly_plan | plan_item
)

LOG_ENTRIES_DELETED_TOTAL = Counter(
    "tracker_log_entries_deleted_total",
    "Number of log entries deleted",
)

WEEKLY_PLAN_ITEMS_CREATED_TOTAL = Counter(
    "tracker_weekly_plan_items_created_total",
    "Number of weekly plan templates created",
    ["area"],
)

WEEKLY_PLAN_COMPLETIONS_TOTAL = Counter(
    "tracker_weekly_plan_completions_total",
    "Number of weekly plan items marked completed",
)

WEEKLY_PLAN_UNCOMPLETIONS_TOTAL = Counter(
    "tracker_weekly_plan_uncompletions_total",
    "Number of weekly plan completions reverted",
)

COMPLETION_CONFLICTS_TOTAL = Counter(
    "tracker_completion_conflicts_total",
    "Number of complete/uncomplete requests rejected by the once-per-week rule",
    ["action"],  # complete | uncomplete
)

CATEGORIES_CREATED_TOTAL = Counter(
    "tracker_categories_created_total",
    "Number of categories created",
    ["area"],
)
