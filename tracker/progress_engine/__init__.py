# Progress Engine: pure derivations from (goal, entries, today) to status lines,
# adherence stats, calendar grids and chart series.

from tracker.progress_engine.adherence import (
    adherence_stats,
    calculate_streak,
    calendar_grid,
    completion_rate,
)
from tracker.progress_engine.aggregation import duration_buckets, frequency_buckets
from tracker.progress_engine.dispatch import STRATEGIES, GoalStrategy, build_progress, goal_status
from tracker.progress_engine.models import (
    AdherenceStats,
    AxisDomain,
    CalendarCell,
    CalendarGrid,
    ChartData,
    DayStatus,
    GoalProgress,
    SeriesPoint,
    StatusSummary,
)
from tracker.progress_engine.numeric import axis_domain, nice_tick, numeric_series
from tracker.progress_engine.status import entries_for_goal

__all__ = [
    "STRATEGIES",
    "AdherenceStats",
    "AxisDomain",
    "CalendarCell",
    "CalendarGrid",
    "ChartData",
    "DayStatus",
    "GoalProgress",
    "GoalStrategy",
    "SeriesPoint",
    "StatusSummary",
    "adherence_stats",
    "axis_domain",
    "build_progress",
    "calculate_streak",
    "calendar_grid",
    "completion_rate",
    "duration_buckets",
    "entries_for_goal",
    "frequency_buckets",
    "goal_status",
    "nice_tick",
    "numeric_series",
]
