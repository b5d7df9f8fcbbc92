"""
Per-goal-type strategy table.

Each goal type maps to the functions that build its status line, its chart
and its adherence stats, so callers never branch on the type themselves.
"""
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple

from tracker.clock import SystemClock
from tracker.models import Entry, Goal, GoalType
from tracker.progress_engine.adherence import adherence_stats, calendar_grid
from tracker.progress_engine.aggregation import duration_chart, frequency_chart
from tracker.progress_engine.models import AdherenceStats, ChartData, GoalProgress, StatusSummary
from tracker.progress_engine.numeric import numeric_chart
from tracker.progress_engine.status import (
    adherence_status,
    frequency_status,
    latest_value_status,
)

Month = Tuple[int, int]


@dataclass(frozen=True)
class GoalStrategy:
    status: Callable[[Goal, List[Entry], date], StatusSummary]
    chart: Optional[Callable[[Goal, List[Entry], date], ChartData]] = None
    stats: Optional[Callable[..., AdherenceStats]] = None


STRATEGIES: Dict[GoalType, GoalStrategy] = {
    GoalType.NUMERIC: GoalStrategy(status=latest_value_status, chart=numeric_chart),
    GoalType.ADHERENCE: GoalStrategy(status=adherence_status, stats=adherence_stats),
    GoalType.FREQUENCY: GoalStrategy(status=frequency_status, chart=frequency_chart),
    GoalType.DURATION: GoalStrategy(status=latest_value_status, chart=duration_chart),
}


def goal_status(goal: Goal, entries: List[Entry], clock=None) -> StatusSummary:
    clock = clock or SystemClock()
    return STRATEGIES[goal.type].status(goal, entries, clock.today())


def build_progress(
    goal: Goal,
    entries: List[Entry],
    clock=None,
    month: Optional[Month] = None,
) -> GoalProgress:
    """
    Derive every view of one goal from a snapshot of entries.

    Args:
        goal: the goal to summarise
        entries: entries of any goal; foreign ones are ignored
        clock: source of "today" (system clock by default)
        month: (year, month) shown by the adherence calendar, today's by default
    """
    clock = clock or SystemClock()
    today = clock.today()
    strategy = STRATEGIES[goal.type]

    progress = GoalProgress(goal_id=goal.id, status=strategy.status(goal, entries, today))
    if strategy.chart is not None:
        progress.chart = strategy.chart(goal, entries, today)
    if strategy.stats is not None:
        progress.stats = strategy.stats(goal, entries, today, month)
        progress.calendar = calendar_grid(goal, entries, today, month)
    return progress
