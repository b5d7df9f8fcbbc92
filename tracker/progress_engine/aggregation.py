"""
Bar chart aggregation for duration and frequency goals.
"""
from datetime import date, timedelta
from typing import List

from tracker.config_manager import config
from tracker.logger import get_logger
from tracker.models import Entry, Goal, Timeframe
from tracker.progress_engine.dates import end_of_week, format_day, format_label, parse_day, start_of_week
from tracker.progress_engine.models import ChartData, ChartKind, ReferenceLine, SeriesPoint
from tracker.progress_engine.status import entries_for_goal, format_number

logger = get_logger("progress_engine")


def duration_buckets(goal: Goal, entries: List[Entry], today: date) -> List[SeriesPoint]:
    """One bucket per day over the trailing window ending today; values summed."""
    goal_entries = entries_for_goal(goal, entries)
    window = config.DURATION_WINDOW_DAYS

    totals = {}
    for e in goal_entries:
        totals[e.date] = totals.get(e.date, 0) + e.value

    points = []
    for offset in range(window - 1, -1, -1):
        day = today - timedelta(days=offset)
        day_str = format_day(day)
        points.append(SeriesPoint(date=day_str, label=format_label(day), value=totals.get(day_str, 0)))
    return points


def duration_chart(goal: Goal, entries: List[Entry], today: date) -> ChartData:
    cfg = goal.config
    points = duration_buckets(goal, entries, today)
    has_data = any(p.value != 0 for p in points)

    lines = []
    if cfg.timeframe == Timeframe.DAILY:
        lines.append(ReferenceLine(
            value=cfg.target_duration,
            label=f"Target: {format_number(cfg.target_duration)}",
        ))

    return ChartData(
        kind=ChartKind.BAR,
        legend=f"Duration ({cfg.unit.value})",
        points=points,
        has_data=has_data,
        reference_lines=lines,
    )


def frequency_buckets(goal: Goal, entries: List[Entry], today: date) -> List[SeriesPoint]:
    """
    Entry counts per Sunday-started week overlapping the trailing window.

    Only the weekly timeframe has bucketing; daily and monthly goals get an
    empty series.
    """
    cfg = goal.config
    if cfg.timeframe != Timeframe.WEEKLY:
        logger.debug("No aggregation for %s frequency goal %s", cfg.timeframe.value, goal.id)
        return []

    goal_days = [parse_day(e.date) for e in entries_for_goal(goal, entries)]
    window_start = today - timedelta(days=config.FREQUENCY_WINDOW_DAYS)

    points = []
    week_start = start_of_week(window_start)
    while week_start <= today:
        week_end = end_of_week(week_start)
        count = sum(1 for d in goal_days if week_start <= d <= week_end)
        points.append(SeriesPoint(date=format_day(week_start), label=format_label(week_start), value=count))
        week_start += timedelta(weeks=1)
    return points


def frequency_chart(goal: Goal, entries: List[Entry], today: date) -> ChartData:
    cfg = goal.config
    points = frequency_buckets(goal, entries, today)
    return ChartData(
        kind=ChartKind.BAR,
        legend="Count",
        points=points,
        has_data=bool(points),
        reference_lines=[
            ReferenceLine(value=cfg.target_count, label=f"Target: {format_number(cfg.target_count)}"),
        ],
    )
