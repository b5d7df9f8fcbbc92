"""
Adherence goals: streak, completion rate and the monthly calendar grid.
"""
from datetime import date, timedelta
from typing import List, Optional, Tuple

from tracker.config_manager import config
from tracker.models import Entry, Goal
from tracker.progress_engine.dates import (
    days_in_month,
    format_day,
    js_round,
    month_days,
    month_title,
    parse_day,
    sunday_index,
)
from tracker.progress_engine.models import AdherenceStats, CalendarCell, CalendarGrid, DayStatus
from tracker.progress_engine.status import entries_for_goal, entry_for_day


def calculate_streak(entries: List[Entry], today: date) -> int:
    """
    Consecutive completed days ending today.

    Completed dates are walked newest first. A date equal to the expected day
    (today minus the current streak) extends the run, an earlier date ends it,
    and a later one (a duplicate or a future date) is skipped.
    """
    completed = sorted(
        (parse_day(e.date) for e in entries if e.value is True),
        reverse=True,
    )
    streak = 0
    for day in completed:
        expected = today - timedelta(days=streak)
        if day == expected:
            streak += 1
        elif day < expected:
            break
    return streak


def completion_rate(entries: List[Entry], year: int, month: int) -> int:
    """
    Completed entries (all time) over the length of the displayed month, as a
    rounded percentage. Future days of the month count in the denominator.
    """
    total_days = days_in_month(year, month)
    if total_days <= 0:
        return 0
    completed_days = sum(1 for e in entries if e.value is True)
    return js_round(completed_days / total_days * 100)


def adherence_stats(
    goal: Goal,
    entries: List[Entry],
    today: date,
    month: Optional[Tuple[int, int]] = None,
) -> AdherenceStats:
    goal_entries = entries_for_goal(goal, entries)
    year, month_num = month or (today.year, today.month)
    return AdherenceStats(
        streak=calculate_streak(goal_entries, today),
        completion_rate=completion_rate(goal_entries, year, month_num),
    )


def day_status(entry: Optional[Entry]) -> DayStatus:
    if entry is None:
        return DayStatus.NONE
    return DayStatus.COMPLETED if entry.value else DayStatus.SKIPPED


def calendar_grid(
    goal: Goal,
    entries: List[Entry],
    today: date,
    month: Optional[Tuple[int, int]] = None,
) -> CalendarGrid:
    goal_entries = entries_for_goal(goal, entries)
    year, month_num = month or (today.year, today.month)

    first = date(year, month_num, 1)
    blanks = sunday_index(first)
    cells: List[Optional[CalendarCell]] = [None] * blanks

    for day in month_days(year, month_num):
        entry = entry_for_day(goal_entries, day)
        cells.append(CalendarCell(
            date=format_day(day),
            day=day.day,
            status=day_status(entry),
            is_today=day == today,
            is_future=day > today,
            entry_id=entry.id if entry else None,
        ))

    return CalendarGrid(
        year=year,
        month=month_num,
        title=month_title(year, month_num),
        weekdays=list(config.CALENDAR_WEEKDAYS),
        leading_blanks=blanks,
        cells=cells,
    )
