"""
Status line per goal type: the "current state" shown on a goal card.
"""
from datetime import date
from typing import List, Optional

from tracker.models import Entry, Goal, GoalType
from tracker.progress_engine.dates import format_day, parse_timestamp
from tracker.progress_engine.models import StatusSummary

NO_ENTRIES_TEXT = "No entries yet"


def entries_for_goal(goal: Goal, entries: List[Entry]) -> List[Entry]:
    return [e for e in entries if e.goal_id == goal.id]


def format_number(value) -> str:
    """Render numbers the way the UI does: 180.0 -> '180', 2.5 -> '2.5'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def latest_entry(entries: List[Entry]) -> Optional[Entry]:
    """Most recent entry by timestamp; the first of equal timestamps wins."""
    if not entries:
        return None
    # sorted() is stable, so reverse=True keeps the input order among ties.
    return sorted(entries, key=lambda e: parse_timestamp(e.timestamp), reverse=True)[0]


def entry_for_day(entries: List[Entry], day: date) -> Optional[Entry]:
    """First entry recorded for `day`."""
    day_str = format_day(day)
    return next((e for e in entries if e.date == day_str), None)


def _empty(goal: Goal) -> StatusSummary:
    return StatusSummary(goal_id=goal.id, goal_type=goal.type.value, text=NO_ENTRIES_TEXT, has_data=False)


def latest_value_status(goal: Goal, entries: List[Entry], today: date) -> StatusSummary:
    """numeric and duration goals: '<latest value> <unit>'."""
    goal_entries = entries_for_goal(goal, entries)
    latest = latest_entry(goal_entries)
    if latest is None:
        return _empty(goal)

    unit = getattr(goal.config, "unit", "")
    unit = getattr(unit, "value", unit)
    summary = StatusSummary(
        goal_id=goal.id,
        goal_type=goal.type.value,
        text=f"{format_number(latest.value)} {unit}".strip(),
        has_data=True,
        entry_count=len(goal_entries),
        latest_value=latest.value,
    )
    if goal.type == GoalType.DURATION:
        summary.total = sum(e.value for e in goal_entries)
    return summary


def adherence_status(goal: Goal, entries: List[Entry], today: date) -> StatusSummary:
    """adherence goals: whether today's entry is a completion."""
    goal_entries = entries_for_goal(goal, entries)
    if not goal_entries:
        return _empty(goal)

    today_entry = entry_for_day(goal_entries, today)
    done = today_entry is not None and today_entry.value is True
    return StatusSummary(
        goal_id=goal.id,
        goal_type=goal.type.value,
        text="Done today" if done else "Not done today",
        has_data=True,
        entry_count=len(goal_entries),
        latest_value=today_entry.value if today_entry else None,
    )


def frequency_status(goal: Goal, entries: List[Entry], today: date) -> StatusSummary:
    """frequency goals: all-time count next to the configured timeframe."""
    goal_entries = entries_for_goal(goal, entries)
    if not goal_entries:
        return _empty(goal)

    timeframe = goal.config.timeframe.value
    count = len(goal_entries)
    return StatusSummary(
        goal_id=goal.id,
        goal_type=goal.type.value,
        text=f"{count} times ({timeframe})",
        has_data=True,
        entry_count=count,
        latest_value=count,
    )
