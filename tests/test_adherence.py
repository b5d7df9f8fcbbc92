from datetime import date, timedelta

from tracker.models import AdherenceConfig, Entry, Goal, GoalType
from tracker.progress_engine import (
    DayStatus,
    adherence_stats,
    calculate_streak,
    calendar_grid,
    completion_rate,
)


def _goal(goal_id: str = "g_habit") -> Goal:
    return Goal(
        id=goal_id,
        name="Meditate",
        type=GoalType.ADHERENCE,
        config=AdherenceConfig(target_days_per_week=5),
        created_at="2026-09-01T00:00:00Z",
    )


def _entry(day: date, value: bool = True, goal_id: str = "g_habit", entry_id: str = None) -> Entry:
    return Entry(
        id=entry_id or f"e_{goal_id}_{day.isoformat()}_{value}",
        goal_id=goal_id,
        date=day.isoformat(),
        timestamp=f"{day.isoformat()}T08:00:00Z",
        value=value,
    )


def test_streak_counts_consecutive_days_ending_today(today):
    entries = [_entry(today), _entry(today - timedelta(days=1)), _entry(today - timedelta(days=2))]
    assert calculate_streak(entries, today) == 3


def test_streak_stops_at_first_gap(today):
    entries = [_entry(today), _entry(today - timedelta(days=2))]
    assert calculate_streak(entries, today) == 1


def test_streak_is_zero_without_completion_today(today):
    entries = [_entry(today - timedelta(days=1)), _entry(today - timedelta(days=2))]
    assert calculate_streak(entries, today) == 0


def test_streak_ignores_skipped_days_and_duplicates(today):
    entries = [
        _entry(today, entry_id="a"),
        _entry(today, entry_id="b"),
        _entry(today - timedelta(days=1), value=False),
        _entry(today - timedelta(days=1), entry_id="c"),
        _entry(today + timedelta(days=3)),
    ]
    assert calculate_streak(entries, today) == 2


def test_streak_of_empty_input_is_zero(today):
    assert calculate_streak([], today) == 0


def test_completion_rate_uses_global_count_over_displayed_month():
    # September 2026 has 30 days; the dates of the completions do not matter.
    entries = [_entry(date(2026, 1, 1) + timedelta(days=i * 20)) for i in range(10)]
    entries.append(_entry(date(2026, 9, 5), value=False))
    assert completion_rate(entries, 2026, 9) == 33


def test_completion_rate_can_exceed_100_percent():
    # 40 completions against a 28-day month
    entries = [_entry(date(2025, 12, 1) + timedelta(days=i)) for i in range(40)]
    assert completion_rate(entries, 2026, 2) == 143


def test_adherence_stats_defaults_to_current_month(today):
    goal = _goal()
    entries = [_entry(today), _entry(today - timedelta(days=1)), _entry(today, goal_id="other")]

    stats = adherence_stats(goal, entries, today)

    assert stats.streak == 2
    # 2 completions over October's 31 days
    assert stats.completion_rate == 6
    assert stats.to_dict() == {"streak": 2, "completionRate": 6}


def test_adherence_stats_on_empty_entries(today):
    stats = adherence_stats(_goal(), [], today)
    assert stats.streak == 0
    assert stats.completion_rate == 0


def test_calendar_grid_aligns_first_day_under_its_weekday(today):
    grid = calendar_grid(_goal(), [], today)

    # 1 October 2026 is a Thursday: Sun..Wed are blank.
    assert grid.leading_blanks == 4
    assert grid.cells[:4] == [None, None, None, None]
    assert len(grid.days) == 31
    assert grid.days[0].date == "2026-10-01"
    assert grid.title == "October 2026"
    assert grid.weekdays[0] == "Sun"
    assert len(grid.weeks()[0]) == 7


def test_calendar_grid_marks_status_today_and_future(today):
    entries = [
        _entry(today, value=True),
        _entry(today - timedelta(days=1), value=False),
        _entry(today + timedelta(days=1), value=True),
    ]
    grid = calendar_grid(_goal(), entries, today)
    by_day = {c.day: c for c in grid.days}

    assert by_day[17].status == DayStatus.COMPLETED
    assert by_day[17].is_today is True
    assert by_day[17].disabled is False
    assert by_day[16].status == DayStatus.SKIPPED
    assert by_day[15].status == DayStatus.NONE
    assert by_day[18].is_future is True
    assert by_day[18].disabled is True
    assert by_day[18].status == DayStatus.COMPLETED


def test_calendar_grid_for_another_month(today):
    grid = calendar_grid(_goal(), [], today, month=(2026, 2))

    # 1 February 2026 is a Sunday.
    assert grid.leading_blanks == 0
    assert len(grid.cells) == 28
    assert all(not c.is_future for c in grid.days)
    assert grid.to_dict()["cells"][0]["status"] == "none"
