from datetime import date, timedelta

from tracker.models import DurationConfig, Entry, FrequencyConfig, Goal, GoalType, Timeframe
from tracker.progress_engine import duration_buckets, frequency_buckets
from tracker.progress_engine.aggregation import duration_chart, frequency_chart


def _duration_goal(timeframe=Timeframe.DAILY) -> Goal:
    return Goal(
        id="g_read",
        name="Reading",
        type=GoalType.DURATION,
        config=DurationConfig(target_duration=30, timeframe=timeframe),
        created_at="2026-09-01T00:00:00Z",
    )


def _frequency_goal(timeframe=Timeframe.WEEKLY) -> Goal:
    return Goal(
        id="g_gym",
        name="Gym",
        type=GoalType.FREQUENCY,
        config=FrequencyConfig(target_count=3, timeframe=timeframe),
        created_at="2026-09-01T00:00:00Z",
    )


def _entry(goal_id: str, day: date, value, entry_id: str) -> Entry:
    return Entry(id=entry_id, goal_id=goal_id, date=day.isoformat(),
                 timestamp=f"{day.isoformat()}T20:00:00Z", value=value)


def test_duration_sums_entries_per_day(today):
    entries = [
        _entry("g_read", today, 10, "e1"),
        _entry("g_read", today, 5, "e2"),
        _entry("g_other", today, 99, "e3"),
    ]
    points = duration_buckets(_duration_goal(), entries, today)

    assert len(points) == 30
    assert points[-1].date == today.isoformat()
    assert points[-1].value == 15
    assert all(p.value == 0 for p in points[:-1])
    assert points[0].date == (today - timedelta(days=29)).isoformat()


def test_duration_ignores_entries_outside_window(today):
    entries = [_entry("g_read", today - timedelta(days=30), 45, "old")]
    chart = duration_chart(_duration_goal(), entries, today)

    assert chart.has_data is False
    assert len(chart.points) == 30


def test_duration_target_line_only_for_daily_goals(today):
    entries = [_entry("g_read", today, 20, "e1")]

    daily = duration_chart(_duration_goal(Timeframe.DAILY), entries, today)
    weekly = duration_chart(_duration_goal(Timeframe.WEEKLY), entries, today)

    assert daily.has_data is True
    assert daily.legend == "Duration (minutes)"
    assert [r.value for r in daily.reference_lines] == [30]
    assert weekly.reference_lines == []


def test_frequency_weekly_buckets_cover_trailing_window(today):
    entries = [
        _entry("g_gym", today, 1, "sat"),                             # week of Oct 11
        _entry("g_gym", date(2026, 10, 11), 1, "sun"),                # week of Oct 11
        _entry("g_gym", date(2026, 10, 10), 1, "prev_sat"),           # week of Oct 4
        _entry("g_gym", date(2026, 8, 15), 1, "before_window"),
    ]
    points = frequency_buckets(_frequency_goal(), entries, today)

    # today - 60 days is Tue 18 Aug; its week starts Sun 16 Aug.
    assert points[0].date == "2026-08-16"
    assert points[-1].date == "2026-10-11"
    assert len(points) == 9
    assert points[-1].value == 2
    assert points[-2].value == 1
    assert sum(p.value for p in points) == 3
    assert points[0].label == "Aug 16"


def test_frequency_daily_and_monthly_have_no_series(today):
    entries = [_entry("g_gym", today, 1, "e1")]

    assert frequency_buckets(_frequency_goal(Timeframe.DAILY), entries, today) == []
    monthly = frequency_chart(_frequency_goal(Timeframe.MONTHLY), entries, today)
    assert monthly.points == []
    assert monthly.has_data is False


def test_frequency_chart_keeps_empty_weeks(today):
    chart = frequency_chart(_frequency_goal(), [], today)

    assert chart.has_data is True
    assert all(p.value == 0 for p in chart.points)
    assert chart.reference_lines[0].label == "Target: 3"
