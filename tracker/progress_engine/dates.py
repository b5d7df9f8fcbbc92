"""
Calendar helpers shared by the progress engine.

Dates travel as ISO day strings (yyyy-MM-dd); weeks start on Sunday.
"""
import calendar
import math
from datetime import date, datetime, timedelta, timezone
from typing import Iterator, Tuple


def parse_day(raw: str) -> date:
    """Parse a yyyy-MM-dd string (a full ISO timestamp is cut to its day)."""
    return date.fromisoformat(raw[:10])


def format_day(day: date) -> str:
    return day.isoformat()


def format_label(day: date) -> str:
    """Short axis label, e.g. 'Oct 7'."""
    return f"{day:%b} {day.day}"


def parse_timestamp(raw: str) -> datetime:
    """Parse an ISO instant; entries without a timestamp sort first."""
    if not raw:
        return datetime.min
    parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def js_round(value: float) -> int:
    """Round half up, as the charts always have (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_days(year: int, month: int) -> Iterator[date]:
    for day in range(1, days_in_month(year, month) + 1):
        yield date(year, month, day)


def sunday_index(day: date) -> int:
    """Weekday with Sunday = 0 ... Saturday = 6."""
    return (day.weekday() + 1) % 7


def start_of_week(day: date) -> date:
    return day - timedelta(days=sunday_index(day))


def end_of_week(day: date) -> date:
    return start_of_week(day) + timedelta(days=6)


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move a (year, month) pair by `delta` months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def parse_month(raw: str) -> Tuple[int, int]:
    """Parse 'YYYY-MM' into (year, month)."""
    year_str, month_str = raw.split("-", 1)
    year, month = int(year_str), int(month_str)
    if not 1 <= month <= 12:
        raise ValueError(f"month out of range: {raw}")
    return year, month


def month_title(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"
