"""
Progress Engine output models.

Everything here is derived and read-only; to_dict() renders the camelCase
shape the charts consume.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

Number = Union[int, float]


class DayStatus(str, Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"
    NONE = "none"


class ChartKind(str, Enum):
    LINE = "line"
    BAR = "bar"


@dataclass
class StatusSummary:
    """Current state of a goal as shown on its card."""
    goal_id: str
    goal_type: str
    text: str
    has_data: bool
    entry_count: int = 0
    latest_value: Optional[Any] = None
    total: Optional[Number] = None  # duration goals: sum of all entries

    def to_dict(self) -> Dict[str, Any]:
        return {
            "goalId": self.goal_id,
            "goalType": self.goal_type,
            "text": self.text,
            "hasData": self.has_data,
            "entryCount": self.entry_count,
            "latestValue": self.latest_value,
            "total": self.total,
        }


@dataclass
class AdherenceStats:
    streak: int
    completion_rate: int

    def to_dict(self) -> Dict[str, Any]:
        return {"streak": self.streak, "completionRate": self.completion_rate}


@dataclass
class CalendarCell:
    date: str
    day: int
    status: DayStatus
    is_today: bool = False
    is_future: bool = False
    entry_id: Optional[str] = None

    @property
    def disabled(self) -> bool:
        return self.is_future

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "day": self.day,
            "status": self.status.value,
            "isToday": self.is_today,
            "isFuture": self.is_future,
            "disabled": self.disabled,
            "entryId": self.entry_id,
        }


@dataclass
class CalendarGrid:
    """
    One month of the adherence calendar.

    `cells` starts with `leading_blanks` None placeholders so that the 1st
    falls under its weekday in a 7-column, Sunday-first grid.
    """
    year: int
    month: int
    title: str
    weekdays: List[str]
    leading_blanks: int
    cells: List[Optional[CalendarCell]] = field(default_factory=list)

    @property
    def days(self) -> List[CalendarCell]:
        return [c for c in self.cells if c is not None]

    def weeks(self) -> List[List[Optional[CalendarCell]]]:
        return [self.cells[i:i + 7] for i in range(0, len(self.cells), 7)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "month": self.month,
            "title": self.title,
            "weekdays": list(self.weekdays),
            "leadingBlanks": self.leading_blanks,
            "cells": [c.to_dict() if c is not None else None for c in self.cells],
        }


@dataclass
class SeriesPoint:
    """
    A chart row. `value` is the actual series, `projection` the forecast;
    either may be None and is never interpolated across.
    """
    date: str
    label: str
    value: Optional[Number] = None
    projection: Optional[Number] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "label": self.label,
            "value": self.value,
            "projection": self.projection,
        }


@dataclass
class ReferenceLine:
    value: Number
    label: str
    kind: str = "target"  # target | milestone
    achieved: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "label": self.label,
            "kind": self.kind,
            "achieved": self.achieved,
        }


@dataclass
class AxisDomain:
    lower: float
    upper: float

    def to_dict(self) -> Dict[str, Any]:
        return {"lower": self.lower, "upper": self.upper}


@dataclass
class ChartData:
    kind: ChartKind
    legend: str
    points: List[SeriesPoint] = field(default_factory=list)
    has_data: bool = False
    axis: Optional[AxisDomain] = None
    reference_lines: List[ReferenceLine] = field(default_factory=list)
    projection_legend: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "legend": self.legend,
            "projectionLegend": self.projection_legend,
            "hasData": self.has_data,
            "points": [p.to_dict() for p in self.points],
            "axis": self.axis.to_dict() if self.axis else None,
            "referenceLines": [r.to_dict() for r in self.reference_lines],
        }


@dataclass
class GoalProgress:
    """Everything the goal detail view needs for one goal."""
    goal_id: str
    status: StatusSummary
    chart: Optional[ChartData] = None
    stats: Optional[AdherenceStats] = None
    calendar: Optional[CalendarGrid] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "goalId": self.goal_id,
            "status": self.status.to_dict(),
            "chart": self.chart.to_dict() if self.chart else None,
            "stats": self.stats.to_dict() if self.stats else None,
            "calendar": self.calendar.to_dict() if self.calendar else None,
        }
