"""
Numeric goals: the value series, its weekly projection and the y-axis domain.
"""
from datetime import date, timedelta
from typing import List, Optional

from tracker.config_manager import config
from tracker.models import Direction, Entry, Goal
from tracker.progress_engine.dates import format_day, format_label, js_round, parse_day
from tracker.progress_engine.models import (
    AxisDomain,
    ChartData,
    ChartKind,
    ReferenceLine,
    SeriesPoint,
)
from tracker.progress_engine.status import entries_for_goal, format_number


def numeric_series(goal: Goal, entries: List[Entry]) -> List[SeriesPoint]:
    """
    Actual points in date order, followed by the projection when the goal has
    a target rate.

    The last actual point also carries the projection start so the two lines
    meet; projected points have no actual value.
    """
    cfg = goal.config
    goal_entries = sorted(entries_for_goal(goal, entries), key=lambda e: e.date)
    points = [
        SeriesPoint(
            date=e.date,
            label=format_label(parse_day(e.date)),
            value=e.value,
        )
        for e in goal_entries
    ]

    if cfg.target_rate and points:
        last = points[-1]
        last_value = last.value
        last_day = parse_day(last.date)
        last.projection = last_value
        for week in range(1, config.PROJECTION_WEEKS + 1):
            projected_day = last_day + timedelta(weeks=week)
            points.append(SeriesPoint(
                date=format_day(projected_day),
                label=format_label(projected_day),
                value=None,
                projection=last_value + cfg.target_rate * week,
            ))

    return points


def axis_domain(goal: Goal, points: List[SeriesPoint]) -> Optional[AxisDomain]:
    """
    Y-axis bounds covering the data, target, milestones and projection.

    The lower bound reaches down to the target (or 0). For decreasing goals
    the upper bound only pads the actual maximum, so a rising projection does
    not stretch the top. A collapsed range falls back to padding the full
    candidate set on both sides.
    """
    cfg = goal.config
    values = [p.value for p in points if p.value is not None]
    if not values:
        return None
    projections = [p.projection for p in points if p.projection is not None]

    reference = []
    # A zero target still sets the floor below, but is not plotted.
    if cfg.target:
        reference.append(cfg.target)
    reference.extend(m.value for m in goal.milestones)
    reference.extend(projections)

    candidates = values + reference
    data_max = max(candidates)
    data_min = min(candidates)
    padding = (data_max - data_min) * config.AXIS_PADDING_RATIO

    floor = cfg.target if cfg.target is not None else 0
    lower = min(floor, data_min - padding)
    if cfg.direction == Direction.DECREASE:
        upper = max(values) + padding
    else:
        upper = data_max + padding

    if lower >= upper:
        lower = data_min - padding
        upper = data_max + padding

    return AxisDomain(lower=lower, upper=upper)


def nice_step(value: float) -> int:
    magnitude = abs(value)
    if magnitude < 20:
        return 5
    if magnitude < 100:
        return 10
    if magnitude < 500:
        return 25
    return 50


def nice_tick(value: float) -> int:
    """Round an axis tick to a step that grows with its magnitude."""
    step = nice_step(value)
    return js_round(value / step) * step


def _reference_lines(goal: Goal) -> List[ReferenceLine]:
    cfg = goal.config
    lines = []
    if cfg.target:
        lines.append(ReferenceLine(value=cfg.target, label=f"Target: {format_number(cfg.target)}"))
    for milestone in goal.milestones:
        lines.append(ReferenceLine(
            value=milestone.value,
            label=milestone.label,
            kind="milestone",
            achieved=bool(milestone.achieved),
        ))
    return lines


def numeric_chart(goal: Goal, entries: List[Entry], today: date) -> ChartData:
    cfg = goal.config
    points = numeric_series(goal, entries)
    has_data = any(p.value is not None for p in points)

    projection_legend = None
    if cfg.target_rate:
        sign = "+" if cfg.target_rate > 0 else ""
        projection_legend = f"Projection ({sign}{format_number(cfg.target_rate)}/{cfg.unit}/week)"

    return ChartData(
        kind=ChartKind.LINE,
        legend=f"Value ({cfg.unit})",
        points=points,
        has_data=has_data,
        axis=axis_domain(goal, points),
        reference_lines=_reference_lines(goal),
        projection_legend=projection_legend,
    )
