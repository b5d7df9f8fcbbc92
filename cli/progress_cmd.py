"""
CLI 命令：goal-tracker status / progress
在终端查看目标进度
"""
import sys
from datetime import date
from pathlib import Path
from typing import Optional

import click

# 添加项目根目录到 sys.path，以便直接运行脚本
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from tracker.clock import FixedClock, SystemClock
from tracker.exceptions import TrackerError
from tracker.goal_service import GoalService
from tracker.logger import setup_logging
from tracker.progress_engine.dates import parse_month


def _parse_today(ctx, param, value: Optional[str]) -> Optional[date]:
    """--today 回调：YYYY-MM-DD 转成 date"""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter("today must be YYYY-MM-DD")


def _make_service(today: Optional[date]) -> GoalService:
    clock = FixedClock(today) if today else SystemClock()
    return GoalService(clock=clock)


@click.group()
@click.option("--today", default=None, callback=_parse_today, help="把今天当作 YYYY-MM-DD")
@click.pass_context
def tracker(ctx, today):
    """Goal Tracker 命令"""
    setup_logging()
    ctx.ensure_object(dict)
    ctx.obj["today"] = today


@tracker.command()
@click.pass_context
def status(ctx):
    """每个目标一行状态"""
    try:
        service = _make_service(ctx.obj["today"])
        goals = {g.id: g for g in service.list_goals()}
        summaries = service.status_summary()
    except TrackerError as e:
        click.echo(f"Error: {e.get_user_message()}", err=True)
        sys.exit(1)

    if not summaries:
        click.echo("No goals yet")
        return
    for summary in summaries:
        goal = goals[summary.goal_id]
        click.echo(f"{goal.name} [{goal.type.value}]: {summary.text}")


@tracker.command()
@click.argument("goal_id")
@click.option("--month", default=None, help="日历月份 YYYY-MM")
@click.pass_context
def progress(ctx, goal_id, month):
    """单个目标的连续天数、完成率和图表摘要"""
    try:
        selected = parse_month(month) if month else None
    except ValueError:
        raise click.BadParameter("month must be YYYY-MM", param_hint="--month")

    try:
        service = _make_service(ctx.obj["today"])
        goal = service.require_goal(goal_id)
        result = service.progress(goal_id, selected)
    except TrackerError as e:
        click.echo(f"Error: {e.get_user_message()}", err=True)
        sys.exit(1)

    click.echo(f"{goal.name} [{goal.type.value}]")
    click.echo(f"  Status: {result.status.text}")

    if result.stats is not None:
        click.echo(f"  Streak: {result.stats.streak} days")
        click.echo(f"  Completion: {result.stats.completion_rate}%")
    if result.calendar is not None:
        _print_calendar(result.calendar)
    if result.chart is not None:
        _print_chart(result.chart)


def _print_calendar(grid):
    marks = {"completed": "x", "skipped": "-", "none": "."}
    click.echo(f"\n  {grid.title}")
    click.echo("  " + " ".join(f"{d[:2]:>3}" for d in grid.weekdays))
    for week in grid.weeks():
        row = []
        for cell in week:
            if cell is None:
                row.append("   ")
            elif cell.is_future:
                row.append(f"{cell.day:>3}")
            else:
                row.append(f"{cell.day:>2}{marks[cell.status.value]}")
        click.echo("  " + " ".join(row))


def _print_chart(chart):
    if not chart.has_data:
        click.echo("  No data to display")
        return
    click.echo(f"\n  {chart.legend}")
    for point in chart.points:
        if point.value is not None:
            click.echo(f"  {point.label:>7}  {point.value}")
        elif point.projection is not None:
            click.echo(f"  {point.label:>7}  ~{point.projection}")
    if chart.axis is not None:
        click.echo(f"  Axis: {chart.axis.lower:g} .. {chart.axis.upper:g}")
    for line in chart.reference_lines:
        click.echo(f"  {line.label} ({line.value})")


if __name__ == "__main__":
    tracker()
