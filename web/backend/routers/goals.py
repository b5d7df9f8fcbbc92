from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter
from pydantic import BaseModel, Field

from tracker.exceptions import NotFoundError, TrackerError, ValidationError
from tracker.progress_engine.dates import parse_month
from web.backend.dependencies import get_goal_service, to_http_error

router = APIRouter()


class MilestoneBody(BaseModel):
    id: Optional[str] = None
    value: Optional[float] = None
    label: str = ""
    achieved: Optional[bool] = None
    achievedDate: Optional[str] = None


class GoalRequest(BaseModel):
    id: Optional[str] = None
    name: str
    description: Optional[str] = None
    type: str
    createdAt: Optional[str] = None
    config: Dict[str, Any] = Field(default_factory=dict)
    milestones: List[MilestoneBody] = Field(default_factory=list)


class MilestonesRequest(BaseModel):
    milestones: List[MilestoneBody] = Field(default_factory=list)


class TodayEntryRequest(BaseModel):
    value: Optional[Union[bool, int, float]] = None


def _body(req: BaseModel) -> Dict[str, Any]:
    return req.model_dump(exclude_none=True)


@router.get("")
async def list_goals():
    try:
        service = get_goal_service()
        return [g.to_dict() for g in service.list_goals()]
    except TrackerError as exc:
        raise to_http_error(exc)


@router.post("", status_code=201)
async def create_goal(req: GoalRequest):
    try:
        service = get_goal_service()
        goal = service.create_goal(_body(req))
    except TrackerError as exc:
        raise to_http_error(exc)
    return goal.to_dict()


@router.get("/progress/summary")
async def progress_summary():
    """所有目标的状态行，首页卡片使用"""
    try:
        service = get_goal_service()
        return [s.to_dict() for s in service.status_summary()]
    except TrackerError as exc:
        raise to_http_error(exc)


@router.get("/{goal_id}")
async def get_goal(goal_id: str):
    try:
        service = get_goal_service()
        return service.require_goal(goal_id).to_dict()
    except TrackerError as exc:
        raise to_http_error(exc)


@router.put("/{goal_id}")
async def update_goal(goal_id: str, req: GoalRequest):
    try:
        service = get_goal_service()
        goal = service.update_goal(goal_id, _body(req))
    except TrackerError as exc:
        raise to_http_error(exc)
    return goal.to_dict()


@router.delete("/{goal_id}")
async def delete_goal(goal_id: str):
    """删除目标；其打卡记录保留，不级联删除"""
    try:
        service = get_goal_service()
        deleted = service.delete_goal(goal_id)
    except TrackerError as exc:
        raise to_http_error(exc)
    if not deleted:
        raise to_http_error(NotFoundError("Goal", goal_id))
    return {"success": True}


@router.put("/{goal_id}/milestones")
async def update_milestones(goal_id: str, req: MilestonesRequest):
    try:
        service = get_goal_service()
        goal = service.set_milestones(goal_id, [m.model_dump(exclude_none=True) for m in req.milestones])
    except TrackerError as exc:
        raise to_http_error(exc)
    return goal.to_dict()


@router.get("/{goal_id}/progress")
async def get_progress(goal_id: str, month: Optional[str] = None):
    """
    单个目标的进度视图 (状态、图表、统计、日历)。

    month (YYYY-MM) 选择打卡日历显示的月份，默认当月。
    """
    try:
        selected = parse_month(month) if month else None
    except ValueError:
        raise to_http_error(ValidationError("month must be YYYY-MM", field="month"))
    try:
        service = get_goal_service()
        return service.progress(goal_id, selected).to_dict()
    except TrackerError as exc:
        raise to_http_error(exc)


@router.post("/{goal_id}/today")
async def save_today_entry(goal_id: str, req: Optional[TodayEntryRequest] = None):
    """打卡型目标切换今天的完成状态，其他类型写入今天的数值"""
    value = req.value if req else None
    try:
        service = get_goal_service()
        entry = service.save_today_entry(goal_id, value)
    except TrackerError as exc:
        raise to_http_error(exc)
    return entry.to_dict()
