from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from tracker.exceptions import TrackerError
from web.backend.dependencies import get_todo_service, to_http_error

router = APIRouter()


class SubTaskBody(BaseModel):
    id: str
    text: str = ""
    completed: bool = False


class TodoRequest(BaseModel):
    id: Optional[str] = None
    date: Optional[str] = None
    text: str
    completed: bool = False
    createdAt: Optional[str] = None
    order: Optional[int] = None
    tagIds: List[str] = Field(default_factory=list)
    subTasks: List[SubTaskBody] = Field(default_factory=list)


class ReorderRequest(BaseModel):
    orderedIds: List[str] = Field(default_factory=list)


@router.get("")
async def list_todos():
    try:
        service = get_todo_service()
        return [t.to_dict() for t in service.list_todos()]
    except TrackerError as exc:
        raise to_http_error(exc)


@router.post("")
async def create_todo(req: TodoRequest):
    try:
        service = get_todo_service()
        todo = service.create_todo(req.model_dump(exclude_none=True))
    except TrackerError as exc:
        raise to_http_error(exc)
    return todo.to_dict()


@router.get("/by-date")
async def todos_by_date():
    """Todos grouped by date, newest first."""
    try:
        service = get_todo_service()
        grouped = service.todos_by_date()
    except TrackerError as exc:
        raise to_http_error(exc)
    return [
        {"date": day, "todos": [t.to_dict() for t in todos]}
        for day, todos in grouped.items()
    ]


@router.get("/today")
async def todays_todos():
    try:
        service = get_todo_service()
        return [t.to_dict() for t in service.todos_for_day()]
    except TrackerError as exc:
        raise to_http_error(exc)


@router.put("/reorder")
async def reorder_todos(req: ReorderRequest):
    try:
        service = get_todo_service()
        service.reorder(req.orderedIds)
    except TrackerError as exc:
        raise to_http_error(exc)
    return {"success": True}


@router.put("/{todo_id}")
async def update_todo(todo_id: str, req: TodoRequest):
    try:
        service = get_todo_service()
        todo = service.update_todo(todo_id, req.model_dump(exclude_none=True))
    except TrackerError as exc:
        raise to_http_error(exc)
    return todo.to_dict()


@router.delete("/{todo_id}")
async def delete_todo(todo_id: str):
    try:
        service = get_todo_service()
        service.delete_todo(todo_id)
    except TrackerError as exc:
        raise to_http_error(exc)
    return {"success": True}
