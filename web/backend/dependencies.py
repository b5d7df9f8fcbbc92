"""
Service factories and error translation shared by the routers.

Tests monkeypatch the get_* factories to point the API at temp stores.
"""
from fastapi import HTTPException

from tracker.exceptions import DuplicateError, NotFoundError, StorageError, TrackerError, ValidationError
from tracker.goal_service import GoalService
from tracker.logger import get_logger
from tracker.todo_service import TodoService

logger = get_logger("api")


def get_goal_service() -> GoalService:
    return GoalService()


def get_todo_service() -> TodoService:
    return TodoService()


def to_http_error(exc: TrackerError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=f"{exc.kind} not found")
    if isinstance(exc, (DuplicateError, ValidationError)):
        return HTTPException(status_code=400, detail=exc.message)
    if isinstance(exc, StorageError):
        logger.error("Storage failure: %s", exc.message)
        return HTTPException(status_code=500, detail=exc.get_user_message())
    return HTTPException(status_code=500, detail=exc.message)
