from typing import Optional, Union

from fastapi import APIRouter
from pydantic import BaseModel

from tracker.exceptions import NotFoundError, TrackerError
from web.backend.dependencies import get_goal_service, to_http_error

router = APIRouter()


class EntryRequest(BaseModel):
    id: Optional[str] = None
    goalId: str
    date: str
    timestamp: Optional[str] = None
    value: Union[bool, int, float]
    note: Optional[str] = None


@router.get("")
async def list_entries(goalId: Optional[str] = None):
    try:
        service = get_goal_service()
        return [e.to_dict() for e in service.load_entries(goalId)]
    except TrackerError as exc:
        raise to_http_error(exc)


@router.post("", status_code=201)
async def create_entry(req: EntryRequest):
    try:
        service = get_goal_service()
        entry = service.create_entry(req.model_dump(exclude_none=True))
    except TrackerError as exc:
        raise to_http_error(exc)
    return entry.to_dict()


@router.get("/{entry_id}")
async def get_entry(entry_id: str):
    try:
        service = get_goal_service()
        return service.entries.require(entry_id).to_dict()
    except TrackerError as exc:
        raise to_http_error(exc)


@router.put("/{entry_id}")
async def update_entry(entry_id: str, req: EntryRequest):
    try:
        service = get_goal_service()
        entry = service.update_entry(entry_id, req.model_dump(exclude_none=True))
    except TrackerError as exc:
        raise to_http_error(exc)
    return entry.to_dict()


@router.delete("/{entry_id}")
async def delete_entry(entry_id: str):
    try:
        service = get_goal_service()
        deleted = service.delete_entry(entry_id)
    except TrackerError as exc:
        raise to_http_error(exc)
    if not deleted:
        raise to_http_error(NotFoundError("Entry", entry_id))
    return {"success": True}
