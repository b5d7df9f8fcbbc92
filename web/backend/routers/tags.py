from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from tracker.exceptions import TrackerError
from web.backend.dependencies import get_todo_service, to_http_error

router = APIRouter()


class TagRequest(BaseModel):
    id: Optional[str] = None
    name: str
    color: str = ""


@router.get("")
async def list_tags():
    try:
        service = get_todo_service()
        return [t.to_dict() for t in service.list_tags()]
    except TrackerError as exc:
        raise to_http_error(exc)


@router.post("")
async def create_tag(req: TagRequest):
    """Create a tag; names are stored lowercase and must be unique (400)."""
    try:
        service = get_todo_service()
        tag = service.create_tag(req.model_dump(exclude_none=True))
    except TrackerError as exc:
        raise to_http_error(exc)
    return tag.to_dict()


@router.put("/{tag_id}")
async def update_tag(tag_id: str, req: TagRequest):
    try:
        service = get_todo_service()
        tag = service.update_tag(tag_id, req.model_dump(exclude_none=True))
    except TrackerError as exc:
        raise to_http_error(exc)
    return tag.to_dict()


@router.delete("/{tag_id}")
async def delete_tag(tag_id: str):
    try:
        service = get_todo_service()
        service.delete_tag(tag_id)
    except TrackerError as exc:
        raise to_http_error(exc)
    return {"success": True}
