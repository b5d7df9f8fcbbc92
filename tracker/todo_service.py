"""
Todo and tag application service.
"""
import uuid
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from tracker.clock import get_clock
from tracker.logger import get_logger
from tracker.models import Tag, Todo
from tracker.progress_engine.dates import format_day
from tracker.store import TagStore, TodoStore

logger = get_logger("todo_service")


class TodoService:
    def __init__(
        self,
        todos: Optional[TodoStore] = None,
        tags: Optional[TagStore] = None,
        clock=None,
    ):
        self.todos = todos or TodoStore()
        self.tags = tags or TagStore()
        self.clock = clock or get_clock()

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex

    # --- todos ---

    def list_todos(self) -> List[Todo]:
        return self.todos.list()

    def create_todo(self, data: Dict[str, Any]) -> Todo:
        data = dict(data)
        data.setdefault("id", self._new_id())
        data.setdefault("date", format_day(self.clock.today()))
        data.setdefault("createdAt", self.clock.utc_timestamp())
        data["text"] = str(data.get("text", "")).strip()
        return self.todos.add(Todo.from_dict(data))

    def update_todo(self, todo_id: str, data: Dict[str, Any]) -> Todo:
        data = dict(data)
        data.setdefault("id", todo_id)
        return self.todos.replace(todo_id, Todo.from_dict(data))

    def delete_todo(self, todo_id: str) -> None:
        # Deleting an unknown id is not an error.
        self.todos.delete(todo_id)

    def reorder(self, ordered_ids: List[str]) -> List[Todo]:
        """
        Persist a new order.

        Listed todos come first with order 0..n-1 (unknown ids are ignored,
        repeated ids count once); todos not listed follow in stored order.
        """
        remaining = OrderedDict((t.id, t) for t in self.todos.list())
        reordered = []
        for todo_id in ordered_ids:
            todo = remaining.pop(todo_id, None)
            if todo is not None:
                reordered.append(todo)
        reordered.extend(remaining.values())

        for index, todo in enumerate(reordered):
            todo.order = index
        self.todos.save_all(reordered)
        logger.info("Todos reordered (%d listed)", len(ordered_ids))
        return reordered

    def todos_for_day(self, day: Optional[str] = None) -> List[Todo]:
        """Todos of one date (today by default) sorted by their order."""
        day = day or format_day(self.clock.today())
        return sorted(
            (t for t in self.todos.list() if t.date == day),
            key=lambda t: t.order if t.order is not None else 0,
        )

    def todos_by_date(self) -> "OrderedDict[str, List[Todo]]":
        """Todos grouped by date, newest date first."""
        grouped: "OrderedDict[str, List[Todo]]" = OrderedDict()
        for day in sorted({t.date for t in self.todos.list()}, reverse=True):
            grouped[day] = [t for t in self.todos.list() if t.date == day]
        return grouped

    # --- tags ---

    def list_tags(self) -> List[Tag]:
        return self.tags.list()

    def create_tag(self, data: Dict[str, Any]) -> Tag:
        data = dict(data)
        data.setdefault("id", self._new_id())
        return self.tags.add(Tag.from_dict(data))

    def update_tag(self, tag_id: str, data: Dict[str, Any]) -> Tag:
        data = dict(data)
        data.setdefault("id", tag_id)
        return self.tags.replace(tag_id, Tag.from_dict(data))

    def delete_tag(self, tag_id: str) -> None:
        self.tags.delete(tag_id)
