"""
Goal and entry application service.

Wraps GoalStore/EntryStore for the API and CLI: id generation, today's entry
upsert and progress lookups.
"""
import uuid
from typing import Any, Dict, List, Optional, Tuple

from tracker.clock import get_clock
from tracker.exceptions import ValidationError
from tracker.logger import get_logger
from tracker.models import Entry, Goal, GoalType, Milestone
from tracker.progress_engine import GoalProgress, StatusSummary, build_progress, goal_status
from tracker.progress_engine.dates import format_day
from tracker.store import EntryStore, GoalStore

logger = get_logger("goal_service")


class GoalService:
    """Application service for goals and their entries."""

    def __init__(
        self,
        goals: Optional[GoalStore] = None,
        entries: Optional[EntryStore] = None,
        clock=None,
    ):
        self.goals = goals or GoalStore()
        self.entries = entries or EntryStore()
        self.clock = clock or get_clock()

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex

    # ---------------------------------------------------------------------
    # Goals
    # ---------------------------------------------------------------------
    def list_goals(self) -> List[Goal]:
        return self.goals.list()

    def require_goal(self, goal_id: str) -> Goal:
        return self.goals.require(goal_id)

    def create_goal(self, data: Dict[str, Any]) -> Goal:
        data = dict(data)
        data.setdefault("id", self._new_id())
        data.setdefault("createdAt", self.clock.utc_timestamp())
        data.setdefault("milestones", [])
        return self.goals.add(Goal.from_dict(data))

    def update_goal(self, goal_id: str, data: Dict[str, Any]) -> Goal:
        data = dict(data)
        data.setdefault("id", goal_id)
        return self.goals.replace(goal_id, Goal.from_dict(data))

    def delete_goal(self, goal_id: str) -> bool:
        # Entries stay behind on purpose; there is no cascade.
        return self.goals.delete(goal_id)

    def set_milestones(self, goal_id: str, milestones: List[Dict[str, Any]]) -> Goal:
        """Replace a goal's milestones, dropping rows without label or value."""
        goal = self.goals.require(goal_id)
        kept = []
        for raw in milestones:
            if not raw.get("label") or not raw.get("value"):
                continue
            row = dict(raw)
            if not row.get("id"):
                row["id"] = self._new_id()
            kept.append(Milestone.from_dict(row))
        goal.milestones = kept
        return self.goals.replace(goal_id, goal)

    # ---------------------------------------------------------------------
    # Entries
    # ---------------------------------------------------------------------
    def load_entries(self, goal_id: Optional[str] = None) -> List[Entry]:
        return self.entries.load_entries(goal_id)

    def create_entry(self, data: Dict[str, Any]) -> Entry:
        data = dict(data)
        data.setdefault("id", self._new_id())
        data.setdefault("timestamp", self.clock.utc_timestamp())
        return self.entries.add(Entry.from_dict(data))

    def update_entry(self, entry_id: str, data: Dict[str, Any]) -> Entry:
        data = dict(data)
        data.setdefault("id", entry_id)
        return self.entries.replace(entry_id, Entry.from_dict(data))

    def delete_entry(self, entry_id: str) -> bool:
        return self.entries.delete(entry_id)

    def save_today_entry(self, goal_id: str, value: Any = None) -> Entry:
        """
        Upsert the first entry logged today for a goal.

        Adherence goals toggle (a first entry is a completion); the other
        types store `value`, which is then required.
        """
        goal = self.goals.require(goal_id)
        today = format_day(self.clock.today())
        existing = next((e for e in self.entries.load_entries(goal_id) if e.date == today), None)

        if goal.type == GoalType.ADHERENCE:
            new_value = (not existing.value) if existing else True
        else:
            if value is None or isinstance(value, bool):
                raise ValidationError("a numeric value is required", field="value")
            new_value = value

        if existing:
            existing.value = new_value
            logger.info("Today's entry updated for goal %s", goal_id)
            return self.entries.replace(existing.id, existing)

        entry = Entry(
            id=self._new_id(),
            goal_id=goal_id,
            date=today,
            timestamp=self.clock.utc_timestamp(),
            value=new_value,
        )
        return self.entries.add(entry)

    # ---------------------------------------------------------------------
    # Progress
    # ---------------------------------------------------------------------
    def progress(self, goal_id: str, month: Optional[Tuple[int, int]] = None) -> GoalProgress:
        goal = self.goals.require(goal_id)
        return build_progress(goal, self.entries.load_entries(goal_id), self.clock, month)

    def status_summary(self) -> List[StatusSummary]:
        entries = self.entries.list()
        return [goal_status(goal, entries, self.clock) for goal in self.goals.list()]
