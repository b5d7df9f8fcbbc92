"""
Core Data Models for Goal Tracker.

Goals, entries, todos and tags as stored in the JSON collections.
Attribute names are snake_case; the persisted JSON uses camelCase keys,
converted by from_dict / to_dict.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from tracker.exceptions import ValidationError


class GoalType(str, Enum):
    NUMERIC = "numeric"        # a measured value, e.g. body weight
    ADHERENCE = "adherence"    # done / not done each day
    FREQUENCY = "frequency"    # count of occurrences per timeframe
    DURATION = "duration"      # time spent per timeframe


class Direction(str, Enum):
    INCREASE = "increase"
    DECREASE = "decrease"


class Timeframe(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class DurationUnit(str, Enum):
    MINUTES = "minutes"
    HOURS = "hours"


EntryValue = Union[bool, int, float]


def _require(data: Dict[str, Any], key: str, kind: str) -> Any:
    if key not in data or data[key] is None:
        raise ValidationError(f"{kind} is missing required field '{key}'", field=key)
    return data[key]


def _enum(enum_cls, raw: Any, key: str):
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = " | ".join(m.value for m in enum_cls)
        raise ValidationError(f"'{key}' must be one of {allowed}, got {raw!r}", field=key)


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


# ---------------------------------------------------------------------------
# Goal configs: a closed union keyed by GoalType
# ---------------------------------------------------------------------------

@dataclass
class NumericConfig:
    unit: str
    direction: Direction = Direction.INCREASE
    target: Optional[float] = None
    start_value: Optional[float] = None
    target_rate: Optional[float] = None  # change per week, e.g. -2 lbs/week

    type = GoalType.NUMERIC

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NumericConfig":
        return cls(
            unit=_require(data, "unit", "numeric config"),
            direction=_enum(Direction, data.get("direction", "increase"), "direction"),
            target=data.get("target"),
            start_value=data.get("startValue"),
            target_rate=data.get("targetRate"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "type": self.type.value,
            "unit": self.unit,
            "direction": self.direction.value,
            "target": self.target,
            "startValue": self.start_value,
            "targetRate": self.target_rate,
        })


@dataclass
class AdherenceConfig:
    target_days_per_week: Optional[int] = None

    type = GoalType.ADHERENCE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdherenceConfig":
        return cls(target_days_per_week=data.get("targetDaysPerWeek"))

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "type": self.type.value,
            "targetDaysPerWeek": self.target_days_per_week,
        })


@dataclass
class FrequencyConfig:
    target_count: int
    timeframe: Timeframe = Timeframe.WEEKLY

    type = GoalType.FREQUENCY

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FrequencyConfig":
        return cls(
            target_count=_require(data, "targetCount", "frequency config"),
            timeframe=_enum(Timeframe, data.get("timeframe", "weekly"), "timeframe"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "targetCount": self.target_count,
            "timeframe": self.timeframe.value,
        }


@dataclass
class DurationConfig:
    target_duration: float
    unit: DurationUnit = DurationUnit.MINUTES
    timeframe: Timeframe = Timeframe.DAILY

    type = GoalType.DURATION

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DurationConfig":
        timeframe = _enum(Timeframe, data.get("timeframe", "daily"), "timeframe")
        if timeframe == Timeframe.MONTHLY:
            raise ValidationError("duration timeframe must be daily | weekly", field="timeframe")
        return cls(
            target_duration=_require(data, "targetDuration", "duration config"),
            unit=_enum(DurationUnit, data.get("unit", "minutes"), "unit"),
            timeframe=timeframe,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "unit": self.unit.value,
            "targetDuration": self.target_duration,
            "timeframe": self.timeframe.value,
        }


GoalConfig = Union[NumericConfig, AdherenceConfig, FrequencyConfig, DurationConfig]

CONFIG_TYPES = {
    GoalType.NUMERIC: NumericConfig,
    GoalType.ADHERENCE: AdherenceConfig,
    GoalType.FREQUENCY: FrequencyConfig,
    GoalType.DURATION: DurationConfig,
}


def config_from_dict(goal_type: GoalType, data: Optional[Dict[str, Any]]) -> GoalConfig:
    """Parse a config dict; its `type` discriminant must agree with the goal."""
    data = data or {}
    declared = data.get("type", goal_type.value)
    if declared != goal_type.value:
        raise ValidationError(
            f"config type '{declared}' does not match goal type '{goal_type.value}'",
            field="config.type",
        )
    return CONFIG_TYPES[goal_type].from_dict(data)


# ---------------------------------------------------------------------------
# Goals, milestones, entries
# ---------------------------------------------------------------------------

@dataclass
class Milestone:
    """A labelled reference value drawn on a numeric goal's chart."""
    id: str
    value: float
    label: str
    achieved: Optional[bool] = None
    achieved_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Milestone":
        return cls(
            id=str(_require(data, "id", "milestone")),
            value=_require(data, "value", "milestone"),
            label=data.get("label", ""),
            achieved=data.get("achieved"),
            achieved_date=data.get("achievedDate"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "id": self.id,
            "value": self.value,
            "label": self.label,
            "achieved": self.achieved,
            "achievedDate": self.achieved_date,
        })


@dataclass
class Goal:
    id: str
    name: str
    type: GoalType
    config: GoalConfig
    created_at: str
    description: Optional[str] = None
    milestones: List[Milestone] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        goal_type = _enum(GoalType, _require(data, "type", "goal"), "type")
        return cls(
            id=str(_require(data, "id", "goal")),
            name=_require(data, "name", "goal"),
            type=goal_type,
            config=config_from_dict(goal_type, data.get("config")),
            created_at=data.get("createdAt", ""),
            description=data.get("description"),
            milestones=[Milestone.from_dict(m) for m in data.get("milestones", [])],
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type.value,
            "createdAt": self.created_at,
            "config": self.config.to_dict(),
            "milestones": [m.to_dict() for m in self.milestones],
        })


@dataclass
class Entry:
    """
    One dated observation against a goal.

    `value` is a bool for adherence goals and a number otherwise. Storage does
    not enforce one entry per goal per date.
    """
    id: str
    goal_id: str
    date: str        # yyyy-MM-dd, local calendar day
    timestamp: str   # ISO instant
    value: EntryValue
    note: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entry":
        return cls(
            id=str(_require(data, "id", "entry")),
            goal_id=str(_require(data, "goalId", "entry")),
            date=_require(data, "date", "entry"),
            timestamp=data.get("timestamp") or "",
            value=_require(data, "value", "entry"),
            note=data.get("note"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            "id": self.id,
            "goalId": self.goal_id,
            "date": self.date,
            "timestamp": self.timestamp,
            "value": self.value,
            "note": self.note,
        })


# ---------------------------------------------------------------------------
# Todos and tags
# ---------------------------------------------------------------------------

@dataclass
class SubTask:
    id: str
    text: str
    completed: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SubTask":
        return cls(
            id=str(_require(data, "id", "subtask")),
            text=data.get("text", ""),
            completed=bool(data.get("completed", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "text": self.text, "completed": self.completed}


@dataclass
class Todo:
    id: str
    date: str
    text: str
    completed: bool = False
    created_at: str = ""
    order: Optional[int] = None
    tag_ids: List[str] = field(default_factory=list)
    sub_tasks: List[SubTask] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Todo":
        return cls(
            id=str(_require(data, "id", "todo")),
            date=_require(data, "date", "todo"),
            text=data.get("text", ""),
            completed=bool(data.get("completed", False)),
            created_at=data.get("createdAt", ""),
            order=data.get("order"),
            tag_ids=list(data.get("tagIds") or []),
            sub_tasks=[SubTask.from_dict(s) for s in data.get("subTasks") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        data = _drop_none({
            "id": self.id,
            "date": self.date,
            "text": self.text,
            "completed": self.completed,
            "createdAt": self.created_at,
            "order": self.order,
        })
        if self.tag_ids:
            data["tagIds"] = list(self.tag_ids)
        if self.sub_tasks:
            data["subTasks"] = [s.to_dict() for s in self.sub_tasks]
        return data


@dataclass
class Tag:
    id: str
    name: str   # stored lowercase
    color: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tag":
        return cls(
            id=str(_require(data, "id", "tag")),
            name=str(_require(data, "name", "tag")),
            color=data.get("color", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "color": self.color}
