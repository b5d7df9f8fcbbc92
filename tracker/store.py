"""
Collection stores: whole-collection JSON persistence keyed by record id.

Each collection lives in its own file shaped {"<key>": [record, ...]}.
Records are held in memory in file order; every mutation rewrites the file.
"""
import json
from pathlib import Path
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from tracker import paths
from tracker.exceptions import DuplicateError, NotFoundError, StorageError, TrackerError
from tracker.logger import get_logger, log_corruption
from tracker.models import Entry, Goal, Tag, Todo

logger = get_logger("store")

T = TypeVar("T")


class CollectionStore(Generic[T]):
    """In-memory collection with JSON persistence at `path`."""

    kind = "Record"

    def __init__(
        self,
        path: Path,
        key: str,
        from_dict: Callable[[dict], T],
    ):
        self._path = path
        self._key = key
        self._from_dict = from_dict
        self._records: Dict[str, T] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            # First access creates the file with an empty collection.
            self.save()
            return
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error("Malformed collection file %s: %s", self._path, e)
            raise StorageError(f"Malformed JSON in {self._path.name}: {e}", str(self._path))
        except OSError as e:
            logger.error("Cannot read collection file %s: %s", self._path, e)
            raise StorageError(f"Cannot read {self._path.name}: {e}", str(self._path))

        raw_records = data.get(self._key, []) if isinstance(data, dict) else data
        if not isinstance(raw_records, list):
            raise StorageError(
                f"Expected a list under '{self._key}' in {self._path.name}", str(self._path)
            )
        for index, raw in enumerate(raw_records):
            try:
                record = self._from_dict(raw)
            except (TrackerError, TypeError, AttributeError) as e:
                logger.error("Invalid %s in %s: %s", self.kind.lower(), self._path, e)
                log_corruption(self._path, index, raw, str(e))
                raise StorageError(f"Invalid {self.kind.lower()} in {self._path.name}: {e}", str(self._path))
            self._records[record.id] = record

    def save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {self._key: [r.to_dict() for r in self._records.values()]}
        try:
            with open(self._path, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
        except OSError as e:
            logger.error("Cannot write collection file %s: %s", self._path, e)
            raise StorageError(f"Cannot write {self._path.name}: {e}", str(self._path))

    def list(self) -> List[T]:
        return list(self._records.values())

    def get(self, record_id: str) -> Optional[T]:
        return self._records.get(record_id)

    def require(self, record_id: str) -> T:
        record = self._records.get(record_id)
        if record is None:
            raise NotFoundError(self.kind, record_id)
        return record

    def add(self, record: T) -> T:
        self._records[record.id] = record
        self.save()
        logger.info("%s created: %s", self.kind, record.id)
        return record

    def replace(self, record_id: str, record: T) -> T:
        """Full-record replace; the stored position is kept."""
        if record_id not in self._records:
            raise NotFoundError(self.kind, record_id)
        if record.id != record_id:
            if record.id in self._records:
                raise DuplicateError(f"{self.kind} id already exists: {record.id}")
            # The body's id wins, as with a plain array slot overwrite.
            self._records = {
                (record.id if k == record_id else k): (record if k == record_id else v)
                for k, v in self._records.items()
            }
        else:
            self._records[record_id] = record
        self.save()
        logger.info("%s updated: %s", self.kind, record_id)
        return record

    def delete(self, record_id: str) -> bool:
        if record_id not in self._records:
            return False
        del self._records[record_id]
        self.save()
        logger.info("%s deleted: %s", self.kind, record_id)
        return True

    def save_all(self, records: List[T]) -> None:
        self._records = {r.id: r for r in records}
        self.save()


class GoalStore(CollectionStore[Goal]):
    kind = "Goal"

    def __init__(self, path: Optional[Path] = None):
        super().__init__(path if path is not None else paths.GOALS_PATH, "goals", Goal.from_dict)


class EntryStore(CollectionStore[Entry]):
    kind = "Entry"

    def __init__(self, path: Optional[Path] = None):
        super().__init__(path if path is not None else paths.ENTRIES_PATH, "entries", Entry.from_dict)

    def load_entries(self, goal_id: Optional[str] = None) -> List[Entry]:
        entries = self.list()
        if goal_id:
            entries = [e for e in entries if e.goal_id == goal_id]
        return entries


class TodoStore(CollectionStore[Todo]):
    kind = "Todo"

    def __init__(self, path: Optional[Path] = None):
        super().__init__(path if path is not None else paths.TODOS_PATH, "todos", Todo.from_dict)


class TagStore(CollectionStore[Tag]):
    """Tag names are stored lowercase and unique regardless of case."""

    kind = "Tag"

    def __init__(self, path: Optional[Path] = None):
        super().__init__(path if path is not None else paths.TAGS_PATH, "tags", Tag.from_dict)

    def find_by_name(self, name: str) -> Optional[Tag]:
        lowered = name.lower()
        return next((t for t in self._records.values() if t.name.lower() == lowered), None)

    def add(self, record: Tag) -> Tag:
        if self.find_by_name(record.name) is not None:
            raise DuplicateError("Tag already exists")
        record.name = record.name.lower()
        return super().add(record)

    def replace(self, record_id: str, record: Tag) -> Tag:
        existing = self.find_by_name(record.name)
        if existing is not None and existing.id != record_id:
            raise DuplicateError("Tag already exists")
        record.name = record.name.lower()
        return super().replace(record_id, record)
