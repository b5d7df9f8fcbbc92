import sys
from datetime import date
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from tracker import logger as tracker_logger  # noqa: E402
from tracker import paths  # noqa: E402
from tracker.clock import FixedClock  # noqa: E402

# A Saturday; October 2026 starts on a Thursday.
TODAY = date(2026, 10, 17)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point every collection file and the log directory at tmp_path."""
    monkeypatch.setattr(paths, "DATA_DIR", tmp_path)
    monkeypatch.setattr(paths, "GOALS_PATH", tmp_path / "goals.json")
    monkeypatch.setattr(paths, "ENTRIES_PATH", tmp_path / "entries.json")
    monkeypatch.setattr(paths, "TODOS_PATH", tmp_path / "todos.json")
    monkeypatch.setattr(paths, "TAGS_PATH", tmp_path / "tags.json")
    monkeypatch.setattr(tracker_logger, "LOGS_DIR", tmp_path / "logs")
    return tmp_path
