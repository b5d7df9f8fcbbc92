"""
Centralized filesystem paths for runtime data.
"""
import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent


def get_data_dir() -> Path:
    """
    Return runtime data directory.

    Priority:
    1. GOAL_TRACKER_DATA_DIR env var
    2. <project_root>/data
    """
    raw = os.getenv("GOAL_TRACKER_DATA_DIR", "").strip()
    if raw:
        return Path(raw).expanduser()
    return PROJECT_ROOT / "data"


DATA_DIR = get_data_dir()

GOALS_PATH = DATA_DIR / "goals.json"
ENTRIES_PATH = DATA_DIR / "entries.json"
TODOS_PATH = DATA_DIR / "todos.json"
TAGS_PATH = DATA_DIR / "tags.json"
